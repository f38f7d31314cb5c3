"""Error taxonomy for entry imports.

Two kinds halt an import run (:data:`FATAL_ERRORS`); everything else only fails the
entry being built.
"""

from __future__ import annotations

from collections.abc import Iterable


class EntryImportError(Exception):
    """Base class for entry-import errors."""


class ValidationError(EntryImportError):
    """Raised while building metadata when required fields are missing."""

    def __init__(self, missing: Iterable[str], message: str | None = None) -> None:
        self.missing = tuple(sorted(missing))
        missing_list = ", ".join(self.missing)
        super().__init__(message or f"Missing required elements: {missing_list}")


class CollectionsCreatedError(EntryImportError):
    """Raised when the collections an entry belongs to do not exist yet."""


class IndexCommunicationError(EntryImportError):
    """Raised by object factories when the search index cannot be reached."""


class GenericProcessingError(EntryImportError):
    """Raised by collaborators for any other processing failure."""


class UnknownTypeError(LookupError):
    """Raised when a type name is not registered."""


FATAL_ERRORS: tuple[type[EntryImportError], ...] = (
    CollectionsCreatedError,
    IndexCommunicationError,
)

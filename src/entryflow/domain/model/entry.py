"""Import entries: one unit of import work per source record."""

from __future__ import annotations

import traceback
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from entryflow.domain.model.enums import EntryStatus
from entryflow.domain.model.importer import ImporterConfig, ImporterRun
from entryflow.domain.model.mapping import FieldMapping

if TYPE_CHECKING:
    from entryflow.domain.model.metadata import ParsedMetadata, RawRecord


@dataclass(frozen=True, slots=True)
class ErrorInfo:
    """Structured description of the fault that failed an entry."""

    error_class: str
    error_message: str
    error_backtrace: tuple[str, ...] = ()

    @classmethod
    def from_exception(cls, error: BaseException) -> ErrorInfo:
        error_type = type(error)
        backtrace = traceback.format_exception(error_type, error, error.__traceback__)
        return cls(
            error_class=f"{error_type.__module__}.{error_type.__qualname__}",
            error_message=str(error),
            error_backtrace=tuple(line.rstrip("\n") for line in backtrace),
        )


@dataclass(eq=False, kw_only=True)
class Entry:
    """Import state for one source record.

    The enclosing importer creates entries; the entry-import orchestrator fills in
    ``parsed_metadata`` and sets ``status`` once per build.
    """

    raw_record: RawRecord
    identifier: str | None = None
    importer: ImporterConfig = field(default_factory=ImporterConfig)
    mapping: FieldMapping = field(default_factory=FieldMapping)
    last_run: ImporterRun = field(default_factory=ImporterRun)
    user: object | None = None
    parsed_metadata: ParsedMetadata = field(default_factory=dict)
    collection_ids: list[str] = field(default_factory=list[str])
    status: EntryStatus = EntryStatus.PENDING
    last_error: ErrorInfo | None = None

    def status_info(self, error: BaseException | None = None) -> None:
        """Record the terminal status: ``Failed`` with ``error``, else ``Complete``."""

        if error is None:
            self.status = EntryStatus.COMPLETE
            self.last_error = None
            return
        self.status = EntryStatus.FAILED
        self.last_error = ErrorInfo.from_exception(error)

    @property
    def failed(self) -> bool:
        return self.status is EntryStatus.FAILED

    @property
    def succeeded(self) -> bool:
        return self.status is EntryStatus.COMPLETE

"""Target object types that entries can be persisted as."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

from entryflow.domain.model.enums import DomainKind


@dataclass(frozen=True, slots=True)
class DomainType:
    """Handle for a registered target type.

    ``constructor`` builds an in-memory object from attributes; object factories decide
    whether to use it.
    """

    name: str
    kind: DomainKind = DomainKind.WORK
    constructor: Callable[..., object] | None = None

    @property
    def is_collection(self) -> bool:
        return self.kind is DomainKind.COLLECTION

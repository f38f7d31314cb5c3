"""Ports for entry-status persistence and collection lookups."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence
    from datetime import datetime
    from uuid import UUID

    from entryflow.domain.model import Entry, EntryStatus, ErrorInfo


@dataclass(frozen=True, slots=True)
class EntryStatusRecord:
    """Stored status surface of one entry, as read by reporting layers."""

    run_id: UUID
    identifier: str | None
    status: EntryStatus
    error: ErrorInfo | None = None
    parsed_metadata: dict[str, object] = field(default_factory=dict[str, object], repr=False)
    updated_at: datetime | None = None


@runtime_checkable
class EntryRepository(Protocol):
    """Persistence contract for entry statuses."""

    def save(self, entry: Entry) -> None: ...

    def get(self, run_id: UUID, identifier: str) -> EntryStatusRecord | None: ...

    def list_for_run(self, run_id: UUID) -> Sequence[EntryStatusRecord]: ...


@runtime_checkable
class CollectionLookup(Protocol):
    """Finds persisted collections by their source identifiers."""

    def find_ids(self, identifiers: Iterable[str]) -> list[str]:
        """Return the ids of the collections that exist, in input order."""
        ...

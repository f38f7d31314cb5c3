"""Ports for fire-and-forget relationship jobs."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from entryflow.domain.model import ImporterRun


@dataclass(frozen=True, slots=True, kw_only=True)
class RelationshipRequest:
    """Instruction to link an entry to one parent or child once both exist."""

    entry_identifier: str | None
    importer_run: ImporterRun
    parent_identifier: str | None = None
    child_identifier: str | None = None

    def __post_init__(self) -> None:
        if (self.parent_identifier is None) == (self.child_identifier is None):
            raise ValueError("RelationshipRequest requires exactly one of parent or child")

    def as_message(self) -> dict[str, str | None]:
        """Serialise the request into a task-queue friendly payload."""

        message: dict[str, str | None] = {
            "entry_identifier": self.entry_identifier,
            "importer_run_id": str(self.importer_run.id),
        }
        if self.parent_identifier is not None:
            message["parent_identifier"] = self.parent_identifier
        else:
            message["child_identifier"] = self.child_identifier
        return message


@runtime_checkable
class RelationshipQueue(Protocol):
    """Outbound queue for relationship requests; no response is awaited."""

    def enqueue(self, request: RelationshipRequest) -> None: ...

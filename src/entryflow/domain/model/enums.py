"""Domain enums (pure, dependency-light)."""

from __future__ import annotations

from enum import StrEnum


class EntryStatus(StrEnum):
    PENDING = "Pending"
    COMPLETE = "Complete"
    FAILED = "Failed"


class DomainKind(StrEnum):
    """Whether a registered type persists as a work or a collection."""

    WORK = "work"
    COLLECTION = "collection"

"""Importer-level configuration shared by every entry of a run."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import UTC, datetime
from types import MappingProxyType
from uuid import UUID, uuid4

DEFAULT_WORK_TYPE = "Work"
DEFAULT_VISIBILITY = "open"
DEFAULT_WORK_IDENTIFIER = "source"
DEFAULT_COLLECTION_FIELD = "collection"


def _frozen_fields(values: Mapping[str, object] | None = None) -> Mapping[str, object]:
    return MappingProxyType(dict(values or {}))


@dataclass(frozen=True, slots=True, kw_only=True)
class ImporterConfig:
    """Read-only configuration for one import run.

    ``parser_fields`` carries parser-specific settings such as ``rights_statement`` and
    ``override_rights_statement``.
    """

    validate_only: bool = False
    visibility: str = DEFAULT_VISIBILITY
    admin_set_id: str | None = None
    parser_fields: Mapping[str, object] = field(default_factory=_frozen_fields)
    default_work_type: str = DEFAULT_WORK_TYPE
    work_identifier: str = DEFAULT_WORK_IDENTIFIER
    collection_field_mapping: str = DEFAULT_COLLECTION_FIELD
    replace_files: bool = False
    update_files: bool = False

    def __post_init__(self) -> None:
        if not isinstance(self.parser_fields, MappingProxyType):
            object.__setattr__(self, "parser_fields", _frozen_fields(self.parser_fields))


@dataclass(frozen=True, slots=True)
class ImporterRun:
    """Reference to the enclosing import run; entries only read it."""

    id: UUID = field(default_factory=uuid4)
    started_at: datetime = field(default_factory=lambda: datetime.now(tz=UTC))

"""Public domain model surface."""

from __future__ import annotations

from entryflow.domain.model.entry import Entry, ErrorInfo
from entryflow.domain.model.enums import DomainKind, EntryStatus
from entryflow.domain.model.importer import (
    DEFAULT_WORK_TYPE,
    ImporterConfig,
    ImporterRun,
)
from entryflow.domain.model.mapping import (
    DEFAULT_CHILDREN_FIELD,
    DEFAULT_PARENTS_FIELD,
    DEFAULT_SOURCE_IDENTIFIER_FIELD,
    FieldMapping,
    FieldRule,
)
from entryflow.domain.model.metadata import (
    MetadataValue,
    ParsedMetadata,
    RawRecord,
    as_list,
    first_value,
    get_present,
    is_blank,
    present,
)
from entryflow.domain.model.types import DomainType

__all__ = [
    "DEFAULT_CHILDREN_FIELD",
    "DEFAULT_PARENTS_FIELD",
    "DEFAULT_SOURCE_IDENTIFIER_FIELD",
    "DEFAULT_WORK_TYPE",
    "DomainKind",
    "DomainType",
    "Entry",
    "EntryStatus",
    "ErrorInfo",
    "FieldMapping",
    "FieldRule",
    "ImporterConfig",
    "ImporterRun",
    "MetadataValue",
    "ParsedMetadata",
    "RawRecord",
    "as_list",
    "first_value",
    "get_present",
    "is_blank",
    "present",
]

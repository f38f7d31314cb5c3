"""Importer-level defaults applied to parsed metadata.

Each helper is idempotent and leaves a field alone when the record already supplied it,
except that ``override_rights_statement`` forces the configured rights statement.
"""

from __future__ import annotations

import warnings
from typing import TYPE_CHECKING, Final

from entryflow.domain.model import is_blank

if TYPE_CHECKING:
    from collections.abc import Sequence

    from entryflow.domain.model import ImporterConfig, ParsedMetadata

RIGHTS_STATEMENT: Final[str] = "rights_statement"
OVERRIDE_RIGHTS_STATEMENT: Final[str] = "override_rights_statement"
VISIBILITY: Final[str] = "visibility"
ADMIN_SET_ID: Final[str] = "admin_set_id"
MEMBER_OF_COLLECTIONS: Final[str] = "member_of_collections_attributes"

_OVERRIDE_ENCODINGS: Final = frozenset({"true", "1"})


def _as_text(value: object) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return "" if value is None else str(value)


def override_rights_statement(importer: ImporterConfig) -> bool:
    """Only the encodings ``"true"`` and ``"1"`` switch the override on."""

    return _as_text(importer.parser_fields.get(OVERRIDE_RIGHTS_STATEMENT)) in _OVERRIDE_ENCODINGS


def add_rights_statement(metadata: ParsedMetadata, importer: ImporterConfig) -> None:
    rights_statement = importer.parser_fields.get(RIGHTS_STATEMENT)
    if is_blank(rights_statement):
        return
    if override_rights_statement(importer) or is_blank(metadata.get(RIGHTS_STATEMENT)):
        metadata[RIGHTS_STATEMENT] = [str(rights_statement)]


def add_visibility(metadata: ParsedMetadata, importer: ImporterConfig) -> None:
    if is_blank(metadata.get(VISIBILITY)) and not is_blank(importer.visibility):
        metadata[VISIBILITY] = importer.visibility


def add_admin_set_id(metadata: ParsedMetadata, importer: ImporterConfig) -> None:
    if is_blank(metadata.get(ADMIN_SET_ID)) and importer.admin_set_id is not None:
        metadata[ADMIN_SET_ID] = importer.admin_set_id


def add_collections(metadata: ParsedMetadata, collection_ids: Sequence[str]) -> None:
    """Attach ``collection_ids`` using the deprecated collection-field attributes."""

    if not collection_ids:
        return
    warnings.warn(
        "Creating collections through the collection field mapping is deprecated; "
        "declare related_parents_field_mapping and related_children_field_mapping instead.",
        DeprecationWarning,
        stacklevel=2,
    )
    metadata[MEMBER_OF_COLLECTIONS] = {
        str(index): {"id": collection_id} for index, collection_id in enumerate(collection_ids)
    }


def apply_importer_defaults(metadata: ParsedMetadata, importer: ImporterConfig) -> None:
    """Fill visibility, rights statement and admin set from ``importer``."""

    add_visibility(metadata, importer)
    add_rights_statement(metadata, importer)
    add_admin_set_id(metadata, importer)

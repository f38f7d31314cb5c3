"""Entry-import pipeline.

Raw records are normalized into parsed metadata, enriched with importer defaults,
gated on their collections, persisted through an object factory and linked to their
parents and children through fire-and-forget relationship requests.
"""

from __future__ import annotations

from .behavior import CsvEntryBehavior, EntryImportBehavior
from .defaults import (
    add_admin_set_id,
    add_collections,
    add_rights_statement,
    add_visibility,
    apply_importer_defaults,
    override_rights_statement,
)
from .normalization import DEFAULT_VALUE_PARSERS, FieldNormalizer, parse_language
from .orchestrator import BuildState, EntryImporter
from .relationships import RelationshipScheduler
from .type_resolution import TypeRegistry, canonical_type_name, resolve_factory_type

__all__ = [
    "DEFAULT_VALUE_PARSERS",
    "BuildState",
    "CsvEntryBehavior",
    "EntryImportBehavior",
    "EntryImporter",
    "FieldNormalizer",
    "RelationshipScheduler",
    "TypeRegistry",
    "add_admin_set_id",
    "add_collections",
    "add_rights_statement",
    "add_visibility",
    "apply_importer_defaults",
    "canonical_type_name",
    "override_rights_statement",
    "parse_language",
    "resolve_factory_type",
]

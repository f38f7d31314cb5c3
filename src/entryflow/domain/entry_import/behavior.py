"""Per-entry-type import behaviour: metadata building and the collections guard."""

from __future__ import annotations

import logging
import re
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Final

from entryflow.domain.entry_import.defaults import add_collections, apply_importer_defaults
from entryflow.domain.entry_import.normalization import (
    DEFAULT_SPLIT_PATTERN,
    DEFAULT_VALUE_PARSERS,
    FieldNormalizer,
)
from entryflow.domain.errors import ValidationError
from entryflow.domain.model import first_value, is_blank

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence

    from entryflow.domain.entry_import.normalization import ValueParser
    from entryflow.domain.model import Entry, ParsedMetadata
    from entryflow.domain.ports.persistence import CollectionLookup

log = logging.getLogger(__name__)

TITLE_FIELD: Final[str] = "title"


class EntryImportBehavior(ABC):
    """Capabilities the import orchestrator needs from an entry type."""

    @abstractmethod
    def build_metadata(self, entry: Entry) -> ParsedMetadata:
        """Populate ``entry.parsed_metadata`` from the raw record and return it.

        Raises :class:`~entryflow.domain.errors.ValidationError` when required fields
        are missing.
        """

    def collections_created(self, entry: Entry) -> bool:
        """Return whether the collections ``entry`` belongs to already exist."""

        _ = entry
        return True


class CsvEntryBehavior(EntryImportBehavior):
    """Behaviour for entries read from delimited files."""

    def __init__(
        self,
        *,
        collection_lookup: CollectionLookup | None = None,
        required_elements: Sequence[str] | None = None,
        parsers: Mapping[str, ValueParser] | None = None,
    ) -> None:
        self.collection_lookup = collection_lookup
        self.required_elements = tuple(required_elements) if required_elements else None
        self.parsers = dict(parsers if parsers is not None else DEFAULT_VALUE_PARSERS)

    def required_fields(self, entry: Entry) -> tuple[str, ...]:
        if self.required_elements is not None:
            return self.required_elements
        return (entry.mapping.source_identifier_field, TITLE_FIELD)

    def build_metadata(self, entry: Entry) -> ParsedMetadata:
        normalizer = FieldNormalizer(entry.mapping, parsers=self.parsers)
        metadata = normalizer.normalize(entry.raw_record)

        missing = [name for name in self.required_fields(entry) if is_blank(metadata.get(name))]
        if missing:
            raise ValidationError(missing)

        if entry.identifier is None:
            identifier = first_value(metadata.get(entry.mapping.source_identifier_field))
            entry.identifier = None if identifier is None else str(identifier)

        apply_importer_defaults(metadata, entry.importer)
        entry.collection_ids = self._find_collection_ids(entry)
        add_collections(metadata, entry.collection_ids)

        entry.parsed_metadata = metadata
        return metadata

    def collections_created(self, entry: Entry) -> bool:
        listed = self.listed_collections(entry)
        if not listed:
            return True
        return len(listed) == len(set(entry.collection_ids))

    def listed_collections(self, entry: Entry) -> list[str]:
        value = entry.raw_record.get(entry.importer.collection_field_mapping)
        if is_blank(value):
            return []
        pieces = re.split(DEFAULT_SPLIT_PATTERN, str(value).strip())
        return list(dict.fromkeys(piece for piece in pieces if piece))

    def _find_collection_ids(self, entry: Entry) -> list[str]:
        listed = self.listed_collections(entry)
        if not listed:
            return []
        if self.collection_lookup is None:
            log.warning("Entry %s lists collections but no lookup is configured", entry.identifier)
            return []
        return self.collection_lookup.find_ids(listed)

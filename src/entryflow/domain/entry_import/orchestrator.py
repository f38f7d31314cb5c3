"""Entry-import orchestrator.

``build_for_importer`` walks an entry through building, the collections guard,
persistence and relationship scheduling, then records exactly one terminal status.
Collection-prerequisite and search-index failures halt the run; every other fault only
fails the entry.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import StrEnum
from types import MappingProxyType
from typing import TYPE_CHECKING

from entryflow.domain.entry_import.type_resolution import TypeRegistry, resolve_factory_type
from entryflow.domain.errors import FATAL_ERRORS, CollectionsCreatedError
from entryflow.domain.model import present
from entryflow.domain.ports.factory import FileOptions

if TYPE_CHECKING:
    from entryflow.domain.entry_import.behavior import EntryImportBehavior
    from entryflow.domain.entry_import.relationships import RelationshipScheduler
    from entryflow.domain.model import DomainType, Entry
    from entryflow.domain.ports.factory import ObjectFactory, ObjectHandle

log = logging.getLogger(__name__)


class BuildState(StrEnum):
    BUILDING = "building"
    VALIDATING = "validating"
    VALIDATE_ONLY_EXIT = "validate_only_exit"
    PERSISTING = "persisting"
    SCHEDULING = "scheduling"
    DONE = "done"


@dataclass(slots=True)
class EntryImporter:
    """Drive entries through the import steps using injected collaborators."""

    behavior: EntryImportBehavior
    object_factory: ObjectFactory
    scheduler: RelationshipScheduler
    types: TypeRegistry = field(default_factory=TypeRegistry)

    def build(self, entry: Entry) -> ObjectHandle | None:
        return self.build_for_importer(entry)

    def build_for_importer(self, entry: Entry) -> ObjectHandle | None:
        handle: ObjectHandle | None = None
        try:
            self._enter(entry, BuildState.BUILDING)
            self.behavior.build_metadata(entry)

            if entry.importer.validate_only:
                self._enter(entry, BuildState.VALIDATE_ONLY_EXIT)
            else:
                self._enter(entry, BuildState.VALIDATING)
                if not self.behavior.collections_created(entry):
                    raise CollectionsCreatedError(
                        f"Collections for entry {entry.identifier} have not been created"
                    )
                self._enter(entry, BuildState.PERSISTING)
                handle = self._persist(entry)

            self._enter(entry, BuildState.SCHEDULING)
            self._schedule_relationships(entry)
        except FATAL_ERRORS:
            log.exception("Halting import run %s at entry %s", entry.last_run.id, entry.identifier)
            raise
        except Exception as error:  # noqa: BLE001
            log.warning("Entry %s failed: %s", entry.identifier, error)
            entry.status_info(error)
        else:
            entry.status_info()
        self._enter(entry, BuildState.DONE)
        return handle

    def factory_type(self, entry: Entry) -> DomainType | None:
        return resolve_factory_type(
            entry.parsed_metadata,
            entry.mapping,
            entry.importer.default_work_type,
            self.types,
        )

    def _persist(self, entry: Entry) -> ObjectHandle:
        importer = entry.importer
        return self.object_factory.persist(
            MappingProxyType(entry.parsed_metadata),
            source_identifier_value=entry.identifier,
            type_handle=self.factory_type(entry),
            user=entry.user,
            file_options=FileOptions(
                replace_files=importer.replace_files,
                update_files=importer.update_files,
            ),
            work_identifier=importer.work_identifier,
            collection_field_mapping=importer.collection_field_mapping,
        )

    def _schedule_relationships(self, entry: Entry) -> None:
        metadata = entry.parsed_metadata
        if present(metadata.get(entry.mapping.related_parents_field)):
            self.scheduler.schedule_parent_relationships(entry)
        if present(metadata.get(entry.mapping.related_children_field)):
            self.scheduler.schedule_child_relationships(entry)

    @staticmethod
    def _enter(entry: Entry, state: BuildState) -> None:
        log.debug("Entry %s -> %s", entry.identifier, state)

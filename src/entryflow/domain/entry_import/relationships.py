"""Emit relationship requests for declared parents and children."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from entryflow.domain.model import as_list
from entryflow.domain.ports.jobs import RelationshipRequest

if TYPE_CHECKING:
    from entryflow.domain.model import Entry
    from entryflow.domain.ports.jobs import RelationshipQueue

log = logging.getLogger(__name__)


@dataclass(slots=True)
class RelationshipScheduler:
    """Hand one request per related identifier to the queue without waiting.

    Requests are enqueued in metadata order; the executor behind the queue may run
    them in any order.
    """

    queue: RelationshipQueue

    def schedule_parent_relationships(self, entry: Entry) -> int:
        identifiers = as_list(entry.parsed_metadata.get(entry.mapping.related_parents_field))
        for parent_identifier in identifiers:
            self.queue.enqueue(
                RelationshipRequest(
                    entry_identifier=entry.identifier,
                    parent_identifier=str(parent_identifier),
                    importer_run=entry.last_run,
                )
            )
        log.debug("Scheduled %d parent relationship(s) for %s", len(identifiers), entry.identifier)
        return len(identifiers)

    def schedule_child_relationships(self, entry: Entry) -> int:
        identifiers = as_list(entry.parsed_metadata.get(entry.mapping.related_children_field))
        for child_identifier in identifiers:
            self.queue.enqueue(
                RelationshipRequest(
                    entry_identifier=entry.identifier,
                    child_identifier=str(child_identifier),
                    importer_run=entry.last_run,
                )
            )
        log.debug("Scheduled %d child relationship(s) for %s", len(identifiers), entry.identifier)
        return len(identifiers)

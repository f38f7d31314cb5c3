"""In-memory stand-ins for the external collaborators of an import run."""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from entryflow.domain.errors import GenericProcessingError
from entryflow.domain.ports.factory import FileOptions, ObjectHandle
from entryflow.domain.ports.jobs import RelationshipRequest

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

    from entryflow.domain.model import DomainType

log = logging.getLogger(__name__)


@dataclass(slots=True)
class InMemoryRelationshipQueue:
    """Collects relationship requests instead of handing them to a worker."""

    requests: list[RelationshipRequest] = field(default_factory=list[RelationshipRequest])

    def enqueue(self, request: RelationshipRequest) -> None:
        self.requests.append(request)

    @property
    def parent_requests(self) -> list[RelationshipRequest]:
        return [request for request in self.requests if request.parent_identifier is not None]

    @property
    def child_requests(self) -> list[RelationshipRequest]:
        return [request for request in self.requests if request.child_identifier is not None]


@dataclass(slots=True, kw_only=True)
class PersistCall:
    metadata: dict[str, object]
    source_identifier_value: str | None
    type_handle: DomainType | None
    user: object | None
    file_options: FileOptions
    work_identifier: str
    collection_field_mapping: str


@dataclass(slots=True)
class InMemoryObjectFactory:
    """Object factory that keeps persisted objects in a dictionary.

    Objects are keyed by source identifier, so persisting the same identifier twice
    updates the stored object. Entries without a resolvable type fail.
    """

    objects: dict[str, ObjectHandle] = field(default_factory=dict[str, ObjectHandle])
    calls: list[PersistCall] = field(default_factory=list[PersistCall])

    def persist(
        self,
        metadata: Mapping[str, object],
        *,
        source_identifier_value: str | None,
        type_handle: DomainType | None,
        user: object | None,
        file_options: FileOptions,
        work_identifier: str,
        collection_field_mapping: str,
    ) -> ObjectHandle:
        self.calls.append(
            PersistCall(
                metadata=dict(metadata),
                source_identifier_value=source_identifier_value,
                type_handle=type_handle,
                user=user,
                file_options=file_options,
                work_identifier=work_identifier,
                collection_field_mapping=collection_field_mapping,
            )
        )
        if type_handle is None:
            raise GenericProcessingError(
                f"No object type resolved for entry {source_identifier_value}"
            )
        if type_handle.constructor is not None:
            type_handle.constructor(**metadata)

        key = source_identifier_value or str(uuid.uuid4())
        existing = self.objects.get(key)
        handle = ObjectHandle(
            id=existing.id if existing else str(uuid.uuid4()),
            type_name=type_handle.name,
            source_identifier=source_identifier_value,
            attributes=dict(metadata),
        )
        self.objects[key] = handle
        log.debug("Persisted %s %s", handle.type_name, handle.id)
        return handle


@dataclass(slots=True)
class InMemoryCollectionLookup:
    """Collection lookup over a fixed ``identifier -> id`` mapping."""

    collections: dict[str, str] = field(default_factory=dict[str, str])

    def add(self, identifier: str, collection_id: str | None = None) -> str:
        resolved = collection_id or str(uuid.uuid4())
        self.collections[identifier] = resolved
        return resolved

    def find_ids(self, identifiers: Iterable[str]) -> list[str]:
        return [self.collections[ident] for ident in identifiers if ident in self.collections]

from __future__ import annotations

import pytest

from entryflow.adapters.memory import (
    InMemoryCollectionLookup,
    InMemoryObjectFactory,
    InMemoryRelationshipQueue,
)
from entryflow.domain.errors import GenericProcessingError
from entryflow.domain.model import DomainType, ImporterRun
from entryflow.domain.ports import FileOptions, ObjectHandle, RelationshipRequest


def _persist(
    factory: InMemoryObjectFactory,
    metadata: dict[str, object],
    *,
    source_identifier: str | None = "1",
    type_handle: DomainType | None = None,
) -> ObjectHandle:
    return factory.persist(
        metadata,
        source_identifier_value=source_identifier,
        type_handle=type_handle,
        user=None,
        file_options=FileOptions(),
        work_identifier="source",
        collection_field_mapping="collection",
    )


def test_object_factory_upserts_by_source_identifier() -> None:
    factory = InMemoryObjectFactory()
    work = DomainType("Work")

    first = _persist(factory, {"title": ["a"]}, type_handle=work)
    second = _persist(factory, {"title": ["b"]}, type_handle=work)

    assert first.id == second.id
    assert second.type_name == "Work"
    assert factory.objects["1"].attributes == {"title": ["b"]}
    assert len(factory.calls) == 2


def test_object_factory_requires_a_type() -> None:
    factory = InMemoryObjectFactory()

    with pytest.raises(GenericProcessingError):
        _persist(factory, {"title": ["a"]})

    assert factory.calls[0].type_handle is None
    assert factory.objects == {}


def test_object_factory_calls_type_constructor() -> None:
    received: list[dict[str, object]] = []

    def constructor(**attributes: object) -> None:
        received.append(attributes)

    _persist(
        InMemoryObjectFactory(),
        {"title": ["a"]},
        type_handle=DomainType("Work", constructor=constructor),
    )

    assert received == [{"title": ["a"]}]


def test_relationship_queue_splits_by_direction() -> None:
    queue = InMemoryRelationshipQueue()
    run = ImporterRun()
    queue.enqueue(
        RelationshipRequest(entry_identifier="1", importer_run=run, parent_identifier="p")
    )
    queue.enqueue(RelationshipRequest(entry_identifier="1", importer_run=run, child_identifier="c"))

    assert [request.parent_identifier for request in queue.parent_requests] == ["p"]
    assert [request.child_identifier for request in queue.child_requests] == ["c"]


def test_collection_lookup_returns_known_ids_in_order() -> None:
    lookup = InMemoryCollectionLookup()
    first = lookup.add("c1")
    lookup.add("c2", "fixed-id")

    assert lookup.find_ids(["c2", "missing", "c1"]) == ["fixed-id", first]

from __future__ import annotations

import pytest

from entryflow.adapters.memory import InMemoryRelationshipQueue
from entryflow.domain.entry_import.relationships import RelationshipScheduler
from entryflow.domain.model import FieldMapping, FieldRule, ImporterRun
from entryflow.domain.ports.jobs import RelationshipRequest
from tests.helpers.entries import make_entry


def test_one_request_per_parent_identifier_in_order() -> None:
    run = ImporterRun()
    entry = make_entry({}, identifier="child-1", run=run)
    entry.parsed_metadata = {"parents": ["p1", "p2", "p3"]}
    queue = InMemoryRelationshipQueue()

    emitted = RelationshipScheduler(queue=queue).schedule_parent_relationships(entry)

    assert emitted == 3
    assert [request.parent_identifier for request in queue.requests] == ["p1", "p2", "p3"]
    assert all(request.entry_identifier == "child-1" for request in queue.requests)
    assert all(request.importer_run is run for request in queue.requests)
    assert all(request.child_identifier is None for request in queue.requests)


def test_child_requests_use_child_identifier() -> None:
    entry = make_entry({}, identifier="parent-1")
    entry.parsed_metadata = {"children": ["c1", "c2"]}
    queue = InMemoryRelationshipQueue()

    RelationshipScheduler(queue=queue).schedule_child_relationships(entry)

    assert [request.child_identifier for request in queue.child_requests] == ["c1", "c2"]
    assert queue.parent_requests == []


def test_configured_relationship_fields_are_used() -> None:
    mapping = FieldMapping.from_rules(
        [
            FieldRule(target="member_of", sources=("member_of",), related_parents=True),
            FieldRule(target="has_member", sources=("has_member",), related_children=True),
        ]
    )
    entry = make_entry({}, identifier="e1", mapping=mapping)
    entry.parsed_metadata = {"member_of": ["p1"], "has_member": ["c1"], "parents": ["ignored"]}
    queue = InMemoryRelationshipQueue()
    scheduler = RelationshipScheduler(queue=queue)

    scheduler.schedule_parent_relationships(entry)
    scheduler.schedule_child_relationships(entry)

    assert [request.parent_identifier for request in queue.parent_requests] == ["p1"]
    assert [request.child_identifier for request in queue.child_requests] == ["c1"]


def test_single_string_value_emits_one_request() -> None:
    entry = make_entry({}, identifier="e1")
    entry.parsed_metadata = {"parents": "p1"}
    queue = InMemoryRelationshipQueue()

    assert RelationshipScheduler(queue=queue).schedule_parent_relationships(entry) == 1


def test_request_message_carries_run_id() -> None:
    run = ImporterRun()
    request = RelationshipRequest(entry_identifier="e1", parent_identifier="p1", importer_run=run)

    assert request.as_message() == {
        "entry_identifier": "e1",
        "importer_run_id": str(run.id),
        "parent_identifier": "p1",
    }


def test_request_requires_exactly_one_side() -> None:
    run = ImporterRun()

    with pytest.raises(ValueError, match="exactly one"):
        RelationshipRequest(entry_identifier="e1", importer_run=run)
    with pytest.raises(ValueError, match="exactly one"):
        RelationshipRequest(
            entry_identifier="e1",
            parent_identifier="p1",
            child_identifier="c1",
            importer_run=run,
        )

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from entryflow.adapters.memory import InMemoryCollectionLookup
from entryflow.domain.errors import CollectionsCreatedError
from entryflow.domain.import_run import run_import
from entryflow.domain.model import EntryStatus, ImporterRun
from tests.helpers.entries import make_entry, make_harness

if TYPE_CHECKING:
    from collections.abc import Callable

    from entryflow.adapters.sqlalchemy.unit_of_work import SqlAlchemyEntryUnitOfWork


def test_run_continues_past_failed_entries() -> None:
    harness = make_harness()
    run = ImporterRun()
    entries = [
        make_entry({"source_identifier": "1", "title": "first"}, run=run),
        make_entry({"source_identifier": "2", "some_field": "no title"}, run=run),
        make_entry({"source_identifier": "3", "title": "third"}, run=run),
    ]

    result = run_import(entries, importer=harness.importer)

    assert [entry.status for entry in entries] == [
        EntryStatus.COMPLETE,
        EntryStatus.FAILED,
        EntryStatus.COMPLETE,
    ]
    assert (result.complete, result.failed, result.pending) == (2, 1, 0)
    assert result.run is run
    assert len(result.handles) == 2
    assert result.total == 3


def test_fatal_error_stops_run_and_leaves_rest_pending() -> None:
    harness = make_harness(collection_lookup=InMemoryCollectionLookup())
    entries = [
        make_entry({"source_identifier": "1", "title": "first"}),
        make_entry({"source_identifier": "2", "title": "second", "collection": "missing"}),
        make_entry({"source_identifier": "3", "title": "third"}),
    ]

    with pytest.raises(CollectionsCreatedError):
        run_import(entries, importer=harness.importer)

    assert [entry.status for entry in entries] == [
        EntryStatus.COMPLETE,
        EntryStatus.PENDING,
        EntryStatus.PENDING,
    ]


def test_empty_run() -> None:
    result = run_import([], importer=make_harness().importer)

    assert result.run is None
    assert result.total == 0


def test_statuses_are_saved_through_unit_of_work(
    sqlite_unit_of_work: Callable[[], SqlAlchemyEntryUnitOfWork],
) -> None:
    run = ImporterRun()
    entries = [
        make_entry({"source_identifier": "1", "title": "first"}, run=run),
        make_entry({"source_identifier": "2"}, run=run),
    ]

    run_import(entries, importer=make_harness().importer, unit_of_work_factory=sqlite_unit_of_work)

    with sqlite_unit_of_work() as uow:
        records = uow.repositories.entries.list_for_run(run.id)

    assert [(record.identifier, record.status) for record in records] == [
        ("1", EntryStatus.COMPLETE),
        ("2", EntryStatus.FAILED),
    ]
    assert records[1].error is not None
    assert records[1].error.error_class.endswith("ValidationError")


def test_statuses_before_a_fatal_error_are_committed(
    sqlite_unit_of_work: Callable[[], SqlAlchemyEntryUnitOfWork],
) -> None:
    run = ImporterRun()
    harness = make_harness(collection_lookup=InMemoryCollectionLookup())
    entries = [
        make_entry({"source_identifier": "1", "title": "first"}, run=run),
        make_entry({"source_identifier": "2", "title": "t", "collection": "missing"}, run=run),
    ]

    with pytest.raises(CollectionsCreatedError):
        run_import(entries, importer=harness.importer, unit_of_work_factory=sqlite_unit_of_work)

    with sqlite_unit_of_work() as uow:
        records = uow.repositories.entries.list_for_run(run.id)

    assert [(record.identifier, record.status) for record in records] == [
        ("1", EntryStatus.COMPLETE),
    ]

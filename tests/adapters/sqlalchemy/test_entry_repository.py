from __future__ import annotations

from typing import TYPE_CHECKING

from entryflow.adapters.sqlalchemy.repositories import SqlAlchemyEntryRepository
from entryflow.domain.errors import ValidationError
from entryflow.domain.model import EntryStatus, ImporterRun
from tests.helpers.entries import make_entry

if TYPE_CHECKING:
    from sqlalchemy.orm import Session


def test_save_inserts_then_updates_by_run_and_identifier(sqlite_session: Session) -> None:
    repository = SqlAlchemyEntryRepository(sqlite_session)
    entry = make_entry({"title": "x"}, identifier="1")
    entry.status_info(ValidationError(["title"]))
    repository.save(entry)

    entry.parsed_metadata = {"title": ["x"]}
    entry.status_info()
    repository.save(entry)
    sqlite_session.commit()

    records = repository.list_for_run(entry.last_run.id)
    assert len(records) == 1
    assert records[0].status is EntryStatus.COMPLETE
    assert records[0].error is None
    assert records[0].parsed_metadata == {"title": ["x"]}


def test_failed_entries_keep_error_details(sqlite_session: Session) -> None:
    repository = SqlAlchemyEntryRepository(sqlite_session)
    entry = make_entry({}, identifier="7")
    try:
        raise ValidationError(["source_identifier", "title"])
    except ValidationError as error:
        entry.status_info(error)
    repository.save(entry)
    sqlite_session.commit()

    record = repository.get(entry.last_run.id, "7")

    assert record is not None
    assert record.status is EntryStatus.FAILED
    assert record.error is not None
    assert record.error.error_class == "entryflow.domain.errors.ValidationError"
    assert record.error.error_message == "Missing required elements: source_identifier, title"
    assert record.error.error_backtrace


def test_same_identifier_in_other_runs_is_separate(sqlite_session: Session) -> None:
    repository = SqlAlchemyEntryRepository(sqlite_session)
    first = make_entry({}, identifier="1", run=ImporterRun())
    second = make_entry({}, identifier="1", run=ImporterRun())
    repository.save(first)
    repository.save(second)
    sqlite_session.commit()

    assert len(repository.list_for_run(first.last_run.id)) == 1
    assert len(repository.list_for_run(second.last_run.id)) == 1


def test_entries_without_identifier_are_always_inserted(sqlite_session: Session) -> None:
    repository = SqlAlchemyEntryRepository(sqlite_session)
    run = ImporterRun()
    repository.save(make_entry({}, run=run))
    repository.save(make_entry({}, run=run))
    sqlite_session.commit()

    records = repository.list_for_run(run.id)

    assert [record.identifier for record in records] == [None, None]
    assert all(record.status is EntryStatus.PENDING for record in records)


def test_get_unknown_entry_returns_none(sqlite_session: Session) -> None:
    repository = SqlAlchemyEntryRepository(sqlite_session)

    assert repository.get(ImporterRun().id, "missing") is None

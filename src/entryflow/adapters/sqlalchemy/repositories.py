"""Repository implementations backed by SQLAlchemy sessions."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any, cast

from sqlalchemy import select

from entryflow.adapters.sqlalchemy.mappings import import_entry_table
from entryflow.domain.model import EntryStatus, ErrorInfo
from entryflow.domain.ports.persistence import EntryStatusRecord

if TYPE_CHECKING:
    from uuid import UUID

    from sqlalchemy import Row
    from sqlalchemy.orm import Session

    from entryflow.domain.model import Entry


class SqlAlchemyEntryRepository:
    """Store one status row per (run, entry identifier)."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def save(self, entry: Entry) -> None:
        values = self._values(entry)
        existing_id = None
        if entry.identifier is not None:
            stmt = (
                select(import_entry_table.c.id)
                .where(import_entry_table.c.run_id == entry.last_run.id)
                .where(import_entry_table.c.identifier == entry.identifier)
            )
            existing_id = self.session.execute(stmt).scalar_one_or_none()

        if existing_id is None:
            self.session.execute(import_entry_table.insert().values(**values))
            return
        self.session.execute(
            import_entry_table.update()
            .where(import_entry_table.c.id == existing_id)
            .values(**values)
        )

    def get(self, run_id: UUID, identifier: str) -> EntryStatusRecord | None:
        stmt = (
            select(import_entry_table)
            .where(import_entry_table.c.run_id == run_id)
            .where(import_entry_table.c.identifier == identifier)
        )
        row = self.session.execute(stmt).one_or_none()
        return None if row is None else self._to_record(row)

    def list_for_run(self, run_id: UUID) -> list[EntryStatusRecord]:
        stmt = (
            select(import_entry_table)
            .where(import_entry_table.c.run_id == run_id)
            .order_by(import_entry_table.c.id)
        )
        return [self._to_record(row) for row in self.session.execute(stmt).all()]

    @staticmethod
    def _values(entry: Entry) -> dict[str, object]:
        error = entry.last_error
        return {
            "run_id": entry.last_run.id,
            "identifier": entry.identifier,
            "status": entry.status,
            "error_class": error.error_class if error else None,
            "error_message": error.error_message if error else None,
            "error_backtrace": list(error.error_backtrace) if error else None,
            "parsed_metadata": dict(entry.parsed_metadata),
            "updated_at": datetime.now(tz=UTC),
        }

    @staticmethod
    def _to_record(row: Row[Any]) -> EntryStatusRecord:
        data = row._mapping  # noqa: SLF001
        error = None
        if data["error_class"] is not None:
            backtrace = cast("list[str] | None", data["error_backtrace"]) or []
            error = ErrorInfo(
                error_class=data["error_class"],
                error_message=data["error_message"] or "",
                error_backtrace=tuple(backtrace),
            )
        return EntryStatusRecord(
            run_id=data["run_id"],
            identifier=data["identifier"],
            status=EntryStatus(data["status"]),
            error=error,
            parsed_metadata=dict(data["parsed_metadata"] or {}),
            updated_at=data["updated_at"],
        )


if TYPE_CHECKING:
    from entryflow.domain.ports.persistence import EntryRepository

    _session_stub = cast("Session", object())
    _repo_check: EntryRepository = SqlAlchemyEntryRepository(_session_stub)

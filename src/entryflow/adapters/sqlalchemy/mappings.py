"""SQLAlchemy table metadata for entry statuses."""

from __future__ import annotations

import logging
import uuid
from datetime import UTC, datetime
from typing import TYPE_CHECKING

from sqlalchemy import (
    JSON,
    Column,
    DateTime,
    Dialect,
    Enum,
    Index,
    Integer,
    MetaData,
    String,
    Table,
    Text,
    TypeDecorator,
    UniqueConstraint,
    Uuid,
)

from entryflow.domain.model import EntryStatus

if TYPE_CHECKING:
    from sqlalchemy.engine import Engine

log = logging.getLogger(__name__)

UUIDColumnType = Uuid[uuid.UUID]


class UTCDateTime(TypeDecorator[datetime]):
    impl = DateTime(timezone=True)
    cache_ok = True

    def process_bind_param(self, value: datetime | None, dialect: Dialect) -> datetime | None:
        _ = dialect
        if value is None:
            return None
        if value.tzinfo is None:
            value = value.replace(tzinfo=UTC)
        return value.astimezone(UTC)

    def process_result_value(self, value: datetime | None, dialect: Dialect) -> datetime | None:
        _ = dialect
        if value is None:
            return None
        return value if value.tzinfo else value.replace(tzinfo=UTC)


metadata = MetaData(
    naming_convention={
        "ix": "ix_%(column_0_label)s",
        "uq": "uq_%(table_name)s_%(column_0_label)s",
        "ck": "ck_%(table_name)s_%(constraint_name)s",
        "fk": "fk_%(table_name)s_%(column_0_label)s_%(referred_table_name)s",
        "pk": "pk_%(table_name)s",
    }
)

import_entry_table = Table(
    "import_entry",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("run_id", UUIDColumnType, nullable=False),
    Column("identifier", String, nullable=True),
    Column("status", Enum(EntryStatus, native_enum=False), nullable=False),
    Column("error_class", String, nullable=True),
    Column("error_message", Text, nullable=True),
    Column("error_backtrace", JSON, nullable=True),
    Column("parsed_metadata", JSON, nullable=False, default=dict),
    Column("updated_at", UTCDateTime, nullable=False),
    UniqueConstraint("run_id", "identifier"),
    Index("ix_import_entry_run_status", "run_id", "status"),
)


def create_all_tables(engine: Engine) -> None:
    """Create the entry-status tables."""

    log.info("Creating all tables")
    metadata.create_all(engine)

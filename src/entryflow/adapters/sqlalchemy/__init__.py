"""SQLAlchemy adapter package for entryflow."""

from __future__ import annotations

from .mappings import create_all_tables, import_entry_table, metadata
from .repositories import SqlAlchemyEntryRepository
from .unit_of_work import SqlAlchemyEntryUnitOfWork, shutdown, startup

__all__ = [
    "SqlAlchemyEntryRepository",
    "SqlAlchemyEntryUnitOfWork",
    "create_all_tables",
    "import_entry_table",
    "metadata",
    "shutdown",
    "startup",
]

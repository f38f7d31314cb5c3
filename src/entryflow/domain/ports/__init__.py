"""Ports implemented by adapters and consumed by the entry-import domain."""

from __future__ import annotations

from .factory import FileOptions, ObjectFactory, ObjectHandle
from .jobs import RelationshipQueue, RelationshipRequest
from .persistence import CollectionLookup, EntryRepository, EntryStatusRecord
from .unit_of_work import EntryRepositories, EntryUnitOfWork, RepositoryCollection, UnitOfWork

__all__ = [
    "CollectionLookup",
    "EntryRepositories",
    "EntryRepository",
    "EntryStatusRecord",
    "EntryUnitOfWork",
    "FileOptions",
    "ObjectFactory",
    "ObjectHandle",
    "RelationshipQueue",
    "RelationshipRequest",
    "RepositoryCollection",
    "UnitOfWork",
]

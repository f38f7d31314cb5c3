"""Ports for persisting parsed metadata as domain objects."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Mapping

    from entryflow.domain.model import DomainType


@dataclass(frozen=True, slots=True)
class ObjectHandle:
    """Reference to an object the factory persisted."""

    id: str
    type_name: str
    source_identifier: str | None = None
    attributes: Mapping[str, object] = field(default_factory=dict[str, object], repr=False)


@dataclass(frozen=True, slots=True, kw_only=True)
class FileOptions:
    replace_files: bool = False
    update_files: bool = False


@runtime_checkable
class ObjectFactory(Protocol):
    """Persistence contract consumed by the import orchestrator.

    Implementations raise :class:`~entryflow.domain.errors.IndexCommunicationError` when
    the search index is unavailable, and any other exception for generic failures.
    """

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
    ) -> ObjectHandle: ...

"""Resolve the target object type of an entry from its metadata."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from typing import TYPE_CHECKING, cast

from entryflow.domain.errors import UnknownTypeError
from entryflow.domain.model import first_value, get_present

if TYPE_CHECKING:
    from collections.abc import Mapping

    from entryflow.domain.model import DomainType, FieldMapping

log = logging.getLogger(__name__)


class TypeRegistry:
    """Explicit mapping from canonical type names to :class:`DomainType` handles."""

    def __init__(self, types: Iterable[DomainType] = ()) -> None:
        self._types: dict[str, DomainType] = {}
        for domain_type in types:
            self.register(domain_type)

    def register(self, domain_type: DomainType) -> DomainType:
        self._types[domain_type.name] = domain_type
        return domain_type

    def get(self, name: str) -> DomainType:
        try:
            return self._types[name]
        except KeyError:
            raise UnknownTypeError(f"Unknown type: {name}") from None

    def __contains__(self, name: object) -> bool:
        return name in self._types

    def __iter__(self) -> Iterator[DomainType]:
        return iter(self._types.values())

    def __len__(self) -> int:
        return len(self._types)


def canonical_type_name(name: str) -> str:
    """Convert a free-form type name into registry casing.

    Spaces become underscores; names containing ``-`` or ``_`` are lowercased first, then
    each underscore-separated part is capitalised (``"fake_work"`` -> ``"FakeWork"``).
    """

    normalized = name.replace(" ", "_")
    if "-" in normalized or "_" in normalized:
        normalized = normalized.lower()
    return "".join(part[:1].upper() + part[1:] for part in normalized.split("_"))


def factory_type_name(
    parsed_metadata: Mapping[str, object],
    mapping: FieldMapping,
    default_type: str,
) -> object:
    model = get_present(parsed_metadata, "model")
    if model is not None:
        return first_value(model)
    # The condition reads the mapping while the value comes from the parsed metadata.
    if mapping.get("work_type") is not None:
        return first_value(parsed_metadata.get("work_type"))
    return default_type


def resolve_factory_type(
    parsed_metadata: Mapping[str, object],
    mapping: FieldMapping,
    default_type: str,
    registry: TypeRegistry,
) -> DomainType | None:
    """Return the registered type for an entry.

    Unregistered names give ``None``. Any other failure while resolving (for example a
    missing or non-string name) falls back to ``default_type``.
    """

    try:
        name = factory_type_name(parsed_metadata, mapping, default_type)
        return registry.get(canonical_type_name(cast("str", name)))
    except UnknownTypeError as error:
        log.debug("%s; no factory type", error)
        return None
    except Exception:  # noqa: BLE001
        log.warning("Could not resolve factory type, using default %s", default_type)
        return registry.get(default_type)

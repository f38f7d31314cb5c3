"""Parsed metadata aliases and value helpers."""

from __future__ import annotations

from collections.abc import Mapping
from typing import cast

type MetadataValue = str | list[str] | dict[str, object] | list[dict[str, object]]
type ParsedMetadata = dict[str, MetadataValue]
type RawRecord = Mapping[str, object]


def is_blank(value: object) -> bool:
    """Return ``True`` for ``None``, whitespace-only strings and empty containers."""

    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    if isinstance(value, (list, tuple, set, dict)):
        return len(cast("list[object]", value)) == 0
    return False


def present(value: object) -> bool:
    return not is_blank(value)


def first_value(value: object) -> object:
    """Return the first element of a list value, or the value itself."""

    if isinstance(value, list):
        items = cast("list[object]", value)
        return items[0] if items else None
    return value


def as_list(value: object) -> list[object]:
    if value is None:
        return []
    if isinstance(value, list):
        return list(cast("list[object]", value))
    return [value]


def get_present(metadata: Mapping[str, object], key: str) -> object | None:
    """Return ``metadata[key]`` when it is present (non-blank), else ``None``."""

    value = metadata.get(key)
    return value if present(value) else None

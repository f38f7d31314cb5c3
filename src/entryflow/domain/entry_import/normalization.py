"""Field normalization: raw source records to parsed metadata.

Enumerated columns (``title_1``/``title_2`` or ``1_title``/``2_title``) merge into one
ordered list, fields declared under the same object name merge into a nested mapping,
and ``parsed`` fields go through a value parser before insertion.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Final, cast

import pycountry

from entryflow.domain.model import FieldRule, is_blank

if TYPE_CHECKING:
    from entryflow.domain.model import FieldMapping, MetadataValue, ParsedMetadata, RawRecord

log = logging.getLogger(__name__)

type ValueParser = Callable[[str], str]

ENUMERATED_SUFFIX: Final = re.compile(r"^(?P<base>.+?)_(?P<index>\d+)$")
ENUMERATED_PREFIX: Final = re.compile(r"^(?P<index>\d+)_(?P<base>.+)$")
DEFAULT_SPLIT_PATTERN: Final[str] = r"\s*[:;|]\s*"
RELATIONSHIP_SPLIT_PATTERN: Final[str] = r"\s*\|\s*"
OBJECT_VALUE_SEPARATOR: Final = re.compile(r"\s*,\s*")


def parse_language(value: str) -> str:
    """Expand a language code or name into its English language name.

    Unknown values are returned unchanged.
    """

    candidate = value.strip()
    lookup = pycountry.languages
    try:
        if len(candidate) == 2:
            language = lookup.get(alpha_2=candidate)
        elif len(candidate) == 3:
            language = lookup.get(alpha_3=candidate) or lookup.get(bibliographic=candidate)
        else:
            language = lookup.get(name=candidate)
    except LookupError:
        language = None
    if language is None:
        log.debug("No language found for %r", value)
        return value
    return str(language.name)


DEFAULT_VALUE_PARSERS: Final[Mapping[str, ValueParser]] = {"language": parse_language}


def split_enumerated_key(key: str) -> tuple[str, int | None]:
    """Return ``(base, index)`` for an enumerated column name.

    ``title_2`` and ``2_title`` both give ``("title", 2)``; other keys give
    ``(key, None)``.
    """

    match = ENUMERATED_SUFFIX.match(key) or ENUMERATED_PREFIX.match(key)
    if match is None:
        return key, None
    return match.group("base"), int(match.group("index"))


@dataclass(slots=True)
class _Collected:
    index: int
    sequence: int
    value: str


@dataclass(slots=True)
class FieldNormalizer:
    """Build :data:`ParsedMetadata` from a raw record using a field mapping."""

    mapping: FieldMapping
    parsers: Mapping[str, ValueParser] = field(default_factory=lambda: dict(DEFAULT_VALUE_PARSERS))

    def normalize(self, record: RawRecord) -> ParsedMetadata:
        order: list[str] = []
        collected: dict[str, list[_Collected]] = {}
        rules_by_target: dict[str, FieldRule] = {}
        objects: dict[str, dict[str, MetadataValue]] = {}

        for sequence, (key, raw_value) in enumerate(record.items()):
            values = [value for value in _flatten(raw_value) if not is_blank(value)]
            if not values:
                continue
            rules, index = self._rules_for(key)
            for rule in rules:
                if rule.object_name is not None:
                    group = objects.setdefault(rule.object_name, {})
                    _remember(order, rule.object_name)
                    group[rule.target] = self._object_value(rule, values)
                    continue
                rules_by_target[rule.target] = rule
                _remember(order, rule.target)
                bucket = collected.setdefault(rule.target, [])
                bucket.extend(
                    _Collected(index=index, sequence=sequence, value=value)
                    for value in self._field_values(rule, values)
                )

        metadata: ParsedMetadata = {}
        for name in order:
            if name in objects:
                metadata[name] = cast("dict[str, object]", objects[name])
                continue
            ordered = sorted(collected[name], key=lambda item: (item.index, item.sequence))
            if not ordered:
                continue
            field_values = [item.value for item in ordered]
            multiple = rules_by_target[name].multiple
            metadata[name] = field_values if multiple else field_values[-1]
        return metadata

    def _rules_for(self, key: str) -> tuple[list[FieldRule], int]:
        rules = self.mapping.rules_for(key)
        if rules:
            return rules, 0
        base, index = split_enumerated_key(key)
        rules = self.mapping.rules_for(base) or [self._passthrough_rule(base)]
        return rules, index or 0

    def _passthrough_rule(self, name: str) -> FieldRule:
        relationship_fields = (
            self.mapping.related_parents_field,
            self.mapping.related_children_field,
        )
        split: bool | str = RELATIONSHIP_SPLIT_PATTERN if name in relationship_fields else False
        return FieldRule(target=name, sources=(name,), split=split)

    def _field_values(self, rule: FieldRule, values: Iterable[str]) -> list[str]:
        results: list[str] = []
        split = _split_pattern(rule)
        for value in values:
            pieces = _split(value, split) if split else [value.strip()]
            results.extend(self._parse(rule, piece) for piece in pieces if piece)
        return results

    def _object_value(self, rule: FieldRule, values: list[str]) -> MetadataValue:
        pieces: list[str] = []
        for value in values:
            if rule.split:
                pieces.extend(_split(value, rule.split))
            else:
                pieces.extend(OBJECT_VALUE_SEPARATOR.split(value.strip()))
        parsed = [self._parse(rule, piece) for piece in pieces if piece]
        if len(parsed) == 1:
            return parsed[0]
        return parsed

    def _parse(self, rule: FieldRule, value: str) -> str:
        if not rule.parsed:
            return value
        parser = self._parser_for(rule.target)
        if parser is None:
            log.debug("Field %s is marked parsed but has no parser", rule.target)
            return value
        return parser(value)

    def _parser_for(self, target: str) -> ValueParser | None:
        if target in self.parsers:
            return self.parsers[target]
        suffixes = [name for name in self.parsers if target.endswith(f"_{name}")]
        if not suffixes:
            return None
        return self.parsers[max(suffixes, key=len)]


def _remember(order: list[str], name: str) -> None:
    if name not in order:
        order.append(name)


def _flatten(value: object) -> list[str]:
    if value is None:
        return []
    if isinstance(value, (list, tuple)):
        return [str(item) for item in cast("Iterable[object]", value) if item is not None]
    return [str(value)]


def _split_pattern(rule: FieldRule) -> bool | str:
    if rule.split or not (rule.related_parents or rule.related_children):
        return rule.split
    return RELATIONSHIP_SPLIT_PATTERN


def _split(value: str, pattern: bool | str) -> list[str]:
    regex = DEFAULT_SPLIT_PATTERN if pattern is True else str(pattern)
    return [piece for piece in re.split(regex, value.strip()) if piece]

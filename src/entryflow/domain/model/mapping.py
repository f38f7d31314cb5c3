"""Field-mapping configuration: how source columns map onto metadata fields."""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, field
from typing import Final

DEFAULT_SOURCE_IDENTIFIER_FIELD: Final[str] = "source_identifier"
DEFAULT_PARENTS_FIELD: Final[str] = "parents"
DEFAULT_CHILDREN_FIELD: Final[str] = "children"


@dataclass(frozen=True, slots=True, kw_only=True)
class FieldRule:
    """Mapping rule for one logical metadata field.

    ``sources`` lists the raw column names feeding the field and defaults to
    ``(target,)``. ``object_name`` groups the field into a nested mapping, ``parsed``
    routes values through a value parser and ``split`` (``True`` or a regular
    expression) breaks single cells into many values.
    """

    target: str
    sources: tuple[str, ...] = ()
    object_name: str | None = None
    parsed: bool = False
    split: bool | str = False
    multiple: bool = True
    source_identifier: bool = False
    related_parents: bool = False
    related_children: bool = False

    def __post_init__(self) -> None:
        if not self.sources:
            object.__setattr__(self, "sources", (self.target,))

    def matches(self, key: str) -> bool:
        return key in self.sources


@dataclass(slots=True)
class FieldMapping:
    """Ordered collection of :class:`FieldRule` keyed by target field.

    Declaring the same target twice keeps the later rule, as a mapping literal with
    repeated keys does.
    """

    _rules: dict[str, FieldRule] = field(default_factory=dict[str, FieldRule])

    @classmethod
    def from_rules(cls, rules: Iterable[FieldRule]) -> FieldMapping:
        mapping = cls()
        for rule in rules:
            mapping.declare(rule)
        return mapping

    def declare(self, rule: FieldRule) -> None:
        self._rules[rule.target] = rule

    def get(self, target: str) -> FieldRule | None:
        return self._rules.get(target)

    def __getitem__(self, target: str) -> FieldRule:
        return self._rules[target]

    def __contains__(self, target: object) -> bool:
        return target in self._rules

    def __iter__(self) -> Iterator[FieldRule]:
        return iter(self._rules.values())

    def __len__(self) -> int:
        return len(self._rules)

    def rules_for(self, key: str) -> list[FieldRule]:
        """Return every rule that reads from the raw column ``key``."""

        return [rule for rule in self._rules.values() if rule.matches(key)]

    @property
    def source_identifier_field(self) -> str:
        return self._flagged("source_identifier") or DEFAULT_SOURCE_IDENTIFIER_FIELD

    @property
    def related_parents_field(self) -> str:
        return self._flagged("related_parents") or DEFAULT_PARENTS_FIELD

    @property
    def related_children_field(self) -> str:
        return self._flagged("related_children") or DEFAULT_CHILDREN_FIELD

    def as_dict(self) -> Mapping[str, FieldRule]:
        return dict(self._rules)

    def _flagged(self, attribute: str) -> str | None:
        for rule in self._rules.values():
            if getattr(rule, attribute):
                return rule.target
        return None

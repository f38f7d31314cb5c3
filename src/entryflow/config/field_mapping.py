"""Pydantic models describing field-mapping payloads."""

from __future__ import annotations

import json
from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import cast

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic import ValidationError as PydanticValidationError

from entryflow.domain.model import FieldMapping, FieldRule

from .errors import ConfigurationError


class FieldRulePayload(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True, frozen=True)

    sources: list[str] = Field(default_factory=list, alias="from")
    object_name: str | None = Field(default=None, alias="object")
    parsed: bool = False
    split: bool | str = False
    multiple: bool = True
    source_identifier: bool = False
    related_parents_field_mapping: bool = False
    related_children_field_mapping: bool = False

    @field_validator("sources", mode="before")
    @classmethod
    def _coerce_sources(cls, value: object) -> object:
        if isinstance(value, str):
            return [value]
        return value

    @field_validator("object_name", mode="before")
    @classmethod
    def _blank_to_none(cls, value: object) -> object:
        if isinstance(value, str):
            stripped = value.strip()
            return stripped or None
        return value

    def to_rule(self, target: str) -> FieldRule:
        return FieldRule(
            target=target,
            sources=tuple(self.sources) or (target,),
            object_name=self.object_name,
            parsed=self.parsed,
            split=self.split,
            multiple=self.multiple,
            source_identifier=self.source_identifier,
            related_parents=self.related_parents_field_mapping,
            related_children=self.related_children_field_mapping,
        )


type FieldMappingPayload = Mapping[str, Mapping[str, object]] | Iterable[
    tuple[str, Mapping[str, object]]
]


def load_field_mapping(payload: FieldMappingPayload) -> FieldMapping:
    """Validate a mapping payload and return the domain :class:`FieldMapping`.

    ``payload`` is either ``{target: rule}`` or a sequence of ``(target, rule)`` pairs.
    With pairs, a target declared twice keeps its last rule.
    """

    if isinstance(payload, Mapping):
        pairs = list(cast("Mapping[str, Mapping[str, object]]", payload).items())
    else:
        pairs = list(payload)

    rules: list[FieldRule] = []
    for target, rule_payload in pairs:
        try:
            rule = FieldRulePayload.model_validate(rule_payload)
        except PydanticValidationError as exc:
            raise ConfigurationError(f"Invalid field mapping for {target!r}") from exc
        rules.append(rule.to_rule(target))
    return FieldMapping.from_rules(rules)


def load_field_mapping_file(path: Path | str) -> FieldMapping:
    """Load a JSON field-mapping file (an object of ``target: rule``)."""

    file_path = Path(path)
    try:
        with file_path.open() as handle:
            document = json.load(handle)
    except (OSError, json.JSONDecodeError) as exc:
        raise ConfigurationError(f"Cannot read field mapping from {file_path}") from exc
    if not isinstance(document, dict):
        raise ConfigurationError(f"Field mapping in {file_path} must be a JSON object")
    return load_field_mapping(cast("dict[str, Mapping[str, object]]", document))

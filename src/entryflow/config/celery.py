"""Celery broker configuration values."""

from __future__ import annotations

from dataclasses import dataclass

from .env import optional_env_var, require_env_vars


@dataclass(frozen=True)
class CeleryConfig:
    """Where relationship requests are published."""

    broker_url: str
    relationship_task: str | None = None


def get_celery_config() -> CeleryConfig:
    values = require_env_vars(("ENTRYFLOW_BROKER_URL",))
    return CeleryConfig(
        broker_url=values["ENTRYFLOW_BROKER_URL"],
        relationship_task=optional_env_var("ENTRYFLOW_RELATIONSHIP_TASK"),
    )

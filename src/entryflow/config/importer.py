"""Importer configuration loaded from the environment."""

from __future__ import annotations

from typing import Final

from entryflow.domain.model import DEFAULT_WORK_TYPE, ImporterConfig
from entryflow.domain.model.importer import DEFAULT_VISIBILITY

from .env import env_flag, optional_env_var

ENV_PREFIX: Final[str] = "ENTRYFLOW_"


def get_importer_config(**overrides: object) -> ImporterConfig:
    """Build an :class:`ImporterConfig` from ``ENTRYFLOW_*`` environment variables.

    Keyword ``overrides`` take precedence over the environment.
    """

    parser_fields: dict[str, object] = {}
    rights_statement = optional_env_var(f"{ENV_PREFIX}RIGHTS_STATEMENT")
    if rights_statement is not None:
        parser_fields["rights_statement"] = rights_statement
    override_rights = optional_env_var(f"{ENV_PREFIX}OVERRIDE_RIGHTS_STATEMENT")
    if override_rights is not None:
        parser_fields["override_rights_statement"] = override_rights

    values: dict[str, object] = {
        "validate_only": env_flag(f"{ENV_PREFIX}VALIDATE_ONLY"),
        "visibility": optional_env_var(f"{ENV_PREFIX}VISIBILITY", DEFAULT_VISIBILITY),
        "admin_set_id": optional_env_var(f"{ENV_PREFIX}ADMIN_SET_ID"),
        "default_work_type": optional_env_var(
            f"{ENV_PREFIX}DEFAULT_WORK_TYPE", DEFAULT_WORK_TYPE
        ),
        "parser_fields": parser_fields,
    }
    values.update(overrides)
    return ImporterConfig(**values)  # pyright: ignore[reportArgumentType]

"""Application configuration helpers."""

from __future__ import annotations

from .celery import CeleryConfig, get_celery_config
from .env import env_flag, optional_env_var, require_env_vars
from .errors import ConfigurationError, MissingConfigurationError
from .field_mapping import FieldRulePayload, load_field_mapping, load_field_mapping_file
from .importer import get_importer_config

__all__ = [
    "CeleryConfig",
    "ConfigurationError",
    "FieldRulePayload",
    "MissingConfigurationError",
    "env_flag",
    "get_celery_config",
    "get_importer_config",
    "load_field_mapping",
    "load_field_mapping_file",
    "optional_env_var",
    "require_env_vars",
]

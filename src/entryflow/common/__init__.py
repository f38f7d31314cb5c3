from __future__ import annotations

from .logging import configure_logging
from .storage import ensure_data_dir, get_data_dir, get_database_uri

__all__ = [
    "configure_logging",
    "ensure_data_dir",
    "get_data_dir",
    "get_database_uri",
]

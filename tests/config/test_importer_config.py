from __future__ import annotations

import pytest

from entryflow.config import get_importer_config

ENV_VARS = (
    "ENTRYFLOW_RIGHTS_STATEMENT",
    "ENTRYFLOW_OVERRIDE_RIGHTS_STATEMENT",
    "ENTRYFLOW_VALIDATE_ONLY",
    "ENTRYFLOW_VISIBILITY",
    "ENTRYFLOW_ADMIN_SET_ID",
    "ENTRYFLOW_DEFAULT_WORK_TYPE",
)


@pytest.fixture(autouse=True)
def clear_importer_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


def test_defaults_without_environment() -> None:
    config = get_importer_config()

    assert config.validate_only is False
    assert config.visibility == "open"
    assert config.admin_set_id is None
    assert config.default_work_type == "Work"
    assert dict(config.parser_fields) == {}


def test_reads_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ENTRYFLOW_RIGHTS_STATEMENT", "http://rightsstatements.org/vocab/CNE/1.0/")
    monkeypatch.setenv("ENTRYFLOW_OVERRIDE_RIGHTS_STATEMENT", "true")
    monkeypatch.setenv("ENTRYFLOW_VALIDATE_ONLY", "1")
    monkeypatch.setenv("ENTRYFLOW_VISIBILITY", "restricted")
    monkeypatch.setenv("ENTRYFLOW_ADMIN_SET_ID", "admin-set")
    monkeypatch.setenv("ENTRYFLOW_DEFAULT_WORK_TYPE", "Image")

    config = get_importer_config()

    assert config.validate_only is True
    assert config.visibility == "restricted"
    assert config.admin_set_id == "admin-set"
    assert config.default_work_type == "Image"
    assert config.parser_fields == {
        "rights_statement": "http://rightsstatements.org/vocab/CNE/1.0/",
        "override_rights_statement": "true",
    }


def test_overrides_win(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ENTRYFLOW_VISIBILITY", "restricted")

    config = get_importer_config(visibility="authenticated", replace_files=True)

    assert config.visibility == "authenticated"
    assert config.replace_files is True

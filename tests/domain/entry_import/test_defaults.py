from __future__ import annotations

import pytest

from entryflow.domain.entry_import.defaults import (
    add_admin_set_id,
    add_collections,
    add_rights_statement,
    add_visibility,
    apply_importer_defaults,
    override_rights_statement,
)
from entryflow.domain.model import ParsedMetadata
from tests.helpers.entries import ADMIN_SET_ID, RIGHTS_STATEMENT, make_importer_config

OTHER_RIGHTS = "http://rightsstatements.org/vocab/InC/1.0/"


def test_defaults_fill_absent_fields() -> None:
    metadata: ParsedMetadata = {"title": ["some title"]}

    apply_importer_defaults(metadata, make_importer_config())

    assert metadata["visibility"] == "open"
    assert metadata["admin_set_id"] == ADMIN_SET_ID
    assert metadata["rights_statement"] == [RIGHTS_STATEMENT]


def test_defaults_keep_values_from_the_record() -> None:
    metadata: ParsedMetadata = {
        "visibility": "restricted",
        "admin_set_id": "record-admin-set",
        "rights_statement": [OTHER_RIGHTS],
    }

    apply_importer_defaults(metadata, make_importer_config())

    assert metadata["visibility"] == "restricted"
    assert metadata["admin_set_id"] == "record-admin-set"
    assert metadata["rights_statement"] == [OTHER_RIGHTS]


def test_defaults_are_idempotent() -> None:
    importer = make_importer_config()
    metadata: ParsedMetadata = {}

    apply_importer_defaults(metadata, importer)
    snapshot = dict(metadata)
    apply_importer_defaults(metadata, importer)

    assert metadata == snapshot


def test_blank_record_values_count_as_absent() -> None:
    metadata: ParsedMetadata = {"visibility": "", "admin_set_id": "  "}

    add_visibility(metadata, make_importer_config(visibility="authenticated"))
    add_admin_set_id(metadata, make_importer_config())

    assert metadata["visibility"] == "authenticated"
    assert metadata["admin_set_id"] == ADMIN_SET_ID


@pytest.mark.parametrize("flag", ["true", "1", True, 1])
def test_override_rights_statement_replaces_record_value(flag: object) -> None:
    importer = make_importer_config(
        parser_fields={"rights_statement": RIGHTS_STATEMENT, "override_rights_statement": flag}
    )
    metadata: ParsedMetadata = {"rights_statement": [OTHER_RIGHTS]}

    add_rights_statement(metadata, importer)

    assert override_rights_statement(importer)
    assert metadata["rights_statement"] == [RIGHTS_STATEMENT]


@pytest.mark.parametrize("flag", ["false", "0", "yes", "TRUE", None, False])
def test_other_override_encodings_do_not_override(flag: object) -> None:
    importer = make_importer_config(
        parser_fields={"rights_statement": RIGHTS_STATEMENT, "override_rights_statement": flag}
    )
    metadata: ParsedMetadata = {"rights_statement": [OTHER_RIGHTS]}

    add_rights_statement(metadata, importer)

    assert not override_rights_statement(importer)
    assert metadata["rights_statement"] == [OTHER_RIGHTS]


def test_missing_configuration_leaves_fields_unset() -> None:
    importer = make_importer_config(admin_set_id=None, parser_fields={})
    metadata: ParsedMetadata = {}

    add_rights_statement(metadata, importer)
    add_admin_set_id(metadata, importer)

    assert "rights_statement" not in metadata
    assert "admin_set_id" not in metadata


def test_add_collections_warns_and_indexes_ids() -> None:
    metadata: ParsedMetadata = {}

    with pytest.warns(DeprecationWarning):
        add_collections(metadata, ["col-a", "col-b"])

    assert metadata["member_of_collections_attributes"] == {
        "0": {"id": "col-a"},
        "1": {"id": "col-b"},
    }


def test_add_collections_without_ids_is_a_no_op() -> None:
    metadata: ParsedMetadata = {}

    add_collections(metadata, [])

    assert metadata == {}

# checks/test_first_normal_form.py

from pathlib import Path

import pytest

from schema_audit.adapters import load_contract
from schema_audit.domain.audit import AuditSettings, RuleCode, Severity
from schema_audit.domain.audit.checks import check_first_normal_form
from schema_audit.schemas import ConstraintContract, FieldContract, ModelContract

pytestmark = pytest.mark.unit

_SCHEMAS = Path(__file__).resolve().parents[4] / "fixtures" / "schemas"


def _contract(*fields: FieldContract) -> ConstraintContract:
    return ConstraintContract(models=(ModelContract(name="User", fields=fields),))


def _string(name: str, is_list: bool = False) -> FieldContract:
    return FieldContract(name=name, type="String", is_list=is_list)


def test_check_first_normal_form_fixture_findings() -> None:
    """
    ARRANGE: 1nf-violations.sql
    ACT:     check_first_normal_form
    ASSERT:  Json, list-in-string and repeating group findings per model
    """
    expected = [
        ("Product", RuleCode.NF1_JSON_RELATION_SUSPECTED, "attributes"),
        ("Product", RuleCode.NF1_LIST_IN_STRING_SUSPECTED, "categoryIds"),
        ("Product", RuleCode.NF1_REPEATING_GROUP_SUSPECTED, None),
        ("User", RuleCode.NF1_JSON_RELATION_SUSPECTED, "metadata"),
        ("User", RuleCode.NF1_LIST_IN_STRING_SUSPECTED, "roleList"),
        ("User", RuleCode.NF1_LIST_IN_STRING_SUSPECTED, "tagIds"),
        ("User", RuleCode.NF1_REPEATING_GROUP_SUSPECTED, None),
    ]
    contract = load_contract(_SCHEMAS / "1nf-violations.sql")

    findings = check_first_normal_form(contract)
    actual = [(f.model, f.rule, f.field) for f in findings]

    assert actual == expected


def test_check_first_normal_form_findings_are_info() -> None:
    """
    ARRANGE: 1nf-violations.sql
    ACT:     check_first_normal_form
    ASSERT:  every finding is informational
    """
    contract = load_contract(_SCHEMAS / "1nf-violations.sql")

    actual = {f.severity for f in check_first_normal_form(contract)}

    assert actual == {Severity.INFO}


def test_list_in_string_matches_collection_noun() -> None:
    """
    ARRANGE: String field postTags
    ACT:     check_first_normal_form
    ASSERT:  flagged as a list in a string
    """
    findings = check_first_normal_form(_contract(_string("postTags")))

    assert [f.field for f in findings] == ["postTags"]


def test_list_in_string_ignores_embedded_noun() -> None:
    """
    ARRANGE: String field stags
    ACT:     check_first_normal_form
    ASSERT:  no findings
    """
    actual = check_first_normal_form(_contract(_string("stags")))

    assert actual == ()


def test_list_in_string_ignores_native_lists() -> None:
    """
    ARRANGE: String[] field tags
    ACT:     check_first_normal_form
    ASSERT:  no findings
    """
    actual = check_first_normal_form(_contract(_string("tags", is_list=True)))

    assert actual == ()


def test_list_in_string_ignores_non_string_types() -> None:
    """
    ARRANGE: Int field tagIds
    ACT:     check_first_normal_form
    ASSERT:  no findings
    """
    actual = check_first_normal_form(
        _contract(FieldContract(name="tagIds", type="Int")),
    )

    assert actual == ()


def test_repeating_group_message_names_members() -> None:
    """
    ARRANGE: phone1 and phone2
    ACT:     check_first_normal_form
    ASSERT:  message lists both members
    """
    findings = check_first_normal_form(_contract(_string("phone1"), _string("phone2")))

    assert "[phone1, phone2]" in findings[0].message


def test_repeating_group_respects_minimum_size() -> None:
    """
    ARRANGE: phone1 and phone2 with a minimum group size of three
    ACT:     check_first_normal_form
    ASSERT:  no findings
    """
    settings = AuditSettings(repeating_group_min_size=3)

    actual = check_first_normal_form(
        _contract(_string("phone1"), _string("phone2")),
        settings,
    )

    assert actual == ()


def test_repeating_group_ignores_single_numbered_field() -> None:
    """
    ARRANGE: only address1
    ACT:     check_first_normal_form
    ASSERT:  no findings
    """
    actual = check_first_normal_form(_contract(_string("address1")))

    assert actual == ()

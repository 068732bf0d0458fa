# audit/test_report.py

import json
from pathlib import Path

import pytest

from schema_audit.domain.audit import (
    Finding,
    NormalForm,
    RuleCode,
    Severity,
    build_audit_result,
    render_json,
    render_text,
    save_report,
)
from schema_audit.schemas import (
    ConstraintContract,
    FieldContract,
    ForeignKeyConstraint,
    ModelContract,
    PrimaryKeyConstraint,
)

pytestmark = pytest.mark.unit


def _contract() -> ConstraintContract:
    return ConstraintContract(
        models=(
            ModelContract(
                name="Post",
                fields=(
                    FieldContract(name="authorId", type="Int"),
                    FieldContract(name="id", type="Int"),
                ),
                primary_key=PrimaryKeyConstraint(fields=("id",)),
                foreign_keys=(
                    ForeignKeyConstraint(
                        fields=("authorId",),
                        referenced_model="User",
                        referenced_fields=("id",),
                    ),
                ),
            ),
        ),
    )


def _finding() -> Finding:
    return Finding(
        rule=RuleCode.FK_MISSING_INDEX,
        severity=Severity.INFO,
        normal_form=NormalForm.SCHEMA,
        model="Post",
        field="authorId",
        message="Foreign key is not indexed.",
        fix="Add an index.",
    )


def test_build_audit_result_counts_models_and_findings() -> None:
    """
    ARRANGE: one model and one finding
    ACT:     build_audit_result
    ASSERT:  metadata counts both
    """
    result = build_audit_result(_contract(), [_finding()], "schema.sql", None)

    actual = (result.metadata.model_count, result.metadata.finding_count)

    assert actual == (1, 1)


def test_build_audit_result_converts_enums_to_strings() -> None:
    """
    ARRANGE: finding with enum rule and severity
    ACT:     build_audit_result
    ASSERT:  output finding carries plain string values
    """
    result = build_audit_result(_contract(), [_finding()], "schema.sql", None)

    actual = result.findings[0]

    assert (actual.rule, actual.severity, actual.normal_form) == (
        "FK_MISSING_INDEX",
        "info",
        "SCHEMA",
    )


def test_render_json_is_compact_by_default() -> None:
    """
    ARRANGE: audit result
    ACT:     render_json
    ASSERT:  single line without spaces after separators
    """
    result = build_audit_result(_contract(), [_finding()], "schema.sql", None)

    actual = render_json(result)

    assert "\n" not in actual and '": ' not in actual


def test_render_json_pretty_indents() -> None:
    """
    ARRANGE: audit result
    ACT:     render_json(pretty=True)
    ASSERT:  two-space indentation
    """
    result = build_audit_result(_contract(), [], "schema.sql", None)

    actual = render_json(result, pretty=True)

    assert '\n  "contract"' in actual


def test_render_json_sorts_keys_and_uses_camel_case() -> None:
    """
    ARRANGE: audit result
    ACT:     render_json then parse
    ASSERT:  top-level keys sorted and metadata camel-cased
    """
    result = build_audit_result(_contract(), [_finding()], "schema.sql", None)

    payload = json.loads(render_json(result))

    assert list(payload) == ["contract", "findings", "metadata"]
    assert payload["metadata"]["findingCount"] == 1


def test_render_json_keeps_null_timestamp() -> None:
    """
    ARRANGE: audit result without a timestamp
    ACT:     render_json then parse
    ASSERT:  timestamp key present with null
    """
    result = build_audit_result(_contract(), [], "schema.sql", None)

    payload = json.loads(render_json(result))

    assert payload["metadata"]["timestamp"] is None


def test_render_text_lists_contract_and_findings() -> None:
    """
    ARRANGE: audit result with an FK finding
    ACT:     render_text
    ASSERT:  contract FK line and finding header present
    """
    result = build_audit_result(_contract(), [_finding()], "schema.sql", None)

    actual = render_text(result)

    assert "  FK: (authorId) -> User(id) [onDelete: NoAction, onUpdate: NoAction]" in (
        actual
    )
    assert "[INFO] FK_MISSING_INDEX (SCHEMA) Post.authorId" in actual


def test_render_text_reports_clean_schema() -> None:
    """
    ARRANGE: audit result without findings
    ACT:     render_text
    ASSERT:  explicit no-findings line
    """
    result = build_audit_result(_contract(), [], "schema.sql", None)

    actual = render_text(result)

    assert actual.endswith("No normalisation findings.")


def test_render_text_omits_missing_timestamp() -> None:
    """
    ARRANGE: audit result without a timestamp
    ACT:     render_text
    ASSERT:  no Timestamp line
    """
    result = build_audit_result(_contract(), [], "schema.sql", None)

    actual = render_text(result)

    assert "Timestamp:" not in actual


def test_save_report_writes_file(tmp_path: Path) -> None:
    """
    ARRANGE: rendered content and nested destination
    ACT:     save_report
    ASSERT:  file contains content plus trailing newline
    """
    destination = tmp_path / "reports" / "audit.json"

    written = save_report("{}", destination)

    assert written.read_text(encoding="utf-8") == "{}\n"

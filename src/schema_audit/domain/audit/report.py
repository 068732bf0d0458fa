# audit/report.py

import json
import logging
from collections.abc import Sequence
from pathlib import Path

from schema_audit.schemas import (
    AuditMetadata,
    AuditResult,
    ConstraintContract,
    FindingOutput,
    ModelContract,
)

from .formatters import format_field_tuple, format_foreign_key, format_location
from .models import Finding

logger = logging.getLogger(__name__)

_TEXT_TITLE = "=== Schema Normalisation Audit ==="


def build_audit_result(
    contract: ConstraintContract,
    findings: Sequence[Finding],
    schema_path: str,
    timestamp: str | None,
) -> AuditResult:
    """
    Convert internal findings into a Pydantic AuditResult.

    Args:
        contract: Constraint contract the findings were derived from.
        findings: Aggregated, ordered findings.
        schema_path: Path of the audited schema, for provenance.
        timestamp: ISO-8601 timestamp of the run, or None for reproducible output.

    Returns:
        AuditResult: Machine-readable audit envelope.
    """
    outputs = tuple(_convert_finding(finding) for finding in findings)

    return AuditResult(
        contract=contract,
        findings=outputs,
        metadata=AuditMetadata(
            schema_path=schema_path,
            timestamp=timestamp,
            model_count=len(contract.models),
            finding_count=len(outputs),
        ),
    )


def render_json(result: AuditResult, pretty: bool = False) -> str:
    """
    Serialise an audit result as JSON with alphabetically sorted keys.

    Identical results always produce identical text, whatever order the
    underlying objects were built in.

    Args:
        result: Audit result to serialise.
        pretty: Indent with two spaces instead of emitting compact JSON.

    Returns:
        str: JSON document.
    """
    payload = result.model_dump(mode="json", by_alias=True)
    if pretty:
        return json.dumps(payload, indent=2, sort_keys=True, ensure_ascii=False)
    return json.dumps(
        payload,
        sort_keys=True,
        separators=(",", ":"),
        ensure_ascii=False,
    )


def render_text(result: AuditResult) -> str:
    """
    Render a human-readable audit report.

    Returns:
        str: Report with a header, the contract summary and the findings.
    """
    metadata = result.metadata
    lines = [_TEXT_TITLE, f"Schema:    {metadata.schema_path}"]
    if metadata.timestamp is not None:
        lines.append(f"Timestamp: {metadata.timestamp}")
    lines += [
        f"Models:    {metadata.model_count}",
        f"Findings:  {metadata.finding_count}",
        "",
        "--- Constraint Contract ---",
    ]

    for model in result.contract.models:
        lines += _describe_model(model)

    lines += ["", "--- Findings ---"]
    if not result.findings:
        lines.append("No normalisation findings.")
    for finding in result.findings:
        lines += _describe_finding(finding)

    return "\n".join(lines)


def save_report(content: str, destination: Path | str) -> Path:
    """
    Write a rendered report to disk.

    Args:
        content: Rendered report text.
        destination: File to write; parent directories are created.

    Returns:
        Path: Path to the written file.
    """
    dest = Path(destination)
    dest.parent.mkdir(parents=True, exist_ok=True)
    dest.write_text(content + "\n", encoding="utf-8")

    logger.info("Audit report saved to %s", dest)
    return dest


def _convert_finding(finding: Finding) -> FindingOutput:
    """
    Convert an internal Finding dataclass to a Pydantic FindingOutput.

    Returns:
        FindingOutput: Pydantic-serialisable finding.
    """
    return FindingOutput(
        rule=finding.rule.value,
        severity=finding.severity.value,
        normal_form=finding.normal_form.value,
        model=finding.model,
        field=finding.field,
        message=finding.message,
        fix=finding.fix,
    )


def _describe_model(model: ModelContract) -> list[str]:
    lines = [f"Model: {model.name}"]
    if model.primary_key is not None:
        lines.append(f"  PK: {format_field_tuple(model.primary_key.fields)}")
    lines += [
        f"  Unique: {format_field_tuple(constraint.fields)}"
        for constraint in model.unique_constraints
    ]
    lines += [f"  Index: {format_field_tuple(index.fields)}" for index in model.indexes]
    lines += [f"  FK: {format_foreign_key(fk)}" for fk in model.foreign_keys]
    return lines


def _describe_finding(finding: FindingOutput) -> list[str]:
    lines = [
        f"[{finding.severity.upper()}] {finding.rule} ({finding.normal_form}) "
        f"{format_location(finding.model, finding.field)}",
        f"  {finding.message}",
    ]
    if finding.fix is not None:
        lines.append(f"  Fix: {finding.fix}")
    return lines

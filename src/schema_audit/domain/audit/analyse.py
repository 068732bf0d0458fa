# audit/analyse.py

import logging
from collections.abc import Iterable
from datetime import UTC, datetime
from pathlib import Path

from schema_audit.adapters import load_contract
from schema_audit.schemas import AuditResult, ConstraintContract, InvariantsFile

from .checks import (
    check_first_normal_form,
    check_schema_quality,
    check_second_normal_form,
    check_third_normal_form,
)
from .dependencies import infer_functional_dependencies
from .invariants import (
    generate_invariants_file,
    load_invariants_file,
    validate_invariants_against_contract,
)
from .models import AuditSettings, Finding, NormalForm, default_settings
from .report import build_audit_result

logger = logging.getLogger(__name__)

_NORMAL_FORM_RANK = {form: rank for rank, form in enumerate(NormalForm)}


def audit(
    schema_path: Path | str,
    invariants_path: Path | str | None = None,
    *,
    no_timestamp: bool = False,
    settings: AuditSettings | None = None,
) -> AuditResult:
    """
    Run the complete normalisation audit on a schema file.

    Loads the schema through the parser matching its file type, merges an
    optional invariants file, executes every rule group and builds the result.

    Args:
        schema_path: SQL DDL (.sql/.ddl) or Prisma (.prisma) schema file.
        invariants_path: Optional invariants JSON file.
        no_timestamp: Leave the timestamp out for byte-reproducible output.
        settings: Optional audit settings (defaults to standard settings).

    Returns:
        AuditResult: The completed audit.

    Raises:
        SchemaParseError: If the schema cannot be read or parsed.
        InvariantsParseError: If the invariants file is malformed.
    """
    contract = load_contract(schema_path)
    invariants = (
        load_invariants_file(invariants_path) if invariants_path is not None else None
    )
    timestamp = None if no_timestamp else datetime.now(UTC).isoformat()

    result = audit_contract(
        contract,
        invariants,
        schema_path=str(schema_path),
        timestamp=timestamp,
        settings=settings,
    )

    logger.info(
        "Schema audit complete: %d findings across %d models",
        result.metadata.finding_count,
        result.metadata.model_count,
    )
    return result


def audit_contract(
    contract: ConstraintContract,
    invariants: InvariantsFile | None = None,
    *,
    schema_path: str = "",
    timestamp: str | None = None,
    settings: AuditSettings | None = None,
) -> AuditResult:
    """
    Audit an in-memory constraint contract.

    Pure: the same contract, invariants and timestamp always yield the same
    result.

    Args:
        contract: Constraint contract to audit.
        invariants: Optional user-declared invariants.
        schema_path: Schema path recorded in the metadata.
        timestamp: Timestamp recorded in the metadata.
        settings: Optional audit settings.

    Returns:
        AuditResult: Contract, ordered findings and metadata.
    """
    findings = run_checks(contract, invariants, settings)
    return build_audit_result(contract, findings, schema_path, timestamp)


def run_checks(
    contract: ConstraintContract,
    invariants: InvariantsFile | None = None,
    settings: AuditSettings | None = None,
) -> tuple[Finding, ...]:
    """
    Execute every rule group and aggregate their findings.

    Args:
        contract: Constraint contract to audit.
        invariants: Optional user-declared invariants.
        settings: Optional audit settings.

    Returns:
        tuple[Finding, ...]: Deterministically ordered findings.
    """
    active_settings = settings or default_settings()
    fds = infer_functional_dependencies(contract, invariants)
    invariant_findings = (
        validate_invariants_against_contract(invariants, contract)
        if invariants is not None
        else ()
    )

    groups = {
        "1NF": check_first_normal_form(contract, active_settings),
        "2NF": check_second_normal_form(contract, fds, active_settings),
        "3NF/BCNF": check_third_normal_form(contract, fds, active_settings),
        "schema quality": check_schema_quality(contract, active_settings),
        "invariants": invariant_findings,
    }
    for name, findings in groups.items():
        logger.debug("Rule group %s produced %d findings", name, len(findings))

    return aggregate_findings(*groups.values())


def aggregate_findings(*groups: Iterable[Finding]) -> tuple[Finding, ...]:
    """
    Merge rule group outputs into one deterministically ordered sequence.

    Findings are ordered by normal form (1NF, 2NF, 3NF, BCNF, SCHEMA), then
    model, rule, field and message, so the result never depends on the order
    the groups ran in.

    Returns:
        tuple[Finding, ...]: Sorted findings.
    """
    merged = [finding for group in groups for finding in group]
    return tuple(sorted(merged, key=_finding_sort_key))


def generate_invariants(schema_path: Path | str) -> InvariantsFile:
    """
    Generate an invariants file seeded from a schema's keys.

    Args:
        schema_path: SQL DDL or Prisma schema file.

    Returns:
        InvariantsFile: pk and unique dependencies with generated notes.
    """
    contract = load_contract(schema_path)
    fds = infer_functional_dependencies(contract)
    return generate_invariants_file(contract, fds)


def _finding_sort_key(finding: Finding) -> tuple[int, str, str, str, str]:
    return (
        _NORMAL_FORM_RANK[finding.normal_form],
        finding.model,
        finding.rule.value,
        finding.field or "",
        finding.message,
    )

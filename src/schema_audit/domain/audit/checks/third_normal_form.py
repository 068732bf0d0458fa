# checks/third_normal_form.py

from collections.abc import Sequence

from schema_audit.schemas import ConstraintContract

from ..formatters import format_field_list, format_field_tuple
from ..keys import is_candidate_key, prime_fields
from ..models import (
    AuditSettings,
    Finding,
    FunctionalDependency,
    NormalForm,
    RuleCode,
    Severity,
    default_settings,
)
from ._helpers import ModelRule, RuleContext, apply_rules, build_rule_contexts


def check_third_normal_form(
    contract: ConstraintContract,
    fds: Sequence[FunctionalDependency],
    settings: AuditSettings | None = None,
) -> tuple[Finding, ...]:
    """
    Evaluate 3NF and BCNF against the merged FD set.

    Only FDs whose source is listed in `settings.declared_fd_sources` are
    considered (invariant-declared FDs by default): pk and unique FDs have key
    determinants by construction, and fk FDs determine another model's fields.
    Without an invariants file these rules therefore report nothing.

    Args:
        contract: Constraint contract to assess.
        fds: Schema-derived plus invariant-declared dependencies.
        settings: Optional audit settings.

    Returns:
        tuple[Finding, ...]: 3NF and BCNF warnings, one per offending FD.
    """
    contexts = build_rule_contexts(contract, fds, settings or default_settings())
    return apply_rules(contexts, THIRD_NORMAL_FORM_RULES)


def detect_transitive_dependencies(context: RuleContext) -> tuple[Finding, ...]:
    """
    Flag non-key fields that determine other non-key fields.

    Returns:
        tuple[Finding, ...]: One NF3_VIOLATION per offending FD.
    """
    prime = prime_fields(context.candidate_keys)
    findings = []

    for fd in _declared_dependencies(context):
        if any(field in prime for field in fd.determinant):
            continue
        non_prime_dependents = [field for field in fd.dependent if field not in prime]
        if not non_prime_dependents:
            continue

        findings.append(
            Finding(
                rule=RuleCode.NF3_VIOLATION,
                severity=Severity.WARNING,
                normal_form=NormalForm.NF3,
                model=context.model.name,
                field=_single(fd.determinant),
                message=(
                    f'Non-key fields {format_field_tuple(fd.determinant)} on '
                    f'"{context.model.name}" determine non-key fields '
                    f"{format_field_list(non_prime_dependents)}, a transitive "
                    "dependency that violates 3NF."
                ),
                fix=(
                    f"Move {format_field_list(non_prime_dependents)} into a model "
                    f"keyed by {format_field_tuple(fd.determinant)} and reference "
                    f"it from '{context.model.name}'."
                ),
            ),
        )

    return tuple(findings)


def detect_non_key_determinants(context: RuleContext) -> tuple[Finding, ...]:
    """
    Flag FDs whose determinant is not a candidate key of the model.

    Returns:
        tuple[Finding, ...]: One BCNF_VIOLATION per offending FD.
    """
    return tuple(
        Finding(
            rule=RuleCode.BCNF_VIOLATION,
            severity=Severity.WARNING,
            normal_form=NormalForm.BCNF,
            model=context.model.name,
            field=_single(fd.determinant),
            message=(
                f"Determinant {format_field_tuple(fd.determinant)} of "
                f"{format_field_list(fd.dependent)} on "
                f'"{context.model.name}" is not a candidate key, which '
                "violates BCNF."
            ),
            fix=(
                f"Declare {format_field_tuple(fd.determinant)} unique or split "
                f"{format_field_list(fd.dependent)} into a separate model keyed "
                "by it."
            ),
        )
        for fd in _declared_dependencies(context)
        if not is_candidate_key(fd.determinant, context.candidate_keys)
    )


def _declared_dependencies(context: RuleContext) -> list[FunctionalDependency]:
    sources = context.settings.declared_fd_sources
    return [fd for fd in context.dependencies if fd.source in sources]


def _single(fields: tuple[str, ...]) -> str | None:
    return fields[0] if len(fields) == 1 else None


THIRD_NORMAL_FORM_RULES: tuple[ModelRule, ...] = (
    detect_transitive_dependencies,
    detect_non_key_determinants,
)

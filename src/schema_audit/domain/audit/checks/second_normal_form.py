# checks/second_normal_form.py

from collections.abc import Sequence

from schema_audit.schemas import ConstraintContract

from ..formatters import format_field_list, format_fields
from ..models import (
    AuditSettings,
    FdSource,
    Finding,
    FunctionalDependency,
    KeySource,
    NormalForm,
    RuleCode,
    Severity,
    default_settings,
)
from ._helpers import ModelRule, RuleContext, apply_rules, build_rule_contexts


def check_second_normal_form(
    contract: ConstraintContract,
    fds: Sequence[FunctionalDependency],
    settings: AuditSettings | None = None,
) -> tuple[Finding, ...]:
    """
    Look for 2NF problems in models with a composite primary key.

    Without declared invariants the engine cannot tell which attributes depend
    on part of the key, so these rules work from foreign keys and flag suspects.

    Args:
        contract: Constraint contract to assess.
        fds: Functional dependencies inferred for the contract.
        settings: Optional audit settings.

    Returns:
        tuple[Finding, ...]: 2NF warnings.
    """
    contexts = build_rule_contexts(contract, fds, settings or default_settings())
    return apply_rules(contexts, SECOND_NORMAL_FORM_RULES)


def detect_partial_dependencies(context: RuleContext) -> tuple[Finding, ...]:
    """
    Flag foreign keys that cover a proper subset of a composite primary key.

    Non-key attributes may depend on that subset alone. One finding is emitted
    per FK subset rather than per field, since the dependent attributes cannot
    be attributed without invariants.

    Returns:
        tuple[Finding, ...]: One finding per qualifying FK subset.
    """
    pk_fields = _composite_pk_fields(context)
    model = context.model
    if not pk_fields or all(name in pk_fields for name in model.field_names):
        return ()

    subsets = [
        fd.determinant
        for fd in context.dependencies
        if fd.source == FdSource.FK and _is_proper_subset(fd.determinant, pk_fields)
    ]

    return tuple(
        Finding(
            rule=RuleCode.NF2_PARTIAL_DEPENDENCY_SUSPECTED,
            severity=Severity.WARNING,
            normal_form=NormalForm.NF2,
            model=model.name,
            field=None,
            message=(
                f'Composite-key model "{model.name}" has FK fields '
                f"({format_fields(subset)}) that are a proper subset of the "
                "primary key. Non-key attributes may depend on this subset "
                "rather than the full key, which would violate 2NF."
            ),
            fix=(
                f"Extract fields that depend on ({format_fields(subset)}) into "
                "their own model."
            ),
        )
        for subset in subsets
    )


def detect_join_table_attributes(context: RuleContext) -> tuple[Finding, ...]:
    """
    Flag join tables that carry attributes beyond their foreign keys.

    A join table has a composite primary key made entirely of FK fields. Extra
    attributes suggest it is really an entity that deserves its own identity.

    Returns:
        tuple[Finding, ...]: At most one finding for the model.
    """
    pk_fields = _composite_pk_fields(context)
    model = context.model
    fk_fields = {field for fk in model.foreign_keys for field in fk.fields}
    if not pk_fields or not all(field in fk_fields for field in pk_fields):
        return ()

    extra_fields = [
        name
        for name in model.field_names
        if name not in pk_fields and name not in fk_fields
    ]
    if not extra_fields:
        return ()

    return (
        Finding(
            rule=RuleCode.NF2_JOIN_TABLE_DUPLICATED_ATTR_SUSPECTED,
            severity=Severity.WARNING,
            normal_form=NormalForm.NF2,
            model=model.name,
            field=None,
            message=(
                f'Join table "{model.name}" has extra attributes '
                f"{format_field_list(extra_fields)} beyond its composite key. "
                "Consider whether this should be a first-class entity."
            ),
            fix=(
                f"Add a dedicated primary key to '{model.name}' and treat it "
                "as a first-class entity."
            ),
        ),
    )


def _composite_pk_fields(context: RuleContext) -> tuple[str, ...]:
    """
    Return the primary key fields when the key is composite.

    Returns:
        tuple[str, ...]: Composite PK fields, or an empty tuple.
    """
    return next(
        (
            key.fields
            for key in context.candidate_keys
            if key.source == KeySource.PK and len(key.fields) > 1
        ),
        (),
    )


def _is_proper_subset(fields: tuple[str, ...], key_fields: tuple[str, ...]) -> bool:
    chosen = set(fields)
    return bool(chosen) and chosen < set(key_fields)


SECOND_NORMAL_FORM_RULES: tuple[ModelRule, ...] = (
    detect_partial_dependencies,
    detect_join_table_attributes,
)

# checks/schema_quality.py

from schema_audit.schemas import ConstraintContract, ScalarType

from ..formatters import format_field_tuple, format_fields
from ..models import (
    AuditSettings,
    Finding,
    NormalForm,
    RuleCode,
    Severity,
    default_settings,
)
from ._helpers import (
    ModelRule,
    RuleContext,
    apply_rules,
    build_rule_contexts,
    is_leftmost_prefix,
)


def check_schema_quality(
    contract: ConstraintContract,
    settings: AuditSettings | None = None,
) -> tuple[Finding, ...]:
    """
    Run the schema-quality checks that are not tied to a normal form.

    Args:
        contract: Constraint contract to assess.
        settings: Optional audit settings.

    Returns:
        tuple[Finding, ...]: Foreign key index and soft-delete findings.
    """
    contexts = build_rule_contexts(contract, (), settings or default_settings())
    return apply_rules(contexts, SCHEMA_QUALITY_RULES)


def check_fk_indexes(
    contract: ConstraintContract,
    settings: AuditSettings | None = None,
) -> tuple[Finding, ...]:
    """
    Flag foreign keys not covered by an index prefix.

    Returns:
        tuple[Finding, ...]: One FK_MISSING_INDEX finding per uncovered FK.
    """
    contexts = build_rule_contexts(contract, (), settings or default_settings())
    return apply_rules(contexts, (detect_unindexed_foreign_keys,))


def check_soft_delete(
    contract: ConstraintContract,
    settings: AuditSettings | None = None,
) -> tuple[Finding, ...]:
    """
    Check soft-delete conventions: unique scoping and at/by pairing.

    Returns:
        tuple[Finding, ...]: Soft-delete findings.
    """
    contexts = build_rule_contexts(contract, (), settings or default_settings())
    return apply_rules(
        contexts,
        (detect_soft_delete_unscoped_uniques, detect_unpaired_soft_delete_fields),
    )


def detect_unindexed_foreign_keys(context: RuleContext) -> tuple[Finding, ...]:
    """
    Flag foreign keys whose fields are not a leftmost prefix of the primary
    key, a unique constraint or an index on the owning model.

    Returns:
        tuple[Finding, ...]: One finding per uncovered foreign key.
    """
    model = context.model
    covering = [
        *([model.primary_key.fields] if model.primary_key is not None else []),
        *(constraint.fields for constraint in model.unique_constraints),
        *(index.fields for index in model.indexes),
    ]

    return tuple(
        Finding(
            rule=RuleCode.FK_MISSING_INDEX,
            severity=Severity.INFO,
            normal_form=NormalForm.SCHEMA,
            model=model.name,
            field=fk.fields[0] if len(fk.fields) == 1 else None,
            message=(
                f"Foreign key {format_field_tuple(fk.fields)} on "
                f'"{model.name}" referencing "{fk.referenced_model}" is not '
                "covered by any index, PK, or unique constraint prefix. "
                "Queries joining on this FK may be slow."
            ),
            fix=(
                f"Add an index on ({format_fields(fk.fields)}) to "
                f"'{model.name}' for faster joins and cascade operations."
            ),
        )
        for fk in model.foreign_keys
        if not any(is_leftmost_prefix(fk.fields, fields) for fields in covering)
    )


def detect_soft_delete_unscoped_uniques(context: RuleContext) -> tuple[Finding, ...]:
    """
    Flag unique constraints that ignore the model's soft-delete timestamp.

    Uniqueness that is not scoped to active rows lets deleted rows block new
    ones with the same values.

    Returns:
        tuple[Finding, ...]: One finding per unique constraint lacking the field.
    """
    model = context.model
    soft_delete_field = next(
        (
            field
            for field in model.fields
            if field.name in context.settings.soft_delete_fields
            and field.type == ScalarType.DATE_TIME
        ),
        None,
    )
    if soft_delete_field is None:
        return ()

    name = soft_delete_field.name
    return tuple(
        Finding(
            rule=RuleCode.SOFTDELETE_MISSING_IN_UNIQUE,
            severity=Severity.WARNING,
            normal_form=NormalForm.SCHEMA,
            model=model.name,
            field=name,
            message=(
                f"Unique constraint {format_field_tuple(constraint.fields)} on "
                f'"{model.name}" does not include soft-delete field "{name}". '
                "Deleted rows may conflict with active records."
            ),
            fix=(
                "Add the soft-delete field to this unique constraint: "
                f"({format_fields((*constraint.fields, name))})."
            ),
        )
        for constraint in model.unique_constraints
        if name not in constraint.fields
    )


def detect_unpaired_soft_delete_fields(context: RuleContext) -> tuple[Finding, ...]:
    """
    Flag a soft-delete timestamp without its actor field, or the reverse.

    Returns:
        tuple[Finding, ...]: One finding per unpaired field.
    """
    model = context.model
    names = set(model.field_names)
    findings = []

    for at_field, by_field in context.settings.soft_delete_pairs:
        if at_field in names and by_field not in names:
            findings.append(
                Finding(
                    rule=RuleCode.SOFTDELETE_AT_WITHOUT_BY,
                    severity=Severity.INFO,
                    normal_form=NormalForm.SCHEMA,
                    model=model.name,
                    field=at_field,
                    message=(
                        f'"{model.name}" records when rows are soft-deleted '
                        f'("{at_field}") but not who deleted them '
                        f'("{by_field}").'
                    ),
                    fix=f"Add a nullable '{by_field}' field to '{model.name}'.",
                ),
            )
        elif by_field in names and at_field not in names:
            findings.append(
                Finding(
                    rule=RuleCode.SOFTDELETE_BY_WITHOUT_AT,
                    severity=Severity.INFO,
                    normal_form=NormalForm.SCHEMA,
                    model=model.name,
                    field=by_field,
                    message=(
                        f'"{model.name}" records who soft-deleted rows '
                        f'("{by_field}") but not when ("{at_field}").'
                    ),
                    fix=(
                        f"Add a nullable DateTime '{at_field}' field to "
                        f"'{model.name}'."
                    ),
                ),
            )

    return tuple(findings)


SCHEMA_QUALITY_RULES: tuple[ModelRule, ...] = (
    detect_unindexed_foreign_keys,
    detect_soft_delete_unscoped_uniques,
    detect_unpaired_soft_delete_fields,
)

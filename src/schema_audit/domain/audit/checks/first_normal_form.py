# checks/first_normal_form.py

import re
from collections import defaultdict

from schema_audit.schemas import ConstraintContract, ScalarType

from ..formatters import format_field_list
from ..models import (
    AuditSettings,
    Finding,
    NormalForm,
    RuleCode,
    Severity,
    default_settings,
)
from ._helpers import ModelRule, RuleContext, apply_rules, build_rule_contexts

_NUMBERED_NAME = re.compile(r"^(?P<base>.*?[A-Za-z])_?(?P<number>\d+)$")


def check_first_normal_form(
    contract: ConstraintContract,
    settings: AuditSettings | None = None,
) -> tuple[Finding, ...]:
    """
    Run the structural 1NF heuristics over every model.

    Args:
        contract: Constraint contract to assess.
        settings: Optional naming vocabularies (defaults to standard settings).

    Returns:
        tuple[Finding, ...]: Informational 1NF findings.
    """
    contexts = build_rule_contexts(contract, (), settings or default_settings())
    return apply_rules(contexts, FIRST_NORMAL_FORM_RULES)


def detect_json_relations(context: RuleContext) -> tuple[Finding, ...]:
    """
    Flag Json fields, which often hide an embedded one-to-many relation.

    Returns:
        tuple[Finding, ...]: One finding per Json field.
    """
    model = context.model
    return tuple(
        Finding(
            rule=RuleCode.NF1_JSON_RELATION_SUSPECTED,
            severity=Severity.INFO,
            normal_form=NormalForm.NF1,
            model=model.name,
            field=field.name,
            message=(
                f'Json field "{field.name}" on "{model.name}" may embed a '
                "related entity or a list of values."
            ),
            fix=(
                f"If '{field.name}' holds structured or repeated data, model it "
                "as a separate table with a relation."
            ),
        )
        for field in model.fields
        if field.type == ScalarType.JSON
    )


def detect_list_in_string(context: RuleContext) -> tuple[Finding, ...]:
    """
    Flag String fields whose names suggest a delimited list of values.

    Returns:
        tuple[Finding, ...]: One finding per suspicious String field.
    """
    model = context.model
    return tuple(
        Finding(
            rule=RuleCode.NF1_LIST_IN_STRING_SUSPECTED,
            severity=Severity.INFO,
            normal_form=NormalForm.NF1,
            model=model.name,
            field=field.name,
            message=(
                f'String field "{field.name}" on "{model.name}" may contain '
                "a list of values."
            ),
            fix=(
                f"Create a separate table for the values in '{field.name}' "
                "and use a relation."
            ),
        )
        for field in model.fields
        if field.type == ScalarType.STRING
        and not field.is_list
        and _looks_like_list_name(field.name, context.settings)
    )


def detect_repeating_groups(context: RuleContext) -> tuple[Finding, ...]:
    """
    Flag numbered field families such as phone1, phone2, phone3.

    Returns:
        tuple[Finding, ...]: One finding per base name with enough members.
    """
    model = context.model
    groups: dict[str, list[str]] = defaultdict(list)
    for name in model.field_names:
        match = _NUMBERED_NAME.match(name)
        if match:
            groups[match.group("base")].append(name)

    return tuple(
        Finding(
            rule=RuleCode.NF1_REPEATING_GROUP_SUSPECTED,
            severity=Severity.INFO,
            normal_form=NormalForm.NF1,
            model=model.name,
            field=None,
            message=(
                f'Fields {format_field_list(members)} on "{model.name}" look '
                f'like a repeating group of "{base}".'
            ),
            fix=(
                f"Move the '{base}' values into a child table keyed by "
                f"'{model.name}' with one row per value."
            ),
        )
        for base, members in sorted(groups.items())
        if len(members) >= context.settings.repeating_group_min_size
    )


def _looks_like_list_name(name: str, settings: AuditSettings) -> bool:
    """
    Whether a field name ends in a list suffix or a plural collection noun.

    Returns:
        bool: True if the name suggests a list of values.
    """
    if any(
        name.endswith(suffix) and len(name) > len(suffix)
        for suffix in settings.list_suffixes
    ):
        return True

    lowered = name.lower()
    return any(
        lowered == noun or _ends_with_word(name, noun)
        for noun in settings.collection_nouns
    )


def _ends_with_word(name: str, noun: str) -> bool:
    """
    Whether `noun` is the trailing word of a camelCase or snake_case name.

    Returns:
        bool: True for "postTags"/"post_tags" with noun "tags", False for "stags".
    """
    if name.lower().endswith(f"_{noun}"):
        return True
    capitalised = noun[:1].upper() + noun[1:]
    return name.endswith(capitalised) and len(name) > len(noun)


FIRST_NORMAL_FORM_RULES: tuple[ModelRule, ...] = (
    detect_json_relations,
    detect_list_in_string,
    detect_repeating_groups,
)

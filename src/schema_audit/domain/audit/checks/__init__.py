# audit/checks/__init__.py

from ._helpers import ModelRule, RuleContext, apply_rules, build_rule_contexts
from .first_normal_form import (
    FIRST_NORMAL_FORM_RULES,
    check_first_normal_form,
    detect_json_relations,
    detect_list_in_string,
    detect_repeating_groups,
)
from .schema_quality import (
    SCHEMA_QUALITY_RULES,
    check_fk_indexes,
    check_schema_quality,
    check_soft_delete,
    detect_soft_delete_unscoped_uniques,
    detect_unindexed_foreign_keys,
    detect_unpaired_soft_delete_fields,
)
from .second_normal_form import (
    SECOND_NORMAL_FORM_RULES,
    check_second_normal_form,
    detect_join_table_attributes,
    detect_partial_dependencies,
)
from .third_normal_form import (
    THIRD_NORMAL_FORM_RULES,
    check_third_normal_form,
    detect_non_key_determinants,
    detect_transitive_dependencies,
)

__all__ = [
    "FIRST_NORMAL_FORM_RULES",
    "SCHEMA_QUALITY_RULES",
    "SECOND_NORMAL_FORM_RULES",
    "THIRD_NORMAL_FORM_RULES",
    "ModelRule",
    "RuleContext",
    "apply_rules",
    "build_rule_contexts",
    "check_first_normal_form",
    "check_fk_indexes",
    "check_schema_quality",
    "check_second_normal_form",
    "check_soft_delete",
    "check_third_normal_form",
    "detect_join_table_attributes",
    "detect_json_relations",
    "detect_list_in_string",
    "detect_non_key_determinants",
    "detect_partial_dependencies",
    "detect_repeating_groups",
    "detect_soft_delete_unscoped_uniques",
    "detect_transitive_dependencies",
    "detect_unindexed_foreign_keys",
    "detect_unpaired_soft_delete_fields",
]

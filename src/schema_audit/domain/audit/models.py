# audit/models.py

from dataclasses import dataclass
from enum import StrEnum


class RuleCode(StrEnum):
    """
    Closed set of rules the audit can report.
    """

    NF1_JSON_RELATION_SUSPECTED = "NF1_JSON_RELATION_SUSPECTED"
    NF1_LIST_IN_STRING_SUSPECTED = "NF1_LIST_IN_STRING_SUSPECTED"
    NF1_REPEATING_GROUP_SUSPECTED = "NF1_REPEATING_GROUP_SUSPECTED"
    NF2_PARTIAL_DEPENDENCY_SUSPECTED = "NF2_PARTIAL_DEPENDENCY_SUSPECTED"
    NF2_JOIN_TABLE_DUPLICATED_ATTR_SUSPECTED = (
        "NF2_JOIN_TABLE_DUPLICATED_ATTR_SUSPECTED"
    )
    NF3_VIOLATION = "NF3_VIOLATION"
    BCNF_VIOLATION = "BCNF_VIOLATION"
    INVARIANT_UNKNOWN_MODEL = "INVARIANT_UNKNOWN_MODEL"
    INVARIANT_UNKNOWN_FIELD = "INVARIANT_UNKNOWN_FIELD"
    INVARIANT_DETERMINANT_NOT_ENFORCED = "INVARIANT_DETERMINANT_NOT_ENFORCED"
    FK_MISSING_INDEX = "FK_MISSING_INDEX"
    SOFTDELETE_MISSING_IN_UNIQUE = "SOFTDELETE_MISSING_IN_UNIQUE"
    SOFTDELETE_AT_WITHOUT_BY = "SOFTDELETE_AT_WITHOUT_BY"
    SOFTDELETE_BY_WITHOUT_AT = "SOFTDELETE_BY_WITHOUT_AT"


class Severity(StrEnum):
    INFO = "info"
    WARNING = "warning"


class NormalForm(StrEnum):
    """
    Normal form a finding relates to. SCHEMA covers quality checks that are
    not tied to a normal form.
    """

    NF1 = "1NF"
    NF2 = "2NF"
    NF3 = "3NF"
    BCNF = "BCNF"
    SCHEMA = "SCHEMA"


class FdSource(StrEnum):
    PK = "pk"
    UNIQUE = "unique"
    FK = "fk"
    INVARIANT = "invariant"


class KeySource(StrEnum):
    PK = "pk"
    UNIQUE = "unique"


@dataclass(frozen=True)
class AuditSettings:
    """
    Configuration values controlling the heuristic rules.
    """

    # Soft-delete timestamp fields checked against unique constraints
    soft_delete_fields: tuple[str, ...] = ("deleted_at", "deletedAt")
    # (timestamp, actor) pairs that should appear together
    soft_delete_pairs: tuple[tuple[str, str], ...] = (
        ("deleted_at", "deleted_by"),
        ("deletedAt", "deletedBy"),
    )
    # Name endings suggesting a String column holds a delimited list
    list_suffixes: tuple[str, ...] = (
        "Ids",
        "IDs",
        "_ids",
        "List",
        "_list",
        "Array",
        "_array",
        "Csv",
        "_csv",
    )
    # Plural collection nouns suggesting a String column holds several values
    collection_nouns: tuple[str, ...] = (
        "tags",
        "labels",
        "roles",
        "categories",
        "keywords",
        "emails",
        "phones",
        "permissions",
        "items",
        "urls",
    )
    # Members needed before numbered fields count as a repeating group
    repeating_group_min_size: int = 2
    # FD sources evaluated by the 3NF and BCNF rules
    declared_fd_sources: frozenset[FdSource] = frozenset({FdSource.INVARIANT})


def default_settings() -> AuditSettings:
    """
    Return default audit settings.

    Returns:
        AuditSettings: Default configuration values.
    """
    return AuditSettings()


@dataclass(frozen=True)
class FunctionalDependency:
    """
    Determinant fields functionally determine the dependent fields.

    Dependents take the form `Model.field` when the dependency crosses a
    foreign key into another model.
    """

    model: str
    determinant: tuple[str, ...]
    dependent: tuple[str, ...]
    source: FdSource


@dataclass(frozen=True)
class CandidateKey:
    model: str
    fields: tuple[str, ...]
    source: KeySource


@dataclass(frozen=True)
class Finding:
    """
    A single normalisation or schema-quality issue.
    """

    rule: RuleCode
    severity: Severity
    normal_form: NormalForm
    model: str
    field: str | None
    message: str
    fix: str | None = None

# schema_audit/__init__.py

from .adapters import load_contract, parse_prisma_schema, parse_sql_schema
from .domain import audit, audit_contract, generate_invariants
from .domain.audit import (
    AuditSettings,
    Finding,
    NormalForm,
    RuleCode,
    Severity,
    default_settings,
    render_json,
    render_text,
)
from .errors import InvariantsParseError, SchemaParseError
from .schemas import AuditResult, ConstraintContract, InvariantsFile

__all__ = [
    "audit",
    "audit_contract",
    "generate_invariants",
    "load_contract",
    "parse_prisma_schema",
    "parse_sql_schema",
    "render_json",
    "render_text",
    "AuditResult",
    "AuditSettings",
    "ConstraintContract",
    "Finding",
    "InvariantsFile",
    "InvariantsParseError",
    "NormalForm",
    "RuleCode",
    "SchemaParseError",
    "Severity",
    "default_settings",
]

# domain/audit/__init__.py

from .analyse import (
    aggregate_findings,
    audit,
    audit_contract,
    generate_invariants,
    run_checks,
)
from .dependencies import infer_functional_dependencies, invariants_to_fds
from .invariants import (
    generate_invariants_file,
    load_invariants_file,
    parse_invariants,
    render_invariants,
    validate_invariants_against_contract,
)
from .keys import extract_candidate_keys
from .models import (
    AuditSettings,
    CandidateKey,
    FdSource,
    Finding,
    FunctionalDependency,
    KeySource,
    NormalForm,
    RuleCode,
    Severity,
    default_settings,
)
from .report import build_audit_result, render_json, render_text, save_report

__all__ = [
    # pipeline
    "aggregate_findings",
    "audit",
    "audit_contract",
    "generate_invariants",
    "run_checks",
    # dependencies and keys
    "extract_candidate_keys",
    "infer_functional_dependencies",
    "invariants_to_fds",
    # invariants
    "generate_invariants_file",
    "load_invariants_file",
    "parse_invariants",
    "render_invariants",
    "validate_invariants_against_contract",
    # models
    "AuditSettings",
    "CandidateKey",
    "FdSource",
    "Finding",
    "FunctionalDependency",
    "KeySource",
    "NormalForm",
    "RuleCode",
    "Severity",
    "default_settings",
    # report
    "build_audit_result",
    "render_json",
    "render_text",
    "save_report",
]

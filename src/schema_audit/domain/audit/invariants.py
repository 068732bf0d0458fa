# audit/invariants.py

import json
import logging
from collections.abc import Sequence
from pathlib import Path

from pydantic import ValidationError

from schema_audit.errors import InvariantsParseError
from schema_audit.schemas import (
    ConstraintContract,
    InvariantFd,
    InvariantsFile,
    ModelContract,
    ModelInvariants,
)

from .formatters import format_field_tuple
from .keys import model_candidate_keys
from .models import (
    FdSource,
    Finding,
    FunctionalDependency,
    NormalForm,
    RuleCode,
    Severity,
)

logger = logging.getLogger(__name__)

_GENERATED_NOTES = {
    FdSource.PK: "Derived from primary key {fields}.",
    FdSource.UNIQUE: "Derived from unique constraint {fields}.",
}


def load_invariants_file(path: Path | str) -> InvariantsFile:
    """
    Read and validate an invariants JSON file.

    Args:
        path: Location of the invariants file.

    Returns:
        InvariantsFile: The validated invariants.

    Raises:
        InvariantsParseError: If the file is unreadable, is not valid JSON, or
            fails the invariants structural schema.
    """
    try:
        content = Path(path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as error:
        raise InvariantsParseError(
            f"Cannot read invariants file {path}: {error}",
        ) from error

    invariants = parse_invariants(content)
    logger.info(
        "Loaded invariants for %d models from %s",
        len(invariants.root),
        path,
    )
    return invariants


def parse_invariants(content: str) -> InvariantsFile:
    """
    Validate invariants JSON text.

    Returns:
        InvariantsFile: The validated invariants.

    Raises:
        InvariantsParseError: If the text is malformed or structurally invalid.
    """
    try:
        raw = json.loads(content)
    except json.JSONDecodeError as error:
        raise InvariantsParseError(
            f"Invariants file is not valid JSON: {error}",
        ) from error

    try:
        return InvariantsFile.model_validate(raw)
    except ValidationError as error:
        raise InvariantsParseError(
            f"Invariants file failed validation: {error}",
        ) from error


def validate_invariants_against_contract(
    invariants: InvariantsFile,
    contract: ConstraintContract,
) -> tuple[Finding, ...]:
    """
    Cross-check declared invariants against the constraint contract.

    Stale or mistyped references are reported as findings so users get
    immediate feedback, never as errors.

    Args:
        invariants: Parsed invariants file.
        contract: Constraint contract the invariants describe.

    Returns:
        tuple[Finding, ...]: Unknown model, unknown field and unenforced
            determinant findings, in model order.
    """
    findings: list[Finding] = []

    for model_name, _ in invariants.items():
        model = contract.get_model(model_name)
        if model is None:
            findings.append(_unknown_model_finding(model_name))
            continue

        for declared in invariants.declared_fds(model_name):
            findings.extend(_unknown_field_findings(model, declared))
            findings.extend(_unenforced_determinant_findings(model, declared))

    return tuple(findings)


def generate_invariants_file(
    contract: ConstraintContract,
    fds: Sequence[FunctionalDependency],
) -> InvariantsFile:
    """
    Seed an invariants file from the schema's own key dependencies.

    Every pk and unique FD becomes a declared FD with an auto-generated note,
    giving users a starting point to add the dependencies the schema cannot
    express. Models without key dependencies are omitted.

    Args:
        contract: Constraint contract the FDs were inferred from.
        fds: Functional dependencies inferred for the contract.

    Returns:
        InvariantsFile: Generated invariants keyed by model name.
    """
    entries: dict[str, ModelInvariants] = {}

    for model in contract.models:
        declared = tuple(
            InvariantFd(
                determinant=fd.determinant,
                dependent=fd.dependent,
                note=_GENERATED_NOTES[fd.source].format(
                    fields=format_field_tuple(fd.determinant),
                ),
            )
            for fd in fds
            if fd.model == model.name and fd.source in _GENERATED_NOTES
        )
        if declared:
            entries[model.name] = ModelInvariants(functional_dependencies=declared)

    return InvariantsFile(entries)


def render_invariants(invariants: InvariantsFile) -> str:
    """
    Serialise an invariants file as stable, pretty-printed JSON.

    Returns:
        str: JSON text with sorted keys and a trailing newline.
    """
    payload = invariants.model_dump(mode="json", by_alias=True, exclude_none=True)
    return json.dumps(payload, indent=2, sort_keys=True, ensure_ascii=False) + "\n"


def _unknown_model_finding(model_name: str) -> Finding:
    return Finding(
        rule=RuleCode.INVARIANT_UNKNOWN_MODEL,
        severity=Severity.WARNING,
        normal_form=NormalForm.NF3,
        model=model_name,
        field=None,
        message=(
            f'Invariants reference model "{model_name}" which does not exist '
            "in the schema."
        ),
        fix=f"Update the invariants file to remove or rename model '{model_name}'.",
    )


def _unknown_field_findings(
    model: ModelContract,
    declared: InvariantFd,
) -> list[Finding]:
    """
    Report each referenced field missing from the model exactly once, even
    when it appears as both determinant and dependent.

    Returns:
        list[Finding]: Unknown field findings in first-reference order.
    """
    referenced = dict.fromkeys((*declared.determinant, *declared.dependent))
    known = set(model.field_names)

    return [
        Finding(
            rule=RuleCode.INVARIANT_UNKNOWN_FIELD,
            severity=Severity.WARNING,
            normal_form=NormalForm.NF3,
            model=model.name,
            field=field,
            message=(
                f'Invariants reference field "{field}" which does not exist in '
                f'model "{model.name}".'
            ),
            fix=(
                f"Update the invariants file to remove or rename field '{field}' "
                f"in model '{model.name}'."
            ),
        )
        for field in referenced
        if field not in known
    ]


def _unenforced_determinant_findings(
    model: ModelContract,
    declared: InvariantFd,
) -> list[Finding]:
    """
    Report a determinant that no primary key or unique constraint backs.

    A determinant containing a declared key is unique by construction; any
    other determinant can repeat, so the database cannot enforce the FD.

    Returns:
        list[Finding]: Zero or one finding.
    """
    known = set(model.field_names)
    determinant = set(declared.determinant)
    if not determinant <= known:
        return []

    keys = model_candidate_keys(model)
    if any(set(key.fields) <= determinant for key in keys):
        return []

    fields = format_field_tuple(declared.determinant)
    return [
        Finding(
            rule=RuleCode.INVARIANT_DETERMINANT_NOT_ENFORCED,
            severity=Severity.WARNING,
            normal_form=NormalForm.NF3,
            model=model.name,
            field=declared.determinant[0] if len(declared.determinant) == 1 else None,
            message=(
                f'Declared determinant {fields} on "{model.name}" is not backed '
                "by a primary key or unique constraint, so the database cannot "
                "guarantee it is unique."
            ),
            fix=(
                f"Add a unique constraint on {fields} to '{model.name}', or move "
                "the dependent fields into a model keyed by it."
            ),
        ),
    ]

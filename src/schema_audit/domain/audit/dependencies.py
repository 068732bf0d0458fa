# audit/dependencies.py

import logging

from schema_audit.schemas import ConstraintContract, InvariantsFile, ModelContract

from .models import FdSource, FunctionalDependency

logger = logging.getLogger(__name__)


def infer_functional_dependencies(
    contract: ConstraintContract,
    invariants: InvariantsFile | None = None,
) -> tuple[FunctionalDependency, ...]:
    """
    Derive the functional dependencies directly stated by a schema.

    Primary keys and unique constraints determine every other field, foreign
    keys determine the referenced row, and an optional invariants file adds
    user-declared dependencies. Transitive or derived FDs are never computed.

    Args:
        contract: Constraint contract to derive dependencies from.
        invariants: Optional invariants file whose FDs are appended verbatim.

    Returns:
        tuple[FunctionalDependency, ...]: Schema-derived FDs in model order,
            followed by invariant-declared FDs.
    """
    schema_fds = tuple(
        fd for model in contract.models for fd in _model_dependencies(model)
    )
    declared_fds = invariants_to_fds(invariants) if invariants is not None else ()

    logger.debug(
        "Inferred %d schema FDs and %d declared FDs across %d models",
        len(schema_fds),
        len(declared_fds),
        len(contract.models),
    )
    return schema_fds + declared_fds


def invariants_to_fds(invariants: InvariantsFile) -> tuple[FunctionalDependency, ...]:
    """
    Convert declared invariants into functional dependencies.

    Determinant and dependent are taken verbatim; validating them against the
    contract is left to the invariant validator.

    Args:
        invariants: Parsed invariants file.

    Returns:
        tuple[FunctionalDependency, ...]: One FD per declared entry.
    """
    return tuple(
        FunctionalDependency(
            model=model_name,
            determinant=declared.determinant,
            dependent=declared.dependent,
            source=FdSource.INVARIANT,
        )
        for model_name, _ in invariants.items()
        for declared in invariants.declared_fds(model_name)
    )


def _model_dependencies(model: ModelContract) -> tuple[FunctionalDependency, ...]:
    """
    Derive pk, unique and fk dependencies for a single model.

    Returns:
        tuple[FunctionalDependency, ...]: Non-empty dependencies of the model.
    """
    candidates = [
        *_key_dependencies(model),
        *(
            FunctionalDependency(
                model=model.name,
                determinant=fk.fields,
                dependent=tuple(
                    f"{fk.referenced_model}.{field}" for field in fk.referenced_fields
                ),
                source=FdSource.FK,
            )
            for fk in model.foreign_keys
        ),
    ]
    return tuple(fd for fd in candidates if fd.determinant and fd.dependent)


def _key_dependencies(model: ModelContract) -> list[FunctionalDependency]:
    keyed: list[tuple[tuple[str, ...], FdSource]] = []
    if model.primary_key is not None:
        keyed.append((model.primary_key.fields, FdSource.PK))
    keyed.extend(
        (constraint.fields, FdSource.UNIQUE) for constraint in model.unique_constraints
    )

    return [
        FunctionalDependency(
            model=model.name,
            determinant=fields,
            dependent=_fields_outside(model, fields),
            source=source,
        )
        for fields, source in keyed
    ]


def _fields_outside(model: ModelContract, fields: tuple[str, ...]) -> tuple[str, ...]:
    return tuple(name for name in model.field_names if name not in fields)

# audit/keys.py

from schema_audit.schemas import ConstraintContract, ModelContract

from .models import CandidateKey, KeySource


def extract_candidate_keys(
    contract: ConstraintContract,
    model_name: str,
) -> tuple[CandidateKey, ...]:
    """
    Return every declared candidate key of a model.

    One key for the primary key (if any) followed by one per unique
    constraint. Keys that are not explicitly declared are never inferred.

    Args:
        contract: Constraint contract holding the model.
        model_name: Name of the model to inspect.

    Returns:
        tuple[CandidateKey, ...]: Declared candidate keys, empty if the model
            is unknown.
    """
    model = contract.get_model(model_name)
    if model is None:
        return ()
    return model_candidate_keys(model)


def model_candidate_keys(model: ModelContract) -> tuple[CandidateKey, ...]:
    """
    Return the declared candidate keys of a model contract.

    Returns:
        tuple[CandidateKey, ...]: Primary key first, then unique constraints.
    """
    pk_keys = (
        (CandidateKey(model.name, model.primary_key.fields, KeySource.PK),)
        if model.primary_key is not None
        else ()
    )
    unique_keys = tuple(
        CandidateKey(model.name, constraint.fields, KeySource.UNIQUE)
        for constraint in model.unique_constraints
        if constraint.fields
    )
    return pk_keys + unique_keys


def prime_fields(keys: tuple[CandidateKey, ...]) -> frozenset[str]:
    """
    Fields that belong to at least one candidate key.

    Returns:
        frozenset[str]: Prime attribute names.
    """
    return frozenset(field for key in keys for field in key.fields)


def is_candidate_key(fields: tuple[str, ...], keys: tuple[CandidateKey, ...]) -> bool:
    """
    Whether a field set equals, as a set, the field set of some candidate key.

    Returns:
        bool: True if the fields match a declared key.
    """
    return any(set(fields) == set(key.fields) for key in keys)

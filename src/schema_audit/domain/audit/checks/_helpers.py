# checks/_helpers.py

from collections.abc import Callable, Sequence
from dataclasses import dataclass

from schema_audit.schemas import ConstraintContract, ModelContract

from ..keys import model_candidate_keys
from ..models import AuditSettings, CandidateKey, Finding, FunctionalDependency


@dataclass(frozen=True)
class RuleContext:
    """
    Everything a rule may inspect about one model.
    """

    model: ModelContract
    candidate_keys: tuple[CandidateKey, ...]
    dependencies: tuple[FunctionalDependency, ...]
    settings: AuditSettings


# A rule inspects one model and returns zero or more findings
ModelRule = Callable[[RuleContext], tuple[Finding, ...]]


def build_rule_contexts(
    contract: ConstraintContract,
    fds: Sequence[FunctionalDependency],
    settings: AuditSettings,
) -> tuple[RuleContext, ...]:
    """
    Build one rule context per model, in contract order.

    Args:
        contract: Constraint contract under audit.
        fds: Functional dependencies for every model in the contract.
        settings: Active audit settings.

    Returns:
        tuple[RuleContext, ...]: Contexts holding each model's keys and FDs.
    """
    return tuple(
        RuleContext(
            model=model,
            candidate_keys=model_candidate_keys(model),
            dependencies=tuple(fd for fd in fds if fd.model == model.name),
            settings=settings,
        )
        for model in contract.models
    )


def apply_rules(
    contexts: Sequence[RuleContext],
    rules: Sequence[ModelRule],
) -> tuple[Finding, ...]:
    """
    Run a fixed, ordered rule list against every model context.

    Returns:
        tuple[Finding, ...]: Findings grouped by model, then by rule order.
    """
    return tuple(
        finding for context in contexts for rule in rules for finding in rule(context)
    )


def is_leftmost_prefix(prefix: tuple[str, ...], fields: tuple[str, ...]) -> bool:
    """
    Whether `prefix` equals the first len(prefix) entries of `fields`, in order.

    Returns:
        bool: True for (a,) against (a, b); False for (b,) against (a, b).
    """
    if not prefix or len(prefix) > len(fields):
        return False
    return fields[: len(prefix)] == prefix

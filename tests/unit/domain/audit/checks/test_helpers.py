# checks/test_helpers.py

import pytest

from schema_audit.domain.audit import default_settings
from schema_audit.domain.audit.checks import build_rule_contexts
from schema_audit.domain.audit.checks._helpers import is_leftmost_prefix
from schema_audit.domain.audit.models import FdSource, FunctionalDependency
from schema_audit.schemas import ConstraintContract, ModelContract

pytestmark = pytest.mark.unit


def test_is_leftmost_prefix_matches_leading_fields() -> None:
    """
    ARRANGE: prefix (a,) against (a, b)
    ACT:     is_leftmost_prefix
    ASSERT:  True
    """
    actual = is_leftmost_prefix(("a",), ("a", "b"))

    assert actual is True


def test_is_leftmost_prefix_rejects_non_leading_field() -> None:
    """
    ARRANGE: prefix (b,) against (a, b)
    ACT:     is_leftmost_prefix
    ASSERT:  False
    """
    actual = is_leftmost_prefix(("b",), ("a", "b"))

    assert actual is False


def test_is_leftmost_prefix_is_order_sensitive() -> None:
    """
    ARRANGE: prefix (b, a) against (a, b)
    ACT:     is_leftmost_prefix
    ASSERT:  False
    """
    actual = is_leftmost_prefix(("b", "a"), ("a", "b"))

    assert actual is False


def test_is_leftmost_prefix_rejects_longer_prefix() -> None:
    """
    ARRANGE: prefix (a, b) against (a,)
    ACT:     is_leftmost_prefix
    ASSERT:  False
    """
    actual = is_leftmost_prefix(("a", "b"), ("a",))

    assert actual is False


def test_build_rule_contexts_filters_dependencies_by_model() -> None:
    """
    ARRANGE: FDs for User and Post
    ACT:     build_rule_contexts
    ASSERT:  each context only holds its own model's FDs
    """
    contract = ConstraintContract(
        models=(ModelContract(name="User"), ModelContract(name="Post")),
    )
    fds = (
        FunctionalDependency("User", ("a",), ("b",), FdSource.INVARIANT),
        FunctionalDependency("Post", ("c",), ("d",), FdSource.INVARIANT),
    )

    contexts = build_rule_contexts(contract, fds, default_settings())
    actual = {c.model.name: [fd.model for fd in c.dependencies] for c in contexts}

    assert actual == {"Post": ["Post"], "User": ["User"]}

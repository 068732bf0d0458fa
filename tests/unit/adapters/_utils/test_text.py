# _utils/test_text.py

import pytest

from schema_audit.adapters._utils import enclosed, split_top_level
from schema_audit.errors import SchemaParseError

pytestmark = pytest.mark.unit


def test_split_top_level_ignores_commas_inside_parentheses() -> None:
    """
    ARRANGE: column list with NUMERIC(10, 2)
    ACT:     split_top_level
    ASSERT:  two parts
    """
    expected = ["price NUMERIC(10, 2)", "id INT"]

    actual = split_top_level("price NUMERIC(10, 2), id INT")

    assert actual == expected


def test_split_top_level_ignores_commas_inside_quotes() -> None:
    """
    ARRANGE: default literal containing a comma
    ACT:     split_top_level
    ASSERT:  literal kept whole
    """
    expected = ["note TEXT DEFAULT 'a, b'", "id INT"]

    actual = split_top_level("note TEXT DEFAULT 'a, b', id INT")

    assert actual == expected


def test_split_top_level_drops_empty_parts() -> None:
    """
    ARRANGE: trailing comma
    ACT:     split_top_level
    ASSERT:  no empty entry
    """
    actual = split_top_level("a, b,")

    assert actual == ["a", "b"]


def test_split_top_level_unbalanced_raises() -> None:
    """
    ARRANGE: unclosed parenthesis
    ACT:     split_top_level
    ASSERT:  raises SchemaParseError
    """
    with pytest.raises(SchemaParseError):
        split_top_level("a NUMERIC(10, b INT")


def test_enclosed_returns_inner_text_and_end() -> None:
    """
    ARRANGE: "t (a, (b)) rest" with the group opening at index 2
    ACT:     enclosed
    ASSERT:  inner text and index after the closer
    """
    expected = ("a, (b)", 10)

    actual = enclosed("t (a, (b)) rest", 2)

    assert actual == expected


def test_enclosed_unclosed_group_raises() -> None:
    """
    ARRANGE: group never closed
    ACT:     enclosed
    ASSERT:  raises SchemaParseError
    """
    with pytest.raises(SchemaParseError):
        enclosed("(a, b", 0)

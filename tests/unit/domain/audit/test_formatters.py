# audit/test_formatters.py

import pytest

from schema_audit.domain.audit.formatters import (
    format_field_list,
    format_field_tuple,
    format_foreign_key,
    format_location,
)
from schema_audit.schemas import ForeignKeyConstraint, ReferentialAction

pytestmark = pytest.mark.unit


def test_format_field_tuple() -> None:
    """
    ARRANGE: two field names
    ACT:     format_field_tuple
    ASSERT:  parenthesised, comma-separated
    """
    actual = format_field_tuple(("studentId", "courseId"))

    assert actual == "(studentId, courseId)"


def test_format_field_list() -> None:
    """
    ARRANGE: two field names
    ACT:     format_field_list
    ASSERT:  bracketed, comma-separated
    """
    actual = format_field_list(["grade", "enrolledAt"])

    assert actual == "[grade, enrolledAt]"


def test_format_location_without_field() -> None:
    """
    ARRANGE: model only
    ACT:     format_location
    ASSERT:  model name
    """
    actual = format_location("Enrollment", None)

    assert actual == "Enrollment"


def test_format_location_with_field() -> None:
    """
    ARRANGE: model and field
    ACT:     format_location
    ASSERT:  Model.field
    """
    actual = format_location("Post", "authorId")

    assert actual == "Post.authorId"


def test_format_foreign_key_includes_actions() -> None:
    """
    ARRANGE: FK authorId -> User(id) with Cascade on delete
    ACT:     format_foreign_key
    ASSERT:  arrow form with both actions
    """
    fk = ForeignKeyConstraint(
        fields=("authorId",),
        referenced_model="User",
        referenced_fields=("id",),
        on_delete=ReferentialAction.CASCADE,
    )

    actual = format_foreign_key(fk)

    assert actual == "(authorId) -> User(id) [onDelete: Cascade, onUpdate: NoAction]"

# schemas/test_contract.py

import pytest
from pydantic import ValidationError

from schema_audit.schemas import (
    ConstraintContract,
    FieldContract,
    ForeignKeyConstraint,
    IndexConstraint,
    ModelContract,
    PrimaryKeyConstraint,
    ReferentialAction,
    UniqueConstraint,
)

pytestmark = pytest.mark.unit


def _field(name: str, type_: str = "String") -> FieldContract:
    return FieldContract(name=name, type=type_)


def test_model_contract_sorts_fields_by_name() -> None:
    """
    ARRANGE: fields declared as name, id, email
    ACT:     construct ModelContract
    ASSERT:  field_names are alphabetical
    """
    expected = ("email", "id", "name")

    actual = ModelContract(
        name="User",
        fields=(_field("name"), _field("id", "Int"), _field("email")),
    )

    assert actual.field_names == expected


def test_model_contract_sorts_unique_constraints_by_joined_fields() -> None:
    """
    ARRANGE: unique constraints (slug) then (email, tenantId)
    ACT:     construct ModelContract
    ASSERT:  constraints ordered by comma-joined field list
    """
    expected = (("email", "tenantId"), ("slug",))

    model = ModelContract(
        name="User",
        fields=(_field("email"), _field("slug"), _field("tenantId")),
        unique_constraints=(
            UniqueConstraint(fields=("slug",)),
            UniqueConstraint(fields=("email", "tenantId")),
        ),
    )
    actual = tuple(constraint.fields for constraint in model.unique_constraints)

    assert actual == expected


def test_model_contract_sorts_indexes_by_joined_fields() -> None:
    """
    ARRANGE: indexes (title) then (authorId)
    ACT:     construct ModelContract
    ASSERT:  (authorId) sorts first
    """
    model = ModelContract(
        name="Post",
        fields=(_field("authorId", "Int"), _field("title")),
        indexes=(IndexConstraint(fields=("title",)), IndexConstraint(fields=("authorId",))),
    )

    assert model.indexes[0].fields == ("authorId",)


def test_model_contract_breaks_index_ties_by_name() -> None:
    """
    ARRANGE: indexes i2 then i1, both on (x)
    ACT:     construct ModelContract
    ASSERT:  i1 sorts first
    """
    model = ModelContract(
        name="t",
        fields=(_field("x"),),
        indexes=(
            IndexConstraint(fields=("x",), name="i2"),
            IndexConstraint(fields=("x",), name="i1"),
        ),
    )

    assert [index.name for index in model.indexes] == ["i1", "i2"]


def test_model_contract_breaks_foreign_key_ties_by_target() -> None:
    """
    ARRANGE: two FKs on (ref), to "b" then "a"
    ACT:     construct ModelContract
    ASSERT:  FK to "a" sorts first
    """
    model = ModelContract(
        name="t",
        fields=(_field("ref", "Int"),),
        foreign_keys=(
            ForeignKeyConstraint(
                fields=("ref",),
                referenced_model="b",
                referenced_fields=("id",),
            ),
            ForeignKeyConstraint(
                fields=("ref",),
                referenced_model="a",
                referenced_fields=("id",),
            ),
        ),
    )

    assert [fk.referenced_model for fk in model.foreign_keys] == ["a", "b"]


def test_model_contract_keeps_primary_key_field_order() -> None:
    """
    ARRANGE: composite PK declared as (studentId, courseId)
    ACT:     construct ModelContract
    ASSERT:  PK field order is preserved
    """
    expected = ("studentId", "courseId")

    model = ModelContract(
        name="Enrollment",
        fields=(_field("courseId", "Int"), _field("studentId", "Int")),
        primary_key=PrimaryKeyConstraint(fields=expected),
    )

    assert model.primary_key.fields == expected


def test_constraint_contract_sorts_models_by_name() -> None:
    """
    ARRANGE: models User then Post
    ACT:     construct ConstraintContract
    ASSERT:  models ordered Post, User
    """
    expected = ["Post", "User"]

    contract = ConstraintContract(
        models=(ModelContract(name="User"), ModelContract(name="Post")),
    )

    assert [model.name for model in contract.models] == expected


def test_constraint_contract_rejects_duplicate_model_names() -> None:
    """
    ARRANGE: two models named User
    ACT:     construct ConstraintContract
    ASSERT:  raises ValidationError
    """
    with pytest.raises(ValidationError):
        ConstraintContract(
            models=(ModelContract(name="User"), ModelContract(name="User")),
        )


def test_constraint_contract_accepts_zero_models() -> None:
    """
    ARRANGE: no models
    ACT:     construct ConstraintContract
    ASSERT:  models is empty
    """
    actual = ConstraintContract()

    assert actual.models == ()


def test_primary_key_is_composite_for_multiple_fields() -> None:
    """
    ARRANGE: PK over two fields
    ACT:     read is_composite
    ASSERT:  True
    """
    actual = PrimaryKeyConstraint(fields=("postId", "tagId"))

    assert actual.is_composite is True


def test_unique_constraint_is_not_composite_for_single_field() -> None:
    """
    ARRANGE: unique constraint over email
    ACT:     read is_composite
    ASSERT:  False
    """
    actual = UniqueConstraint(fields=("email",))

    assert actual.is_composite is False


def test_primary_key_rejects_empty_field_list() -> None:
    """
    ARRANGE: PK with no fields
    ACT:     construct PrimaryKeyConstraint
    ASSERT:  raises ValidationError
    """
    with pytest.raises(ValidationError):
        PrimaryKeyConstraint(fields=())


def test_foreign_key_rejects_mismatched_field_counts() -> None:
    """
    ARRANGE: two local fields, one referenced field
    ACT:     construct ForeignKeyConstraint
    ASSERT:  raises ValidationError
    """
    with pytest.raises(ValidationError):
        ForeignKeyConstraint(
            fields=("a", "b"),
            referenced_model="Other",
            referenced_fields=("id",),
        )


def test_foreign_key_defaults_actions_to_no_action() -> None:
    """
    ARRANGE: FK without referential actions
    ACT:     construct ForeignKeyConstraint
    ASSERT:  on_delete is NoAction
    """
    actual = ForeignKeyConstraint(
        fields=("authorId",),
        referenced_model="User",
        referenced_fields=("id",),
    )

    assert actual.on_delete == ReferentialAction.NO_ACTION


def test_contract_serialises_with_camel_case_keys() -> None:
    """
    ARRANGE: model with a composite primary key
    ACT:     model_dump by alias
    ASSERT:  primaryKey carries isComposite
    """
    model = ModelContract(
        name="PostTag",
        fields=(_field("postId", "Int"), _field("tagId", "Int")),
        primary_key=PrimaryKeyConstraint(fields=("postId", "tagId")),
    )

    actual = model.model_dump(mode="json", by_alias=True)

    assert actual["primaryKey"]["isComposite"] is True


def test_get_model_returns_none_for_unknown_name() -> None:
    """
    ARRANGE: contract with User only
    ACT:     get_model("Ghost")
    ASSERT:  None
    """
    contract = ConstraintContract(models=(ModelContract(name="User"),))

    actual = contract.get_model("Ghost")

    assert actual is None


def test_get_field_returns_matching_field() -> None:
    """
    ARRANGE: model with email field
    ACT:     get_field("email")
    ASSERT:  returns the email field
    """
    model = ModelContract(name="User", fields=(_field("email"), _field("id", "Int")))

    actual = model.get_field("email")

    assert actual.name == "email"

# schemas/contract.py

from enum import StrEnum

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    computed_field,
    field_validator,
    model_validator,
)
from pydantic.alias_generators import to_camel


class ScalarType(StrEnum):
    """
    Canonical scalar categories shared by every schema format.

    Field types that have no mapping keep their vendor name instead.
    """

    STRING = "String"
    INT = "Int"
    BIG_INT = "BigInt"
    FLOAT = "Float"
    DECIMAL = "Decimal"
    BOOLEAN = "Boolean"
    DATE_TIME = "DateTime"
    JSON = "Json"
    BYTES = "Bytes"


class ReferentialAction(StrEnum):
    """
    Action taken on dependent rows when a referenced row is deleted or updated.
    """

    CASCADE = "Cascade"
    RESTRICT = "Restrict"
    NO_ACTION = "NoAction"
    SET_NULL = "SetNull"
    SET_DEFAULT = "SetDefault"


class _ContractModel(BaseModel):
    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )


class FieldContract(_ContractModel):
    """
    A single scalar column of a model.
    """

    name: str
    type: str
    is_nullable: bool = False
    has_default: bool = False
    is_list: bool = False


class _FieldListConstraint(_ContractModel):
    fields: tuple[str, ...]
    name: str | None = None


class PrimaryKeyConstraint(_FieldListConstraint):
    """
    Declared primary key. Field order is significant for prefix matching.
    """

    fields: tuple[str, ...] = Field(min_length=1)

    @computed_field(alias="isComposite")
    @property
    def is_composite(self) -> bool:
        return len(self.fields) > 1


class UniqueConstraint(_FieldListConstraint):
    """
    Declared unique constraint or unique index.
    """

    @computed_field(alias="isComposite")
    @property
    def is_composite(self) -> bool:
        return len(self.fields) > 1


class IndexConstraint(_FieldListConstraint):
    """
    Plain (non-unique) index.
    """


class ForeignKeyConstraint(_ContractModel):
    """
    Foreign key from local fields to fields of a referenced model.

    `fields` and `referenced_fields` correspond positionally.
    """

    fields: tuple[str, ...] = Field(min_length=1)
    referenced_model: str
    referenced_fields: tuple[str, ...]
    on_delete: ReferentialAction = ReferentialAction.NO_ACTION
    on_update: ReferentialAction = ReferentialAction.NO_ACTION

    @model_validator(mode="after")
    def _check_field_correspondence(self) -> "ForeignKeyConstraint":
        if len(self.fields) != len(self.referenced_fields):
            raise ValueError(
                f"Foreign key ({', '.join(self.fields)}) has "
                f"{len(self.fields)} local fields but "
                f"{len(self.referenced_fields)} referenced fields.",
            )
        return self


def _named_constraint_key(constraint: _FieldListConstraint) -> tuple[str, str]:
    return ",".join(constraint.fields), constraint.name or ""


def _foreign_key_key(foreign_key: ForeignKeyConstraint) -> tuple[str, ...]:
    return (
        ",".join(foreign_key.fields),
        foreign_key.referenced_model,
        ",".join(foreign_key.referenced_fields),
        foreign_key.on_delete,
        foreign_key.on_update,
    )


class ModelContract(_ContractModel):
    """
    Canonical description of one table/model.

    Fields are kept sorted by name and every constraint collection by its
    comma-joined field list, with ties broken by constraint name or foreign key
    target, whatever order the source schema declared them in.
    """

    name: str
    fields: tuple[FieldContract, ...] = ()
    primary_key: PrimaryKeyConstraint | None = None
    unique_constraints: tuple[UniqueConstraint, ...] = ()
    indexes: tuple[IndexConstraint, ...] = ()
    foreign_keys: tuple[ForeignKeyConstraint, ...] = ()

    @field_validator("fields")
    @classmethod
    def _sort_fields(
        cls,
        value: tuple[FieldContract, ...],
    ) -> tuple[FieldContract, ...]:
        return tuple(sorted(value, key=lambda field: field.name))

    @field_validator("unique_constraints", "indexes")
    @classmethod
    def _sort_constraints(cls, value: tuple) -> tuple:
        return tuple(sorted(value, key=_named_constraint_key))

    @field_validator("foreign_keys")
    @classmethod
    def _sort_foreign_keys(
        cls,
        value: tuple[ForeignKeyConstraint, ...],
    ) -> tuple[ForeignKeyConstraint, ...]:
        return tuple(sorted(value, key=_foreign_key_key))

    @property
    def field_names(self) -> tuple[str, ...]:
        return tuple(field.name for field in self.fields)

    def get_field(self, name: str) -> FieldContract | None:
        """
        Look up a field by name.

        Returns:
            FieldContract | None: The field, or None if the model has no such field.
        """
        return next((field for field in self.fields if field.name == name), None)


class ConstraintContract(_ContractModel):
    """
    Format-independent description of a whole schema.

    Models are sorted by name and model names must be unique.
    """

    models: tuple[ModelContract, ...] = ()

    @field_validator("models")
    @classmethod
    def _sort_models(
        cls,
        value: tuple[ModelContract, ...],
    ) -> tuple[ModelContract, ...]:
        names = [model.name for model in value]
        duplicates = sorted({name for name in names if names.count(name) > 1})
        if duplicates:
            raise ValueError(f"Duplicate model names: {', '.join(duplicates)}")
        return tuple(sorted(value, key=lambda model: model.name))

    def get_model(self, name: str) -> ModelContract | None:
        """
        Look up a model by name.

        Returns:
            ModelContract | None: The model, or None if the contract has no such model.
        """
        return next((model for model in self.models if model.name == name), None)

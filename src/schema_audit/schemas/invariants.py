# schemas/invariants.py

from pydantic import BaseModel, ConfigDict, Field, RootModel
from pydantic.alias_generators import to_camel


class InvariantFd(BaseModel):
    """
    A functional dependency the user asserts holds for a model, even though
    the schema's constraints cannot express it.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    determinant: tuple[str, ...] = Field(min_length=1)
    dependent: tuple[str, ...] = Field(min_length=1)
    note: str | None = None


class ModelInvariants(BaseModel):
    """
    Invariants declared for a single model.
    """

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        alias_generator=to_camel,
        populate_by_name=True,
    )

    functional_dependencies: tuple[InvariantFd, ...] | None = None


class InvariantsFile(RootModel[dict[str, ModelInvariants]]):
    """
    Parsed invariants file: model name -> declared invariants.

    Mirrors the on-disk JSON layout
    `{"Model": {"functionalDependencies": [{"determinant": [...], ...}]}}`.
    """

    model_config = ConfigDict(frozen=True)

    def items(self) -> list[tuple[str, ModelInvariants]]:
        """
        Return (model name, invariants) pairs sorted by model name.

        Returns:
            list[tuple[str, ModelInvariants]]: Sorted model invariants.
        """
        return sorted(self.root.items())

    def declared_fds(self, model_name: str) -> tuple[InvariantFd, ...]:
        """
        Return the FDs declared for a model, or an empty tuple.

        Returns:
            tuple[InvariantFd, ...]: Declared FDs in file order.
        """
        model_invariants = self.root.get(model_name)
        if model_invariants is None:
            return ()
        return model_invariants.functional_dependencies or ()

# schemas/__init__.py

from .contract import (
    ConstraintContract,
    FieldContract,
    ForeignKeyConstraint,
    IndexConstraint,
    ModelContract,
    PrimaryKeyConstraint,
    ReferentialAction,
    ScalarType,
    UniqueConstraint,
)
from .invariants import InvariantFd, InvariantsFile, ModelInvariants
from .report import AuditMetadata, AuditResult, FindingOutput

__all__ = [
    # contract
    "ConstraintContract",
    "FieldContract",
    "ForeignKeyConstraint",
    "IndexConstraint",
    "ModelContract",
    "PrimaryKeyConstraint",
    "ReferentialAction",
    "ScalarType",
    "UniqueConstraint",
    # invariants
    "InvariantFd",
    "InvariantsFile",
    "ModelInvariants",
    # report
    "AuditMetadata",
    "AuditResult",
    "FindingOutput",
]

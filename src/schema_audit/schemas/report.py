# schemas/report.py

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from .contract import ConstraintContract

_OUTPUT_CONFIG = ConfigDict(
    strict=True,
    frozen=True,
    alias_generator=to_camel,
    populate_by_name=True,
    protected_namespaces=(),
)


class FindingOutput(BaseModel):
    """
    A single normalisation or schema-quality finding, as reported.
    """

    model_config = _OUTPUT_CONFIG

    rule: str
    severity: str
    normal_form: str
    model: str
    field: str | None
    message: str
    fix: str | None


class AuditMetadata(BaseModel):
    """
    Provenance and counts for an audit run.
    """

    model_config = _OUTPUT_CONFIG

    schema_path: str
    timestamp: str | None
    model_count: int
    finding_count: int


class AuditResult(BaseModel):
    """
    Machine-readable envelope for a complete schema audit.

    Carries the constraint contract the findings were derived from, the
    ordered findings and run metadata, serialisable as JSON for downstream
    consumers.
    """

    model_config = _OUTPUT_CONFIG

    contract: ConstraintContract
    findings: tuple[FindingOutput, ...]
    metadata: AuditMetadata

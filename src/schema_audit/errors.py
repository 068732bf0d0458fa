# schema_audit/errors.py


class SchemaParseError(ValueError):
    """
    Raised when a schema file cannot be turned into a constraint contract.

    Covers unreadable files, unsupported file types and malformed schema text.
    """


class InvariantsParseError(ValueError):
    """
    Raised when an invariants file is not valid JSON or fails its structural
    schema (for example an empty determinant or dependent list).
    """

# adapters/__init__.py

import logging
from collections.abc import Callable
from pathlib import Path
from types import MappingProxyType

from schema_audit.errors import SchemaParseError
from schema_audit.schemas import ConstraintContract

from .prisma import parse_prisma_schema
from .sql_ddl import parse_sql_schema

logger = logging.getLogger(__name__)

ContractBuilder = Callable[[str], ConstraintContract]

# File suffix (lower-cased) -> parser for that schema format
CONTRACT_BUILDERS = MappingProxyType(
    {
        ".sql": parse_sql_schema,
        ".ddl": parse_sql_schema,
        ".prisma": parse_prisma_schema,
    },
)


def load_contract(path: Path | str) -> ConstraintContract:
    """
    Read a schema file and build its constraint contract.

    The parser is chosen by file suffix: `.sql` and `.ddl` are read as SQL
    DDL, `.prisma` as a Prisma schema.

    Args:
        path: Location of the schema file.

    Returns:
        ConstraintContract: The parsed contract.

    Raises:
        SchemaParseError: If the suffix is unsupported, the file cannot be read,
            or its content cannot be parsed.
    """
    schema_path = Path(path)
    builder = CONTRACT_BUILDERS.get(schema_path.suffix.lower())
    if builder is None:
        supported = ", ".join(sorted(CONTRACT_BUILDERS))
        raise SchemaParseError(
            f"Unsupported schema file type {schema_path.suffix!r} "
            f"(expected one of {supported})",
        )

    try:
        text = schema_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as error:
        raise SchemaParseError(f"Cannot read schema file {path}: {error}") from error

    contract = builder(text)
    logger.info("Loaded %d models from %s", len(contract.models), schema_path)
    return contract


__all__ = [
    "CONTRACT_BUILDERS",
    "ContractBuilder",
    "load_contract",
    "parse_prisma_schema",
    "parse_sql_schema",
]

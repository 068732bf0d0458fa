# _utils/_type_maps.py

from types import MappingProxyType

from schema_audit.schemas import ReferentialAction, ScalarType

# SQL type names (upper-cased, without length/precision) -> canonical category
SQL_TYPE_MAP = MappingProxyType(
    {
        # String types
        "TEXT": ScalarType.STRING,
        "VARCHAR": ScalarType.STRING,
        "CHAR": ScalarType.STRING,
        "CHARACTER VARYING": ScalarType.STRING,
        "CHARACTER": ScalarType.STRING,
        "CITEXT": ScalarType.STRING,
        "UUID": ScalarType.STRING,
        # JSON types
        "JSON": ScalarType.JSON,
        "JSONB": ScalarType.JSON,
        # DateTime types
        "TIMESTAMP": ScalarType.DATE_TIME,
        "TIMESTAMPTZ": ScalarType.DATE_TIME,
        "TIMESTAMP WITH TIME ZONE": ScalarType.DATE_TIME,
        "TIMESTAMP WITHOUT TIME ZONE": ScalarType.DATE_TIME,
        "DATETIME": ScalarType.DATE_TIME,
        "DATE": ScalarType.DATE_TIME,
        # Numeric types
        "INT": ScalarType.INT,
        "INTEGER": ScalarType.INT,
        "INT2": ScalarType.INT,
        "INT4": ScalarType.INT,
        "SMALLINT": ScalarType.INT,
        "SERIAL": ScalarType.INT,
        "SERIAL4": ScalarType.INT,
        "SMALLSERIAL": ScalarType.INT,
        "BIGINT": ScalarType.BIG_INT,
        "INT8": ScalarType.BIG_INT,
        "BIGSERIAL": ScalarType.BIG_INT,
        "SERIAL8": ScalarType.BIG_INT,
        "FLOAT": ScalarType.FLOAT,
        "FLOAT4": ScalarType.FLOAT,
        "FLOAT8": ScalarType.FLOAT,
        "REAL": ScalarType.FLOAT,
        "DOUBLE PRECISION": ScalarType.FLOAT,
        "DECIMAL": ScalarType.DECIMAL,
        "NUMERIC": ScalarType.DECIMAL,
        "MONEY": ScalarType.DECIMAL,
        # Other scalars
        "BOOLEAN": ScalarType.BOOLEAN,
        "BOOL": ScalarType.BOOLEAN,
        "BYTEA": ScalarType.BYTES,
        "BLOB": ScalarType.BYTES,
    },
)

# Auto-incrementing types imply NOT NULL and a default
SQL_SERIAL_TYPES = frozenset(
    {"SERIAL", "SERIAL4", "SERIAL8", "BIGSERIAL", "SMALLSERIAL"},
)

# Multi-word SQL types, longest first so the greediest match wins
SQL_MULTI_WORD_TYPES = tuple(
    sorted(
        (name for name in SQL_TYPE_MAP if " " in name),
        key=len,
        reverse=True,
    ),
)

# Referential action spelling (SQL or Prisma, lower-cased) -> enum
REFERENTIAL_ACTION_MAP = MappingProxyType(
    {
        "cascade": ReferentialAction.CASCADE,
        "restrict": ReferentialAction.RESTRICT,
        "no action": ReferentialAction.NO_ACTION,
        "noaction": ReferentialAction.NO_ACTION,
        "set null": ReferentialAction.SET_NULL,
        "setnull": ReferentialAction.SET_NULL,
        "set default": ReferentialAction.SET_DEFAULT,
        "setdefault": ReferentialAction.SET_DEFAULT,
    },
)


def canonical_sql_type(raw_type: str) -> str:
    """
    Map a SQL type name to its canonical category.

    Returns:
        str: The canonical category, or the vendor spelling (whitespace-normalised)
            when unmapped.
    """
    spelling = " ".join(raw_type.split())
    return str(SQL_TYPE_MAP.get(spelling.upper(), spelling))


def to_referential_action(
    value: str | None,
    fallback: ReferentialAction = ReferentialAction.NO_ACTION,
) -> ReferentialAction:
    """
    Map a referential action spelling to the enum.

    Returns:
        ReferentialAction: The mapped action, or `fallback` when unknown or absent.
    """
    if value is None:
        return fallback
    return REFERENTIAL_ACTION_MAP.get(" ".join(value.lower().split()), fallback)

# _utils/__init__.py

from ._text import enclosed, split_top_level
from ._type_maps import (
    REFERENTIAL_ACTION_MAP,
    SQL_MULTI_WORD_TYPES,
    SQL_SERIAL_TYPES,
    SQL_TYPE_MAP,
    canonical_sql_type,
    to_referential_action,
)

__all__ = [
    "REFERENTIAL_ACTION_MAP",
    "SQL_MULTI_WORD_TYPES",
    "SQL_SERIAL_TYPES",
    "SQL_TYPE_MAP",
    "canonical_sql_type",
    "enclosed",
    "split_top_level",
    "to_referential_action",
]

# adapters/sql_ddl.py

import logging
import re
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from functools import partial

import sqlparse
from pydantic import ValidationError
from sqlparse import tokens as T
from sqlparse.exceptions import SQLParseError
from sqlparse.sql import Statement

from schema_audit.errors import SchemaParseError
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

from ._utils import (
    SQL_MULTI_WORD_TYPES,
    SQL_SERIAL_TYPES,
    canonical_sql_type,
    to_referential_action,
)

logger = logging.getLogger(__name__)

_NAME_KINDS = ("word", "quoted")

# Keywords that open a table-level constraint inside CREATE TABLE or ADD
_TABLE_CONSTRAINT_STARTS = frozenset(
    {"CONSTRAINT", "PRIMARY", "UNIQUE", "FOREIGN", "CHECK", "EXCLUDE"},
)

# Keywords that end a DEFAULT expression inside a column definition
_COLUMN_CLAUSE_STARTS = frozenset(
    {
        "CONSTRAINT",
        "NOT",
        "NULL",
        "PRIMARY",
        "UNIQUE",
        "DEFAULT",
        "CHECK",
        "REFERENCES",
        "GENERATED",
        "COLLATE",
    },
)

_REFERENTIAL_ACTIONS = (
    ("CASCADE",),
    ("RESTRICT",),
    ("NO", "ACTION"),
    ("SET", "NULL"),
    ("SET", "DEFAULT"),
)

# sqlparse lexes a spaced array suffix such as `text [3]` as a bracketed name
_BRACKETED_BOUND_RE = re.compile(r"\[\s*\d*\s*\]")


@dataclass(frozen=True)
class _Token:
    """A significant lexeme of a statement: whitespace and comments are gone."""

    kind: str
    value: str

    def is_word(self, word: str) -> bool:
        return self.kind == "word" and self.value.upper() == word

    def is_punct(self, char: str) -> bool:
        return self.kind == "punct" and self.value == char


@dataclass(frozen=True)
class _PendingForeignKey:
    fields: tuple[str, ...]
    referenced_table: str
    referenced_fields: tuple[str, ...] | None
    on_delete: ReferentialAction
    on_update: ReferentialAction


@dataclass
class _TableDraft:
    name: str
    fields: dict[str, FieldContract] = field(default_factory=dict)
    primary_key: PrimaryKeyConstraint | None = None
    unique_constraints: list[UniqueConstraint] = field(default_factory=list)
    indexes: list[IndexConstraint] = field(default_factory=list)
    foreign_keys: list[_PendingForeignKey] = field(default_factory=list)


@dataclass
class _ColumnClauses:
    not_null: bool = False
    primary: bool = False
    unique: bool = False
    unique_name: str | None = None
    has_default: bool = False
    identity: bool = False
    references: list[_PendingForeignKey] = field(default_factory=list)


class _Cursor:
    """Forward-only reader over the tokens of one statement or clause."""

    def __init__(self, tokens: Sequence[_Token]) -> None:
        self._tokens = tokens
        self.position = 0

    @property
    def exhausted(self) -> bool:
        return self.position >= len(self._tokens)

    def peek(self) -> _Token | None:
        return None if self.exhausted else self._tokens[self.position]

    def next(self) -> _Token:
        token = self.peek()
        if token is None:
            raise SchemaParseError(
                f"Unexpected end of SQL statement after {_render(self._tokens)!r}",
            )
        self.position += 1
        return token

    def accept(self, *words: str) -> bool:
        """Consume the keyword sequence when it comes next."""
        upcoming = self._tokens[self.position : self.position + len(words)]
        if len(upcoming) != len(words):
            return False
        if not all(token.is_word(word) for token, word in zip(upcoming, words)):
            return False
        self.position += len(words)
        return True

    def accept_any(self, *words: str) -> bool:
        """Consume one word when it is any of `words`."""
        return any(self.accept(word) for word in words)

    def accept_punct(self, char: str) -> bool:
        token = self.peek()
        if token is None or not token.is_punct(char):
            return False
        self.position += 1
        return True

    def identifier(self, what: str) -> str:
        token = self.peek()
        if token is None or token.kind not in _NAME_KINDS:
            raise SchemaParseError(
                f"Expected {what} in {_render(self._tokens)!r}",
            )
        self.position += 1
        return _unquote(token)

    def qualified_name(self, what: str) -> str:
        """Read `a.b.c` and keep only the last part."""
        name = self.identifier(what)
        while self.accept_punct("."):
            name = self.identifier(what)
        return name

    def group(self) -> list[_Token] | None:
        """
        Consume a parenthesised group when one comes next.

        Returns:
            list[_Token] | None: Tokens between the parentheses, or None when
                the next token does not open a group.
        """
        if not self.accept_punct("("):
            return None

        start = self.position
        depth = 1
        while depth:
            token = self.next()
            if token.is_punct("("):
                depth += 1
            elif token.is_punct(")"):
                depth -= 1
        return list(self._tokens[start : self.position - 1])

    def skip(self) -> None:
        if self.group() is None:
            self.next()

    def rest(self) -> list[_Token]:
        remaining = list(self._tokens[self.position :])
        self.position = len(self._tokens)
        return remaining


TableHandler = Callable[[_Cursor, dict[str, _TableDraft]], None]


def parse_sql_schema(text: str) -> ConstraintContract:
    """
    Parse PostgreSQL-flavoured DDL into a constraint contract.

    Statements are split and tokenised by sqlparse. CREATE TABLE (columns
    and table constraints), CREATE [UNIQUE] INDEX and ALTER TABLE ... ADD are
    understood. Every other statement is logged and ignored. A REFERENCES
    clause without a column list resolves to the referenced table's primary
    key once all statements have been read.

    Args:
        text: DDL source text.

    Returns:
        ConstraintContract: One model per table.

    Raises:
        SchemaParseError: If the DDL is malformed or describes an invalid
            contract (unknown columns, mismatched foreign keys, duplicates).
    """
    tables: dict[str, _TableDraft] = {}

    try:
        statements = sqlparse.parse(text)
    except SQLParseError as error:
        raise SchemaParseError(f"Cannot tokenise SQL schema: {error}") from error

    for statement in statements:
        _apply_statement(statement, tables)

    try:
        contract = ConstraintContract(
            models=tuple(_build_model(draft, tables) for draft in tables.values()),
        )
    except ValidationError as error:
        raise SchemaParseError(
            f"SQL schema describes an invalid contract: {error}",
        ) from error

    logger.debug("Parsed %d tables from SQL DDL", len(contract.models))
    return contract


def _tokenise(statement: Statement) -> list[_Token]:
    """
    Reduce a sqlparse statement to its significant tokens.

    Multi-word keywords such as `NOT NULL` or `PRIMARY KEY` are split into
    single words, so matching never depends on how sqlparse groups them.
    A trailing semicolon is dropped.

    Raises:
        SchemaParseError: If the statement holds an unterminated quote or
            block comment.
    """
    tokens: list[_Token] = []
    previous = None

    for leaf in statement.flatten():
        ttype = leaf.ttype
        if ttype in T.Error:
            raise SchemaParseError(
                f"Unterminated quote or unexpected character {leaf.value!r} "
                "in SQL schema",
            )
        if (
            ttype in T.Wildcard
            and previous is not None
            and previous.ttype in T.Operator
            and previous.value.endswith("/")
        ):
            raise SchemaParseError("Unterminated block comment in SQL schema")
        previous = leaf

        if leaf.is_whitespace or ttype in T.Comment:
            continue
        if ttype in T.String.Symbol or (ttype in T.Name and leaf.value[:1] == "`"):
            tokens.append(_Token("quoted", leaf.value))
        elif ttype in T.Keyword or ttype in T.Name:
            tokens.extend(_Token("word", word) for word in leaf.value.split())
        elif ttype in T.Punctuation:
            tokens.append(_Token("punct", leaf.value))
        else:
            tokens.append(_Token("literal", leaf.value))

    while tokens and tokens[-1].is_punct(";"):
        tokens.pop()
    return tokens


def _apply_statement(statement: Statement, tables: dict[str, _TableDraft]) -> None:
    tokens = _tokenise(statement)
    if not tokens:
        return

    cursor = _Cursor(tokens)
    handler = _statement_handler(cursor)
    if handler is None:
        logger.warning(
            "Ignoring unsupported SQL statement: %s",
            _summary(sqlparse.format(str(statement), strip_comments=True)),
        )
        return

    _check_balanced(tokens)
    handler(cursor, tables)


def _statement_handler(cursor: _Cursor) -> TableHandler | None:
    if cursor.accept("ALTER", "TABLE"):
        return _alter_table
    if not cursor.accept("CREATE"):
        return None

    cursor.accept_any("GLOBAL", "LOCAL")
    cursor.accept_any("TEMPORARY", "TEMP", "UNLOGGED")
    if cursor.accept("TABLE"):
        return _create_table

    unique = cursor.accept("UNIQUE")
    if cursor.accept("INDEX"):
        return partial(_create_index, unique=unique)
    return None


def _check_balanced(tokens: Sequence[_Token]) -> None:
    depth = 0
    for token in tokens:
        if token.is_punct("("):
            depth += 1
        elif token.is_punct(")"):
            depth -= 1
            if depth < 0:
                raise SchemaParseError("Unbalanced ')' in SQL schema")
        elif token.is_punct(";"):
            raise SchemaParseError("Unexpected ';' inside parentheses in SQL schema")
    if depth != 0:
        raise SchemaParseError("Unbalanced '(' in SQL schema")


def _create_table(cursor: _Cursor, tables: dict[str, _TableDraft]) -> None:
    cursor.accept("IF", "NOT", "EXISTS")
    name = cursor.qualified_name("table name")

    body = cursor.group()
    if body is None:
        logger.warning("Ignoring CREATE TABLE %s without a column list", name)
        return
    if name in tables:
        raise SchemaParseError(f'Table "{name}" is defined more than once')

    draft = _TableDraft(name)
    tables[name] = draft
    inline_primary_key: list[str] = []

    for definition in _split_commas(body):
        entry = _Cursor(definition)
        if _at_table_constraint(entry):
            _add_table_constraint(draft, entry)
            continue

        primary = _add_column(draft, definition)
        if primary is not None:
            inline_primary_key.append(primary)

    if inline_primary_key:
        _set_primary_key(draft, PrimaryKeyConstraint(fields=tuple(inline_primary_key)))


def _create_index(
    cursor: _Cursor,
    tables: dict[str, _TableDraft],
    *,
    unique: bool,
) -> None:
    cursor.accept("CONCURRENTLY")
    cursor.accept("IF", "NOT", "EXISTS")

    name = None
    if not cursor.accept("ON"):
        name = cursor.qualified_name("index name")
        if not cursor.accept("ON"):
            raise SchemaParseError(f"CREATE INDEX {name} has no ON clause")
    cursor.accept("ONLY")

    draft = _known_table(tables, cursor.qualified_name("table name"), "CREATE INDEX")
    if cursor.accept("USING"):
        cursor.next()

    inner = cursor.group()
    if inner is None:
        raise SchemaParseError(f'CREATE INDEX on "{draft.name}" has no column list')

    columns = _index_columns(inner)
    if columns is None:
        logger.warning(
            "Skipping expression index %s on %s",
            name or "<unnamed>",
            draft.name,
        )
        return

    if unique:
        draft.unique_constraints.append(UniqueConstraint(fields=columns, name=name))
    else:
        draft.indexes.append(IndexConstraint(fields=columns, name=name))


def _alter_table(cursor: _Cursor, tables: dict[str, _TableDraft]) -> None:
    cursor.accept("IF", "EXISTS")
    cursor.accept("ONLY")
    draft = _known_table(tables, cursor.qualified_name("table name"), "ALTER TABLE")

    for action in _split_commas(cursor.rest()):
        entry = _Cursor(action)
        if not entry.accept("ADD"):
            logger.warning(
                "Ignoring unsupported ALTER TABLE action on %s: %s",
                draft.name,
                _summary(_render(action)),
            )
            continue

        if _at_table_constraint(entry):
            _add_table_constraint(draft, entry)
            continue

        if entry.accept("COLUMN"):
            entry.accept("IF", "NOT", "EXISTS")
        primary = _add_column(draft, entry.rest())
        if primary is not None:
            _set_primary_key(draft, PrimaryKeyConstraint(fields=(primary,)))


def _add_column(draft: _TableDraft, definition: Sequence[_Token]) -> str | None:
    """
    Add a column definition to the table draft.

    Column-level UNIQUE and REFERENCES clauses become constraints on the draft.

    Returns:
        str | None: The column name when it is declared PRIMARY KEY inline.

    Raises:
        SchemaParseError: If the definition cannot be parsed or repeats a column.
    """
    if len(definition) < 2 or definition[0].kind not in _NAME_KINDS:
        raise SchemaParseError(
            f"Cannot parse column definition {_render(definition)!r} "
            f'in table "{draft.name}"',
        )

    cursor = _Cursor(definition)
    name = cursor.identifier("column name")
    if name in draft.fields:
        raise SchemaParseError(f'Column "{name}" is defined twice in "{draft.name}"')

    raw_type, is_list = _column_type(cursor)
    clauses = _column_clauses(cursor, name)
    is_serial = raw_type.upper() in SQL_SERIAL_TYPES

    draft.fields[name] = FieldContract(
        name=name,
        type=canonical_sql_type(raw_type),
        is_nullable=not (
            clauses.not_null or clauses.primary or clauses.identity or is_serial
        ),
        has_default=clauses.has_default or is_serial,
        is_list=is_list,
    )

    if clauses.unique:
        draft.unique_constraints.append(
            UniqueConstraint(fields=(name,), name=clauses.unique_name),
        )
    draft.foreign_keys.extend(clauses.references)

    return name if clauses.primary else None


def _column_type(cursor: _Cursor) -> tuple[str, bool]:
    """
    Read the data type of a column.

    Precision arguments are dropped; `type[]` and `type ARRAY` mark a list.

    Returns:
        tuple[str, bool]: Raw type name and whether it is an array.
    """
    raw_type = _multi_word_type(cursor)
    if raw_type is None:
        token = cursor.peek()
        if token is None or token.kind not in _NAME_KINDS:
            found = token.value if token is not None else "end of definition"
            raise SchemaParseError(f"Cannot parse column type at {found!r}")
        raw_type = cursor.qualified_name("column type")
    cursor.group()

    is_list = False
    while True:
        token = cursor.peek()
        if cursor.accept_punct("["):
            while not cursor.accept_punct("]"):
                cursor.next()
        elif token is not None and _BRACKETED_BOUND_RE.fullmatch(token.value):
            cursor.next()
        elif cursor.accept("ARRAY"):
            pass
        else:
            return raw_type, is_list
        is_list = True


def _multi_word_type(cursor: _Cursor) -> str | None:
    """Match a multi-word type, allowing precision after any word."""
    start = cursor.position
    for name in SQL_MULTI_WORD_TYPES:
        words = name.split()
        matched = cursor.accept(words[0])
        for word in words[1:]:
            if not matched:
                break
            cursor.group()
            matched = cursor.accept(word)
        if matched:
            return name
        cursor.position = start
    return None


def _column_clauses(cursor: _Cursor, column: str) -> _ColumnClauses:
    """
    Read the constraint clauses that follow a column type.

    CHECK expressions and DEFAULT expressions are skipped whole, so keywords
    inside them never count as constraints. Unrecognised clauses such as
    COLLATE or DEFERRABLE are skipped token by token.
    """
    clauses = _ColumnClauses()
    constraint_name = None

    while not cursor.exhausted:
        if cursor.accept("CONSTRAINT"):
            constraint_name = cursor.identifier("constraint name")
            continue

        if cursor.accept("NOT", "NULL"):
            clauses.not_null = True
        elif cursor.accept("NULL"):
            pass
        elif cursor.accept("PRIMARY", "KEY"):
            clauses.primary = True
        elif cursor.accept("UNIQUE"):
            clauses.unique = True
            clauses.unique_name = constraint_name
            _skip_nulls_distinct(cursor)
        elif cursor.accept("DEFAULT"):
            clauses.has_default = True
            _skip_default_expression(cursor)
        elif cursor.accept("GENERATED"):
            clauses.has_default = True
            clauses.identity = _generated_is_identity(cursor)
        elif cursor.accept_any("AUTO_INCREMENT", "AUTOINCREMENT"):
            clauses.has_default = True
        elif cursor.accept("CHECK"):
            cursor.group()
            cursor.accept("NO", "INHERIT")
        elif cursor.accept("REFERENCES"):
            clauses.references.append(_references(cursor, (column,)))
        else:
            cursor.skip()
        constraint_name = None

    return clauses


def _skip_default_expression(cursor: _Cursor) -> None:
    while not cursor.exhausted:
        token = cursor.peek()
        if token.kind == "word" and token.value.upper() in _COLUMN_CLAUSE_STARTS:
            return
        cursor.skip()


def _generated_is_identity(cursor: _Cursor) -> bool:
    """Read `GENERATED {ALWAYS | BY DEFAULT} AS {IDENTITY | (expr) STORED}`."""
    if not cursor.accept("ALWAYS"):
        cursor.accept("BY", "DEFAULT")
    cursor.accept("AS")
    if cursor.accept("IDENTITY"):
        cursor.group()
        return True
    cursor.group()
    cursor.accept("STORED")
    return False


def _skip_nulls_distinct(cursor: _Cursor) -> None:
    if cursor.accept("NULLS"):
        cursor.accept("NOT")
        cursor.accept("DISTINCT")


def _at_table_constraint(cursor: _Cursor) -> bool:
    token = cursor.peek()
    return (
        token is not None
        and token.kind == "word"
        and token.value.upper() in _TABLE_CONSTRAINT_STARTS
    )


def _add_table_constraint(draft: _TableDraft, cursor: _Cursor) -> None:
    name = cursor.identifier("constraint name") if cursor.accept("CONSTRAINT") else None

    if cursor.accept_any("CHECK", "EXCLUDE"):
        return

    if cursor.accept("PRIMARY", "KEY"):
        columns = _constraint_columns(cursor, draft, "PRIMARY KEY")
        _set_primary_key(draft, PrimaryKeyConstraint(fields=columns, name=name))
    elif cursor.accept("UNIQUE"):
        _skip_nulls_distinct(cursor)
        columns = _constraint_columns(cursor, draft, "UNIQUE")
        draft.unique_constraints.append(UniqueConstraint(fields=columns, name=name))
    elif cursor.accept("FOREIGN", "KEY"):
        columns = _constraint_columns(cursor, draft, "FOREIGN KEY")
        if not cursor.accept("REFERENCES"):
            raise SchemaParseError(
                f'Foreign key ({", ".join(columns)}) on "{draft.name}" has no '
                "REFERENCES clause",
            )
        draft.foreign_keys.append(_references(cursor, columns))
    else:
        raise SchemaParseError(
            f'Cannot parse constraint {_render(cursor.rest())!r} on "{draft.name}"',
        )


def _constraint_columns(
    cursor: _Cursor,
    draft: _TableDraft,
    kind: str,
) -> tuple[str, ...]:
    inner = cursor.group()
    if inner is None:
        raise SchemaParseError(f'{kind} constraint on "{draft.name}" has no column list')
    return _column_list(inner)


def _references(cursor: _Cursor, columns: tuple[str, ...]) -> _PendingForeignKey:
    """Read the part of a REFERENCES clause after the keyword."""
    table = cursor.qualified_name("referenced table")
    inner = cursor.group()

    if cursor.accept("MATCH"):
        cursor.next()

    actions: dict[str, ReferentialAction] = {}
    while cursor.accept("ON"):
        event = cursor.next()
        if not (event.is_word("DELETE") or event.is_word("UPDATE")):
            raise SchemaParseError(
                f"Expected ON DELETE or ON UPDATE, found ON {event.value}",
            )
        actions[event.value.upper()] = _referential_action(cursor)

    return _PendingForeignKey(
        fields=columns,
        referenced_table=table,
        referenced_fields=_column_list(inner) if inner is not None else None,
        on_delete=actions.get("DELETE", ReferentialAction.NO_ACTION),
        on_update=actions.get("UPDATE", ReferentialAction.NO_ACTION),
    )


def _referential_action(cursor: _Cursor) -> ReferentialAction:
    for words in _REFERENTIAL_ACTIONS:
        if cursor.accept(*words):
            # PostgreSQL allows SET NULL (col, ...) to limit the affected columns
            cursor.group()
            return to_referential_action(" ".join(words))

    token = cursor.peek()
    found = token.value if token is not None else "end of clause"
    raise SchemaParseError(f"Unknown referential action {found!r}")


def _set_primary_key(draft: _TableDraft, primary_key: PrimaryKeyConstraint) -> None:
    if draft.primary_key is not None:
        raise SchemaParseError(f'Table "{draft.name}" declares more than one primary key')
    draft.primary_key = primary_key


def _build_model(draft: _TableDraft, tables: dict[str, _TableDraft]) -> ModelContract:
    """
    Turn a table draft into a model, resolving its pending foreign keys.

    Primary key columns are never nullable, however they were declared.

    Returns:
        ModelContract: The finished model.

    Raises:
        SchemaParseError: If a constraint names a column the table lacks, or a
            foreign key cannot be resolved.
    """
    primary = draft.primary_key.fields if draft.primary_key is not None else ()
    constrained = (
        primary,
        *(constraint.fields for constraint in draft.unique_constraints),
        *(index.fields for index in draft.indexes),
        *(pending.fields for pending in draft.foreign_keys),
    )
    for columns in constrained:
        _require_columns(draft, columns)

    fields = tuple(
        column.model_copy(update={"is_nullable": False})
        if column.name in primary
        else column
        for column in draft.fields.values()
    )

    return ModelContract(
        name=draft.name,
        fields=fields,
        primary_key=draft.primary_key,
        unique_constraints=tuple(draft.unique_constraints),
        indexes=tuple(draft.indexes),
        foreign_keys=tuple(
            _resolve_foreign_key(draft.name, pending, tables)
            for pending in draft.foreign_keys
        ),
    )


def _resolve_foreign_key(
    table: str,
    pending: _PendingForeignKey,
    tables: dict[str, _TableDraft],
) -> ForeignKeyConstraint:
    referenced_fields = pending.referenced_fields
    if referenced_fields is None:
        target = tables.get(pending.referenced_table)
        if target is None or target.primary_key is None:
            raise SchemaParseError(
                f'Foreign key ({", ".join(pending.fields)}) on "{table}" omits the '
                f'referenced columns, but "{pending.referenced_table}" has no '
                "known primary key",
            )
        referenced_fields = target.primary_key.fields

    return ForeignKeyConstraint(
        fields=pending.fields,
        referenced_model=pending.referenced_table,
        referenced_fields=referenced_fields,
        on_delete=pending.on_delete,
        on_update=pending.on_update,
    )


def _require_columns(draft: _TableDraft, columns: tuple[str, ...]) -> None:
    missing = [column for column in columns if column not in draft.fields]
    if missing:
        raise SchemaParseError(
            f'Constraint on "{draft.name}" references unknown column(s) '
            f"{', '.join(missing)}",
        )


def _known_table(
    tables: dict[str, _TableDraft],
    name: str,
    statement_kind: str,
) -> _TableDraft:
    draft = tables.get(name)
    if draft is None:
        raise SchemaParseError(f'{statement_kind} references unknown table "{name}"')
    return draft


def _split_commas(tokens: Sequence[_Token]) -> list[list[_Token]]:
    """Split tokens at commas outside parentheses and brackets."""
    if not tokens:
        return []

    entries: list[list[_Token]] = [[]]
    depth = 0
    for token in tokens:
        if token.kind == "punct":
            if token.value in ("(", "["):
                depth += 1
            elif token.value in (")", "]"):
                depth -= 1
            elif token.value == "," and depth == 0:
                entries.append([])
                continue
        entries[-1].append(token)
    return entries


def _column_list(inner: Sequence[_Token]) -> tuple[str, ...]:
    entries = _split_commas(inner)
    if not entries:
        raise SchemaParseError("Empty column list")
    for entry in entries:
        if len(entry) != 1 or entry[0].kind not in _NAME_KINDS:
            raise SchemaParseError(f"Invalid column reference {_render(entry)!r}")
    return tuple(_unquote(entry[0]) for entry in entries)


def _index_columns(inner: Sequence[_Token]) -> tuple[str, ...] | None:
    """
    Read the columns of an index, dropping ordering and operator classes.

    Returns:
        tuple[str, ...] | None: Column names, or None when any entry is an
            expression rather than a plain column.
    """
    entries = _split_commas(inner)
    if not entries:
        raise SchemaParseError("Empty index column list")

    columns = []
    for entry in entries:
        if not entry:
            raise SchemaParseError("Empty entry in index column list")
        if entry[0].kind not in _NAME_KINDS or any(t.is_punct("(") for t in entry):
            return None
        columns.append(_unquote(entry[0]))
    return tuple(columns)


def _unquote(token: _Token) -> str:
    if token.kind == "quoted":
        quote = token.value[0]
        return token.value[1:-1].replace(quote * 2, quote)
    return token.value


def _render(tokens: Sequence[_Token]) -> str:
    return " ".join(token.value for token in tokens)


def _summary(statement: str) -> str:
    collapsed = " ".join(statement.split())
    return collapsed if len(collapsed) <= 60 else f"{collapsed[:57]}..."

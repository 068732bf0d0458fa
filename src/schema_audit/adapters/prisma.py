# adapters/prisma.py

import logging
import re
from dataclasses import dataclass

from pydantic import ValidationError

from schema_audit.errors import SchemaParseError
from schema_audit.schemas import (
    ConstraintContract,
    FieldContract,
    ForeignKeyConstraint,
    IndexConstraint,
    ModelContract,
    PrimaryKeyConstraint,
    UniqueConstraint,
)

from ._utils import enclosed, split_top_level, to_referential_action

logger = logging.getLogger(__name__)

_BLOCK_RE = re.compile(
    r"^(?P<kind>model|enum|type|view|datasource|generator)\s+(?P<name>\w+)\s*\{$",
)
_FIELD_RE = re.compile(
    r'^(?P<name>\w+)\s+(?P<type>Unsupported\(\s*"(?:[^"\\]|\\.)*"\s*\)|\w+)'
    r"(?P<list>\[\])?(?P<optional>\?)?(?P<attributes>(?:\s+.*)?)$",
)
_BLOCK_ATTRIBUTE_RE = re.compile(
    r"^@@(?P<name>\w+)(?:\.\w+)?\s*(?:\((?P<arguments>.*)\))?$",
)
_STRING_RE = re.compile(r'"(?:[^"\\]|\\.)*"')

_ID_ATTRIBUTE_RE = re.compile(r"(?<![\w@])@id\b")
_UNIQUE_ATTRIBUTE_RE = re.compile(r"(?<![\w@])@unique\b")
_DEFAULT_ATTRIBUTE_RE = re.compile(r"(?<![\w@])@default\s*\(")
_RELATION_ATTRIBUTE_RE = re.compile(r"(?<![\w@])@relation\s*\(")

_LEADING_LIST_RE = re.compile(r"^\s*(?:fields\s*:\s*)?\[(?P<items>[^\]]*)\]")
_FIELDS_ARGUMENT_RE = re.compile(r"\bfields\s*:\s*\[(?P<items>[^\]]*)\]")
_REFERENCES_ARGUMENT_RE = re.compile(r"\breferences\s*:\s*\[(?P<items>[^\]]*)\]")
_ACTION_ARGUMENT_RE = re.compile(r"\b(?P<event>onDelete|onUpdate)\s*:\s*(?P<action>\w+)")
_NAME_ARGUMENT_RE = re.compile(r'\bname\s*:\s*"(?P<name>(?:[^"\\]|\\.)*)"')
_SORT_ARGUMENT_RE = re.compile(r"\(.*\)$", re.DOTALL)


@dataclass(frozen=True)
class _Block:
    kind: str
    name: str
    lines: tuple[tuple[int, str], ...]


@dataclass
class _ModelDraft:
    name: str
    fields: list[FieldContract]
    id_fields: list[str]
    primary_key: PrimaryKeyConstraint | None
    unique_constraints: list[UniqueConstraint]
    indexes: list[IndexConstraint]
    foreign_keys: list[ForeignKeyConstraint]


def parse_prisma_schema(text: str) -> ConstraintContract:
    """
    Parse a Prisma schema into a constraint contract.

    Scalar and enum fields become model fields. Relation fields are not
    fields themselves; the side holding `@relation(fields: ..., references:
    ...)` contributes a foreign key instead. `@@id`, `@@unique` and `@@index`
    block attributes become the model's key, unique and index constraints.

    Args:
        text: Prisma schema source text.

    Returns:
        ConstraintContract: One model per `model` block.

    Raises:
        SchemaParseError: If braces are unbalanced, a line cannot be parsed or
            the schema describes an invalid contract.
    """
    blocks = _read_blocks(text)
    model_names = frozenset(block.name for block in blocks if block.kind == "model")

    for block in blocks:
        if block.kind == "view":
            logger.warning("Ignoring Prisma view %s", block.name)

    try:
        contract = ConstraintContract(
            models=tuple(
                _build_model(block, model_names)
                for block in blocks
                if block.kind == "model"
            ),
        )
    except ValidationError as error:
        raise SchemaParseError(
            f"Prisma schema describes an invalid contract: {error}",
        ) from error

    logger.debug("Parsed %d models from Prisma schema", len(contract.models))
    return contract


def _read_blocks(text: str) -> list[_Block]:
    """
    Group schema lines into top-level blocks, dropping comments.

    Returns:
        list[_Block]: Blocks in declaration order, with numbered body lines.

    Raises:
        SchemaParseError: On content outside a block or unbalanced braces.
    """
    blocks: list[_Block] = []
    header: re.Match[str] | None = None
    body: list[tuple[int, str]] = []

    for number, raw in enumerate(text.splitlines(), start=1):
        line = _strip_comment(raw).strip()
        if not line:
            continue

        if header is None:
            header = _BLOCK_RE.match(line)
            if header is None:
                raise SchemaParseError(
                    f"Line {number}: unexpected content outside a block: {line!r}",
                )
            body = []
            continue

        if line == "}":
            blocks.append(
                _Block(header.group("kind"), header.group("name"), tuple(body)),
            )
            header = None
            continue

        unquoted = _STRING_RE.sub("", line)
        if "{" in unquoted or "}" in unquoted:
            raise SchemaParseError(
                f'Line {number}: unbalanced braces in block "{header.group("name")}"',
            )
        body.append((number, line))

    if header is not None:
        raise SchemaParseError(f'Block "{header.group("name")}" is never closed')

    return blocks


def _build_model(block: _Block, model_names: frozenset[str]) -> ModelContract:
    draft = _ModelDraft(block.name, [], [], None, [], [], [])

    for number, line in block.lines:
        if line.startswith("@@"):
            _apply_block_attribute(draft, number, line)
        else:
            _apply_field(draft, number, line, model_names)

    if draft.id_fields:
        if draft.primary_key is not None:
            raise SchemaParseError(
                f'Model "{draft.name}" declares both @id and @@id',
            )
        draft.primary_key = PrimaryKeyConstraint(fields=tuple(draft.id_fields))

    known = {field.name for field in draft.fields}
    constrained = (
        draft.primary_key.fields if draft.primary_key is not None else (),
        *(constraint.fields for constraint in draft.unique_constraints),
        *(index.fields for index in draft.indexes),
        *(fk.fields for fk in draft.foreign_keys),
    )
    for fields in constrained:
        missing = [name for name in fields if name not in known]
        if missing:
            raise SchemaParseError(
                f'Constraint on "{draft.name}" references unknown field(s) '
                f"{', '.join(missing)}",
            )

    return ModelContract(
        name=draft.name,
        fields=tuple(draft.fields),
        primary_key=draft.primary_key,
        unique_constraints=tuple(draft.unique_constraints),
        indexes=tuple(draft.indexes),
        foreign_keys=tuple(draft.foreign_keys),
    )


def _apply_field(
    draft: _ModelDraft,
    number: int,
    line: str,
    model_names: frozenset[str],
) -> None:
    """
    Add one field line to the draft: a scalar field, or a relation that may
    carry a foreign key.

    Raises:
        SchemaParseError: If the line is not a field declaration.
    """
    declared = _FIELD_RE.match(line)
    if declared is None:
        raise SchemaParseError(
            f'Line {number}: cannot parse field {line!r} in model "{draft.name}"',
        )

    name = declared.group("name")
    field_type = declared.group("type")
    attributes = _STRING_RE.sub('""', declared.group("attributes"))

    if field_type in model_names:
        relation = _RELATION_ATTRIBUTE_RE.search(attributes)
        if relation is not None:
            arguments, _ = enclosed(attributes, relation.end() - 1)
            foreign_key = _relation_foreign_key(draft.name, arguments, field_type)
            if foreign_key is not None:
                draft.foreign_keys.append(foreign_key)
        return

    draft.fields.append(
        FieldContract(
            name=name,
            type="Unsupported" if field_type.startswith("Unsupported") else field_type,
            is_nullable=declared.group("optional") is not None,
            has_default=_DEFAULT_ATTRIBUTE_RE.search(attributes) is not None,
            is_list=declared.group("list") is not None,
        ),
    )

    if _ID_ATTRIBUTE_RE.search(attributes):
        draft.id_fields.append(name)
    if _UNIQUE_ATTRIBUTE_RE.search(attributes):
        draft.unique_constraints.append(UniqueConstraint(fields=(name,)))


def _apply_block_attribute(draft: _ModelDraft, number: int, line: str) -> None:
    attribute = _BLOCK_ATTRIBUTE_RE.match(line)
    if attribute is None:
        raise SchemaParseError(
            f'Line {number}: cannot parse attribute {line!r} in model "{draft.name}"',
        )

    kind = attribute.group("name")
    if kind not in ("id", "unique", "index"):
        return

    arguments = attribute.group("arguments") or ""
    listed = _LEADING_LIST_RE.match(_STRING_RE.sub('""', arguments))
    if listed is None:
        raise SchemaParseError(
            f'Line {number}: @@{kind} on "{draft.name}" has no field list',
        )

    fields = _field_names(listed.group("items"), number)
    named = _NAME_ARGUMENT_RE.search(arguments)
    name = named.group("name") if named is not None else None

    if kind == "id":
        if draft.primary_key is not None:
            raise SchemaParseError(f'Model "{draft.name}" declares @@id twice')
        draft.primary_key = PrimaryKeyConstraint(fields=fields, name=name)
    elif kind == "unique":
        draft.unique_constraints.append(UniqueConstraint(fields=fields, name=name))
    else:
        draft.indexes.append(IndexConstraint(fields=fields, name=name))


def _relation_foreign_key(
    model: str,
    arguments: str,
    target: str,
) -> ForeignKeyConstraint | None:
    """
    Build the foreign key described by `@relation` arguments.

    Returns:
        ForeignKeyConstraint | None: The foreign key, or None on the side of
            the relation that holds no `fields` argument.
    """
    fields = _FIELDS_ARGUMENT_RE.search(arguments)
    if fields is None:
        return None

    references = _REFERENCES_ARGUMENT_RE.search(arguments)
    if references is None:
        raise SchemaParseError(
            f'Relation from "{model}" to "{target}" has fields but no references',
        )

    actions = {
        action.group("event"): action.group("action")
        for action in _ACTION_ARGUMENT_RE.finditer(arguments)
    }
    return ForeignKeyConstraint(
        fields=_field_names(fields.group("items")),
        referenced_model=target,
        referenced_fields=_field_names(references.group("items")),
        on_delete=to_referential_action(actions.get("onDelete")),
        on_update=to_referential_action(actions.get("onUpdate")),
    )


def _field_names(items: str, number: int | None = None) -> tuple[str, ...]:
    names = tuple(
        _SORT_ARGUMENT_RE.sub("", item).strip() for item in split_top_level(items)
    )
    invalid = [name for name in names if not name.isidentifier()]
    if not names or invalid:
        location = f"Line {number}: " if number is not None else ""
        raise SchemaParseError(f"{location}invalid field list [{items.strip()}]")
    return names


def _strip_comment(line: str) -> str:
    in_string = False
    escaped = False

    for index, char in enumerate(line):
        if in_string:
            if escaped:
                escaped = False
            elif char == "\\":
                escaped = True
            elif char == '"':
                in_string = False
        elif char == '"':
            in_string = True
        elif line.startswith("//", index):
            return line[:index]

    return line

# audit/formatters.py

from collections.abc import Iterable

from schema_audit.schemas import ForeignKeyConstraint


def format_fields(fields: Iterable[str]) -> str:
    """
    Join field names into a comma-separated list.

    Returns:
        str: e.g. "studentId, courseId".
    """
    return ", ".join(fields)


def format_field_tuple(fields: Iterable[str]) -> str:
    """
    Render field names as a parenthesised tuple.

    Returns:
        str: e.g. "(studentId, courseId)".
    """
    return f"({format_fields(fields)})"


def format_field_list(fields: Iterable[str]) -> str:
    """
    Render field names as a bracketed list.

    Returns:
        str: e.g. "[grade, enrolledAt]".
    """
    return f"[{format_fields(fields)}]"


def format_location(model: str, field: str | None) -> str:
    """
    Render a finding location as `Model` or `Model.field`.

    Returns:
        str: The qualified location.
    """
    return model if field is None else f"{model}.{field}"


def format_foreign_key(fk: ForeignKeyConstraint) -> str:
    """
    Render a foreign key with its referential actions.

    Returns:
        str: e.g. "(authorId) -> User(id) [onDelete: Cascade, onUpdate: NoAction]".
    """
    return (
        f"{format_field_tuple(fk.fields)} -> "
        f"{fk.referenced_model}{format_field_tuple(fk.referenced_fields)} "
        f"[onDelete: {fk.on_delete}, onUpdate: {fk.on_update}]"
    )

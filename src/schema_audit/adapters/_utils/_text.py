# _utils/_text.py

from schema_audit.errors import SchemaParseError

_OPENERS = {"(": ")", "[": "]"}
_CLOSERS = frozenset(_OPENERS.values())


def _closing_quote(text: str, start: int) -> int:
    """
    Find the quote closing the literal or identifier opened at `start`.

    A doubled quote character inside the literal is an escaped quote.

    Returns:
        int: Index of the closing quote.

    Raises:
        SchemaParseError: If the literal is never closed.
    """
    quote = text[start]
    position = start + 1
    while True:
        end = text.find(quote, position)
        if end == -1:
            raise SchemaParseError(
                f"Unterminated quoted text starting with {text[start:start + 20]!r}",
            )
        if text[end + 1 : end + 2] == quote:
            position = end + 2
            continue
        return end


def split_top_level(body: str, separator: str = ",") -> list[str]:
    """
    Split `body` at separators that sit outside quotes and brackets.

    Args:
        body: Text to split, e.g. the inside of a column list.
        separator: Single separator character.

    Returns:
        list[str]: Stripped, non-empty parts.

    Raises:
        SchemaParseError: If brackets or quotes are unbalanced.
    """
    parts: list[str] = []
    current: list[str] = []
    expected: list[str] = []
    index = 0

    while index < len(body):
        char = body[index]

        if char in "'\"":
            end = _closing_quote(body, index)
            current.append(body[index : end + 1])
            index = end + 1
            continue

        if char in _OPENERS:
            expected.append(_OPENERS[char])
        elif char in _CLOSERS:
            if not expected or expected.pop() != char:
                raise SchemaParseError(f"Unbalanced {char!r} in {body.strip()!r}")
        elif char == separator and not expected:
            parts.append("".join(current).strip())
            current = []
            index += 1
            continue

        current.append(char)
        index += 1

    if expected:
        raise SchemaParseError(f"Unbalanced brackets in {body.strip()!r}")

    parts.append("".join(current).strip())
    return [part for part in parts if part]


def enclosed(text: str, open_index: int) -> tuple[str, int]:
    """
    Extract the text inside the bracket pair opened at `open_index`.

    Args:
        text: Text containing the bracketed group.
        open_index: Index of the opening "(" or "[".

    Returns:
        tuple[str, int]: The inner text and the index just past the closer.

    Raises:
        SchemaParseError: If the group is never closed.
    """
    expected = [_OPENERS[text[open_index]]]
    index = open_index + 1

    while index < len(text):
        char = text[index]
        if char in "'\"":
            index = _closing_quote(text, index) + 1
            continue
        if char in _OPENERS:
            expected.append(_OPENERS[char])
        elif char in _CLOSERS:
            if expected.pop() != char:
                raise SchemaParseError(f"Unbalanced {char!r} in {text.strip()!r}")
            if not expected:
                return text[open_index + 1 : index], index + 1
        index += 1

    raise SchemaParseError(f"Unclosed {text[open_index]!r} in {text.strip()!r}")

"""Small text helpers: number grouping, pluralising, quoting and formatting."""

from __future__ import annotations

import string
from typing import IO, Iterable

_PRINTABLE = frozenset(range(0x21, 0x7F)) | {0x20}
_HEX_DIGITS = frozenset(string.hexdigits)


def add_commas_to(value: int) -> str:
    """Return ``value`` written with commas between groups of three digits."""
    text = str(value)
    chunks = [text[max(0, end - 3):end] for end in range(len(text), 0, -3)]
    return ",".join(reversed(chunks))


def pluralize(value: int, singular: str, plural: str | None = None) -> str:
    """Return the quantity followed by the singular or plural noun."""
    if plural is None:
        plural = singular + "s"
    return f"{add_commas_to(value)} {singular if value == 1 else plural}"


def quoted_version_of(text: str) -> str:
    """Return ``text`` in double quotes with quotes, backslashes and
    non-printable bytes escaped."""
    parts = ['"']
    for byte in text.encode("utf-8", errors="surrogateescape"):
        char = chr(byte)
        if char in "\"'\\":
            parts.append("\\" + char)
        elif byte in _PRINTABLE:
            parts.append(char)
        else:
            parts.append(f"\\x{byte:02x}")
    parts.append('"')
    return "".join(parts)


def _next_char(stream: IO[str]) -> str:
    char = stream.read(1)
    if not char:
        raise ValueError("Unexpected end of quoted string")
    return char


def read_quoted_version_of(stream: IO[str]) -> str:
    """Read one string written by :func:`quoted_version_of` from a text stream.

    Raises ValueError if the input is not a well-formed quoted string.
    """
    if stream.read(1) != '"':
        raise ValueError("Quoted string must start with a double quote")

    buffer = bytearray()
    while True:
        char = _next_char(stream)
        if char == '"':
            return buffer.decode("utf-8", errors="surrogateescape")
        if char != "\\":
            buffer += char.encode("utf-8", errors="surrogateescape")
            continue

        escape = _next_char(stream)
        if escape in "\\'\"":
            buffer += escape.encode("ascii")
        elif escape == "x":
            digits = _next_char(stream) + _next_char(stream)
            if not all(d in _HEX_DIGITS for d in digits):
                raise ValueError(f"Invalid hex escape: \\x{digits}")
            buffer.append(int(digits, 16))
        else:
            raise ValueError(f"Unknown escape sequence: \\{escape}")


def _as_text(value: object) -> str:
    if isinstance(value, bool):
        return str(int(value))
    if isinstance(value, float):
        return f"{value:.6f}"
    return str(value)


def format_pattern(pattern: str, *args: object) -> str:
    """Replace each ``%s`` in ``pattern`` in turn with the next argument.

    Raises ValueError if the number of arguments and placeholders differ.
    """
    pieces = []
    rest = pattern
    for arg in args:
        index = rest.find("%s")
        if index == -1:
            raise ValueError("No pattern to replace?")
        pieces.append(rest[:index])
        pieces.append(_as_text(arg))
        rest = rest[index + 2:]
    if "%s" in rest:
        raise ValueError("Unmatched pattern string?")
    pieces.append(rest)
    return "".join(pieces)


def conjunction_join(items: Iterable[str], conjunction: str) -> str:
    """Join items as ``A``, ``A and B`` or ``A, B, and C``."""
    values = list(items)
    if len(values) == 1:
        return values[0]
    if len(values) == 2:
        return f"{values[0]} {conjunction} {values[1]}"
    if not values:
        return ""
    return ", ".join(values[:-1]) + f", {conjunction} {values[-1]}"
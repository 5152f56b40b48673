"""String-to-string transforms.

Everything is total except `replace`, which rejects invalid patterns.
"""

from __future__ import annotations

import json
import re
from typing import Any, Iterable

from core.errors import InvalidInput, InvalidPattern, ParseError


def reverse(text: str) -> str:
    return text[::-1]


def uppercase(text: str) -> str:
    return text.upper()


def lowercase(text: str) -> str:
    return text.lower()


def capitalize(text: str) -> str:
    """Uppercase the first character only; the rest is left untouched."""

    return text[:1].upper() + text[1:]


def trim(text: str) -> str:
    return text.strip()


def split(separator: str, text: str) -> list[str]:
    # str.split rejects an empty separator; split into characters instead.
    if separator == "":
        return list(text)
    return text.split(separator)


def render_item(value: Any) -> str:
    """Text form of a JSON value when it is joined or written to a cell."""

    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, str):
        return value
    if isinstance(value, (dict, list)):
        return json.dumps(value, ensure_ascii=False, separators=(",", ":"))
    return str(value)


def join(separator: str, items: Iterable[Any]) -> str:
    return separator.join(render_item(item) for item in items)


def join_json(separator: str, array_text: str) -> str:
    """`join` for an array given as JSON text."""

    try:
        items = json.loads(array_text)
    except json.JSONDecodeError as exc:
        raise ParseError(f"invalid JSON array: {exc}") from exc
    if not isinstance(items, list):
        raise InvalidInput("argument must be a JSON array")
    return join(separator, items)


def replace(pattern: str, replacement: str, text: str) -> str:
    """Replace every match of the regex `pattern`."""

    try:
        regex = re.compile(pattern)
        return regex.sub(replacement, text)
    except re.error as exc:
        raise InvalidPattern(f"invalid pattern: {exc}") from exc


def length(text: str) -> int:
    return len(text)


def count(substring: str, text: str) -> int:
    """Non-overlapping occurrences of `substring`, taken literally."""

    return len(re.findall(re.escape(substring), text))

"""JSON and CSV operations over `StructuredValue`.

Rules:
- Parsing keeps key order and integer precision (plain `json` module).
- Every transform returns a new value; inputs are never mutated.
- CSV is split on commas and line breaks; there is no quoting.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Iterable, Mapping

from adapters import filesystem
from core.domain.models import StructuredValue, TabularRow
from core.errors import InvalidInput, ParseError, PathNotFound
from core.services.text_transforms import render_item


def _reject_constant(name: str) -> Any:
    raise ValueError(f"{name} is not valid JSON")


def parse(text: str) -> StructuredValue:
    try:
        return json.loads(text, parse_constant=_reject_constant)
    except ValueError as exc:
        # JSONDecodeError is a ValueError subclass.
        raise ParseError(f"JSON parse error: {exc}") from exc


def stringify(value: StructuredValue, pretty: bool = True) -> str:
    try:
        if pretty:
            return json.dumps(value, ensure_ascii=False, indent=2, allow_nan=False)
        return json.dumps(value, ensure_ascii=False, separators=(",", ":"), allow_nan=False)
    except (TypeError, ValueError) as exc:
        raise InvalidInput(f"value is not JSON serialisable: {exc}") from exc


def validate(text: str) -> bool:
    try:
        parse(text)
    except ParseError:
        return False
    return True


def minify(text: str) -> str:
    return stringify(parse(text), pretty=False)


def beautify(text: str) -> str:
    return stringify(parse(text), pretty=True)


def extract_path(value: StructuredValue, path: str) -> StructuredValue:
    """Follow a dot-separated chain of mapping keys (`a.b.c`)."""

    current = value
    for part in path.split("."):
        if not isinstance(current, dict) or part not in current:
            raise PathNotFound(path)
        current = current[part]
    return current


def deep_merge(base: StructuredValue, overlay: StructuredValue) -> StructuredValue:
    """Merge `overlay` into a copy of `base`.

    Only mappings are merged recursively; arrays and scalars in `overlay`
    replace whatever `base` holds at the same key.
    """

    if not isinstance(base, dict) or not isinstance(overlay, dict):
        return overlay

    result = dict(base)
    for key, value in overlay.items():
        current = result.get(key)
        if isinstance(value, dict) and isinstance(current, dict):
            result[key] = deep_merge(current, value)
        else:
            result[key] = value
    return result


def load_file(path: Path) -> StructuredValue:
    """Read and parse a JSON file."""

    text = filesystem.read_text(path)
    try:
        return parse(text)
    except ParseError as exc:
        raise ParseError(f"{path}: {exc}") from exc


def merge_files(first: Path, second: Path) -> StructuredValue:
    return deep_merge(load_file(first), load_file(second))


def csv_parse(text: str) -> list[TabularRow]:
    lines = text.split("\n")
    if not lines:
        return []

    headers = [header.strip() for header in lines[0].split(",")]
    rows: list[TabularRow] = []
    for line in lines[1:]:
        if not line.strip():
            continue
        values = [value.strip() for value in line.split(",")]
        # Short rows are padded; fields beyond the header are dropped.
        row: TabularRow = {}
        for index, header in enumerate(headers):
            row[header] = values[index] if index < len(values) else ""
        rows.append(row)
    return rows


def csv_headers(rows: Iterable[Mapping[str, Any]]) -> list[str]:
    """Union of keys across rows, in first-seen order."""

    seen: dict[str, None] = {}
    for row in rows:
        for key in row:
            seen.setdefault(key, None)
    return list(seen)


def csv_stringify(rows: Any) -> str:
    if not isinstance(rows, list) or not rows:
        raise InvalidInput("argument must be a non-empty array")
    if not all(isinstance(row, dict) for row in rows):
        raise InvalidInput("every array element must be an object")

    headers = csv_headers(rows)
    lines = [",".join(headers)]
    for row in rows:
        lines.append(",".join(render_item(row.get(header)) for header in headers))
    return "\n".join(lines) + "\n"


def csv_to_json(text: str) -> str:
    return stringify(csv_parse(text), pretty=True)


def json_to_csv(text: str) -> str:
    return csv_stringify(parse(text))

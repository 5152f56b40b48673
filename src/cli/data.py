"""`toolbelt-data`: JSON, CSV, text, encoding, hashing and formatting."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated, Callable

import typer

from cli.dispatch import require, run_app, tool_app
from cli.ui_components import print_success
from core.config import AppSettings
from core.domain.models import StructuredValue
from core.errors import ParseError, UnknownCommand
from core.services import codec, formatters, structured, text_transforms
from core.services.text_transforms import render_item

app = tool_app("Data processing and conversion tools.")
json_app = tool_app("JSON processing.")
csv_app = tool_app("CSV processing.")
text_app = tool_app("Text processing.")

app.add_typer(json_app, name="json")
app.add_typer(csv_app, name="csv")
app.add_typer(text_app, name="text")

Text = Annotated[str | None, typer.Argument(help="Input text.", show_default=False)]
JsonText = Annotated[str | None, typer.Argument(help="JSON string.", show_default=False)]
CsvText = Annotated[str | None, typer.Argument(help="CSV string.", show_default=False)]
Separator = Annotated[str | None, typer.Argument(help="Literal separator.", show_default=False)]


def _echo_value(value: StructuredValue) -> None:
    """Scalars are printed bare; containers and null as pretty JSON."""

    if value is None or isinstance(value, (dict, list)):
        typer.echo(structured.stringify(value, pretty=True))
    else:
        typer.echo(render_item(value))


# --- json ---


@json_app.command("parse")
def json_parse(text: JsonText = None) -> None:
    """Parse a JSON string and pretty-print it."""

    text = require(text, "missing JSON string argument")
    typer.echo(structured.stringify(structured.parse(text), pretty=True))


@json_app.command("stringify")
def json_stringify(text: Annotated[str | None, typer.Argument(help="Object as JSON.")] = None) -> None:
    """Serialise an object given as JSON."""

    text = require(text, "missing object argument")
    try:
        value = structured.parse(text)
    except ParseError as exc:
        raise ParseError("cannot parse the object argument, pass a valid JSON string") from exc
    typer.echo(structured.stringify(value, pretty=True))


@json_app.command("validate")
def json_validate(text: JsonText = None) -> None:
    """Check that a string is valid JSON."""

    text = require(text, "missing JSON string argument")
    if not structured.validate(text):
        raise ParseError("JSON string is invalid")
    print_success("JSON string is valid")


@json_app.command("minify")
def json_minify(text: JsonText = None) -> None:
    """Print JSON in its most compact form."""

    text = require(text, "missing JSON string argument")
    typer.echo(structured.minify(text))


@json_app.command("beautify")
def json_beautify(text: JsonText = None) -> None:
    """Print JSON indented by two spaces."""

    text = require(text, "missing JSON string argument")
    typer.echo(structured.beautify(text))


@json_app.command("merge")
def json_merge(
    first: Annotated[Path | None, typer.Argument(help="Base JSON file.")] = None,
    second: Annotated[Path | None, typer.Argument(help="Overlay JSON file.")] = None,
) -> None:
    """Deep-merge two JSON files (the second wins)."""

    first = require(first, "two JSON file paths are required")
    second = require(second, "two JSON file paths are required")
    typer.echo(structured.stringify(structured.merge_files(first, second), pretty=True))


@json_app.command("extract")
def json_extract(
    path: Annotated[str | None, typer.Argument(help="Dot-separated key path, e.g. a.b.c")] = None,
    text: JsonText = None,
) -> None:
    """Extract the value at a key path."""

    path = require(path, "missing path or JSON string argument")
    text = require(text, "missing path or JSON string argument")
    _echo_value(structured.extract_path(structured.parse(text), path))


# --- csv ---


@csv_app.command("parse")
def csv_parse(text: CsvText = None) -> None:
    """Parse CSV (first line is the header) into JSON."""

    text = require(text, "missing CSV string argument")
    typer.echo(structured.csv_to_json(text))


@csv_app.command("stringify")
def csv_stringify(text: Annotated[str | None, typer.Argument(help="JSON array of objects.")] = None) -> None:
    """Render a JSON array of objects as CSV."""

    text = require(text, "missing array argument")
    typer.echo(structured.json_to_csv(text), nl=False)


@csv_app.command("tojson")
def csv_tojson(text: CsvText = None) -> None:
    """Convert CSV to JSON."""

    text = require(text, "missing CSV string argument")
    typer.echo(structured.csv_to_json(text))


@csv_app.command("fromjson")
def csv_fromjson(text: JsonText = None) -> None:
    """Convert a JSON array of objects to CSV."""

    text = require(text, "missing JSON string argument")
    typer.echo(structured.json_to_csv(text), nl=False)


# --- text ---


def _unary(name: str, func: Callable[[str], object], doc: str) -> None:
    def command(text: Text = None) -> None:
        text = require(text, "missing string argument")
        typer.echo(func(text))

    command.__doc__ = doc
    text_app.command(name)(command)


_unary("reverse", text_transforms.reverse, "Reverse a string.")
_unary("uppercase", text_transforms.uppercase, "Convert to upper case.")
_unary("lowercase", text_transforms.lowercase, "Convert to lower case.")
_unary("capitalize", text_transforms.capitalize, "Uppercase the first character.")
_unary("trim", text_transforms.trim, "Strip surrounding whitespace.")
_unary("length", text_transforms.length, "Print the string length.")


@text_app.command("split")
def text_split(separator: Separator = None, text: Text = None) -> None:
    """Split a string on a literal separator (prints a JSON array)."""

    separator = require(separator, "missing separator or string argument")
    text = require(text, "missing separator or string argument")
    typer.echo(structured.stringify(text_transforms.split(separator, text), pretty=False))


@text_app.command("join")
def text_join(
    separator: Separator = None,
    array: Annotated[str | None, typer.Argument(help="JSON array.")] = None,
) -> None:
    """Join the elements of a JSON array."""

    separator = require(separator, "missing separator or array argument")
    array = require(array, "missing separator or array argument")
    typer.echo(text_transforms.join_json(separator, array))


@text_app.command("replace")
def text_replace(
    pattern: Annotated[str | None, typer.Argument(help="Regular expression.")] = None,
    replacement: Annotated[str | None, typer.Argument(help="Replacement template.")] = None,
    text: Text = None,
) -> None:
    """Replace every match of a regular expression."""

    message = "missing pattern, replacement or string argument"
    pattern = require(pattern, message)
    replacement = require(replacement, message)
    text = require(text, message)
    typer.echo(text_transforms.replace(pattern, replacement, text))


@text_app.command("count")
def text_count(
    substring: Annotated[str | None, typer.Argument(help="Literal substring.")] = None,
    text: Text = None,
) -> None:
    """Count non-overlapping occurrences of a literal substring."""

    substring = require(substring, "missing substring or string argument")
    text = require(text, "missing substring or string argument")
    typer.echo(text_transforms.count(substring, text))


# --- encode / decode / hash / format ---

Data = Annotated[str | None, typer.Argument(help="Input data.", show_default=False)]
Codec = Annotated[str | None, typer.Argument(metavar="FORMAT", help="base64 | url | html")]


@app.command("encode")
def encode(fmt: Codec = None, data: Data = None) -> None:
    """Encode data."""

    fmt = require(fmt, "missing encoding format or data argument")
    data = require(data, "missing encoding format or data argument")
    typer.echo(codec.encode(fmt, data))


@app.command("decode")
def decode(fmt: Codec = None, data: Data = None) -> None:
    """Decode data."""

    fmt = require(fmt, "missing decoding format or data argument")
    data = require(data, "missing decoding format or data argument")
    typer.echo(codec.decode(fmt, data))


@app.command("hash")
def hash_(
    algorithm: Annotated[str | None, typer.Argument(help="md5 | sha1 | sha256")] = None,
    data: Data = None,
) -> None:
    """Hex digest of data."""

    algorithm = require(algorithm, "missing hash algorithm or data argument")
    data = require(data, "missing hash algorithm or data argument")
    typer.echo(codec.digest(algorithm, data))


def _format_currency(value: str, extra: str | None, settings: AppSettings) -> str:
    return formatters.currency(value, extra or settings.default_currency)


def _format_number(value: str, extra: str | None, settings: AppSettings) -> str:
    decimals = formatters.parse_int(extra) if extra is not None else settings.default_decimals
    return formatters.number(value, decimals)


def _format_date(value: str, extra: str | None, settings: AppSettings) -> str:
    return formatters.date(value, extra)


def _format_bytes(value: str, extra: str | None, settings: AppSettings) -> str:
    return formatters.format_bytes(formatters.parse_int(value))


FORMATTERS: dict[str, Callable[[str, str | None, AppSettings], str]] = {
    "currency": _format_currency,
    "number": _format_number,
    "date": _format_date,
    "bytes": _format_bytes,
}


@app.command("format")
def format_(
    kind: Annotated[
        str | None,
        typer.Argument(metavar="TYPE", help="currency | number | date | bytes"),
    ] = None,
    value: Data = None,
    extra: Annotated[
        str | None,
        typer.Argument(help="Currency code, decimal places or date pattern.", show_default=False),
    ] = None,
) -> None:
    """Format a value for humans."""

    kind = require(kind, "missing format type or data argument")
    value = require(value, "missing format type or data argument")
    formatter = FORMATTERS.get(kind)
    if formatter is None:
        raise UnknownCommand("format type", kind)
    typer.echo(formatter(value, extra, AppSettings()))


def run() -> None:
    raise SystemExit(run_app(app, prog_name="toolbelt-data"))

"""Human-readable formatting of numbers, money, dates and byte counts."""

from __future__ import annotations

import math
import re
from datetime import date as _date
from datetime import datetime, time, timezone
from decimal import ROUND_HALF_UP, Context, Decimal, InvalidOperation

from babel.numbers import format_currency, get_currency_precision, list_currencies
from pydantic import TypeAdapter, ValidationError

from core.errors import InvalidDate, InvalidInput, InvalidNumber

LOCALE = "en_US"
BYTE_UNITS = ("Bytes", "KB", "MB", "GB", "TB")
DATE_TOKENS = ("YYYY", "MM", "DD", "HH", "mm", "ss")

_NUMBER = re.compile(r"^\s*[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?\s*$")
_CURRENCY_CODE = re.compile(r"^[A-Za-z]{3}$")
# Wide enough to quantize any finite double to 100 places.
_DECIMAL_CONTEXT = Context(prec=1200)

_datetime_adapter = TypeAdapter(datetime)
_date_adapter = TypeAdapter(_date)


def parse_number(value: str) -> float:
    if not _NUMBER.match(value):
        raise InvalidNumber(f'invalid number "{value}"')
    number = float(value)
    if not math.isfinite(number):
        raise InvalidNumber(f'number out of range "{value}"')
    return number


def parse_int(value: str) -> int:
    try:
        return int(value.strip())
    except ValueError as exc:
        raise InvalidNumber(f'invalid integer "{value}"') from exc


def to_fixed(value: float, decimals: int) -> str:
    """Fixed-point text, rounding the exact binary value half away from zero."""

    if not 0 <= decimals <= 100:
        raise InvalidInput("decimal places must be between 0 and 100")
    quantum = Decimal(1).scaleb(-decimals)
    rounded = Decimal(value).quantize(quantum, rounding=ROUND_HALF_UP, context=_DECIMAL_CONTEXT)
    return format(rounded, "f")


def currency(value: str, currency_code: str = "USD") -> str:
    amount = parse_number(value)
    if not _CURRENCY_CODE.match(currency_code):
        raise InvalidInput(f'invalid currency code "{currency_code}"')
    code = currency_code.upper()
    if code not in list_currencies():
        raise InvalidInput(f'unknown currency code "{currency_code}"')

    # Round on the shortest decimal repr so 1.005 behaves like the user typed it.
    digits = get_currency_precision(code)
    quantum = Decimal(1).scaleb(-digits)
    rounded = Decimal(repr(amount)).quantize(quantum, rounding=ROUND_HALF_UP, context=_DECIMAL_CONTEXT)
    return format_currency(rounded, code, locale=LOCALE)


def number(value: str, decimals: int = 2) -> str:
    return to_fixed(parse_number(value), decimals)


def parse_datetime(text: str) -> datetime:
    """ISO 8601 date-time, date, or unix timestamp; naive values are UTC."""

    try:
        parsed = _datetime_adapter.validate_python(text.strip())
    except ValidationError:
        try:
            day = _date_adapter.validate_python(text.strip())
        except ValidationError as exc:
            raise InvalidDate(f'invalid date "{text}"') from exc
        parsed = datetime.combine(day, time(0, 0))

    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=timezone.utc)
    try:
        return parsed.astimezone(timezone.utc)
    except OverflowError as exc:
        raise InvalidDate(f'date out of range "{text}"') from exc


def iso_utc(moment: datetime) -> str:
    moment = moment.astimezone(timezone.utc)
    return (
        f"{moment.year:04d}-{moment.month:02d}-{moment.day:02d}"
        f"T{moment.hour:02d}:{moment.minute:02d}:{moment.second:02d}"
        f".{moment.microsecond // 1000:03d}Z"
    )


def date(text: str, pattern: str | None = None) -> str:
    """Format a date-time.

    Without `pattern` the result is ISO 8601 UTC. With a pattern, each token
    (`YYYY MM DD HH mm ss`) is replaced once, at its first occurrence only.
    """

    moment = parse_datetime(text)
    if not pattern:
        return iso_utc(moment)

    values = (
        str(moment.year),
        f"{moment.month:02d}",
        f"{moment.day:02d}",
        f"{moment.hour:02d}",
        f"{moment.minute:02d}",
        f"{moment.second:02d}",
    )
    formatted = pattern
    for token, replacement in zip(DATE_TOKENS, values):
        formatted = formatted.replace(token, replacement, 1)
    return formatted


def format_bytes(count: int) -> str:
    if count < 0:
        raise InvalidNumber(f"byte count must not be negative: {count}")
    if count == 0:
        return "0 Bytes"

    index = 0
    while index < len(BYTE_UNITS) - 1 and count >= 1024 ** (index + 1):
        index += 1
    try:
        scaled = _DECIMAL_CONTEXT.divide(Decimal(count), Decimal(1024**index)).quantize(
            Decimal("0.01"), rounding=ROUND_HALF_UP, context=_DECIMAL_CONTEXT
        )
    except InvalidOperation as exc:
        raise InvalidNumber(f"byte count too large: {count}") from exc
    text = format(scaled.normalize(_DECIMAL_CONTEXT), "f")
    return f"{text} {BYTE_UNITS[index]}"

"""Encoders, decoders and hashes over text.

All inputs are `str`; byte-level operations work on the UTF-8 encoding.
"""

from __future__ import annotations

import base64
import binascii
import hashlib
import re
from urllib.parse import quote, unquote

from core.errors import InvalidEncoding, UnknownCommand

FORMATS = ("base64", "url", "html")
ALGORITHMS = ("md5", "sha1", "sha256")

# Same unreserved set as encodeURIComponent.
_URL_SAFE = "-_.!~*'()"
_BAD_PERCENT = re.compile(r"%(?![0-9A-Fa-f]{2})")

# `&` must be escaped first and restored last.
_HTML_ENTITIES = (
    ("&", "&amp;"),
    ("<", "&lt;"),
    (">", "&gt;"),
    ('"', "&quot;"),
    ("'", "&#39;"),
)


def encode(fmt: str, data: str) -> str:
    if fmt not in FORMATS:
        raise UnknownCommand("encoding format", fmt)
    if fmt == "base64":
        return base64.b64encode(data.encode("utf-8")).decode("ascii")
    if fmt == "url":
        return quote(data, safe=_URL_SAFE)
    out = data
    for char, entity in _HTML_ENTITIES:
        out = out.replace(char, entity)
    return out


def decode(fmt: str, data: str) -> str:
    if fmt not in FORMATS:
        raise UnknownCommand("decoding format", fmt)
    if fmt == "base64":
        try:
            raw = base64.b64decode(data, validate=True)
            return raw.decode("utf-8")
        except (binascii.Error, UnicodeDecodeError) as exc:
            raise InvalidEncoding(f"invalid base64 input: {exc}") from exc
    if fmt == "url":
        if _BAD_PERCENT.search(data):
            raise InvalidEncoding("invalid URL encoding: malformed percent escape")
        try:
            return unquote(data, errors="strict")
        except UnicodeDecodeError as exc:
            raise InvalidEncoding(f"invalid URL encoding: {exc}") from exc
    out = data
    for char, entity in reversed(_HTML_ENTITIES):
        out = out.replace(entity, char)
    return out


def digest(algorithm: str, data: str) -> str:
    """Lowercase hex digest of `data` (UTF-8)."""

    if algorithm not in ALGORITHMS:
        raise UnknownCommand("hash algorithm", algorithm)
    h = hashlib.new(algorithm)
    h.update(data.encode("utf-8"))
    return h.hexdigest()

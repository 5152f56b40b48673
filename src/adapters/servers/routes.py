"""Route table shared by both demonstration servers."""

from __future__ import annotations

import json
import logging
from typing import Any

logger = logging.getLogger(__name__)

CORS_HEADERS: dict[str, str] = {
    "Content-Type": "application/json",
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET, POST, PUT, DELETE",
    "Access-Control-Allow-Headers": "Content-Type",
}

USERS = ("Alice", "Bob", "Charlie")


def route(
    method: str,
    path: str,
    body: bytes = b"",
    *,
    flavour: str = "toolbelt",
) -> tuple[int, dict[str, Any] | None]:
    """Return `(status, payload)`; a `None` payload means an empty body."""

    path = path.split("?", 1)[0]
    method = method.upper()

    if method == "OPTIONS":
        return 200, None
    if path == "/":
        return 200, {"message": f"Welcome to {flavour} server!"}
    if path == "/api/users" and method == "GET":
        return 200, {"users": list(USERS)}
    if path == "/api/users" and method == "POST":
        try:
            data = json.loads(body.decode("utf-8") or "null")
        except (UnicodeDecodeError, json.JSONDecodeError):
            return 400, {"error": "Invalid JSON"}
        logger.info("Received user data: %s", data)
        return 200, {"message": "User created successfully"}
    return 404, {"error": "Not Found"}


def encode_payload(payload: dict[str, Any] | None) -> bytes:
    if payload is None:
        return b""
    return json.dumps(payload).encode("utf-8")

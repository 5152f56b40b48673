"""httpx wrapper and the HTTP verbs used by the network tool.

- `build_async_client` standardises timeout, headers and redirects so every
  request behaves the same; tests swap the transport.
- Response bodies are decoded by content type: JSON becomes a
  `StructuredValue`, everything else stays text.
- Non-2xx responses raise `RemoteError` carrying the decoded outcome.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable

import httpx

from adapters import filesystem
from core.config import AppSettings
from core.domain.models import HttpOutcome, StatusReport, StructuredValue
from core.errors import NetworkError, ParseError, RemoteError, UnknownCommand
from core.services import structured

logger = logging.getLogger(__name__)

METHODS = ("GET", "POST", "PUT", "DELETE", "HEAD")


@dataclass
class RequestHooks:
    """Optional callbacks for UI layers (`--verbose` echo)."""

    on_request: Callable[[str, str, dict[str, str], Any], None] | None = None
    on_response: Callable[[HttpOutcome], None] | None = None


def build_async_client(
    settings: AppSettings | None = None,
    *,
    extra_headers: dict[str, str] | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> httpx.AsyncClient:
    """Create an `httpx.AsyncClient` with the shared defaults."""

    settings = settings or AppSettings()
    headers: dict[str, str] = {
        "User-Agent": settings.user_agent,
        "Accept": "*/*",
    }
    if extra_headers:
        headers.update(extra_headers)
    return httpx.AsyncClient(
        timeout=httpx.Timeout(settings.http_timeout_seconds),
        follow_redirects=settings.follow_redirects,
        headers=headers,
        transport=transport,
    )


def _decode_body(response: httpx.Response) -> StructuredValue:
    content_type = response.headers.get("content-type", "")
    if "application/json" in content_type and response.content:
        try:
            return structured.parse(response.text)
        except ParseError as exc:
            raise ParseError(f"server sent malformed JSON: {exc}") from exc
    return response.text


def _to_outcome(response: httpx.Response) -> HttpOutcome:
    return HttpOutcome(
        status=response.status_code,
        reason=response.reason_phrase,
        headers=dict(response.headers),
        body=_decode_body(response),
    )


async def _send(
    method: str,
    url: str,
    *,
    settings: AppSettings,
    headers: dict[str, str] | None = None,
    **kwargs: Any,
) -> httpx.Response:
    try:
        async with build_async_client(settings, extra_headers=headers) as client:
            return await client.request(method, url, **kwargs)
    except (httpx.HTTPError, httpx.InvalidURL) as exc:
        raise NetworkError(f"request error: {exc}") from exc


async def request(
    method: str,
    url: str,
    *,
    body: str | bytes | StructuredValue = None,
    headers: dict[str, str] | None = None,
    hooks: RequestHooks | None = None,
    settings: AppSettings | None = None,
) -> HttpOutcome:
    """Send one request and return the decoded outcome.

    `str`/`bytes` bodies are sent verbatim; any other non-None body is sent
    as JSON.
    """

    settings = settings or AppSettings()
    hooks = hooks or RequestHooks()
    method = method.upper()
    if method not in METHODS:
        raise UnknownCommand("HTTP method", method)

    kwargs: dict[str, Any] = {}
    if isinstance(body, (str, bytes)):
        kwargs["content"] = body
    elif body is not None:
        kwargs["json"] = body

    if hooks.on_request:
        hooks.on_request(method, url, headers or {}, body)
    logger.debug("%s %s", method, url)

    response = await _send(method, url, settings=settings, headers=headers, **kwargs)
    outcome = _to_outcome(response)
    logger.debug("%s %s -> %s", method, url, outcome.status)

    if hooks.on_response:
        hooks.on_response(outcome)
    if not outcome.ok:
        raise RemoteError(outcome)
    return outcome


async def download(
    url: str,
    path: Path,
    *,
    headers: dict[str, str] | None = None,
    settings: AppSettings | None = None,
) -> int:
    """Save the raw response bytes to `path`; returns the number of bytes."""

    settings = settings or AppSettings()
    response = await _send("GET", url, settings=settings, headers=headers)
    if not response.is_success:
        raise RemoteError(
            HttpOutcome(
                status=response.status_code,
                reason=response.reason_phrase,
                headers=dict(response.headers),
                body=response.text,
            )
        )
    filesystem.write_bytes(path, response.content)
    return len(response.content)


async def status(
    url: str,
    *,
    headers: dict[str, str] | None = None,
    settings: AppSettings | None = None,
) -> StatusReport:
    """HEAD probe; any status code is a valid answer."""

    settings = settings or AppSettings()
    response = await _send("HEAD", url, settings=settings, headers=headers)
    return StatusReport(
        url=url,
        status=response.status_code,
        reason=response.reason_phrase,
        content_type=response.headers.get("content-type"),
        content_length=response.headers.get("content-length"),
    )


def render_body(outcome: HttpOutcome) -> str:
    if outcome.is_structured:
        return structured.stringify(outcome.body, pretty=True)
    return outcome.body


def save_outcome(outcome: HttpOutcome, path: Path) -> None:
    filesystem.write_text(path, render_body(outcome))

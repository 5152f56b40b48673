"""`asyncio` streams flavour of the demonstration server.

One request per connection (`Connection: close`), HTTP/1.1 framing via
`Content-Length` only.
"""

from __future__ import annotations

import asyncio
import logging
from http import HTTPStatus
from typing import Callable

from adapters.servers.routes import CORS_HEADERS, encode_payload, route

logger = logging.getLogger(__name__)

FLAVOUR = "asyncio"
MAX_HEADER_LINES = 100


async def _read_request(reader: asyncio.StreamReader) -> tuple[str, str, bytes]:
    request_line = (await reader.readline()).decode("latin-1").strip()
    method, path, _version = request_line.split(" ", 2)

    length = 0
    for _ in range(MAX_HEADER_LINES):
        line = (await reader.readline()).decode("latin-1").strip()
        if not line:
            break
        name, _, value = line.partition(":")
        if name.strip().lower() == "content-length":
            length = int(value.strip() or 0)

    body = await reader.readexactly(length) if length > 0 else b""
    return method, path, body


def _render_response(status: int, data: bytes, *, head_only: bool = False) -> bytes:
    phrase = HTTPStatus(status).phrase
    lines = [f"HTTP/1.1 {status} {phrase}"]
    lines.extend(f"{name}: {value}" for name, value in CORS_HEADERS.items())
    lines.append(f"Content-Length: {len(data)}")
    lines.append("Connection: close")
    head = "\r\n".join(lines) + "\r\n\r\n"
    if head_only:
        return head.encode("latin-1")
    return head.encode("latin-1") + data


async def handle_connection(reader: asyncio.StreamReader, writer: asyncio.StreamWriter) -> None:
    try:
        try:
            method, path, body = await _read_request(reader)
        except (ValueError, asyncio.IncompleteReadError):
            writer.write(_render_response(400, encode_payload({"error": "Bad Request"})))
        else:
            status, payload = route(method, path, body, flavour=FLAVOUR)
            logger.info("%s %s -> %s", method, path, status)
            data = encode_payload(payload)
            writer.write(_render_response(status, data, head_only=method.upper() == "HEAD"))
        await writer.drain()
    finally:
        writer.close()
        await writer.wait_closed()


async def start_asyncio_server(host: str, port: int) -> asyncio.Server:
    return await asyncio.start_server(handle_connection, host, port)


def serve_asyncio(
    host: str,
    port: int,
    *,
    on_ready: Callable[[str, int], None] | None = None,
) -> None:
    """Serve until interrupted."""

    async def _main() -> None:
        server = await start_asyncio_server(host, port)
        bound_host, bound_port = server.sockets[0].getsockname()[:2]
        if on_ready:
            on_ready(bound_host, bound_port)
        async with server:
            await server.serve_forever()

    try:
        asyncio.run(_main())
    except KeyboardInterrupt:
        logger.info("shutting down")

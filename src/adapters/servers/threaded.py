"""`http.server` flavour of the demonstration server."""

from __future__ import annotations

import logging
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from typing import Callable

from adapters.servers.routes import CORS_HEADERS, encode_payload, route

logger = logging.getLogger(__name__)

FLAVOUR = "threaded"


class RouteHandler(BaseHTTPRequestHandler):
    server_version = "toolbelt-threaded/0.1"

    def _dispatch(self) -> None:
        length = int(self.headers.get("Content-Length") or 0)
        body = self.rfile.read(length) if length > 0 else b""
        status, payload = route(self.command, self.path, body, flavour=FLAVOUR)
        data = encode_payload(payload)

        self.send_response(status)
        for name, value in CORS_HEADERS.items():
            self.send_header(name, value)
        self.send_header("Content-Length", str(len(data)))
        self.end_headers()
        if self.command != "HEAD":
            self.wfile.write(data)

    do_GET = _dispatch
    do_HEAD = _dispatch
    do_PATCH = _dispatch
    do_POST = _dispatch
    do_PUT = _dispatch
    do_DELETE = _dispatch
    do_OPTIONS = _dispatch

    def log_message(self, format: str, *args) -> None:  # noqa: A002
        logger.info("%s %s", self.address_string(), format % args)


def build_threaded_server(host: str, port: int) -> ThreadingHTTPServer:
    return ThreadingHTTPServer((host, port), RouteHandler)


def serve_threaded(
    host: str,
    port: int,
    *,
    on_ready: Callable[[str, int], None] | None = None,
) -> None:
    """Serve until interrupted."""

    server = build_threaded_server(host, port)
    if on_ready:
        on_ready(*server.server_address[:2])
    try:
        server.serve_forever()
    except KeyboardInterrupt:
        logger.info("shutting down")
    finally:
        server.server_close()

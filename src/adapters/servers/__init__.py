"""Demonstration HTTP servers.

Both flavours share the route table in `routes`; they only differ in how the
socket is driven (`http.server` threads vs `asyncio` streams).
"""

from adapters.servers.routes import CORS_HEADERS, route
from adapters.servers.streams import serve_asyncio
from adapters.servers.threaded import build_threaded_server, serve_threaded

__all__ = [
    "CORS_HEADERS",
    "build_threaded_server",
    "route",
    "serve_asyncio",
    "serve_threaded",
]

"""`toolbelt-serve`: run one of the demonstration HTTP servers."""

from __future__ import annotations

from typing import Annotated

import typer

from adapters.servers import serve_asyncio, serve_threaded
from cli.dispatch import run_app, tool_app
from cli.ui_components import console
from core.config import AppSettings

app = tool_app("Demonstration HTTP servers.")

HostOpt = Annotated[str | None, typer.Option("--host", help="Bind address (default from settings).")]
PortOpt = Annotated[int | None, typer.Option("--port", min=0, max=65535, help="Port (default 3001).")]


def _announce(host: str, port: int) -> None:
    console.print(f"Server is running on http://{host}:{port}", highlight=False)


@app.command("threaded")
def threaded(host: HostOpt = None, port: PortOpt = None) -> None:
    """Serve with a thread per connection (http.server)."""

    settings = AppSettings()
    serve_threaded(host or settings.server_host, settings.server_port if port is None else port, on_ready=_announce)


@app.command("asyncio")
def asyncio_(host: HostOpt = None, port: PortOpt = None) -> None:
    """Serve from a single asyncio event loop."""

    settings = AppSettings()
    serve_asyncio(host or settings.server_host, settings.server_port if port is None else port, on_ready=_announce)


def run() -> None:
    raise SystemExit(run_app(app, prog_name="toolbelt-serve"))

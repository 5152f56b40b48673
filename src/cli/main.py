"""Umbrella CLI: `toolbelt <data|file|network|serve> ...`.

Each tool is also installed as its own executable (`toolbelt-data`, ...);
this app just mounts the same Typer apps under one name.
"""

from __future__ import annotations

from cli import data, files, network, serve
from cli.dispatch import run_app, tool_app

app = tool_app("Data, file and network command-line utilities.")
app.add_typer(data.app, name="data")
app.add_typer(files.app, name="file")
app.add_typer(network.app, name="network")
app.add_typer(serve.app, name="serve")


def run() -> None:
    raise SystemExit(run_app(app, prog_name="toolbelt"))

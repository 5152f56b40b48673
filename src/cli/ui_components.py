"""CLI UI helpers (Rich).

- Keeps presentation (consoles, tables, log handler) out of the commands.
- Payloads meant for pipes (JSON, CSV, file contents) go through
  `typer.echo` in the commands; Rich is used for human-facing output only.
"""

from __future__ import annotations

import logging
from pathlib import Path

from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from core.domain.models import DirectoryEntry, HttpOutcome, StatusReport
from core.services.formatters import format_bytes

console = Console(soft_wrap=True)
err_console = Console(stderr=True, soft_wrap=True)


def configure_logging(level: str) -> None:
    """Route stdlib logging to stderr through Rich (idempotent)."""

    root = logging.getLogger()
    if not any(isinstance(h, RichHandler) for h in root.handlers):
        handler = RichHandler(console=err_console, show_path=False, rich_tracebacks=False)
        handler.setFormatter(logging.Formatter("%(message)s"))
        root.addHandler(handler)
    root.setLevel(level)


def print_error(message: str) -> None:
    err_console.print(f"[bold red]Error:[/bold red] {escape(message)}", highlight=False)


def print_success(message: str) -> None:
    console.print(f"[green]{escape(message)}[/green]", highlight=False)


def build_listing_table(title: str, entries: list[DirectoryEntry]) -> Table:
    table = Table(title=title)
    table.add_column("Type", style="cyan", no_wrap=True)
    table.add_column("Name", style="white", overflow="fold")
    table.add_column("Size", style="magenta", no_wrap=True)
    for entry in entries:
        if entry.is_dir:
            table.add_row(escape("[DIR]"), escape(Path(entry.path).name), "<dir>")
        else:
            table.add_row(escape("[FILE]"), escape(Path(entry.path).name), format_bytes(entry.size or 0))
    return table


def print_status_report(report: StatusReport) -> None:
    console.print(f"URL: {escape(report.url)}", highlight=False)
    console.print(f"Status: {report.status} {report.reason}".rstrip(), highlight=False)
    console.print(f"Content-Type: {report.content_type or 'unknown'}", highlight=False)
    console.print(f"Content-Length: {report.content_length or 'unknown'}", highlight=False)


def print_request_echo(method: str, url: str, headers: dict[str, str], body: object) -> None:
    console.print(f"Sending {method} request to: {escape(url)}", highlight=False)
    if headers:
        console.print("Request headers:", highlight=False)
        console.print_json(data=headers)
    if body:
        console.print(f"Request body: {escape(str(body))}", highlight=False)


def print_response_echo(outcome: HttpOutcome) -> None:
    console.print(f"Response status: {outcome.status} {outcome.reason}".rstrip(), highlight=False)
    console.print("Response headers:", highlight=False)
    console.print_json(data=outcome.headers)

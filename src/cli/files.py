"""`toolbelt-file`: file and directory operations."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer
from rich.markup import escape

from adapters import filesystem
from cli.dispatch import require, run_app, tool_app
from cli.ui_components import build_listing_table, console, print_success
from core.services.formatters import format_bytes

app = tool_app("File and directory operations.")

FilePath = Annotated[Path | None, typer.Argument(help="File path.", show_default=False)]
DirPath = Annotated[Path | None, typer.Argument(help="Directory path.", show_default=False)]
Content = Annotated[str | None, typer.Argument(help="Content to write.", show_default=False)]
Source = Annotated[Path | None, typer.Argument(help="Source file.", show_default=False)]
Destination = Annotated[Path | None, typer.Argument(help="Destination file.", show_default=False)]


@app.command("read")
def read(path: FilePath = None) -> None:
    """Print a file's content."""

    path = require(path, "missing file path argument")
    typer.echo(filesystem.read_text(path))


@app.command("write")
def write(path: FilePath = None, content: Content = None) -> None:
    """Write content to a file (replacing it)."""

    path = require(path, "missing file path or content argument")
    content = require(content, "missing file path or content argument")
    filesystem.write_text(path, content)
    print_success(f"Wrote file: {path}")


@app.command("append")
def append(path: FilePath = None, content: Content = None) -> None:
    """Append content to a file (creating it if needed)."""

    path = require(path, "missing file path or content argument")
    content = require(content, "missing file path or content argument")
    filesystem.append_text(path, content)
    print_success(f"Appended to file: {path}")


@app.command("copy")
def copy(source: Source = None, destination: Destination = None) -> None:
    """Copy a file."""

    source = require(source, "missing source or destination argument")
    destination = require(destination, "missing source or destination argument")
    filesystem.copy(source, destination)
    print_success(f"Copied file: {source} -> {destination}")


@app.command("move")
def move(source: Source = None, destination: Destination = None) -> None:
    """Move or rename a file."""

    source = require(source, "missing source or destination argument")
    destination = require(destination, "missing source or destination argument")
    filesystem.move(source, destination)
    print_success(f"Moved file: {source} -> {destination}")


@app.command("delete")
def delete(path: FilePath = None) -> None:
    """Delete a file or directory tree."""

    path = require(path, "missing file path argument")
    filesystem.delete(path)
    print_success(f"Deleted: {path}")


@app.command("exists")
def exists(path: FilePath = None) -> None:
    """Report whether a path exists."""

    path = require(path, "missing file path argument")
    if filesystem.exists(path):
        console.print(f"File exists: {escape(str(path))}", highlight=False)
    else:
        console.print(f"File does not exist: {escape(str(path))}", highlight=False)


@app.command("list")
def list_(path: DirPath = None) -> None:
    """List a directory."""

    path = require(path, "missing directory path argument")
    entries = filesystem.list_directory(path)
    if not entries:
        console.print(f"Directory is empty: {escape(str(path))}", highlight=False)
        return
    console.print(build_listing_table(f"Directory: {escape(str(path))}", entries))


@app.command("mkdir")
def mkdir(path: DirPath = None) -> None:
    """Create a directory (with parents)."""

    path = require(path, "missing directory path argument")
    filesystem.make_directory(path)
    print_success(f"Created directory: {path}")


@app.command("rmdir")
def rmdir(path: DirPath = None) -> None:
    """Remove a directory tree."""

    path = require(path, "missing directory path argument")
    filesystem.remove_directory(path)
    print_success(f"Removed directory: {path}")


@app.command("size")
def size(path: FilePath = None) -> None:
    """Print a file's size."""

    path = require(path, "missing file path argument")
    console.print(f"File size: {escape(str(path))} - {format_bytes(filesystem.file_size(path))}", highlight=False)


def run() -> None:
    raise SystemExit(run_app(app, prog_name="toolbelt-file"))

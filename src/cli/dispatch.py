"""Shared plumbing for every tool's Typer app.

- `tool_app` builds a Typer group that prints its help on zero arguments and
  exposes a `help` sub-command.
- `require` is the single argument-count check: positionals are declared
  optional so a missing one yields our message and exit code 1, not Click's
  usage error.
- `run_app` is the only place that turns a failure into an exit code.
"""

from __future__ import annotations

from typing import Sequence, TypeVar

import click
import typer
from pydantic import ValidationError

from adapters.http_client import render_body
from cli.ui_components import configure_logging, err_console, print_error
from core.config import AppSettings
from core.errors import MissingArgument, RemoteError, ToolkitError

T = TypeVar("T")

EXIT_OK = 0
EXIT_FAILURE = 1


class ToolApp(typer.Typer):
    """Typer group whose commands take unknown dash-prefixed words as values.

    `format number -2.5` and `text uppercase -abc` must reach the command as
    positionals instead of failing as unknown options.
    """

    def command(self, name: str | None = None, *, context_settings: dict | None = None, **kwargs):
        settings = {"ignore_unknown_options": True, **(context_settings or {})}
        return super().command(name, context_settings=settings, **kwargs)


def tool_app(help_text: str) -> typer.Typer:
    app = ToolApp(
        help=help_text,
        add_completion=False,
        invoke_without_command=True,
        rich_markup_mode=None,
    )

    @app.callback()
    def _show_help_without_command(ctx: typer.Context) -> None:
        if ctx.invoked_subcommand is None:
            typer.echo(ctx.get_help())

    @app.command("help")
    def _help(ctx: typer.Context) -> None:
        """Show this help text."""

        typer.echo(ctx.parent.get_help() if ctx.parent else ctx.get_help())

    return app


def require(value: T | None, message: str) -> T:
    if value is None:
        raise MissingArgument(message)
    return value


def run_app(app: typer.Typer, argv: Sequence[str] | None = None, *, prog_name: str | None = None) -> int:
    """Invoke `app` once and map the outcome to an exit code."""

    try:
        settings = AppSettings()
    except ValidationError as exc:
        first = exc.errors()[0]
        location = ".".join(str(part) for part in first.get("loc", ()))
        print_error(f"invalid configuration {location}: {first.get('msg')}")
        return EXIT_FAILURE
    configure_logging(settings.log_level)

    try:
        result = app(
            args=list(argv) if argv is not None else None,
            prog_name=prog_name,
            standalone_mode=False,
        )
    except RemoteError as exc:
        print_error(str(exc))
        body = render_body(exc.outcome)
        if body:
            err_console.print(body, markup=False, highlight=False)
        return EXIT_FAILURE
    except ToolkitError as exc:
        print_error(str(exc))
        return EXIT_FAILURE
    except click.ClickException as exc:
        print_error(exc.format_message())
        return EXIT_FAILURE
    except click.exceptions.Abort:
        print_error("aborted")
        return EXIT_FAILURE

    # Non-standalone Click returns the exit code of `typer.Exit`.
    return result if isinstance(result, int) else EXIT_OK

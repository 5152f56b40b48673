"""`toolbelt-network`: HTTP requests from the command line."""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Annotated

import typer
from rich.markup import escape

from adapters import http_client
from adapters.http_client import RequestHooks
from cli.dispatch import require, run_app, tool_app
from cli.ui_components import (
    console,
    print_request_echo,
    print_response_echo,
    print_status_report,
    print_success,
)
from core.domain.models import HttpOutcome
from core.errors import InvalidInput, ParseError
from core.services import structured
from core.services.text_transforms import render_item

app = tool_app("HTTP client tools.")

Url = Annotated[str | None, typer.Argument(help="Target URL.", show_default=False)]
Body = Annotated[str | None, typer.Argument(help="Request body.", show_default=False)]
HeadersOpt = Annotated[
    str | None,
    typer.Option("--headers", help='Request headers as JSON, e.g. \'{"Content-Type": "application/json"}\'.'),
]
OutputOpt = Annotated[Path | None, typer.Option("--output", help="Write the response body to a file.")]
VerboseOpt = Annotated[bool, typer.Option("--verbose", help="Echo request and response metadata.")]


def parse_headers(raw: str | None) -> dict[str, str]:
    if raw is None:
        return {}
    try:
        value = structured.parse(raw)
    except ParseError as exc:
        raise ParseError(f"invalid JSON headers: {exc}") from exc
    if not isinstance(value, dict):
        raise InvalidInput("--headers must be a JSON object")
    return {str(key): render_item(item) for key, item in value.items()}


def _hooks(verbose: bool) -> RequestHooks | None:
    if not verbose:
        return None
    return RequestHooks(on_request=print_request_echo, on_response=print_response_echo)


def _emit(outcome: HttpOutcome, output: Path | None) -> None:
    if output is not None:
        http_client.save_outcome(outcome, output)
        print_success(f"Response saved to: {output}")
        return
    typer.echo(http_client.render_body(outcome))


def _send(method: str, url: str, body: str | None, headers: str | None, output: Path | None, verbose: bool) -> None:
    outcome = asyncio.run(
        http_client.request(
            method,
            url,
            body=body,
            headers=parse_headers(headers),
            hooks=_hooks(verbose),
        )
    )
    _emit(outcome, output)


@app.command("get")
def get(
    url: Url = None,
    headers: HeadersOpt = None,
    output: OutputOpt = None,
    verbose: VerboseOpt = False,
) -> None:
    """Send a GET request."""

    url = require(url, "missing URL argument")
    _send("GET", url, None, headers, output, verbose)


@app.command("post")
def post(
    url: Url = None,
    body: Body = None,
    headers: HeadersOpt = None,
    output: OutputOpt = None,
    verbose: VerboseOpt = False,
) -> None:
    """Send a POST request."""

    url = require(url, "missing URL or data argument")
    body = require(body, "missing URL or data argument")
    _send("POST", url, body, headers, output, verbose)


@app.command("put")
def put(
    url: Url = None,
    body: Body = None,
    headers: HeadersOpt = None,
    output: OutputOpt = None,
    verbose: VerboseOpt = False,
) -> None:
    """Send a PUT request."""

    url = require(url, "missing URL or data argument")
    body = require(body, "missing URL or data argument")
    _send("PUT", url, body, headers, output, verbose)


@app.command("delete")
def delete(
    url: Url = None,
    headers: HeadersOpt = None,
    output: OutputOpt = None,
    verbose: VerboseOpt = False,
) -> None:
    """Send a DELETE request."""

    url = require(url, "missing URL argument")
    _send("DELETE", url, None, headers, output, verbose)


@app.command("download")
def download(
    url: Url = None,
    path: Annotated[Path | None, typer.Argument(help="Where to save the file.", show_default=False)] = None,
    headers: HeadersOpt = None,
    verbose: VerboseOpt = False,
) -> None:
    """Download a URL to a file (raw bytes)."""

    url = require(url, "missing URL or save path argument")
    path = require(path, "missing URL or save path argument")
    if verbose:
        console.print(f"Downloading from: {escape(url)}", highlight=False)
        console.print(f"Saving to: {escape(str(path))}", highlight=False)
    written = asyncio.run(http_client.download(url, path, headers=parse_headers(headers)))
    print_success(f"Downloaded {written} bytes to: {path}")


@app.command("status")
def status(
    url: Url = None,
    headers: HeadersOpt = None,
    verbose: VerboseOpt = False,
) -> None:
    """Probe a URL with HEAD and report status and content headers."""

    url = require(url, "missing URL argument")
    if verbose:
        console.print(f"Checking URL status: {escape(url)}", highlight=False)
    print_status_report(asyncio.run(http_client.status(url, headers=parse_headers(headers))))


def run() -> None:
    raise SystemExit(run_app(app, prog_name="toolbelt-network"))

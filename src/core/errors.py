"""Error taxonomy shared by every tool.

Library code raises these at the point of detection; only the CLI entry point
(`cli.dispatch.run_app`) turns them into a message and an exit code.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from core.domain.models import HttpOutcome


class ToolkitError(Exception):
    """Base class for every handled failure."""


class MissingArgument(ToolkitError):
    """Fewer positional arguments than the operation requires."""


class ParseError(ToolkitError):
    """Malformed JSON/CSV/regex/date/number/encoding input."""


class InvalidPattern(ParseError):
    pass


class InvalidDate(ParseError):
    pass


class InvalidNumber(ParseError):
    pass


class InvalidEncoding(ParseError):
    pass


class NotFound(ToolkitError):
    """Missing file, JSON path or command."""


class PathNotFound(NotFound):
    def __init__(self, path: str) -> None:
        super().__init__(f'path "{path}" does not exist in the JSON document')
        self.path = path


class UnknownCommand(NotFound):
    def __init__(self, kind: str, name: str) -> None:
        super().__init__(f'unknown {kind} "{name}"')
        self.kind = kind
        self.name = name


class InvalidInput(ToolkitError):
    """Input has the wrong shape (e.g. a non-array where an array is required)."""


class OperationFailed(ToolkitError):
    """Filesystem or network failure."""


class FilesystemError(OperationFailed):
    pass


class NetworkError(OperationFailed):
    pass


class RemoteError(ToolkitError):
    """The server answered with a non-2xx status."""

    def __init__(self, outcome: HttpOutcome) -> None:
        super().__init__(f"request failed: {outcome.status} {outcome.reason}".rstrip())
        self.outcome = outcome

"""Domain models (Pydantic v2).

Nothing here is persisted: every value is built for one invocation and
discarded when the command returns.

- `StructuredValue` is the in-memory shape of parsed JSON and CSV rows.
- `HttpOutcome` / `StatusReport` describe what the HTTP adapter observed.
- `DirectoryEntry` is one line of a directory listing.
"""

from __future__ import annotations

from typing import Any, Union

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict

StructuredValue = Union[None, bool, int, float, str, list[Any], dict[str, Any]]
TabularRow = dict[str, str]


class HttpOutcome(BaseModel):
    """Result of one HTTP request.

    `body` is already decoded: a `StructuredValue` when the server declared
    `application/json`, raw text otherwise.
    """

    model_config = ConfigDict(frozen=True)

    status: int = Field(
        ...,
        ge=100,
        le=599,
        description="HTTP status code.",
    )
    reason: str = Field(
        default="",
        description="Reason phrase sent with the status line.",
    )
    headers: dict[str, str] = Field(
        default_factory=dict,
        description="Response headers (lowercase names).",
    )
    body: Any = Field(
        default=None,
        description="Decoded body: JSON value or text.",
    )

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300

    @property
    def is_structured(self) -> bool:
        return not isinstance(self.body, str)


class StatusReport(BaseModel):
    """Header-only probe of a URL."""

    url: str = Field(..., min_length=1, description="URL that was probed.")
    status: int = Field(..., description="HTTP status code.")
    reason: str = Field(default="", description="Reason phrase.")
    content_type: str | None = Field(
        default=None,
        description="Value of the content-type header, if any.",
    )
    content_length: str | None = Field(
        default=None,
        description="Value of the content-length header, if any.",
    )


class DirectoryEntry(BaseModel):
    path: str = Field(..., min_length=1, description="Path of the entry.")
    is_dir: bool = Field(default=False, description="True for directories.")
    size: int | None = Field(
        default=None,
        ge=0,
        description="Size in bytes (files only).",
    )

"""Thin pass-through to the host filesystem.

- Read-like operations (`read_text`, `copy`, `move`, `file_size`) check that
  the source exists and raise `NotFound` otherwise.
- Write-like operations create what is missing (parents, the file itself).
- Every `OSError` leaves this module as `FilesystemError`.
- Text is UTF-8; undecodable files raise `InvalidEncoding`.
"""

from __future__ import annotations

import logging
import shutil
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

from core.domain.models import DirectoryEntry
from core.errors import FilesystemError, InvalidEncoding, NotFound

logger = logging.getLogger(__name__)


@contextmanager
def _translate(action: str, path: Path) -> Iterator[None]:
    try:
        yield
    except OSError as exc:
        raise FilesystemError(f"{action} failed for {path}: {exc.strerror or exc}") from exc


def _require_file(path: Path) -> None:
    if not path.exists():
        raise NotFound(f'file "{path}" does not exist')


def exists(path: Path) -> bool:
    return path.exists()


def read_text(path: Path) -> str:
    _require_file(path)
    with _translate("read", path):
        try:
            return path.read_text(encoding="utf-8")
        except UnicodeDecodeError as exc:
            raise InvalidEncoding(f'file "{path}" is not valid UTF-8: {exc.reason} at byte {exc.start}') from exc


def write_text(path: Path, content: str) -> None:
    with _translate("write", path):
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
    logger.debug("wrote %d characters to %s", len(content), path)


def write_bytes(path: Path, content: bytes) -> None:
    with _translate("write", path):
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(content)
    logger.debug("wrote %d bytes to %s", len(content), path)


def append_text(path: Path, content: str) -> None:
    with _translate("append", path):
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("a", encoding="utf-8") as fh:
            fh.write(content)


def copy(source: Path, destination: Path) -> None:
    _require_file(source)
    with _translate("copy", source):
        destination.parent.mkdir(parents=True, exist_ok=True)
        shutil.copyfile(source, destination)


def delete(path: Path) -> None:
    """Remove a file or a whole directory tree; a missing path is fine."""

    with _translate("delete", path):
        if path.is_dir() and not path.is_symlink():
            shutil.rmtree(path)
        else:
            path.unlink(missing_ok=True)


def move(source: Path, destination: Path) -> None:
    """Copy then delete the source.

    Not atomic: a crash between the two steps leaves both files in place.
    """

    copy(source, destination)
    delete(source)
    logger.debug("moved %s -> %s", source, destination)


def list_directory(path: Path) -> list[DirectoryEntry]:
    if not path.is_dir():
        raise NotFound(f'directory "{path}" does not exist')

    entries: list[DirectoryEntry] = []
    with _translate("list", path):
        for child in sorted(path.iterdir()):
            if child.is_dir():
                entries.append(DirectoryEntry(path=str(child), is_dir=True))
            else:
                entries.append(DirectoryEntry(path=str(child), size=child.stat().st_size))
    return entries


def file_size(path: Path) -> int:
    _require_file(path)
    with _translate("stat", path):
        return path.stat().st_size


def make_directory(path: Path) -> None:
    with _translate("mkdir", path):
        path.mkdir(parents=True, exist_ok=True)


def remove_directory(path: Path) -> None:
    delete(path)

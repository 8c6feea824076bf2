"""Filesystem listing for the browser pane.

Lists the immediate children of one directory as immutable ``Entry`` rows.
Unreadable children are skipped; only an unopenable directory is an error.
"""

from __future__ import annotations

import logging
import os
import stat
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Entry:
    """One immediate child of a listed directory."""

    name: str
    full_path: Path
    is_dir: bool


class ListError(Exception):
    """Raised when a path cannot be opened as a directory."""

    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"cannot open {path}: {reason}")
        self.path = path
        self.reason = reason

    @classmethod
    def from_os_error(cls, path: Path, exc: OSError) -> ListError:
        """Build a listing error carrying the OS reason text."""
        reason = exc.strerror or exc.__class__.__name__
        return cls(path, reason)


def entry_sort_key(entry: Entry) -> tuple[bool, str, str]:
    """Directories first, then case-insensitive name with raw name tie-break."""
    return (not entry.is_dir, entry.name.casefold(), entry.name)


def list_directory(
    path: Path,
    *,
    show_hidden: bool = True,
    sort_entries: bool = True,
) -> list[Entry]:
    """Return immediate children of ``path``.

    Symlinks are followed to decide ``is_dir``; broken links and children whose
    metadata cannot be read are left out. Raises ``ListError`` when ``path``
    does not exist, is not a directory, or cannot be read.
    """
    directory = Path(path)
    entries: list[Entry] = []
    try:
        with os.scandir(directory) as children:
            for child in children:
                name = child.name
                if not show_hidden and name.startswith("."):
                    continue
                try:
                    mode = child.stat(follow_symlinks=True).st_mode
                except OSError as exc:
                    logger.debug("skipping %s: %s", child.path, exc)
                    continue
                entries.append(
                    Entry(
                        name=name,
                        full_path=Path(child.path),
                        is_dir=stat.S_ISDIR(mode),
                    )
                )
    except OSError as exc:
        logger.info("listing %s failed: %s", directory, exc)
        raise ListError.from_os_error(directory, exc) from exc

    if sort_entries:
        entries.sort(key=entry_sort_key)
    return entries


__all__ = [
    "Entry",
    "ListError",
    "entry_sort_key",
    "list_directory",
]

"""Read-only previews and metadata for the selected file.

Both queries convert every failure into a renderable placeholder so the
event loop never has to handle preview errors.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path

from .syntax import decode_text, sanitize_terminal_text

logger = logging.getLogger(__name__)

PREVIEW_MAX_LINES = 20
BINARY_PROBE_BYTES = 4_096
# Upper bound on bytes read per previewed line, so one huge line cannot stall a frame.
PREVIEW_MAX_LINE_BYTES = 4_096


@dataclass(frozen=True)
class PreviewResult:
    """First lines of a file, or a one-line placeholder when unreadable."""

    lines: tuple[str, ...]
    truncated: bool = False
    error: str | None = None

    @classmethod
    def placeholder(cls, message: str) -> PreviewResult:
        return cls(lines=(message,), truncated=False, error=message)

    @classmethod
    def binary_file(cls, size_bytes: int) -> PreviewResult:
        if size_bytes >= 0:
            message = f"<binary file: {size_bytes} bytes>"
        else:
            message = "<binary file>"
        return cls(lines=(message,), truncated=False)

    @property
    def text(self) -> str:
        return "\n".join(self.lines)


@dataclass(frozen=True)
class MetadataSummary:
    """Size and modification time of a file, or a placeholder reason."""

    display_path: str
    size_bytes: int | None = None
    modified_at: datetime | None = None
    error: str | None = None

    @classmethod
    def unavailable(cls, path: Path, reason: str) -> MetadataSummary:
        return cls(display_path=str(path), error=f"<metadata unavailable: {reason}>")


def _reason(exc: OSError) -> str:
    return exc.strerror or exc.__class__.__name__


def _trim_partial_utf8(raw: bytes) -> bytes:
    """Drop a UTF-8 sequence cut in half by the per-line byte cap."""
    try:
        raw.decode("utf-8")
    except UnicodeDecodeError as exc:
        if exc.reason == "unexpected end of data":
            return raw[: exc.start]
    return raw


def preview(path: Path, max_lines: int = PREVIEW_MAX_LINES) -> PreviewResult:
    """Return at most ``max_lines`` sanitized lines from the start of ``path``.

    ``truncated`` is set when the file continues past the returned lines.
    Files with a NUL byte near the start are reported as binary.
    """
    target = Path(path)
    max_lines = max(1, max_lines)
    try:
        with target.open("rb") as handle:
            if b"\x00" in handle.read(BINARY_PROBE_BYTES):
                try:
                    size = target.stat().st_size
                except OSError:
                    size = -1
                return PreviewResult.binary_file(size)
            handle.seek(0)
            lines: list[str] = []
            truncated = False
            while True:
                raw = handle.readline(PREVIEW_MAX_LINE_BYTES)
                if not raw:
                    break
                if len(lines) == max_lines:
                    truncated = True
                    break
                chunk = _trim_partial_utf8(raw) if len(raw) == PREVIEW_MAX_LINE_BYTES else raw
                lines.append(sanitize_terminal_text(decode_text(chunk).rstrip("\r\n")))
                while len(raw) == PREVIEW_MAX_LINE_BYTES and not raw.endswith(b"\n"):
                    raw = handle.readline(PREVIEW_MAX_LINE_BYTES)
    except OSError as exc:
        logger.debug("preview of %s failed: %s", target, exc)
        return PreviewResult.placeholder(f"<error reading file: {_reason(exc)}>")
    return PreviewResult(lines=tuple(lines), truncated=truncated)


def metadata(path: Path) -> MetadataSummary:
    """Return size and modification time for ``path``."""
    target = Path(path)
    try:
        info = target.stat()
    except OSError as exc:
        logger.debug("stat of %s failed: %s", target, exc)
        return MetadataSummary.unavailable(target, _reason(exc))
    return MetadataSummary(
        display_path=str(target),
        size_bytes=int(info.st_size),
        modified_at=datetime.fromtimestamp(info.st_mtime),
    )


def format_size(size_bytes: int) -> str:
    """Format a byte count with a binary unit suffix."""
    value = float(size_bytes)
    for unit in ("B", "KiB", "MiB", "GiB", "TiB"):
        if value < 1024 or unit == "TiB":
            if unit == "B":
                return f"{size_bytes} B"
            return f"{value:.1f} {unit}"
        value /= 1024
    return f"{size_bytes} B"


def metadata_lines(summary: MetadataSummary) -> tuple[str, ...]:
    """Return display rows for the metadata pane."""
    if summary.error is not None:
        return (summary.display_path, summary.error)
    size = format_size(summary.size_bytes) if summary.size_bytes is not None else "?"
    modified = summary.modified_at.strftime("%Y-%m-%d %H:%M:%S") if summary.modified_at is not None else "?"
    return (
        summary.display_path,
        f"Size: {size}",
        f"Modified: {modified}",
    )


__all__ = [
    "BINARY_PROBE_BYTES",
    "MetadataSummary",
    "PREVIEW_MAX_LINES",
    "PreviewResult",
    "format_size",
    "metadata",
    "metadata_lines",
    "preview",
]

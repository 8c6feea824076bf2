"""Tests for file previews and metadata summaries.

Previews must stay bounded and every failure must turn into a placeholder.
"""

from __future__ import annotations

import os
import tempfile
import unittest
from datetime import datetime
from pathlib import Path

from lazybrowse.inspector import (
    PREVIEW_MAX_LINE_BYTES,
    MetadataSummary,
    PreviewResult,
    format_size,
    metadata,
    metadata_lines,
    preview,
)


class PreviewTests(unittest.TestCase):
    def test_preview_returns_first_lines_and_flags_truncation(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            target = Path(tmp) / "long.txt"
            target.write_text("".join(f"line {idx}\n" for idx in range(50)), encoding="utf-8")

            result = preview(target, max_lines=20)

        self.assertEqual(len(result.lines), 20)
        self.assertEqual(result.lines[0], "line 0")
        self.assertEqual(result.lines[-1], "line 19")
        self.assertTrue(result.truncated)
        self.assertIsNone(result.error)

    def test_preview_of_exactly_max_lines_is_not_truncated(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            target = Path(tmp) / "exact.txt"
            target.write_text("a\nb\nc\n", encoding="utf-8")

            result = preview(target, max_lines=3)

        self.assertEqual(result.lines, ("a", "b", "c"))
        self.assertFalse(result.truncated)

    def test_preview_keeps_last_line_without_newline(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            target = Path(tmp) / "short.txt"
            target.write_text("first\r\nsecond", encoding="utf-8")

            result = preview(target)

        self.assertEqual(result.lines, ("first", "second"))
        self.assertEqual(result.text, "first\nsecond")

    def test_empty_file_has_no_lines(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            target = Path(tmp) / "empty.txt"
            target.write_bytes(b"")

            result = preview(target)

        self.assertEqual(result, PreviewResult(lines=()))

    def test_missing_file_yields_placeholder(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            result = preview(Path(tmp) / "missing.txt")

        self.assertEqual(len(result.lines), 1)
        self.assertIsNotNone(result.error)
        self.assertTrue(result.lines[0].startswith("<error reading file:"))

    def test_directory_path_yields_placeholder(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            result = preview(Path(tmp))

        self.assertIsNotNone(result.error)

    def test_binary_file_reports_size(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            target = Path(tmp) / "blob.bin"
            target.write_bytes(b"\x00\x01\x02abc")

            result = preview(target)

        self.assertEqual(result.lines, ("<binary file: 6 bytes>",))
        self.assertIsNone(result.error)

    def test_control_bytes_are_escaped(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            target = Path(tmp) / "ctrl.txt"
            target.write_bytes(b"bell\x07 esc\x1b[2J\n")

            result = preview(target)

        self.assertEqual(result.lines, ("bell\\x07 esc\\x1b[2J",))

    def test_latin1_text_is_decoded(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            target = Path(tmp) / "latin.txt"
            target.write_bytes("café\n".encode("latin-1"))

            result = preview(target)

        self.assertEqual(result.lines, ("café",))

    def test_overlong_line_counts_once(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            target = Path(tmp) / "wide.txt"
            target.write_text("x" * (PREVIEW_MAX_LINE_BYTES * 3) + "\nnext\n", encoding="utf-8")

            result = preview(target, max_lines=2)

        self.assertEqual(len(result.lines), 2)
        self.assertEqual(len(result.lines[0]), PREVIEW_MAX_LINE_BYTES)
        self.assertEqual(result.lines[1], "next")
        self.assertFalse(result.truncated)

    def test_line_cap_does_not_split_multibyte_characters(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            target = Path(tmp) / "utf8.txt"
            text = "x" * (PREVIEW_MAX_LINE_BYTES - 1) + "é" * 10 + "\nnext\n"
            target.write_text(text, encoding="utf-8")

            result = preview(target, max_lines=2)

        self.assertEqual(result.lines, ("x" * (PREVIEW_MAX_LINE_BYTES - 1), "next"))


class MetadataTests(unittest.TestCase):
    def test_metadata_reports_size_and_mtime(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            target = Path(tmp) / "data.txt"
            target.write_bytes(b"12345")
            os.utime(target, (1_700_000_000, 1_700_000_000))

            summary = metadata(target)

        self.assertEqual(summary.display_path, str(target))
        self.assertEqual(summary.size_bytes, 5)
        self.assertEqual(summary.modified_at, datetime.fromtimestamp(1_700_000_000))
        self.assertIsNone(summary.error)

    def test_missing_file_yields_placeholder(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            summary = metadata(Path(tmp) / "missing")

        self.assertIsNone(summary.size_bytes)
        self.assertIsNone(summary.modified_at)
        self.assertTrue(summary.error.startswith("<metadata unavailable:"))

    def test_metadata_lines_format_summary(self) -> None:
        summary = MetadataSummary(
            display_path="/tmp/a.txt",
            size_bytes=2048,
            modified_at=datetime(2024, 1, 2, 3, 4, 5),
        )

        self.assertEqual(
            metadata_lines(summary),
            ("/tmp/a.txt", "Size: 2.0 KiB", "Modified: 2024-01-02 03:04:05"),
        )

    def test_metadata_lines_show_placeholder(self) -> None:
        summary = MetadataSummary.unavailable(Path("/tmp/x"), "Permission denied")

        self.assertEqual(metadata_lines(summary), ("/tmp/x", "<metadata unavailable: Permission denied>"))

    def test_format_size_units(self) -> None:
        self.assertEqual(format_size(0), "0 B")
        self.assertEqual(format_size(1023), "1023 B")
        self.assertEqual(format_size(1536), "1.5 KiB")
        self.assertEqual(format_size(5 * 1024 * 1024), "5.0 MiB")


if __name__ == "__main__":
    unittest.main()

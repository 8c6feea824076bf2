"""Low-level terminal input decoding.

Reads raw bytes from stdin and translates them into normalized key tokens.
Handles ESC-sequence timing so a lone Escape does not wait for another key.
"""

from __future__ import annotations

import os
import select

ESC_SEQUENCE_TIMEOUT_MS = 25
_PENDING_BYTES: list[bytes] = []

_CSI_FINAL_KEYS: dict[bytes, str] = {
    b"A": "UP",
    b"B": "DOWN",
    b"C": "RIGHT",
    b"D": "LEFT",
    b"H": "HOME",
    b"F": "END",
}


def _read_ready_byte(fd: int, timeout_ms: int) -> bytes | None:
    ready, _, _ = select.select([fd], [], [], max(0.0, timeout_ms / 1000.0))
    if not ready:
        return None
    ch = os.read(fd, 1)
    if not ch:
        return None
    return ch


def _drain_csi_parameters(fd: int) -> None:
    # Swallow the rest of an unrecognized CSI sequence up to its final byte.
    for _ in range(16):
        part = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
        if part is None or 0x40 <= part[0] <= 0x7E:
            return


def read_key(fd: int, timeout_ms: int | None = None) -> str:
    """Read one key token from ``fd``.

    Blocks indefinitely when ``timeout_ms`` is ``None``. Returns ``""`` when the
    timeout expires or the descriptor reached end of file.
    """
    if _PENDING_BYTES:
        ch = _PENDING_BYTES.pop(0)
    else:
        if timeout_ms is not None:
            ready, _, _ = select.select([fd], [], [], max(0.0, timeout_ms / 1000.0))
            if not ready:
                return ""

        ch = os.read(fd, 1)
        if not ch:
            return ""

    if ch in {b"\x08", b"\x7f"}:
        return "BACKSPACE"
    if ch in {b"\r", b"\n"}:
        return "ENTER"
    if ch == b"\t":
        return "TAB"
    if ch == b"\x03":
        return "CTRL_C"

    if ch != b"\x1b":
        return ch.decode("utf-8", errors="replace")

    # Escape / arrow key sequences.
    seq = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
    if seq is None:
        return "ESC"
    if seq not in {b"[", b"O"}:
        _PENDING_BYTES.append(seq)
        return "ESC"
    final = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
    if final is None:
        return "ESC"
    key = _CSI_FINAL_KEYS.get(final)
    if key is not None:
        return key
    if not 0x40 <= final[0] <= 0x7E:
        _drain_csi_parameters(fd)
    return "ESC"


__all__ = [
    "ESC_SEQUENCE_TIMEOUT_MS",
    "read_key",
]

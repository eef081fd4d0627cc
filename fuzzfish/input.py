"""Low-level terminal input decoding.

Reads raw bytes from the tty and translates them into normalized key tokens.
Handles ESC-sequence timing and multi-byte UTF-8 characters.
"""

from __future__ import annotations

import os
import select

ESC_SEQUENCE_TIMEOUT_MS = 25
_PENDING_BYTES: list[bytes] = []

_CONTROL_KEYS = {
    b"\x03": "CTRL_C",
    b"\x07": "CTRL_G",
    b"\x0e": "CTRL_N",
    b"\x10": "CTRL_P",
    b"\x12": "CTRL_R",
    b"\x13": "CTRL_S",
    b"\x15": "CTRL_U",
    b"\x17": "CTRL_W",
    b"\x08": "BACKSPACE",
    b"\x7f": "BACKSPACE",
    b"\r": "ENTER",
    b"\n": "ENTER",
    b"\t": "TAB",
}

_CSI_FINAL_KEYS = {
    b"A": "UP",
    b"B": "DOWN",
    b"C": "RIGHT",
    b"D": "LEFT",
    b"H": "HOME",
    b"F": "END",
}

_CSI_TILDE_KEYS = {
    "1": "HOME",
    "3": "DELETE",
    "4": "END",
    "5": "PAGE_UP",
    "6": "PAGE_DOWN",
    "7": "HOME",
    "8": "END",
}


def _read_ready_byte(fd: int, timeout_ms: int) -> bytes | None:
    ready, _, _ = select.select([fd], [], [], max(0.0, timeout_ms / 1000.0))
    if not ready:
        return None
    ch = os.read(fd, 1)
    if not ch:
        return None
    return ch


def _utf8_length(lead: int) -> int:
    if lead >= 0xF0:
        return 4
    if lead >= 0xE0:
        return 3
    if lead >= 0xC0:
        return 2
    return 1


def _read_utf8(fd: int, lead: bytes) -> str:
    data = bytearray(lead)
    for _ in range(_utf8_length(lead[0]) - 1):
        nxt = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
        if nxt is None:
            break
        data += nxt
    return bytes(data).decode("utf-8", errors="replace")


def _read_csi(fd: int) -> str:
    # Parameter and intermediate bytes run until a final byte in 0x40-0x7e.
    params = bytearray()
    while len(params) <= 16:
        part = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
        if part is None:
            return ""
        if 0x40 <= part[0] <= 0x7E:
            break
        params += part
    else:
        return ""

    if part == b"[" and not params:
        # Linux console function keys: ESC [ [ A.
        _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
        return ""
    if params.strip(b"0123456789;"):
        return ""
    if part == b"~":
        first = params.decode("ascii").split(";", 1)[0]
        return _CSI_TILDE_KEYS.get(first, "")
    # Modified arrows such as ESC [ 1 ; 5 A map to the plain key.
    return _CSI_FINAL_KEYS.get(part, "")


def _read_alt_key(fd: int, lead: bytes) -> str:
    """Consume an Alt-modified key so none of its bytes leak out as typing."""
    if lead[0] >= 0x80:
        _read_utf8(fd, lead)
    return ""


def read_key(fd: int, timeout_ms: int | None = None) -> str:
    """Read one key token from ``fd``; return ``""`` when nothing arrives in time.

    Only a lone ESC byte yields ``"ESC"``. Escape sequences without a binding
    (function keys, Shift-Tab, Alt+key) decode to ``""`` and are ignored.
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

    named = _CONTROL_KEYS.get(ch)
    if named is not None:
        return named

    if ch != b"\x1b":
        if ch[0] < 0x20:
            return ""
        return _read_utf8(fd, ch)

    seq = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
    if seq is None:
        return "ESC"
    if seq == b"[":
        return _read_csi(fd)
    if seq == b"O":
        # SS3 arrows sent in application cursor mode.
        final = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
        if final is None:
            return ""
        return _CSI_FINAL_KEYS.get(final, "")
    if seq == b"\x1b":
        _PENDING_BYTES.append(seq)
        return "ESC"
    return _read_alt_key(fd, seq)

"""Terminal-cell measurement for styled tree rows.

Escape sequences occupy no cells, East Asian wide characters occupy two, so
truncated names and clipped rows line up with what the terminal draws.
"""

from __future__ import annotations

import re
import unicodedata

ANSI_ESCAPE_RE = re.compile(r"\x1b\[[0-9;?]*[ -/]*[@-~]")
_ANSI_SPLIT_RE = re.compile(f"({ANSI_ESCAPE_RE.pattern})")
TAB_STOP = 8
ELLIPSIS = "…"


def char_display_width(ch: str, col: int) -> int:
    """Cells used by ``ch`` when drawn at column ``col`` (tabs depend on it)."""
    if ch == "\t":
        return TAB_STOP - col % TAB_STOP
    if unicodedata.combining(ch):
        return 0
    return 2 if unicodedata.east_asian_width(ch) in ("W", "F") else 1


def strip_ansi(text: str) -> str:
    return ANSI_ESCAPE_RE.sub("", text)


def display_width(text: str) -> int:
    width = 0
    for ch in strip_ansi(text):
        width += char_display_width(ch, width)
    return width


def clip_ansi_line(text: str, max_cols: int) -> str:
    """Keep at most ``max_cols`` cells of ``text``.

    Escape sequences before the cut are kept as-is; tabs become spaces.
    """
    if max_cols <= 0:
        return ""
    out: list[str] = []
    used = 0
    for part in _ANSI_SPLIT_RE.split(text):
        if not part:
            continue
        if ANSI_ESCAPE_RE.fullmatch(part):
            out.append(part)
            continue
        for ch in part:
            cells = char_display_width(ch, used)
            if used + cells > max_cols:
                return "".join(out)
            out.append(" " * cells if ch == "\t" else ch)
            used += cells
        if used >= max_cols:
            break
    return "".join(out)


def truncate_with_tail(text: str, max_cols: int, tail: str = ELLIPSIS) -> str:
    """Cut ``text`` so that it plus ``tail`` fits in ``max_cols`` columns.

    Text that already fits is returned unchanged. When even the tail does not
    fit, the tail itself is clipped.
    """
    if display_width(text) <= max_cols:
        return text
    tail_width = display_width(tail)
    if max_cols <= tail_width:
        return clip_ansi_line(tail, max_cols)
    return clip_ansi_line(text, max_cols - tail_width) + tail


def pad_to_width(text: str, width: int) -> str:
    """Right-pad ``text`` with spaces up to ``width`` display columns."""
    missing = width - display_width(text)
    if missing > 0:
        return text + (" " * missing)
    return text

"""Vertically scrollable window over a list of pre-rendered lines."""

from __future__ import annotations

from collections.abc import Iterable


class Viewport:
    """Clip a list of lines to ``height`` rows starting at ``y_offset``.

    Lines are stored already rendered; the viewport never styles or wraps
    them. The offset is kept within ``[0, max_y_offset()]`` at all times.
    """

    def __init__(self, width: int = 0, height: int = 0) -> None:
        self.width = max(0, width)
        self.height = max(0, height)
        self._y_offset = 0
        self._lines: list[str] = []

    @property
    def y_offset(self) -> int:
        return self._y_offset

    def set_y_offset(self, offset: int) -> None:
        self._y_offset = max(0, min(offset, self.max_y_offset()))

    def set_content(self, lines: Iterable[str]) -> None:
        self._lines = list(lines)
        self.set_y_offset(self._y_offset)

    def replace_line(self, index: int, text: str) -> None:
        """Swap the text of one existing line; out-of-range indices are ignored."""
        if 0 <= index < len(self._lines):
            self._lines[index] = text

    def lines(self) -> list[str]:
        return list(self._lines)

    def total_line_count(self) -> int:
        return len(self._lines)

    def max_y_offset(self) -> int:
        return max(0, len(self._lines) - self.height)

    def visible_line_indices(self) -> tuple[int, int]:
        """Return the inclusive ``(top, bottom)`` line indices of the window."""
        top = self._y_offset
        return top, top + max(1, self.height) - 1

    def line_up(self, count: int) -> None:
        self.set_y_offset(self._y_offset - abs(count))

    def line_down(self, count: int) -> None:
        self.set_y_offset(self._y_offset + abs(count))

    def at_top(self) -> bool:
        return self._y_offset <= 0

    def at_bottom(self) -> bool:
        return self._y_offset >= self.max_y_offset()

    def scroll_percent(self) -> float:
        """Return scroll position as a fraction in ``[0, 1]``."""
        if self.height >= len(self._lines):
            return 1.0
        fraction = self._y_offset / (len(self._lines) - self.height)
        return max(0.0, min(1.0, fraction))

    def visible_lines(self) -> list[str]:
        if self.height <= 0:
            return []
        return self._lines[self._y_offset : self._y_offset + self.height]

    def view(self) -> str:
        return "\n".join(self.visible_lines())

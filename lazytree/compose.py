"""Compose one display row: metadata prefix, branch glyphs, and styled name."""

from __future__ import annotations

from .ansi import ELLIPSIS, display_width, pad_to_width, truncate_with_tail
from .node import InvariantViolation, Node, is_selected
from .symbols import NORMAL_SYMBOLS, Symbols, render_symbols_for_single_line_node
from .ui_theme import DEFAULT_THEME, TreeTheme, styled


def name_budget(width: int, prefix_width: int) -> int:
    """Columns left for the name; one column stays free past the name field."""
    return width - prefix_width - 1


def render_line(
    node: Node | None,
    width: int,
    symbols: Symbols = NORMAL_SYMBOLS,
    theme: TreeTheme = DEFAULT_THEME,
) -> str:
    """Render ``node`` as a single tree row.

    ``width <= 0`` means the pane has not been sized yet; the name is then
    emitted as-is. Otherwise over-long names are cut with an ellipsis and the
    name field is padded so a selection highlight spans the full row.
    """
    if node is None:
        raise InvariantViolation("cannot render a missing node")

    metadata = node.prefix()
    prefix = styled(metadata, theme.prefix, theme) + render_symbols_for_single_line_node(node, symbols, theme)
    name = node.name()
    style = theme.selected if is_selected(node) else theme.line

    if width > 0:
        budget = max(0, name_budget(width, display_width(prefix)))
        name = pad_to_width(truncate_with_tail(name, budget, ELLIPSIS), budget)

    return prefix + styled(name, style, theme)


__all__ = ["render_line", "name_budget"]

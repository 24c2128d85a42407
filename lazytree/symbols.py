"""Branch-glyph tables and per-column symbol rendering.

A node at depth ``d`` gets ``d + 1`` glyph columns. Column ``pos`` belongs to
the ancestor ``d - pos`` hops up; it draws a vertical connector while that
ancestor still has siblings below it and padding otherwise. The last column
is the node's own: a starter, or a terminator when the node is the last of
its siblings.
"""

from __future__ import annotations

from dataclasses import dataclass

from .node import InvariantViolation, Node, is_last_child
from .traversal import depth
from .ui_theme import DEFAULT_THEME, TreeTheme, styled


@dataclass(frozen=True)
class Symbols:
    """Glyph strings for one drawing style; every glyph has the same width."""

    name: str
    connector: str
    starter: str
    terminator: str
    padding: str


NORMAL_SYMBOLS = Symbols("normal", connector="│ ", starter="├─", terminator="└─", padding="  ")
THICK_SYMBOLS = Symbols("thick", connector="┃ ", starter="┣━", terminator="┗━", padding="  ")
ROUNDED_SYMBOLS = Symbols("rounded", connector="│ ", starter="├─", terminator="╰─", padding="  ")
DOUBLE_SYMBOLS = Symbols("double", connector="║ ", starter="╠═", terminator="╚═", padding="  ")
EDGE_SYMBOLS = Symbols("edge", connector="│ ", starter="├╴", terminator="└╴", padding="  ")
THICK_EDGE_SYMBOLS = Symbols("thickedge", connector="┃ ", starter="┣╸", terminator="┗╸", padding="  ")
ASCII_SYMBOLS = Symbols("ascii", connector="| ", starter="|-", terminator="`-", padding="  ")

_SYMBOL_SETS: dict[str, Symbols] = {
    symbols.name: symbols
    for symbols in (
        NORMAL_SYMBOLS,
        THICK_SYMBOLS,
        ROUNDED_SYMBOLS,
        DOUBLE_SYMBOLS,
        EDGE_SYMBOLS,
        THICK_EDGE_SYMBOLS,
        ASCII_SYMBOLS,
    )
}


def available_symbol_names() -> tuple[str, ...]:
    return tuple(_SYMBOL_SETS.keys())


def resolve_symbols(name: str | None) -> Symbols:
    """Return the named glyph set, falling back to ``normal``."""
    if not name:
        return NORMAL_SYMBOLS
    return _SYMBOL_SETS.get(str(name).strip().lower(), NORMAL_SYMBOLS)


def has_padding_at_pos(node: Node | None, pos: int, max_depth: int) -> bool:
    """Return whether glyph column ``pos`` of ``node`` is blank."""
    if node is None:
        return True
    if pos > max_depth:
        return True
    if pos == max_depth:
        return False
    ancestor: Node | None = node
    for _hop in range(max_depth - pos):
        ancestor = ancestor.parent()
        if ancestor is None:
            return True
    return is_last_child(ancestor)


def symbol_for_pos(
    node: Node | None,
    pos: int,
    max_depth: int,
    symbols: Symbols,
    theme: TreeTheme = DEFAULT_THEME,
) -> str:
    """Render the glyph at column ``pos`` of a node whose depth is ``max_depth``."""
    if node is None:
        raise InvariantViolation("cannot render tree symbols for a missing node")
    if has_padding_at_pos(node, pos, max_depth):
        return symbols.padding
    if pos < max_depth:
        glyph = symbols.connector
    elif is_last_child(node):
        glyph = symbols.terminator
    else:
        glyph = symbols.starter
    return styled(glyph, theme.symbol, theme)


def render_symbols_for_single_line_node(
    node: Node | None,
    symbols: Symbols,
    theme: TreeTheme = DEFAULT_THEME,
) -> str:
    """Render all glyph columns, root column first, for a one-line node."""
    if node is None:
        raise InvariantViolation("cannot render tree symbols for a missing node")
    node_depth = depth(node)
    return "".join(symbol_for_pos(node, pos, node_depth, symbols, theme) for pos in range(node_depth + 1))


def render_prefix_for_multi_line_node(
    node: Node | None,
    line_count: int,
    symbols: Symbols,
    theme: TreeTheme = DEFAULT_THEME,
) -> str:
    """Render glyph columns for a node whose content spans ``line_count`` lines.

    Ancestor columns repeat on every line. Only the node's own column varies:
    a starter on the first line, a connector on middle lines, and on the last
    line a terminator when the node closes its sibling list.
    """
    if node is None:
        raise InvariantViolation("cannot render tree symbols for a missing node")
    if line_count <= 1:
        return render_symbols_for_single_line_node(node, symbols, theme)

    max_depth = depth(node)
    ancestors = "".join(symbol_for_pos(node, pos, max_depth, symbols, theme) for pos in range(max_depth))
    rows: list[str] = []
    for line in range(line_count):
        if line == 0:
            own = styled(symbols.starter, theme.symbol, theme)
        elif line == line_count - 1 and is_last_child(node):
            own = styled(symbols.terminator, theme.symbol, theme)
        else:
            own = styled(symbols.connector, theme.symbol, theme)
        rows.append(ancestors + own)
    return "\n".join(rows)


__all__ = [
    "Symbols",
    "NORMAL_SYMBOLS",
    "THICK_SYMBOLS",
    "ROUNDED_SYMBOLS",
    "DOUBLE_SYMBOLS",
    "EDGE_SYMBOLS",
    "THICK_EDGE_SYMBOLS",
    "ASCII_SYMBOLS",
    "available_symbol_names",
    "resolve_symbols",
    "has_padding_at_pos",
    "symbol_for_pos",
    "render_symbols_for_single_line_node",
    "render_prefix_for_multi_line_node",
]

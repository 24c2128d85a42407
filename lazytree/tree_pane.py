"""Selection and scroll controller for an interactive tree.

``TreePane`` owns the cursor (an offset into the visible flat order), the
viewport holding one rendered line per visible node, and the focus gate.
Cursor moves re-render only the two rows whose selection changed; anything
that alters which nodes are visible (expand/collapse, hide/show) rebuilds the
flat order and re-renders every row.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from .compose import render_line
from .keymap import DEFAULT_KEYMAP, KeyComboBinding, KeyComboRegistry, KeyMap
from .node import (
    EmptyTreeError,
    InvariantViolation,
    Node,
    NodeState,
    is_collapsible,
    is_selected,
    set_flag,
)
from .symbols import NORMAL_SYMBOLS, Symbols
from .traversal import annotate_siblings, at, flatten, walk
from .ui_theme import DEFAULT_THEME, TreeTheme
from .viewport import Viewport

logger = logging.getLogger(__name__)


class TreePane:
    """Navigable, scrollable tree view over caller-owned nodes."""

    def __init__(
        self,
        nodes: Sequence[Node],
        *,
        width: int = 0,
        height: int = 0,
        symbols: Symbols | None = None,
        theme: TreeTheme | None = None,
        keymap: KeyMap | None = None,
        focused: bool = False,
    ) -> None:
        """Flatten ``nodes`` and render the initial rows.

        Raises ``EmptyTreeError`` when there is no node to put the cursor on.
        """
        self.roots: list[Node] = list(nodes)
        if not self.roots:
            raise EmptyTreeError("cannot build a tree pane without any nodes")
        self.symbols = symbols or NORMAL_SYMBOLS
        self.theme = theme or DEFAULT_THEME
        self.keymap = keymap or DEFAULT_KEYMAP
        self.viewport = Viewport(width, height)
        self._cursor = 0
        self._focused = False
        self._visible: list[Node] = flatten(self.roots)
        if not self._visible:
            raise EmptyTreeError("cannot build a tree pane when every node is hidden")
        self._keys = self._build_key_registry()
        logger.debug("tree pane created with %d roots, %d visible rows", len(self.roots), len(self._visible))

        if focused:
            self._focused = True
            set_flag(self._visible[0], NodeState.SELECTED)
        self.render_all()

    def _build_key_registry(self) -> KeyComboRegistry:
        keymap = self.keymap
        return KeyComboRegistry().register_bindings(
            KeyComboBinding(keymap.line_up, lambda: self.move_up(1)),
            KeyComboBinding(keymap.line_down, lambda: self.move_down(1)),
            KeyComboBinding(keymap.page_up, lambda: self.move_up(self._page_rows())),
            KeyComboBinding(keymap.page_down, lambda: self.move_down(self._page_rows())),
            KeyComboBinding(keymap.half_page_up, lambda: self.move_up(self._half_page_rows())),
            KeyComboBinding(keymap.half_page_down, lambda: self.move_down(self._half_page_rows())),
            KeyComboBinding(keymap.goto_top, self.goto_top),
            KeyComboBinding(keymap.goto_bottom, self.goto_bottom),
            KeyComboBinding(keymap.toggle_expand, self.toggle_expand),
        )

    # Accessors

    @property
    def cursor(self) -> int:
        return self._cursor

    @property
    def focused(self) -> bool:
        return self._focused

    @property
    def width(self) -> int:
        return self.viewport.width

    @property
    def height(self) -> int:
        return self.viewport.height

    @property
    def y_offset(self) -> int:
        return self.viewport.y_offset

    def set_y_offset(self, offset: int) -> None:
        self.viewport.set_y_offset(offset)

    def scroll_percent(self) -> float:
        return self.viewport.scroll_percent()

    def visible_nodes(self) -> list[Node]:
        """Visible flat order as of the last structural change."""
        return list(self._visible)

    def visible_count(self) -> int:
        return len(self._visible)

    def current_node(self) -> Node:
        node = at(self.roots, self._cursor)
        if node is None:
            raise InvariantViolation(f"cursor {self._cursor} does not point at a visible node")
        return node

    def view(self) -> str:
        return self.viewport.view()

    def rendered_lines(self) -> list[str]:
        return self.viewport.lines()

    # Rendering

    def render_all(self) -> None:
        """Recompute sibling flags and re-render every visible row."""
        annotate_siblings(self.roots)
        width = self.viewport.width
        self.viewport.set_content(render_line(node, width, self.symbols, self.theme) for node in self._visible)

    def _render_rows(self, *rows: int) -> None:
        width = self.viewport.width
        for row in sorted(set(rows)):
            node = at(self.roots, row)
            if node is None:
                raise InvariantViolation(f"no visible node at row {row}")
            self.viewport.replace_line(row, render_line(node, width, self.symbols, self.theme))

    def _scroll_to(self, row: int) -> None:
        """Shift the viewport the least amount that brings ``row`` into view."""
        top, bottom = self.viewport.visible_line_indices()
        if row < top:
            self.viewport.set_y_offset(row)
        elif row > bottom:
            self.viewport.set_y_offset(row - max(1, self.viewport.height) + 1)

    # Navigation

    def _page_rows(self) -> int:
        return max(1, self.viewport.height)

    def _half_page_rows(self) -> int:
        return max(1, self.viewport.height // 2)

    def _set_cursor(self, row: int) -> bool:
        if row == self._cursor:
            return False
        previous = self._cursor
        if self._focused:
            set_flag(self.current_node(), NodeState.SELECTED, False)
        self._cursor = row
        if self._focused:
            set_flag(self.current_node(), NodeState.SELECTED)
        self._render_rows(previous, row)
        return True

    def move_up(self, rows: int) -> bool:
        """Move the cursor up by ``rows``, stopping at the first row."""
        if self._cursor == 0:
            return False
        target = max(self._cursor - max(0, rows), 0)
        top, _bottom = self.viewport.visible_line_indices()
        if target < top:
            self.viewport.line_up(self._cursor - target)
        self._scroll_to(target)
        return self._set_cursor(target)

    def move_down(self, rows: int) -> bool:
        """Move the cursor down by ``rows``, stopping at the last row."""
        last_row = len(self._visible) - 1
        if self._cursor == last_row:
            return False
        target = min(self._cursor + max(0, rows), last_row)
        _top, bottom = self.viewport.visible_line_indices()
        if target > bottom:
            self.viewport.line_down(target - self._cursor)
        self._scroll_to(target)
        return self._set_cursor(target)

    def page_up(self) -> bool:
        return self.move_up(self._page_rows())

    def page_down(self) -> bool:
        return self.move_down(self._page_rows())

    def half_page_up(self) -> bool:
        return self.move_up(self._half_page_rows())

    def half_page_down(self) -> bool:
        return self.move_down(self._half_page_rows())

    def goto_top(self) -> bool:
        return self.move_up(len(self._visible))

    def goto_bottom(self) -> bool:
        return self.move_down(len(self._visible))

    # Structural changes

    def toggle_expand(self) -> bool:
        """Expand or collapse the node under the cursor.

        Non-collapsible nodes are left alone and ``False`` is returned.
        """
        node = self.current_node()
        if not is_collapsible(node):
            return False
        node.set_state(node.state() ^ NodeState.COLLAPSED)
        logger.debug("toggled %r at row %d", node.name(), self._cursor)
        self._restructure(anchor=node)
        return True

    def set_hidden(self, node: Node, hidden: bool = True) -> None:
        """Hide or show ``node`` and resynchronize the pane."""
        set_flag(node, NodeState.HIDDEN, hidden)
        self.refresh()

    def refresh(self) -> None:
        """Rebuild the flat order after state was changed outside the pane."""
        anchor = self._visible[self._cursor] if self._cursor < len(self._visible) else None
        self._restructure(anchor=anchor)
        logger.debug("refreshed tree pane: %d visible rows", len(self._visible))

    def _restructure(self, anchor: Node | None) -> None:
        visible = flatten(self.roots)
        if not visible:
            raise EmptyTreeError("every node in the tree is hidden")
        self._visible = visible

        row = next((index for index, node in enumerate(visible) if node is anchor), None)
        if row is None:
            row = max(0, min(self._cursor, len(visible) - 1))
        self._cursor = row

        for node in walk(self.roots):
            if is_selected(node):
                set_flag(node, NodeState.SELECTED, False)
        if self._focused:
            set_flag(visible[row], NodeState.SELECTED)

        self.render_all()
        self._scroll_to(row)

    # Geometry

    def set_width(self, width: int) -> None:
        """Resize horizontally; every row is re-rendered for the new name budget."""
        width = max(0, width)
        if width == self.viewport.width:
            return
        self.viewport.width = width
        logger.debug("tree pane width set to %d", width)
        self.render_all()

    def set_height(self, height: int) -> None:
        """Resize vertically, scrolling just enough to keep the cursor visible."""
        self.viewport.height = max(0, height)
        self.viewport.set_y_offset(self.viewport.y_offset)
        self._scroll_to(self._cursor)

    # Focus

    def focus(self) -> None:
        if self._focused:
            return
        self._focused = True
        set_flag(self.current_node(), NodeState.SELECTED)
        self._render_rows(self._cursor)

    def blur(self) -> None:
        """Drop the selection highlight; the cursor position is kept."""
        for node in walk(self.roots):
            if is_selected(node):
                set_flag(node, NodeState.SELECTED, False)
        self._focused = False
        self._render_rows(self._cursor)

    def handle_key(self, key: str) -> bool:
        """Apply the action bound to ``key``; returns whether the key was bound.

        Keys are ignored while the pane is blurred.
        """
        if not self._focused or not self._keys.handles(key):
            return False
        self._keys.dispatch(key)
        return True


__all__ = ["TreePane"]

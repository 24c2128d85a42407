"""Line-composer tests: prefix, glyphs, truncation, and selection styling."""

from __future__ import annotations

import unittest

from lazytree.ansi import display_width
from lazytree.compose import name_budget, render_line
from lazytree.node import InvariantViolation, NodeState, TreeNode, set_flag
from lazytree.symbols import NORMAL_SYMBOLS
from lazytree.traversal import annotate_siblings
from lazytree.ui_theme import PLAIN_THEME, TreeTheme

MARKER_THEME = TreeTheme(
    name="marker",
    reset="<r>",
    prefix="",
    symbol="",
    line="<l>",
    selected="<s>",
    status="",
)


class RenderLineTests(unittest.TestCase):
    def test_unsized_line_is_prefix_glyphs_and_name(self) -> None:
        child = TreeNode("a1", prefix="drwx ")
        root = TreeNode("root", [TreeNode("a", [child, TreeNode("a2")]), TreeNode("b")])
        annotate_siblings([root])
        self.assertEqual(render_line(child, 0, NORMAL_SYMBOLS, PLAIN_THEME), "drwx   │ ├─a1")

    def test_long_name_is_truncated_with_ellipsis(self) -> None:
        root = TreeNode("abcdefghij")
        annotate_siblings([root])
        line = render_line(root, 10, NORMAL_SYMBOLS, PLAIN_THEME)
        self.assertEqual(line, "└─abcdef…")
        self.assertEqual(display_width(line), 9)

    def test_short_name_is_padded_to_budget(self) -> None:
        root = TreeNode("abc")
        annotate_siblings([root])
        self.assertEqual(render_line(root, 10, NORMAL_SYMBOLS, PLAIN_THEME), "└─abc    ")

    def test_name_exactly_filling_budget_is_kept(self) -> None:
        root = TreeNode("abcdefg")
        annotate_siblings([root])
        self.assertEqual(render_line(root, 10, NORMAL_SYMBOLS, PLAIN_THEME), "└─abcdefg")

    def test_prefix_width_reduces_name_budget(self) -> None:
        root = TreeNode("abcdef", prefix="1234 ")
        annotate_siblings([root])
        line = render_line(root, 12, NORMAL_SYMBOLS, PLAIN_THEME)
        self.assertEqual(line, "1234 └─abc…")

    def test_selected_name_uses_selected_style(self) -> None:
        root = TreeNode("root")
        annotate_siblings([root])
        self.assertEqual(render_line(root, 0, NORMAL_SYMBOLS, MARKER_THEME), "└─<l>root<r>")
        set_flag(root, NodeState.SELECTED)
        self.assertEqual(render_line(root, 0, NORMAL_SYMBOLS, MARKER_THEME), "└─<s>root<r>")

    def test_missing_node_is_an_invariant_violation(self) -> None:
        with self.assertRaises(InvariantViolation):
            render_line(None, 20, NORMAL_SYMBOLS, PLAIN_THEME)

    def test_name_budget_reserves_one_column(self) -> None:
        self.assertEqual(name_budget(20, 5), 14)


if __name__ == "__main__":
    unittest.main()

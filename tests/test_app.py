"""Screen composition and one-shot rendering tests for the runtime."""

from __future__ import annotations

import tempfile
import unittest
from pathlib import Path

from lazytree.app import STATUS_HINT, build_status_line, render_screen, render_tree_text
from lazytree.node import TreeNode
from lazytree.tree_pane import TreePane
from lazytree.ui_theme import PLAIN_THEME


class StatusLineTests(unittest.TestCase):
    def test_hint_is_right_aligned(self) -> None:
        line = build_status_line("left", 40)
        self.assertEqual(len(line), 39)
        self.assertTrue(line.startswith("left "))
        self.assertTrue(line.endswith(STATUS_HINT))

    def test_narrow_width_keeps_hint_tail(self) -> None:
        self.assertEqual(build_status_line("left", 5), STATUS_HINT[-4:])


class RenderScreenTests(unittest.TestCase):
    def test_frame_has_height_rows_and_status(self) -> None:
        nodes = [TreeNode("root", [TreeNode(f"n{index}") for index in range(5)])]
        pane = TreePane(nodes, width=30, height=3, theme=PLAIN_THEME, focused=True)
        pane.move_down(1)

        frame = render_screen(pane, "title", 60, PLAIN_THEME)

        self.assertTrue(frame.startswith("\033[H\033[J"))
        body, status = frame[len("\033[H\033[J"):].rsplit("\r\n", 1)
        self.assertEqual([row.rstrip() for row in body.split("\r\n")], ["└─root", "  ├─n0", "  ├─n1"])
        self.assertTrue(status.startswith("title (2/6   0.0%)"))
        self.assertEqual(len(status), 59)

    def test_narrow_frame_truncates_status_title_before_hint(self) -> None:
        pane = TreePane([TreeNode("root")], width=30, height=1, theme=PLAIN_THEME)
        status = render_screen(pane, "title", 30, PLAIN_THEME).rsplit("\r\n", 1)[1]
        self.assertEqual(status, "title (1 " + STATUS_HINT)

    def test_rows_are_clipped_to_terminal_width(self) -> None:
        pane = TreePane([TreeNode("a-very-long-name")], height=1, theme=PLAIN_THEME)
        frame = render_screen(pane, "t", 8, PLAIN_THEME)
        self.assertIn("\033[H\033[J└─a-ver\r\n", frame)


class RenderTreeTextTests(unittest.TestCase):
    def test_every_directory_is_expanded(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            (root / "d" / "e").mkdir(parents=True)
            (root / "d" / "e" / "f.txt").write_text("f", encoding="utf-8")
            (root / ".hidden").write_text("h", encoding="utf-8")

            text = render_tree_text(root, theme=PLAIN_THEME)
            with_hidden = render_tree_text(root, theme=PLAIN_THEME, show_hidden=True)

        lines = text.splitlines()
        self.assertTrue(text.endswith("\n"))
        self.assertEqual(len(lines), 4)
        self.assertTrue(lines[1].endswith("  └─▾ d/"))
        self.assertTrue(lines[2].endswith("    └─▾ e/"))
        self.assertTrue(lines[3].endswith("      └─f.txt"))
        self.assertEqual(len(with_hidden.splitlines()), 5)

    def test_max_cols_truncates_names(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            (root / ("long" * 10 + ".txt")).write_text("x", encoding="utf-8")
            text = render_tree_text(root, theme=PLAIN_THEME, max_cols=40)

        for line in text.splitlines():
            self.assertLessEqual(len(line), 39)
        self.assertIn("…", text.splitlines()[1])


if __name__ == "__main__":
    unittest.main()

from __future__ import annotations

import unittest

from lazytree.viewport import Viewport


def _viewport(lines: int = 10, height: int = 3) -> Viewport:
    viewport = Viewport(width=20, height=height)
    viewport.set_content(f"line {index}" for index in range(lines))
    return viewport


class ViewportScrollTests(unittest.TestCase):
    def test_visible_indices_follow_offset(self) -> None:
        viewport = _viewport()
        self.assertEqual(viewport.visible_line_indices(), (0, 2))
        viewport.line_down(2)
        self.assertEqual(viewport.visible_line_indices(), (2, 4))
        self.assertEqual(viewport.visible_lines(), ["line 2", "line 3", "line 4"])

    def test_offset_is_clamped_to_content(self) -> None:
        viewport = _viewport()
        viewport.line_down(100)
        self.assertEqual(viewport.y_offset, 7)
        self.assertTrue(viewport.at_bottom())
        viewport.line_up(3)
        self.assertEqual(viewport.y_offset, 4)
        viewport.set_y_offset(-5)
        self.assertEqual(viewport.y_offset, 0)
        self.assertTrue(viewport.at_top())

    def test_shrinking_content_clamps_offset(self) -> None:
        viewport = _viewport()
        viewport.set_y_offset(7)
        viewport.set_content(["a", "b", "c", "d"])
        self.assertEqual(viewport.y_offset, 1)

    def test_scroll_percent(self) -> None:
        viewport = _viewport()
        self.assertEqual(viewport.scroll_percent(), 0.0)
        viewport.set_y_offset(7)
        self.assertEqual(viewport.scroll_percent(), 1.0)
        viewport.set_y_offset(4)
        self.assertAlmostEqual(viewport.scroll_percent(), 4 / 7)
        self.assertEqual(_viewport(lines=2, height=5).scroll_percent(), 1.0)


class ViewportContentTests(unittest.TestCase):
    def test_replace_line_swaps_single_line(self) -> None:
        viewport = _viewport()
        viewport.replace_line(1, "changed")
        viewport.replace_line(99, "ignored")
        self.assertEqual(viewport.lines()[:3], ["line 0", "changed", "line 2"])
        self.assertEqual(viewport.total_line_count(), 10)

    def test_view_joins_visible_lines(self) -> None:
        viewport = _viewport(lines=5, height=2)
        self.assertEqual(viewport.view(), "line 0\nline 1")

    def test_zero_height_shows_nothing(self) -> None:
        viewport = _viewport(height=0)
        self.assertEqual(viewport.visible_lines(), [])
        self.assertEqual(viewport.view(), "")


if __name__ == "__main__":
    unittest.main()

"""Raw-mode lifecycle and screen-switch sequences of ``TerminalController``."""

from __future__ import annotations

import termios
import unittest
from unittest import mock

from lazytree import terminal as terminal_mod
from lazytree.terminal import TerminalController


class TerminalControllerTests(unittest.TestCase):
    def setUp(self) -> None:
        self.saved_attrs = ["iflag", "oflag"]
        patches = {
            "tcgetattr": mock.patch.object(terminal_mod.termios, "tcgetattr", return_value=self.saved_attrs),
            "tcsetattr": mock.patch.object(terminal_mod.termios, "tcsetattr"),
            "setraw": mock.patch.object(terminal_mod.tty, "setraw"),
            "write": mock.patch.object(terminal_mod.os, "write"),
        }
        self.mocks = {name: patcher.start() for name, patcher in patches.items()}
        for patcher in patches.values():
            self.addCleanup(patcher.stop)
        self.controller = TerminalController(stdin_fd=3, stdout_fd=4)

    def test_raw_mode_enters_and_leaves_alternate_screen(self) -> None:
        with self.controller.raw_mode() as active:
            self.assertIs(active, self.controller)
            self.mocks["setraw"].assert_called_once_with(3, termios.TCSAFLUSH)
            self.mocks["tcsetattr"].assert_not_called()

        self.assertEqual(
            self.mocks["write"].call_args_list,
            [mock.call(4, b"\x1b[?1049h\x1b[?25l"), mock.call(4, b"\x1b[?25h\x1b[?1049l")],
        )
        self.mocks["tcsetattr"].assert_called_once_with(3, termios.TCSAFLUSH, self.saved_attrs)

    def test_raw_mode_restores_terminal_when_body_raises(self) -> None:
        with self.assertRaises(RuntimeError):
            with self.controller.raw_mode():
                raise RuntimeError("boom")

        self.mocks["tcsetattr"].assert_called_once_with(3, termios.TCSAFLUSH, self.saved_attrs)

    def test_write_encodes_utf8(self) -> None:
        self.controller.write("└─é")
        self.mocks["write"].assert_called_once_with(4, "└─é".encode("utf-8"))


if __name__ == "__main__":
    unittest.main()

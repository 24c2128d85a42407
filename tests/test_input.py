"""Regression tests for raw-key decoding.

Covers ESC timing, cursor and paging sequences, and control-key token mapping.
Navigation bindings rely on these token names.
"""

import os
import time
import unittest

from lazytree import input as input_mod


def _read_keys(payload: bytes, count: int = 1) -> list[str]:
    read_fd, write_fd = os.pipe()
    try:
        os.write(write_fd, payload)
        return [input_mod.read_key(read_fd, timeout_ms=20) for _ in range(count)]
    finally:
        os.close(read_fd)
        os.close(write_fd)


class ReadKeyRegressionTests(unittest.TestCase):
    def setUp(self) -> None:
        input_mod._PENDING_BYTES.clear()

    def tearDown(self) -> None:
        input_mod._PENDING_BYTES.clear()

    def test_single_escape_returns_esc_without_second_keypress(self) -> None:
        started = time.monotonic()
        keys = _read_keys(b"\x1b")
        elapsed = time.monotonic() - started

        self.assertEqual(keys, ["ESC"])
        self.assertLess(elapsed, 0.2)

    def test_arrow_sequences(self) -> None:
        self.assertEqual(_read_keys(b"\x1b[A\x1b[B", count=2), ["UP", "DOWN"])

    def test_ss3_arrow_sequence(self) -> None:
        self.assertEqual(_read_keys(b"\x1bOB"), ["DOWN"])

    def test_paging_sequences(self) -> None:
        self.assertEqual(_read_keys(b"\x1b[5~\x1b[6~", count=2), ["PGUP", "PGDN"])

    def test_home_and_end_variants(self) -> None:
        self.assertEqual(_read_keys(b"\x1b[H\x1b[F", count=2), ["HOME", "END"])
        self.assertEqual(_read_keys(b"\x1b[1~\x1b[4~", count=2), ["HOME", "END"])

    def test_unknown_tilde_sequence_is_esc(self) -> None:
        self.assertEqual(_read_keys(b"\x1b[99~"), ["ESC"])

    def test_escape_does_not_swallow_following_printable_key(self) -> None:
        self.assertEqual(_read_keys(b"\x1ba", count=2), ["ESC", "a"])

    def test_control_keys(self) -> None:
        self.assertEqual(_read_keys(b"\r\x04\x15\x03", count=4), ["ENTER", "CTRL_D", "CTRL_U", "CTRL_C"])

    def test_multibyte_character_is_decoded_whole(self) -> None:
        self.assertEqual(_read_keys("é".encode("utf-8")), ["é"])

    def test_timeout_returns_empty_token(self) -> None:
        self.assertEqual(_read_keys(b""), [""])


if __name__ == "__main__":
    unittest.main()

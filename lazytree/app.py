"""Interactive runtime: terminal loop, screen drawing, and one-shot rendering."""

from __future__ import annotations

import logging
import shutil
import sys
from pathlib import Path

from .ansi import clip_ansi_line
from .config import save_show_hidden
from .fs_tree import DEFAULT_MAX_DEPTH, build_file_tree, set_dotfiles_hidden
from .input import read_key
from .keymap import KeyMap
from .symbols import NORMAL_SYMBOLS, Symbols
from .terminal import TerminalController
from .traversal import expand_all
from .tree_pane import TreePane
from .ui_theme import DEFAULT_THEME, TreeTheme, styled

logger = logging.getLogger(__name__)

POLL_TIMEOUT_MS = 200
QUIT_KEYS = frozenset({"q", "ESC", "CTRL_C"})
TOGGLE_DOTFILES_KEY = "."
STATUS_HINT = "│ . dotfiles  q quit"


def build_status_line(left_text: str, width: int, right_text: str = STATUS_HINT) -> str:
    usable = max(1, width - 1)
    if usable <= len(right_text):
        return right_text[-usable:]
    left_limit = max(0, usable - len(right_text) - 1)
    left = left_text[:left_limit]
    gap = " " * (usable - len(left) - len(right_text))
    return f"{left}{gap}{right_text}"


def render_screen(pane: TreePane, title: str, width: int, theme: TreeTheme = DEFAULT_THEME) -> str:
    """Build one full-screen frame: the visible tree rows plus a status line."""
    out: list[str] = ["\033[H\033[J"]
    rows = pane.viewport.visible_lines()
    for row in range(pane.height):
        if row < len(rows):
            line = clip_ansi_line(rows[row], max(1, width - 1))
            out.append(line)
            if "\033" in line:
                out.append("\033[0m")
        out.append("\r\n")
    percent = pane.scroll_percent() * 100.0
    left_status = f"{title} ({pane.cursor + 1}/{pane.visible_count()} {percent:5.1f}%)"
    out.append(styled(build_status_line(left_status, width), theme.status, theme))
    return "".join(out)


def render_tree_text(
    root: Path,
    *,
    max_depth: int = DEFAULT_MAX_DEPTH,
    symbols: Symbols = NORMAL_SYMBOLS,
    theme: TreeTheme = DEFAULT_THEME,
    show_hidden: bool = False,
    max_cols: int = 0,
) -> str:
    """Render ``root`` once with every directory expanded.

    ``max_cols`` of ``0`` leaves names untruncated.
    """
    nodes = build_file_tree(root, max_depth=max_depth, show_hidden=show_hidden)
    expand_all(nodes)
    pane = TreePane(nodes, width=max_cols, symbols=symbols, theme=theme)
    return "".join(f"{line}\n" for line in pane.rendered_lines())


def run_tree_app(
    root: Path,
    *,
    max_depth: int = DEFAULT_MAX_DEPTH,
    symbols: Symbols = NORMAL_SYMBOLS,
    theme: TreeTheme = DEFAULT_THEME,
    keymap: KeyMap | None = None,
    show_hidden: bool = False,
    stdin_fd: int | None = None,
    stdout_fd: int | None = None,
) -> None:
    """Run the interactive tree viewer until the user quits."""
    stdin_fd = sys.stdin.fileno() if stdin_fd is None else stdin_fd
    stdout_fd = sys.stdout.fileno() if stdout_fd is None else stdout_fd

    nodes = build_file_tree(root, max_depth=max_depth, show_hidden=show_hidden)
    pane = TreePane(nodes, symbols=symbols, theme=theme, keymap=keymap, focused=True)
    terminal = TerminalController(stdin_fd, stdout_fd)
    title = str(root)
    dirty = True
    logger.info("starting tree viewer for %s", root)

    with terminal.raw_mode():
        while True:
            term = shutil.get_terminal_size((80, 24))
            content_rows = max(1, term.lines - 1)
            if term.columns != pane.width or content_rows != pane.height:
                pane.set_width(term.columns)
                pane.set_height(content_rows)
                dirty = True

            if dirty:
                terminal.write(render_screen(pane, title, term.columns, theme))
                dirty = False

            key = read_key(stdin_fd, timeout_ms=POLL_TIMEOUT_MS)
            if not key:
                continue
            if key in QUIT_KEYS:
                break
            if key == TOGGLE_DOTFILES_KEY:
                show_hidden = not show_hidden
                set_dotfiles_hidden(nodes, hidden=not show_hidden)
                pane.refresh()
                save_show_hidden(show_hidden)
                dirty = True
                continue
            if pane.handle_key(key):
                dirty = True

    logger.info("tree viewer closed")

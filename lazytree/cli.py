"""Command-line front door for lazytree.

Parses CLI options, merges them over the persisted config, and either prints
the tree once or launches the interactive viewer.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from . import config
from .app import render_tree_text, run_tree_app
from .symbols import available_symbol_names, resolve_symbols
from .ui_theme import available_theme_names, resolve_theme

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def _positive_int(value: str) -> int:
    """argparse type for positive integer values."""
    try:
        parsed = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid integer value: {value!r}") from exc
    if parsed <= 0:
        raise argparse.ArgumentTypeError("value must be >= 1")
    return parsed


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Browse a directory as a collapsible tree in the terminal.")
    parser.add_argument("path", nargs="?", default=None, help="Directory to browse. Defaults to current directory.")
    parser.add_argument("--depth", type=_positive_int, default=None, help="Maximum directory depth to scan.")
    parser.add_argument(
        "--symbols",
        default=None,
        choices=available_symbol_names(),
        help="Branch glyph style.",
    )
    parser.add_argument(
        "--theme",
        default=None,
        help=f"UI theme name ({', '.join(available_theme_names())}).",
    )
    parser.add_argument("--no-color", action="store_true", help="Disable color output even on TTY.")
    parser.add_argument("--show-hidden", action="store_true", help="Show dotfiles initially.")
    parser.add_argument("--render", action="store_true", help="Print the fully expanded tree and exit.")
    parser.add_argument(
        "--max-cols",
        type=_positive_int,
        default=None,
        help="Truncate --render rows to this width (default: no truncation).",
    )
    parser.add_argument("--log-file", default=None, help="Write debug logs to this file.")
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=("DEBUG", "INFO", "WARNING", "ERROR"),
        help="Log level used with --log-file.",
    )
    return parser


def configure_logging(log_file: str | None, level: str) -> None:
    """Send log records to ``log_file``; the terminal itself is owned by the UI."""
    if log_file is None:
        return
    logging.basicConfig(filename=log_file, level=getattr(logging, level), format=LOG_FORMAT)


def main(default_path: Path | None = None) -> None:
    """Parse CLI arguments and show the tree for a directory.

    ``default_path`` is primarily for tests; when omitted the current working
    directory is used. Output that is not a TTY always uses ``--render``.
    """
    args = build_parser().parse_args()
    configure_logging(args.log_file, args.log_level)

    if default_path is None:
        default_path = Path.cwd()
    path = Path(args.path or default_path).resolve()
    if not path.exists():
        raise SystemExit(f"Path not found: {path}")

    symbols = resolve_symbols(args.symbols or config.load_symbols_name())
    theme = resolve_theme(args.theme or config.load_theme_name(), no_color=args.no_color)
    max_depth = args.depth if args.depth is not None else config.load_depth()
    show_hidden = args.show_hidden or config.load_show_hidden()

    if args.render or not sys.stdout.isatty():
        sys.stdout.write(
            render_tree_text(
                path,
                max_depth=max_depth,
                symbols=symbols,
                theme=theme,
                show_hidden=show_hidden,
                max_cols=args.max_cols or 0,
            )
        )
        return

    run_tree_app(
        path,
        max_depth=max_depth,
        symbols=symbols,
        theme=theme,
        keymap=config.load_keymap(),
        show_hidden=show_hidden,
    )


if __name__ == "__main__":
    main()

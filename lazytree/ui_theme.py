"""Color palettes for tree rows and the status line.

The plain theme carries no escapes and backs ``--no-color``.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class TreeTheme:
    """ANSI start sequences per row part; empty strings disable styling."""

    name: str
    reset: str
    prefix: str
    symbol: str
    line: str
    selected: str
    status: str


DEFAULT_THEME = TreeTheme(
    name="default",
    reset="\033[0m",
    prefix="\033[38;5;109m",
    symbol="\033[38;5;44m",
    line="\033[38;5;252m",
    selected="\033[7;1m",
    status="\033[7m",
)

OCEAN_THEME = TreeTheme(
    name="ocean",
    reset="\033[0m",
    prefix="\033[38;5;73m",
    symbol="\033[38;5;39m",
    line="\033[38;5;153m",
    selected="\033[1;38;5;16;48;5;45m",
    status="\033[38;5;16;48;5;31m",
)

PLAIN_THEME = TreeTheme(
    name="plain",
    reset="",
    prefix="",
    symbol="",
    line="",
    selected="",
    status="",
)

_THEMES: dict[str, TreeTheme] = {
    DEFAULT_THEME.name: DEFAULT_THEME,
    OCEAN_THEME.name: OCEAN_THEME,
}


def available_theme_names() -> tuple[str, ...]:
    return tuple(sorted(_THEMES))


def normalize_theme_name(name: str | None) -> str:
    """Map ``name`` onto a known theme, case-insensitively; unknown names give ``default``."""
    key = (name or "").strip().lower()
    return key if key in _THEMES else DEFAULT_THEME.name


def resolve_theme(name: str | None, *, no_color: bool = False) -> TreeTheme:
    """Pick the palette for ``name``; ``no_color`` always wins with the plain theme."""
    if no_color:
        return PLAIN_THEME
    return _THEMES[normalize_theme_name(name)]


def styled(text: str, style: str, theme: TreeTheme) -> str:
    """Wrap ``text`` in ``style`` and the theme reset, if styling is enabled."""
    if not style or not text:
        return text
    return f"{style}{text}{theme.reset}"


__all__ = [
    "TreeTheme",
    "DEFAULT_THEME",
    "OCEAN_THEME",
    "PLAIN_THEME",
    "available_theme_names",
    "normalize_theme_name",
    "resolve_theme",
    "styled",
]

"""Key bindings for tree navigation and a small dispatch table."""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass, fields, replace

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class KeyMap:
    """Key tokens (as produced by ``lazytree.input.read_key``) per action."""

    line_up: tuple[str, ...] = ("UP", "k")
    line_down: tuple[str, ...] = ("DOWN", "j")
    page_up: tuple[str, ...] = ("PGUP", "b")
    page_down: tuple[str, ...] = ("PGDN", "f")
    half_page_up: tuple[str, ...] = ("CTRL_U", "u")
    half_page_down: tuple[str, ...] = ("CTRL_D", "d")
    goto_top: tuple[str, ...] = ("HOME", "g")
    goto_bottom: tuple[str, ...] = ("END", "G")
    toggle_expand: tuple[str, ...] = ("ENTER", " ", "l")

    def bindings(self) -> dict[str, tuple[str, ...]]:
        return {field.name: getattr(self, field.name) for field in fields(self)}


DEFAULT_KEYMAP = KeyMap()


def keymap_with_overrides(overrides: Mapping[str, object], base: KeyMap = DEFAULT_KEYMAP) -> KeyMap:
    """Return ``base`` with per-action key lists replaced from ``overrides``.

    Unknown actions and values that are not non-empty lists of strings are
    skipped.
    """
    known = {field.name for field in fields(base)}
    changes: dict[str, tuple[str, ...]] = {}
    for action, keys in overrides.items():
        if action not in known:
            logger.warning("ignoring key binding for unknown action %r", action)
            continue
        if not isinstance(keys, (list, tuple)) or not keys or not all(isinstance(key, str) and key for key in keys):
            logger.warning("ignoring malformed key binding for %r: %r", action, keys)
            continue
        changes[action] = tuple(keys)
    return replace(base, **changes)


@dataclass(frozen=True)
class KeyComboBinding:
    """Key tokens that all trigger ``handler``."""

    combos: tuple[str, ...]
    handler: Callable[[], bool | None]


class KeyComboRegistry:
    """Token -> handler table. ``normalize`` folds tokens before lookup."""

    def __init__(self, normalize: Callable[[str], str] | None = None) -> None:
        self._fold = normalize or (lambda key: key)
        self._table: dict[str, Callable[[], bool | None]] = {}

    def register_binding(self, binding: KeyComboBinding) -> KeyComboRegistry:
        """Bind every combo of ``binding``; a later binding replaces an earlier one."""
        self._table.update((self._fold(combo), binding.handler) for combo in binding.combos)
        return self

    def register_bindings(self, *bindings: KeyComboBinding) -> KeyComboRegistry:
        for binding in bindings:
            self.register_binding(binding)
        return self

    def handles(self, key: str) -> bool:
        return self._fold(key) in self._table

    def dispatch(self, key: str) -> bool | None:
        """Run the handler bound to ``key``; ``None`` when nothing is bound."""
        handler = self._table.get(self._fold(key))
        return None if handler is None else handler()


__all__ = [
    "KeyMap",
    "DEFAULT_KEYMAP",
    "keymap_with_overrides",
    "KeyComboBinding",
    "KeyComboRegistry",
]

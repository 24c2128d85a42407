"""Filesystem-backed tree nodes.

Builds a ``FileNode`` hierarchy for a directory with ``os.scandir``. Every
row carries an ``ls``-style metadata prefix (mode, owner ids, size).
Dotfiles are always built but start hidden unless requested, so toggling
their visibility is a pure state change.
"""

from __future__ import annotations

import logging
import os
import stat
from collections.abc import Sequence
from pathlib import Path

from .node import NodeState, TreeNode, has_children, is_collapsible, is_expanded, set_flag
from .traversal import walk

logger = logging.getLogger(__name__)

COLLAPSED_MARKER = "▸ "
EXPANDED_MARKER = "▾ "
DEFAULT_MAX_DEPTH = 10
_SIZE_UNITS = ("B", "K", "M", "G", "T")


def human_size(size: int | None) -> str:
    """Format a byte count compactly, e.g. ``512B``, ``4.0K``, ``12M``."""
    if size is None:
        return "-"
    value = float(size)
    unit = _SIZE_UNITS[0]
    for unit in _SIZE_UNITS:
        if value < 1024 or unit == _SIZE_UNITS[-1]:
            break
        value /= 1024
    if unit == "B":
        return f"{int(value)}B"
    if value < 10:
        return f"{value:.1f}{unit}"
    return f"{int(value)}{unit}"


class FileNode(TreeNode):
    """One file or directory row."""

    def __init__(
        self,
        path: Path,
        *,
        is_dir: bool,
        mode: int = 0,
        uid: int | None = None,
        gid: int | None = None,
        size: int | None = None,
        is_root: bool = False,
        state: NodeState = NodeState.NONE,
    ) -> None:
        super().__init__(path.name or str(path), state=state)
        self.path = path
        self.is_dir = is_dir
        self.mode = mode
        self.uid = uid
        self.gid = gid
        self.size = size
        self.is_root = is_root

    @property
    def is_dotfile(self) -> bool:
        return not self.is_root and self.path.name.startswith(".")

    def name(self) -> str:
        label = str(self.path) if self.is_root else self.path.name
        if self.is_dir:
            label += "/"
        if is_collapsible(self):
            marker = EXPANDED_MARKER if is_expanded(self) else COLLAPSED_MARKER
            return marker + label
        return label

    def prefix(self) -> str:
        permissions = stat.filemode(self.mode) if self.mode else "?" * 10
        uid = "?" if self.uid is None else str(self.uid)
        gid = "?" if self.gid is None else str(self.gid)
        return f"{permissions} {uid}:{gid} {human_size(self.size):>5} "


def _stat_node(path: Path, *, is_dir: bool, is_root: bool = False, entry: os.DirEntry | None = None) -> FileNode:
    try:
        st = entry.stat(follow_symlinks=False) if entry is not None else path.lstat()
    except OSError:
        return FileNode(path, is_dir=is_dir, is_root=is_root)
    return FileNode(
        path,
        is_dir=is_dir,
        mode=st.st_mode,
        uid=st.st_uid,
        gid=st.st_gid,
        size=None if is_dir else int(st.st_size),
        is_root=is_root,
    )


def _sorted_entries(directory: Path) -> list[tuple[os.DirEntry, bool]]:
    """Scan ``directory``: directories first, then case-folded names."""
    entries: list[tuple[os.DirEntry, bool]] = []
    with os.scandir(directory) as scanned:
        for entry in scanned:
            try:
                is_dir = entry.is_dir(follow_symlinks=False)
            except OSError:
                is_dir = False
            entries.append((entry, is_dir))
    entries.sort(key=lambda item: (not item[1], item[0].name.casefold(), item[0].name))
    return entries


def _populate(node: FileNode, level: int, max_depth: int, show_hidden: bool) -> None:
    if level >= max_depth:
        return
    try:
        entries = _sorted_entries(node.path)
    except OSError as exc:
        logger.warning("cannot scan %s: %s", node.path, exc)
        return

    for entry, is_dir in entries:
        child = _stat_node(Path(entry.path), is_dir=is_dir, entry=entry)
        if child.is_dotfile and not show_hidden:
            set_flag(child, NodeState.HIDDEN)
        node.add_child(child)
        if is_dir:
            _populate(child, level + 1, max_depth, show_hidden)
            if has_children(child):
                set_flag(child, NodeState.COLLAPSIBLE | NodeState.COLLAPSED)


def build_file_tree(
    root: Path,
    max_depth: int = DEFAULT_MAX_DEPTH,
    show_hidden: bool = False,
) -> list[FileNode]:
    """Build the node hierarchy for ``root`` and return it as a root list.

    Entries more than ``max_depth`` levels below ``root`` are not scanned.
    The root starts expanded. Subdirectories with entries start collapsed;
    empty, unreadable, or unscanned ones are plain leaves.
    """
    root = Path(root)
    is_dir = root.is_dir()
    top = _stat_node(root, is_dir=is_dir, is_root=True)
    if is_dir:
        _populate(top, 0, max(0, max_depth), show_hidden)
        set_flag(top, NodeState.COLLAPSIBLE, has_children(top))
    logger.debug("built file tree for %s", root)
    return [top]


def set_dotfiles_hidden(nodes: Sequence[FileNode], hidden: bool) -> int:
    """Set ``HIDDEN`` on every dot entry below ``nodes``; returns how many changed."""
    changed = 0
    for node in walk(nodes):
        if not isinstance(node, FileNode) or not node.is_dotfile:
            continue
        before = node.state()
        set_flag(node, NodeState.HIDDEN, hidden)
        if node.state() != before:
            changed += 1
    return changed


__all__ = [
    "FileNode",
    "build_file_tree",
    "set_dotfiles_hidden",
    "human_size",
    "COLLAPSED_MARKER",
    "EXPANDED_MARKER",
]

"""Node capability contract and display-state flags.

A tree element only has to answer a handful of questions (name, metadata
prefix, parent, children) and carry a ``NodeState`` bitmask. The bitmask is
transient display state owned by the tree pane, kept apart from the node's
identity and hierarchy data.
"""

from __future__ import annotations

import enum
import weakref
from collections.abc import Iterable, Sequence
from typing import Protocol, runtime_checkable


class TreeError(Exception):
    """Base class for tree-pane failures."""


class EmptyTreeError(TreeError, ValueError):
    """Raised when a tree pane is built without any visible node."""


class InvariantViolation(TreeError, RuntimeError):
    """Raised when indexing or rendering reaches a node that must exist but does not."""


class NodeState(enum.IntFlag):
    NONE = 0
    SELECTED = 1 << 1
    COLLAPSIBLE = 1 << 2
    COLLAPSED = 1 << 3
    HIDDEN = 1 << 4
    LAST_CHILD = 1 << 5
    HAS_PREVIOUS_SIBLING = 1 << 6


@runtime_checkable
class Node(Protocol):
    """Capabilities the tree pane needs from a tree element."""

    def name(self) -> str: ...

    def prefix(self) -> str: ...

    def parent(self) -> Node | None: ...

    def children(self) -> Sequence[Node]: ...

    def state(self) -> NodeState: ...

    def set_state(self, state: NodeState) -> None: ...


def has_state(node: Node, flag: NodeState) -> bool:
    return node.state() & flag == flag


def set_flag(node: Node, flag: NodeState, enabled: bool = True) -> None:
    """Set or clear ``flag`` on ``node`` leaving other bits untouched."""
    current = node.state()
    node.set_state(NodeState(current | flag if enabled else current & ~int(flag)))


def is_hidden(node: Node) -> bool:
    return has_state(node, NodeState.HIDDEN)


def is_expanded(node: Node) -> bool:
    return not has_state(node, NodeState.COLLAPSED)


def is_collapsible(node: Node) -> bool:
    return has_state(node, NodeState.COLLAPSIBLE)


def is_last_child(node: Node) -> bool:
    return has_state(node, NodeState.LAST_CHILD)


def is_selected(node: Node) -> bool:
    return has_state(node, NodeState.SELECTED)


def has_previous_sibling(node: Node) -> bool:
    return has_state(node, NodeState.HAS_PREVIOUS_SIBLING)


def has_children(node: Node) -> bool:
    return len(node.children()) > 0


class TreeNode:
    """Plain in-memory node.

    The parent link is a weak reference so a subtree never keeps its
    ancestors alive; children are owned through a regular list whose order is
    the display order.
    """

    def __init__(
        self,
        label: str,
        children: Iterable[TreeNode] = (),
        *,
        prefix: str = "",
        state: NodeState = NodeState.NONE,
    ) -> None:
        self.label = label
        self.prefix_text = prefix
        self._state = NodeState(state)
        self._parent: weakref.ref[TreeNode] | None = None
        self._children: list[TreeNode] = []
        for child in children:
            self.add_child(child)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.label!r}, state={self._state!r})"

    def add_child(self, child: TreeNode) -> TreeNode:
        """Append ``child`` and point its parent link at this node."""
        child._parent = weakref.ref(self)
        self._children.append(child)
        return child

    def name(self) -> str:
        return self.label

    def prefix(self) -> str:
        return self.prefix_text

    def parent(self) -> TreeNode | None:
        if self._parent is None:
            return None
        return self._parent()

    def children(self) -> Sequence[TreeNode]:
        return self._children

    def state(self) -> NodeState:
        return self._state

    def set_state(self, state: NodeState) -> None:
        self._state = NodeState(state)


__all__ = [
    "TreeError",
    "EmptyTreeError",
    "InvariantViolation",
    "NodeState",
    "Node",
    "TreeNode",
    "has_state",
    "set_flag",
    "is_hidden",
    "is_expanded",
    "is_collapsible",
    "is_last_child",
    "is_selected",
    "has_previous_sibling",
    "has_children",
]

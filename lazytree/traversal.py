"""Flattening and indexed lookup over an expandable tree.

The visible flat order is depth-first, parents before children. Hidden nodes
are skipped together with their subtree, and a collapsed node contributes
itself but none of its descendants.
"""

from __future__ import annotations

from collections.abc import Iterator, Sequence

from .node import (
    Node,
    NodeState,
    has_children,
    is_expanded,
    is_hidden,
    set_flag,
)


def flatten(nodes: Sequence[Node]) -> list[Node]:
    """Return every currently visible node in display order."""
    visible: list[Node] = []
    for node in nodes:
        if is_hidden(node):
            continue
        visible.append(node)
        if is_expanded(node):
            visible.extend(flatten(node.children()))
    return visible


def _locate(nodes: Sequence[Node], index: int) -> tuple[Node | None, int]:
    """Find the ``index``-th visible node below ``nodes``.

    Returns ``(node, consumed)``; when the index lies past this sibling list,
    ``node`` is ``None`` and ``consumed`` is the number of visible rows the
    list occupies, so the caller can skip over it.
    """
    seen = 0
    for node in nodes:
        if is_hidden(node):
            continue
        if seen == index:
            return node, seen
        seen += 1
        if is_expanded(node) and has_children(node):
            found, consumed = _locate(node.children(), index - seen)
            if found is not None:
                return found, seen + consumed
            seen += consumed
    return None, seen


def at(nodes: Sequence[Node], index: int) -> Node | None:
    """Return the ``index``-th visible node, or ``None`` when out of range.

    Equivalent to ``flatten(nodes)[index]`` but stops walking as soon as the
    row is reached instead of building the whole list.
    """
    if index < 0 or not nodes:
        return None
    found, _consumed = _locate(nodes, index)
    return found


def count_below(node: Node) -> int:
    """Count all descendants of ``node`` regardless of hidden/collapsed state."""
    total = 0
    for child in node.children():
        total += 1 + count_below(child)
    return total


def depth(node: Node | None) -> int:
    """Number of parent hops from ``node`` to its root (roots are depth 0)."""
    hops = 0
    while node is not None:
        node = node.parent()
        if node is None:
            break
        hops += 1
    return hops


def walk(nodes: Sequence[Node]) -> Iterator[Node]:
    """Yield every node depth-first, ignoring display state."""
    for node in nodes:
        yield node
        yield from walk(node.children())


def annotate_siblings(nodes: Sequence[Node]) -> None:
    """Recompute derived sibling flags for the reachable part of the tree.

    ``LAST_CHILD`` and ``HAS_PREVIOUS_SIBLING`` are assigned among non-hidden
    siblings only. ``COLLAPSIBLE`` is set exactly on nodes owning children.
    """
    visible = [node for node in nodes if not is_hidden(node)]
    last = len(visible) - 1
    for position, node in enumerate(visible):
        set_flag(node, NodeState.HAS_PREVIOUS_SIBLING, position > 0)
        set_flag(node, NodeState.LAST_CHILD, position == last)
        owns_children = has_children(node)
        set_flag(node, NodeState.COLLAPSIBLE, owns_children)
        if owns_children and is_expanded(node):
            annotate_siblings(node.children())


def expand_all(nodes: Sequence[Node]) -> None:
    """Clear ``COLLAPSED`` on every node that has children."""
    for node in walk(nodes):
        if has_children(node):
            set_flag(node, NodeState.COLLAPSED, False)


__all__ = ["at", "flatten", "count_below", "depth", "walk", "annotate_siblings", "expand_all"]

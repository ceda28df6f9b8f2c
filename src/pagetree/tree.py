"""Pure queries over a flat node list.

Parent/child relationships are never cached on the nodes themselves; every
query rescans the list (or an id index built from it), so results stay
correct after a reload or an import. All functions tolerate dangling
`parent_id`s and corrupt cycles.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from pagetree.models import NodeKind

if TYPE_CHECKING:
    from collections.abc import Sequence

    from pagetree.models import Node


def index_by_id(nodes: Sequence[Node]) -> dict[str, Node]:
    """id -> node. On duplicate ids the first occurrence wins."""
    index: dict[str, Node] = {}
    for node in nodes:
        index.setdefault(node.id, node)
    return index


def find(nodes: Sequence[Node], node_id: str | None) -> Node | None:
    if node_id is None:
        return None
    for node in nodes:
        if node.id == node_id:
            return node
    return None


def is_folder(nodes: Sequence[Node], node_id: str | None) -> bool:
    node = find(nodes, node_id)
    return node is not None and node.kind is NodeKind.FOLDER


def children_of(nodes: Sequence[Node], folder_id: str | None) -> list[Node]:
    """Direct children of `folder_id` (None = root), in storage order."""
    return [node for node in nodes if node.parent_id == folder_id]


def child_count(nodes: Sequence[Node], folder_id: str | None) -> int:
    return sum(1 for node in nodes if node.parent_id == folder_id)


def descendant_ids(nodes: Sequence[Node], folder_id: str) -> list[str]:
    """Every node below `folder_id`, depth-first, never including `folder_id`.

    Only Folder children are expanded. Each id is visited once, so a cycle
    in corrupt data terminates instead of recursing forever.
    """
    by_parent: dict[str | None, list[Node]] = {}
    for node in nodes:
        by_parent.setdefault(node.parent_id, []).append(node)

    result: list[str] = []
    visited = {folder_id}
    stack = list(reversed(by_parent.get(folder_id, [])))
    while stack:
        node = stack.pop()
        if node.id in visited:
            continue
        visited.add(node.id)
        result.append(node.id)
        if node.kind is NodeKind.FOLDER:
            stack.extend(reversed(by_parent.get(node.id, [])))
    return result


def breadcrumbs(nodes: Sequence[Node], folder_id: str | None) -> list[Node]:
    """Ancestor chain from the root down to `folder_id` (inclusive).

    Walks `parent_id` upward. A link to a missing id ends the walk, leaving
    a partial trail; so does revisiting an id.
    """
    index = index_by_id(nodes)
    trail: list[Node] = []
    seen: set[str] = set()
    current = folder_id
    while current is not None and current not in seen:
        node = index.get(current)
        if node is None:
            break
        seen.add(current)
        trail.append(node)
        current = node.parent_id
    trail.reverse()
    return trail


def display_order(nodes: Sequence[Node]) -> list[Node]:
    """Folders first, then files; storage order within each group."""
    folders = [n for n in nodes if n.kind is NodeKind.FOLDER]
    files = [n for n in nodes if n.kind is not NodeKind.FOLDER]
    return folders + files


# ── Diagnostics ──────────────────────────────────────────────


def dangling_ids(nodes: Sequence[Node]) -> list[str]:
    """Nodes whose parent is missing or is not a Folder."""
    index = index_by_id(nodes)
    result = []
    for node in nodes:
        if node.parent_id is None:
            continue
        parent = index.get(node.parent_id)
        if parent is None or parent.kind is not NodeKind.FOLDER:
            result.append(node.id)
    return result


def cyclic_ids(nodes: Sequence[Node]) -> list[str]:
    """Nodes that reach themselves by following `parent_id`."""
    index = index_by_id(nodes)
    result = []
    for node in nodes:
        seen: set[str] = set()
        current = node.parent_id
        while current is not None and current not in seen:
            if current == node.id:
                result.append(node.id)
                break
            seen.add(current)
            parent = index.get(current)
            current = parent.parent_id if parent else None
    return result

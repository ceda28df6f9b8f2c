"""Create and cascade-delete nodes."""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import TYPE_CHECKING

from pagetree import tree
from pagetree.models import Node, NodeKind

if TYPE_CHECKING:
    from pagetree.collection import Collection

logger = logging.getLogger(__name__)

# Asked before any destructive action; returns True to proceed.
ConfirmCallback = Callable[[str], bool]


def delete_prompt(node: Node) -> str:
    if node.kind is NodeKind.FOLDER:
        return f'Delete folder "{node.title}" and all its contents?'
    return f'Delete page "{node.title}"?'


class ItemController:
    """Allocates new nodes and removes nodes with their subtrees."""

    def __init__(self, collection: Collection) -> None:
        self.collection = collection

    def create(self, kind: NodeKind, title: str, parent_id: str | None = None) -> Node | None:
        """Insert a new node at the head of the collection. Blank titles are ignored."""
        if not title.strip():
            return None
        node = Node.create(kind, title, parent_id)
        self.collection.commit([node, *self.collection.nodes])
        logger.info("Created %s %r (%s) in %s", kind.value, title, node.id, self.collection.key)
        return node

    def ids_to_delete(self, node_id: str) -> set[str]:
        node = self.collection.get(node_id)
        if node is None:
            return set()
        ids = {node.id}
        if node.kind is NodeKind.FOLDER:
            ids.update(tree.descendant_ids(self.collection.nodes, node.id))
        return ids

    def delete(self, node_id: str, confirm: ConfirmCallback) -> set[str]:
        """Remove `node_id` and, for a folder, everything beneath it.

        Nothing happens unless `confirm` approves. Returns the removed ids.
        """
        node = self.collection.get(node_id)
        if node is None:
            return set()
        if not confirm(delete_prompt(node)):
            return set()

        ids = self.ids_to_delete(node_id)
        self.collection.commit(n for n in self.collection.nodes if n.id not in ids)
        logger.info("Deleted %d node(s) under %r from %s", len(ids), node.title, self.collection.key)
        return ids

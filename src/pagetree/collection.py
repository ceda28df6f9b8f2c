"""In-memory snapshot of one collection, bound to its repository key."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from pagetree import tree

if TYPE_CHECKING:
    from collections.abc import Iterable

    from pagetree.models import Node
    from pagetree.storage.repository import ItemRepository

logger = logging.getLogger(__name__)


class Collection:
    """The current node list for `key`.

    Controllers read `nodes` and publish changes through `commit`, which
    persists the full list and swaps the snapshot in one step.
    """

    def __init__(self, repository: ItemRepository, key: str) -> None:
        self.repository = repository
        self.key = key
        self.nodes: list[Node] = repository.load(key)

    def reload(self) -> None:
        self.nodes = self.repository.load(self.key)

    def commit(self, nodes: Iterable[Node]) -> None:
        nodes = list(nodes)
        self.repository.save(self.key, nodes)
        self.nodes = nodes

    def get(self, node_id: str | None) -> Node | None:
        return tree.find(self.nodes, node_id)

    def replace_node(self, updated: Node) -> bool:
        """Swap the node with `updated.id` for `updated` and persist."""
        if self.get(updated.id) is None:
            return False
        self.commit(updated if n.id == updated.id else n for n in self.nodes)
        return True

    def __len__(self) -> int:
        return len(self.nodes)

    def __iter__(self):
        return iter(self.nodes)

"""Workspace: one collection with its controllers, navigation and editor.

Responsibilities:
1. Own the collection snapshot for the active key
2. Route create/delete/move gestures to the controllers
3. Keep the editor session consistent with deletions
4. Switch between independent collections
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from pagetree.collection import Collection
from pagetree.controllers.items import ItemController
from pagetree.controllers.reparent import ReparentController
from pagetree.editor import EditorSession
from pagetree.models import NodeKind
from pagetree.navigation import NavigationState
from pagetree.storage.kv import KeyValueStore
from pagetree.storage.repository import ItemRepository

if TYPE_CHECKING:
    from pagetree.config import PagetreeConfig
    from pagetree.controllers.items import ConfirmCallback
    from pagetree.controllers.reparent import Rejection
    from pagetree.models import Node

logger = logging.getLogger(__name__)


def _always_confirm(message: str) -> bool:
    return True


class Workspace:
    """Hub for a single collection."""

    def __init__(
        self,
        repository: ItemRepository,
        key: str,
        confirm: ConfirmCallback = _always_confirm,
    ) -> None:
        self.repository = repository
        self.confirm = confirm
        self._bind(key)

    @classmethod
    def from_config(cls, config: PagetreeConfig, confirm: ConfirmCallback = _always_confirm) -> Workspace:
        repository = ItemRepository(KeyValueStore(config.data_dir))
        return cls(repository, config.collections.default, confirm=confirm)

    def _bind(self, key: str) -> None:
        self.collection = Collection(self.repository, key)
        self.items = ItemController(self.collection)
        self.reparent = ReparentController(self.collection)
        self.navigation = NavigationState(self.collection)
        self.editor = EditorSession(self.collection)
        logger.info("Opened collection %s (%d nodes)", key, len(self.collection))

    @property
    def key(self) -> str:
        return self.collection.key

    # ── Collections ──────────────────────────────────────────

    def switch(self, key: str) -> None:
        """Leave the current collection (saving any open page) and open `key`."""
        if key == self.key:
            return
        self.editor.close()
        self.reparent.cancel()
        self._bind(key)

    def reload(self) -> None:
        """Re-read the collection from storage, e.g. after an import."""
        self.editor.discard()
        self.reparent.cancel()
        self.collection.reload()
        if self.navigation.current_folder_id and self.collection.get(self.navigation.current_folder_id) is None:
            self.navigation.enter(None)

    # ── Create / delete ──────────────────────────────────────

    def create(self, kind: NodeKind, title: str) -> Node | None:
        """Create in the current folder. New pages open in the editor."""
        node = self.items.create(kind, title, self.navigation.current_folder_id)
        if node is not None and node.kind is NodeKind.FILE:
            self.open_file(node.id)
        return node

    def create_file(self, title: str) -> Node | None:
        return self.create(NodeKind.FILE, title)

    def create_folder(self, title: str) -> Node | None:
        return self.create(NodeKind.FOLDER, title)

    def delete(self, node_id: str) -> set[str]:
        ids = self.items.delete(node_id, self.confirm)
        if self.editor.node_id in ids:
            self.editor.discard()
        if self.navigation.current_folder_id in ids:
            self.navigation.enter(None)
        return ids

    # ── Editing ──────────────────────────────────────────────

    def open_file(self, node_id: str) -> bool:
        node = self.collection.get(node_id)
        if node is None or node.kind is not NodeKind.FILE:
            return False
        if self.editor.is_open:
            self.editor.close()
            node = self.collection.get(node_id)
        self.editor.open(node)
        return True

    # ── Moving ───────────────────────────────────────────────

    def move(self, source_id: str, target_id: str) -> Rejection | None:
        return self.reparent.move(source_id, target_id)

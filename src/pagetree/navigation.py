"""Current-folder pointer and the views derived from it."""

from __future__ import annotations

from typing import TYPE_CHECKING

from pagetree import tree

if TYPE_CHECKING:
    from pagetree.collection import Collection
    from pagetree.models import Node


class NavigationState:
    """Which folder of a collection is being browsed (None = root)."""

    def __init__(self, collection: Collection) -> None:
        self.collection = collection
        self.current_folder_id: str | None = None

    def enter(self, folder_id: str | None) -> None:
        self.current_folder_id = folder_id

    def up(self) -> None:
        """Go to the parent of the current folder; root stays root."""
        if self.current_folder_id is None:
            return
        current = self.collection.get(self.current_folder_id)
        self.current_folder_id = current.parent_id if current else None

    def goto_breadcrumb(self, folder_id: str | None) -> None:
        self.current_folder_id = folder_id

    def trail(self) -> list[Node]:
        return tree.breadcrumbs(self.collection.nodes, self.current_folder_id)

    def listing(self) -> list[Node]:
        children = tree.children_of(self.collection.nodes, self.current_folder_id)
        return tree.display_order(children)

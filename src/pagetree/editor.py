"""Edit buffer for one open page.

Every way out of the editor saves: `close` flushes first. The only exit
without a flush is `discard`, reserved for when the page itself was deleted.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pagetree.collection import Collection
    from pagetree.models import Node

logger = logging.getLogger(__name__)


@dataclass
class EditBuffer:
    node_id: str
    title: str
    subtitle: str
    content: str


class EditorSession:
    """Holds an editable copy of a File's title, subtitle and content."""

    def __init__(self, collection: Collection) -> None:
        self.collection = collection
        self.buffer: EditBuffer | None = None

    @property
    def is_open(self) -> bool:
        return self.buffer is not None

    @property
    def node_id(self) -> str | None:
        return self.buffer.node_id if self.buffer else None

    def open(self, node: Node) -> None:
        self.buffer = EditBuffer(
            node_id=node.id,
            title=node.title,
            subtitle=node.subtitle,
            content=node.content or "",
        )

    def edit(
        self,
        *,
        title: str | None = None,
        subtitle: str | None = None,
        content: str | None = None,
    ) -> None:
        if self.buffer is None:
            return
        if title is not None:
            self.buffer.title = title
        if subtitle is not None:
            self.buffer.subtitle = subtitle
        if content is not None:
            self.buffer.content = content

    def flush(self) -> Node | None:
        """Write the buffer back by id and persist; the session stays open."""
        if self.buffer is None:
            return None
        node = self.collection.get(self.buffer.node_id)
        if node is None:
            logger.warning("Page %s no longer exists; edits not saved", self.buffer.node_id)
            return None
        updated = node.touched(
            title=self.buffer.title,
            subtitle=self.buffer.subtitle,
            content=self.buffer.content,
        )
        self.collection.replace_node(updated)
        logger.info("Saved page %r", updated.title)
        return updated

    def close(self) -> Node | None:
        saved = self.flush()
        self.buffer = None
        return saved

    def discard(self) -> None:
        self.buffer = None

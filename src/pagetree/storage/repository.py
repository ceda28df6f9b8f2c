"""Item repository: collection key -> ordered list of nodes.

Loads fail soft. Anything that cannot be parsed into nodes is logged and
treated as an empty collection; the bad value stays on disk until the next
save overwrites it.
"""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING

from pagetree.models import Node

if TYPE_CHECKING:
    from collections.abc import Iterable

    from pagetree.storage.kv import KeyValueStore

logger = logging.getLogger(__name__)


class ItemRepository:
    """Load/save whole collections through a key-value store."""

    def __init__(self, store: KeyValueStore) -> None:
        self.store = store

    def load(self, key: str) -> list[Node]:
        raw = self.store.get(key)
        if not raw:
            return []
        try:
            data = json.loads(raw)
        except (ValueError, RecursionError) as e:
            logger.warning("Collection %s is not valid JSON (%s); loading empty", key, e)
            return []
        if not isinstance(data, list):
            logger.warning("Collection %s is not a list; loading empty", key)
            return []
        try:
            return [Node.from_dict(item) for item in data]
        except (KeyError, ValueError, TypeError) as e:
            logger.warning("Collection %s has a malformed node (%s); loading empty", key, e)
            return []

    def save(self, key: str, nodes: Iterable[Node]) -> None:
        payload = [node.to_dict() for node in nodes]
        self.store.set(key, json.dumps(payload, ensure_ascii=False))
        logger.debug("Saved collection %s (%d nodes)", key, len(payload))

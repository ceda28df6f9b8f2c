"""Whole-store export/import and single-page markdown export.

The snapshot format is the one the original app's settings dialog produced:
a JSON object mapping each storage key to its raw stored string (or null).
Import replaces by key; nothing is merged at node level.
"""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING

import frontmatter

from pagetree.storage.kv import StorageKeyError

if TYPE_CHECKING:
    from collections.abc import Iterable

    from pagetree.models import Node
    from pagetree.storage.kv import KeyValueStore

logger = logging.getLogger(__name__)


def export_data(store: KeyValueStore, keys: Iterable[str]) -> str:
    """Serialize the raw value of every key in `keys` (null when absent)."""
    data = {key: store.get(key) for key in keys}
    return json.dumps(data, ensure_ascii=False)


def import_data(store: KeyValueStore, snapshot: str) -> bool:
    """Overwrite local values key-by-key from an exported snapshot.

    Keys with empty/null values are skipped, so an export taken before a
    collection existed does not wipe it locally. Returns False if the
    snapshot itself cannot be parsed.
    """
    try:
        data = json.loads(snapshot)
    except (ValueError, RecursionError) as e:
        logger.error("Import failed: snapshot is not valid JSON (%s)", e)
        return False
    if not isinstance(data, dict):
        logger.error("Import failed: snapshot is not a JSON object")
        return False

    written = 0
    for key, value in data.items():
        if not value:
            continue
        if not isinstance(value, str):
            value = json.dumps(value, ensure_ascii=False)
        try:
            store.set(key, value)
        except StorageKeyError:
            logger.warning("Import skipped unusable key %r", key)
            continue
        written += 1
    logger.info("Imported %d key(s) from snapshot", written)
    return True


def export_page_markdown(node: Node) -> str:
    """Render a File node as markdown with YAML frontmatter.

    The content blob is emitted verbatim as the body.
    """
    post = frontmatter.Post(
        node.content or "",
        id=node.id,
        title=node.title,
        subtitle=node.subtitle,
        updated=node.updated_at,
        tags=list(node.tags or []),
    )
    return frontmatter.dumps(post) + "\n"

"""Data models for the page/folder tree.

Nodes are persisted as a flat JSON list. Field names on disk follow the
camelCase layout written by the original web app (`type`, `parentId`,
`updatedAt`) so existing exports load unchanged.
"""

from __future__ import annotations

import enum
import uuid
from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from typing import Any

DEFAULT_FILE_SUBTITLE = "New entry"
DEFAULT_FILE_CONTENT = "<p>Start writing here...</p>"
DEFAULT_FOLDER_SUBTITLE = "Folder"

_KNOWN_KEYS = {"id", "type", "parentId", "title", "subtitle", "content", "tags", "updatedAt"}


class NodeKind(str, enum.Enum):
    FILE = "file"
    FOLDER = "folder"


def new_node_id() -> str:
    """Generate a compact unique node id."""
    return uuid.uuid4().hex[:12]


def now_iso() -> str:
    """Current UTC time as an ISO-8601 string with millisecond precision."""
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


@dataclass
class Node:
    """A single page (File) or container (Folder) in a collection."""

    id: str
    kind: NodeKind
    title: str
    parent_id: str | None = None
    subtitle: str = ""
    content: str | None = None
    updated_at: str = ""
    tags: list[str] | None = None
    extra: dict[str, Any] = field(default_factory=dict)  # unknown keys, written back as-is

    @property
    def is_folder(self) -> bool:
        return self.kind is NodeKind.FOLDER

    @classmethod
    def create(cls, kind: NodeKind, title: str, parent_id: str | None = None) -> Node:
        """Build a fresh node with kind-appropriate defaults."""
        if kind is NodeKind.FILE:
            subtitle, content = DEFAULT_FILE_SUBTITLE, DEFAULT_FILE_CONTENT
        else:
            subtitle, content = DEFAULT_FOLDER_SUBTITLE, None
        return cls(
            id=new_node_id(),
            kind=kind,
            title=title,
            parent_id=parent_id,
            subtitle=subtitle,
            content=content,
            updated_at=now_iso(),
        )

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> Node:
        """Parse a stored node, repairing records written before folders existed.

        A missing `type` means File and a missing/empty `parentId` means root.
        Raises KeyError/ValueError/TypeError on records that cannot be repaired.
        """
        if not isinstance(d, dict):
            raise TypeError(f"node record must be an object, got {type(d).__name__}")
        node_id = d["id"]
        if not isinstance(node_id, str) or not node_id:
            raise ValueError(f"invalid node id: {node_id!r}")
        tags = d.get("tags")
        extra = {k: v for k, v in d.items() if k not in _KNOWN_KEYS}
        if "tags" in d and not isinstance(tags, list):
            extra["tags"] = tags
        return cls(
            id=node_id,
            kind=NodeKind(d.get("type") or NodeKind.FILE.value),
            title=str(d.get("title", "")),
            parent_id=d.get("parentId") or None,
            subtitle=str(d.get("subtitle", "")),
            content=d.get("content"),
            updated_at=str(d.get("updatedAt", "")),
            tags=list(tags) if isinstance(tags, list) else None,
            extra=extra,
        )

    def to_dict(self) -> dict[str, Any]:
        d: dict[str, Any] = {
            "id": self.id,
            "type": self.kind.value,
            "parentId": self.parent_id,
            "title": self.title,
            "subtitle": self.subtitle,
        }
        if self.content is not None:
            d["content"] = self.content
        if self.tags is not None:
            d["tags"] = list(self.tags)
        d["updatedAt"] = self.updated_at
        d.update(self.extra)
        return d

    def touched(self, **changes: Any) -> Node:
        """Return a copy with `changes` applied and `updated_at` bumped."""
        return replace(self, updated_at=now_iso(), **changes)

"""Shared fixtures: a file-backed store and node builders."""

from __future__ import annotations

from pathlib import Path

import pytest

from pagetree.models import Node, NodeKind
from pagetree.storage.kv import KeyValueStore
from pagetree.storage.repository import ItemRepository

KEY = "gh_learning_knowledge_v1"
OLD_TS = "2020-01-01T00:00:00.000Z"


def folder(id: str, parent_id: str | None = None, title: str | None = None) -> Node:
    return Node(
        id=id,
        kind=NodeKind.FOLDER,
        title=title or id,
        parent_id=parent_id,
        subtitle="Folder",
        updated_at=OLD_TS,
    )


def page(id: str, parent_id: str | None = None, title: str | None = None, content: str = "<p>hi</p>") -> Node:
    return Node(
        id=id,
        kind=NodeKind.FILE,
        title=title or id,
        parent_id=parent_id,
        subtitle="New entry",
        content=content,
        updated_at=OLD_TS,
    )


@pytest.fixture
def store(tmp_path: Path) -> KeyValueStore:
    return KeyValueStore(tmp_path / "data")


@pytest.fixture
def repo(store: KeyValueStore) -> ItemRepository:
    return ItemRepository(store)

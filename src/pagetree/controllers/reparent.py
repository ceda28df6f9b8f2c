"""Drag-and-drop reparenting.

The gesture is a small state machine:

    Idle ──start──▶ Dragging ──hover(ok)──▶ HoveringTarget
      ▲                │  ▲                     │
      └──cancel/drop───┘  └───────leave─────────┘

`validate_move` is the single check for self-drops, cycles and non-folder
targets; it runs on hover and again on drop. Only a valid drop writes.
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from pagetree import tree

if TYPE_CHECKING:
    from collections.abc import Sequence

    from pagetree.collection import Collection
    from pagetree.models import Node

logger = logging.getLogger(__name__)


class Rejection(str, enum.Enum):
    SELF_TARGET = "self_target"
    CYCLE = "cycle"
    TARGET_NOT_FOLDER = "target_not_folder"
    SOURCE_MISSING = "source_missing"
    NOT_DRAGGING = "not_dragging"


@dataclass(frozen=True)
class Idle:
    pass


@dataclass(frozen=True)
class Dragging:
    source_id: str


@dataclass(frozen=True)
class HoveringTarget:
    source_id: str
    target_id: str


DragState = Idle | Dragging | HoveringTarget


def validate_move(nodes: Sequence[Node], source_id: str, target_id: str) -> Rejection | None:
    """Return why moving `source_id` into `target_id` is not allowed, or None."""
    if tree.find(nodes, source_id) is None:
        return Rejection.SOURCE_MISSING
    if target_id == source_id:
        return Rejection.SELF_TARGET
    if not tree.is_folder(nodes, target_id):
        return Rejection.TARGET_NOT_FOLDER
    if target_id in tree.descendant_ids(nodes, source_id):
        return Rejection.CYCLE
    return None


class ReparentController:
    """Tracks one drag gesture and commits the move on a valid drop."""

    def __init__(self, collection: Collection) -> None:
        self.collection = collection
        self.state: DragState = Idle()

    @property
    def source_id(self) -> str | None:
        if isinstance(self.state, (Dragging, HoveringTarget)):
            return self.state.source_id
        return None

    @property
    def hover_target_id(self) -> str | None:
        if isinstance(self.state, HoveringTarget):
            return self.state.target_id
        return None

    def start(self, source_id: str) -> bool:
        if self.collection.get(source_id) is None:
            self.state = Idle()
            return False
        self.state = Dragging(source_id)
        return True

    def hover(self, target_id: str) -> Rejection | None:
        """Highlight `target_id` as a drop target if the move would be valid."""
        source_id = self.source_id
        if source_id is None:
            return Rejection.NOT_DRAGGING
        rejection = validate_move(self.collection.nodes, source_id, target_id)
        if rejection is None:
            self.state = HoveringTarget(source_id, target_id)
        else:
            self.state = Dragging(source_id)
        return rejection

    def leave(self) -> None:
        source_id = self.source_id
        self.state = Dragging(source_id) if source_id is not None else Idle()

    def cancel(self) -> None:
        self.state = Idle()

    def drop(self, target_id: str) -> Rejection | None:
        """Finish the gesture. Persists only when the move validates."""
        source_id = self.source_id
        self.state = Idle()
        if source_id is None:
            return Rejection.NOT_DRAGGING
        rejection = validate_move(self.collection.nodes, source_id, target_id)
        if rejection is not None:
            logger.debug("Rejected move %s -> %s: %s", source_id, target_id, rejection.value)
            return rejection

        source = self.collection.get(source_id)
        self.collection.replace_node(source.touched(parent_id=target_id))
        logger.info("Moved %r into %s", source.title, target_id)
        return None

    def move(self, source_id: str, target_id: str) -> Rejection | None:
        """A complete start/drop gesture in one call."""
        if not self.start(source_id):
            return Rejection.SOURCE_MISSING
        return self.drop(target_id)

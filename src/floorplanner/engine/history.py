"""Linear undo/redo over full-state snapshots.

A snapshot captures floors, groups and selection after a logically
complete user action. Since every model object is frozen, a snapshot
shares the objects with the live store instead of deep-copying them; no
later operation can change what it holds, so restoring it is exact.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from types import MappingProxyType
from typing import List, Mapping, Tuple

from ..core.model import Floor, Group, SelectionElement
from .store import ShapeStore

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class Snapshot:
    """Immutable copy of the editable state.

    Attributes:
        floors: Floors with their shapes.
        groups: Read-only mapping of group ID to group.
        selected_elements: The selection at snapshot time.
    """

    floors: Tuple[Floor, ...]
    groups: Mapping[str, Group]
    selected_elements: Tuple[SelectionElement, ...]


class HistoryManager:
    """Undo/redo stack bound to one ShapeStore.

    ``add_to_history`` must be called once per completed action (at the end
    of a drag, not for every intermediate move).
    """

    def __init__(self, store: ShapeStore):
        self.store = store
        self.history: List[Snapshot] = []
        self.index = -1

    @property
    def can_undo(self) -> bool:
        return self.index > 0

    @property
    def can_redo(self) -> bool:
        return self.index < len(self.history) - 1

    def capture(self) -> Snapshot:
        return Snapshot(
            floors=tuple(self.store.floors),
            groups=MappingProxyType(dict(self.store.groups)),
            selected_elements=tuple(self.store.selected_elements),
        )

    def restore(self, snapshot: Snapshot) -> None:
        self.store.floors = list(snapshot.floors)
        self.store.groups = dict(snapshot.groups)
        self.store.selected_elements = list(snapshot.selected_elements)

    def add_to_history(self) -> Snapshot:
        """Push the current state, discarding any redoable states."""
        snapshot = self.capture()
        del self.history[self.index + 1:]
        self.history.append(snapshot)
        self.index = len(self.history) - 1
        LOGGER.debug("History snapshot %d", self.index)
        return snapshot

    def undo(self) -> bool:
        if not self.can_undo:
            return False
        self.index -= 1
        self.restore(self.history[self.index])
        return True

    def redo(self) -> bool:
        if not self.can_redo:
            return False
        self.index += 1
        self.restore(self.history[self.index])
        return True

    def reset(self) -> None:
        """Forget all snapshots."""
        self.history = []
        self.index = -1

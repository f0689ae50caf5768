"""Selection tracking with group expansion.

Clicking a grouped shape selects its group: members of a group are never
selectable on their own while the group exists.
"""

from __future__ import annotations

from typing import Iterable, List

from ..core.model import ElementType, SelectionElement
from .store import ShapeStore


class SelectionManager:
    """Reads and writes ``ShapeStore.selected_elements``."""

    def __init__(self, store: ShapeStore):
        self.store = store

    @property
    def selected_elements(self) -> List[SelectionElement]:
        return self.store.selected_elements

    def _select(self, element: SelectionElement, additive: bool) -> bool:
        if not additive:
            self.store.selected_elements = [element]
            return True

        if any(el.id == element.id and el.type == element.type for el in self.store.selected_elements):
            return False
        self.store.selected_elements = self.store.selected_elements + [element]
        return True

    def select_shape(self, shape_id: str, additive: bool = False) -> bool:
        """Select a shape, or its group if it belongs to one.

        Args:
            shape_id: The clicked shape.
            additive: Add to the selection instead of replacing it.

        Returns:
            True if the selection changed.
        """
        shape = self.store.find_shape(shape_id)
        if shape is None:
            return False

        if shape.group_id is not None and shape.group_id in self.store.groups:
            element = SelectionElement(shape.group_id, ElementType.GROUP, shape.floor_id)
        else:
            element = SelectionElement(shape.id, ElementType.SHAPE, shape.floor_id)

        return self._select(element, additive)

    def select_floor(self, floor_id: str, additive: bool = False) -> bool:
        if self.store.get_floor(floor_id) is None:
            return False
        return self._select(SelectionElement(floor_id, ElementType.FLOOR, floor_id), additive)

    def set_selected_elements(self, elements: Iterable[SelectionElement]) -> None:
        """Replace the selection wholesale."""
        self.store.selected_elements = list(elements)

    def clear(self) -> None:
        self.store.selected_elements = []

    def prune(self) -> int:
        """Remove references to entities that no longer exist."""
        return self.store.prune_selection()

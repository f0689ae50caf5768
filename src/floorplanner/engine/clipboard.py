"""Copy and paste of selected shapes."""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import List

from .. import config
from ..core.model import ElementType, SelectionElement, Shape
from ..geom.kernel import bounding_box_overlap
from .store import ShapeStore, new_id

LOGGER = logging.getLogger(__name__)


class Clipboard:
    """Holds copies of shapes between a copy and a paste."""

    def __init__(self, store: ShapeStore):
        self.store = store
        self.shapes: List[Shape] = []

    def copy_selection(self) -> int:
        """Copy the selected shapes; selected groups copy their members.

        Copies are detached from groups and reservations.

        Returns:
            Number of shapes copied.
        """
        ids = []
        for element in self.store.selected_elements:
            if element.type == ElementType.SHAPE:
                ids.append(element.id)
            elif element.type == ElementType.GROUP and element.id in self.store.groups:
                ids.extend(self.store.groups[element.id].shape_ids)

        copied = []
        for shape_id in ids:
            shape = self.store.find_shape(shape_id)
            if shape is not None:
                copied.append(replace(shape, group_id=None, reservation=None))

        self.shapes = copied
        return len(copied)

    def paste(self, floor_id: str) -> List[Shape]:
        """Paste the copied shapes onto a floor, offset from the originals.

        Nothing is pasted if any copy would overlap a shape already on the
        floor.

        Returns:
            The pasted shapes, which become the selection.
        """
        floor = self.store.get_floor(floor_id)
        if floor is None or not self.shapes:
            return []

        pasted = [
            replace(
                shape,
                id=new_id(shape.category.value),
                floor_id=floor_id,
                x=shape.x + config.PASTE_OFFSET,
                y=shape.y + config.PASTE_OFFSET,
            )
            for shape in self.shapes
        ]

        if any(bounding_box_overlap(existing, new) for new in pasted for existing in floor.shapes):
            LOGGER.warning("Cannot paste %d shapes onto %s: they overlap existing shapes", len(pasted), floor_id)
            return []

        index = self.store.floors.index(floor)
        self.store.floors[index] = replace(floor, shapes=floor.shapes + tuple(pasted))
        self.store.selected_elements = [
            SelectionElement(shape.id, ElementType.SHAPE, floor_id) for shape in pasted
        ]
        return pasted

"""Canonical state container for a floor plan.

The ShapeStore owns the floors (and through them every shape), the groups
and the current selection. It is the single source of truth: the group,
selection, history and reservation managers all receive the store
explicitly and mutate it only through the methods here or by swapping in
new frozen model objects.
"""

from __future__ import annotations

import logging
import uuid
from dataclasses import replace
from typing import Callable, Dict, Iterable, List, Optional, Tuple

from .. import config
from ..core.model import ElementType, Floor, Group, SelectionElement, Shape
from ..geom.kernel import bounding_box_overlap
from ..geom.path import fits_on_floor

LOGGER = logging.getLogger(__name__)


def new_id(prefix: str) -> str:
    """Generate a fresh identifier such as ``floor-1f3a9c0b``."""
    return f"{prefix}-{uuid.uuid4().hex[:8]}"


class ShapeStore:
    """Floors, shapes, groups and selection of one floor plan.

    Mutating methods return ``True``/``False`` (or the created object /
    ``None``) so callers can tell "done" from "nothing to do"; operating on
    an id that no longer exists is never an error.
    """

    def __init__(
        self,
        floors: Iterable[Floor] = (),
        groups: Optional[Dict[str, Group]] = None,
        selected_elements: Iterable[SelectionElement] = (),
    ):
        self.floors: List[Floor] = list(floors)
        self.groups: Dict[str, Group] = dict(groups or {})
        self.selected_elements: List[SelectionElement] = list(selected_elements)

    # ------------------------------------------------------------------ #
    # Lookups
    # ------------------------------------------------------------------ #
    def _floor_index(self, floor_id: str) -> int:
        for i, floor in enumerate(self.floors):
            if floor.id == floor_id:
                return i
        return -1

    def get_floor(self, floor_id: str) -> Optional[Floor]:
        index = self._floor_index(floor_id)
        return self.floors[index] if index >= 0 else None

    def get_shape(self, floor_id: str, shape_id: str) -> Optional[Shape]:
        floor = self.get_floor(floor_id)
        if floor is None:
            return None
        for shape in floor.shapes:
            if shape.id == shape_id:
                return shape
        return None

    def find_shape(self, shape_id: str) -> Optional[Shape]:
        """Find a shape on any floor."""
        for floor in self.floors:
            for shape in floor.shapes:
                if shape.id == shape_id:
                    return shape
        return None

    def shapes_on_floor(self, floor_id: str) -> Tuple[Shape, ...]:
        floor = self.get_floor(floor_id)
        return floor.shapes if floor is not None else ()

    def group_of(self, shape_id: str) -> Optional[Group]:
        """Return the group listing ``shape_id`` as a member, if any."""
        for group in self.groups.values():
            if shape_id in group.shape_ids:
                return group
        return None

    def selected_floor_id(self) -> Optional[str]:
        """ID of the selected floor when exactly one floor is selected."""
        if len(self.selected_elements) == 1 and self.selected_elements[0].type == ElementType.FLOOR:
            return self.selected_elements[0].id
        return None

    # ------------------------------------------------------------------ #
    # Internal helpers
    # ------------------------------------------------------------------ #
    def map_shapes(self, func: Callable[[Shape], Shape], floor_id: Optional[str] = None) -> int:
        """Replace every shape (optionally on one floor) with ``func(shape)``.

        Returns:
            Number of shapes whose value changed.
        """
        changed = 0
        for i, floor in enumerate(self.floors):
            if floor_id is not None and floor.id != floor_id:
                continue
            new_shapes = tuple(func(shape) for shape in floor.shapes)
            floor_changed = sum(1 for old, new in zip(floor.shapes, new_shapes) if new is not old)
            if floor_changed:
                self.floors[i] = replace(floor, shapes=new_shapes)
                changed += floor_changed
        return changed

    def prune_selection(self) -> int:
        """Drop selection entries whose referents no longer exist.

        Returns:
            Number of entries removed.
        """
        kept = []
        for element in self.selected_elements:
            if element.type == ElementType.FLOOR:
                exists = self.get_floor(element.id) is not None
            elif element.type == ElementType.GROUP:
                exists = element.id in self.groups
            else:
                exists = self.find_shape(element.id) is not None
            if exists:
                kept.append(element)

        removed = len(self.selected_elements) - len(kept)
        self.selected_elements = kept
        return removed

    # ------------------------------------------------------------------ #
    # Floors
    # ------------------------------------------------------------------ #
    def add_floor(self, name: Optional[str] = None, **geometry) -> Floor:
        """Append a new empty floor with default geometry.

        Args:
            name: Floor name, defaults to ``Floor N``.
            **geometry: Optional ``x``, ``y``, ``width``, ``height`` overrides.

        Returns:
            The created floor.
        """
        floor = Floor(
            id=new_id("floor"),
            name=name or f"Floor {len(self.floors) + 1}",
            x=geometry.get("x", config.DEFAULT_FLOOR_X),
            y=geometry.get("y", config.DEFAULT_FLOOR_Y),
            width=geometry.get("width", config.DEFAULT_FLOOR_WIDTH),
            height=geometry.get("height", config.DEFAULT_FLOOR_HEIGHT),
            z_index=len(self.floors) + 1,
        )
        self.floors.append(floor)
        LOGGER.debug("Added floor %s (%s)", floor.id, floor.name)
        return floor

    def update_floor(self, floor_id: str, floor: Floor) -> bool:
        """Replace a floor wholesale."""
        index = self._floor_index(floor_id)
        if index < 0:
            return False
        self.floors[index] = floor
        return True

    def delete_floor(self, floor_id: str) -> bool:
        """Delete a floor, its shapes and every group on it."""
        index = self._floor_index(floor_id)
        if index < 0:
            return False

        del self.floors[index]
        self.groups = {gid: g for gid, g in self.groups.items() if g.floor_id != floor_id}
        self.prune_selection()
        LOGGER.debug("Deleted floor %s", floor_id)
        return True

    def duplicate_floor(self, floor_id: str) -> Optional[Floor]:
        """Copy a floor with all its shapes and groups under fresh ids.

        Chair-to-table links and group membership are rewritten to point at
        the copies.

        Returns:
            The new floor, or None if ``floor_id`` does not exist.
        """
        floor = self.get_floor(floor_id)
        if floor is None:
            return None

        new_floor_id = new_id("floor")
        token = uuid.uuid4().hex[:6]
        shape_ids = {shape.id: f"{shape.id}-copy-{token}" for shape in floor.shapes}
        group_ids = {
            gid: new_id("group") for gid, group in self.groups.items() if group.floor_id == floor_id
        }

        shapes = tuple(
            replace(
                shape,
                id=shape_ids[shape.id],
                floor_id=new_floor_id,
                group_id=group_ids.get(shape.group_id),
                table_id=shape_ids.get(shape.table_id, shape.table_id),
            )
            for shape in floor.shapes
        )
        copy = replace(
            floor,
            id=new_floor_id,
            name=f"{floor.name} (Copy)",
            x=floor.x + config.DUPLICATE_OFFSET,
            y=floor.y + config.DUPLICATE_OFFSET,
            z_index=len(self.floors) + 1,
            shapes=shapes,
        )
        self.floors.append(copy)

        for old_id, group_id in group_ids.items():
            group = self.groups[old_id]
            self.groups[group_id] = replace(
                group,
                id=group_id,
                floor_id=new_floor_id,
                shape_ids=tuple(shape_ids[sid] for sid in group.shape_ids if sid in shape_ids),
            )

        LOGGER.debug("Duplicated floor %s as %s", floor_id, new_floor_id)
        return copy

    def bring_to_front(self, floor_id: str) -> bool:
        index = self._floor_index(floor_id)
        if index < 0:
            return False
        top = max(f.z_index for f in self.floors)
        self.floors[index] = replace(self.floors[index], z_index=top + 1)
        return True

    def send_to_back(self, floor_id: str) -> bool:
        index = self._floor_index(floor_id)
        if index < 0:
            return False
        bottom = min(f.z_index for f in self.floors)
        self.floors[index] = replace(self.floors[index], z_index=bottom - 1)
        return True

    # ------------------------------------------------------------------ #
    # Shapes
    # ------------------------------------------------------------------ #
    def add_shape(self, shape: Shape) -> Optional[Shape]:
        """Append a shape to the target floor without collision checks.

        The target is the selected floor when exactly one floor is
        selected, otherwise the first floor.

        Returns:
            The stored shape (stamped with its floor id), or None when the
            plan has no floors.
        """
        if not self.floors:
            LOGGER.warning("Cannot add shape %s: the plan has no floors", shape.id)
            return None

        floor_id = self.selected_floor_id()
        index = self._floor_index(floor_id) if floor_id else 0
        if index < 0:
            index = 0

        floor = self.floors[index]
        stored = replace(shape, floor_id=floor.id)
        self.floors[index] = replace(floor, shapes=floor.shapes + (stored,))
        LOGGER.debug("Added shape %s to floor %s", stored.id, floor.id)
        return stored

    def update_shape(self, floor_id: str, shape_id: str, shape: Shape) -> bool:
        """Replace one shape on one floor; missing ids are ignored."""
        index = self._floor_index(floor_id)
        if index < 0:
            return False

        floor = self.floors[index]
        found = False
        shapes = []
        for existing in floor.shapes:
            if existing.id == shape_id:
                shapes.append(shape)
                found = True
            else:
                shapes.append(existing)

        if found:
            self.floors[index] = replace(floor, shapes=tuple(shapes))
        return found

    def delete_shape(self, floor_id: str, shape_id: str) -> bool:
        """Remove a shape and prune it from the selection.

        The shape's group keeps listing it and is not dissolved, even when
        fewer than two live members remain.
        """
        index = self._floor_index(floor_id)
        if index < 0:
            return False

        floor = self.floors[index]
        shapes = tuple(s for s in floor.shapes if s.id != shape_id)
        if len(shapes) == len(floor.shapes):
            return False

        self.floors[index] = replace(floor, shapes=shapes)
        self.selected_elements = [
            el for el in self.selected_elements if not (el.id == shape_id and el.type == ElementType.SHAPE)
        ]
        LOGGER.debug("Deleted shape %s from floor %s", shape_id, floor_id)
        return True

    def move_shape(self, floor_id: str, shape_id: str, x: float, y: float) -> bool:
        """Move a shape to ``(x, y)``.

        A grouped shape is never moved alone: the whole group is translated
        by the delta between the requested and current position.
        """
        shape = self.get_shape(floor_id, shape_id)
        if shape is None:
            return False

        group = self.group_of(shape_id)
        if group is not None:
            from .groups import GroupManager

            return GroupManager(self).move_group(group.id, x - shape.x, y - shape.y)

        return self.update_shape(floor_id, shape_id, replace(shape, x=x, y=y))

    def collisions(self, floor_id: str, shape: Shape) -> List[str]:
        """IDs of shapes on a floor whose boxes overlap ``shape``."""
        return [
            other.id
            for other in self.shapes_on_floor(floor_id)
            if other.id != shape.id and bounding_box_overlap(other, shape)
        ]

    def fits_on_floor(self, floor_id: str, shape: Shape) -> bool:
        """Check that a shape lies within the floor's boundary."""
        floor = self.get_floor(floor_id)
        if floor is None:
            return False
        return fits_on_floor(floor, shape)

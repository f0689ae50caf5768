"""Rigid groups of shapes.

A group ties two or more shapes on one floor together: they move, rotate
and resize as one body about the group's center. The GroupManager is the
only code that writes ``Shape.group_id`` or ``Group.shape_ids`` so the two
sides of the membership stay symmetric.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import List, Optional, Sequence

from .. import config
from ..core.model import ElementType, Group, Point, SelectionElement, Shape
from ..geom.kernel import bounding_box, centroid, rotate_point, scale_about
from .store import ShapeStore, new_id
from .validators import CrossFloorGroupingError, GroupingError

LOGGER = logging.getLogger(__name__)


class GroupManager:
    """Create, dissolve and transform groups held by a ShapeStore.

    Every method except ``create_group`` is a no-op returning ``False`` when
    the group or shape does not exist.
    """

    def __init__(self, store: ShapeStore):
        self.store = store

    def _members(self, group_id: str) -> List[Shape]:
        return [
            shape for floor in self.store.floors for shape in floor.shapes if shape.group_id == group_id
        ]

    def create_group(self, selection: Optional[Sequence[SelectionElement]] = None) -> Group:
        """Group the selected shapes.

        Args:
            selection: Elements to group, defaults to the current selection.
                Only shape elements are considered.

        Returns:
            The new group, which also becomes the selection.

        Raises:
            CrossFloorGroupingError: If the shapes live on different floors.
            GroupingError: If fewer than two existing, ungrouped shapes are
                selected.
        """
        if selection is None:
            selection = self.store.selected_elements

        shape_ids = []
        for element in selection:
            if element.type == ElementType.SHAPE and element.id not in shape_ids:
                shape_ids.append(element.id)

        shapes = [s for s in (self.store.find_shape(sid) for sid in shape_ids) if s is not None]

        floor_ids = {s.floor_id for s in shapes} | {
            el.floor_id for el in selection if el.type == ElementType.SHAPE and el.floor_id is not None
        }
        if len(floor_ids) > 1:
            raise CrossFloorGroupingError("Cannot group shapes that belong to different floors")

        if len(shapes) < 2:
            raise GroupingError(f"A group needs at least 2 shapes, got {len(shapes)}")

        already_grouped = [s.id for s in shapes if s.group_id is not None]
        if already_grouped:
            raise GroupingError(f"Shapes already belong to a group: {', '.join(already_grouped)}")

        floor_id = shapes[0].floor_id
        box = bounding_box(shapes, padding=config.GROUP_PADDING)
        group = Group(
            id=new_id("group"),
            name=f"Group {len(self.store.groups) + 1}",
            floor_id=floor_id,
            shape_ids=tuple(s.id for s in shapes),
            center=centroid(shapes),
            rotation=0.0,
            width=box.width,
            height=box.height,
        )

        members = set(group.shape_ids)
        self.store.map_shapes(
            lambda s: replace(s, group_id=group.id) if s.id in members else s, floor_id=floor_id
        )
        self.store.groups[group.id] = group
        self.store.selected_elements = [SelectionElement(group.id, ElementType.GROUP, floor_id)]

        LOGGER.debug("Created %s from %d shapes on floor %s", group.id, len(shapes), floor_id)
        return group

    def ungroup_elements(self, selection: Optional[Sequence[SelectionElement]] = None) -> bool:
        """Dissolve the selected group and select its former members.

        Does nothing unless the selection is exactly one existing group.
        """
        if selection is None:
            selection = self.store.selected_elements

        if len(selection) != 1 or selection[0].type != ElementType.GROUP:
            return False

        group = self.store.groups.get(selection[0].id)
        if group is None:
            return False

        self.store.map_shapes(lambda s: replace(s, group_id=None) if s.group_id == group.id else s)
        del self.store.groups[group.id]

        self.store.selected_elements = [
            SelectionElement(shape_id, ElementType.SHAPE, group.floor_id)
            for shape_id in group.shape_ids
            if self.store.find_shape(shape_id) is not None
        ]
        LOGGER.debug("Ungrouped %s", group.id)
        return True

    def rotate_group(self, group_id: str, angle: float) -> bool:
        """Rotate a group to an absolute angle.

        Each member turns about the group center by the difference between
        the target angle and its own last rotation, then takes the target
        angle as its rotation.
        """
        group = self.store.groups.get(group_id)
        if group is None:
            return False

        def rotate(shape: Shape) -> Shape:
            if shape.group_id != group_id:
                return shape
            position = rotate_point(Point(shape.x, shape.y), group.center, angle - shape.rotation)
            return replace(shape, x=position.x, y=position.y, rotation=angle)

        self.store.map_shapes(rotate)
        self.store.groups[group_id] = replace(group, rotation=angle)
        return True

    def move_group(self, group_id: str, dx: float, dy: float) -> bool:
        """Translate the group center and every member by ``(dx, dy)``."""
        group = self.store.groups.get(group_id)
        if group is None:
            return False

        self.store.map_shapes(
            lambda s: replace(s, x=s.x + dx, y=s.y + dy) if s.group_id == group_id else s
        )
        self.store.groups[group_id] = replace(
            group, center=Point(group.center.x + dx, group.center.y + dy)
        )
        return True

    def resize_group(self, group_id: str, width: float, height: float) -> bool:
        """Scale a group about its center to a new box size.

        Member positions and sizes scale by the ratio between the new and
        the recorded group size.
        """
        group = self.store.groups.get(group_id)
        if group is None or not group.width or not group.height:
            return False
        if width <= 0 or height <= 0:
            LOGGER.warning("Ignoring resize of %s to %sx%s", group_id, width, height)
            return False

        sx = width / group.width
        sy = height / group.height

        def scale(shape: Shape) -> Shape:
            if shape.group_id != group_id:
                return shape
            corner = scale_about(Point(shape.x, shape.y), group.center, sx, sy)
            return replace(
                shape, x=corner.x, y=corner.y, width=shape.width * sx, height=shape.height * sy
            )

        self.store.map_shapes(scale)
        self.store.groups[group_id] = replace(group, width=width, height=height)
        return True

    def add_shape_to_group(self, shape_id: str, group_id: str) -> bool:
        """Add an ungrouped shape on the group's floor to the group.

        The group center and size are left as they are, so the pivot stays
        anchored to the original members.
        """
        group = self.store.groups.get(group_id)
        shape = self.store.find_shape(shape_id)
        if group is None or shape is None or shape_id in group.shape_ids:
            return False
        if shape.floor_id != group.floor_id or shape.group_id is not None:
            LOGGER.warning("Shape %s cannot join %s", shape_id, group_id)
            return False

        self.store.update_shape(shape.floor_id, shape_id, replace(shape, group_id=group_id))
        self.store.groups[group_id] = replace(group, shape_ids=group.shape_ids + (shape_id,))
        return True

    def select_group(self, group_id: str) -> bool:
        group = self.store.groups.get(group_id)
        if group is None:
            return False
        self.store.selected_elements = [SelectionElement(group_id, ElementType.GROUP, group.floor_id)]
        return True

    def delete_group(self, group_id: str) -> bool:
        """Delete a group together with all of its member shapes."""
        group = self.store.groups.get(group_id)
        if group is None:
            return False

        members = set(group.shape_ids)
        for i, floor in enumerate(self.store.floors):
            kept = tuple(s for s in floor.shapes if s.id not in members)
            if len(kept) != len(floor.shapes):
                self.store.floors[i] = replace(floor, shapes=kept)

        del self.store.groups[group_id]
        self.store.prune_selection()
        LOGGER.debug("Deleted %s and %d shapes", group_id, len(members))
        return True

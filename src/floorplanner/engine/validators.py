"""Validation functions and errors for floor planning operations.

Operations only raise for genuine validation failures (grouping shapes
across floors, grouping fewer than two shapes). The validators below check
the structural invariants every operation must preserve; they are run by
the tests and, when ``config.DEBUG_INVARIANTS`` is set, by the editor after
each operation.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, List

from ..core.model import ElementType

if TYPE_CHECKING:
    from .store import ShapeStore


class InvalidOperation(Exception):
    """Raised when an operation cannot be applied due to constraints."""

    pass


class GroupingError(InvalidOperation):
    """Raised when a selection cannot be turned into a group."""

    pass


class CrossFloorGroupingError(GroupingError):
    """Raised when the shapes to group belong to different floors."""

    pass


class InvariantViolation(InvalidOperation):
    """Raised when the store is internally inconsistent.

    This always indicates a bug in an operation, never a user mistake.
    """

    pass


def group_membership_errors(store: ShapeStore) -> List[str]:
    """Collect violations of the shape/group membership invariant.

    Every ``shape.group_id`` must name an existing group listing the shape,
    and every group member must exist on the group's floor and point back
    to the group.
    """
    errors = []

    for floor in store.floors:
        for shape in floor.shapes:
            if shape.floor_id != floor.id:
                errors.append(f"Shape '{shape.id}' is stored on floor '{floor.id}' but claims '{shape.floor_id}'")
            if shape.group_id is None:
                continue
            group = store.groups.get(shape.group_id)
            if group is None:
                errors.append(f"Shape '{shape.id}' references missing group '{shape.group_id}'")
            elif shape.id not in group.shape_ids:
                errors.append(f"Group '{group.id}' does not list member '{shape.id}'")

    for group_id, group in store.groups.items():
        if group_id != group.id:
            errors.append(f"Group stored under '{group_id}' has id '{group.id}'")
        if len(set(group.shape_ids)) != len(group.shape_ids):
            errors.append(f"Group '{group.id}' lists a member twice")
        floor = store.get_floor(group.floor_id)
        if floor is None:
            errors.append(f"Group '{group.id}' references missing floor '{group.floor_id}'")
            continue
        members = {shape.id: shape for shape in floor.shapes}
        for shape_id in group.shape_ids:
            shape = members.get(shape_id)
            if shape is None:
                # Deleting a member leaves the id behind; only flag ids that
                # resolve to a shape elsewhere.
                if store.find_shape(shape_id) is not None:
                    errors.append(f"Group '{group.id}' member '{shape_id}' is not on floor '{group.floor_id}'")
            elif shape.group_id != group.id:
                errors.append(f"Shape '{shape_id}' is listed by group '{group.id}' but points to '{shape.group_id}'")

    return errors


def selection_errors(store: ShapeStore) -> List[str]:
    """Collect selection entries that reference missing entities."""
    errors = []
    for element in store.selected_elements:
        if element.type == ElementType.FLOOR:
            exists = store.get_floor(element.id) is not None
        elif element.type == ElementType.GROUP:
            exists = element.id in store.groups
        else:
            exists = store.find_shape(element.id) is not None
        if not exists:
            errors.append(f"Selection references missing {element.type.value} '{element.id}'")
    return errors


def validate_all(store: ShapeStore) -> bool:
    """Run all validators on the store.

    Returns:
        True if all validations pass.

    Raises:
        InvariantViolation: If any validation fails, listing every failure.
    """
    errors = group_membership_errors(store) + selection_errors(store)

    if errors:
        raise InvariantViolation("; ".join(errors))

    return True

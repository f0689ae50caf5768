"""Core API for floor plan editing.

This module provides the FloorPlanEditor, which wires one ShapeStore to
the group, selection, history, reservation and clipboard managers and
exposes the entry points a user interface calls, plus helpers for applying
operation dictionaries.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Dict, Iterable, List, Optional, Sequence, Union

from .. import config
from ..core.model import Floor, Group, Point, Reservation, SelectionElement, Shape, ShapeCategory
from ..geom.path import custom_shape_from_points
from ..io.plan import load_plan, save_plan
from .clipboard import Clipboard
from .groups import GroupManager
from .history import HistoryManager
from .ops import get_operation
from .reservations import ReservationManager
from .selection import SelectionManager
from .store import ShapeStore
from .validators import InvalidOperation, validate_all

LOGGER = logging.getLogger(__name__)


class FloorPlanEditor:
    """Facade over one floor plan's state and its managers.

    Editor methods change live state only. Call ``commit`` once a user
    action is complete (for a drag, on release) to record an undo step, or
    use ``apply``, which commits after each state-changing operation.
    """

    def __init__(self, store: Optional[ShapeStore] = None, name: str = "Untitled"):
        self.name = name
        self.store = store if store is not None else ShapeStore()
        self.groups = GroupManager(self.store)
        self.selection = SelectionManager(self.store)
        self.history = HistoryManager(self.store)
        self.reservations = ReservationManager(self.store)
        self.clipboard = Clipboard(self.store)
        self.history.add_to_history()

    # Read-only views ----------------------------------------------------
    @property
    def floors(self) -> List[Floor]:
        return self.store.floors

    @property
    def selected_elements(self) -> List[SelectionElement]:
        return self.store.selected_elements

    # History ------------------------------------------------------------
    def commit(self) -> None:
        self.history.add_to_history()

    def undo(self) -> bool:
        return self.history.undo()

    def redo(self) -> bool:
        return self.history.redo()

    # Floors -------------------------------------------------------------
    def add_floor(self, name: Optional[str] = None, **geometry: float) -> Floor:
        return self.store.add_floor(name, **geometry)

    def delete_floor(self, floor_id: str) -> bool:
        return self.store.delete_floor(floor_id)

    def duplicate_floor(self, floor_id: str) -> Optional[Floor]:
        return self.store.duplicate_floor(floor_id)

    def bring_floor_to_front(self, floor_id: str) -> bool:
        return self.store.bring_to_front(floor_id)

    def send_floor_to_back(self, floor_id: str) -> bool:
        return self.store.send_to_back(floor_id)

    # Shapes -------------------------------------------------------------
    def add_shape(self, shape: Shape) -> Optional[Shape]:
        return self.store.add_shape(shape)

    def add_custom_shape(
        self, points: Sequence[Point], category: str = ShapeCategory.CUSTOM.value, label: str = ""
    ) -> Optional[Shape]:
        return self.store.add_shape(custom_shape_from_points(points, ShapeCategory(category), label))

    def update_shape(self, floor_id: str, shape_id: str, shape: Shape) -> bool:
        return self.store.update_shape(floor_id, shape_id, shape)

    def delete_shape(self, floor_id: str, shape_id: str) -> bool:
        return self.store.delete_shape(floor_id, shape_id)

    def move_shape(self, floor_id: str, shape_id: str, x: float, y: float) -> bool:
        return self.store.move_shape(floor_id, shape_id, x, y)

    # Groups -------------------------------------------------------------
    def create_group(self, selection: Optional[Sequence[SelectionElement]] = None) -> Group:
        return self.groups.create_group(selection)

    def ungroup_elements(self, selection: Optional[Sequence[SelectionElement]] = None) -> bool:
        return self.groups.ungroup_elements(selection)

    def add_shape_to_group(self, shape_id: str, group_id: str) -> bool:
        return self.groups.add_shape_to_group(shape_id, group_id)

    def move_group(self, group_id: str, dx: float, dy: float) -> bool:
        return self.groups.move_group(group_id, dx, dy)

    def rotate_group(self, group_id: str, angle: float) -> bool:
        return self.groups.rotate_group(group_id, angle)

    def resize_group(self, group_id: str, width: float, height: float) -> bool:
        return self.groups.resize_group(group_id, width, height)

    def delete_group(self, group_id: str) -> bool:
        return self.groups.delete_group(group_id)

    def select_group(self, group_id: str) -> bool:
        return self.groups.select_group(group_id)

    # Selection ----------------------------------------------------------
    def select_shape(self, shape_id: str, additive: bool = False) -> bool:
        return self.selection.select_shape(shape_id, additive)

    def select_floor(self, floor_id: str, additive: bool = False) -> bool:
        return self.selection.select_floor(floor_id, additive)

    def set_selected_elements(self, elements: Iterable[SelectionElement]) -> None:
        self.selection.set_selected_elements(elements)

    def clear_selection(self) -> None:
        self.selection.clear()

    # Clipboard ----------------------------------------------------------
    def copy_selection(self) -> int:
        return self.clipboard.copy_selection()

    def paste(self, floor_id: str) -> List[Shape]:
        return self.clipboard.paste(floor_id)

    # Reservations -------------------------------------------------------
    def reserve_table(
        self,
        floor_id: str,
        table_id: str,
        party_size: Optional[int] = None,
        customer_name: str = config.DEFAULT_CUSTOMER_NAME,
        time: Optional[Union[datetime, str]] = None,
        notes: Optional[str] = None,
    ) -> Optional[Reservation]:
        return self.reservations.reserve_table(floor_id, table_id, party_size, customer_name, time, notes)

    def unreserve_table(self, floor_id: str, table_id: str) -> bool:
        return self.reservations.unreserve_table(floor_id, table_id)

    def update_reservation(self, floor_id: str, table_id: str, **changes: Any) -> Optional[Reservation]:
        return self.reservations.update_reservation(floor_id, table_id, **changes)

    def chairs_for_table(self, floor_id: str, table_id: str) -> List[Shape]:
        return self.reservations.chairs_for_table(floor_id, table_id)

    # Persistence --------------------------------------------------------
    def save(self, path: str, saved_at: Optional[datetime] = None) -> None:
        save_plan(path, self.name, self.store.floors, self.store.groups, saved_at)

    def load(self, path: str) -> None:
        """Replace the plan with one read from disk and restart history."""
        name, floors, groups = load_plan(path)
        self.name = name or self.name
        self.store.floors = floors
        self.store.groups = groups
        self.store.selected_elements = []
        self.history.reset()
        self.history.add_to_history()
        LOGGER.debug("Loaded plan %r with %d floors", self.name, len(floors))

    @classmethod
    def from_file(cls, path: str) -> FloorPlanEditor:
        editor = cls()
        editor.load(path)
        return editor

    # Operations ---------------------------------------------------------
    def apply(self, operation: Dict[str, Any], commit: bool = True) -> Any:
        """Apply an operation dictionary to the plan.

        Args:
            operation: Dictionary with an ``op`` (or ``type``) field naming a
                registered operation plus its parameters.
            commit: Record a history snapshot when the operation changed
                the plan.

        Returns:
            Whatever the underlying editor method returns.

        Raises:
            ValueError: If the operation type is missing, unknown, or its
                parameters do not fit.
            InvalidOperation: If the operation is rejected by validation.
        """
        operation_type = operation.get("op") or operation.get("type")

        if operation_type is None:
            raise ValueError("Operation must have an 'op' or 'type' field")

        try:
            op = get_operation(operation_type)
        except KeyError:
            raise ValueError(f"Unknown operation type: {operation_type}")

        params = {k: v for k, v in operation.items() if k not in ["op", "type"]}

        op.precheck(self, **params)
        result = op.apply(self, **params)

        if config.DEBUG_INVARIANTS:
            validate_all(self.store)

        if commit and op.mutates and result:
            self.commit()

        return result


def apply_operations(editor: FloorPlanEditor, operations: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """Apply a list of operations in order, collecting per-operation results.

    A failing operation is reported and skipped; later operations still run.

    Returns:
        List of results, each containing:
          - operation_index: Position in the input list
          - operation: The operation that was applied
          - success: Whether it was applied without error
          - changed: Whether it changed anything
          - error: Error message if it failed (optional)
    """
    results = []

    for i, operation in enumerate(operations):
        try:
            result = editor.apply(operation)
            results.append(
                {
                    "operation_index": i,
                    "operation": operation,
                    "success": True,
                    "changed": bool(result),
                }
            )
        except (InvalidOperation, ValueError, TypeError) as e:
            LOGGER.warning("Operation %d (%s) failed: %s", i, operation.get("op"), e)
            results.append(
                {
                    "operation_index": i,
                    "operation": operation,
                    "success": False,
                    "changed": False,
                    "error": str(e),
                }
            )

    return results

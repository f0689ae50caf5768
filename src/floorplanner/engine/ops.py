"""Named operations that can be applied to a floor plan editor.

Operations are described by dictionaries such as
``{"op": "move_group", "group_id": "group-1", "dx": 10, "dy": 0}`` so that
scripts and the CLI can replay user actions. Each name maps to an
Operation in the registry below.
"""

from __future__ import annotations

import inspect
from typing import Any, Dict, Protocol

from ..core.model import Point, ReservationStatus
from ..io.plan import parse_time, selection_from_dict, shape_from_dict


class Operation(Protocol):
    """Protocol for floor plan operations.

    Attributes:
        mutates: Whether a successful apply changes the plan and should be
            followed by a history snapshot.
    """

    mutates: bool

    def precheck(self, editor: Any, **kwargs: Any) -> bool:
        """Validate the operation's parameters.

        Raises:
            ValueError: If the parameters do not fit the operation.
        """
        ...

    def apply(self, editor: Any, **kwargs: Any) -> Any:
        """Apply the operation and return the editor method's result."""
        ...


class EditorCallOp:
    """Operation that forwards its parameters to an editor method."""

    def __init__(self, method: str, mutates: bool = True):
        self.method = method
        self.mutates = mutates

    def convert(self, **kwargs: Any) -> Dict[str, Any]:
        return kwargs

    def precheck(self, editor: Any, **kwargs: Any) -> bool:
        target = getattr(editor, self.method)
        try:
            inspect.signature(target).bind(**self.convert(**kwargs))
        except (KeyError, TypeError) as e:
            raise ValueError(f"Invalid parameters for '{self.method}': {e}")
        return True

    def apply(self, editor: Any, **kwargs: Any) -> Any:
        return getattr(editor, self.method)(**self.convert(**kwargs))


class AddShapeOp(EditorCallOp):
    """Add a shape given in its saved (camelCase) form."""

    def __init__(self):
        super().__init__("add_shape")

    def convert(self, **kwargs: Any) -> Dict[str, Any]:
        if "shape" not in kwargs:
            raise ValueError("add_shape needs a 'shape' object")
        return {"shape": shape_from_dict(kwargs["shape"])}


class AddCustomShapeOp(EditorCallOp):
    """Add a custom polygon given as ``[[x, y], ...]`` points."""

    def __init__(self):
        super().__init__("add_custom_shape")

    def convert(self, **kwargs: Any) -> Dict[str, Any]:
        points = kwargs.pop("points", None)
        if not points or len(points) < 3:
            raise ValueError("add_custom_shape needs at least 3 points")
        return {"points": [Point(float(x), float(y)) for x, y in points], **kwargs}


class SetSelectionOp(EditorCallOp):
    def __init__(self):
        super().__init__("set_selected_elements", mutates=False)

    def convert(self, **kwargs: Any) -> Dict[str, Any]:
        return {"elements": [selection_from_dict(el) for el in kwargs.get("elements", [])]}


class GroupSelectionOp(EditorCallOp):
    """Group operation taking an optional ``selection`` of saved elements."""

    def convert(self, **kwargs: Any) -> Dict[str, Any]:
        if kwargs.get("selection") is not None:
            kwargs["selection"] = [selection_from_dict(el) for el in kwargs["selection"]]
        return kwargs


class ReservationOp(EditorCallOp):
    """Reservation operation with ``time``/``status``/``party_size`` from JSON."""

    def convert(self, **kwargs: Any) -> Dict[str, Any]:
        if isinstance(kwargs.get("time"), str):
            kwargs["time"] = parse_time(kwargs["time"])
        if kwargs.get("status") is not None:
            kwargs["status"] = ReservationStatus(kwargs["status"])
        if kwargs.get("party_size") is not None:
            kwargs["party_size"] = int(kwargs["party_size"])
        return kwargs


_OPERATIONS: Dict[str, Operation] = {
    # Floors
    "add_floor": EditorCallOp("add_floor"),
    "delete_floor": EditorCallOp("delete_floor"),
    "duplicate_floor": EditorCallOp("duplicate_floor"),
    "bring_floor_to_front": EditorCallOp("bring_floor_to_front"),
    "send_floor_to_back": EditorCallOp("send_floor_to_back"),
    # Shapes
    "add_shape": AddShapeOp(),
    "add_custom_shape": AddCustomShapeOp(),
    "delete_shape": EditorCallOp("delete_shape"),
    "move_shape": EditorCallOp("move_shape"),
    # Groups
    "create_group": GroupSelectionOp("create_group"),
    "ungroup": GroupSelectionOp("ungroup_elements"),
    "add_shape_to_group": EditorCallOp("add_shape_to_group"),
    "move_group": EditorCallOp("move_group"),
    "rotate_group": EditorCallOp("rotate_group"),
    "resize_group": EditorCallOp("resize_group"),
    "delete_group": EditorCallOp("delete_group"),
    # Selection
    "select_shape": EditorCallOp("select_shape", mutates=False),
    "select_floor": EditorCallOp("select_floor", mutates=False),
    "select_group": EditorCallOp("select_group", mutates=False),
    "set_selection": SetSelectionOp(),
    "clear_selection": EditorCallOp("clear_selection", mutates=False),
    # Clipboard
    "copy": EditorCallOp("copy_selection", mutates=False),
    "paste": EditorCallOp("paste"),
    # Reservations
    "reserve_table": ReservationOp("reserve_table"),
    "unreserve_table": EditorCallOp("unreserve_table"),
    "update_reservation": ReservationOp("update_reservation"),
    # History
    "undo": EditorCallOp("undo", mutates=False),
    "redo": EditorCallOp("redo", mutates=False),
}


def register_operation(name: str, operation: Operation) -> None:
    """Register a new operation in the registry.

    Args:
        name: Name of the operation.
        operation: Operation instance to register.
    """
    _OPERATIONS[name] = operation


def get_operation(name: str) -> Operation:
    """Get an operation by name.

    Args:
        name: Name of the operation.

    Returns:
        The operation instance.

    Raises:
        KeyError: If the operation is not registered.
    """
    if name not in _OPERATIONS:
        raise KeyError(f"Operation '{name}' is not registered")
    return _OPERATIONS[name]


def list_operations() -> list[str]:
    """List all registered operations."""
    return list(_OPERATIONS.keys())

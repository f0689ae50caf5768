"""Engine module for floor plan editing.

This module provides the state store, the managers that operate on it,
and the editor facade that applies named operations.
"""

from .api import FloorPlanEditor, apply_operations
from .groups import GroupManager
from .history import HistoryManager, Snapshot
from .selection import SelectionManager
from .store import ShapeStore
from .validators import CrossFloorGroupingError, GroupingError, InvalidOperation, InvariantViolation, validate_all

__all__ = [
    "FloorPlanEditor",
    "apply_operations",
    "GroupManager",
    "HistoryManager",
    "Snapshot",
    "SelectionManager",
    "ShapeStore",
    "CrossFloorGroupingError",
    "GroupingError",
    "InvalidOperation",
    "InvariantViolation",
    "validate_all",
]

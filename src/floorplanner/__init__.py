"""Floor Planner - A Python library for laying out furniture on restaurant floors."""

__version__ = "0.1.0"

from .core.model import ElementType, Floor, Group, Point, SelectionElement, Shape, ShapeCategory
from .engine.api import FloorPlanEditor

__all__ = [
    "ElementType",
    "Floor",
    "FloorPlanEditor",
    "Group",
    "Point",
    "SelectionElement",
    "Shape",
    "ShapeCategory",
]

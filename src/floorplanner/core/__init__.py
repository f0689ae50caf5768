"""Core data models for floor planning."""

from .model import (
    Box,
    ElementType,
    Floor,
    Group,
    Point,
    Reservation,
    ReservationStatus,
    SelectionElement,
    Shape,
    ShapeCategory,
)

__all__ = [
    "Box",
    "ElementType",
    "Floor",
    "Group",
    "Point",
    "Reservation",
    "ReservationStatus",
    "SelectionElement",
    "Shape",
    "ShapeCategory",
]

"""Core data models for floor planning.

This module defines the fundamental data structures used to represent
a restaurant floor plan: floors, the shapes placed on them, rigid groups
of shapes, and references to selected elements.

All models are frozen dataclasses. Operations never mutate a model in
place; they build a new instance with ``dataclasses.replace`` and swap it
into the store, which keeps history snapshots exact.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional, Tuple


class ShapeCategory(str, Enum):
    """Kinds of furniture that can be placed on a floor."""

    TABLE = "table"
    CHAIR = "chair"
    CUSTOM = "custom"


class ElementType(str, Enum):
    """Kinds of entities a selection can reference."""

    FLOOR = "floor"
    SHAPE = "shape"
    GROUP = "group"


class ReservationStatus(str, Enum):
    RESERVED = "reserved"
    PENDING = "pending"
    AVAILABLE = "available"


@dataclass(frozen=True)
class Point:
    """Represents a 2D point in floor-local coordinates (y grows downwards).

    Attributes:
        x: The x-coordinate of the point.
        y: The y-coordinate of the point.
    """

    x: float
    y: float


@dataclass(frozen=True)
class Box:
    """Axis-aligned box expressed relative to a center point.

    Attributes:
        x: Offset of the left edge from ``center.x``.
        y: Offset of the top edge from ``center.y``.
        width: Width of the box.
        height: Height of the box.
        center: The pivot the offsets are measured from.
    """

    x: float
    y: float
    width: float
    height: float
    center: Point


@dataclass(frozen=True)
class Reservation:
    """A reservation attached to a table shape.

    Attributes:
        id: Unique identifier for the reservation.
        time: When the reservation is for.
        customer_name: Name the table is held under.
        party_size: Number of guests.
        status: Current reservation status.
        notes: Optional free-form notes.
    """

    id: str
    time: datetime
    customer_name: str
    party_size: int
    status: ReservationStatus = ReservationStatus.RESERVED
    notes: Optional[str] = None


@dataclass(frozen=True)
class Shape:
    """A placeable furniture element owned by exactly one floor.

    ``x`` and ``y`` are the top-left corner before rotation. Rotation is
    applied about the shape's own center when drawing and never changes the
    stored position.

    Attributes:
        id: Unique identifier for the shape.
        floor_id: ID of the floor that owns the shape.
        category: Table, chair or custom polygon.
        x: Left edge in floor-local coordinates.
        y: Top edge in floor-local coordinates.
        width: Width of the shape's box.
        height: Height of the shape's box.
        rotation: Rotation in degrees, clockwise.
        label: Human-readable label.
        group_id: ID of the group the shape belongs to, if any.
        table_id: For chairs, the table they are placed at (lookup only).
        reservation: For tables, the current reservation.
        custom_path: SVG path for custom polygons.
        fill: Fill color used by renderers.
        stroke: Stroke color used by renderers.
    """

    id: str
    floor_id: Optional[str]
    category: ShapeCategory
    x: float
    y: float
    width: float
    height: float
    rotation: float = 0.0
    label: str = ""
    group_id: Optional[str] = None
    table_id: Optional[str] = None
    reservation: Optional[Reservation] = None
    custom_path: Optional[str] = None
    fill: Optional[str] = None
    stroke: Optional[str] = None

    @property
    def center(self) -> Point:
        return Point(self.x + self.width / 2, self.y + self.height / 2)


@dataclass(frozen=True)
class Floor:
    """A rectangular placement surface.

    Attributes:
        id: Unique identifier for the floor.
        name: Human-readable name of the floor.
        x: Left edge on the canvas.
        y: Top edge on the canvas.
        width: Width of the floor.
        height: Height of the floor.
        z_index: Stacking order among floors.
        shapes: Shapes placed on the floor, in insertion order.
    """

    id: str
    name: str
    x: float
    y: float
    width: float
    height: float
    z_index: int
    shapes: Tuple[Shape, ...] = ()


@dataclass(frozen=True)
class Group:
    """A rigid composite of shapes sharing one rotation pivot.

    Attributes:
        id: Unique identifier for the group.
        name: Human-readable name of the group.
        floor_id: ID of the floor every member lives on.
        shape_ids: IDs of the member shapes.
        rotation: Cumulative rotation of the group in degrees.
        center: Pivot used for rotation and resizing.
        width: Width of the padded bounding box at creation.
        height: Height of the padded bounding box at creation.
    """

    id: str
    name: str
    floor_id: str
    shape_ids: Tuple[str, ...]
    center: Point
    rotation: float = 0.0
    width: Optional[float] = None
    height: Optional[float] = None


@dataclass(frozen=True)
class SelectionElement:
    """A tagged reference to a selected floor, shape or group."""

    id: str
    type: ElementType
    floor_id: Optional[str]

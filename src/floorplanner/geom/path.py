"""Custom polygon shapes and shape outlines.

Custom shapes are drawn point by point and stored as an SVG path
(``M x,y L x,y ... Z``). This module converts between point lists, paths
and Shapely polygons, and builds the outline used for floor containment.
"""

from __future__ import annotations

import re
import time
from typing import List, Optional, Sequence, Tuple

from shapely import affinity
from shapely.geometry import Polygon, box

from ..core.model import Floor, Point, Shape, ShapeCategory

_PATH_TOKEN = re.compile(r"([MLZ])\s*(?:([0-9.eE+-]+)\s*,\s*([0-9.eE+-]+))?", re.IGNORECASE)


def points_to_path(points: Sequence[Point]) -> str:
    """Build a closed SVG path from a list of points."""
    if not points:
        return ""
    parts = [f"M{points[0].x},{points[0].y}"]
    parts.extend(f"L{p.x},{p.y}" for p in points[1:])
    parts.append("Z")
    return " ".join(parts)


def path_to_points(path: str) -> List[Tuple[float, float]]:
    """Parse an ``M``/``L``/``Z`` SVG path into a list of coordinates.

    Raises:
        ValueError: If the path contains no coordinates.
    """
    coords = []
    for command, x, y in _PATH_TOKEN.findall(path or ""):
        if command.upper() in ("M", "L") and x and y:
            coords.append((float(x), float(y)))

    if not coords:
        raise ValueError(f"Invalid SVG path format: {path!r}")
    return coords


def path_to_polygon(path: str) -> Polygon:
    """Parse an SVG path into a Shapely polygon."""
    coords = path_to_points(path)
    if len(coords) < 3:
        raise ValueError(f"Path needs at least 3 points, got {len(coords)}")
    return Polygon(coords)


def custom_shape_from_points(
    points: Sequence[Point],
    category: ShapeCategory = ShapeCategory.CUSTOM,
    label: str = "",
    shape_id: Optional[str] = None,
) -> Shape:
    """Create a custom shape whose box is the bounds of the drawn polygon.

    The shape has no floor yet; ``ShapeStore.add_shape`` assigns one.
    """
    path = points_to_path(points)
    min_x, min_y, max_x, max_y = path_to_polygon(path).bounds

    return Shape(
        id=shape_id or f"custom-{time.time_ns()}",
        floor_id=None,
        category=ShapeCategory(category),
        label=label or f"Custom {ShapeCategory(category).value}",
        x=min_x,
        y=min_y,
        width=max_x - min_x,
        height=max_y - min_y,
        custom_path=path,
    )


def shape_outline(shape: Shape) -> Polygon:
    """Outline of a shape at its current position and rotation.

    Custom shapes use their drawn polygon, moved so its bounds start at
    the shape's ``(x, y)``; other shapes use their box.
    """
    if shape.custom_path:
        polygon = path_to_polygon(shape.custom_path)
        min_x, min_y, _, _ = polygon.bounds
        outline = affinity.translate(polygon, shape.x - min_x, shape.y - min_y)
    else:
        outline = box(shape.x, shape.y, shape.x + shape.width, shape.y + shape.height)

    if shape.rotation:
        center = shape.center
        outline = affinity.rotate(outline, shape.rotation, origin=(center.x, center.y))
    return outline


def floor_outline(floor: Floor) -> Polygon:
    """The floor's surface in floor-local coordinates."""
    return box(0.0, 0.0, floor.width, floor.height)


def fits_on_floor(floor: Floor, shape: Shape) -> bool:
    """Check that a shape's outline lies on the floor surface."""
    return floor_outline(floor).covers(shape_outline(shape))

"""Pure geometry helpers for shape placement.

Every function here is stateless. Shapes are anything exposing ``x``,
``y``, ``width`` and ``height`` (top-left corner plus size); angles are in
degrees, clockwise-positive in screen coordinates where y grows downwards.
"""

from __future__ import annotations

import math
from typing import Iterable, Sequence

from ..core.model import Box, Point


def rotate_point(point: Point, pivot: Point, angle_degrees: float) -> Point:
    """Rotate a point about a pivot.

    Args:
        point: The point to rotate.
        pivot: The fixed point of the rotation.
        angle_degrees: Rotation angle, clockwise on screen.

    Returns:
        The rotated point.
    """
    angle = math.radians(angle_degrees)
    cos_a = math.cos(angle)
    sin_a = math.sin(angle)

    dx = point.x - pivot.x
    dy = point.y - pivot.y

    return Point(
        dx * cos_a - dy * sin_a + pivot.x,
        dx * sin_a + dy * cos_a + pivot.y,
    )


def scale_about(point: Point, pivot: Point, sx: float, sy: float) -> Point:
    """Scale a point's offset from a pivot by independent x/y factors."""
    return Point(pivot.x + (point.x - pivot.x) * sx, pivot.y + (point.y - pivot.y) * sy)


def bounding_box_overlap(a, b) -> bool:
    """Check whether two axis-aligned boxes overlap.

    Boxes overlap unless they are strictly separated on some axis, so two
    boxes sharing an edge count as overlapping.
    """
    return not (
        a.x + a.width < b.x
        or a.x > b.x + b.width
        or a.y + a.height < b.y
        or a.y > b.y + b.height
    )


def bounding_box_contains(outer, inner) -> bool:
    """Check whether ``inner`` lies entirely inside ``outer`` (edges inclusive)."""
    return (
        inner.x >= outer.x
        and inner.y >= outer.y
        and inner.x + inner.width <= outer.x + outer.width
        and inner.y + inner.height <= outer.y + outer.height
    )


def centroid(shapes: Iterable) -> Point:
    """Mean of the shapes' centers.

    Returns ``Point(0, 0)`` for an empty input.
    """
    shapes = list(shapes)
    if not shapes:
        return Point(0.0, 0.0)

    total_x = sum(s.x + s.width / 2 for s in shapes)
    total_y = sum(s.y + s.height / 2 for s in shapes)
    return Point(total_x / len(shapes), total_y / len(shapes))


def bounding_box(shapes: Sequence, padding: float = 0.0) -> Box:
    """Smallest box enclosing all shapes, relative to their centroid.

    Args:
        shapes: Shapes to enclose.
        padding: Extra space added on every side.

    Returns:
        A Box whose ``x``/``y`` are the offsets of its top-left corner from
        the centroid and whose ``center`` is the centroid. An empty input
        yields a zero-sized box at the origin.
    """
    center = centroid(shapes)
    if not shapes:
        return Box(0.0, 0.0, 0.0, 0.0, center)

    min_x = min(s.x for s in shapes) - padding
    min_y = min(s.y for s in shapes) - padding
    max_x = max(s.x + s.width for s in shapes) + padding
    max_y = max(s.y + s.height for s in shapes) + padding

    return Box(
        x=min_x - center.x,
        y=min_y - center.y,
        width=max_x - min_x,
        height=max_y - min_y,
        center=center,
    )

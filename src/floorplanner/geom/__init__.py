"""Geometry utilities for floor planning.

This module provides the pure math used to place, rotate and group
shapes, plus conversions for custom polygon shapes.
"""

from .kernel import (
    bounding_box,
    bounding_box_contains,
    bounding_box_overlap,
    centroid,
    rotate_point,
    scale_about,
)
from .path import custom_shape_from_points, fits_on_floor, path_to_polygon, points_to_path, shape_outline

__all__ = [
    "bounding_box",
    "bounding_box_contains",
    "bounding_box_overlap",
    "centroid",
    "rotate_point",
    "scale_about",
    "custom_shape_from_points",
    "fits_on_floor",
    "path_to_polygon",
    "points_to_path",
    "shape_outline",
]

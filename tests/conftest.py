"""
Shared test fixtures for the floor planning engine.
"""
import pytest

from floorplanner.core.model import Floor, Shape, ShapeCategory
from floorplanner.engine.api import FloorPlanEditor
from floorplanner.engine.store import ShapeStore


def _make_shape(shape_id, x, y, width=10.0, height=10.0, category=ShapeCategory.TABLE, floor_id=None, **kwargs):
    return Shape(
        id=shape_id,
        floor_id=floor_id,
        category=category,
        x=x,
        y=y,
        width=width,
        height=height,
        **kwargs,
    )


@pytest.fixture
def make_shape():
    """Factory for unplaced shapes (10x10 tables unless told otherwise)."""
    return _make_shape


@pytest.fixture
def store():
    """Two floors.

    floor-1 (600x400): A(0,0,10,10) and B(20,0,10,10), the layout used
    for the group rotation scenario, plus a lone table T(100,100,80,80)
    with chair K pointing at it.
    floor-2 (400x300): C(50,50,20,20).
    """
    main = Floor(
        id="floor-1",
        name="Main Floor",
        x=100.0,
        y=100.0,
        width=600.0,
        height=400.0,
        z_index=1,
        shapes=(
            _make_shape("A", 0.0, 0.0, floor_id="floor-1"),
            _make_shape("B", 20.0, 0.0, floor_id="floor-1"),
            _make_shape("T", 100.0, 100.0, 80.0, 80.0, floor_id="floor-1", label="Table 1"),
            _make_shape(
                "K", 200.0, 100.0, 40.0, 40.0, category=ShapeCategory.CHAIR, floor_id="floor-1", table_id="T"
            ),
        ),
    )
    patio = Floor(
        id="floor-2",
        name="Patio",
        x=100.0,
        y=100.0,
        width=400.0,
        height=300.0,
        z_index=2,
        shapes=(_make_shape("C", 50.0, 50.0, 20.0, 20.0, floor_id="floor-2"),),
    )
    return ShapeStore(floors=[main, patio])


@pytest.fixture
def editor(store):
    """Editor over the two-floor store, with one initial history snapshot."""
    return FloorPlanEditor(store, name="Bistro")

"""Tests for the ShapeStore."""
from dataclasses import replace

import pytest

from floorplanner import config
from floorplanner.core.model import ElementType, SelectionElement, ShapeCategory
from floorplanner.engine.groups import GroupManager
from floorplanner.engine.store import ShapeStore
from floorplanner.engine.validators import validate_all


def shape_sel(shape_id, floor_id="floor-1"):
    return SelectionElement(shape_id, ElementType.SHAPE, floor_id)


class TestFloors:
    def test_add_floor_defaults(self, store):
        floor = store.add_floor()
        assert floor.name == "Floor 3"
        assert floor.z_index == 3
        assert (floor.width, floor.height) == (config.DEFAULT_FLOOR_WIDTH, config.DEFAULT_FLOOR_HEIGHT)
        assert floor.shapes == ()
        assert store.floors[-1] is floor

    def test_add_floor_with_geometry(self):
        floor = ShapeStore().add_floor("Terrace", width=800, height=200)
        assert floor.name == "Terrace"
        assert (floor.width, floor.height) == (800, 200)
        assert floor.z_index == 1

    def test_update_floor(self, store):
        floor = replace(store.get_floor("floor-2"), name="Garden")
        assert store.update_floor("floor-2", floor)
        assert store.get_floor("floor-2").name == "Garden"
        assert not store.update_floor("nope", floor)

    def test_bring_to_front_and_send_to_back(self, store):
        assert store.bring_to_front("floor-1")
        assert store.get_floor("floor-1").z_index == 3
        assert store.send_to_back("floor-2")
        assert store.get_floor("floor-2").z_index == 1
        assert store.send_to_back("floor-1")
        assert store.get_floor("floor-1").z_index == 0
        assert not store.bring_to_front("missing")

    def test_delete_floor_cascades(self, store):
        group = GroupManager(store).create_group([shape_sel("A"), shape_sel("B")])
        store.selected_elements = [
            SelectionElement("floor-1", ElementType.FLOOR, "floor-1"),
            SelectionElement(group.id, ElementType.GROUP, "floor-1"),
            shape_sel("T"),
            shape_sel("C", "floor-2"),
        ]

        assert store.delete_floor("floor-1")

        assert store.get_floor("floor-1") is None
        assert store.find_shape("A") is None
        assert group.id not in store.groups
        assert store.selected_elements == [shape_sel("C", "floor-2")]
        assert validate_all(store)

    def test_delete_missing_floor(self, store):
        assert not store.delete_floor("missing")
        assert len(store.floors) == 2

    def test_duplicate_floor_rewrites_ids(self, store):
        GroupManager(store).create_group([shape_sel("A"), shape_sel("B")])
        copy = store.duplicate_floor("floor-1")

        original = store.get_floor("floor-1")
        assert copy.name == "Main Floor (Copy)"
        assert (copy.x, copy.y) == (original.x + config.DUPLICATE_OFFSET, original.y + config.DUPLICATE_OFFSET)
        assert len(copy.shapes) == len(original.shapes)

        all_ids = [s.id for f in store.floors for s in f.shapes]
        assert len(all_ids) == len(set(all_ids))
        assert all(s.floor_id == copy.id for s in copy.shapes)

        copied_chair = next(s for s in copy.shapes if s.category == ShapeCategory.CHAIR)
        copied_table = next(s for s in copy.shapes if s.label == "Table 1")
        assert copied_chair.table_id == copied_table.id

        copied_groups = [g for g in store.groups.values() if g.floor_id == copy.id]
        assert len(copied_groups) == 1
        assert validate_all(store)

    def test_duplicate_missing_floor(self, store):
        assert store.duplicate_floor("missing") is None


class TestShapes:
    def test_add_shape_goes_to_first_floor(self, store, make_shape):
        stored = store.add_shape(make_shape("N", 300, 300))
        assert stored.floor_id == "floor-1"
        assert store.get_shape("floor-1", "N") == stored

    def test_add_shape_goes_to_selected_floor(self, store, make_shape):
        store.selected_elements = [SelectionElement("floor-2", ElementType.FLOOR, "floor-2")]
        stored = store.add_shape(make_shape("N", 0, 0))
        assert stored.floor_id == "floor-2"
        assert store.get_shape("floor-2", "N") is not None

    def test_add_shape_ignores_collisions(self, store, make_shape):
        stored = store.add_shape(make_shape("N", 0, 0))
        assert stored is not None
        assert "A" in store.collisions("floor-1", stored)

    def test_add_shape_without_floors(self, make_shape):
        assert ShapeStore().add_shape(make_shape("N", 0, 0)) is None

    def test_update_shape(self, store):
        shape = replace(store.get_shape("floor-1", "T"), label="VIP")
        assert store.update_shape("floor-1", "T", shape)
        assert store.get_shape("floor-1", "T").label == "VIP"

    def test_update_missing_shape_is_noop(self, store):
        before = list(store.floors)
        shape = store.get_shape("floor-1", "T")
        assert not store.update_shape("floor-1", "nope", shape)
        assert not store.update_shape("floor-9", "T", shape)
        assert store.floors == before

    def test_delete_shape_prunes_selection(self, store):
        store.selected_elements = [shape_sel("T"), shape_sel("A")]
        assert store.delete_shape("floor-1", "T")
        assert store.find_shape("T") is None
        assert store.selected_elements == [shape_sel("A")]

    def test_double_delete_is_noop(self, store):
        assert store.delete_shape("floor-1", "T")
        assert not store.delete_shape("floor-1", "T")

    def test_delete_leaves_degenerate_group(self, store):
        group = GroupManager(store).create_group([shape_sel("A"), shape_sel("B")])
        store.delete_shape("floor-1", "A")

        # One live member is left, but the stored ids keep the dead entry
        # and the group is not dissolved.
        remaining = [sid for sid in store.groups[group.id].shape_ids if store.find_shape(sid)]
        assert remaining == ["B"]
        assert store.groups[group.id].shape_ids == ("A", "B")
        assert store.find_shape("B").group_id == group.id

    def test_move_ungrouped_shape(self, store):
        assert store.move_shape("floor-1", "T", 150, 160)
        shape = store.get_shape("floor-1", "T")
        assert (shape.x, shape.y) == (150, 160)

    def test_move_grouped_shape_moves_group(self, store):
        group = GroupManager(store).create_group([shape_sel("A"), shape_sel("B")])
        assert store.move_shape("floor-1", "A", 5, 8)

        assert (store.find_shape("A").x, store.find_shape("A").y) == (5, 8)
        assert (store.find_shape("B").x, store.find_shape("B").y) == (25, 8)
        assert store.groups[group.id].center.x == pytest.approx(20)
        assert store.groups[group.id].center.y == pytest.approx(13)

    def test_move_missing_shape(self, store):
        assert not store.move_shape("floor-1", "nope", 0, 0)


class TestQueries:
    def test_collisions(self, store, make_shape):
        probe = make_shape("P", 5, 5)
        assert store.collisions("floor-1", probe) == ["A"]
        assert store.collisions("floor-2", probe) == []

    def test_fits_on_floor(self, store, make_shape):
        assert store.fits_on_floor("floor-2", make_shape("P", 390, 290))
        assert not store.fits_on_floor("floor-2", make_shape("P", 395, 0))
        assert not store.fits_on_floor("missing", make_shape("P", 0, 0))

    def test_group_of(self, store):
        group = GroupManager(store).create_group([shape_sel("A"), shape_sel("B")])
        assert store.group_of("A") == store.groups[group.id]
        assert store.group_of("T") is None

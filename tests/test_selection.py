"""Tests for selection tracking."""
import pytest

from floorplanner.core.model import ElementType, SelectionElement
from floorplanner.engine.groups import GroupManager
from floorplanner.engine.selection import SelectionManager


@pytest.fixture
def selection(store):
    return SelectionManager(store)


def shape_sel(shape_id, floor_id="floor-1"):
    return SelectionElement(shape_id, ElementType.SHAPE, floor_id)


class TestSelectShape:
    def test_replaces_selection(self, selection):
        assert selection.select_shape("A")
        assert selection.select_shape("T")
        assert selection.selected_elements == [shape_sel("T")]

    def test_additive(self, selection):
        selection.select_shape("A")
        assert selection.select_shape("C", additive=True)
        assert selection.selected_elements == [shape_sel("A"), shape_sel("C", "floor-2")]

    def test_additive_duplicate_is_noop(self, selection):
        selection.select_shape("A")
        assert not selection.select_shape("A", additive=True)
        assert selection.selected_elements == [shape_sel("A")]

    def test_grouped_shape_selects_group(self, store, selection):
        group = GroupManager(store).create_group([shape_sel("A"), shape_sel("B")])
        selection.clear()

        assert selection.select_shape("B")
        assert selection.selected_elements == [SelectionElement(group.id, ElementType.GROUP, "floor-1")]
        assert not selection.select_shape("A", additive=True)

    def test_dangling_group_id_selects_shape(self, store, selection, make_shape):
        store.add_shape(make_shape("X", 300, 300, group_id="gone"))
        assert selection.select_shape("X")
        assert selection.selected_elements == [shape_sel("X")]

    def test_missing_shape(self, selection):
        assert not selection.select_shape("nope")
        assert selection.selected_elements == []


class TestOtherSelection:
    def test_select_floor(self, selection):
        assert selection.select_floor("floor-2")
        assert selection.selected_elements == [SelectionElement("floor-2", ElementType.FLOOR, "floor-2")]
        assert not selection.select_floor("floor-9")

    def test_set_and_clear(self, selection):
        elements = (shape_sel("A"), shape_sel("C", "floor-2"))
        selection.set_selected_elements(elements)
        assert selection.selected_elements == list(elements)

        selection.clear()
        assert selection.selected_elements == []

    def test_prune(self, store, selection):
        selection.set_selected_elements(
            [
                shape_sel("A"),
                shape_sel("ghost"),
                SelectionElement("group-x", ElementType.GROUP, "floor-1"),
                SelectionElement("floor-9", ElementType.FLOOR, "floor-9"),
            ]
        )
        assert selection.prune() == 3
        assert selection.selected_elements == [shape_sel("A")]

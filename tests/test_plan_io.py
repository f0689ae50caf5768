"""Tests for saving and loading plans."""
import json
from datetime import datetime, timezone

import pytest

from floorplanner.core.model import Reservation, ReservationStatus, ShapeCategory
from floorplanner.engine.api import FloorPlanEditor
from floorplanner.io.plan import (
    load_plan,
    plan_from_dict,
    plan_to_dict,
    save_plan,
    shape_from_dict,
    shape_to_dict,
)

SAVED_AT = datetime(2024, 5, 17, 12, 0, tzinfo=timezone.utc)


class TestRecords:
    def test_shape_keys_are_camel_case(self, store):
        record = shape_to_dict(store.get_shape("floor-1", "K"))
        assert record["floorId"] == "floor-1"
        assert record["tableId"] == "T"
        assert record["category"] == "chair"
        assert "groupId" not in record
        assert "reservation" not in record

    def test_reservation_record(self, store, make_shape):
        reservation = Reservation(
            id="r1",
            time=datetime(2024, 5, 17, 19, 30),
            customer_name="Rossi",
            party_size=4,
            status=ReservationStatus.PENDING,
        )
        record = shape_to_dict(make_shape("T9", 0, 0, reservation=reservation))
        assert record["reservation"] == {
            "id": "r1",
            "time": "2024-05-17T19:30:00",
            "customerName": "Rossi",
            "partySize": 4,
            "status": "pending",
        }
        assert shape_from_dict(record).reservation == reservation

    def test_browser_timestamp(self):
        shape = shape_from_dict(
            {
                "id": "t",
                "category": "table",
                "x": 0,
                "y": 0,
                "width": 50,
                "height": 50,
                "reservation": {"id": "r", "time": "2024-05-17T19:30:00.000Z", "customerName": "A", "partySize": 2},
            },
            floor_id="f",
        )
        assert shape.floor_id == "f"
        assert shape.reservation.time == datetime(2024, 5, 17, 19, 30, tzinfo=timezone.utc)
        assert shape.reservation.status == ReservationStatus.RESERVED

    def test_unknown_category(self):
        with pytest.raises(ValueError):
            shape_from_dict({"id": "s", "category": "sofa", "x": 0, "y": 0, "width": 1, "height": 1})

    def test_floor_shapes_take_floor_id(self):
        _, floors, _ = plan_from_dict(
            {
                "name": "Old",
                "floors": [
                    {
                        "id": "f1",
                        "name": "Hall",
                        "width": 100,
                        "height": 100,
                        "shapes": [{"id": "s", "category": "custom", "x": 0, "y": 0, "width": 5, "height": 5}],
                    }
                ],
            }
        )
        assert floors[0].shapes[0].floor_id == "f1"
        assert floors[0].shapes[0].category == ShapeCategory.CUSTOM
        assert floors[0].z_index == 0


class TestPlanFiles:
    def test_plan_record(self, store):
        record = plan_to_dict("Bistro", store.floors, store.groups, saved_at=SAVED_AT)
        assert record["name"] == "Bistro"
        assert record["savedAt"] == "2024-05-17T12:00:00+00:00"
        assert [f["zIndex"] for f in record["floors"]] == [1, 2]
        assert record["groups"] == {}

    def test_save_and_load(self, tmp_path, editor):
        editor.select_shape("A")
        editor.select_shape("B", additive=True)
        group = editor.create_group()
        editor.reserve_table("floor-1", "T", customer_name="Rossi")
        path = tmp_path / "plans" / "bistro.json"

        editor.save(str(path), saved_at=SAVED_AT)
        name, floors, groups = load_plan(str(path))

        assert name == "Bistro"
        assert floors == editor.floors
        assert groups == editor.store.groups
        assert groups[group.id].shape_ids == ("A", "B")

        with open(path, encoding="utf-8") as f:
            data = json.load(f)
        assert data["groups"][group.id]["shapeIds"] == ["A", "B"]

    def test_editor_load_resets_history(self, tmp_path, editor):
        path = tmp_path / "plan.json"
        save_plan(str(path), "Other", editor.floors[:1], {})

        editor.move_shape("floor-1", "T", 0, 300)
        editor.commit()
        editor.select_shape("A")
        editor.load(str(path))

        assert editor.name == "Other"
        assert [f.id for f in editor.floors] == ["floor-1"]
        assert editor.selected_elements == []
        assert editor.history.index == 0
        assert not editor.undo()

    def test_from_file(self, tmp_path, store):
        path = tmp_path / "plan.json"
        save_plan(str(path), "Bistro", store.floors, store.groups)
        editor = FloorPlanEditor.from_file(str(path))
        assert editor.name == "Bistro"
        assert len(editor.floors) == 2

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_plan(str(tmp_path / "missing.json"))

"""Saving and loading floor plans.

A saved plan is a JSON object::

    {"name": ..., "floors": [...], "groups": {id: group}, "savedAt": ISO-8601}

Field names are camelCase so plans written by the browser editor load
unchanged. Optional fields that are unset are omitted.
"""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple

from ..core.model import (
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

LOGGER = logging.getLogger(__name__)


def parse_time(value: str) -> datetime:
    """Parse an ISO-8601 timestamp, including the trailing "Z" form."""
    # JavaScript's toISOString() ends in "Z", which older fromisoformat rejects.
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    return datetime.fromisoformat(value)


def _drop_none(data: Dict[str, Any]) -> Dict[str, Any]:
    return {k: v for k, v in data.items() if v is not None}


def reservation_to_dict(reservation: Reservation) -> Dict[str, Any]:
    return _drop_none(
        {
            "id": reservation.id,
            "time": reservation.time.isoformat(),
            "customerName": reservation.customer_name,
            "partySize": reservation.party_size,
            "notes": reservation.notes,
            "status": reservation.status.value,
        }
    )


def reservation_from_dict(data: Mapping[str, Any]) -> Reservation:
    return Reservation(
        id=data["id"],
        time=parse_time(data["time"]),
        customer_name=data.get("customerName", ""),
        party_size=int(data.get("partySize", 0)),
        status=ReservationStatus(data.get("status", ReservationStatus.RESERVED.value)),
        notes=data.get("notes"),
    )


def shape_to_dict(shape: Shape) -> Dict[str, Any]:
    return _drop_none(
        {
            "id": shape.id,
            "floorId": shape.floor_id,
            "label": shape.label,
            "category": shape.category.value,
            "x": shape.x,
            "y": shape.y,
            "width": shape.width,
            "height": shape.height,
            "rotation": shape.rotation,
            "fill": shape.fill,
            "stroke": shape.stroke,
            "customPath": shape.custom_path,
            "groupId": shape.group_id,
            "tableId": shape.table_id,
            "reservation": reservation_to_dict(shape.reservation) if shape.reservation else None,
        }
    )


def shape_from_dict(data: Mapping[str, Any], floor_id: Optional[str] = None) -> Shape:
    """Build a Shape from its saved form.

    Args:
        data: The saved shape.
        floor_id: Owning floor, used when the record has no ``floorId``.

    Raises:
        KeyError: If a required field is missing.
        ValueError: If the category is unknown.
    """
    reservation = data.get("reservation")
    return Shape(
        id=data["id"],
        floor_id=data.get("floorId") or floor_id,
        category=ShapeCategory(data["category"]),
        x=float(data["x"]),
        y=float(data["y"]),
        width=float(data["width"]),
        height=float(data["height"]),
        rotation=float(data.get("rotation") or 0.0),
        label=data.get("label", ""),
        group_id=data.get("groupId"),
        table_id=data.get("tableId"),
        reservation=reservation_from_dict(reservation) if reservation else None,
        custom_path=data.get("customPath"),
        fill=data.get("fill"),
        stroke=data.get("stroke"),
    )


def floor_to_dict(floor: Floor) -> Dict[str, Any]:
    return {
        "id": floor.id,
        "name": floor.name,
        "x": floor.x,
        "y": floor.y,
        "width": floor.width,
        "height": floor.height,
        "zIndex": floor.z_index,
        "shapes": [shape_to_dict(s) for s in floor.shapes],
    }


def floor_from_dict(data: Mapping[str, Any]) -> Floor:
    floor_id = data["id"]
    return Floor(
        id=floor_id,
        name=data.get("name", floor_id),
        x=float(data.get("x", 0.0)),
        y=float(data.get("y", 0.0)),
        width=float(data["width"]),
        height=float(data["height"]),
        z_index=int(data.get("zIndex", 0)),
        # Shapes saved by older editors carry no floorId; they belong here.
        shapes=tuple(
            shape_from_dict({**s, "floorId": floor_id}) for s in data.get("shapes", [])
        ),
    )


def group_to_dict(group: Group) -> Dict[str, Any]:
    return _drop_none(
        {
            "id": group.id,
            "name": group.name,
            "floorId": group.floor_id,
            "shapeIds": list(group.shape_ids),
            "rotation": group.rotation,
            "center": {"x": group.center.x, "y": group.center.y},
            "width": group.width,
            "height": group.height,
        }
    )


def group_from_dict(data: Mapping[str, Any]) -> Group:
    center = data.get("center") or {"x": 0.0, "y": 0.0}
    return Group(
        id=data["id"],
        name=data.get("name", data["id"]),
        floor_id=data["floorId"],
        shape_ids=tuple(data.get("shapeIds", [])),
        center=Point(float(center["x"]), float(center["y"])),
        rotation=float(data.get("rotation") or 0.0),
        width=data.get("width"),
        height=data.get("height"),
    )


def selection_to_dict(element: SelectionElement) -> Dict[str, Any]:
    return {"id": element.id, "type": element.type.value, "floorId": element.floor_id}


def selection_from_dict(data: Mapping[str, Any]) -> SelectionElement:
    return SelectionElement(
        id=data["id"], type=ElementType(data["type"]), floor_id=data.get("floorId")
    )


def plan_to_dict(
    name: str,
    floors: Iterable[Floor],
    groups: Mapping[str, Group],
    saved_at: Optional[datetime] = None,
) -> Dict[str, Any]:
    """Convert plan state to its persisted record."""
    saved_at = saved_at or datetime.now(timezone.utc)
    return {
        "name": name,
        "floors": [floor_to_dict(f) for f in floors],
        "groups": {gid: group_to_dict(g) for gid, g in groups.items()},
        "savedAt": saved_at.isoformat(),
    }


def plan_from_dict(data: Mapping[str, Any]) -> Tuple[str, List[Floor], Dict[str, Group]]:
    """Rebuild plan state from its persisted record.

    Returns:
        Tuple of (name, floors, groups).
    """
    floors = [floor_from_dict(f) for f in data.get("floors", [])]
    groups = {gid: group_from_dict(g) for gid, g in (data.get("groups") or {}).items()}
    return data.get("name", ""), floors, groups


def save_plan(
    path: str,
    name: str,
    floors: Iterable[Floor],
    groups: Mapping[str, Group],
    saved_at: Optional[datetime] = None,
) -> None:
    """Write a plan to a JSON file, creating parent directories."""
    Path(path).parent.mkdir(parents=True, exist_ok=True)

    with open(path, "w", encoding="utf-8") as f:
        json.dump(plan_to_dict(name, floors, groups, saved_at), f, indent=2)
    LOGGER.debug("Saved plan %r to %s", name, path)


def load_plan(path: str) -> Tuple[str, List[Floor], Dict[str, Group]]:
    """Load a plan from a JSON file.

    Raises:
        FileNotFoundError: If the file does not exist.
        json.JSONDecodeError: If the file is not valid JSON.
    """
    with open(path, encoding="utf-8") as f:
        data = json.load(f)
    return plan_from_dict(data)

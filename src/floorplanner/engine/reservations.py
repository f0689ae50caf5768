"""Table reservations.

Reservations live on the ``reservation`` field of table shapes and are
written through ``ShapeStore.update_shape`` like any other shape change,
so they are captured by history snapshots.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from datetime import datetime
from typing import Any, List, Optional, Union

from .. import config
from ..core.model import Reservation, ReservationStatus, Shape, ShapeCategory
from ..io.plan import parse_time
from .store import ShapeStore, new_id

LOGGER = logging.getLogger(__name__)


def _as_datetime(value: Any) -> datetime:
    """Accept a datetime or an ISO-8601 string.

    Raises:
        TypeError: If ``value`` is neither.
        ValueError: If the string is not a valid timestamp.
    """
    if isinstance(value, datetime):
        return value
    if isinstance(value, str):
        return parse_time(value)
    raise TypeError(f"Reservation time must be a datetime or ISO-8601 string, got {type(value).__name__}")


class ReservationManager:
    def __init__(self, store: ShapeStore):
        self.store = store

    def _table(self, floor_id: str, table_id: str) -> Optional[Shape]:
        shape = self.store.get_shape(floor_id, table_id)
        if shape is None or shape.category != ShapeCategory.TABLE:
            return None
        return shape

    def chairs_for_table(self, floor_id: str, table_id: str) -> List[Shape]:
        """Chairs on the floor that reference the table."""
        return [
            shape
            for shape in self.store.shapes_on_floor(floor_id)
            if shape.category == ShapeCategory.CHAIR and shape.table_id == table_id
        ]

    def reserve_table(
        self,
        floor_id: str,
        table_id: str,
        party_size: Optional[int] = None,
        customer_name: str = config.DEFAULT_CUSTOMER_NAME,
        time: Optional[Union[datetime, str]] = None,
        notes: Optional[str] = None,
    ) -> Optional[Reservation]:
        """Attach a new reservation to a table.

        The party size defaults to the number of chairs at the table, or
        ``config.DEFAULT_PARTY_SIZE`` when it has none.

        Returns:
            The reservation, or None if the id is not a table on the floor.
        """
        table = self._table(floor_id, table_id)
        if table is None:
            return None

        reservation = Reservation(
            id=new_id("reservation"),
            time=_as_datetime(time) if time is not None else datetime.now(),
            customer_name=customer_name,
            party_size=party_size or len(self.chairs_for_table(floor_id, table_id)) or config.DEFAULT_PARTY_SIZE,
            status=ReservationStatus.RESERVED,
            notes=notes,
        )
        self.store.update_shape(floor_id, table_id, replace(table, reservation=reservation))
        LOGGER.debug("Reserved table %s for %d", table_id, reservation.party_size)
        return reservation

    def unreserve_table(self, floor_id: str, table_id: str) -> bool:
        table = self._table(floor_id, table_id)
        if table is None or table.reservation is None:
            return False
        return self.store.update_shape(floor_id, table_id, replace(table, reservation=None))

    def update_reservation(self, floor_id: str, table_id: str, **changes: Any) -> Optional[Reservation]:
        """Merge field changes into a table's existing reservation.

        Returns:
            The updated reservation, or None when the table has none.

        Raises:
            TypeError: If ``changes`` names a field Reservation does not have,
                or ``time`` is neither a datetime nor a string.
            ValueError: If ``status`` or ``time`` cannot be parsed.
        """
        table = self._table(floor_id, table_id)
        if table is None or table.reservation is None:
            return None

        if "status" in changes:
            changes["status"] = ReservationStatus(changes["status"])
        if "time" in changes:
            changes["time"] = _as_datetime(changes["time"])
        reservation = replace(table.reservation, **changes)
        self.store.update_shape(floor_id, table_id, replace(table, reservation=reservation))
        return reservation

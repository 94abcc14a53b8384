"""Owned state store for rooms and the security light."""

import logging

from homepanel.core.catalog import Catalog
from homepanel.core.entities import PanelStatus, RoomId, RoomState

logger = logging.getLogger(__name__)


class PanelState:
    """Holds every RoomState plus the security flag.

    One instance per panel. The access control and room state machine
    mutate it; everything else works on snapshots.
    """

    def __init__(self, catalog: Catalog):
        self.catalog = catalog
        self.security_on = False
        self._rooms: dict[RoomId, RoomState] = {
            room: RoomState(
                room=room,
                device_on={device: False for device in catalog.devices(room)},
            )
            for room in catalog.room_ids()
        }

    def room(self, room: RoomId | str) -> RoomState:
        """Live (mutable) state of a room. Core use only."""
        room_id = RoomId(room)
        if room_id not in self._rooms:
            raise ValueError(f"Room '{room_id.value}' is not in the catalog")
        return self._rooms[room_id]

    def rooms(self) -> list[RoomState]:
        return list(self._rooms.values())

    def snapshot(self, room: RoomId | str) -> RoomState:
        return self.room(room).model_copy(deep=True)

    def status(self) -> PanelStatus:
        return PanelStatus(
            rooms={r.room: r.model_copy(deep=True) for r in self._rooms.values()},
            security_on=self.security_on,
        )


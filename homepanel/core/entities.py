"""Core entities and common types for the home panel."""

from datetime import UTC, datetime
from enum import Enum

from pydantic import BaseModel, Field


class RoomId(str, Enum):
    SITTING = "sitting"
    DINING = "dining"
    STUDY = "study"
    HALLWAY = "hallway"
    KITCHEN = "kitchen"
    VERANDA = "veranda"


class DeviceKind(str, Enum):
    LIGHT = "light"
    FAN = "fan"
    AC = "ac"


SECURITY_LIGHT = "security_light"


class RoomState(BaseModel):
    """Mutable state of one room.

    ``device_on`` only ever holds the devices listed for the room in the
    catalog. A locked room never reports the main switch or a device as on.
    """

    room: RoomId
    unlocked: bool = False
    main_on: bool = False
    device_on: dict[DeviceKind, bool] = {}

    @property
    def any_device_on(self) -> bool:
        return any(self.device_on.values())

    def reset(self):
        """Switch the main and every device off."""
        self.main_on = False
        for device in self.device_on:
            self.device_on[device] = False


class EnergyReading(BaseModel):
    watts: int = 0
    percentage: int = 0


class PanelStatus(BaseModel):
    rooms: dict[RoomId, RoomState] = {}
    security_on: bool = False
    last_update: datetime = Field(default_factory=lambda: datetime.now(UTC))

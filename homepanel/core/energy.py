"""Energy accounting computed from the current panel state.

Readings are recomputed from scratch on every call; nothing is
accumulated, so toggles in any order can never drift from the actual
device states.
"""

import logging

import numpy as np

from homepanel.core.entities import SECURITY_LIGHT, EnergyReading, RoomId
from homepanel.core.state import PanelState

logger = logging.getLogger(__name__)


def percentage(watts: float, max_watts: float) -> int:
    """Scale watts against the display capacity, clamped to 0..100.

    Rounds half up, so 25W of 2000W shows as 1%.
    """
    if max_watts <= 0:
        raise ValueError("max_watts must be positive")
    pct = np.floor(100.0 * watts / max_watts + 0.5)
    return int(np.clip(pct, 0, 100))


class EnergyEngine:
    """Aggregates power per room and system-wide. Never mutates state."""

    def __init__(self, state: PanelState):
        self.state = state
        self.catalog = state.catalog

    def room_watts(self, room: RoomId | str) -> int:
        state = self.state.room(room)
        return sum(
            self.catalog.power(device)
            for device in self.catalog.devices(state.room)
            if state.device_on.get(device, False)
        )

    def system_watts(self) -> int:
        total = self.catalog.power(SECURITY_LIGHT) if self.state.security_on else 0
        total += sum(self.room_watts(r) for r in self.catalog.room_ids())
        return total

    def percentage(self, watts: float) -> int:
        return percentage(watts, self.catalog.energy_max_w)

    def room_reading(self, room: RoomId | str) -> EnergyReading:
        watts = self.room_watts(room)
        return EnergyReading(watts=watts, percentage=self.percentage(watts))

    def system_reading(self) -> EnergyReading:
        watts = self.system_watts()
        reading = EnergyReading(watts=watts, percentage=self.percentage(watts))
        logger.debug(f"System energy: {reading.watts}W ({reading.percentage}%)")
        return reading

"""Observer module for tracking system power over time.

Keeps a bounded history of system-wide readings for the dashboard. It
only records what the controller reports and never feeds back into the
panel state.
"""

import logging
from datetime import UTC, datetime
from typing import Any

import numpy as np

from homepanel.core.entities import EnergyReading, PanelStatus

logger = logging.getLogger(__name__)


class EnergyObserver:
    """Records system energy readings and summarizes them."""

    def __init__(self, max_history: int = 120):
        self._max_history = max_history
        self._power_history: list[tuple[datetime, int]] = []
        self.reading = EnergyReading()
        self.last_update: datetime | None = None

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def update_power(self, reading: EnergyReading, timestamp: datetime | None = None):
        """Record the latest system reading and track history."""
        ts = timestamp or datetime.now(UTC)
        self.reading = reading
        self.last_update = ts

        self._power_history.append((ts, reading.watts))
        # Keep history within limits
        if len(self._power_history) > self._max_history:
            self._power_history.pop(0)

    @property
    def history(self) -> list[tuple[datetime, int]]:
        return list(self._power_history)

    def get_summary(self, status: PanelStatus | None = None) -> dict[str, Any]:
        """Get summary for the dashboard.

        With a ``status`` the summary also counts unlocked rooms and
        devices that are on.
        """
        vals = np.array([w for _, w in self._power_history], dtype=float)
        summary: dict[str, Any] = {
            "power": self.reading.watts,
            "percentage": self.reading.percentage,
            "peak_power": int(vals.max()) if vals.size else 0,
            "mean_power": round(float(vals.mean()), 1) if vals.size else 0.0,
            "samples": int(vals.size),
            "last_update": self.last_update.isoformat() if self.last_update else None,
        }
        if status is not None:
            summary["unlocked_rooms"] = sum(1 for r in status.rooms.values() if r.unlocked)
            summary["devices_on"] = sum(
                sum(1 for on in r.device_on.values() if on) for r in status.rooms.values()
            )
            summary["security_on"] = status.security_on
        return summary

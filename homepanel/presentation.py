"""Presentation adapters that subscribe to a PanelController."""

import logging

from homepanel.core.entities import RoomId, RoomState

logger = logging.getLogger(__name__)


class LoggingListener:
    """Writes every panel notification to the ``homepanel.presentation`` log."""

    def __init__(self, level: int = logging.INFO):
        self.level = level

    def on_room_changed(self, room: RoomId, snapshot: RoomState) -> None:
        devices = ", ".join(
            f"{d.value}={'on' if on else 'off'}" for d, on in snapshot.device_on.items()
        )
        logger.log(
            self.level,
            f"[{room.value}] {'unlocked' if snapshot.unlocked else 'locked'}, "
            f"main={'on' if snapshot.main_on else 'off'}, {devices}",
        )

    def on_room_energy_changed(self, room: RoomId, watts: int, percentage: int) -> None:
        logger.log(self.level, f"[{room.value}] {watts}W ({percentage}%)")

    def on_system_energy_changed(self, watts: int, percentage: int) -> None:
        logger.log(self.level, f"System total {watts}W ({percentage}%)")

    def on_security_changed(self, on: bool) -> None:
        logger.log(self.level, f"Security light {'on' if on else 'off'}")

    def on_unlock_failed(self, room: RoomId) -> None:
        logger.warning(f"[{room.value}] Incorrect password.")

    def on_operation_blocked(self, room: RoomId, reason: str) -> None:
        logger.warning(f"[{room.value}] {reason}")

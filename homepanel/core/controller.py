"""Controller module: the single entry point that mutates the panel.

Every input runs to completion before returning: validate, mutate,
recompute energy, then notify listeners. Listeners only ever receive
snapshots.
"""

import logging
from typing import TYPE_CHECKING, Any, Protocol

from homepanel.core.access import AccessControl
from homepanel.core.actions import ActionResult, FailureKind
from homepanel.core.catalog import Catalog
from homepanel.core.energy import EnergyEngine
from homepanel.core.entities import DeviceKind, EnergyReading, PanelStatus, RoomId, RoomState
from homepanel.core.observer import EnergyObserver
from homepanel.core.rooms import RoomStateMachine
from homepanel.core.state import PanelState

if TYPE_CHECKING:
    from homepanel.config import PanelConfig

logger = logging.getLogger(__name__)

__all__ = ["ActionResult", "FailureKind", "PanelController", "PanelListener"]


class PanelListener(Protocol):
    """Presentation side of the panel. Listeners may implement any subset."""

    def on_room_changed(self, room: RoomId, snapshot: RoomState) -> None: ...

    def on_room_energy_changed(self, room: RoomId, watts: int, percentage: int) -> None: ...

    def on_system_energy_changed(self, watts: int, percentage: int) -> None: ...

    def on_security_changed(self, on: bool) -> None: ...

    def on_unlock_failed(self, room: RoomId) -> None: ...

    def on_operation_blocked(self, room: RoomId, reason: str) -> None: ...


class PanelController:
    """Owns the panel state and coordinates every transition."""

    MAX_HISTORY = 50

    def __init__(self, catalog: Catalog | None = None, history_size: int = 120):
        self.catalog = catalog or Catalog.default()
        self.state = PanelState(self.catalog)
        self.access = AccessControl(self.state)
        self.rooms = RoomStateMachine(self.state)
        self.energy = EnergyEngine(self.state)
        self.observer = EnergyObserver(max_history=history_size)

        self._listeners: list[PanelListener] = []
        self._action_history: list[ActionResult] = []

        # Statistics
        self.stats = {
            "unlocks": 0,
            "failed_unlocks": 0,
            "locks": 0,
            "transitions": 0,
            "blocked_operations": 0,
        }

    @classmethod
    def from_config(cls, config: "PanelConfig") -> "PanelController":
        return cls(Catalog.from_config(config), history_size=config.energy.history_size)

    # --- Listeners ---

    def subscribe(self, listener: PanelListener):
        if listener not in self._listeners:
            self._listeners.append(listener)

    def unsubscribe(self, listener: PanelListener):
        if listener in self._listeners:
            self._listeners.remove(listener)

    # --- Inputs ---

    def start(self) -> ActionResult:
        """Lock every room and publish the initial state."""
        return self.lock_all()

    def unlock(self, room: RoomId | str, password: str) -> ActionResult:
        return self._handle(self.access.unlock(room, password))

    def lock(self, room: RoomId | str) -> ActionResult:
        return self._handle(self.access.lock(room))

    def lock_all(self) -> ActionResult:
        return self._handle(self.access.lock_all())

    def set_main(self, room: RoomId | str, on: bool) -> ActionResult:
        return self._handle(self.rooms.set_main(room, on))

    def set_device(self, room: RoomId | str, device: DeviceKind | str, on: bool) -> ActionResult:
        return self._handle(self.rooms.set_device(room, device, on))

    def quick_toggle_light(self, room: RoomId | str) -> ActionResult:
        return self._handle(self.rooms.quick_toggle_light(room), notice=False)

    def set_security(self, on: bool) -> ActionResult:
        """Security light: no lock dependency, only feeds system energy."""
        self.state.security_on = bool(on)
        logger.info(f"Security light {'ON' if on else 'OFF'}")
        result = ActionResult.ok("set_security", None, [])
        self._record(result)
        self._notify("on_security_changed", self.state.security_on)
        self._publish_system_energy()
        return result

    def toggle_security(self) -> ActionResult:
        return self.set_security(not self.state.security_on)

    # --- Queries ---

    def snapshot(self, room: RoomId | str) -> RoomState:
        return self.state.snapshot(room)

    def status(self) -> PanelStatus:
        return self.state.status()

    def room_reading(self, room: RoomId | str) -> EnergyReading:
        return self.energy.room_reading(room)

    def system_reading(self) -> EnergyReading:
        return self.energy.system_reading()

    def get_dashboard_data(self) -> dict[str, Any]:
        last = self._action_history[-1] if self._action_history else None
        return {
            "stats": dict(self.stats),
            "last_action": last.action if last else None,
            "last_action_time": last.timestamp.isoformat() if last else None,
            "history": [
                {
                    "action": a.action,
                    "room": a.room.value if a.room else None,
                    "success": a.success,
                    "failure": a.failure.value if a.failure else None,
                    "message": a.message,
                    "time": a.timestamp.isoformat(),
                }
                for a in self._action_history[-5:]
            ],
            "energy": self.observer.get_summary(self.status()),
        }

    # --- Internals ---

    def _handle(self, result: ActionResult, notice: bool = True) -> ActionResult:
        self._record(result)

        if result.success:
            for room in result.affected_rooms:
                self._publish_room(room)
            self._publish_system_energy()
            return result

        if result.failure is FailureKind.AUTHENTICATION:
            self._notify("on_unlock_failed", result.room)
            return result

        if notice:
            self._notify("on_operation_blocked", result.room, result.message)
        # Let the presentation revert whatever control triggered the attempt
        self._notify("on_room_changed", result.room, self.state.snapshot(result.room))
        return result

    def _publish_room(self, room: RoomId):
        self._notify("on_room_changed", room, self.state.snapshot(room))
        reading = self.energy.room_reading(room)
        self._notify("on_room_energy_changed", room, reading.watts, reading.percentage)

    def _publish_system_energy(self):
        reading = self.energy.system_reading()
        self.observer.update_power(reading)
        self._notify("on_system_energy_changed", reading.watts, reading.percentage)

    def _record(self, result: ActionResult):
        self._action_history.append(result)
        if len(self._action_history) > self.MAX_HISTORY:
            self._action_history.pop(0)

        if result.success:
            if result.action == "unlock":
                self.stats["unlocks"] += 1
            elif result.action in ("lock", "lock_all"):
                self.stats["locks"] += 1
            else:
                self.stats["transitions"] += 1
        elif result.failure is FailureKind.AUTHENTICATION:
            self.stats["failed_unlocks"] += 1
        else:
            self.stats["blocked_operations"] += 1

    def _notify(self, event: str, *args):
        for listener in list(self._listeners):
            handler = getattr(listener, event, None)
            if handler is None:
                continue
            try:
                handler(*args)
            except Exception as e:
                logger.error(f"Listener {type(listener).__name__}.{event} failed: {e}")

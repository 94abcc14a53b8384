"""Room state machine: main switch, device toggles and the light shortcut."""

import logging

from homepanel.core.actions import (
    MSG_DEVICE_UNAVAILABLE,
    MSG_DEVICES_LOCKED,
    MSG_MAIN_INTERLOCK,
    MSG_MAIN_LOCKED,
    MSG_QUICK_TOGGLE_UNAVAILABLE,
    ActionResult,
    FailureKind,
)
from homepanel.core.entities import DeviceKind, RoomId
from homepanel.core.state import PanelState

logger = logging.getLogger(__name__)


class RoomStateMachine:
    """Applies device and main-switch transitions to unlocked rooms.

    Coupling between the main switch and the devices is one-way:

    * ``set_main`` is a macro that switches every device of the room.
    * ``set_device`` never touches ``main_on``.
    * ``quick_toggle_light`` flips the light and then derives ``main_on``
      from the devices. It is the only path that does so and must stay
      separate from ``set_device``.
    """

    def __init__(self, state: PanelState):
        self.state = state
        self.catalog = state.catalog

    def set_main(self, room: RoomId | str, requested_on: bool) -> ActionResult:
        state = self.state.room(room)
        room_id = state.room

        if not state.unlocked:
            logger.warning(f"Main switch blocked in {room_id.value}: room locked")
            return ActionResult.rejected(
                "set_main", room_id, FailureKind.PRECONDITION, MSG_MAIN_LOCKED
            )

        if not requested_on:
            state.reset()
            logger.info(f"Main OFF in {room_id.value}")
            return ActionResult.ok("set_main", room_id, [room_id])

        # Interlock: main may only come on while nothing is on
        if state.any_device_on:
            logger.warning(f"Main switch blocked in {room_id.value}: appliance already on")
            return ActionResult.rejected(
                "set_main", room_id, FailureKind.INTERLOCK, MSG_MAIN_INTERLOCK
            )

        state.main_on = True
        for device in self.catalog.devices(room_id):
            state.device_on[device] = True
        logger.info(f"Main ON in {room_id.value}")
        return ActionResult.ok("set_main", room_id, [room_id])

    def set_device(
        self, room: RoomId | str, device: DeviceKind | str, requested_on: bool
    ) -> ActionResult:
        state = self.state.room(room)
        room_id = state.room
        kind = DeviceKind(device)

        if not state.unlocked:
            logger.warning(f"Device change blocked in {room_id.value}: room locked")
            return ActionResult.rejected(
                "set_device", room_id, FailureKind.PRECONDITION, MSG_DEVICES_LOCKED
            )

        if not self.catalog.supports(room_id, kind):
            logger.warning(f"Device {kind.value} is not available in {room_id.value}")
            return ActionResult.rejected(
                "set_device", room_id, FailureKind.PRECONDITION, MSG_DEVICE_UNAVAILABLE
            )

        # main_on is deliberately left alone here
        state.device_on[kind] = bool(requested_on)
        logger.info(f"{kind.value} {'ON' if requested_on else 'OFF'} in {room_id.value}")
        return ActionResult.ok("set_device", room_id, [room_id])

    def quick_toggle_light(self, room: RoomId | str) -> ActionResult:
        """Flip the light and recompute main as "any device on"."""
        state = self.state.room(room)
        room_id = state.room

        if not state.unlocked or not self.catalog.supports(room_id, DeviceKind.LIGHT):
            logger.debug(f"Quick toggle ignored in {room_id.value}")
            return ActionResult.rejected(
                "quick_toggle_light",
                room_id,
                FailureKind.PRECONDITION,
                MSG_QUICK_TOGGLE_UNAVAILABLE,
            )

        state.device_on[DeviceKind.LIGHT] = not state.device_on[DeviceKind.LIGHT]
        # Unlike set_device, the shortcut reflects the devices into main
        state.main_on = state.any_device_on
        logger.info(
            f"Quick toggle in {room_id.value}: light "
            f"{'ON' if state.device_on[DeviceKind.LIGHT] else 'OFF'}, main {state.main_on}"
        )
        return ActionResult.ok("quick_toggle_light", room_id, [room_id])

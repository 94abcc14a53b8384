"""Access control: per-room unlock, master override and locking."""

import logging
from enum import Enum

from homepanel.core.actions import MSG_INCORRECT_PASSWORD, ActionResult, FailureKind
from homepanel.core.entities import RoomId
from homepanel.core.state import PanelState

logger = logging.getLogger(__name__)


class Scope(str, Enum):
    """What a credential unlocks."""

    MASTER = "master"
    ROOM = "room"
    NONE = "none"


class AccessControl:
    """Unlocks and locks rooms in a PanelState.

    Credentials are plain configuration values compared as-is (after
    trimming surrounding whitespace); there is no retry limit.
    """

    def __init__(self, state: PanelState):
        self.state = state
        self.catalog = state.catalog

    def verify(self, room: RoomId | str, attempt: str) -> Scope:
        room_id = RoomId(room)
        attempt = (attempt or "").strip()
        if attempt == self.catalog.master_password:
            return Scope.MASTER
        if attempt == self.catalog.passwords.get(room_id):
            return Scope.ROOM
        return Scope.NONE

    def unlock(self, room: RoomId | str, attempt: str) -> ActionResult:
        """Unlock one room, or every room with the master credential.

        Main and device values are left untouched; since locking always
        resets them, an unlocked room starts from all-off.
        """
        room_id = self.state.room(room).room
        scope = self.verify(room_id, attempt)

        if scope is Scope.MASTER:
            affected = self.catalog.room_ids()
            for r in affected:
                self.state.room(r).unlocked = True
            logger.info(f"Master credential used from {room_id.value}: all rooms unlocked")
            return ActionResult.ok("unlock", room_id, affected, "All rooms unlocked.")

        if scope is Scope.ROOM:
            self.state.room(room_id).unlocked = True
            logger.info(f"Room {room_id.value} unlocked")
            return ActionResult.ok("unlock", room_id, [room_id], "Room unlocked.")

        logger.warning(f"Incorrect password for room {room_id.value}")
        return ActionResult.rejected(
            "unlock", room_id, FailureKind.AUTHENTICATION, MSG_INCORRECT_PASSWORD
        )

    def lock(self, room: RoomId | str) -> ActionResult:
        """Lock a room unconditionally, switching everything in it off."""
        state = self.state.room(room)
        state.unlocked = False
        state.reset()
        logger.info(f"Room {state.room.value} locked")
        return ActionResult.ok("lock", state.room, [state.room], "Room locked.")

    def lock_all(self) -> ActionResult:
        affected = self.catalog.room_ids()
        for r in affected:
            self.lock(r)
        return ActionResult.ok("lock_all", None, affected, "All rooms locked.")

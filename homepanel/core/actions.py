"""Outcome types shared by the access control and room state machine."""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import Enum

from homepanel.core.entities import RoomId


class FailureKind(str, Enum):
    """Why an operation was rejected. Every kind is recoverable."""

    AUTHENTICATION = "authentication"
    PRECONDITION = "precondition"
    INTERLOCK = "interlock"


# User-facing notices
MSG_INCORRECT_PASSWORD = "Incorrect password."
MSG_MAIN_LOCKED = "Room locked. Unlock to use main switch."
MSG_MAIN_INTERLOCK = "Cannot turn main ON: some appliance already ON."
MSG_DEVICES_LOCKED = "Room locked. Unlock to change devices."
MSG_DEVICE_UNAVAILABLE = "Device not available in this room."
MSG_QUICK_TOGGLE_UNAVAILABLE = "Quick toggle needs an unlocked room with a light."


@dataclass
class ActionResult:
    """Result of a panel operation.

    A failed result guarantees the state is exactly as it was before the
    attempt.
    """

    success: bool
    action: str
    room: RoomId | None = None
    failure: FailureKind | None = None
    message: str = ""
    affected_rooms: list[RoomId] = field(default_factory=list)
    timestamp: datetime = field(default_factory=lambda: datetime.now(UTC))

    @classmethod
    def ok(cls, action: str, room: RoomId | None, affected: list[RoomId], message: str = ""):
        return cls(True, action, room, None, message, affected)

    @classmethod
    def rejected(cls, action: str, room: RoomId | None, failure: FailureKind, message: str):
        return cls(False, action, room, failure, message)

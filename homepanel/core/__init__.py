"""Core modules for the home panel."""

from homepanel.core.controller import ActionResult, FailureKind, PanelController
from homepanel.core.entities import DeviceKind, PanelStatus, RoomId, RoomState

__all__ = [
    "RoomId",
    "DeviceKind",
    "RoomState",
    "PanelStatus",
    "PanelController",
    "ActionResult",
    "FailureKind",
]

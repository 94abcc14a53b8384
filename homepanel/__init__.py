"""Home panel: room locking, device control and energy accounting."""

from homepanel.config import PanelConfig
from homepanel.core import (
    ActionResult,
    DeviceKind,
    FailureKind,
    PanelController,
    PanelStatus,
    RoomId,
    RoomState,
)
from homepanel.core.catalog import Catalog
from homepanel.presentation import LoggingListener

__all__ = [
    "PanelConfig",
    "Catalog",
    "PanelController",
    "ActionResult",
    "FailureKind",
    "RoomId",
    "DeviceKind",
    "RoomState",
    "PanelStatus",
    "LoggingListener",
]

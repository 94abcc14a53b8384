"""Static room catalog: rooms, devices, power ratings and credentials."""

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING, Any

from homepanel.core.entities import SECURITY_LIGHT, DeviceKind, RoomId

if TYPE_CHECKING:
    from homepanel.config import PanelConfig

DEFAULT_ROOMS: dict[RoomId, dict[str, Any]] = {
    RoomId.SITTING: {"title": "Sitting Room", "devices": ["light", "fan", "ac"]},
    RoomId.DINING: {"title": "Dining Room", "devices": ["light", "fan", "ac"]},
    RoomId.STUDY: {"title": "Study", "devices": ["light", "fan", "ac"]},
    RoomId.HALLWAY: {"title": "Hallway", "devices": ["light"]},
    RoomId.KITCHEN: {"title": "Kitchen", "devices": ["light"]},
    RoomId.VERANDA: {"title": "Veranda", "devices": ["light"]},
}

# Demo credentials, not a security boundary
DEFAULT_PASSWORDS: dict[RoomId, str] = {
    RoomId.SITTING: "sit2025",
    RoomId.DINING: "din2025",
    RoomId.STUDY: "std2025",
    RoomId.HALLWAY: "hal2025",
    RoomId.KITCHEN: "kit2025",
    RoomId.VERANDA: "ver2025",
}
MASTER_PASSWORD = "smart"

# Watts
POWER: dict[str, int] = {
    DeviceKind.LIGHT.value: 20,
    DeviceKind.FAN.value: 60,
    DeviceKind.AC.value: 1200,
    SECURITY_LIGHT: 40,
}

# Display scaling only, never enforced
ENERGY_MAX_W = 2000


@dataclass(frozen=True)
class RoomCatalogEntry:
    """A room's title and its ordered, duplicate-free device list."""

    title: str
    devices: tuple[DeviceKind, ...]


@dataclass(frozen=True)
class Catalog:
    """Immutable description of the rooms the panel controls."""

    rooms: Mapping[RoomId, RoomCatalogEntry]
    passwords: Mapping[RoomId, str]
    master_password: str = MASTER_PASSWORD
    power_table: Mapping[str, int] = field(default_factory=lambda: MappingProxyType(dict(POWER)))
    energy_max_w: int = ENERGY_MAX_W

    @classmethod
    def default(cls) -> "Catalog":
        rooms = {
            room: RoomCatalogEntry(
                title=entry["title"],
                devices=tuple(DeviceKind(d) for d in entry["devices"]),
            )
            for room, entry in DEFAULT_ROOMS.items()
        }
        return cls(
            rooms=MappingProxyType(rooms),
            passwords=MappingProxyType(dict(DEFAULT_PASSWORDS)),
        )

    @classmethod
    def from_config(cls, config: "PanelConfig") -> "Catalog":
        """Build the catalog from a validated ``PanelConfig``."""
        rooms = {
            room: RoomCatalogEntry(title=entry.title, devices=tuple(entry.devices))
            for room, entry in config.rooms.items()
        }
        power = {
            DeviceKind.LIGHT.value: config.power.light,
            DeviceKind.FAN.value: config.power.fan,
            DeviceKind.AC.value: config.power.ac,
            SECURITY_LIGHT: config.power.security_light,
        }
        return cls(
            rooms=MappingProxyType(rooms),
            passwords=MappingProxyType({room: e.password for room, e in config.rooms.items()}),
            master_password=config.master_password,
            power_table=MappingProxyType(power),
            energy_max_w=config.energy.max_watts,
        )

    def room_ids(self) -> list[RoomId]:
        return list(self.rooms)

    def devices(self, room: RoomId) -> tuple[DeviceKind, ...]:
        return self.rooms[room].devices

    def title(self, room: RoomId) -> str:
        return self.rooms[room].title

    def supports(self, room: RoomId, device: DeviceKind) -> bool:
        return device in self.rooms[room].devices

    def power(self, kind: DeviceKind | str) -> int:
        key = kind.value if isinstance(kind, DeviceKind) else kind
        return self.power_table[key]

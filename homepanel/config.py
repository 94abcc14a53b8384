"""Configuration management for the home panel."""

from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, PositiveInt, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from homepanel.core.catalog import (
    DEFAULT_PASSWORDS,
    DEFAULT_ROOMS,
    ENERGY_MAX_W,
    MASTER_PASSWORD,
    POWER,
)
from homepanel.core.entities import DeviceKind, RoomId


class RoomConfig(BaseModel):
    """Configuration for a single room."""

    title: str
    devices: list[DeviceKind] = Field(default_factory=list)
    password: str

    @field_validator("devices")
    @classmethod
    def dedupe_devices(cls, value: list[DeviceKind]) -> list[DeviceKind]:
        # Ordered set: keep the first occurrence
        return list(dict.fromkeys(value))

    @field_validator("password")
    @classmethod
    def password_not_empty(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("room password must not be empty")
        return value


def _default_rooms() -> dict[RoomId, RoomConfig]:
    return {
        room: RoomConfig(
            title=entry["title"],
            devices=entry["devices"],
            password=DEFAULT_PASSWORDS[room],
        )
        for room, entry in DEFAULT_ROOMS.items()
    }


class PowerConfig(BaseModel):
    """Power ratings in watts."""

    light: PositiveInt = POWER["light"]
    fan: PositiveInt = POWER["fan"]
    ac: PositiveInt = POWER["ac"]
    security_light: PositiveInt = POWER["security_light"]


class EnergyConfig(BaseModel):
    """Energy bar scaling."""

    max_watts: PositiveInt = ENERGY_MAX_W
    history_size: PositiveInt = 120


class PanelConfig(BaseSettings):
    """Main configuration for the home panel."""

    model_config = SettingsConfigDict(
        env_prefix="HOMEPANEL_",
        env_nested_delimiter="__",
        env_file=".env",
        extra="ignore",
    )

    rooms: dict[RoomId, RoomConfig] = Field(default_factory=_default_rooms)
    master_password: str = MASTER_PASSWORD

    # Sub-configs
    power: PowerConfig = Field(default_factory=PowerConfig)
    energy: EnergyConfig = Field(default_factory=EnergyConfig)

    @field_validator("rooms", mode="before")
    @classmethod
    def merge_room_defaults(cls, value: Any) -> Any:
        """Overlay configured rooms onto the default catalog, field by field.

        Rooms that are not mentioned keep their defaults, so a single
        ``HOMEPANEL_ROOMS__STUDY__PASSWORD`` only changes that password.
        """
        if not isinstance(value, dict):
            return value
        merged: dict[Any, Any] = {
            room.value: entry.model_dump() for room, entry in _default_rooms().items()
        }
        for key, override in value.items():
            room = RoomId(key.value if isinstance(key, RoomId) else str(key).lower())
            if isinstance(override, RoomConfig):
                override = override.model_dump()
            if isinstance(override, dict):
                merged[room.value] = {**merged[room.value], **override}
            else:
                merged[room.value] = override
        return merged

    @classmethod
    def from_yaml(cls, path: Path) -> "PanelConfig":
        """Load configuration from YAML file."""
        import yaml

        with open(path) as f:
            data = yaml.safe_load(f) or {}
        return cls(**data)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for internal use."""
        return self.model_dump()

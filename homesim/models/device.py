"""Pydantic models and enums for device state, events and configuration.

States and events form closed vocabularies shared by every device type. A
device type only reacts to the subset its transition table registers.
"""

from enum import Enum
from typing import Protocol

from pydantic import BaseModel, ConfigDict, Field


class DeviceState(str, Enum):
    OFF = "off"
    ON = "on"
    STANDBY = "standby"
    ERROR = "error"
    MAINTENANCE = "maintenance"
    LOW_POWER = "low_power"
    STARTING = "starting"
    STOPPING = "stopping"
    ACTIVE = "active"
    SUSPENDED = "suspended"
    LOCKED = "locked"


class DeviceEvent(str, Enum):
    POWER_ON = "power_on"
    POWER_OFF = "power_off"
    ENTER_STANDBY = "enter_standby"
    EXIT_STANDBY = "exit_standby"
    ERROR_DETECTED = "error_detected"
    ERROR_RESOLVED = "error_resolved"
    START_MAINTENANCE = "start_maintenance"
    END_MAINTENANCE = "end_maintenance"
    ENTER_LOW_POWER = "enter_low_power"
    EXIT_LOW_POWER = "exit_low_power"
    ACTIVATE = "activate"
    DEACTIVATE = "deactivate"
    LOCK = "lock"
    UNLOCK = "unlock"
    USER_INTERACTION = "user_interaction"
    SCHEDULED_EVENT = "scheduled_event"
    TEMPERATURE_CHANGE = "temperature_change"
    MOTION_DETECTED = "motion_detected"
    DOOR_OPEN = "door_open"
    DOOR_CLOSE = "door_close"
    NETWORK_CONNECTED = "network_connected"
    NETWORK_DISCONNECTED = "network_disconnected"


class DeviceType(str, Enum):
    THERMOSTAT = "thermostat"
    LIGHT = "light"
    SECURITY_SYSTEM = "security_system"
    DOOR = "door"
    WINDOW = "window"
    AIR_CONDITIONER = "air_conditioner"
    TELEVISION = "television"
    COFFEE_MACHINE = "coffee_machine"
    REFRIGERATOR = "refrigerator"
    WASHING_MACHINE = "washing_machine"
    SPEAKER = "speaker"


class ThermostatMode(str, Enum):
    HEAT = "heat"
    COOL = "cool"
    AUTO = "auto"
    FAN_ONLY = "fan_only"
    OFF = "off"


# Capability tags understood by LightDevice
CAPABILITY_DIMMABLE = "dimmable"
CAPABILITY_COLOR = "color"


class RGBColor(BaseModel):
    """An 8-bit RGB color."""

    model_config = ConfigDict(frozen=True)

    r: int = Field(default=255, ge=0, le=255)
    g: int = Field(default=255, ge=0, le=255)
    b: int = Field(default=255, ge=0, le=255)

    @property
    def hex(self) -> str:
        return f"#{self.r:02x}{self.g:02x}{self.b:02x}"


NAMED_COLORS: dict[str, RGBColor] = {
    "white": RGBColor(r=255, g=255, b=255),
    "red": RGBColor(r=255, g=0, b=0),
    "green": RGBColor(r=0, g=255, b=0),
    "blue": RGBColor(r=0, g=0, b=255),
    "warm_white": RGBColor(r=255, g=224, b=189),
}


class EnergyProfile(BaseModel):
    """Energy figures in kWh.

    ``idle_kwh`` is the standby baseline of an active device, ``active_kwh``
    the consumption at full output.
    """
    idle_kwh: float = Field(default=0.0, ge=0.0)
    active_kwh: float = Field(default=0.0, ge=0.0)


class DeviceConfig(BaseModel):
    """Configuration for a device, built in code or loaded from YAML."""
    id: str
    type: DeviceType
    display_name: str
    capabilities: list[str] = []
    energy_profile: EnergyProfile | None = None


class DeviceSnapshot(BaseModel):
    """Observable state of a device at one point in time."""
    device_id: str
    device_type: DeviceType
    display_name: str
    state: DeviceState
    is_on: bool
    energy_consumption: float
    properties: dict[str, float | int | str | bool] = {}

    def to_dict(self) -> dict:
        return self.model_dump(mode="json")


class Device(Protocol):
    """Capabilities the scheduler and driving loop rely on."""

    device_id: str
    device_type: DeviceType
    display_name: str

    @property
    def is_on(self) -> bool: ...

    @property
    def current_state(self) -> DeviceState: ...

    def process_event(self, event: DeviceEvent) -> bool: ...

    def calculate_energy_consumption(self) -> float: ...

    def get_status_report(self) -> str: ...

    def tick(self) -> None: ...

    def snapshot(self) -> DeviceSnapshot: ...

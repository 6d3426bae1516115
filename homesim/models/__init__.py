from homesim.models.device import (
    Device,
    DeviceConfig,
    DeviceEvent,
    DeviceSnapshot,
    DeviceState,
    DeviceType,
    EnergyProfile,
    RGBColor,
    ThermostatMode,
)
from homesim.models.events import (
    DispatchOutcome,
    DispatchRecord,
    ScheduledEvent,
    SimulationReport,
)

__all__ = [
    "Device",
    "DeviceConfig",
    "DeviceEvent",
    "DeviceSnapshot",
    "DeviceState",
    "DeviceType",
    "DispatchOutcome",
    "DispatchRecord",
    "EnergyProfile",
    "RGBColor",
    "ScheduledEvent",
    "SimulationReport",
    "ThermostatMode",
]

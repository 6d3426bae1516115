"""Device factory: maps device types to their simulator classes."""

import logging

from homesim.devices.base import BaseDevice
from homesim.devices.light import LightDevice
from homesim.devices.thermostat import ThermostatDevice
from homesim.exceptions import ScenarioConfigError
from homesim.models.device import (
    CAPABILITY_COLOR,
    CAPABILITY_DIMMABLE,
    DeviceConfig,
    DeviceType,
)

logger = logging.getLogger(__name__)

# Map device type to class
DEVICE_CLASS_MAP: dict[DeviceType, type[BaseDevice]] = {
    DeviceType.LIGHT: LightDevice,
    DeviceType.THERMOSTAT: ThermostatDevice,
}


def create_device(config: DeviceConfig) -> BaseDevice:
    """Instantiate the simulator class registered for ``config.type``."""
    device_cls = DEVICE_CLASS_MAP.get(config.type)
    if not device_cls:
        raise ScenarioConfigError(
            f"Unsupported device type: {config.type.value}",
            {"device_id": config.id},
        )

    device = device_cls(config)
    logger.debug(f"Created device: {device.device_id} ({device.device_type.value})")
    return device


def make_light(
    device_id: str,
    display_name: str,
    *,
    dimmable: bool = False,
    color_changeable: bool = False,
) -> LightDevice:
    capabilities = []
    if dimmable:
        capabilities.append(CAPABILITY_DIMMABLE)
    if color_changeable:
        capabilities.append(CAPABILITY_COLOR)
    return LightDevice(
        DeviceConfig(
            id=device_id,
            type=DeviceType.LIGHT,
            display_name=display_name,
            capabilities=capabilities,
        )
    )


def make_thermostat(device_id: str, display_name: str) -> ThermostatDevice:
    return ThermostatDevice(
        DeviceConfig(id=device_id, type=DeviceType.THERMOSTAT, display_name=display_name)
    )

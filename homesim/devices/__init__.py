from homesim.devices.base import BaseDevice
from homesim.devices.light import LightDevice
from homesim.devices.registry import create_device, make_light, make_thermostat
from homesim.devices.thermostat import ThermostatDevice

__all__ = [
    "BaseDevice",
    "LightDevice",
    "ThermostatDevice",
    "create_device",
    "make_light",
    "make_thermostat",
]

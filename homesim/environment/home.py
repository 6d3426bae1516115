"""Home environment model: indoor/outdoor conditions and simulated time.

Treated by the simulator as a collaborator. It reads a device's type, power
flag and the ``targetTemperature`` setting, and never calls back into devices.
"""

import logging
import math
import random
from datetime import datetime
from typing import Any

from config import settings
from homesim.models.device import Device, DeviceType
from homesim.simulation.clock import SimulationClock

logger = logging.getLogger(__name__)

TARGET_TEMPERATURE_KEY = "targetTemperature"


class HomeEnvironment:
    """Simulated conditions inside and outside the house."""

    DEFAULT_TARGET_TEMPERATURE = 22.0

    def __init__(
        self,
        clock: SimulationClock | None = None,
        rng: random.Random | None = None,
    ):
        self.clock = clock or SimulationClock.at(settings.simulation_start)
        self._rng = rng or random.Random(settings.weather_seed)

        self.inside_temperature: float = 22.0  # Celsius
        self.outside_temperature: float = 15.0
        self.humidity: float = 50.0  # %
        self.light_level: float = 0.7  # 0.0 dark - 1.0 very bright
        self.is_daylight: bool = True
        self.is_raining: bool = False
        self.is_occupied: bool = True
        self._data: dict[str, Any] = {}
        self._update_daylight()

    @property
    def current_time(self) -> datetime:
        return self.clock.now()

    def advance_time(self, minutes: int) -> datetime:
        """Advance the clock and update time-dependent conditions."""
        now = self.clock.advance(minutes)
        self._update_daylight()

        if self._rng.random() < 0.01:
            self.is_raining = not self.is_raining
            logger.debug(f"Weather changed: {'raining' if self.is_raining else 'clear'}")

        self.outside_temperature += (self._rng.random() - 0.5) * 0.2
        self.inside_temperature += (self.outside_temperature - self.inside_temperature) * 0.02
        return now

    def _update_daylight(self) -> None:
        hour = self.clock.now().hour
        self.is_daylight = 6 <= hour < 20

        if not self.is_daylight:
            self.light_level = 0.1
        elif hour < 8:
            self.light_level = 0.3 + (hour - 6) * 0.1
        elif hour < 18:
            self.light_level = 0.7 + math.sin((hour - 8) * math.pi / 10) * 0.3
        else:
            self.light_level = 0.7 - (hour - 18) * 0.2

    def update_from_device(self, device: Device) -> None:
        """Apply the effect of a device's current state on the environment."""
        match device.device_type:
            case DeviceType.THERMOSTAT:
                effect = 0.1 if device.is_on else 0.0
                target = float(
                    self._data.get(TARGET_TEMPERATURE_KEY, self.DEFAULT_TARGET_TEMPERATURE)
                )
                self.inside_temperature = (
                    self.inside_temperature * (1 - effect) + target * effect
                )
            case DeviceType.AIR_CONDITIONER:
                if device.is_on:
                    target = float(
                        self._data.get(TARGET_TEMPERATURE_KEY, self.DEFAULT_TARGET_TEMPERATURE)
                    )
                    self.inside_temperature = self.inside_temperature * 0.9 + target * 0.1
                    self.humidity = self.humidity * 0.9 + 45.0 * 0.1
            case DeviceType.LIGHT:
                if device.is_on:
                    self.light_level = min(1.0, self.light_level + 0.2)
            case _:
                pass

    def set_environmental_data(self, key: str, value: Any) -> None:
        self._data[key] = value

    def get_environmental_data(self, key: str, default: Any = None) -> Any:
        return self._data.get(key, default)

    def get_environment_report(self) -> str:
        return (
            f"Environment Status at {self.current_time.isoformat(timespec='minutes')}\n"
            f"-------------------------\n"
            f"Indoor Temperature: {self.inside_temperature:.1f}°C\n"
            f"Outdoor Temperature: {self.outside_temperature:.1f}°C\n"
            f"Humidity: {self.humidity:.1f}%\n"
            f"Light Level: {self.light_level:.2f}\n"
            f"Time of Day: {'Day' if self.is_daylight else 'Night'}\n"
            f"Weather: {'Raining' if self.is_raining else 'Clear'}\n"
            f"Occupied: {'Yes' if self.is_occupied else 'No'}"
        )

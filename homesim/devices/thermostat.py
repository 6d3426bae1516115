"""Thermostat device simulator."""

import logging
from typing import Any

from homesim.devices.base import BaseDevice
from homesim.models.device import (
    DeviceEvent,
    DeviceState,
    DeviceType,
    EnergyProfile,
    ThermostatMode,
)

logger = logging.getLogger(__name__)


class ThermostatDevice(BaseDevice):
    """Simulated thermostat with a startup/shutdown cycle and operating modes.

    Powering on goes OFF -> STARTING and needs an ACTIVATE to reach ON;
    powering off goes ON -> STOPPING and needs a DEACTIVATE to reach OFF.
    """

    DEVICE_TYPE = DeviceType.THERMOSTAT
    TRANSITIONS = (
        (DeviceState.OFF, DeviceEvent.POWER_ON, DeviceState.STARTING),
        (DeviceState.STARTING, DeviceEvent.ACTIVATE, DeviceState.ON),
        (DeviceState.ON, DeviceEvent.POWER_OFF, DeviceState.STOPPING),
        (DeviceState.STOPPING, DeviceEvent.DEACTIVATE, DeviceState.OFF),
        (DeviceState.ON, DeviceEvent.ENTER_STANDBY, DeviceState.STANDBY),
        (DeviceState.STANDBY, DeviceEvent.EXIT_STANDBY, DeviceState.ON),
        (DeviceState.ON, DeviceEvent.ERROR_DETECTED, DeviceState.ERROR),
        (DeviceState.ERROR, DeviceEvent.ERROR_RESOLVED, DeviceState.ON),
        (DeviceState.ON, DeviceEvent.ENTER_LOW_POWER, DeviceState.LOW_POWER),
        (DeviceState.LOW_POWER, DeviceEvent.EXIT_LOW_POWER, DeviceState.ON),
    )
    DEFAULT_ENERGY_PROFILE = EnergyProfile(idle_kwh=0.1)

    DEFAULT_TEMPERATURE = 22.0  # Celsius
    AMBIENT_TEMPERATURE = 20.0
    MAX_STEP = 0.5  # degrees per tick
    AUTO_DEADBAND = 0.5

    HEAT_RATE = 0.2
    COOL_RATE = 0.3
    AUTO_RATE = 0.25
    FAN_ONLY_KWH = 0.1

    def __init__(self, config):
        self.target_temperature = self.DEFAULT_TEMPERATURE
        self.current_temperature = self.DEFAULT_TEMPERATURE
        self.mode = ThermostatMode.OFF
        super().__init__(config)

    def _on_state_changed(self, old_state, new_state, event) -> None:
        super()._on_state_changed(old_state, new_state, event)
        if new_state == DeviceState.OFF:
            self.mode = ThermostatMode.OFF
        elif new_state == DeviceState.ON and old_state == DeviceState.STARTING:
            # Normal startup path lands in automatic mode
            self.mode = ThermostatMode.AUTO

    def set_target_temperature(self, temperature: float) -> None:
        """Store a new target; raises TEMPERATURE_CHANGE while the device is on."""
        self.target_temperature = float(temperature)
        if self.is_on:
            self.process_event(DeviceEvent.TEMPERATURE_CHANGE)

    def set_mode(self, mode: ThermostatMode) -> None:
        """Change the operating mode, powering the device on or off as needed."""
        if self.mode == mode:
            return
        self.mode = mode

        if mode == ThermostatMode.OFF and self.is_on:
            self.process_event(DeviceEvent.POWER_OFF)
        elif mode != ThermostatMode.OFF and not self.is_on:
            self.process_event(DeviceEvent.POWER_ON)
        else:
            self._update_device()

    def reset(self) -> None:
        super().reset()
        self.mode = ThermostatMode.OFF

    def calculate_energy_consumption(self) -> float:
        if not self.is_on:
            return 0.0

        base = self.energy_profile.idle_kwh
        target = self.target_temperature
        current = self.current_temperature

        match self.mode:
            case ThermostatMode.HEAT:
                return base + max(0.0, target - current) * self.HEAT_RATE
            case ThermostatMode.COOL:
                return base + max(0.0, current - target) * self.COOL_RATE
            case ThermostatMode.AUTO:
                diff = abs(target - current)
                return base + (diff * self.AUTO_RATE if diff > self.AUTO_DEADBAND else 0.0)
            case ThermostatMode.FAN_ONLY:
                return base + self.FAN_ONLY_KWH
            case _:
                return 0.0

    def adjust_temperature(self) -> None:
        """Move the measured temperature one step according to the mode."""
        diff = self.target_temperature - self.current_temperature

        match self.mode:
            case ThermostatMode.HEAT:
                if diff > 0:
                    self.current_temperature += min(self.MAX_STEP, diff)
            case ThermostatMode.COOL:
                if diff < 0:
                    self.current_temperature += max(-self.MAX_STEP, diff)
            case ThermostatMode.AUTO:
                # Fixed step, no clamp to the remaining gap
                if abs(diff) > self.AUTO_DEADBAND:
                    self.current_temperature += self.MAX_STEP if diff > 0 else -self.MAX_STEP
            case ThermostatMode.FAN_ONLY:
                pass
            case ThermostatMode.OFF:
                self.current_temperature += (
                    self.AMBIENT_TEMPERATURE - self.current_temperature
                ) * 0.1

    def tick(self) -> None:
        if self.is_on and self.mode != ThermostatMode.OFF:
            self.adjust_temperature()
            self._energy_consumption = self.calculate_energy_consumption()

    def _get_properties(self) -> dict[str, Any]:
        return {
            "mode": self.mode.value,
            "current_temperature": round(self.current_temperature, 2),
            "target_temperature": round(self.target_temperature, 2),
        }

    def get_status_report(self) -> str:
        return (
            f"{super().get_status_report()}\n"
            f"Mode: {self.mode.name}\n"
            f"Current Temperature: {self.current_temperature:.1f}°C\n"
            f"Target Temperature: {self.target_temperature:.1f}°C"
        )

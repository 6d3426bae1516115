"""Light device simulator."""

from typing import Any

from homesim.devices.base import BaseDevice
from homesim.exceptions import InvalidArgumentError
from homesim.models.device import (
    CAPABILITY_COLOR,
    CAPABILITY_DIMMABLE,
    NAMED_COLORS,
    DeviceEvent,
    DeviceState,
    DeviceType,
    EnergyProfile,
    RGBColor,
)


class LightDevice(BaseDevice):
    """Simulated smart light with optional dimming and color control."""

    DEVICE_TYPE = DeviceType.LIGHT
    TRANSITIONS = (
        (DeviceState.OFF, DeviceEvent.POWER_ON, DeviceState.ON),
        (DeviceState.ON, DeviceEvent.POWER_OFF, DeviceState.OFF),
        (DeviceState.ON, DeviceEvent.ENTER_LOW_POWER, DeviceState.LOW_POWER),
        (DeviceState.LOW_POWER, DeviceEvent.EXIT_LOW_POWER, DeviceState.ON),
        (DeviceState.ON, DeviceEvent.ERROR_DETECTED, DeviceState.ERROR),
        (DeviceState.ERROR, DeviceEvent.ERROR_RESOLVED, DeviceState.ON),
    )
    DEFAULT_ENERGY_PROFILE = EnergyProfile(active_kwh=0.06)

    DEFAULT_BRIGHTNESS = 80
    LOW_POWER_THRESHOLD = 30

    def __init__(self, config):
        self.brightness = self.DEFAULT_BRIGHTNESS
        self.color: RGBColor = NAMED_COLORS["white"]
        super().__init__(config)

    @property
    def is_dimmable(self) -> bool:
        return CAPABILITY_DIMMABLE in self.capabilities

    @property
    def is_color_changeable(self) -> bool:
        return CAPABILITY_COLOR in self.capabilities

    def _on_state_changed(self, old_state, new_state, event) -> None:
        super()._on_state_changed(old_state, new_state, event)
        if new_state == DeviceState.LOW_POWER:
            self.brightness = min(self.LOW_POWER_THRESHOLD, self.brightness)

    def set_brightness(self, level: int) -> None:
        """Set brightness (0-100), driving power and low-power transitions.

        Raises:
            InvalidArgumentError: level is out of range, or the light is not
                dimmable and level is neither 0 nor 100.
        """
        if level < 0 or level > 100:
            raise InvalidArgumentError(
                "Brightness must be between 0 and 100",
                {"device_id": self.device_id, "brightness": level},
            )
        if not self.is_dimmable and level not in (0, 100):
            raise InvalidArgumentError(
                "This light is not dimmable",
                {"device_id": self.device_id, "brightness": level},
            )

        self.brightness = level

        if level == 0 and self.is_on:
            self.process_event(DeviceEvent.POWER_OFF)
        elif level > 0 and not self.is_on:
            self.process_event(DeviceEvent.POWER_ON)
        elif (
            level < self.LOW_POWER_THRESHOLD
            and self.is_on
            and self.current_state != DeviceState.LOW_POWER
        ):
            self.process_event(DeviceEvent.ENTER_LOW_POWER)
        elif level >= self.LOW_POWER_THRESHOLD and self.current_state == DeviceState.LOW_POWER:
            self.process_event(DeviceEvent.EXIT_LOW_POWER)
        else:
            self._update_device()

    def set_color(self, color: RGBColor | str) -> None:
        """Set the light color from an ``RGBColor`` or a preset name."""
        if not self.is_color_changeable:
            raise InvalidArgumentError(
                "This light does not support color change",
                {"device_id": self.device_id},
            )
        if isinstance(color, str):
            preset = NAMED_COLORS.get(color.lower())
            if preset is None:
                raise InvalidArgumentError(
                    f"Unknown color: {color}",
                    {"device_id": self.device_id, "known": sorted(NAMED_COLORS)},
                )
            color = preset
        self.color = color

    def turn_on(self) -> None:
        if not self.is_on:
            self.process_event(DeviceEvent.POWER_ON)

    def turn_off(self) -> None:
        if self.is_on:
            self.process_event(DeviceEvent.POWER_OFF)

    def calculate_energy_consumption(self) -> float:
        if not self.is_on:
            return 0.0

        consumption = self.energy_profile.active_kwh * (self.brightness / 100.0)
        if self.current_state == DeviceState.LOW_POWER:
            consumption *= 0.5
        return consumption

    def _get_properties(self) -> dict[str, Any]:
        return {
            "brightness": self.brightness,
            "color": self.color.hex,
            "dimmable": self.is_dimmable,
            "color_changeable": self.is_color_changeable,
        }

    def get_status_report(self) -> str:
        features = " ".join(
            label
            for label, enabled in (
                ("Dimmable", self.is_dimmable),
                ("ColorChangeable", self.is_color_changeable),
            )
            if enabled
        )
        return (
            f"{super().get_status_report()}\n"
            f"Brightness: {self.brightness}%\n"
            f"Color: {self.color.hex}\n"
            f"Features: {features}"
        )

"""Base device class wrapping an owned finite state machine."""

import logging
from typing import Any, ClassVar

from homesim.fsm import StateMachine
from homesim.models.device import (
    DeviceConfig,
    DeviceEvent,
    DeviceSnapshot,
    DeviceState,
    DeviceType,
    EnergyProfile,
)

logger = logging.getLogger(__name__)

Transition = tuple[DeviceState, DeviceEvent, DeviceState]


class BaseDevice:
    """Base class for all simulated devices.

    Every behavior goes through the owned ``StateMachine``. Subclasses supply
    their transition table as data (``TRANSITIONS``) and a single state-change
    listener (``_on_state_changed``); both are wired once, at construction.
    """

    DEVICE_TYPE: ClassVar[DeviceType]
    TRANSITIONS: ClassVar[tuple[Transition, ...]] = ()
    DEFAULT_ENERGY_PROFILE: ClassVar[EnergyProfile] = EnergyProfile()

    def __init__(self, config: DeviceConfig):
        self.config = config
        self.device_id = config.id
        self.device_type = config.type
        self.display_name = config.display_name
        self.capabilities = set(config.capabilities)
        self.energy_profile = config.energy_profile or self.DEFAULT_ENERGY_PROFILE

        self._is_on = False
        self._energy_consumption = 0.0
        self._fsm: StateMachine[DeviceState, DeviceEvent] = self._build_state_machine()

    def _build_state_machine(self) -> StateMachine[DeviceState, DeviceEvent]:
        fsm: StateMachine[DeviceState, DeviceEvent] = StateMachine(DeviceState.OFF)
        for from_state, event, to_state in self.TRANSITIONS:
            fsm.add_transition(from_state, event, to_state)
        fsm.add_state_change_listener(self._on_state_changed)
        return fsm

    @property
    def fsm(self) -> StateMachine[DeviceState, DeviceEvent]:
        return self._fsm

    @property
    def current_state(self) -> DeviceState:
        return self._fsm.current_state

    @property
    def is_on(self) -> bool:
        return self._is_on

    @property
    def energy_consumption(self) -> float:
        """Energy reading as of the last update, in kWh."""
        return self._energy_consumption

    def process_event(self, event: DeviceEvent) -> bool:
        """Feed *event* to the state machine and refresh derived fields.

        Returns whether a transition happened. A False result is a normal
        outcome: the event has no transition from the current state.
        """
        changed = self._fsm.process_event(event)
        if not changed:
            logger.debug(
                f"Device {self.device_id} ignored {event.name} in state "
                f"{self.current_state.name}"
            )
        self._update_device()
        return changed

    def _on_state_changed(
        self, old_state: DeviceState, new_state: DeviceState, event: DeviceEvent
    ) -> None:
        """State-change listener. Override in subclasses."""
        logger.info(
            f"Device '{self.display_name}' state changed: "
            f"{old_state.name} -> {new_state.name} due to {event.name}"
        )

    def _update_device(self) -> None:
        """Re-derive power flag and energy reading from the current state."""
        self._is_on = self._fsm.current_state != DeviceState.OFF
        self._energy_consumption = self.calculate_energy_consumption()

    def calculate_energy_consumption(self) -> float:
        """Instantaneous consumption in kWh. Override in subclasses."""
        return 0.0

    def tick(self) -> None:
        """Advance device-internal simulation by one step. Override in subclasses."""

    def reset(self) -> None:
        """Put the state machine back in its initial state."""
        self._fsm.reset()
        self._update_device()

    def _get_properties(self) -> dict[str, Any]:
        """Variant-specific observable fields. Override in subclasses."""
        return {}

    def snapshot(self) -> DeviceSnapshot:
        return DeviceSnapshot(
            device_id=self.device_id,
            device_type=self.device_type,
            display_name=self.display_name,
            state=self.current_state,
            is_on=self._is_on,
            energy_consumption=self._energy_consumption,
            properties=self._get_properties(),
        )

    def get_status_report(self) -> str:
        return (
            f"Device: {self.display_name} (ID: {self.device_id}, Type: {self.device_type.name})\n"
            f"State: {self.current_state.name}\n"
            f"Power: {'ON' if self._is_on else 'OFF'}\n"
            f"Energy Consumption: {self._energy_consumption:.2f} kWh"
        )

    def __str__(self) -> str:
        return f"{self.display_name} ({self.device_type.name}): {self.current_state.name}"

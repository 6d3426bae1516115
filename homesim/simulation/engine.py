"""Simulation engine -- drives scheduled events into devices in time order."""

import asyncio
import logging
from datetime import datetime, timedelta
from typing import Any

from config import settings
from homesim.devices.base import BaseDevice
from homesim.devices.thermostat import ThermostatDevice
from homesim.environment.home import TARGET_TEMPERATURE_KEY, HomeEnvironment
from homesim.exceptions import DeviceNotFoundError, InvalidArgumentError
from homesim.models.device import DeviceEvent
from homesim.models.events import (
    DispatchOutcome,
    DispatchRecord,
    ScheduledEvent,
    SimulationReport,
)
from homesim.simulation.scenarios import Scenario

logger = logging.getLogger(__name__)


class SimulationEngine:
    """Runs a scenario against a home environment.

    Each step advances the environment clock, ticks every device, then
    dispatches the entries scheduled for the new minute. All device work is
    synchronous; the optional pacing delay is the only await point.
    """

    def __init__(
        self,
        environment: HomeEnvironment | None = None,
        step_minutes: int | None = None,
        pace_seconds: float | None = None,
    ):
        self.environment = environment or HomeEnvironment()
        self._step_minutes = step_minutes or settings.simulation_step_minutes
        self._pace_seconds = (
            settings.simulation_pace_seconds if pace_seconds is None else pace_seconds
        )
        self._cancel_event = asyncio.Event()
        self._active_scenario: str | None = None

    @property
    def active_scenario(self) -> str | None:
        return self._active_scenario

    @property
    def is_running(self) -> bool:
        return self._active_scenario is not None

    @property
    def cancel_event(self) -> asyncio.Event:
        return self._cancel_event

    async def run(
        self,
        scenario: Scenario,
        duration_minutes: int | None = None,
        cancel_event: asyncio.Event | None = None,
    ) -> SimulationReport:
        """Simulate *scenario* for *duration_minutes* of simulated time.

        Setting the cancel event (or calling ``stop``) ends the run before
        the next step.
        """
        duration = (
            settings.default_duration_minutes if duration_minutes is None else duration_minutes
        )
        if cancel_event is None:
            self._cancel_event.clear()
            cancel_event = self._cancel_event
        else:
            self._cancel_event = cancel_event

        start = self.environment.current_time
        end = start + timedelta(minutes=duration)
        dispatches: list[DispatchRecord] = []
        cancelled = False

        logger.info(f"Starting simulation of scenario '{scenario.name}' for {duration} minutes")
        for device in scenario.devices:
            logger.info(f"Initializing device: {device.display_name}")

        self._active_scenario = scenario.scenario_id
        try:
            while self.environment.current_time < end:
                if cancel_event.is_set():
                    cancelled = True
                    break

                now = self.environment.advance_time(self._step_minutes)
                for device in scenario.devices:
                    device.tick()

                due = scenario.get_events_at(now)
                if due:
                    logger.info(f"[{now:%H:%M}] Processing {len(due)} scheduled events")
                for entry in due:
                    dispatches.append(self._dispatch(scenario, entry, now))

                if await self._pause(cancel_event):
                    cancelled = True
                    break
        finally:
            self._active_scenario = None

        if cancelled:
            logger.info(
                f"Scenario '{scenario.name}' cancelled at "
                f"{self.environment.current_time:%H:%M}"
            )
        else:
            logger.info(f"Simulation of '{scenario.name}' completed")

        return SimulationReport(
            scenario=scenario.scenario_id,
            started_at=start,
            ended_at=self.environment.current_time,
            cancelled=cancelled,
            dispatches=dispatches,
            devices=[device.snapshot() for device in scenario.devices],
        )

    async def _pause(self, cancel_event: asyncio.Event) -> bool:
        """Wait out the pacing delay. Returns True if cancelled meanwhile."""
        if self._pace_seconds <= 0:
            await asyncio.sleep(0)
            return False
        try:
            await asyncio.wait_for(cancel_event.wait(), timeout=self._pace_seconds)
            return True
        except asyncio.TimeoutError:
            return False

    def stop(self) -> None:
        """Ask a running simulation to stop before its next step."""
        self._cancel_event.set()

    def _dispatch(self, scenario: Scenario, entry: ScheduledEvent, now: datetime) -> DispatchRecord:
        device = scenario.get_device_by_id(entry.device_id)
        if device is None:
            logger.warning(f"[{now:%H:%M}] Device with ID {entry.device_id} not found")
            outcome = DispatchOutcome.DEVICE_NOT_FOUND
        else:
            logger.info(
                f"[{now:%H:%M}] Device '{device.display_name}' processing event: {entry.event.name}"
            )
            changed = device.process_event(entry.event)
            self._propagate(device)
            outcome = DispatchOutcome.TRANSITIONED if changed else DispatchOutcome.NO_OP

        return DispatchRecord(
            timestamp=now,
            device_id=entry.device_id,
            event=entry.event,
            outcome=outcome,
        )

    def _propagate(self, device: BaseDevice) -> None:
        """Feed the device's observable state into the environment."""
        if isinstance(device, ThermostatDevice):
            self.environment.set_environmental_data(
                TARGET_TEMPERATURE_KEY, device.target_temperature
            )
        self.environment.update_from_device(device)

    def send_event(self, scenario: Scenario, device_id: str, event: DeviceEvent) -> bool:
        """Deliver an event to one device right away.

        Raises:
            DeviceNotFoundError: no device with *device_id* in the scenario.
        """
        device = scenario.get_device_by_id(device_id)
        if device is None:
            raise DeviceNotFoundError(
                f"Device not found: {device_id}",
                {"scenario_id": scenario.scenario_id, "device_id": device_id},
            )

        changed = device.process_event(event)
        self._propagate(device)
        return changed

    def fast_forward(self, scenario: Scenario, minutes: int) -> datetime:
        """Skip ahead without dispatching scheduled events."""
        if minutes <= 0:
            raise InvalidArgumentError("Minutes must be positive", {"minutes": minutes})

        now = self.environment.advance_time(minutes)
        for device in scenario.devices:
            self._propagate(device)
        logger.info(f"Time advanced to {now.isoformat(timespec='minutes')}")
        return now

    def get_status(self) -> dict[str, Any]:
        return {
            "active_scenario": self._active_scenario,
            "current_time": self.environment.current_time.isoformat(),
            "step_minutes": self._step_minutes,
            "pace_seconds": self._pace_seconds,
        }

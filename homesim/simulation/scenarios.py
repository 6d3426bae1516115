"""Simulation scenarios: a set of devices plus a time-keyed event schedule.

Scenarios can be built in code (see ``build_sample_scenarios``) or loaded
from a YAML document shaped like ``config/scenarios.yaml``.
"""

import logging
from datetime import datetime, time
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from homesim.devices.base import BaseDevice
from homesim.devices.registry import create_device, make_light, make_thermostat
from homesim.exceptions import ScenarioConfigError
from homesim.models.device import DeviceConfig, DeviceEvent
from homesim.models.events import ScheduledEvent

logger = logging.getLogger(__name__)


class Scenario:
    """A named bundle of devices and scheduled events for one simulation run.

    Devices keep insertion order. Device ids are expected to be unique but
    this is not enforced; lookups return the first match.
    """

    def __init__(self, name: str, description: str = "", scenario_id: str | None = None):
        self.scenario_id = scenario_id or _slugify(name)
        self.name = name
        self.description = description
        self._devices: list[BaseDevice] = []
        self._scheduled_events: list[ScheduledEvent] = []

    @property
    def devices(self) -> list[BaseDevice]:
        return self._devices

    @property
    def scheduled_events(self) -> list[ScheduledEvent]:
        return self._scheduled_events

    def add_device(self, device: BaseDevice) -> "Scenario":
        self._devices.append(device)
        return self

    def schedule_event(self, at: time, device_id: str, event: DeviceEvent) -> "Scenario":
        """Add an entry. The device id is resolved only when the entry is dispatched."""
        self._scheduled_events.append(
            ScheduledEvent(time=at, device_id=device_id, event=event)
        )
        return self

    def get_events_at(self, current_time: time | datetime) -> list[ScheduledEvent]:
        """Entries scheduled for the same hour and minute, in insertion order."""
        return [e for e in self._scheduled_events if e.matches(current_time)]

    def get_device_by_id(self, device_id: str) -> BaseDevice | None:
        for device in self._devices:
            if device.device_id == device_id:
                return device
        return None

    def reset_devices(self) -> None:
        for device in self._devices:
            device.reset()

    def describe(self) -> str:
        lines = [
            f"Scenario: {self.name}",
            f"Description: {self.description}",
            f"Devices ({len(self._devices)}):",
        ]
        lines.extend(f"  - {device}" for device in self._devices)
        lines.append(f"Scheduled Events ({len(self._scheduled_events)}):")
        lines.extend(f"  - {event}" for event in self._scheduled_events)
        return "\n".join(lines)

    def __repr__(self) -> str:
        return (
            f"Scenario(scenario_id={self.scenario_id!r}, devices={len(self._devices)}, "
            f"scheduled_events={len(self._scheduled_events)})"
        )


def _slugify(name: str) -> str:
    return "_".join(name.lower().split())


# ---------------------------------------------------------------------------
# Sample scenarios
# ---------------------------------------------------------------------------

def _morning_routine() -> Scenario:
    scenario = Scenario(
        "Morning Routine",
        "Simulates the smart home behavior during morning hours",
    )
    (
        scenario.add_device(make_light("L1", "Kitchen Light", dimmable=True, color_changeable=True))
        .add_device(make_light("L2", "Bedroom Light", dimmable=True))
        .add_device(make_thermostat("T1", "Main Thermostat"))
    )
    (
        scenario.schedule_event(time(6, 0), "L2", DeviceEvent.POWER_ON)
        .schedule_event(time(6, 30), "T1", DeviceEvent.POWER_ON)
        .schedule_event(time(6, 31), "T1", DeviceEvent.ACTIVATE)
        .schedule_event(time(7, 0), "L1", DeviceEvent.POWER_ON)
        .schedule_event(time(8, 0), "L2", DeviceEvent.POWER_OFF)
        .schedule_event(time(9, 0), "L1", DeviceEvent.POWER_OFF)
    )
    return scenario


def _evening_relaxation() -> Scenario:
    scenario = Scenario(
        "Evening Relaxation",
        "Simulates the smart home behavior during evening hours",
    )
    (
        scenario.add_device(make_light("L3", "Living Room Light", dimmable=True, color_changeable=True))
        .add_device(make_thermostat("T2", "Living Room Thermostat"))
    )
    (
        scenario.schedule_event(time(18, 0), "L3", DeviceEvent.POWER_ON)
        .schedule_event(time(18, 1), "T2", DeviceEvent.POWER_ON)
        .schedule_event(time(18, 2), "T2", DeviceEvent.ACTIVATE)
        .schedule_event(time(22, 0), "L3", DeviceEvent.ENTER_LOW_POWER)
        .schedule_event(time(23, 0), "L3", DeviceEvent.POWER_OFF)
        .schedule_event(time(23, 30), "T2", DeviceEvent.ENTER_LOW_POWER)
    )
    return scenario


def _energy_saving() -> Scenario:
    scenario = Scenario(
        "Energy Saving Mode",
        "Demonstrates how devices behave in energy saving mode",
    )
    scenario.add_device(make_light("L4", "Eco Light 1", dimmable=True))
    scenario.add_device(make_light("L5", "Eco Light 2", dimmable=True))
    scenario.add_device(make_thermostat("T3", "Eco Thermostat"))

    for at, device_id, event in (
        (time(8, 0), "L4", DeviceEvent.POWER_ON),
        (time(8, 1), "L5", DeviceEvent.POWER_ON),
        (time(8, 2), "T3", DeviceEvent.POWER_ON),
        (time(8, 3), "T3", DeviceEvent.ACTIVATE),
        (time(9, 0), "L4", DeviceEvent.ENTER_LOW_POWER),
        (time(9, 1), "L5", DeviceEvent.ENTER_LOW_POWER),
        (time(9, 2), "T3", DeviceEvent.ENTER_LOW_POWER),
        (time(17, 0), "L4", DeviceEvent.EXIT_LOW_POWER),
        (time(17, 1), "L5", DeviceEvent.EXIT_LOW_POWER),
        (time(17, 2), "T3", DeviceEvent.EXIT_LOW_POWER),
        (time(22, 0), "L4", DeviceEvent.POWER_OFF),
        (time(22, 1), "L5", DeviceEvent.POWER_OFF),
        (time(22, 2), "T3", DeviceEvent.POWER_OFF),
    ):
        scenario.schedule_event(at, device_id, event)
    return scenario


def build_sample_scenarios() -> dict[str, Scenario]:
    """Fresh instances of the built-in scenarios, keyed by scenario id."""
    scenarios = [_morning_routine(), _evening_relaxation(), _energy_saving()]
    return {s.scenario_id: s for s in scenarios}


def get_scenario_list(scenarios: dict[str, Scenario]) -> list[dict[str, Any]]:
    return [
        {
            "id": s.scenario_id,
            "name": s.name,
            "description": s.description,
            "devices": len(s.devices),
            "scheduled_events": len(s.scheduled_events),
        }
        for s in scenarios.values()
    ]


# ---------------------------------------------------------------------------
# YAML loading
# ---------------------------------------------------------------------------

def _parse_time(value: Any) -> time:
    """Accept "HH:MM" strings, ``time`` objects, or YAML 1.1 sexagesimal ints."""
    if isinstance(value, time):
        return value
    if isinstance(value, int):
        # PyYAML reads unquoted 18:30 as 18 * 60 + 30
        hour, minute = divmod(value, 60)
        return time(hour, minute)
    if isinstance(value, str):
        return datetime.strptime(value.strip(), "%H:%M").time()
    raise ValueError(f"Unsupported time value: {value!r}")


def _parse_event(value: Any) -> DeviceEvent:
    return DeviceEvent(str(value).strip().lower())


def scenario_from_dict(scenario_id: str, data: dict[str, Any]) -> Scenario:
    """Build a scenario from one entry of a scenarios document."""
    scenario = Scenario(
        data.get("name", scenario_id),
        data.get("description", ""),
        scenario_id=scenario_id,
    )

    try:
        for device_data in data.get("devices", []):
            config = DeviceConfig(
                id=device_data["id"],
                type=device_data["type"],
                display_name=device_data.get("display_name", device_data["id"]),
                capabilities=device_data.get("capabilities", []),
                energy_profile=device_data.get("energy_profile"),
            )
            scenario.add_device(create_device(config))

        for entry in data.get("schedule", []):
            scenario.schedule_event(
                _parse_time(entry["time"]),
                str(entry["device"]),
                _parse_event(entry["event"]),
            )
    except (KeyError, ValueError, ValidationError) as e:
        raise ScenarioConfigError(
            f"Invalid scenario '{scenario_id}': {e}", {"scenario_id": scenario_id}
        ) from e

    return scenario


def load_scenarios_from_yaml(config_path: str | Path) -> dict[str, Scenario]:
    """Load scenario definitions from a YAML file, keyed by scenario id."""
    path = Path(config_path)
    if not path.exists():
        raise ScenarioConfigError(
            f"Scenario config not found: {config_path}", {"path": str(config_path)}
        )

    with open(path) as f:
        try:
            document = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ScenarioConfigError(f"Malformed YAML in {config_path}: {e}") from e

    if not isinstance(document, dict):
        raise ScenarioConfigError(f"Expected a mapping at the top of {config_path}")

    scenarios: dict[str, Scenario] = {}
    for scenario_id, data in (document.get("scenarios") or {}).items():
        scenario = scenario_from_dict(scenario_id, data or {})
        scenarios[scenario_id] = scenario
        logger.info(
            f"Loaded scenario: {scenario_id} ({len(scenario.devices)} devices, "
            f"{len(scenario.scheduled_events)} events)"
        )
    return scenarios

"""Pydantic models for scheduled events and dispatch records."""

import datetime as dt
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from homesim.models.device import DeviceEvent, DeviceSnapshot


class ScheduledEvent(BaseModel):
    """An event to deliver to one device at a minute of the day."""

    model_config = ConfigDict(frozen=True)

    time: dt.time
    device_id: str
    event: DeviceEvent

    def matches(self, when: dt.time | dt.datetime) -> bool:
        """Hour and minute must match; seconds are ignored."""
        return self.time.hour == when.hour and self.time.minute == when.minute

    def __str__(self) -> str:
        return f"{self.time.strftime('%H:%M')} - Device {self.device_id}: {self.event.name}"


class DispatchOutcome(str, Enum):
    TRANSITIONED = "transitioned"
    NO_OP = "no_op"
    DEVICE_NOT_FOUND = "device_not_found"


class DispatchRecord(BaseModel):
    """Result of delivering one scheduled event."""
    timestamp: dt.datetime
    device_id: str
    event: DeviceEvent
    outcome: DispatchOutcome

    def to_dict(self) -> dict[str, Any]:
        return {
            "timestamp": self.timestamp.isoformat(),
            "device_id": self.device_id,
            "event": self.event.value,
            "outcome": self.outcome.value,
        }


class SimulationReport(BaseModel):
    """Summary of one simulation run."""
    scenario: str
    started_at: dt.datetime
    ended_at: dt.datetime
    cancelled: bool = False
    dispatches: list[DispatchRecord] = Field(default_factory=list)
    devices: list[DeviceSnapshot] = Field(default_factory=list)

    @property
    def missing_devices(self) -> list[str]:
        return [
            d.device_id
            for d in self.dispatches
            if d.outcome == DispatchOutcome.DEVICE_NOT_FOUND
        ]

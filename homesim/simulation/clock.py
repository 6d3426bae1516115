"""Caller-driven simulation clock."""

import logging
from datetime import date, datetime, time, timedelta

logger = logging.getLogger(__name__)


class SimulationClock:
    """Simulated wall clock. Time only moves when ``advance`` is called."""

    def __init__(self, start: datetime | None = None):
        self._base_time: datetime = start or datetime.combine(date.today(), time(6, 0))
        self._offset: timedelta = timedelta()

    @classmethod
    def at(cls, start_time: time, day: date | None = None) -> "SimulationClock":
        return cls(datetime.combine(day or date.today(), start_time))

    def now(self) -> datetime:
        """Get the current simulated time."""
        return self._base_time + self._offset

    def time_of_day(self) -> time:
        return self.now().time()

    def advance(self, minutes: int) -> datetime:
        """Move the clock forward and return the new time."""
        if minutes < 0:
            raise ValueError("Cannot move the clock backwards")
        self._offset += timedelta(minutes=minutes)
        return self.now()

    def reset(self, start: datetime | None = None) -> None:
        if start is not None:
            self._base_time = start
        self._offset = timedelta()
        logger.debug(f"Clock reset to {self.now().isoformat()}")

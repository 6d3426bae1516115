"""Simulator exceptions."""

from typing import Any, Dict, Optional


class SimulationError(Exception):
    """Base class for simulator errors."""
    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.context = context or {}


class InvalidArgumentError(SimulationError, ValueError):
    """Raised when a device setting is out of range or unsupported by the device."""
    pass


class DeviceNotFoundError(SimulationError, LookupError):
    """Raised when a device id is not part of the scenario."""
    pass


class ScenarioConfigError(SimulationError):
    """Raised when a scenario document cannot be loaded."""
    pass

"""FSM-driven smart home device simulator."""

__version__ = "0.1.0"

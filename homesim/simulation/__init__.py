"""Scenario scheduling and the simulation driving loop."""

from homesim.fsm.machine import StateChangeListener, StateMachine

__all__ = ["StateChangeListener", "StateMachine"]

"""Core framework components for the prize wheel."""

from .state import State, SpinStep, StateMachine, WheelContext
from .events import EventBus, Event, EventType

__all__ = [
    "State",
    "SpinStep",
    "StateMachine",
    "WheelContext",
    "EventBus",
    "Event",
    "EventType",
]

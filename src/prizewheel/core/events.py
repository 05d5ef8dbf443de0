"""
Event bus for the prize wheel.

Decouples input (keyboard, buttons) and the frame clock from the spin
orchestrator. Dispatch is synchronous and happens inside the frame loop.
"""

from dataclasses import dataclass, field
from typing import Any, Callable
from enum import Enum, auto
import logging
import time
from collections import defaultdict

logger = logging.getLogger(__name__)


class EventType(Enum):
    """Event types understood by the wheel."""
    # Input events
    BUTTON_PRESS = auto()  # Spin trigger
    CLAIM_PRESS = auto()   # Claim trigger

    # State events
    STATE_CHANGED = auto()

    # Wheel events
    SPIN_STARTED = auto()
    SPIN_COMPLETE = auto()
    REWARD_CLAIMED = auto()

    # System events
    TICK = auto()  # Frame tick
    SHUTDOWN = auto()


@dataclass
class Event:
    """
    Event data container.

    Attributes:
        type: Event type
        data: Event payload
        source: Component that emitted the event
        timestamp: Wall-clock time the event was created
    """
    type: EventType
    data: dict[str, Any] = field(default_factory=dict)
    source: str = "system"
    timestamp: float = field(default_factory=time.time)


Handler = Callable[[Event], Any]


class EventBus:
    """
    Routes events to the handlers subscribed to their type.

    A failing handler is logged and skipped; the remaining handlers for
    the same event still run.
    """

    def __init__(self) -> None:
        self._handlers: dict[EventType, list[Handler]] = defaultdict(list)

    def subscribe(self, event_type: EventType, handler: Handler) -> Callable[[], None]:
        """
        Subscribe to an event type.

        Args:
            event_type: Type of event to listen for
            handler: Called with the event

        Returns:
            Unsubscribe function
        """
        self._handlers[event_type].append(handler)
        logger.debug(f"Handler subscribed to {event_type.name}")

        def unsubscribe() -> None:
            if handler in self._handlers[event_type]:
                self._handlers[event_type].remove(handler)
                logger.debug(f"Handler unsubscribed from {event_type.name}")

        return unsubscribe

    def emit(self, event: Event) -> None:
        """Dispatch an event to its handlers immediately."""
        # Copy so handlers may unsubscribe while being dispatched
        for handler in list(self._handlers.get(event.type, [])):
            try:
                handler(event)
            except Exception as e:
                logger.error(f"Error in event handler for {event.type.name}: {e}")


# Convenience functions for creating common events
def button_press_event(source: str = "button") -> Event:
    """Create a spin trigger event."""
    return Event(EventType.BUTTON_PRESS, source=source)


def claim_press_event(source: str = "button") -> Event:
    """Create a claim trigger event."""
    return Event(EventType.CLAIM_PRESS, source=source)


def tick_event(now_ms: float, delta: float, frame: int) -> Event:
    """Create a frame tick event.

    Args:
        now_ms: Monotonic frame timestamp in milliseconds
        delta: Seconds since the previous frame
        frame: Frame counter
    """
    return Event(EventType.TICK, data={"now_ms": now_ms, "delta": delta, "frame": frame})

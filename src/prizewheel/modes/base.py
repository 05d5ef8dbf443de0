"""Base class for interactive modes driven by the event bus."""

from abc import ABC, abstractmethod
from typing import Optional, Dict, Any
from dataclasses import dataclass
import logging

from prizewheel.animation.animator import Animator
from prizewheel.core.events import EventBus, Event, EventType
from prizewheel.core.state import StateMachine
from prizewheel.graphics.renderer import WheelRenderer
from prizewheel.graphics.surface import DrawingSurface
from prizewheel.settings import WheelSettings
from prizewheel.utils.promotion import PromotionAction
from prizewheel.wheel.geometry import WheelGeometry

logger = logging.getLogger(__name__)


@dataclass
class ModeContext:
    """Shared collaborators passed to modes."""

    state_machine: StateMachine
    event_bus: EventBus
    renderer: WheelRenderer
    animator: Animator
    surface: DrawingSurface
    promotion: PromotionAction
    wheel: WheelSettings

    @property
    def geometry(self) -> WheelGeometry:
        return self.renderer.geometry


class BaseMode(ABC):
    """Abstract base class for modes.

    Lifecycle:
        1. on_enter() - Initialize mode and draw the first frame
        2. on_update(delta) - Per-frame logic while active
        3. on_input(event) - Handle user input
        4. on_exit() - Cleanup
    """

    # Mode identifier (override in subclasses)
    name: str = "base"

    def __init__(self, context: ModeContext):
        self.context = context
        self._active = False

        logger.debug(f"Mode created: {self.name}")

    @property
    def is_active(self) -> bool:
        return self._active

    # Lifecycle methods
    def enter(self) -> None:
        """Called when mode becomes active."""
        self._active = True

        logger.info(f"Entering mode: {self.name}")
        self.on_enter()

    def exit(self) -> None:
        """Called when mode is deactivated."""
        logger.info(f"Exiting mode: {self.name}")
        self.on_exit()
        self._active = False

    def update(self, delta_ms: float) -> None:
        """Update mode state each frame.

        Args:
            delta_ms: Time since last update in milliseconds
        """
        if not self._active:
            return

        self.on_update(delta_ms)

    def handle_input(self, event: Event) -> bool:
        """Process input event.

        Returns:
            True if event was handled
        """
        if not self._active:
            return False

        return self.on_input(event)

    # Abstract methods (must be implemented by subclasses)
    @abstractmethod
    def on_enter(self) -> None:
        """Initialize mode state."""
        pass

    @abstractmethod
    def on_update(self, delta_ms: float) -> None:
        """Per-frame update logic."""
        pass

    @abstractmethod
    def on_input(self, event: Event) -> bool:
        """Handle user input. Return True if handled."""
        pass

    @abstractmethod
    def on_exit(self) -> None:
        """Cleanup mode state."""
        pass

    # Utility methods
    def emit_event(self, event_type: EventType, data: Optional[Dict[str, Any]] = None) -> None:
        """Emit an event through the event bus."""
        self.context.event_bus.emit(Event(
            type=event_type,
            data=data or {},
            source=f"mode_{self.name}"
        ))

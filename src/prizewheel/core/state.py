"""
State machine for the prize wheel flow.

States:
    IDLE: Waiting for a spin
    SPINNING: Wheel animation in flight
    AWAITING_CLAIM: Reward revealed, waiting for the claim action
"""

from enum import Enum, auto
from dataclasses import dataclass, fields
from typing import Callable, Any, Optional
import logging

logger = logging.getLogger(__name__)


class State(Enum):
    """Orchestrator states."""
    IDLE = auto()
    SPINNING = auto()
    AWAITING_CLAIM = auto()


class SpinStep(Enum):
    """Which scripted spin comes next."""
    FIRST = auto()   # Lands on the no-win sector
    SECOND = auto()  # Lands on the reward sector


@dataclass
class WheelContext:
    """Mutable session data shared between the orchestrator and the view."""
    rotation: float = 0.0
    spin_step: SpinStep = SpinStep.FIRST
    spinning: bool = False
    target_index: Optional[int] = None
    result_index: Optional[int] = None
    message: str = ""
    detail: str = ""
    spins_total: int = 0


StateListener = Callable[[State, State, WheelContext], None]


class StateMachine:
    """
    Manages orchestrator state and transitions.

    Only transitions listed in VALID_TRANSITIONS are accepted; anything else
    is refused and logged.
    """

    VALID_TRANSITIONS: list[tuple[State, State]] = [
        (State.IDLE, State.SPINNING),
        (State.SPINNING, State.IDLE),            # First result
        (State.SPINNING, State.AWAITING_CLAIM),  # Reward result
        (State.AWAITING_CLAIM, State.IDLE),      # Claimed
    ]

    def __init__(self, initial_state: State = State.IDLE) -> None:
        self._state = initial_state
        self._context = WheelContext()
        self._listeners: list[StateListener] = []
        self._valid_transitions = set(self.VALID_TRANSITIONS)
        self._context_fields = {f.name for f in fields(WheelContext)}
        logger.info(f"StateMachine initialized with state: {initial_state.name}")

    @property
    def state(self) -> State:
        return self._state

    @property
    def context(self) -> WheelContext:
        return self._context

    def can_transition(self, to_state: State) -> bool:
        """Check if transition to given state is valid."""
        return (self._state, to_state) in self._valid_transitions

    def update_context(self, **updates: Any) -> None:
        """Apply updates to the context without changing state.

        Raises:
            AttributeError: If a key is not a context field
        """
        for key, value in updates.items():
            if key not in self._context_fields:
                raise AttributeError(f"WheelContext has no field {key!r}")
            setattr(self._context, key, value)

    def transition(self, to_state: State, **context_updates: Any) -> bool:
        """
        Attempt to transition to a new state.

        Args:
            to_state: Target state
            **context_updates: Updates to apply to context

        Returns:
            True if transition successful, False otherwise
        """
        if not self.can_transition(to_state):
            logger.warning(
                f"Invalid transition: {self._state.name} -> {to_state.name}"
            )
            return False

        old_state = self._state
        self._state = to_state
        self.update_context(**context_updates)

        logger.info(f"State transition: {old_state.name} -> {to_state.name}")
        self._notify(old_state, to_state)
        return True

    def add_listener(self, callback: StateListener) -> None:
        """Add a state change listener."""
        self._listeners.append(callback)

    def remove_listener(self, callback: StateListener) -> None:
        if callback in self._listeners:
            self._listeners.remove(callback)

    def reset(self) -> None:
        """Reset to IDLE with a fresh context."""
        old_state = self._state
        self._state = State.IDLE
        self._context = WheelContext()
        self._notify(old_state, State.IDLE)
        logger.info("StateMachine reset to IDLE")

    def _notify(self, old_state: State, new_state: State) -> None:
        for listener in self._listeners:
            try:
                listener(old_state, new_state, self._context)
            except Exception as e:
                logger.error(f"Error in state listener: {e}")

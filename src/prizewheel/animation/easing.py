"""Easing functions for wheel animations.

All functions take a normalized time t (0.0 to 1.0) and return a normalized
progress value. Only curves that settle without overshoot are provided, so a
spin never swings past its target sector and back.
"""

from enum import Enum, auto
from typing import Callable
import math


class Easing(Enum):
    """Available easing function types."""

    LINEAR = auto()

    EASE_OUT_QUAD = auto()

    # Cubic
    EASE_OUT_CUBIC = auto()
    EASE_IN_OUT_CUBIC = auto()

    EASE_OUT_QUART = auto()
    EASE_OUT_QUINT = auto()
    EASE_OUT_SINE = auto()
    EASE_OUT_EXPO = auto()
    EASE_OUT_CIRC = auto()


# Type alias for easing functions
EasingFunc = Callable[[float], float]


def linear(t: float) -> float:
    """Linear interpolation (no easing)."""
    return t


def ease_out_quad(t: float) -> float:
    """Decelerate to zero velocity."""
    return 1 - (1 - t) * (1 - t)


def ease_out_cubic(t: float) -> float:
    """Decelerate to zero velocity (cubic)."""
    return 1 - pow(1 - t, 3)


def ease_in_out_cubic(t: float) -> float:
    """Accelerate then decelerate (cubic)."""
    if t < 0.5:
        return 4 * t * t * t
    return 1 - pow(-2 * t + 2, 3) / 2


def ease_out_quart(t: float) -> float:
    return 1 - pow(1 - t, 4)


def ease_out_quint(t: float) -> float:
    return 1 - pow(1 - t, 5)


def ease_out_sine(t: float) -> float:
    """Decelerate using sine curve."""
    return math.sin((t * math.pi) / 2)


def ease_out_expo(t: float) -> float:
    """Decelerate exponentially."""
    return 1 if t == 1 else 1 - pow(2, -10 * t)


def ease_out_circ(t: float) -> float:
    """Decelerate along circular curve."""
    return math.sqrt(1 - pow(t - 1, 2))


def ease(t: float) -> float:
    """Default spin curve: cubic ease-out on a clamped time.

    Registered as ``Easing.EASE_OUT_CUBIC``, so animations configured with
    "ease_out_cubic" run through this function.
    """
    return ease_out_cubic(max(0.0, min(1.0, t)))


_EASING_FUNCTIONS: dict[Easing, EasingFunc] = {
    Easing.LINEAR: linear,
    Easing.EASE_OUT_QUAD: ease_out_quad,
    Easing.EASE_OUT_CUBIC: ease,
    Easing.EASE_IN_OUT_CUBIC: ease_in_out_cubic,
    Easing.EASE_OUT_QUART: ease_out_quart,
    Easing.EASE_OUT_QUINT: ease_out_quint,
    Easing.EASE_OUT_SINE: ease_out_sine,
    Easing.EASE_OUT_EXPO: ease_out_expo,
    Easing.EASE_OUT_CIRC: ease_out_circ,
}

# Lowercase names are the enum member names ("ease_out_cubic", "linear", ...)
_EASING_BY_NAME: dict[str, Easing] = {e.name.lower(): e for e in Easing}


def get_easing(easing: Easing | str) -> EasingFunc:
    """Get an easing function by enum or name.

    Args:
        easing: Easing enum value or string name (e.g., "ease_out_cubic")

    Returns:
        The easing function

    Raises:
        ValueError: If easing name is not recognized
    """
    if isinstance(easing, str):
        easing_enum = _EASING_BY_NAME.get(easing.lower())
        if easing_enum is None:
            raise ValueError(f"Unknown easing function: {easing}")
        easing = easing_enum

    func = _EASING_FUNCTIONS.get(easing)
    if func is None:
        raise ValueError(f"No function registered for: {easing}")

    return func


def interpolate(start: float, end: float, t: float, easing: Easing | str = Easing.LINEAR) -> float:
    """Interpolate between two values using an easing function.

    Args:
        start: Starting value
        end: Ending value
        t: Progress (0.0 to 1.0)
        easing: Easing function to use

    Returns:
        Interpolated value
    """
    easing_func = get_easing(easing)
    eased_t = easing_func(max(0.0, min(1.0, t)))
    return start + (end - start) * eased_t

"""Animation module for the prize wheel."""

from prizewheel.animation.easing import Easing, ease, ease_out_cubic, get_easing, interpolate
from prizewheel.animation.timeline import Timeline, Track, Keyframe, PlayState
from prizewheel.animation.animator import Animator, RotationAnimation, monotonic_ms

__all__ = [
    # Easing
    "Easing",
    "ease",
    "ease_out_cubic",
    "get_easing",
    "interpolate",
    # Timeline
    "Timeline",
    "Track",
    "Keyframe",
    "PlayState",
    # Animator
    "Animator",
    "RotationAnimation",
    "monotonic_ms",
]

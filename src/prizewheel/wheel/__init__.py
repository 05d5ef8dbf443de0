"""Wheel model and geometry."""

from prizewheel.wheel.geometry import (
    DEFAULT_POINTER_ANGLE,
    Sector,
    WheelGeometry,
    TWO_PI,
    build_sectors,
)

__all__ = [
    "DEFAULT_POINTER_ANGLE",
    "Sector",
    "WheelGeometry",
    "TWO_PI",
    "build_sectors",
]

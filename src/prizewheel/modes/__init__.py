"""Interactive modes."""

from .base import BaseMode, ModeContext
from .prize_wheel import PrizeWheelMode

__all__ = ["BaseMode", "ModeContext", "PrizeWheelMode"]

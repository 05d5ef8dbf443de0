"""Wheel geometry: sector <-> rotation mapping.

Angles are radians in screen coordinates (x right, y down), so a positive
rotation turns the wheel clockwise on screen. Sector ``i`` spans
``[rotation + i * a, rotation + (i + 1) * a]`` where ``a`` is the sector
angle. The pointer sits at a fixed angle, 12 o'clock by default.
"""

from dataclasses import dataclass
from typing import Sequence, Tuple
import math

TWO_PI = 2 * math.pi

# 12 o'clock
DEFAULT_POINTER_ANGLE = -math.pi / 2

Color = Tuple[int, int, int]


@dataclass(frozen=True)
class Sector:
    """One wedge of the wheel."""

    label: str
    color: Color


class WheelGeometry:
    """Maps sector indices to wheel rotations and back.

    ``target_rotation_for`` and ``sector_at`` are exact inverses at the
    sector centers: ``sector_at(target_rotation_for(i, k)) == i`` for every
    sector ``i`` and every ``k >= 0``.
    """

    def __init__(
        self,
        sectors: Sequence[Sector],
        pointer_angle: float = DEFAULT_POINTER_ANGLE,
    ):
        if not sectors:
            raise ValueError("Wheel needs at least one sector")
        self.sectors: Tuple[Sector, ...] = tuple(sectors)
        self.pointer_angle = pointer_angle

    @property
    def sector_count(self) -> int:
        return len(self.sectors)

    @property
    def sector_angle(self) -> float:
        """Angular width of one sector."""
        return TWO_PI / len(self.sectors)

    def index_of(self, label: str) -> int:
        """Index of the first sector with this label."""
        for i, sector in enumerate(self.sectors):
            if sector.label == label:
                return i
        raise ValueError(f"No sector labelled {label!r}")

    def target_rotation_for(self, sector_index: int, extra_full_turns: int = 0) -> float:
        """Rotation that puts the center of ``sector_index`` under the pointer.

        Args:
            sector_index: Sector to land on
            extra_full_turns: Cosmetic whole turns added before settling

        Returns:
            Rotation in radians
        """
        if not 0 <= sector_index < self.sector_count:
            raise ValueError(
                f"Sector index {sector_index} out of range 0..{self.sector_count - 1}"
            )
        if extra_full_turns < 0:
            raise ValueError(f"extra_full_turns must be >= 0, got {extra_full_turns}")

        align = self.pointer_angle - (sector_index + 0.5) * self.sector_angle
        return extra_full_turns * TWO_PI + align

    def sector_at(self, rotation: float) -> int:
        """Index of the sector under the pointer for any rotation value."""
        offset = (self.pointer_angle - rotation) % TWO_PI
        # offset can round up to exactly 2*pi for tiny negative inputs
        return int(offset // self.sector_angle) % self.sector_count

    def forward_turns(self, current_rotation: float, extra_full_turns: int) -> int:
        """Turn count for a target that keeps the wheel moving clockwise.

        Turns already accumulated on the wheel are added on top of the
        cosmetic ones, so a spin from rest uses ``extra_full_turns`` as is.
        """
        accumulated = max(0, math.ceil(current_rotation / TWO_PI))
        return extra_full_turns + accumulated

    def sector_span(self, sector_index: int, rotation: float) -> Tuple[float, float]:
        """(start, end) angles of a sector drawn at ``rotation``."""
        start = rotation + sector_index * self.sector_angle
        return start, start + self.sector_angle

    def mid_angle(self, sector_index: int, rotation: float) -> float:
        start, end = self.sector_span(sector_index, rotation)
        return (start + end) / 2


def build_sectors(labels: Sequence[str], colors: Sequence[Color]) -> Tuple[Sector, ...]:
    """Pair labels with colors in wheel order."""
    if len(labels) != len(colors):
        raise ValueError(f"Got {len(labels)} labels but {len(colors)} colors")
    return tuple(Sector(label, tuple(color)) for label, color in zip(labels, colors))

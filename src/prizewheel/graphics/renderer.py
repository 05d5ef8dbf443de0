"""Wheel renderer: draws sectors, labels, hub and pointer for a rotation."""

from dataclasses import dataclass
import logging
import math

from prizewheel.graphics.primitives import (
    Buffer,
    Color,
    clear,
    draw_circle,
    draw_polygon,
    draw_radial_line,
    draw_text_rotated,
    draw_wedge,
    measure_text,
)
from prizewheel.settings import DisplaySettings, hex_to_rgb
from prizewheel.wheel.geometry import WheelGeometry

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class WheelStyle:
    """Fixed display constants for the wheel."""

    background: Color = (11, 16, 32)
    outline: Color = (17, 17, 17)
    label_color: Color = (255, 255, 255)
    hub_color: Color = (6, 6, 6)
    hub_outline: Color = (34, 34, 34)
    pointer_color: Color = (255, 59, 59)
    pointer_outline: Color = (255, 255, 255)

    @classmethod
    def from_settings(cls, display: DisplaySettings) -> "WheelStyle":
        return cls(
            background=hex_to_rgb(display.background),
            outline=hex_to_rgb(display.outline),
            label_color=hex_to_rgb(display.label_color),
            hub_color=hex_to_rgb(display.hub_color),
            hub_outline=hex_to_rgb(display.hub_outline),
            pointer_color=hex_to_rgb(display.pointer_color),
        )


@dataclass(frozen=True)
class WheelLayout:
    """Pixel geometry derived from the buffer size and pixel ratio."""

    cx: float
    cy: float
    radius: float
    hub_radius: float
    stroke: int
    text_scale: int
    label_inset: float
    pointer_length: float
    pointer_half_width: float

    @classmethod
    def for_buffer(cls, width: int, height: int, pixel_ratio: int = 1) -> "WheelLayout":
        ratio = max(1, pixel_ratio)
        margin = 8 * ratio
        radius = min(width, height) / 2 - margin
        if radius <= 0:
            raise ValueError(f"Buffer {width}x{height} too small for the wheel")
        return cls(
            cx=width / 2,
            cy=height / 2,
            radius=radius,
            hub_radius=radius * 0.2,
            stroke=2 * ratio,
            text_scale=max(1, int(round(radius / 56))),
            label_inset=12 * ratio,
            pointer_length=16 * ratio,
            pointer_half_width=8 * ratio,
        )


class WheelRenderer:
    """Draws the wheel for a given rotation.

    Rendering reads only the rotation, the sector list and the style, so the
    same rotation always produces the same pixels.
    """

    def __init__(
        self,
        geometry: WheelGeometry,
        style: WheelStyle | None = None,
        pixel_ratio: int = 1,
    ):
        self.geometry = geometry
        self.style = style or WheelStyle()
        self.pixel_ratio = pixel_ratio

    def layout_for(self, buffer: Buffer) -> WheelLayout:
        h, w = buffer.shape[:2]
        return WheelLayout.for_buffer(w, h, self.pixel_ratio)

    def render(self, buffer: Buffer, rotation: float) -> None:
        """Draw the full wheel at ``rotation`` into ``buffer``."""
        layout = self.layout_for(buffer)
        clear(buffer, self.style.background)

        self._draw_sectors(buffer, layout, rotation)
        self._draw_labels(buffer, layout, rotation)
        self._draw_hub(buffer, layout)
        self._draw_pointer(buffer, layout)

    def _draw_sectors(self, buffer: Buffer, layout: WheelLayout, rotation: float) -> None:
        for i, sector in enumerate(self.geometry.sectors):
            start, end = self.geometry.sector_span(i, rotation)
            draw_wedge(buffer, layout.cx, layout.cy, layout.radius, start, end, sector.color)

        # Outlines on top so neighbouring wedges cannot cover them
        if self.geometry.sector_count > 1:
            for i in range(self.geometry.sector_count):
                start, _ = self.geometry.sector_span(i, rotation)
                draw_radial_line(
                    buffer, layout.cx, layout.cy, start,
                    0, layout.radius, self.style.outline, layout.stroke,
                )
        draw_circle(
            buffer, layout.cx, layout.cy, layout.radius,
            self.style.outline, filled=False, thickness=layout.stroke,
        )

    def _draw_labels(self, buffer: Buffer, layout: WheelLayout, rotation: float) -> None:
        label_radius = layout.radius - layout.label_inset
        max_width = label_radius - layout.hub_radius

        for i, sector in enumerate(self.geometry.sectors):
            mid = self.geometry.mid_angle(i, rotation)
            scale = layout.text_scale
            # Shrink long labels rather than run them into the hub
            while scale > 1 and measure_text(sector.label, scale)[0] > max_width:
                scale -= 1

            draw_text_rotated(
                buffer,
                sector.label,
                layout.cx + label_radius * math.cos(mid),
                layout.cy + label_radius * math.sin(mid),
                mid,
                self.style.label_color,
                scale=scale,
                align="right",
            )

    def _draw_hub(self, buffer: Buffer, layout: WheelLayout) -> None:
        draw_circle(buffer, layout.cx, layout.cy, layout.hub_radius, self.style.hub_color)
        draw_circle(
            buffer, layout.cx, layout.cy, layout.hub_radius,
            self.style.hub_outline, filled=False, thickness=layout.stroke,
        )

    def _draw_pointer(self, buffer: Buffer, layout: WheelLayout) -> None:
        """Fixed triangular pointer at the pointer angle, tip toward the hub."""
        angle = self.geometry.pointer_angle
        cos_a, sin_a = math.cos(angle), math.sin(angle)
        # Perpendicular to the pointer direction
        px, py = -sin_a, cos_a

        def triangle(grow: float):
            tip_r = layout.radius - layout.pointer_length - grow
            base_r = layout.radius + layout.pointer_half_width / 2 + grow
            half = layout.pointer_half_width + grow
            tip = (layout.cx + tip_r * cos_a, layout.cy + tip_r * sin_a)
            base_x = layout.cx + base_r * cos_a
            base_y = layout.cy + base_r * sin_a
            return [
                tip,
                (base_x + half * px, base_y + half * py),
                (base_x - half * px, base_y - half * py),
            ]

        draw_polygon(buffer, triangle(self.pixel_ratio), self.style.pointer_outline)
        draw_polygon(buffer, triangle(0), self.style.pointer_color)

"""Graphics module: primitives, surfaces and the wheel renderer."""

from prizewheel.graphics.renderer import WheelRenderer, WheelStyle, WheelLayout
from prizewheel.graphics.surface import DrawingSurface, BufferSurface
from prizewheel.graphics.primitives import (
    clear,
    draw_circle,
    draw_line,
    draw_polygon,
    draw_radial_line,
    draw_text,
    draw_text_rotated,
    draw_wedge,
    measure_text,
)

__all__ = [
    # Renderer
    "WheelRenderer",
    "WheelStyle",
    "WheelLayout",
    # Surfaces
    "DrawingSurface",
    "BufferSurface",
    # Primitives
    "clear",
    "draw_circle",
    "draw_line",
    "draw_polygon",
    "draw_radial_line",
    "draw_text",
    "draw_text_rotated",
    "draw_wedge",
    "measure_text",
]

"""Basic drawing primitives for numpy pixel buffers.

Buffers are ``(height, width, 3)`` uint8 arrays. Angles are radians in
screen coordinates (y grows downward), so increasing angles run clockwise.
"""

from typing import Tuple, Optional, Sequence
import math

import numpy as np
from numpy.typing import NDArray

# Type aliases
Color = Tuple[int, int, int]
Point = Tuple[float, float]
Buffer = NDArray[np.uint8]

TWO_PI = 2 * math.pi


def clear(buffer: Buffer, color: Color = (0, 0, 0)) -> None:
    """Clear buffer to a solid color."""
    buffer[:, :] = color


def _grid(buffer: Buffer, cx: float, cy: float) -> Tuple[NDArray, NDArray]:
    """Pixel-center offsets from (cx, cy) for every buffer pixel."""
    h, w = buffer.shape[:2]
    y_indices, x_indices = np.ogrid[:h, :w]
    return x_indices + 0.5 - cx, y_indices + 0.5 - cy


def draw_circle(
    buffer: Buffer,
    cx: float,
    cy: float,
    radius: float,
    color: Color,
    filled: bool = True,
    thickness: int = 1,
) -> None:
    """Draw a circle on the buffer.

    Args:
        buffer: Target numpy array (height, width, 3)
        cx: Center x coordinate
        cy: Center y coordinate
        radius: Circle radius in pixels
        color: RGB color tuple
        filled: If True, fill circle; if False, draw a ring of ``thickness``
        thickness: Ring width in pixels (when filled=False)
    """
    dx, dy = _grid(buffer, cx, cy)
    dist_sq = dx ** 2 + dy ** 2

    mask = dist_sq <= radius ** 2
    if not filled:
        inner = max(0.0, radius - thickness)
        mask &= dist_sq > inner ** 2
    buffer[mask] = color


def draw_wedge(
    buffer: Buffer,
    cx: float,
    cy: float,
    radius: float,
    start_angle: float,
    end_angle: float,
    color: Color,
) -> None:
    """Fill the circular sector between two angles (clockwise from start).

    Angles may be any real values; a span of 2*pi or more fills the disc.
    """
    span = end_angle - start_angle
    if span <= 0:
        return

    dx, dy = _grid(buffer, cx, cy)
    mask = dx ** 2 + dy ** 2 <= radius ** 2
    if span < TWO_PI:
        rel = (np.arctan2(dy, dx) - start_angle) % TWO_PI
        mask = mask & (rel <= span)
    buffer[mask] = color


def draw_line(
    buffer: Buffer,
    x1: int,
    y1: int,
    x2: int,
    y2: int,
    color: Color,
    thickness: int = 1,
) -> None:
    """Draw a line using Bresenham's algorithm.

    Args:
        buffer: Target numpy array (height, width, 3)
        x1, y1: Start point
        x2, y2: End point
        color: RGB color tuple
        thickness: Line thickness in pixels
    """
    h, w = buffer.shape[:2]

    dx = abs(x2 - x1)
    dy = abs(y2 - y1)
    sx = 1 if x1 < x2 else -1
    sy = 1 if y1 < y2 else -1
    err = dx - dy

    x, y = x1, y1

    while True:
        # Draw point with thickness
        for tx in range(-thickness // 2, (thickness + 1) // 2):
            for ty in range(-thickness // 2, (thickness + 1) // 2):
                px, py = x + tx, y + ty
                if 0 <= px < w and 0 <= py < h:
                    buffer[py, px] = color

        if x == x2 and y == y2:
            break

        e2 = 2 * err
        if e2 > -dy:
            err -= dy
            x += sx
        if e2 < dx:
            err += dx
            y += sy


def draw_radial_line(
    buffer: Buffer,
    cx: float,
    cy: float,
    angle: float,
    r_inner: float,
    r_outer: float,
    color: Color,
    thickness: int = 1,
) -> None:
    """Draw a spoke from ``r_inner`` to ``r_outer`` along ``angle``."""
    cos_a, sin_a = math.cos(angle), math.sin(angle)
    draw_line(
        buffer,
        int(round(cx + r_inner * cos_a)), int(round(cy + r_inner * sin_a)),
        int(round(cx + r_outer * cos_a)), int(round(cy + r_outer * sin_a)),
        color,
        thickness,
    )


def draw_polygon(buffer: Buffer, points: Sequence[Point], color: Color) -> None:
    """Fill a convex polygon given its vertices in either winding order."""
    if len(points) < 3:
        return

    h, w = buffer.shape[:2]
    xs = [p[0] for p in points]
    ys = [p[1] for p in points]
    x1, x2 = max(0, int(math.floor(min(xs)))), min(w, int(math.ceil(max(xs))) + 1)
    y1, y2 = max(0, int(math.floor(min(ys)))), min(h, int(math.ceil(max(ys))) + 1)
    if x1 >= x2 or y1 >= y2:
        return

    py, px = np.mgrid[y1:y2, x1:x2]
    px = px + 0.5
    py = py + 0.5

    # Inside when every edge cross product has the same sign
    pos = np.ones(px.shape, dtype=bool)
    neg = np.ones(px.shape, dtype=bool)
    for i, (ax, ay) in enumerate(points):
        bx, by = points[(i + 1) % len(points)]
        cross = (bx - ax) * (py - ay) - (by - ay) * (px - ax)
        pos &= cross >= 0
        neg &= cross <= 0

    region = buffer[y1:y2, x1:x2]
    region[pos | neg] = color


def measure_text(text: str, scale: int = 1, font: Optional[dict] = None) -> Tuple[int, int]:
    """Pixel (width, height) of ``text`` in the bitmap font."""
    if font is None:
        font = _get_default_font()

    width = 0
    for char in text:
        if char == ' ':
            width += 4 * scale
            continue
        char_data = font.get(char.upper(), font.get('?', []))
        char_width = len(char_data[0]) if char_data else 3
        width += (char_width + 1) * scale

    # No spacing after the last glyph
    if text and text[-1] != ' ':
        width -= scale
    return max(0, width), 5 * scale


def render_text_mask(text: str, scale: int = 1, font: Optional[dict] = None) -> NDArray[np.bool_]:
    """Rasterize ``text`` into a boolean mask of shape (height, width)."""
    if font is None:
        font = _get_default_font()

    width, height = measure_text(text, scale, font)
    mask = np.zeros((height, width), dtype=bool)

    cursor_x = 0
    for char in text:
        if char == ' ':
            cursor_x += 4 * scale
            continue

        char_data = font.get(char.upper(), font.get('?', []))
        if not char_data:
            cursor_x += 4 * scale
            continue

        for row_idx, row in enumerate(char_data):
            for col_idx, pixel in enumerate(row):
                if pixel:
                    x = cursor_x + col_idx * scale
                    y = row_idx * scale
                    mask[y:y + scale, x:x + scale] = True

        cursor_x += (len(char_data[0]) + 1) * scale

    return mask


def draw_text(
    buffer: Buffer,
    text: str,
    x: int,
    y: int,
    color: Color,
    font: Optional[dict] = None,
    scale: int = 1,
) -> Tuple[int, int]:
    """Draw horizontal text with its top-left corner at (x, y).

    Returns:
        Tuple of (width, height) of rendered text in pixels
    """
    mask = render_text_mask(text, scale, font)
    th, tw = mask.shape
    h, w = buffer.shape[:2]

    # Clip the glyph mask to the buffer
    sx1, sy1 = max(0, -x), max(0, -y)
    sx2, sy2 = min(tw, w - x), min(th, h - y)
    if sx2 > sx1 and sy2 > sy1:
        region = buffer[y + sy1:y + sy2, x + sx1:x + sx2]
        region[mask[sy1:sy2, sx1:sx2]] = color

    return tw, th


def draw_text_rotated(
    buffer: Buffer,
    text: str,
    anchor_x: float,
    anchor_y: float,
    angle: float,
    color: Color,
    scale: int = 1,
    align: str = "right",
    font: Optional[dict] = None,
) -> None:
    """Draw text whose baseline runs along ``angle`` through an anchor.

    The text is centered vertically on the anchor. ``align`` says which end
    of the text sits on the anchor: "right" puts the last glyph there (text
    reads toward the anchor), "left" the first, "center" the middle.
    """
    mask = render_text_mask(text, scale, font)
    th, tw = mask.shape
    if tw == 0:
        return

    offsets = {"right": -tw, "center": -tw / 2, "left": 0.0}
    if align not in offsets:
        raise ValueError(f"Unknown text alignment: {align}")
    u0 = offsets[align]
    v0 = -th / 2

    # Bounding box of the rotated text
    h, w = buffer.shape[:2]
    reach = math.hypot(tw, th) + 1
    x1, x2 = max(0, int(anchor_x - reach)), min(w, int(anchor_x + reach) + 1)
    y1, y2 = max(0, int(anchor_y - reach)), min(h, int(anchor_y + reach) + 1)
    if x1 >= x2 or y1 >= y2:
        return

    # Map each destination pixel back into the text frame (no holes)
    ys, xs = np.mgrid[y1:y2, x1:x2]
    dx = xs + 0.5 - anchor_x
    dy = ys + 0.5 - anchor_y
    cos_a, sin_a = math.cos(angle), math.sin(angle)
    u = dx * cos_a + dy * sin_a
    v = -dx * sin_a + dy * cos_a

    col = np.floor(u - u0).astype(int)
    row = np.floor(v - v0).astype(int)
    inside = (col >= 0) & (col < tw) & (row >= 0) & (row < th)

    hit = np.zeros(inside.shape, dtype=bool)
    hit[inside] = mask[row[inside], col[inside]]

    region = buffer[y1:y2, x1:x2]
    region[hit] = color


def _get_default_font() -> dict:
    """Return a simple 3x5 bitmap font for basic characters."""
    # Each character is a list of rows, each row is a list of 0/1 pixels
    return _DEFAULT_FONT


_DEFAULT_FONT = {
    'A': [[0,1,0], [1,0,1], [1,1,1], [1,0,1], [1,0,1]],
    'B': [[1,1,0], [1,0,1], [1,1,0], [1,0,1], [1,1,0]],
    'C': [[0,1,1], [1,0,0], [1,0,0], [1,0,0], [0,1,1]],
    'D': [[1,1,0], [1,0,1], [1,0,1], [1,0,1], [1,1,0]],
    'E': [[1,1,1], [1,0,0], [1,1,0], [1,0,0], [1,1,1]],
    'F': [[1,1,1], [1,0,0], [1,1,0], [1,0,0], [1,0,0]],
    'G': [[0,1,1], [1,0,0], [1,0,1], [1,0,1], [0,1,1]],
    'H': [[1,0,1], [1,0,1], [1,1,1], [1,0,1], [1,0,1]],
    'I': [[1,1,1], [0,1,0], [0,1,0], [0,1,0], [1,1,1]],
    'J': [[0,0,1], [0,0,1], [0,0,1], [1,0,1], [0,1,0]],
    'K': [[1,0,1], [1,0,1], [1,1,0], [1,0,1], [1,0,1]],
    'L': [[1,0,0], [1,0,0], [1,0,0], [1,0,0], [1,1,1]],
    'M': [[1,0,1], [1,1,1], [1,0,1], [1,0,1], [1,0,1]],
    'N': [[1,0,1], [1,1,1], [1,1,1], [1,0,1], [1,0,1]],
    'O': [[0,1,0], [1,0,1], [1,0,1], [1,0,1], [0,1,0]],
    'P': [[1,1,0], [1,0,1], [1,1,0], [1,0,0], [1,0,0]],
    'Q': [[0,1,0], [1,0,1], [1,0,1], [1,1,1], [0,1,1]],
    'R': [[1,1,0], [1,0,1], [1,1,0], [1,0,1], [1,0,1]],
    'S': [[0,1,1], [1,0,0], [0,1,0], [0,0,1], [1,1,0]],
    'T': [[1,1,1], [0,1,0], [0,1,0], [0,1,0], [0,1,0]],
    'U': [[1,0,1], [1,0,1], [1,0,1], [1,0,1], [0,1,0]],
    'V': [[1,0,1], [1,0,1], [1,0,1], [0,1,0], [0,1,0]],
    'W': [[1,0,1], [1,0,1], [1,0,1], [1,1,1], [1,0,1]],
    'X': [[1,0,1], [1,0,1], [0,1,0], [1,0,1], [1,0,1]],
    'Y': [[1,0,1], [1,0,1], [0,1,0], [0,1,0], [0,1,0]],
    'Z': [[1,1,1], [0,0,1], [0,1,0], [1,0,0], [1,1,1]],
    '0': [[0,1,0], [1,0,1], [1,0,1], [1,0,1], [0,1,0]],
    '1': [[0,1,0], [1,1,0], [0,1,0], [0,1,0], [1,1,1]],
    '2': [[0,1,0], [1,0,1], [0,0,1], [0,1,0], [1,1,1]],
    '3': [[1,1,0], [0,0,1], [0,1,0], [0,0,1], [1,1,0]],
    '4': [[1,0,1], [1,0,1], [1,1,1], [0,0,1], [0,0,1]],
    '5': [[1,1,1], [1,0,0], [1,1,0], [0,0,1], [1,1,0]],
    '6': [[0,1,1], [1,0,0], [1,1,0], [1,0,1], [0,1,0]],
    '7': [[1,1,1], [0,0,1], [0,1,0], [0,1,0], [0,1,0]],
    '8': [[0,1,0], [1,0,1], [0,1,0], [1,0,1], [0,1,0]],
    '9': [[0,1,0], [1,0,1], [0,1,1], [0,0,1], [1,1,0]],
    '$': [[0,1,1], [1,1,0], [0,1,0], [0,1,1], [1,1,0]],
    '%': [[1,0,1], [0,0,1], [0,1,0], [1,0,0], [1,0,1]],
    '?': [[0,1,0], [1,0,1], [0,0,1], [0,0,0], [0,1,0]],
    '!': [[0,1,0], [0,1,0], [0,1,0], [0,0,0], [0,1,0]],
    '.': [[0,0,0], [0,0,0], [0,0,0], [0,0,0], [0,1,0]],
    ',': [[0,0,0], [0,0,0], [0,0,0], [0,1,0], [1,0,0]],
    ':': [[0,0,0], [0,1,0], [0,0,0], [0,1,0], [0,0,0]],
    '-': [[0,0,0], [0,0,0], [1,1,1], [0,0,0], [0,0,0]],
    '+': [[0,0,0], [0,1,0], [1,1,1], [0,1,0], [0,0,0]],
    '*': [[0,0,0], [1,0,1], [0,1,0], [1,0,1], [0,0,0]],
    '#': [[1,0,1], [1,1,1], [1,0,1], [1,1,1], [1,0,1]],
}

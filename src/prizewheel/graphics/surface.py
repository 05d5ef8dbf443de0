"""
Drawing surfaces the wheel renders onto.

A surface owns a physical pixel buffer of ``logical size * pixel_ratio``
so drawing code can scale strokes and text for dense displays.
"""

from abc import ABC, abstractmethod

import numpy as np
from numpy.typing import NDArray


class DrawingSurface(ABC):
    """Abstract base class for pixel surfaces."""

    @property
    @abstractmethod
    def width(self) -> int:
        """Surface width in physical pixels."""
        ...

    @property
    @abstractmethod
    def height(self) -> int:
        """Surface height in physical pixels."""
        ...

    @property
    @abstractmethod
    def pixel_ratio(self) -> int:
        """Physical pixels per logical pixel."""
        ...

    @abstractmethod
    def set_buffer(self, buffer: NDArray[np.uint8]) -> None:
        """
        Set entire surface buffer.

        Args:
            buffer: numpy array of shape (height, width, 3) with RGB values
        """
        ...

    @abstractmethod
    def get_buffer(self) -> NDArray[np.uint8]:
        """Get copy of current buffer."""
        ...

    @abstractmethod
    def clear(self, r: int = 0, g: int = 0, b: int = 0) -> None:
        """Clear surface to specified color."""
        ...


class BufferSurface(DrawingSurface):
    """In-memory surface backed by a numpy buffer."""

    def __init__(self, size: int = 240, pixel_ratio: int = 1) -> None:
        if pixel_ratio < 1:
            raise ValueError(f"pixel_ratio must be >= 1, got {pixel_ratio}")
        self._logical_size = size
        self._pixel_ratio = pixel_ratio
        physical = size * pixel_ratio
        self._buffer = np.zeros((physical, physical, 3), dtype=np.uint8)

    @property
    def width(self) -> int:
        return self._buffer.shape[1]

    @property
    def height(self) -> int:
        return self._buffer.shape[0]

    @property
    def logical_size(self) -> int:
        return self._logical_size

    @property
    def pixel_ratio(self) -> int:
        return self._pixel_ratio

    @property
    def buffer(self) -> NDArray[np.uint8]:
        """Live buffer (drawn into in place)."""
        return self._buffer

    def set_buffer(self, buffer: NDArray[np.uint8]) -> None:
        if buffer.shape == self._buffer.shape:
            np.copyto(self._buffer, buffer)
        else:
            # Crop or pad to fit
            resized = np.zeros_like(self._buffer)
            h = min(buffer.shape[0], self.height)
            w = min(buffer.shape[1], self.width)
            resized[:h, :w] = buffer[:h, :w]
            np.copyto(self._buffer, resized)

    def get_buffer(self) -> NDArray[np.uint8]:
        return self._buffer.copy()

    def clear(self, r: int = 0, g: int = 0, b: int = 0) -> None:
        self._buffer[:, :] = (r, g, b)

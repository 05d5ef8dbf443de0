"""
Simulated wheel display for the desktop simulator.

Keeps the numpy buffer of a BufferSurface and turns it into a scaled
pygame surface for the window.
"""

import pygame

from prizewheel.graphics.surface import BufferSurface


class SimulatedDisplay(BufferSurface):
    """Square wheel display rendered through pygame."""

    def render(self, scale: int = 1) -> pygame.Surface:
        """
        Render buffer to a pygame surface.

        Args:
            scale: Integer upscale factor

        Returns:
            pygame.Surface with rendered display
        """
        # surfarray expects (width, height, 3)
        surface = pygame.surfarray.make_surface(self.buffer.swapaxes(0, 1))
        if scale == 1:
            return surface
        return pygame.transform.scale(
            surface, (self.width * scale, self.height * scale)
        )

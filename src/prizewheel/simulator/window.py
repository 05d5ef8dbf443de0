"""
Main simulator window using pygame.

Shows the wheel display, the reveal message and a debug panel, and maps
the keyboard onto the wheel's triggers.
"""

import pygame
import asyncio
import logging
from dataclasses import dataclass

from prizewheel.animation.animator import monotonic_ms
from prizewheel.core.state import StateMachine, State
from prizewheel.core.events import (
    EventBus,
    Event,
    EventType,
    button_press_event,
    claim_press_event,
    tick_event,
)
from prizewheel.settings import Settings
from prizewheel.simulator.display import SimulatedDisplay

logger = logging.getLogger(__name__)


@dataclass
class WindowConfig:
    """Simulator window configuration."""
    width: int = 960
    height: int = 720
    title: str = "Prize Wheel Simulator"
    fullscreen: bool = False
    fps: int = 60

    # Wheel display upscale
    scale: int = 2

    # Colors
    bg_color: tuple[int, int, int] = (20, 20, 30)
    panel_color: tuple[int, int, int] = (40, 40, 50)
    text_color: tuple[int, int, int] = (200, 200, 220)
    accent_color: tuple[int, int, int] = (100, 150, 255)
    notice_color: tuple[int, int, int] = (255, 255, 221)
    claim_color: tuple[int, int, int] = (0, 200, 83)

    @classmethod
    def from_settings(cls, settings: Settings) -> "WindowConfig":
        return cls(
            width=settings.simulator_window_width,
            height=settings.simulator_window_height,
            fullscreen=settings.simulator_fullscreen,
            fps=settings.display.fps,
            scale=settings.simulator_scale,
        )


class SimulatorWindow:
    """
    Desktop window hosting the simulated wheel display.

    Keyboard Mapping:
        SPACE / ENTER: Spin
        C: Claim reward
        D: Toggle debug panel
        L: Toggle log viewer
        S: Capture screenshot
        Q / ESC: Exit simulator
    """

    def __init__(
        self,
        display: SimulatedDisplay,
        config: WindowConfig | None = None,
        state_machine: StateMachine | None = None,
        event_bus: EventBus | None = None
    ) -> None:
        self.config = config or WindowConfig()
        self.display = display
        self.state_machine = state_machine or StateMachine()
        self.event_bus = event_bus or EventBus()

        # Pygame setup
        self._screen: pygame.Surface | None = None
        self._clock: pygame.time.Clock | None = None
        self._running = False
        self._frame_count = 0
        self._show_debug = True

        self._layout: dict[str, pygame.Rect] = {}

        # Fonts
        self._font: pygame.font.Font | None = None
        self._small_font: pygame.font.Font | None = None

        # Log viewer
        self._show_log = False
        self._log_buffer: list[str] = []
        self._max_log_lines = 20
        self._log_handler: logging.Handler | None = None

        self._setup_log_capture()

        logger.info("SimulatorWindow created")

    def _setup_log_capture(self) -> None:
        """Capture log records for the on-screen log viewer."""
        class SimulatorLogHandler(logging.Handler):
            def __init__(self, window: 'SimulatorWindow'):
                super().__init__()
                self.window = window

            def emit(self, record):
                msg = self.format(record)
                self.window._log_buffer.append(msg)
                # Keep buffer size limited
                if len(self.window._log_buffer) > self.window._max_log_lines * 2:
                    self.window._log_buffer = self.window._log_buffer[-self.window._max_log_lines:]

        self._log_handler = SimulatorLogHandler(self)
        self._log_handler.setFormatter(logging.Formatter('%(levelname).1s %(name)s: %(message)s'))
        logging.getLogger().addHandler(self._log_handler)

    def _init_pygame(self) -> None:
        """Initialize pygame and create window."""
        pygame.init()
        pygame.display.set_caption(self.config.title)

        flags = pygame.DOUBLEBUF
        if self.config.fullscreen:
            flags |= pygame.FULLSCREEN

        self._screen = pygame.display.set_mode(
            (self.config.width, self.config.height),
            flags
        )
        self._clock = pygame.time.Clock()

        pygame.font.init()
        self._font = pygame.font.SysFont("dejavusans,arial,helvetica", 22, bold=True)
        self._small_font = pygame.font.SysFont("dejavusans,arial,helvetica", 14)

        self._calculate_layout()

        logger.info(f"Pygame initialized: {self.config.width}x{self.config.height}")

    def _calculate_layout(self) -> None:
        """Calculate positions for all UI elements."""
        w, h = self.config.width, self.config.height
        wheel_w = self.display.width * self.config.scale
        wheel_h = self.display.height * self.config.scale

        debug_w = 240
        wheel_x = (w - debug_w - wheel_w) // 2
        wheel_y = 50

        message_y = wheel_y + wheel_h + 20
        message_h = max(60, h - message_y - 20)

        self._layout = {
            "wheel": pygame.Rect(wheel_x, wheel_y, wheel_w, wheel_h),
            "message": pygame.Rect(20, message_y, w - debug_w - 40, message_h),
            "debug": pygame.Rect(w - debug_w - 10, 50, debug_w, h - 100),
        }

    def _handle_events(self) -> None:
        """Process pygame events."""
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self._running = False

            elif event.type == pygame.KEYDOWN:
                self._handle_keydown(event)

    def _handle_keydown(self, event: pygame.event.Event) -> None:
        """Handle key press."""
        key = event.key

        if key == pygame.K_ESCAPE or key == pygame.K_q:
            self._running = False
        elif key == pygame.K_d:
            self._show_debug = not self._show_debug
        elif key == pygame.K_l:
            self._show_log = not self._show_log
        elif key == pygame.K_s:
            self._capture_screenshot()

        # Triggers
        elif key in (pygame.K_SPACE, pygame.K_RETURN, pygame.K_KP_ENTER):
            self.event_bus.emit(button_press_event(source="keyboard"))
        elif key == pygame.K_c:
            self.event_bus.emit(claim_press_event(source="keyboard"))

    def _render(self) -> None:
        """Render all UI elements."""
        if not self._screen:
            return

        self._screen.fill(self.config.bg_color)

        self._render_wheel()
        self._render_message_panel()
        if self._show_debug:
            self._render_debug_panel()
        if self._show_log:
            self._render_log_panel()
        self._render_title_bar()

        pygame.display.flip()

    def _render_wheel(self) -> None:
        rect = self._layout["wheel"]
        surface = self.display.render(self.config.scale)

        pygame.draw.rect(self._screen, self.config.panel_color, rect.inflate(8, 8))
        self._screen.blit(surface, rect.topleft)

    def _render_message_panel(self) -> None:
        """Reveal message, notice line and the trigger hints."""
        rect = self._layout["message"]
        pygame.draw.rect(self._screen, self.config.panel_color, rect, border_radius=8)

        if not self._font:
            return

        ctx = self.state_machine.context
        y = rect.y + 10
        if ctx.message:
            text_surface = self._font.render(ctx.message, True, self.config.text_color)
            self._screen.blit(text_surface, text_surface.get_rect(midtop=(rect.centerx, y)))
            y += text_surface.get_height() + 4
        if ctx.detail:
            text_surface = self._small_font.render(ctx.detail, True, self.config.notice_color)
            self._screen.blit(text_surface, text_surface.get_rect(midtop=(rect.centerx, y)))
            y += text_surface.get_height() + 8

        if self.state_machine.state == State.AWAITING_CLAIM:
            hint, color = "[C] CLAIM", self.config.claim_color
        elif ctx.spinning:
            hint, color = "SPIN", (90, 90, 110)
        else:
            hint, color = "[SPACE] SPIN", self.config.accent_color
        text_surface = self._font.render(hint, True, color)
        self._screen.blit(text_surface, text_surface.get_rect(midtop=(rect.centerx, y)))

    def _render_debug_panel(self) -> None:
        """Render the debug information panel."""
        rect = self._layout["debug"]
        pygame.draw.rect(self._screen, self.config.panel_color, rect, border_radius=5)

        if not self._small_font:
            return

        ctx = self.state_machine.context
        lines = [
            f"FPS: {self._clock.get_fps():.1f}" if self._clock else "FPS: --",
            f"Frame: {self._frame_count}",
            f"State: {self.state_machine.state.name}",
            f"Step: {ctx.spin_step.name}",
            f"Rotation: {ctx.rotation:.3f}",
            f"Target: {ctx.target_index}",
            f"Result: {ctx.result_index}",
            f"Spins: {ctx.spins_total}",
            "",
            "---- CONTROLS ----",
            "SPACE   Spin",
            "C       Claim",
            "",
            "---- SYSTEM ----",
            "D  Debug panel",
            "L  Log viewer",
            "S  Screenshot",
            "Q  Quit",
        ]

        y = rect.y + 10
        for line in lines:
            text_surface = self._small_font.render(line, True, self.config.text_color)
            self._screen.blit(text_surface, (rect.x + 10, y))
            y += 18

    def _render_log_panel(self) -> None:
        """Render the log viewer panel."""
        if not self._small_font:
            return

        rect = pygame.Rect(10, 50, 360, self.config.height - 150)

        surf = pygame.Surface((rect.width, rect.height), pygame.SRCALPHA)
        surf.fill((20, 25, 35, 230))
        self._screen.blit(surf, rect.topleft)
        pygame.draw.rect(self._screen, (60, 80, 100), rect, 1, border_radius=5)

        y = rect.y + 8
        for line in self._log_buffer[-self._max_log_lines:]:
            # Color code by level
            if line.startswith('E'):
                color = (255, 100, 100)
            elif line.startswith('W'):
                color = (255, 200, 100)
            elif line.startswith('I'):
                color = (150, 200, 150)
            else:
                color = (150, 150, 170)

            display_line = line[:52] + "..." if len(line) > 55 else line
            text_surf = self._small_font.render(display_line, True, color)
            self._screen.blit(text_surf, (rect.x + 8, y))
            y += 16

            if y > rect.bottom - 10:
                break

    def _render_title_bar(self) -> None:
        if not self._font:
            return

        title = f"PRIZE WHEEL | {self.state_machine.state.name}"
        text_surface = self._font.render(title, True, self.config.accent_color)
        self._screen.blit(text_surface, (20, 12))

    def _capture_screenshot(self) -> None:
        """Save the whole window to a PNG."""
        if self._screen:
            filename = f"screenshot_{self._frame_count}.png"
            pygame.image.save(self._screen, filename)
            logger.info(f"Screenshot saved: {filename}")

    async def run(self) -> None:
        """Main simulator loop."""
        self._init_pygame()
        self._running = True

        logger.info("Simulator started")

        try:
            while self._running:
                self._handle_events()

                # Frame tick drives the animator
                delta = self._clock.get_time() / 1000.0 if self._clock else 0.0
                self.event_bus.emit(tick_event(monotonic_ms(), delta, self._frame_count))

                self._render()

                if self._clock:
                    self._clock.tick(self.config.fps)

                self._frame_count += 1

                # Yield to other tasks
                await asyncio.sleep(0)
        finally:
            self._cleanup()

    def _cleanup(self) -> None:
        """Clean up pygame resources."""
        self.event_bus.emit(Event(EventType.SHUTDOWN, source="simulator"))
        if self._log_handler:
            logging.getLogger().removeHandler(self._log_handler)
            self._log_handler = None
        pygame.quit()
        logger.info("Simulator stopped")

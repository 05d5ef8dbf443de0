"""
Main entry point for the prize wheel.

Wires settings, the wheel collaborators and the pygame simulator window
together and runs the frame loop.
"""

import asyncio
import logging
import sys
from pathlib import Path

from prizewheel.animation.animator import Animator
from prizewheel.core.events import EventBus, Event, EventType
from prizewheel.core.state import StateMachine
from prizewheel.graphics.renderer import WheelRenderer, WheelStyle
from prizewheel.graphics.surface import DrawingSurface
from prizewheel.modes.base import ModeContext
from prizewheel.modes.prize_wheel import PrizeWheelMode
from prizewheel.settings import Settings, get_settings, hex_to_rgb
from prizewheel.utils.promotion import create_promotion
from prizewheel.wheel.geometry import WheelGeometry, build_sectors

logger = logging.getLogger(__name__)


def setup_logging(debug: bool = False, log_file: Path | None = None) -> None:
    """Configure console and file logging.

    The log file is truncated on each run.
    """
    formatter = logging.Formatter(
        "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S"
    )
    level = logging.DEBUG if debug else logging.INFO

    console_handler = logging.StreamHandler()
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.addHandler(console_handler)

    if log_file is not None:
        file_handler = logging.FileHandler(log_file, mode='w', encoding='utf-8')
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)
        # File gets everything, console follows the debug flag
        root_logger.setLevel(logging.DEBUG)


class PrizeWheelApp:
    """Owns the shared components and connects them through the event bus."""

    def __init__(self, settings: Settings, surface: DrawingSurface) -> None:
        self.settings = settings
        wheel = settings.wheel

        sectors = build_sectors(wheel.labels, [hex_to_rgb(c) for c in wheel.colors])
        self.geometry = WheelGeometry(sectors, pointer_angle=wheel.pointer_angle)

        self.state_machine = StateMachine()
        self.event_bus = EventBus()
        self.animator = Animator(easing=wheel.easing)
        self.renderer = WheelRenderer(
            self.geometry,
            WheelStyle.from_settings(settings.display),
            pixel_ratio=surface.pixel_ratio,
        )
        self.surface = surface

        self.context = ModeContext(
            state_machine=self.state_machine,
            event_bus=self.event_bus,
            renderer=self.renderer,
            animator=self.animator,
            surface=surface,
            promotion=create_promotion(settings.promotion),
            wheel=wheel,
        )
        self.mode = PrizeWheelMode(self.context)

        self._unsubscribe = [
            self.event_bus.subscribe(EventType.BUTTON_PRESS, self.mode.handle_input),
            self.event_bus.subscribe(EventType.CLAIM_PRESS, self.mode.handle_input),
            self.event_bus.subscribe(EventType.TICK, self.on_tick),
            self.event_bus.subscribe(EventType.SHUTDOWN, self.on_shutdown),
        ]
        self.state_machine.add_listener(self._on_state_changed)

        logger.info(
            f"Wheel configured: {self.geometry.sector_count} sectors, "
            f"{surface.width}x{surface.height} px"
        )

    def start(self) -> None:
        self.mode.enter()

    def on_tick(self, event: Event) -> None:
        """Advance the animator and the mode for one frame."""
        now_ms = event.data.get("now_ms")
        delta_ms = event.data.get("delta", 0.0) * 1000

        self.animator.update(now_ms)
        self.mode.update(delta_ms)

    def on_shutdown(self, event: Event) -> None:
        if self.mode.is_active:
            self.mode.exit()
        for unsubscribe in self._unsubscribe:
            unsubscribe()
        self._unsubscribe.clear()

    def _on_state_changed(self, old_state, new_state, context) -> None:
        self.event_bus.emit(Event(
            EventType.STATE_CHANGED,
            data={"from": old_state.name, "to": new_state.name},
            source="state_machine",
        ))


async def run_simulator(settings: Settings) -> None:
    """Run the pygame simulator."""
    from prizewheel.simulator.display import SimulatedDisplay
    from prizewheel.simulator.window import SimulatorWindow, WindowConfig

    display = SimulatedDisplay(settings.display.size, settings.display.pixel_ratio)
    app = PrizeWheelApp(settings, display)

    window = SimulatorWindow(
        display,
        config=WindowConfig.from_settings(settings),
        state_machine=app.state_machine,
        event_bus=app.event_bus,
    )
    app.start()

    await window.run()


def main() -> None:
    """Main entry point."""
    from dotenv import load_dotenv

    # Load environment variables
    load_dotenv()

    settings = get_settings()
    setup_logging(settings.debug, settings.log_file)

    logger.info("Prize wheel starting...")

    try:
        asyncio.run(run_simulator(settings))
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
    except Exception as e:
        logger.exception(f"Fatal error: {e}")
        sys.exit(1)

    logger.info("Prize wheel stopped")


if __name__ == "__main__":
    main()

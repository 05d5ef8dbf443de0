"""
Settings, promotion and application wiring tests.
"""

import logging
import os
import tempfile
import unittest
from pathlib import Path
from unittest.mock import patch

from pydantic import ValidationError

from prizewheel.animation.animator import monotonic_ms
from prizewheel.core.events import Event, EventType, button_press_event, claim_press_event, tick_event
from prizewheel.core.state import SpinStep, State
from prizewheel.graphics.surface import BufferSurface
from prizewheel.main import PrizeWheelApp, setup_logging
from prizewheel.settings import (
    DisplaySettings,
    PromotionSettings,
    Settings,
    WheelSettings,
    get_settings,
    hex_to_rgb,
)
from prizewheel.utils.promotion import (
    BrowserPromotion,
    NullPromotion,
    create_promotion,
    invoke_promotion,
)


class TestSettings(unittest.TestCase):

    def tearDown(self):
        get_settings.cache_clear()

    def test_defaults(self):
        wheel = WheelSettings()
        self.assertEqual(wheel.labels, ["Try Again", "$5", "$10", "$20", "$50", "$100"])
        self.assertEqual(wheel.extra_full_turns, 7)
        self.assertEqual(wheel.spin_duration_ms, 4200.0)
        self.assertEqual(DisplaySettings().pixel_ratio, 1)

    def test_hex_to_rgb(self):
        self.assertEqual(hex_to_rgb("#f87171"), (248, 113, 113))
        self.assertEqual(hex_to_rgb("0b1020"), (11, 16, 32))
        with self.assertRaises(ValueError):
            hex_to_rgb("#fff")

    def test_mismatched_colors_rejected(self):
        with self.assertRaises(ValidationError):
            WheelSettings(labels=["Try Again", "$100"], colors=["#000000"])

    def test_outcome_labels_must_be_on_the_wheel(self):
        with self.assertRaises(ValidationError):
            WheelSettings(labels=["Try Again", "$5"], colors=["#000000", "#111111"])

    def test_bad_color_rejected(self):
        with self.assertRaises(ValidationError):
            WheelSettings(
                labels=["Try Again", "$100"],
                colors=["#000000", "#12345"],
            )

    def test_too_few_turns_rejected(self):
        for turns in (-1, 0, 1):
            with self.assertRaises(ValidationError, msg=turns):
                WheelSettings(extra_full_turns=turns)
        self.assertEqual(WheelSettings(extra_full_turns=2).extra_full_turns, 2)

    def test_environment_overrides(self):
        env = {
            "PRIZEWHEEL_WHEEL_EXTRA_FULL_TURNS": "3",
            "PRIZEWHEEL_PROMO_ENABLED": "false",
            "PRIZEWHEEL_DEBUG": "true",
        }
        with patch.dict(os.environ, env):
            settings = Settings()
        self.assertEqual(settings.wheel.extra_full_turns, 3)
        self.assertFalse(settings.promotion.enabled)
        self.assertTrue(settings.debug)

    def test_get_settings_is_cached(self):
        self.assertIs(get_settings(), get_settings())


class TestPromotion(unittest.TestCase):

    def test_browser_promotion_opens_new_tab(self):
        with patch("prizewheel.utils.promotion.webbrowser.open", return_value=True) as opener:
            self.assertTrue(invoke_promotion(BrowserPromotion("https://example.com/p")))
        opener.assert_called_once_with("https://example.com/p", new=2)

    def test_browser_refusal_is_swallowed(self):
        with patch("prizewheel.utils.promotion.webbrowser.open", return_value=False):
            with self.assertLogs("prizewheel.utils.promotion", level="WARNING"):
                self.assertFalse(invoke_promotion(BrowserPromotion("https://example.com/p")))

    def test_create_promotion(self):
        self.assertIsInstance(create_promotion(PromotionSettings(enabled=False)), NullPromotion)
        action = create_promotion(PromotionSettings(url="https://example.com/x"))
        self.assertIsInstance(action, BrowserPromotion)
        self.assertEqual(action.url, "https://example.com/x")

    def test_null_promotion(self):
        self.assertTrue(invoke_promotion(NullPromotion()))


class TestPrizeWheelApp(unittest.TestCase):

    def setUp(self):
        settings = Settings(promotion=PromotionSettings(enabled=False))
        self.app = PrizeWheelApp(settings, BufferSurface(size=64))
        self.app.start()

    def tick(self, ahead_ms: float) -> None:
        self.app.event_bus.emit(tick_event(monotonic_ms() + ahead_ms, 0.016, 1))

    def test_start_draws_the_wheel(self):
        self.assertTrue(self.app.mode.is_active)
        self.assertGreater(int(self.app.surface.get_buffer().max()), 0)

    def test_events_and_ticks_run_the_flow(self):
        bus = self.app.event_bus
        changes = []
        bus.subscribe(EventType.STATE_CHANGED, changes.append)

        bus.emit(button_press_event())
        self.assertEqual(self.app.state_machine.state, State.SPINNING)
        self.tick(100.0)
        self.assertEqual(self.app.state_machine.state, State.SPINNING)
        self.tick(10_000.0)
        self.assertEqual(self.app.state_machine.state, State.IDLE)
        self.assertEqual(self.app.state_machine.context.spin_step, SpinStep.SECOND)

        bus.emit(button_press_event())
        self.tick(10_000.0)
        self.assertEqual(self.app.state_machine.state, State.AWAITING_CLAIM)

        bus.emit(claim_press_event())
        self.assertEqual(self.app.state_machine.state, State.IDLE)
        self.assertEqual(self.app.state_machine.context.rotation, 0.0)

        self.assertEqual(
            [(e.data["from"], e.data["to"]) for e in changes],
            [
                ("IDLE", "SPINNING"),
                ("SPINNING", "IDLE"),
                ("IDLE", "SPINNING"),
                ("SPINNING", "AWAITING_CLAIM"),
                ("AWAITING_CLAIM", "IDLE"),
            ],
        )

    def test_shutdown_detaches_the_mode(self):
        self.app.event_bus.emit(Event(EventType.SHUTDOWN))
        self.assertFalse(self.app.mode.is_active)
        self.app.event_bus.emit(button_press_event())
        self.assertEqual(self.app.state_machine.state, State.IDLE)


class TestLogging(unittest.TestCase):

    def setUp(self):
        self.root = logging.getLogger()
        self.saved_handlers = list(self.root.handlers)
        self.saved_level = self.root.level

    def tearDown(self):
        for handler in list(self.root.handlers):
            if handler not in self.saved_handlers:
                handler.close()
                self.root.removeHandler(handler)
        self.root.setLevel(self.saved_level)

    def test_log_file_is_truncated_per_run(self):
        with tempfile.TemporaryDirectory() as tmp:
            log_file = Path(tmp) / "prizewheel.log"
            log_file.write_text("previous run\n", encoding="utf-8")

            setup_logging(debug=False, log_file=log_file)
            logging.getLogger("prizewheel.test").info("fresh run")
            for handler in self.root.handlers:
                handler.flush()

            content = log_file.read_text(encoding="utf-8")
            self.assertNotIn("previous run", content)
            self.assertIn("[INFO] prizewheel.test: fresh run", content)

            for handler in list(self.root.handlers):
                if handler not in self.saved_handlers:
                    handler.close()
                    self.root.removeHandler(handler)


if __name__ == "__main__":
    unittest.main()

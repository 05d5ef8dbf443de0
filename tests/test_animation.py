"""
Easing, timeline and animator tests.

The animator is driven with a fake millisecond clock so every frame is
deterministic.
"""

import unittest

from prizewheel.animation.animator import Animator
from prizewheel.animation.easing import (
    Easing,
    ease,
    ease_out_cubic,
    ease_out_quad,
    get_easing,
    interpolate,
)
from prizewheel.animation.timeline import Timeline, Track


class FakeClock:
    """Settable millisecond clock."""

    def __init__(self, now: float = 0.0):
        self.now = now

    def __call__(self) -> float:
        return self.now


class TestEasing(unittest.TestCase):

    def test_endpoints(self):
        self.assertEqual(ease(0.0), 0.0)
        self.assertEqual(ease(1.0), 1.0)

    def test_non_decreasing(self):
        samples = [ease(i / 200) for i in range(201)]
        for a, b in zip(samples, samples[1:]):
            self.assertLessEqual(a, b)

    def test_clamps_out_of_range_input(self):
        self.assertEqual(ease(-0.5), 0.0)
        self.assertEqual(ease(1.5), 1.0)

    def test_decelerates_toward_end(self):
        early = ease(0.1) - ease(0.0)
        late = ease(1.0) - ease(0.9)
        self.assertGreater(early, late * 50)

    def test_cubic_value(self):
        self.assertAlmostEqual(ease_out_cubic(0.5), 0.875)

    def test_every_named_curve_hits_endpoints(self):
        for easing in Easing:
            func = get_easing(easing)
            self.assertAlmostEqual(func(0.0), 0.0, places=6, msg=easing.name)
            self.assertAlmostEqual(func(1.0), 1.0, places=6, msg=easing.name)

    def test_lookup_by_name(self):
        self.assertIs(get_easing("ease_out_quad"), ease_out_quad)
        self.assertIs(get_easing("EASE_OUT_QUAD"), ease_out_quad)

    def test_default_curve_is_ease(self):
        self.assertIs(get_easing(Easing.EASE_OUT_CUBIC), ease)
        self.assertIs(get_easing("ease_out_cubic"), ease)

    def test_unknown_name(self):
        with self.assertRaises(ValueError):
            get_easing("bounce_forever")

    def test_interpolate(self):
        self.assertAlmostEqual(interpolate(10, 20, 0.5), 15)
        self.assertAlmostEqual(interpolate(0, 8, 0.5, Easing.EASE_OUT_CUBIC), 7)


class TestTimeline(unittest.TestCase):

    def test_tween_uses_easing_on_the_way_in(self):
        timeline = Timeline.tween("rotation", 0.0, 8.0, 1000, easing=Easing.EASE_OUT_CUBIC)
        timeline.play(from_start=True)
        timeline.seek(500)
        self.assertAlmostEqual(timeline.get_value("rotation"), 7.0)

    def test_seek_to_end_finishes(self):
        timeline = Timeline.tween("x", 1.0, 2.0, 100)
        timeline.play()
        timeline.seek(99)
        self.assertFalse(timeline.is_finished)
        timeline.seek(250)
        self.assertTrue(timeline.is_finished)
        self.assertEqual(timeline.progress, 1.0)
        self.assertEqual(timeline.get_value("x"), 2.0)

    def test_seek_while_stopped_never_finishes(self):
        timeline = Timeline.tween("x", 0.0, 10.0, 100, easing=Easing.LINEAR)
        timeline.seek(500)
        self.assertFalse(timeline.is_finished)
        self.assertEqual(timeline.get_value("x"), 10.0)

    def test_zero_duration_reports_full_progress(self):
        timeline = Timeline.tween("x", 0.0, 3.0, 0)
        self.assertEqual(timeline.progress, 1.0)
        self.assertEqual(timeline.get_value("x"), 3.0)

    def test_middle_keyframe_splits_segments(self):
        track = Track("x")
        track.add_keyframe(1.0, 30.0, Easing.LINEAR).add_keyframe(0.0, 0.0)
        track.add_keyframe(0.5, 10.0, Easing.LINEAR)
        self.assertAlmostEqual(track.get_value_at(0.25), 5.0)
        self.assertAlmostEqual(track.get_value_at(0.75), 20.0)

    def test_missing_track(self):
        timeline = Timeline(name="empty")
        self.assertIsNone(timeline.get_value("nope"))
        self.assertIsNone(Track("empty").get_value_at(0.5))


class TestAnimator(unittest.TestCase):

    def setUp(self):
        self.clock = FakeClock(1000.0)
        self.animator = Animator(clock=self.clock)
        self.frames = []

    def test_final_frame_is_exact_target(self):
        target = 7 * 6.283185307179586 - 1.5707963267948966 - 0.5235987755982988
        self.animator.animate(0.1, target, 4200, self.frames.append)

        for t in (0, 16, 1000, 2500, 4199, 4300):
            self.clock.now = 1000.0 + t
            self.animator.update()

        self.assertEqual(self.frames[-1], target)
        self.assertEqual(self.animator.animation_count, 0)

    def test_interpolates_with_ease(self):
        self.animator.animate(0.0, 10.0, 1000, self.frames.append)
        self.animator.update(1000.0)
        self.animator.update(1500.0)
        self.assertAlmostEqual(self.frames[0], 0.0)
        self.assertAlmostEqual(self.frames[1], 10.0 * ease(0.5))

    def test_frames_never_go_backwards(self):
        self.animator.animate(2.0, 50.0, 4200, self.frames.append)
        for t in range(0, 4400, 16):
            self.animator.update(1000.0 + t)
        for a, b in zip(self.frames, self.frames[1:]):
            self.assertLessEqual(a, b)
        self.assertEqual(self.frames[-1], 50.0)

    def test_done_callback_runs_after_final_frame(self):
        calls = []
        animation = self.animator.animate(0.0, 3.0, 100, lambda r: calls.append(("frame", r)))
        animation.add_done_callback(lambda a: calls.append(("done", a.to_rotation)))

        self.animator.update(1050.0)
        self.assertNotIn(("done", 3.0), calls)

        self.animator.update(1100.0)
        self.assertEqual(calls[-2:], [("frame", 3.0), ("done", 3.0)])
        self.assertTrue(animation.done)

    def test_callback_added_after_completion_runs_immediately(self):
        animation = self.animator.animate(0.0, 1.0, 10, self.frames.append)
        self.animator.update(2000.0)
        seen = []
        animation.add_done_callback(seen.append)
        self.assertEqual(seen, [animation])

    def test_zero_duration_completes_on_first_step(self):
        animation = self.animator.animate(0.0, 4.0, 0, self.frames.append)
        remaining = self.animator.update(1000.0)
        self.assertEqual(remaining, 0)
        self.assertEqual(self.frames, [4.0])
        self.assertTrue(animation.done)

    def test_reads_clock_when_no_timestamp_given(self):
        self.animator.animate(0.0, 1.0, 100, self.frames.append)
        self.clock.now = 1200.0
        self.animator.update()
        self.assertEqual(self.frames, [1.0])

    def test_duplicate_name_rejected(self):
        self.animator.animate(0.0, 1.0, 100, self.frames.append)
        with self.assertRaises(RuntimeError):
            self.animator.animate(0.0, 2.0, 100, self.frames.append)

    def test_done_callback_may_start_next_animation(self):
        def chain(animation):
            self.animator.animate(animation.to_rotation, 2.0, 100, self.frames.append)

        first = self.animator.animate(0.0, 1.0, 100, self.frames.append)
        first.add_done_callback(chain)

        self.animator.update(1100.0)
        self.assertEqual(self.animator.animation_count, 1)
        self.animator.update(1300.0)
        self.assertEqual(self.frames[-1], 2.0)

    def test_failing_done_callback_is_logged(self):
        def boom(animation):
            raise RuntimeError("boom")

        animation = self.animator.animate(0.0, 1.0, 100, self.frames.append)
        animation.add_done_callback(boom)
        with self.assertLogs("prizewheel.animation.animator", level="ERROR"):
            self.animator.update(1100.0)
        self.assertEqual(self.animator.animation_count, 0)

    def test_resolve_before_finish_is_an_error(self):
        animation = self.animator.animate(0.0, 1.0, 100, self.frames.append)
        with self.assertRaises(RuntimeError):
            animation.resolve()

    def test_unknown_easing_rejected_up_front(self):
        with self.assertRaises(ValueError):
            Animator(clock=self.clock, easing="wobble")


if __name__ == "__main__":
    unittest.main()

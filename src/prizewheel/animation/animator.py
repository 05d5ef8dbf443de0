"""Clock-driven rotation animator.

The animator never blocks and never schedules itself: whoever owns the
display loop calls :meth:`Animator.update` once per refresh with a
monotonic timestamp (or lets the animator read its injected clock). Tests
drive it with fake timestamps.
"""

from typing import Optional, Callable, Dict, List
from dataclasses import dataclass, field
import logging
import time

from prizewheel.animation.timeline import Timeline
from prizewheel.animation.easing import Easing, get_easing

logger = logging.getLogger(__name__)

FrameCallback = Callable[[float], None]
DoneCallback = Callable[["RotationAnimation"], None]


def monotonic_ms() -> float:
    """Default clock: monotonic milliseconds."""
    return time.monotonic() * 1000.0


@dataclass
class RotationAnimation:
    """Handle for one in-flight rotation.

    Completion is signalled through done callbacks, which run only after the
    final frame (exactly ``to_rotation``) has been handed to ``on_frame``.
    """

    name: str
    from_rotation: float
    to_rotation: float
    duration_ms: float
    on_frame: FrameCallback
    started_at: float
    timeline: Timeline
    frames: int = 0
    _done: bool = field(default=False, repr=False)
    _callbacks: List[DoneCallback] = field(default_factory=list, repr=False)

    @property
    def done(self) -> bool:
        return self._done

    @property
    def current(self) -> float:
        return self.timeline.get_value("rotation")

    def add_done_callback(self, callback: DoneCallback) -> None:
        """Run ``callback`` on completion (immediately if already done)."""
        if self._done:
            callback(self)
        else:
            self._callbacks.append(callback)

    def step(self, now_ms: float) -> bool:
        """Render the frame for ``now_ms``. Returns True once finished."""
        if self._done:
            return True

        self.timeline.seek(now_ms - self.started_at)
        if not self.timeline.is_finished:
            self.frames += 1
            self.on_frame(self.current)
            return False

        # Final frame is the exact target
        self.frames += 1
        self.on_frame(self.to_rotation)
        self._done = True
        return True

    def resolve(self) -> None:
        """Run done callbacks. Only valid after the final frame."""
        if not self._done:
            raise RuntimeError(f"Animation {self.name} has not finished")
        for callback in self._callbacks:
            try:
                callback(self)
            except Exception as e:
                logger.error(f"Error in animation done callback: {e}")
        self._callbacks.clear()


class Animator:
    """Drives rotation animations from a monotonic clock.

    Each animation interpolates ``from + (to - from) * ease(t)`` with
    ``t = min(1, elapsed / duration)`` and ends on an exact final frame.
    """

    def __init__(
        self,
        clock: Optional[Callable[[], float]] = None,
        easing: Easing | str = Easing.EASE_OUT_CUBIC,
    ):
        self._clock = clock or monotonic_ms
        get_easing(easing)  # fail fast on unknown names
        self._easing = easing
        self._animations: Dict[str, RotationAnimation] = {}

        logger.debug("Animator initialized")

    def animate(
        self,
        from_rotation: float,
        to_rotation: float,
        duration_ms: float,
        on_frame: FrameCallback,
        name: str = "rotation",
    ) -> RotationAnimation:
        """Start animating a rotation.

        The start time is sampled now; frames are produced by later calls
        to :meth:`update`.

        Args:
            from_rotation: Starting rotation in radians
            to_rotation: Final rotation in radians
            duration_ms: Animation length in milliseconds
            on_frame: Called with the rotation for every rendered frame
            name: Registry key for this animation

        Returns:
            Completion handle
        """
        if name in self._animations:
            # Callers guard against overlap; never silently drop a running spin
            raise RuntimeError(f"Animation already running: {name}")

        timeline = Timeline.tween(
            "rotation",
            from_rotation,
            to_rotation,
            max(0.0, duration_ms),
            easing=self._easing,
            name=name,
        )
        timeline.play(from_start=True)

        animation = RotationAnimation(
            name=name,
            from_rotation=from_rotation,
            to_rotation=to_rotation,
            duration_ms=duration_ms,
            on_frame=on_frame,
            started_at=self._clock(),
            timeline=timeline,
        )
        self._animations[name] = animation

        logger.debug(
            f"Animation started: {name} {from_rotation:.3f} -> {to_rotation:.3f} "
            f"over {duration_ms:.0f}ms"
        )
        return animation

    def update(self, now_ms: Optional[float] = None) -> int:
        """Advance every active animation by one frame.

        Args:
            now_ms: Frame timestamp; read from the clock when omitted

        Returns:
            Number of animations still running
        """
        if now_ms is None:
            now_ms = self._clock()

        for name, animation in list(self._animations.items()):
            if animation.step(now_ms):
                # Unregister first so done callbacks may start a new animation
                del self._animations[name]
                logger.debug(f"Animation completed: {name} after {animation.frames} frames")
                animation.resolve()

        return len(self._animations)

    @property
    def animation_count(self) -> int:
        return len(self._animations)

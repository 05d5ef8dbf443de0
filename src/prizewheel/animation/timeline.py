"""Timeline-based animation with keyframe interpolation."""

from typing import Optional, Dict, List
from dataclasses import dataclass, field
from enum import Enum, auto

from prizewheel.animation.easing import Easing, interpolate


class PlayState(Enum):
    """Timeline playback state."""

    STOPPED = auto()
    PLAYING = auto()
    FINISHED = auto()


@dataclass
class Keyframe:
    """A single keyframe in an animation track.

    Attributes:
        time: Normalized time (0.0 to 1.0) when this keyframe occurs
        value: The value at this keyframe
        easing: Easing used to arrive at this keyframe from the previous one
    """

    time: float
    value: float
    easing: Easing | str = Easing.LINEAR

    def __post_init__(self):
        # Clamp time to valid range
        self.time = max(0.0, min(1.0, self.time))


@dataclass
class Track:
    """An animation track containing keyframes for a single property."""

    name: str
    keyframes: List[Keyframe] = field(default_factory=list)
    _sorted: bool = field(default=False, repr=False)

    def add_keyframe(
        self,
        time: float,
        value: float,
        easing: Easing | str = Easing.LINEAR
    ) -> "Track":
        """Add a keyframe to this track.

        Args:
            time: Normalized time (0.0 to 1.0)
            value: Value at this keyframe
            easing: Easing from the previous keyframe to this one

        Returns:
            Self for method chaining
        """
        self.keyframes.append(Keyframe(time, value, easing))
        self._sorted = False
        return self

    def get_value_at(self, t: float) -> Optional[float]:
        """Get the interpolated value at a normalized time.

        The first and last keyframe values are returned verbatim at or
        beyond the ends of the track.
        """
        if not self.keyframes:
            return None

        if not self._sorted:
            self.keyframes.sort(key=lambda k: k.time)
            self._sorted = True

        t = max(0.0, min(1.0, t))

        if t <= self.keyframes[0].time:
            return self.keyframes[0].value
        if t >= self.keyframes[-1].time:
            return self.keyframes[-1].value

        # First keyframe past t; the one before it opens the segment
        for i, next_kf in enumerate(self.keyframes):
            if next_kf.time > t:
                prev_kf = self.keyframes[i - 1]
                break

        segment_duration = next_kf.time - prev_kf.time
        if segment_duration <= 0:
            return prev_kf.value

        local_t = (t - prev_kf.time) / segment_duration
        return interpolate(prev_kf.value, next_kf.value, local_t, next_kf.easing)


@dataclass
class Timeline:
    """An animation timeline driven by an absolute playhead.

    Attributes:
        name: Timeline identifier
        duration: Total duration in milliseconds
        tracks: Dictionary of tracks by name
    """

    name: str
    duration: float = 1000.0  # milliseconds
    tracks: Dict[str, Track] = field(default_factory=dict)

    # Playback state
    _state: PlayState = field(default=PlayState.STOPPED, repr=False)
    _current_time: float = field(default=0.0, repr=False)

    def add_track(self, name: str) -> Track:
        """Create and add a new track to this timeline."""
        track = Track(name=name)
        self.tracks[name] = track
        return track

    # Playback control
    def play(self, from_start: bool = False) -> "Timeline":
        """Start or resume playback."""
        if from_start:
            self._current_time = 0.0
        self._state = PlayState.PLAYING
        return self

    def seek(self, time_ms: float) -> "Timeline":
        """Move the playhead to an absolute time in milliseconds.

        Reaching the end while playing finishes the timeline.
        """
        self._current_time = max(0.0, min(time_ms, self.duration))
        if self._state == PlayState.PLAYING and time_ms >= self.duration:
            self._current_time = self.duration
            self._state = PlayState.FINISHED
        return self

    @property
    def progress(self) -> float:
        """Get normalized progress (0.0 to 1.0)."""
        if self.duration <= 0:
            return 1.0
        return min(1.0, self._current_time / self.duration)

    @property
    def is_finished(self) -> bool:
        return self._state == PlayState.FINISHED

    def get_value(self, track_name: str) -> Optional[float]:
        """Get the current value of a specific track."""
        track = self.tracks.get(track_name)
        if track:
            return track.get_value_at(self.progress)
        return None

    # Factory methods
    @classmethod
    def tween(
        cls,
        track: str,
        start: float,
        end: float,
        duration: float,
        easing: Easing | str = Easing.EASE_OUT_CUBIC,
        name: str = "tween",
    ) -> "Timeline":
        """Single-track animation from ``start`` to ``end``."""
        timeline = cls(name=name, duration=duration)
        timeline.add_track(track).add_keyframe(0.0, start).add_keyframe(1.0, end, easing)
        return timeline

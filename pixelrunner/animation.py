"""Frame animation timed by a repeating timer."""

from __future__ import annotations

from pixelrunner.timer import Timer


class Animation:
    """A looping sequence of ``frame_count`` frames lasting ``length`` seconds."""

    __slots__ = ("frame_count", "timer")

    def __init__(self, frame_count: int = 0, length: float = 0.0) -> None:
        self.frame_count = frame_count
        self.timer = Timer(length)

    def __repr__(self) -> str:
        return (
            f"Animation(frame_count={self.frame_count!r}, "
            f"length={self.timer.length!r}, time={self.timer.time!r})"
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Animation):
            return NotImplemented
        return self.frame_count == other.frame_count and self.timer == other.timer

    @property
    def length(self) -> float:
        """Duration of one full cycle in seconds."""
        return self.timer.length

    def current_frame(self) -> int:
        """Index of the frame showing at the current point in the cycle.

        Raises ZeroDivisionError for an animation of zero length.
        """
        return int(self.timer.time / self.timer.length * self.frame_count)

    def step(self, delta_time: float) -> None:
        """Advance the animation by ``delta_time`` seconds."""
        self.timer.step(delta_time)

    def is_done(self) -> bool:
        """True once at least one full cycle has played."""
        return self.timer.timeout
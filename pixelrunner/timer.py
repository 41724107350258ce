"""A repeating countdown timer driven by frame deltas."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class Timer:
    """Accumulates elapsed time and reports each time ``length`` is passed.

    When the length is reached, the overshoot is kept rather than cleared.
    The ``timeout`` flag stays set until :meth:`reset` is called.
    """

    length: float
    time: float = field(default=0.0)
    timeout: bool = field(default=False)

    def step(self, delta_time: float) -> bool:
        """Advance by ``delta_time``; return True if the length was reached."""
        self.time += delta_time
        if self.time >= self.length:
            self.time -= self.length
            self.timeout = True
            return True
        return False

    def reset(self) -> None:
        """Clear the elapsed time and the timeout flag."""
        self.time = 0.0
        self.timeout = False
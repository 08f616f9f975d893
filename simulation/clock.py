"""Fixed-cadence simulation clock.

The frontend polls ``update(dt)`` once per frame with the frame's real
elapsed time. Whenever a full interval has accumulated the clock fires once
and keeps the remainder. At most one tick fires per poll: after a long stall
the backlog is worked off one interval per subsequent poll rather than in a
burst.
"""
from __future__ import annotations

from dataclasses import dataclass

from config import TICK_INTERVAL


@dataclass
class SimulationClock:
    interval: float = TICK_INTERVAL
    _tick_timer: float = 0.0

    def __post_init__(self) -> None:
        if self.interval <= 0:
            raise ValueError(f"tick interval must be positive, got {self.interval}")

    def update(self, dt: float) -> bool:
        """Accumulate ``dt`` seconds; return True if a tick is due."""
        self._tick_timer += dt
        if self._tick_timer >= self.interval:
            self._tick_timer -= self.interval
            return True
        return False

    @property
    def pending(self) -> float:
        """Time accumulated toward the next tick."""
        return self._tick_timer

    def reset(self) -> None:
        self._tick_timer = 0.0

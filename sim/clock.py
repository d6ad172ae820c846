"""
sim/clock.py
============
Time sources for the scheduler and spawner.

:class:`WallClock` follows ``time.monotonic`` and is used by the interactive
view.  :class:`TickClock` advances by a fixed step on every executed tick,
which makes headless runs and tests fully deterministic.
"""

from __future__ import annotations

import time


class WallClock:
    """Monotonic wall time; ticking has no effect."""

    def now(self) -> float:
        return time.monotonic()

    def tick(self) -> None:
        pass


class TickClock:
    """Logical clock advanced by exactly *dt* seconds per :meth:`tick`.

    Parameters
    ----------
    dt : float
        Seconds per tick (``1 / tick_rate_hz``).
    start : float
        Initial reading.
    """

    def __init__(self, dt: float, start: float = 0.0) -> None:
        if dt <= 0.0:
            raise ValueError(f"dt must be positive, got {dt!r}")
        self.dt = dt
        self._now = start

    def now(self) -> float:
        return self._now

    def tick(self) -> None:
        self._now += self.dt

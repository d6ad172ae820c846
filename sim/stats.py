"""
sim/stats.py
============
Per-tick statistics recorder.

One row is appended for every executed (non-paused) tick.  Aggregation is
done on demand with pandas, so recording stays a cheap tuple append.
"""

from __future__ import annotations

import logging
import os
from collections import deque
from typing import Any, Deque, Dict, Mapping, Optional, Sequence, Tuple

import pandas as pd

from sim.entities import APPROACHES, Approach, TrafficLight

log = logging.getLogger("stats")

QUEUE_COLUMNS: Tuple[str, ...] = tuple(f"queue_{a.value}" for a in APPROACHES)
COLUMNS: Tuple[str, ...] = (
    ("tick", "time", "green")
    + QUEUE_COLUMNS
    + ("vehicles", "removed", "spawned_total", "removed_total")
)


class TrafficStats:
    """Bounded log of tick rows with summary helpers.

    Parameters
    ----------
    max_rows : int or None
        Keep only the newest *max_rows* rows; unbounded when *None*.
    """

    def __init__(self, max_rows: Optional[int] = None) -> None:
        if max_rows is not None and max_rows <= 0:
            raise ValueError(f"max_rows must be positive, got {max_rows!r}")
        self.max_rows = max_rows
        self._rows: Deque[Tuple[Any, ...]] = deque(maxlen=max_rows)
        self._last_removed_total = 0

    def __len__(self) -> int:
        return len(self._rows)

    def record(
        self,
        tick: int,
        now: float,
        lights: Sequence[TrafficLight],
        counts: Mapping[Approach, int],
        vehicles: int,
        spawned_total: int,
        removed_total: int,
    ) -> None:
        green = ",".join(light.direction.value for light in lights if light.is_green)
        removed = removed_total - self._last_removed_total
        self._last_removed_total = removed_total
        self._rows.append(
            (tick, now, green)
            + tuple(counts.get(a, 0) for a in APPROACHES)
            + (vehicles, removed, spawned_total, removed_total)
        )

    def reset(self) -> None:
        self._rows.clear()
        self._last_removed_total = 0

    def to_frame(self) -> pd.DataFrame:
        return pd.DataFrame(list(self._rows), columns=list(COLUMNS))

    def summary(self) -> Dict[str, Any]:
        """Aggregate the recorded window.

        Returns a dict with ``ticks``, ``throughput`` (vehicles removed during the
        retained ticks), per-approach ``mean_queue`` / ``max_queue`` /
        ``green_share`` keyed by approach letter, and ``light_changes``.
        """
        df = self.to_frame()
        if df.empty:
            return {
                "ticks": 0,
                "throughput": 0,
                "mean_queue": {},
                "max_queue": {},
                "green_share": {},
                "light_changes": 0,
            }

        greens = df["green"].str.split(",")
        letters = [a.value for a in APPROACHES]
        return {
            "ticks": int(len(df)),
            "throughput": int(df["removed"].sum()),
            "mean_queue": {k: float(df[f"queue_{k}"].mean()) for k in letters},
            "max_queue": {k: int(df[f"queue_{k}"].max()) for k in letters},
            "green_share": {
                k: float(greens.apply(lambda g, k=k: k in g).mean()) for k in letters
            },
            "light_changes": int((df["green"] != df["green"].shift()).iloc[1:].sum()),
        }

    def export_csv(self, path: str) -> str:
        """Write all rows to *path*; returns the absolute path written."""
        path = os.path.abspath(path)
        parent = os.path.dirname(path)
        if parent:
            os.makedirs(parent, exist_ok=True)
        self.to_frame().to_csv(path, index=False)
        log.info("Wrote %d stats rows to %s", len(self._rows), path)
        return path

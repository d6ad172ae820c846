#!/usr/bin/env python3
"""
Tests for the per-tick statistics recorder.
"""

from __future__ import annotations

import os
import tempfile
import unittest

import pandas as pd

from sim.entities import APPROACHES, Approach, LightState
from sim.layout import IntersectionLayout
from sim.stats import COLUMNS, TrafficStats
from sim.traffic_policy import SimulationPolicy
from sim.world import SimulationState


def _counts(**kwargs):
    return {a: kwargs.get(a.value, 0) for a in APPROACHES}


class TrafficStatsTests(unittest.TestCase):
    def setUp(self) -> None:
        layout = IntersectionLayout.from_policy(SimulationPolicy())
        self.lights = SimulationState.initial(layout).lights

    def _set_green(self, approach: Approach) -> None:
        for light in self.lights:
            light.state = LightState.GREEN if light.direction is approach else LightState.RED

    def _fill(self, stats: TrafficStats) -> None:
        self._set_green(Approach.EAST)
        stats.record(1, 0.1, self.lights, _counts(E=2, N=1), 3, 3, 0)
        stats.record(2, 0.2, self.lights, _counts(E=1, N=3), 4, 4, 0)
        self._set_green(Approach.NORTH)
        stats.record(3, 0.3, self.lights, _counts(N=2), 3, 4, 1)
        stats.record(4, 0.4, self.lights, _counts(N=0), 1, 4, 3)

    def test_empty_summary(self) -> None:
        summary = TrafficStats().summary()
        self.assertEqual(summary["ticks"], 0)
        self.assertEqual(summary["throughput"], 0)
        self.assertEqual(summary["mean_queue"], {})
        self.assertEqual(summary["light_changes"], 0)

    def test_frame_columns(self) -> None:
        stats = TrafficStats()
        self._fill(stats)
        frame = stats.to_frame()
        self.assertEqual(tuple(frame.columns), COLUMNS)
        self.assertEqual(list(frame["green"]), ["E", "E", "N", "N"])
        self.assertEqual(list(frame["queue_N"]), [1, 3, 2, 0])

    def test_summary(self) -> None:
        stats = TrafficStats()
        self._fill(stats)
        summary = stats.summary()
        self.assertEqual(summary["ticks"], 4)
        self.assertEqual(summary["throughput"], 3)
        self.assertEqual(summary["light_changes"], 1)
        self.assertAlmostEqual(summary["mean_queue"]["N"], 1.5)
        self.assertEqual(summary["max_queue"]["E"], 2)
        self.assertAlmostEqual(summary["green_share"]["E"], 0.5)
        self.assertAlmostEqual(summary["green_share"]["N"], 0.5)
        self.assertAlmostEqual(summary["green_share"]["S"], 0.0)

    def test_max_rows_keeps_newest(self) -> None:
        stats = TrafficStats(max_rows=2)
        self._fill(stats)
        self.assertEqual(len(stats), 2)
        self.assertEqual(list(stats.to_frame()["tick"]), [3, 4])
        self.assertEqual(stats.summary()["throughput"], 3)

    def test_throughput_counts_removals_on_first_tick(self) -> None:
        stats = TrafficStats()
        self._set_green(Approach.EAST)
        stats.record(1, 0.1, self.lights, _counts(), 0, 2, 2)
        stats.record(2, 0.2, self.lights, _counts(), 0, 2, 2)
        self.assertEqual(list(stats.to_frame()["removed"]), [2, 0])
        self.assertEqual(stats.summary()["throughput"], 2)

    def test_invalid_max_rows(self) -> None:
        with self.assertRaises(ValueError):
            TrafficStats(max_rows=0)

    def test_export_csv(self) -> None:
        stats = TrafficStats()
        self._fill(stats)
        with tempfile.TemporaryDirectory() as tmp:
            path = stats.export_csv(os.path.join(tmp, "out", "stats.csv"))
            frame = pd.read_csv(path)
        self.assertEqual(len(frame), 4)
        self.assertEqual(list(frame["removed_total"]), [0, 0, 1, 3])

    def test_reset(self) -> None:
        stats = TrafficStats()
        self._fill(stats)
        stats.reset()
        self.assertEqual(len(stats), 0)
        stats.record(1, 0.1, self.lights, _counts(), 0, 1, 1)
        self.assertEqual(stats.summary()["throughput"], 1)


if __name__ == "__main__":
    unittest.main()

#!/usr/bin/env python3
"""
Tests for the spawn policy.
"""

from __future__ import annotations

import random
import unittest

from sim.entities import APPROACHES, ROUTES, Approach, Route, Vehicle
from sim.layout import IntersectionLayout
from sim.spawner import Spawner
from sim.traffic_policy import SimulationPolicy
from sim.world import SimulationState


class SpawnerTests(unittest.TestCase):
    def setUp(self) -> None:
        self.layout = IntersectionLayout.from_policy(SimulationPolicy())
        self.state = SimulationState.initial(self.layout)
        self.spawner = Spawner(self.layout, random.Random(42))

    def test_first_spawn_is_allowed(self) -> None:
        vehicle = self.spawner.spawn(self.state, Approach.NORTH, 0.0)
        self.assertIsNotNone(vehicle)
        self.assertEqual(vehicle.id, 1)
        self.assertEqual(vehicle.position, (421, 800))
        self.assertIs(vehicle.direction, Approach.NORTH)
        self.assertIn(vehicle.route, ROUTES)
        self.assertFalse(vehicle.has_passed_intersection)
        self.assertFalse(vehicle.has_turned)
        self.assertEqual(self.state.vehicles, [vehicle])
        self.assertEqual(self.state.last_spawn_time, 0.0)

    def test_global_cooldown(self) -> None:
        self.assertIsNotNone(self.spawner.spawn(self.state, Approach.NORTH, 0.0))
        self.assertIsNone(self.spawner.spawn(self.state, Approach.SOUTH, 0.5))
        self.assertEqual(self.spawner.rejected_cooldown, 1)
        self.assertEqual(self.state.last_spawn_time, 0.0)
        self.assertIsNotNone(self.spawner.spawn(self.state, Approach.SOUTH, 1.0))
        self.assertEqual(len(self.state.vehicles), 2)

    def test_edge_clearance(self) -> None:
        self.state.vehicles = [Vehicle(7, (421, 716), Approach.NORTH, Route.STRAIGHT)]
        self.state.next_vehicle_id = 8
        self.assertIsNone(self.spawner.spawn(self.state, Approach.NORTH, 0.0))
        self.assertEqual(self.spawner.rejected_blocked, 1)
        self.assertIsNone(self.state.last_spawn_time)

        self.state.vehicles[0].position = (421, 715)
        vehicle = self.spawner.spawn(self.state, Approach.NORTH, 0.0)
        self.assertIsNotNone(vehicle)
        self.assertEqual(vehicle.id, 8)

    def test_clearance_only_checks_same_heading(self) -> None:
        self.state.vehicles = [Vehicle(1, (421, 760), Approach.EAST, Route.LEFT)]
        self.assertIsNotNone(self.spawner.spawn(self.state, Approach.NORTH, 0.0))

    def test_ids_are_monotonic(self) -> None:
        ids = []
        for t, approach in enumerate(APPROACHES):
            ids.append(self.spawner.spawn(self.state, approach, float(t)).id)
        self.assertEqual(ids, [1, 2, 3, 4])
        self.assertEqual(self.spawner.spawned, 4)

    def test_seeded_routes_are_reproducible(self) -> None:
        def draws(seed):
            state = SimulationState.initial(self.layout)
            spawner = Spawner(self.layout, random.Random(seed))
            for t in range(8):
                spawner.spawn_random(state, float(t))
            return [(v.direction, v.route) for v in state.vehicles]

        first = draws(3)
        self.assertTrue(first)
        self.assertEqual(first, draws(3))


if __name__ == "__main__":
    unittest.main()

#!/usr/bin/env python3
"""
Scenario tests for the light schedulers.
"""

from __future__ import annotations

import unittest
from typing import Dict, List

from sim.entities import Approach, LightState, Route, Vehicle
from sim.layout import IntersectionLayout
from sim.scheduler import (
    AdaptiveScheduler,
    FixedCycleScheduler,
    PriorityScheduler,
    make_scheduler,
    queue_counts,
)
from sim.traffic_policy import SimulationPolicy
from sim.world import SimulationState


def _waiting(counts: Dict[Approach, int]) -> List[Vehicle]:
    """Vehicles parked on the approach side of each stop line."""
    vehicles: List[Vehicle] = []
    for approach, n in counts.items():
        for i in range(n):
            if approach is Approach.NORTH:
                pos = (421, 500 + 60 * i)
            elif approach is Approach.SOUTH:
                pos = (455, 300 - 60 * i)
            elif approach is Approach.EAST:
                pos = (300 - 60 * i, 366)
            else:
                pos = (600 + 60 * i, 400)
            vehicles.append(Vehicle(len(vehicles) + 1, pos, approach, Route.STRAIGHT))
    return vehicles


class SchedulerTestCase(unittest.TestCase):
    def setUp(self) -> None:
        self.policy = SimulationPolicy()
        self.layout = IntersectionLayout.from_policy(self.policy)
        self.lights = SimulationState.initial(self.layout).lights

    def green(self) -> List[Approach]:
        return [light.direction for light in self.lights if light.is_green]


class QueueCountTests(SchedulerTestCase):
    def test_counts_only_unpassed_vehicles_before_the_stop_line(self) -> None:
        vehicles = _waiting({Approach.NORTH: 2, Approach.WEST: 1})
        vehicles.append(Vehicle(10, (421, 420), Approach.NORTH, Route.STRAIGHT))
        passed = Vehicle(11, (421, 600), Approach.NORTH, Route.STRAIGHT)
        passed.has_passed_intersection = True
        vehicles.append(passed)
        counts = queue_counts(vehicles, self.layout)
        self.assertEqual(
            counts,
            {Approach.NORTH: 2, Approach.SOUTH: 0, Approach.EAST: 0, Approach.WEST: 1},
        )
        self.assertEqual(list(counts), [Approach.NORTH, Approach.SOUTH,
                                        Approach.EAST, Approach.WEST])


class PrioritySchedulerTests(SchedulerTestCase):
    def setUp(self) -> None:
        super().setUp()
        self.scheduler = PriorityScheduler(self.policy, self.layout)

    def test_initial_east_green(self) -> None:
        self.assertEqual(self.green(), [Approach.EAST])

    def test_idle_blackout(self) -> None:
        self.scheduler.decide(self.lights, [], 2.5)
        self.assertEqual(self.green(), [])
        self.assertTrue(all(light.last_change == 2.5 for light in self.lights))

    def test_demand_from_all_red_picks_busiest(self) -> None:
        self.scheduler.decide(self.lights, [], 0.0)
        self.scheduler.decide(self.lights, _waiting({Approach.WEST: 2, Approach.SOUTH: 1}), 0.1)
        self.assertEqual(self.green(), [Approach.WEST])
        self.assertTrue(all(light.last_change == 0.1 for light in self.lights))

    def test_tie_goes_to_enumeration_order(self) -> None:
        self.scheduler.decide(self.lights, [], 0.0)
        self.scheduler.decide(self.lights, _waiting({Approach.WEST: 2, Approach.SOUTH: 2}), 0.1)
        self.assertEqual(self.green(), [Approach.SOUTH])

    def test_keep_without_churn(self) -> None:
        vehicles = _waiting({Approach.EAST: 2, Approach.NORTH: 3})
        for now in (0.5, 1.0, 3.9):
            self.scheduler.decide(self.lights, vehicles, now)
            self.assertEqual(self.green(), [Approach.EAST])
            self.assertTrue(all(light.last_change == 0.0 for light in self.lights))
        self.assertEqual(self.scheduler.light_changes, 0)

    def test_max_green_timeout_switches_to_busiest(self) -> None:
        vehicles = _waiting({Approach.EAST: 2, Approach.NORTH: 3})
        self.scheduler.decide(self.lights, vehicles, 4.0)
        self.assertEqual(self.green(), [Approach.NORTH])
        self.assertTrue(all(light.last_change == 4.0 for light in self.lights))
        self.assertEqual(self.scheduler.light_changes, 1)

    def test_max_green_timeout_regrants_busiest_green(self) -> None:
        vehicles = _waiting({Approach.EAST: 3, Approach.NORTH: 1})
        self.scheduler.decide(self.lights, vehicles, 4.0)
        self.assertEqual(self.green(), [Approach.EAST])
        self.assertTrue(all(light.last_change == 4.0 for light in self.lights))
        self.assertEqual(self.scheduler.light_changes, 0)

    def test_drained_green_yields(self) -> None:
        self.scheduler.decide(self.lights, _waiting({Approach.SOUTH: 1}), 0.5)
        self.assertEqual(self.green(), [Approach.SOUTH])

    def test_priority_override(self) -> None:
        vehicles = _waiting({Approach.EAST: 1, Approach.NORTH: 4})
        self.scheduler.decide(self.lights, vehicles, 0.5)
        self.assertEqual(self.green(), [Approach.NORTH])

    def test_no_override_while_green_queue_is_long(self) -> None:
        vehicles = _waiting({Approach.EAST: 3, Approach.NORTH: 5})
        self.scheduler.decide(self.lights, vehicles, 0.5)
        self.assertEqual(self.green(), [Approach.EAST])

    def test_first_starved_approach_wins(self) -> None:
        vehicles = _waiting({Approach.EAST: 1, Approach.NORTH: 4, Approach.WEST: 5})
        self.scheduler.decide(self.lights, vehicles, 0.5)
        self.assertEqual(self.green(), [Approach.NORTH])

    def test_guards_intersection(self) -> None:
        self.assertTrue(self.scheduler.guards_intersection)


class AdaptiveSchedulerTests(SchedulerTestCase):
    def test_no_priority_override(self) -> None:
        scheduler = AdaptiveScheduler(self.policy, self.layout)
        vehicles = _waiting({Approach.EAST: 1, Approach.NORTH: 4, Approach.WEST: 5})
        scheduler.decide(self.lights, vehicles, 0.5)
        self.assertEqual(self.green(), [Approach.EAST])
        scheduler.decide(self.lights, vehicles, 4.0)
        self.assertEqual(self.green(), [Approach.WEST])
        self.assertFalse(scheduler.guards_intersection)


class FixedCycleSchedulerTests(SchedulerTestCase):
    def test_alternates_phases_on_timer(self) -> None:
        scheduler = FixedCycleScheduler(self.policy, self.layout)
        vehicles = _waiting({Approach.NORTH: 3})

        scheduler.decide(self.lights, vehicles, 0.0)
        self.assertEqual(self.green(), [Approach.EAST, Approach.WEST])

        scheduler.decide(self.lights, vehicles, 3.9)
        self.assertEqual(self.green(), [Approach.EAST, Approach.WEST])

        scheduler.decide(self.lights, vehicles, 4.0)
        self.assertEqual(self.green(), [Approach.NORTH, Approach.SOUTH])

        scheduler.decide(self.lights, [], 8.0)
        self.assertEqual(self.green(), [Approach.EAST, Approach.WEST])

    def test_starts_north_south_from_all_red(self) -> None:
        scheduler = FixedCycleScheduler(self.policy, self.layout)
        for light in self.lights:
            light.state = LightState.RED
        scheduler.decide(self.lights, [], 1.0)
        self.assertEqual(self.green(), [Approach.NORTH, Approach.SOUTH])


class MakeSchedulerTests(SchedulerTestCase):
    def test_known_names(self) -> None:
        self.assertIsInstance(make_scheduler("priority", self.policy, self.layout), PriorityScheduler)
        self.assertIsInstance(make_scheduler("Adaptive", self.policy, self.layout), AdaptiveScheduler)
        self.assertIsInstance(make_scheduler(" fixed ", self.policy, self.layout), FixedCycleScheduler)

    def test_unknown_name(self) -> None:
        with self.assertRaises(ValueError):
            make_scheduler("roundabout", self.policy, self.layout)


if __name__ == "__main__":
    unittest.main()

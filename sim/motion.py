#!/usr/bin/env python3
"""
sim/motion.py
=============
Motion & Collision Engine: one call to :meth:`MotionEngine.step` advances,
holds or removes every vehicle for a single tick.

Hold rules, in evaluation order
-------------------------------
1. **Leader** — another vehicle on the same heading and lane is ahead and
   the bumper gap is below ``min_vehicle_distance``.
2. **Light** — the vehicle has not passed, its light is not green and it
   sits in the stop band.
3. **Occupancy** — (only with a guarding scheduler) the vehicle is in the
   stop band on green while a crossing vehicle is inside the box.

All comparisons use the positions captured at the start of the tick, so
the outcome does not depend on which vehicles moved earlier in the pass.
Despawned vehicles are removed only after the pass.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Dict, List, Sequence, Tuple

from sim.entities import Approach, LightState, Point, TrafficLight, Vehicle
from sim.layout import IntersectionLayout
from sim.physics import advance, distance_ahead, lane_coordinate

if TYPE_CHECKING:
    from sim.world import SimulationState

log = logging.getLogger("motion")

Snapshot = List[Tuple[Point, Approach]]


class MotionEngine:
    """Per-tick kinematics over a :class:`SimulationState`.

    Parameters
    ----------
    layout : IntersectionLayout
        Geometry tables (stop bands, thresholds, turn table, box).
    guards_intersection : bool
        Enable the occupancy hold; set by the active scheduler.
    """

    def __init__(self, layout: IntersectionLayout, guards_intersection: bool = False) -> None:
        self.layout = layout
        self.guards_intersection = guards_intersection
        self.moved = 0
        self.held_leader = 0
        self.held_light = 0
        self.held_occupancy = 0
        self.removed = 0

    # ── public API ───────────────────────────────────────────────────────

    def step(self, state: "SimulationState") -> List[Vehicle]:
        """Run one tick over *state*; return the vehicles removed this tick."""
        snapshot: Snapshot = [(v.position, v.direction) for v in state.vehicles]
        lights = self._light_states(state.lights)
        doomed: List[int] = []

        for i, vehicle in enumerate(state.vehicles):
            if self.layout.is_off_canvas(vehicle.position):
                doomed.append(i)
                continue

            if self._blocked_by_leader(i, vehicle, snapshot):
                self.held_leader += 1
                continue

            light = lights.get(vehicle.direction, LightState.RED)
            at_stop = self.layout.at_stop_line(vehicle.direction, vehicle.position)

            if not vehicle.has_passed_intersection and light is not LightState.GREEN and at_stop:
                self.held_light += 1
                continue

            if (
                self.guards_intersection
                and at_stop
                and light is LightState.GREEN
                and self._box_occupied(i, vehicle.direction, snapshot)
            ):
                self.held_occupancy += 1
                log.debug("vehicle #%d waits for a clear box", vehicle.id)
                continue

            self._move(vehicle)
            self.moved += 1

        if not doomed:
            return []

        gone = set(doomed)
        removed = [v for i, v in enumerate(state.vehicles) if i in gone]
        state.vehicles = [v for i, v in enumerate(state.vehicles) if i not in gone]
        for vehicle in removed:
            log.debug("removed #%d at %s", vehicle.id, vehicle.position)
        self.removed += len(removed)
        return removed

    def reset_counters(self) -> None:
        self.moved = 0
        self.held_leader = 0
        self.held_light = 0
        self.held_occupancy = 0
        self.removed = 0

    # ── hold rules ───────────────────────────────────────────────────────

    @staticmethod
    def _light_states(lights: Sequence[TrafficLight]) -> Dict[Approach, LightState]:
        return {light.direction: light.state for light in lights}

    def _blocked_by_leader(self, i: int, vehicle: Vehicle, snapshot: Snapshot) -> bool:
        direction = vehicle.direction
        lane = lane_coordinate(vehicle.position, direction)
        length = self.layout.vehicle_length(direction)
        min_gap = self.layout.policy.min_vehicle_distance
        for j, (pos, other_dir) in enumerate(snapshot):
            if j == i or other_dir is not direction:
                continue
            if lane_coordinate(pos, direction) != lane:
                continue
            ahead = distance_ahead(vehicle.position, pos, direction)
            if ahead > 0 and ahead - length < min_gap:
                return True
        return False

    def _box_occupied(self, i: int, direction: Approach, snapshot: Snapshot) -> bool:
        return any(
            j != i and other_dir is not direction and self.layout.in_intersection(pos)
            for j, (pos, other_dir) in enumerate(snapshot)
        )

    # ── movement ─────────────────────────────────────────────────────────

    def _move(self, vehicle: Vehicle) -> None:
        layout = self.layout
        if not vehicle.has_passed_intersection and layout.has_cleared(
            vehicle.direction, vehicle.route, vehicle.position
        ):
            vehicle.has_passed_intersection = True

        if vehicle.has_passed_intersection and not vehicle.has_turned:
            rule = layout.turn_rule(vehicle.direction, vehicle.route)
            if rule is not None and rule.trigger.reached(vehicle.position):
                log.debug(
                    "vehicle #%d turns %s -> %s",
                    vehicle.id, vehicle.direction.name, rule.heading.name,
                )
                vehicle.direction = rule.heading
                vehicle.position = rule.snap
                vehicle.has_turned = True

        vehicle.position = advance(
            vehicle.position, vehicle.direction, layout.policy.vehicle_speed
        )

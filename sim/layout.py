#!/usr/bin/env python3
"""
sim/layout.py
=============
Static intersection geometry derived from a :class:`SimulationPolicy`.

Every per-approach rule the simulation needs — spawn points, spawn-edge
clearance, queue regions, stop-line bands, passed-intersection thresholds
and the turn table — is a plain dict keyed by :class:`Approach` (or by
``(Approach, Route)``) so each table can be audited and tested on its own.

All arithmetic is integer floor division on the policy dimensions.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional, Tuple

from sim.entities import Approach, Point, Route
from sim.physics import AXIS_X, AXIS_Y, Band, Threshold, is_vertical
from sim.traffic_policy import SimulationPolicy


@dataclass(frozen=True)
class TurnRule:
    """One turn-table entry.

    Once a passed vehicle reaches *trigger* its heading becomes *heading*
    and its position is snapped to *snap* (lane-aligned, near the centre).
    """

    trigger: Threshold
    heading: Approach
    snap: Point


@dataclass(frozen=True)
class IntersectionLayout:
    """Derived geometry of the single intersection.

    Build with :meth:`from_policy`; never construct by hand.
    """

    policy: SimulationPolicy
    center: Point
    box: Tuple[int, int, int, int]
    """Intersection bounds ``(left, top, right, bottom)``."""

    spawn_points: Dict[Approach, Point]
    spawn_blockers: Dict[Approach, Threshold]
    queue_regions: Dict[Approach, Threshold]
    stop_bands: Dict[Approach, Band]
    pass_thresholds: Dict[Tuple[Approach, Route], Threshold]
    turn_table: Dict[Tuple[Approach, Route], TurnRule]
    light_positions: Dict[Approach, Point]

    # ── construction ──────────────────────────────────────────────────────

    @classmethod
    def from_policy(cls, policy: SimulationPolicy) -> "IntersectionLayout":
        W, H = policy.canvas_width, policy.canvas_height
        vw, vh = policy.vehicle_width, policy.vehicle_height
        cx, cy = W // 2, H // 2
        half = policy.road_width // 2
        q = policy.road_width // 4
        m = policy.stop_line_margin
        band = policy.stop_band
        d = policy.min_vehicle_distance
        t = policy.turn_offset
        o = policy.light_offset

        left, right = cx - half, cx + half
        top, bottom = cy - half, cy + half

        # Lane-aligned snap targets near the centre, one per quadrant.
        upper_left = (cx - q - vw // 2, cy - q - vh // 2)
        upper_right = (cx + q - vw // 2, cy - q - vh // 2)
        lower_left = (cx - q - vw // 2, cy + q - vh // 2)
        lower_right = (cx + q - vw // 2, cy + q - vh // 2)

        # Early trigger line for turns that start before the centre line.
        early = left - m - policy.turn_trigger_margin - vw

        spawn_points = {
            Approach.NORTH: (cx - q - vw // 2, H),
            Approach.SOUTH: (cx + q - vw // 2, -vh),
            Approach.EAST: (-vw, cy - q - vh // 2),
            Approach.WEST: (W, cy + q - vh // 2),
        }
        spawn_blockers = {
            Approach.NORTH: Threshold(AXIS_Y, H - vh - d, at_least=True, strict=True),
            Approach.SOUTH: Threshold(AXIS_Y, d, at_least=False, strict=True),
            Approach.EAST: Threshold(AXIS_X, d, at_least=False, strict=True),
            Approach.WEST: Threshold(AXIS_X, W - vw - d, at_least=True, strict=True),
        }
        queue_regions = {
            Approach.NORTH: Threshold(AXIS_Y, bottom - m, at_least=True),
            Approach.SOUTH: Threshold(AXIS_Y, top, at_least=False),
            Approach.EAST: Threshold(AXIS_X, left - m, at_least=False),
            Approach.WEST: Threshold(AXIS_X, right - m, at_least=True),
        }
        stop_bands = {
            Approach.NORTH: Band(AXIS_Y, bottom - m, bottom - m + band),
            Approach.SOUTH: Band(AXIS_Y, top - vh, top - vh + band),
            Approach.EAST: Band(AXIS_X, left - m - vw, left - m - vw + band),
            Approach.WEST: Band(AXIS_X, right - m, right - m + band),
        }

        north_near = Threshold(AXIS_Y, cy, at_least=False)
        north_far = Threshold(AXIS_Y, cy - t, at_least=False)
        south_any = Threshold(AXIS_Y, cy - t, at_least=True)
        east_near = Threshold(AXIS_X, cx - t, at_least=True)
        east_far = Threshold(AXIS_X, cx, at_least=True)
        west_near = Threshold(AXIS_X, cx, at_least=False)
        west_far = Threshold(AXIS_X, cx - t, at_least=False)
        pass_thresholds = {
            (Approach.NORTH, Route.STRAIGHT): north_near,
            (Approach.NORTH, Route.LEFT): north_near,
            (Approach.NORTH, Route.RIGHT): north_far,
            (Approach.SOUTH, Route.STRAIGHT): south_any,
            (Approach.SOUTH, Route.LEFT): south_any,
            (Approach.SOUTH, Route.RIGHT): south_any,
            (Approach.EAST, Route.STRAIGHT): east_near,
            (Approach.EAST, Route.LEFT): east_near,
            (Approach.EAST, Route.RIGHT): east_far,
            (Approach.WEST, Route.STRAIGHT): west_far,
            (Approach.WEST, Route.LEFT): west_near,
            (Approach.WEST, Route.RIGHT): west_far,
        }

        at_centre_up = Threshold(AXIS_Y, cy, at_least=False)
        at_centre_down = Threshold(AXIS_Y, cy, at_least=True)
        at_centre_left = Threshold(AXIS_X, cx, at_least=False)
        early_down = Threshold(AXIS_Y, early, at_least=True)
        early_right = Threshold(AXIS_X, early, at_least=True)
        turn_table = {
            (Approach.NORTH, Route.LEFT): TurnRule(at_centre_up, Approach.WEST, lower_left),
            (Approach.NORTH, Route.RIGHT): TurnRule(at_centre_up, Approach.EAST, upper_left),
            (Approach.SOUTH, Route.LEFT): TurnRule(early_down, Approach.EAST, upper_right),
            (Approach.SOUTH, Route.RIGHT): TurnRule(at_centre_down, Approach.WEST, lower_right),
            (Approach.EAST, Route.LEFT): TurnRule(early_right, Approach.NORTH, upper_left),
            (Approach.EAST, Route.RIGHT): TurnRule(early_right, Approach.SOUTH, upper_right),
            (Approach.WEST, Route.LEFT): TurnRule(at_centre_left, Approach.SOUTH, lower_right),
            (Approach.WEST, Route.RIGHT): TurnRule(at_centre_left, Approach.NORTH, lower_left),
        }

        light_positions = {
            Approach.NORTH: (left - o, bottom),
            Approach.SOUTH: (right, top - o),
            Approach.EAST: (left - o, top - o),
            Approach.WEST: (right, bottom),
        }

        return cls(
            policy=policy,
            center=(cx, cy),
            box=(left, top, right, bottom),
            spawn_points=spawn_points,
            spawn_blockers=spawn_blockers,
            queue_regions=queue_regions,
            stop_bands=stop_bands,
            pass_thresholds=pass_thresholds,
            turn_table=turn_table,
            light_positions=light_positions,
        )

    # ── queries ───────────────────────────────────────────────────────────

    def vehicle_length(self, direction: Approach) -> int:
        """Extent of a vehicle box along its travel axis."""
        if is_vertical(direction):
            return self.policy.vehicle_height
        return self.policy.vehicle_width

    def vehicle_center(self, position: Point) -> Point:
        return (
            position[0] + self.policy.vehicle_width // 2,
            position[1] + self.policy.vehicle_height // 2,
        )

    def in_intersection(self, position: Point) -> bool:
        """True when the vehicle box centre lies strictly inside the box."""
        left, top, right, bottom = self.box
        x, y = self.vehicle_center(position)
        return left < x < right and top < y < bottom

    def is_waiting(self, direction: Approach, position: Point) -> bool:
        """True when *position* is on the approach side of the stop line."""
        return self.queue_regions[direction].reached(position)

    def at_stop_line(self, direction: Approach, position: Point) -> bool:
        return self.stop_bands[direction].contains(position)

    def has_cleared(self, direction: Approach, route: Route, position: Point) -> bool:
        return self.pass_thresholds[(direction, route)].reached(position)

    def turn_rule(self, direction: Approach, route: Route) -> Optional[TurnRule]:
        """Turn-table entry, or *None* for straight movements."""
        return self.turn_table.get((direction, route))

    def blocks_spawn(self, direction: Approach, position: Point) -> bool:
        """True when a vehicle at *position* sits too close to the spawn edge."""
        return self.spawn_blockers[direction].reached(position)

    def is_off_canvas(self, position: Point) -> bool:
        margin = self.policy.despawn_margin
        x, y = position
        return (
            x < -margin
            or x > self.policy.canvas_width + margin
            or y < -margin
            or y > self.policy.canvas_height + margin
        )

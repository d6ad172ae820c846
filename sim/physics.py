#!/usr/bin/env python3
"""
sim/physics.py
==============
Low-level axis helpers used by :mod:`sim.layout`, :mod:`sim.motion` and
:mod:`sim.scheduler`.

Keeping these in a separate module avoids circular imports and makes unit
testing straightforward.  Canvas coordinates grow rightwards (x) and
downwards (y), so a ``NORTH``-bound vehicle moves towards smaller y.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Tuple

from sim.entities import Approach, Point

# heading → unit step on the canvas
STEP: Dict[Approach, Tuple[int, int]] = {
    Approach.NORTH: (0, -1),
    Approach.SOUTH: (0, 1),
    Approach.EAST: (1, 0),
    Approach.WEST: (-1, 0),
}

AXIS_X = 0
AXIS_Y = 1


def is_vertical(direction: Approach) -> bool:
    """True for headings that travel along the y axis."""
    return direction in (Approach.NORTH, Approach.SOUTH)


def travel_axis(direction: Approach) -> int:
    return AXIS_Y if is_vertical(direction) else AXIS_X


def lane_coordinate(position: Point, direction: Approach) -> int:
    """Coordinate that identifies the lane: x for N/S traffic, y for E/W."""
    return position[AXIS_X] if is_vertical(direction) else position[AXIS_Y]


def advance(position: Point, direction: Approach, distance: int) -> Point:
    """Move *position* by *distance* along *direction*."""
    dx, dy = STEP[direction]
    return (position[0] + dx * distance, position[1] + dy * distance)


def distance_ahead(position: Point, other: Point, direction: Approach) -> int:
    """Signed distance from *position* to *other* along the travel axis.

    Positive → *other* lies ahead in the direction of travel.
    Zero / negative → level with or behind.
    """
    dx, dy = STEP[direction]
    return (other[0] - position[0]) * dx + (other[1] - position[1]) * dy


@dataclass(frozen=True)
class Threshold:
    """Axis-aligned line test: ``coord >= value`` or ``coord <= value``.

    Parameters
    ----------
    axis : int
        :data:`AXIS_X` or :data:`AXIS_Y`.
    value : int
        Position of the line on that axis.
    at_least : bool
        *True* → reached when the coordinate is ``>= value``;
        *False* → reached when it is ``<= value``.
    strict : bool
        Use ``>`` / ``<`` instead.
    """

    axis: int
    value: int
    at_least: bool
    strict: bool = False

    def reached(self, position: Point) -> bool:
        coord = position[self.axis]
        if self.at_least:
            return coord > self.value if self.strict else coord >= self.value
        return coord < self.value if self.strict else coord <= self.value


@dataclass(frozen=True)
class Band:
    """Inclusive window ``[low, high]`` on one axis."""

    axis: int
    low: int
    high: int

    def contains(self, position: Point) -> bool:
        return self.low <= position[self.axis] <= self.high

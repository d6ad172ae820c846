"""
sim/entities.py
===============
Enums and entity records shared by every simulation module.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Tuple

Point = Tuple[int, int]


class Approach(Enum):
    """Road feeding the intersection, named by its travel heading.

    Declaration order is the fixed enumeration order the scheduler uses
    for tie-breaking and cyclic fallback.
    """
    NORTH = "N"
    SOUTH = "S"
    EAST = "E"
    WEST = "W"


class Route(Enum):
    """Manoeuvre assigned at spawn time."""
    STRAIGHT = "straight"
    LEFT = "left"
    RIGHT = "right"


class LightState(Enum):
    RED = "red"
    GREEN = "green"


APPROACHES: Tuple[Approach, ...] = tuple(Approach)
ROUTES: Tuple[Route, ...] = tuple(Route)


@dataclass
class Vehicle:
    """A single vehicle.

    Attributes
    ----------
    id : int
        Monotonic identifier, unique within one world.
    position : Point
        Top-left corner of the bounding box in canvas units.
    direction : Approach
        Current travel heading.  Equals the spawn approach until a turn
        rewrites it.
    route : Route
        Manoeuvre chosen at spawn, never changed.
    has_passed_intersection : bool
        Set once the vehicle clears its passed-intersection threshold.
    has_turned : bool
        Set once the turn transition fired; only after the vehicle passed.
    """

    id: int
    position: Point
    direction: Approach
    route: Route
    has_passed_intersection: bool = False
    has_turned: bool = False

    @property
    def x(self) -> int:
        return self.position[0]

    @property
    def y(self) -> int:
        return self.position[1]


@dataclass
class TrafficLight:
    """Signal governing one approach; mutated only by the scheduler."""

    direction: Approach
    state: LightState
    position: Point
    last_change: float = 0.0

    @property
    def is_green(self) -> bool:
        return self.state is LightState.GREEN

"""
sim/spawner.py
==============
Spawn policy: global cooldown, spawn-edge clearance, random route.

Rejected requests are not errors — they are counted, logged at DEBUG and
the caller receives *None*.
"""

from __future__ import annotations

import logging
import random
from typing import TYPE_CHECKING, Optional

from sim.entities import APPROACHES, ROUTES, Approach, Vehicle
from sim.layout import IntersectionLayout

if TYPE_CHECKING:
    from sim.world import SimulationState

log = logging.getLogger("spawner")


class Spawner:
    """Creates vehicles at the approach spawn points.

    Parameters
    ----------
    layout : IntersectionLayout
        Supplies spawn points and spawn-edge clearance tests.
    rng : random.Random, optional
        Source for route and approach draws.  Pass a seeded instance for
        reproducible runs.
    """

    def __init__(
        self,
        layout: IntersectionLayout,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.layout = layout
        self.rng = rng if rng is not None else random.Random()
        self.spawned = 0
        self.rejected_cooldown = 0
        self.rejected_blocked = 0

    def spawn(
        self, state: "SimulationState", direction: Approach, now: float,
    ) -> Optional[Vehicle]:
        """Try to add a vehicle on *direction*; return it, or *None* if rejected."""
        cooldown = self.layout.policy.spawn_cooldown_s
        if state.last_spawn_time is not None and now - state.last_spawn_time < cooldown:
            self.rejected_cooldown += 1
            log.debug("spawn %s rejected: cooldown", direction.name)
            return None

        for other in state.vehicles:
            if other.direction is direction and self.layout.blocks_spawn(direction, other.position):
                self.rejected_blocked += 1
                log.debug(
                    "spawn %s rejected: vehicle #%d too close to the edge",
                    direction.name, other.id,
                )
                return None

        vehicle = Vehicle(
            id=state.next_vehicle_id,
            position=self.layout.spawn_points[direction],
            direction=direction,
            route=self.rng.choice(ROUTES),
        )
        state.next_vehicle_id += 1
        state.vehicles.append(vehicle)
        state.last_spawn_time = now
        self.spawned += 1
        log.debug(
            "spawned #%d %s %s at %s",
            vehicle.id, direction.name, vehicle.route.value, vehicle.position,
        )
        return vehicle

    def spawn_random(self, state: "SimulationState", now: float) -> Optional[Vehicle]:
        """Spawn on a uniformly drawn approach."""
        return self.spawn(state, self.rng.choice(APPROACHES), now)

    def reset_counters(self) -> None:
        self.spawned = 0
        self.rejected_cooldown = 0
        self.rejected_blocked = 0

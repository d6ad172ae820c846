#!/usr/bin/env python3
"""
sim/world.py
============
Single-intersection traffic world.

:class:`SimulationState` holds every mutable piece of the simulation (the
vehicle list, the four lights and the spawn bookkeeping).  :class:`World`
owns one state plus the collaborators that act on it — scheduler, spawner,
motion engine, clock and statistics — and exposes the tick-driven API the
view and headless runner use:

* :meth:`World.advance_tick` — drain queued input, then run scheduler and
  motion once (skipped while paused).
* :meth:`World.render_snapshot` — immutable copy of what to draw.
* :meth:`World.request_spawn`, :meth:`World.request_spawn_random`,
  :meth:`World.toggle_pause`, :meth:`World.request_reset` — enqueue input;
  applied FIFO at the next tick.
"""

from __future__ import annotations

import logging
import random
from collections import deque
from dataclasses import dataclass, field
from typing import Deque, Dict, List, Optional, Tuple, Union

from sim.clock import WallClock
from sim.entities import (
    APPROACHES,
    Approach,
    LightState,
    Point,
    Route,
    TrafficLight,
    Vehicle,
)
from sim.layout import IntersectionLayout
from sim.motion import MotionEngine
from sim.scheduler import LightScheduler, make_scheduler, queue_counts
from sim.spawner import Spawner
from sim.stats import TrafficStats
from sim.traffic_policy import SimulationPolicy

log = logging.getLogger("world")

# Light that is green when a world starts.
_INITIAL_GREEN = Approach.EAST

# Command kinds
_CMD_SPAWN = "spawn"
_CMD_SPAWN_RANDOM = "spawn_random"
_CMD_TOGGLE_PAUSE = "toggle_pause"
_CMD_RESET = "reset"


@dataclass
class SimulationState:
    """All mutable simulation data.

    Attributes
    ----------
    lights : list of TrafficLight
        One per approach, in N, S, E, W order.
    vehicles : list of Vehicle
        Live vehicles in spawn order.
    last_spawn_time : float or None
        Clock reading of the last successful spawn.
    next_vehicle_id : int
        Id handed to the next spawned vehicle.
    """

    lights: List[TrafficLight]
    vehicles: List[Vehicle] = field(default_factory=list)
    last_spawn_time: Optional[float] = None
    next_vehicle_id: int = 1

    @classmethod
    def initial(cls, layout: IntersectionLayout, now: float = 0.0) -> "SimulationState":
        lights = [
            TrafficLight(
                direction=approach,
                state=LightState.GREEN if approach is _INITIAL_GREEN else LightState.RED,
                position=layout.light_positions[approach],
                last_change=now,
            )
            for approach in APPROACHES
        ]
        return cls(lights=lights)

    def light_for(self, approach: Approach) -> Optional[TrafficLight]:
        for light in self.lights:
            if light.direction is approach:
                return light
        return None


@dataclass(frozen=True)
class LightView:
    approach: Approach
    state: LightState
    position: Point


@dataclass(frozen=True)
class VehiclePose:
    id: int
    position: Point
    direction: Approach
    route: Route
    passed: bool
    turned: bool


@dataclass(frozen=True)
class WorldSnapshot:
    """Read-only view of one moment, handed to render sinks."""

    tick: int
    paused: bool
    now: float
    lights: Tuple[LightView, ...]
    vehicles: Tuple[VehiclePose, ...]
    queue_counts: Dict[Approach, int]


@dataclass(frozen=True)
class Command:
    kind: str
    approach: Optional[Approach] = None


class World:
    """Four-way intersection driven one tick at a time.

    Parameters
    ----------
    policy : SimulationPolicy or None
        Tunable constants; uses defaults when *None*.  Validated on entry.
    scheduler : str or LightScheduler
        ``'priority'`` (default), ``'adaptive'``, ``'fixed'`` or a ready
        scheduler instance built for the same policy.
    seed : int or None
        Seed for route and random-approach draws.
    clock : object or None
        Anything with ``now()`` and ``tick()``; a :class:`WallClock` when
        *None*.  Pass a :class:`~sim.clock.TickClock` for deterministic runs.
    stats_rows : int or None
        Cap on retained statistics rows.
    """

    def __init__(
        self,
        policy: Optional[SimulationPolicy] = None,
        scheduler: Union[str, LightScheduler] = "priority",
        seed: Optional[int] = None,
        clock=None,
        stats_rows: Optional[int] = None,
    ) -> None:
        self.policy = policy or SimulationPolicy()
        self.policy.validate()
        self.layout = IntersectionLayout.from_policy(self.policy)
        if isinstance(scheduler, LightScheduler):
            self.scheduler = scheduler
        else:
            self.scheduler = make_scheduler(scheduler, self.policy, self.layout)
        self.clock = clock if clock is not None else WallClock()
        self._rng = random.Random(seed)
        self.spawner = Spawner(self.layout, self._rng)
        self.motion = MotionEngine(
            self.layout, guards_intersection=self.scheduler.guards_intersection,
        )
        self.stats = TrafficStats(max_rows=stats_rows)
        self._commands: Deque[Command] = deque()
        self._paused = False
        self.tick_count = 0
        self.state = SimulationState.initial(self.layout, self.clock.now())
        log.info(
            "World ready: scheduler=%s seed=%s canvas=%dx%d",
            self.scheduler.name, seed,
            self.policy.canvas_width, self.policy.canvas_height,
        )

    # ── initialisation / reset ────────────────────────────────────────────

    def reset(self) -> None:
        """Start over with no vehicles; policy, scheduler and RNG are kept.

        Also drops any queued commands.  Use :meth:`request_reset` to reset
        in order with other input instead.
        """
        self._commands.clear()
        self._restart()

    def _restart(self) -> None:
        self.state = SimulationState.initial(self.layout, self.clock.now())
        self._paused = False
        self.tick_count = 0
        self.stats.reset()
        self.spawner.reset_counters()
        self.motion.reset_counters()
        self.scheduler.light_changes = 0
        log.info("World reset")

    # ── input ─────────────────────────────────────────────────────────────

    def request_spawn(self, approach: Approach) -> None:
        self._commands.append(Command(_CMD_SPAWN, Approach(approach)))

    def request_spawn_random(self) -> None:
        self._commands.append(Command(_CMD_SPAWN_RANDOM))

    def toggle_pause(self) -> None:
        self._commands.append(Command(_CMD_TOGGLE_PAUSE))

    def request_reset(self) -> None:
        self._commands.append(Command(_CMD_RESET))

    @property
    def paused(self) -> bool:
        return self._paused

    @property
    def pending_commands(self) -> int:
        return len(self._commands)

    # ── tick ──────────────────────────────────────────────────────────────

    def advance_tick(self) -> None:
        """Apply queued input, then run one simulation step unless paused."""
        self._drain_commands()
        if self._paused:
            return

        self.clock.tick()
        now = self.clock.now()
        self.scheduler.decide(self.state.lights, self.state.vehicles, now)
        self.motion.step(self.state)
        self.tick_count += 1
        self.stats.record(
            self.tick_count,
            now,
            self.state.lights,
            queue_counts(self.state.vehicles, self.layout),
            len(self.state.vehicles),
            self.spawner.spawned,
            self.motion.removed,
        )

    def run(self, ticks: int) -> None:
        for _ in range(ticks):
            self.advance_tick()

    def _drain_commands(self) -> None:
        while self._commands:
            cmd = self._commands.popleft()
            if cmd.kind == _CMD_SPAWN:
                self.spawner.spawn(self.state, cmd.approach, self.clock.now())
            elif cmd.kind == _CMD_SPAWN_RANDOM:
                self.spawner.spawn_random(self.state, self.clock.now())
            elif cmd.kind == _CMD_TOGGLE_PAUSE:
                self._paused = not self._paused
                log.info("Simulation %s", "paused" if self._paused else "resumed")
            elif cmd.kind == _CMD_RESET:
                self._restart()

    # ── queries ───────────────────────────────────────────────────────────

    def render_snapshot(self) -> WorldSnapshot:
        lights = tuple(
            LightView(light.direction, light.state, light.position)
            for light in self.state.lights
        )
        vehicles = tuple(
            VehiclePose(
                id=v.id,
                position=v.position,
                direction=v.direction,
                route=v.route,
                passed=v.has_passed_intersection,
                turned=v.has_turned,
            )
            for v in self.state.vehicles
        )
        return WorldSnapshot(
            tick=self.tick_count,
            paused=self._paused,
            now=self.clock.now(),
            lights=lights,
            vehicles=vehicles,
            queue_counts=queue_counts(self.state.vehicles, self.layout),
        )

    def green_approaches(self) -> List[Approach]:
        return [light.direction for light in self.state.lights if light.is_green]

#!/usr/bin/env python3
"""
sim/scheduler.py
================
Traffic-light schedulers.

Each scheduler exposes ``decide(lights, vehicles, now)`` which is called
once per tick and mutates the four :class:`TrafficLight` records in place.

* :class:`FixedCycleScheduler` — two-phase cycle (N+S, then E+W) on a
  fixed timer, blind to queues.
* :class:`AdaptiveScheduler` — one approach green at a time, chosen by
  queue length, yielding after ``max_green_s`` or when its queue empties.
* :class:`PriorityScheduler` — the adaptive scheduler plus a pre-emption
  rule for starved approaches.  Default.
"""

from __future__ import annotations

import logging
from typing import Dict, List, Optional, Sequence, Set, Tuple, Type

from sim.entities import APPROACHES, Approach, LightState, TrafficLight, Vehicle
from sim.layout import IntersectionLayout
from sim.traffic_policy import SimulationPolicy

log = logging.getLogger("scheduler")


def queue_counts(
    vehicles: Sequence[Vehicle], layout: IntersectionLayout,
) -> Dict[Approach, int]:
    """Waiting vehicles per approach, in enumeration order.

    A vehicle waits on the approach matching its current heading while it
    has not passed the intersection and sits on the approach side of the
    stop line.
    """
    counts = {approach: 0 for approach in APPROACHES}
    for vehicle in vehicles:
        if vehicle.has_passed_intersection:
            continue
        if layout.is_waiting(vehicle.direction, vehicle.position):
            counts[vehicle.direction] += 1
    return counts


def green_approaches(lights: Sequence[TrafficLight]) -> Set[Approach]:
    return {light.direction for light in lights if light.is_green}


def _index_of(lights: Sequence[TrafficLight], approach: Approach) -> Optional[int]:
    for idx, light in enumerate(lights):
        if light.direction is approach:
            return idx
    return None


class LightScheduler:
    """Base class; subclasses implement :meth:`decide`."""

    name = "base"
    guards_intersection = False
    """Whether vehicles at a green stop line must also wait for a clear box."""

    def __init__(self, policy: SimulationPolicy, layout: IntersectionLayout) -> None:
        self.policy = policy
        self.layout = layout
        self.light_changes = 0

    def decide(
        self,
        lights: List[TrafficLight],
        vehicles: Sequence[Vehicle],
        now: float,
    ) -> None:
        raise NotImplementedError

    def _set_green(
        self,
        lights: List[TrafficLight],
        selected: Set[Approach],
        now: float,
        reason: str,
    ) -> None:
        """Turn *selected* green and the rest red; refresh every timestamp."""
        before = green_approaches(lights)
        for light in lights:
            light.state = LightState.GREEN if light.direction in selected else LightState.RED
            light.last_change = now
        if before != selected:
            self.light_changes += 1
            log.info(
                "green -> %s (%s)",
                ",".join(a.name for a in APPROACHES if a in selected) or "none",
                reason,
            )


class FixedCycleScheduler(LightScheduler):
    """Alternate N+S and E+W every ``fixed_cycle_green_s`` seconds."""

    name = "fixed"
    PHASES: Tuple[Tuple[Approach, ...], ...] = (
        (Approach.NORTH, Approach.SOUTH),
        (Approach.EAST, Approach.WEST),
    )

    def decide(self, lights, vehicles, now):
        green = green_approaches(lights)
        current = None
        for idx, phase in enumerate(self.PHASES):
            if green and green <= set(phase):
                current = idx
                break

        if current is None:
            self._set_green(lights, set(self.PHASES[0]), now, "cycle start")
            return

        started = min(light.last_change for light in lights if light.is_green)
        if now - started >= self.policy.fixed_cycle_green_s:
            nxt = (current + 1) % len(self.PHASES)
            self._set_green(lights, set(self.PHASES[nxt]), now, "cycle")
        elif green != set(self.PHASES[current]):
            self._set_green(lights, set(self.PHASES[current]), now, "phase sync")


class AdaptiveScheduler(LightScheduler):
    """Queue-driven single-approach green without pre-emption."""

    name = "adaptive"
    priority_enabled = False

    def decide(self, lights, vehicles, now):
        counts = queue_counts(vehicles, self.layout)
        if sum(counts.values()) == 0:
            # Idle: nobody is favoured while the intersection is empty.
            if green_approaches(lights):
                self.light_changes += 1
                log.info("green -> none (idle)")
            for light in lights:
                light.state = LightState.RED
                light.last_change = now
            return

        idx, reason = self.select(lights, counts, now)
        if idx is None:
            return
        self._set_green(lights, {lights[idx].direction}, now, reason)
        log.debug("queues %s", {a.name: n for a, n in counts.items()})

    def select(
        self,
        lights: Sequence[TrafficLight],
        counts: Dict[Approach, int],
        now: float,
    ) -> Tuple[Optional[int], str]:
        """Index of the light to turn green, or *None* to keep the current one."""
        if self.priority_enabled:
            starved = self.priority_candidate(lights, counts)
            if starved is not None:
                idx = _index_of(lights, starved)
                return (idx if idx is not None else 0), f"priority {starved.name}"

        busiest = self.busiest(counts)
        target = busiest or Approach.NORTH

        green_idx = next(
            (i for i, light in enumerate(lights) if light.is_green), None
        )
        if green_idx is not None:
            green = lights[green_idx]
            timed_out = now - green.last_change >= self.policy.max_green_s
            drained = counts[green.direction] == 0
            if not (timed_out or drained):
                return None, "keep"
            idx = _index_of(lights, target)
            reason = "max green" if timed_out else "queue empty"
            return (idx if idx is not None else (green_idx + 1) % len(lights)), reason

        idx = _index_of(lights, target)
        return (idx if idx is not None else 0), "demand"

    def priority_candidate(
        self,
        lights: Sequence[TrafficLight],
        counts: Dict[Approach, int],
    ) -> Optional[Approach]:
        """First approach (N, S, E, W order) starving behind a short green queue."""
        for approach in APPROACHES:
            if counts[approach] < self.policy.priority_threshold:
                continue
            for light in lights:
                if (
                    light.is_green
                    and light.direction is not approach
                    and counts[light.direction] < self.policy.priority_green_max
                ):
                    return approach
        return None

    @staticmethod
    def busiest(counts: Dict[Approach, int]) -> Optional[Approach]:
        """Approach with the strictly largest queue; first seen wins ties."""
        best: Optional[Approach] = None
        best_count = 0
        for approach in APPROACHES:
            if counts[approach] > best_count:
                best_count = counts[approach]
                best = approach
        return best


class PriorityScheduler(AdaptiveScheduler):
    """Adaptive scheduler with starvation pre-emption and a box guard."""

    name = "priority"
    priority_enabled = True
    guards_intersection = True


SCHEDULERS: Dict[str, Type[LightScheduler]] = {
    cls.name: cls
    for cls in (FixedCycleScheduler, AdaptiveScheduler, PriorityScheduler)
}


def make_scheduler(
    name: str, policy: SimulationPolicy, layout: IntersectionLayout,
) -> LightScheduler:
    """Instantiate a scheduler by name (``fixed``, ``adaptive``, ``priority``)."""
    try:
        cls = SCHEDULERS[str(name).strip().lower()]
    except KeyError:
        raise ValueError(
            f"unknown scheduler {name!r}; expected one of {sorted(SCHEDULERS)}"
        ) from None
    return cls(policy, layout)

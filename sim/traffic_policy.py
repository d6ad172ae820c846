#!/usr/bin/env python3
"""
sim/traffic_policy.py
=====================
Tunable geometry, kinematics and scheduling parameters for the intersection
simulation.  Every constant lives in the frozen :class:`SimulationPolicy`
dataclass so that experiments can swap policies without touching code.

All distances are in canvas units (pixels of the reference 900 x 800 canvas)
and all speeds in canvas units per tick.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class SimulationPolicy:
    """Immutable bag of every tunable simulation parameter.

    Groups: canvas, road and vehicle geometry, kinematics, spawn envelope,
    signal scheduler, stop-line and turn geometry, rendering placement.
    """

    # ── Canvas ────────────────────────────────────────────────────────────
    canvas_width: int = 900
    """Logical canvas width; the intersection sits at its centre."""

    canvas_height: int = 800
    """Logical canvas height."""

    # ── Road / vehicle geometry ───────────────────────────────────────────
    road_width: int = 70
    """Width of each of the two crossing roads (two lanes each)."""

    vehicle_width: int = 25
    """Vehicle box width when travelling north/south."""

    vehicle_height: int = 35
    """Vehicle box length when travelling north/south."""

    # ── Kinematics ────────────────────────────────────────────────────────
    vehicle_speed: int = 2
    """Fixed distance a moving vehicle advances per tick."""

    min_vehicle_distance: int = 50
    """Bumper-to-bumper following distance in the same lane."""

    tick_rate_hz: float = 60.0
    """Logical tick rate used by the fixed-step clock."""

    # ── Spawn envelope ────────────────────────────────────────────────────
    spawn_cooldown_s: float = 1.0
    """Global cooldown between two successful spawns (any approach)."""

    # ── Signal scheduler ──────────────────────────────────────────────────
    max_green_s: float = 4.0
    """Maximum green time before the adaptive schedulers reconsider."""

    fixed_cycle_green_s: float = 4.0
    """Phase length of the fixed-cycle two-phase scheduler."""

    priority_threshold: int = 4
    """Queue length at which an approach may pre-empt the current green."""

    priority_green_max: int = 3
    """Pre-emption only fires while the green queue is below this count."""

    # ── Stop line / turn geometry ─────────────────────────────────────────
    stop_line_margin: int = 5
    """Stop line distance from the intersection edge."""

    stop_band: int = 5
    """Width of the tolerance window in which a red light holds a vehicle."""

    turn_offset: int = 30
    """Offset from the centre used by the passed-intersection thresholds."""

    turn_trigger_margin: int = 5
    """Extra run-up before the early turn trigger line."""

    despawn_margin: int = 100
    """Vehicles further than this outside the canvas are removed."""

    # ── Rendering placement ───────────────────────────────────────────────
    light_offset: int = 20
    """Offset of a light from the intersection corner."""

    light_size: int = 20
    """Rendered light edge length."""

    @property
    def tick_dt(self) -> float:
        """Seconds per logical tick."""
        return 1.0 / self.tick_rate_hz

    def validate(self) -> None:
        """Raise :class:`ValueError` when the policy cannot describe a layout."""
        positive = {
            "canvas_width": self.canvas_width,
            "canvas_height": self.canvas_height,
            "road_width": self.road_width,
            "vehicle_width": self.vehicle_width,
            "vehicle_height": self.vehicle_height,
            "vehicle_speed": self.vehicle_speed,
            "tick_rate_hz": self.tick_rate_hz,
            "max_green_s": self.max_green_s,
            "fixed_cycle_green_s": self.fixed_cycle_green_s,
            "priority_threshold": self.priority_threshold,
        }
        for name, value in positive.items():
            if value <= 0:
                raise ValueError(f"{name} must be positive, got {value!r}")
        for name in ("min_vehicle_distance", "spawn_cooldown_s", "stop_band",
                     "despawn_margin"):
            if getattr(self, name) < 0:
                raise ValueError(f"{name} must not be negative")
        if self.road_width // 2 < self.vehicle_width:
            raise ValueError(
                "road_width must fit two vehicles side by side "
                f"(road_width={self.road_width}, vehicle_width={self.vehicle_width})"
            )
        if self.road_width >= min(self.canvas_width, self.canvas_height):
            raise ValueError("road_width must be smaller than the canvas")

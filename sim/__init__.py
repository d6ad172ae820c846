"""
sim — Simulation core
=====================

Modules
-------
world
    :class:`World` tick driver, :class:`SimulationState` and render snapshots.
traffic_policy
    :class:`SimulationPolicy` tunable constants.
entities
    Approach / route / light enums and the vehicle and light records.
layout
    :class:`IntersectionLayout` per-approach geometry tables.
physics
    Low-level axis and threshold helpers.
scheduler
    Fixed-cycle, adaptive and priority light schedulers.
spawner
    Spawn policy (cooldown, edge clearance, random routes).
motion
    Motion & Collision Engine.
clock
    Wall and fixed-step clocks.
stats
    Per-tick statistics recorder.
"""

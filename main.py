#!/usr/bin/env python3
"""
main.py
=======
Entry point.

Interactive (default) — opens the pygame window and drives the world from
the render loop.  Headless (``TRAFFIC_SIM_HEADLESS=1``) — runs a fixed
number of ticks on a fixed-step clock with random spawn requests, logs the
statistics summary and optionally exports the per-tick CSV.

Environment overrides
---------------------
``TRAFFIC_SIM_SEED``, ``TRAFFIC_SIM_SCHEDULER``, ``TRAFFIC_SIM_HEADLESS``,
``TRAFFIC_SIM_TICKS``, ``TRAFFIC_SIM_SPAWN_P``, ``TRAFFIC_SIM_STATS_CSV``,
``TRAFFIC_SIM_ASSETS``, ``TRAFFIC_SIM_LOG_LEVEL``.
"""

import logging
import os
import random
import sys
from dataclasses import dataclass
from typing import Mapping, Optional

import config
# Logging
from logging_setup import setup_logging
# World simulation
from sim.clock import TickClock
from sim.traffic_policy import SimulationPolicy
from sim.world import World
# pygame view
from ui.assets import AssetError
from ui.pygame_view import run_pygame_view

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off", ""}


@dataclass(frozen=True)
class Settings:
    """Run parameters after environment overrides are applied."""
    seed: Optional[int] = config.DEFAULT_SEED
    scheduler: str = config.DEFAULT_SCHEDULER
    headless: bool = False
    ticks: int = config.HEADLESS_TICKS
    spawn_probability: float = config.HEADLESS_SPAWN_PROBABILITY
    stats_csv: str = config.STATS_CSV_PATH
    assets_dir: str = config.ASSETS_DIR
    log_level: int = logging.INFO


def _parse_int(name: str, raw: str) -> int:
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None


def _parse_float(name: str, raw: str) -> float:
    try:
        return float(raw)
    except ValueError:
        raise ValueError(f"{name} must be a number, got {raw!r}") from None


def _parse_bool(name: str, raw: str) -> bool:
    value = raw.strip().lower()
    if value in _TRUE:
        return True
    if value in _FALSE:
        return False
    raise ValueError(f"{name} must be a boolean flag, got {raw!r}")


def _parse_level(name: str, raw: str) -> int:
    level = logging.getLevelName(raw.strip().upper())
    if not isinstance(level, int):
        raise ValueError(f"{name} must be a logging level name, got {raw!r}")
    return level


def load_settings(environ: Optional[Mapping[str, str]] = None) -> Settings:
    """Build :class:`Settings` from *environ* (``os.environ`` by default).

    Raises
    ------
    ValueError
        When an override is present but malformed.
    """
    env = os.environ if environ is None else environ
    kwargs = {"log_level": _parse_level("LOG_LEVEL", config.LOG_LEVEL)}

    if "TRAFFIC_SIM_SEED" in env:
        kwargs["seed"] = _parse_int("TRAFFIC_SIM_SEED", env["TRAFFIC_SIM_SEED"])
    if "TRAFFIC_SIM_SCHEDULER" in env:
        kwargs["scheduler"] = env["TRAFFIC_SIM_SCHEDULER"].strip().lower()
    if "TRAFFIC_SIM_HEADLESS" in env:
        kwargs["headless"] = _parse_bool("TRAFFIC_SIM_HEADLESS", env["TRAFFIC_SIM_HEADLESS"])
    if "TRAFFIC_SIM_TICKS" in env:
        ticks = _parse_int("TRAFFIC_SIM_TICKS", env["TRAFFIC_SIM_TICKS"])
        if ticks < 0:
            raise ValueError(f"TRAFFIC_SIM_TICKS must not be negative, got {ticks}")
        kwargs["ticks"] = ticks
    if "TRAFFIC_SIM_SPAWN_P" in env:
        p = _parse_float("TRAFFIC_SIM_SPAWN_P", env["TRAFFIC_SIM_SPAWN_P"])
        if not 0.0 <= p <= 1.0:
            raise ValueError(f"TRAFFIC_SIM_SPAWN_P must be within [0, 1], got {p}")
        kwargs["spawn_probability"] = p
    if "TRAFFIC_SIM_STATS_CSV" in env:
        kwargs["stats_csv"] = env["TRAFFIC_SIM_STATS_CSV"]
    if "TRAFFIC_SIM_ASSETS" in env:
        kwargs["assets_dir"] = env["TRAFFIC_SIM_ASSETS"]
    if "TRAFFIC_SIM_LOG_LEVEL" in env:
        kwargs["log_level"] = _parse_level("TRAFFIC_SIM_LOG_LEVEL", env["TRAFFIC_SIM_LOG_LEVEL"])
    return Settings(**kwargs)


def _policy() -> SimulationPolicy:
    return SimulationPolicy(
        canvas_width=config.CANVAS_WIDTH,
        canvas_height=config.CANVAS_HEIGHT,
    )


def run_headless(settings: Settings) -> World:
    """Run ``settings.ticks`` ticks with random spawn requests; returns the world."""
    log = logging.getLogger("main")
    policy = _policy()
    world = World(
        policy=policy,
        scheduler=settings.scheduler,
        seed=settings.seed,
        clock=TickClock(policy.tick_dt),
        stats_rows=config.STATS_MAX_ROWS,
    )
    rng = random.Random(settings.seed)

    log.info("Headless run: %d ticks, spawn p=%.3f", settings.ticks, settings.spawn_probability)
    for _ in range(settings.ticks):
        if rng.random() < settings.spawn_probability:
            world.request_spawn_random()
        world.advance_tick()

    summary = world.stats.summary()
    log.info(
        "Done: ticks=%d throughput=%d light_changes=%d vehicles_left=%d",
        summary["ticks"], summary["throughput"], summary["light_changes"],
        len(world.state.vehicles),
    )
    log.info("Mean queue: %s", summary["mean_queue"])
    log.info("Green share: %s", summary["green_share"])
    log.info(
        "Spawner: spawned=%d rejected_cooldown=%d rejected_blocked=%d",
        world.spawner.spawned, world.spawner.rejected_cooldown,
        world.spawner.rejected_blocked,
    )
    if settings.stats_csv:
        world.stats.export_csv(settings.stats_csv)
    return world


def run_interactive(settings: Settings) -> None:
    world = World(
        policy=_policy(),
        scheduler=settings.scheduler,
        seed=settings.seed,
        stats_rows=config.STATS_MAX_ROWS,
    )
    run_pygame_view(world, fps=config.TARGET_FPS, assets_dir=settings.assets_dir)
    if settings.stats_csv:
        world.stats.export_csv(settings.stats_csv)


def main() -> int:
    try:
        settings = load_settings()
    except ValueError as exc:
        setup_logging(logging.INFO)
        logging.getLogger("main").critical("Invalid configuration: %s", exc)
        return 1

    setup_logging(settings.log_level)
    log = logging.getLogger("main")
    log.info("Starting (scheduler=%s, seed=%s, headless=%s)",
             settings.scheduler, settings.seed, settings.headless)

    try:
        if settings.headless:
            run_headless(settings)
        else:
            run_interactive(settings)
    except AssetError as exc:
        log.critical("%s", exc)
        return 1
    except ValueError as exc:
        log.critical("Invalid configuration: %s", exc)
        return 1
    except KeyboardInterrupt:
        log.info("Shutting down...")
    return 0


if __name__ == "__main__":
    sys.exit(main())

#!/usr/bin/env python3
"""
config.py
=========
Application-wide configuration constants.

Values can be overridden via environment variables (see :mod:`main`).
This module is a thin, import-safe leaf — it never imports from
other project packages.
"""

# ── Simulation defaults ──────────────────────────────────────────────────────
DEFAULT_SCHEDULER: str = "priority"
DEFAULT_SEED = None

# ── Headless run ─────────────────────────────────────────────────────────────
HEADLESS_TICKS: int = 3600
HEADLESS_SPAWN_PROBABILITY: float = 0.05
STATS_CSV_PATH: str = ""
STATS_MAX_ROWS: int = 100_000

# ── UI defaults ──────────────────────────────────────────────────────────────
CANVAS_WIDTH: int = 900
CANVAS_HEIGHT: int = 800
TARGET_FPS: int = 60
ASSETS_DIR: str = ""

# ── Logging ──────────────────────────────────────────────────────────────────
LOG_FILE: str = "traffic_sim.log"
MOTION_DEBUG_LOG_FILE: str = "motion_debug.log"
LOG_LEVEL: str = "INFO"

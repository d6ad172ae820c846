#!/usr/bin/env python3
"""Visual constants shared across all renderers."""

from __future__ import annotations

from typing import Dict, Sequence, Tuple

from sim.entities import Approach, LightState, Route

from .types import ColorRGB


class ViewConstants:
    """Mixin providing every visual / layout constant."""

    TITLE = "Traffic Intersection Simulation"

    BG_COLOR: ColorRGB = (50, 50, 50)
    ROAD_COLOR: ColorRGB = (0, 0, 0)
    LANE_DASH_COLOR: ColorRGB = (255, 255, 255)
    STOP_LINE_COLOR: ColorRGB = (200, 200, 200)
    HUD_BG_COLOR: ColorRGB = (22, 22, 22)
    HUD_BORDER_COLOR: ColorRGB = (42, 42, 42)
    HUD_TEXT_COLOR: ColorRGB = (220, 220, 220)
    HUD_DIM_COLOR: ColorRGB = (140, 140, 140)
    GO_COLOR: ColorRGB = (0, 255, 127)
    STOP_COLOR: ColorRGB = (255, 60, 60)
    LIGHT_HOUSING_COLOR: ColorRGB = (25, 25, 25)

    # Lane markings: 15 px dash every 30 px, 2 px thick
    DASH_LEN = 15
    DASH_STEP = 30
    DASH_WIDTH = 2

    HUD_ALPHA = 210

    ROUTE_COLORS: Dict[Route, ColorRGB] = {
        Route.STRAIGHT: (0, 0, 255),
        Route.LEFT: (255, 0, 0),
        Route.RIGHT: (255, 255, 0),
    }

    LIGHT_COLORS: Dict[LightState, ColorRGB] = {
        LightState.RED: (255, 60, 60),
        LightState.GREEN: (0, 255, 127),
    }

    APPROACH_LABELS: Dict[Approach, str] = {
        Approach.NORTH: "N",
        Approach.SOUTH: "S",
        Approach.EAST: "E",
        Approach.WEST: "W",
    }

    LEGEND_ITEMS: Sequence[Tuple[str, ColorRGB]] = (
        ("STRAIGHT", (0, 0, 255)),
        ("LEFT", (255, 0, 0)),
        ("RIGHT", (255, 255, 0)),
    )

    KEY_HELP: Sequence[str] = (
        "ARROWS  Spawn N/S/E/W",
        "R       Random spawn",
        "P       Pause/Resume",
        "BKSP    Reset",
        "ESC     Quit",
    )

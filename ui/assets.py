#!/usr/bin/env python3
"""
ui/assets.py
============
Texture loading for the pygame view.

With an assets directory the view expects::

    <assets>/vehicles/car_<direction>_<route>.png   (12 files)
    <assets>/traffic_lights/red.png
    <assets>/traffic_lights/green.png

Without one, :func:`procedural_textures` paints equivalent sprites so the
simulation runs from a bare checkout.
"""

from __future__ import annotations

import logging
import os
from typing import Dict

import pygame

from sim.entities import APPROACHES, ROUTES, Approach, LightState, Route
from sim.traffic_policy import SimulationPolicy

from .types import ColorRGB, SpriteKey, TextureSet

log = logging.getLogger("view")

# Rotation that turns a north-facing sprite towards each heading
_HEADING_ROTATION: Dict[Approach, int] = {
    Approach.NORTH: 0,
    Approach.SOUTH: 180,
    Approach.EAST: -90,
    Approach.WEST: 90,
}


class AssetError(RuntimeError):
    """A texture could not be found or the display could not be set up."""


def texture_paths(assets_dir: str) -> Dict[object, str]:
    """Expected file for every sprite key and light state."""
    paths: Dict[object, str] = {}
    for direction in APPROACHES:
        for route in ROUTES:
            name = f"car_{direction.name.lower()}_{route.value}.png"
            paths[(direction, route)] = os.path.join(assets_dir, "vehicles", name)
    for state in LightState:
        paths[state] = os.path.join(assets_dir, "traffic_lights", f"{state.value}.png")
    return paths


def load_textures(assets_dir: str) -> TextureSet:
    """Load every texture from *assets_dir*.

    Raises
    ------
    AssetError
        When a file is missing or pygame cannot decode it.
    """
    paths = texture_paths(assets_dir)
    missing = [p for p in paths.values() if not os.path.isfile(p)]
    if missing:
        raise AssetError(f"Failed to load {missing[0]}: file not found "
                         f"({len(missing)} texture(s) missing)")

    vehicles: Dict[SpriteKey, pygame.Surface] = {}
    lights: Dict[LightState, pygame.Surface] = {}
    for key, path in paths.items():
        try:
            surface = pygame.image.load(path)
        except pygame.error as exc:
            raise AssetError(f"Failed to load {path}: {exc}") from exc
        if isinstance(key, LightState):
            lights[key] = surface
        else:
            vehicles[key] = surface
    log.info("Loaded %d textures from %s", len(paths), assets_dir)
    return TextureSet(vehicles=vehicles, lights=lights)


def _north_sprite(color: ColorRGB, w: int, h: int) -> pygame.Surface:
    sprite = pygame.Surface((w, h), pygame.SRCALPHA)

    # Body
    body = pygame.Rect(0, 0, w, h)
    pygame.draw.rect(sprite, color, body, border_radius=3)

    # Windshield
    r, g, b = color
    glass = (max(0, r - 60), max(0, g - 60), max(0, b - 60), 180)
    pygame.draw.rect(sprite, glass, pygame.Rect(3, 5, w - 6, 8), border_radius=2)

    # Headlights
    hl_color = (255, 248, 200)
    pygame.draw.circle(sprite, hl_color, (4, 2), 2)
    pygame.draw.circle(sprite, hl_color, (w - 4, 2), 2)

    # Taillights
    tl_color = (200, 40, 40)
    pygame.draw.circle(sprite, tl_color, (4, h - 2), 2)
    pygame.draw.circle(sprite, tl_color, (w - 4, h - 2), 2)

    # Border
    pygame.draw.rect(sprite, (235, 235, 235), body, width=1, border_radius=3)
    return sprite


def procedural_textures(
    policy: SimulationPolicy,
    route_colors: Dict[Route, ColorRGB],
    light_colors: Dict[LightState, ColorRGB],
    housing: ColorRGB = (25, 25, 25),
) -> TextureSet:
    """Paint a sprite per ``(direction, route)`` coloured by route."""
    vehicles: Dict[SpriteKey, pygame.Surface] = {}
    for route in ROUTES:
        base = _north_sprite(route_colors[route], policy.vehicle_width, policy.vehicle_height)
        for direction in APPROACHES:
            vehicles[(direction, route)] = pygame.transform.rotate(
                base, _HEADING_ROTATION[direction]
            )

    size = policy.light_size
    lights: Dict[LightState, pygame.Surface] = {}
    for state, color in light_colors.items():
        lamp = pygame.Surface((size, size), pygame.SRCALPHA)
        pygame.draw.rect(lamp, housing, (0, 0, size, size), border_radius=4)
        pygame.draw.circle(lamp, color, (size // 2, size // 2), size // 2 - 3)
        lights[state] = lamp
    return TextureSet(vehicles=vehicles, lights=lights)

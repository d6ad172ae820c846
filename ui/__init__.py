#!/usr/bin/env python3

from .types import ColorRGB, ColorRGBA, TextureSet
from .constants import ViewConstants
from .helpers import ViewHelpers
from .assets import AssetError, load_textures, procedural_textures
from .draw_road import RoadRenderer
from .draw_vehicles import VehicleRenderer
from .hud import HudRenderer
from .pygame_view import PygameIntersectionView, run_pygame_view

__all__ = [
    "ColorRGB",
    "ColorRGBA",
    "TextureSet",
    "ViewConstants",
    "ViewHelpers",
    "AssetError",
    "load_textures",
    "procedural_textures",
    "RoadRenderer",
    "VehicleRenderer",
    "HudRenderer",
    "PygameIntersectionView",
    "run_pygame_view",
]

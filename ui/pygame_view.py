#!/usr/bin/env python3
"""
Main view class — combines all UI mixins into one runnable Pygame window.

Module layout
─────────────
    ui/
    ├── types.py           – ColorRGB, ColorRGBA, TextureSet
    ├── constants.py       – ViewConstants mixin (all class-level constants)
    ├── helpers.py         – ViewHelpers mixin  (fonts, rects, text)
    ├── assets.py          – texture loading / procedural sprites, AssetError
    ├── draw_road.py       – RoadRenderer mixin (roads, markings, lights)
    ├── draw_vehicles.py   – VehicleRenderer mixin (vehicle sprites)
    ├── hud.py             – HudRenderer mixin  (HUD, legend, pause banner)
    └── pygame_view.py     – PygameIntersectionView (this file – main loop)
"""

from __future__ import annotations

import logging
from typing import Dict, Optional

import pygame

from sim.entities import Approach
from sim.world import World, WorldSnapshot

from .assets import AssetError, load_textures, procedural_textures
from .constants import ViewConstants
from .draw_road import RoadRenderer
from .draw_vehicles import VehicleRenderer
from .helpers import ViewHelpers
from .hud import HudRenderer
from .types import SpriteKey, TextureSet

log = logging.getLogger("view")


class PygameIntersectionView(
    ViewConstants,
    ViewHelpers,
    RoadRenderer,
    VehicleRenderer,
    HudRenderer,
):
    """Intersection visualiser powered by Pygame.

    Each frame drains keyboard input into the world's command queue,
    advances the world by one tick and draws the resulting snapshot.
    """

    SPAWN_KEYS: Dict[int, Approach] = {
        pygame.K_UP: Approach.NORTH,
        pygame.K_DOWN: Approach.SOUTH,
        pygame.K_LEFT: Approach.WEST,
        pygame.K_RIGHT: Approach.EAST,
    }

    def __init__(self, world: World, fps: int = 60, assets_dir: str = ""):
        self.world = world
        self.policy = world.policy
        self.layout = world.layout
        self.width = self.policy.canvas_width
        self.height = self.policy.canvas_height
        self.fps = fps
        self.assets_dir = assets_dir

        self.screen: Optional[pygame.Surface] = None
        self.clock: Optional[pygame.time.Clock] = None
        self.font_small: Optional[pygame.font.Font] = None
        self.font_tiny: Optional[pygame.font.Font] = None
        self.font_title: Optional[pygame.font.Font] = None
        self.textures: Optional[TextureSet] = None
        self._scaled_vehicles: Dict[SpriteKey, pygame.Surface] = {}

        # UI state
        self.show_legend = True
        self.show_help = True

    # ------------------------------------------------------------------ #
    #  Input                                                               #
    # ------------------------------------------------------------------ #
    def handle_key(self, key: int) -> bool:
        """Translate one key press; returns *False* when the view should close."""
        approach = self.SPAWN_KEYS.get(key)
        if approach is not None:
            self.world.request_spawn(approach)
        elif key == pygame.K_r:
            self.world.request_spawn_random()
        elif key == pygame.K_p:
            self.world.toggle_pause()
        elif key == pygame.K_BACKSPACE:
            self.world.request_reset()
        elif key == pygame.K_l:
            self.show_legend = not self.show_legend
        elif key == pygame.K_h:
            self.show_help = not self.show_help
        elif key == pygame.K_ESCAPE:
            return False
        return True

    # ------------------------------------------------------------------ #
    #  Setup                                                               #
    # ------------------------------------------------------------------ #
    def _init_display(self) -> None:
        try:
            pygame.init()
            pygame.display.set_caption(self.TITLE)
            self.screen = pygame.display.set_mode((self.width, self.height))
            self.clock = pygame.time.Clock()
            self.font_small = self._load_font(14, bold=True)
            self.font_tiny = self._load_font(12, bold=False)
            self.font_title = self._load_font(28, bold=True)
        except pygame.error as exc:
            raise AssetError(f"Failed to initialise display: {exc}") from exc

        if self.assets_dir:
            self.textures = load_textures(self.assets_dir)
        else:
            self.textures = procedural_textures(
                self.policy, self.ROUTE_COLORS, self.LIGHT_COLORS, self.LIGHT_HOUSING_COLOR,
            )
        self._scaled_vehicles.clear()

    # ------------------------------------------------------------------ #
    #  Render                                                              #
    # ------------------------------------------------------------------ #
    def render(self, snapshot: WorldSnapshot) -> None:
        surface = self.screen
        surface.fill(self.BG_COLOR)
        self.draw_road(surface)
        self.draw_lane_markings(surface)
        self.draw_stop_lines(surface)
        self.draw_lights(surface, snapshot.lights)
        self.draw_vehicles(surface, snapshot.vehicles)

        self.draw_hud(surface, snapshot)
        if self.show_legend:
            self._draw_legend(surface)
        if self.show_help:
            self._draw_key_help(surface)
        if snapshot.paused:
            self._draw_pause_banner(surface)

    # ------------------------------------------------------------------ #
    #  Main loop                                                           #
    # ------------------------------------------------------------------ #
    def run(self) -> None:
        self._init_display()
        log.info("View started (%dx%d @ %d fps)", self.width, self.height, self.fps)

        running = True
        try:
            while running:
                self.clock.tick(self.fps)

                for event in pygame.event.get():
                    if event.type == pygame.QUIT:
                        running = False
                    elif event.type == pygame.KEYDOWN:
                        running = self.handle_key(event.key) and running

                self.world.advance_tick()
                self.render(self.world.render_snapshot())
                pygame.display.flip()
        finally:
            pygame.quit()
            log.info("View closed after %d ticks", self.world.tick_count)


# ---------------------------------------------------------------------- #
#  Convenience entry point                                                 #
# ---------------------------------------------------------------------- #
def run_pygame_view(world: World, fps: int = 60, assets_dir: str = "") -> None:
    view = PygameIntersectionView(world=world, fps=fps, assets_dir=assets_dir)
    view.run()

#!/usr/bin/env python3
"""
Tests for the view's input mapping and texture loading (no display needed).
"""

from __future__ import annotations

import os
import tempfile
import unittest

import pygame

from sim.clock import TickClock
from sim.entities import APPROACHES, ROUTES, Approach, LightState, Route
from sim.traffic_policy import SimulationPolicy
from sim.world import World
from ui.assets import AssetError, load_textures, procedural_textures, texture_paths
from ui.constants import ViewConstants
from ui.pygame_view import PygameIntersectionView


class KeyMappingTests(unittest.TestCase):
    def setUp(self) -> None:
        policy = SimulationPolicy()
        self.world = World(policy=policy, seed=2, clock=TickClock(policy.tick_dt))
        self.view = PygameIntersectionView(self.world)

    def test_arrow_keys_spawn_on_their_approach(self) -> None:
        expected = {
            pygame.K_UP: Approach.NORTH,
            pygame.K_DOWN: Approach.SOUTH,
            pygame.K_LEFT: Approach.WEST,
            pygame.K_RIGHT: Approach.EAST,
        }
        for key, approach in expected.items():
            with self.subTest(approach=approach):
                self.world.reset()
                self.assertTrue(self.view.handle_key(key))
                self.world.advance_tick()
                self.assertEqual(
                    [v.direction for v in self.world.state.vehicles], [approach]
                )

    def test_pause_and_random_spawn(self) -> None:
        self.view.handle_key(pygame.K_p)
        self.view.handle_key(pygame.K_r)
        self.world.advance_tick()
        self.assertTrue(self.world.paused)
        self.assertEqual(len(self.world.state.vehicles), 1)

    def test_backspace_resets_at_next_tick(self) -> None:
        self.view.handle_key(pygame.K_UP)
        self.world.advance_tick()
        self.view.handle_key(pygame.K_BACKSPACE)
        self.assertEqual(len(self.world.state.vehicles), 1)
        self.world.advance_tick()
        self.assertEqual(self.world.state.vehicles, [])

    def test_spawn_after_backspace_in_same_frame_survives(self) -> None:
        self.view.handle_key(pygame.K_UP)
        self.world.advance_tick()
        self.view.handle_key(pygame.K_BACKSPACE)
        self.view.handle_key(pygame.K_DOWN)
        self.world.advance_tick()
        self.assertEqual(
            [v.direction for v in self.world.state.vehicles], [Approach.SOUTH]
        )

    def test_escape_closes(self) -> None:
        self.assertFalse(self.view.handle_key(pygame.K_ESCAPE))


class RenderTests(unittest.TestCase):
    def setUp(self) -> None:
        pygame.font.init()
        policy = SimulationPolicy()
        self.world = World(policy=policy, seed=3, clock=TickClock(policy.tick_dt))
        self.view = PygameIntersectionView(self.world)
        self.view.screen = pygame.Surface((self.view.width, self.view.height))
        self.view.font_small = pygame.font.Font(None, 14)
        self.view.font_tiny = pygame.font.Font(None, 12)
        self.view.font_title = pygame.font.Font(None, 28)
        self.view.textures = procedural_textures(
            policy, ViewConstants.ROUTE_COLORS, ViewConstants.LIGHT_COLORS,
        )

    def tearDown(self) -> None:
        pygame.font.quit()

    def test_frame_draws_hud_over_background(self) -> None:
        self.world.request_spawn(Approach.EAST)
        self.world.toggle_pause()
        self.world.advance_tick()
        self.view.render(self.world.render_snapshot())
        screen = self.view.screen
        self.assertNotEqual(screen.get_at((20, 20)), screen.get_at((300, 20)))


class TextureTests(unittest.TestCase):
    def test_expected_texture_files(self) -> None:
        paths = texture_paths("assets")
        self.assertEqual(len(paths), len(APPROACHES) * len(ROUTES) + 2)
        self.assertEqual(
            paths[(Approach.NORTH, Route.LEFT)],
            os.path.join("assets", "vehicles", "car_north_left.png"),
        )
        self.assertEqual(
            paths[LightState.GREEN],
            os.path.join("assets", "traffic_lights", "green.png"),
        )

    def test_missing_textures_raise_asset_error(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            with self.assertRaises(AssetError) as ctx:
                load_textures(tmp)
        self.assertIn("car_north_straight.png", str(ctx.exception))

    def test_procedural_sprites_match_vehicle_boxes(self) -> None:
        policy = SimulationPolicy()
        textures = procedural_textures(
            policy, ViewConstants.ROUTE_COLORS, ViewConstants.LIGHT_COLORS,
        )
        self.assertEqual(textures.vehicles[(Approach.NORTH, Route.STRAIGHT)].get_size(), (25, 35))
        self.assertEqual(textures.vehicles[(Approach.EAST, Route.LEFT)].get_size(), (35, 25))
        self.assertEqual(textures.lights[LightState.RED].get_size(), (20, 20))


if __name__ == "__main__":
    unittest.main()

"""
ui/draw_road.py
===============
Renders the static scene: two crossing roads, dashed centre markings,
stop lines and the four traffic lights.

All methods are *pure renderers* — they read the layout / snapshot and
draw to a surface.
"""

from __future__ import annotations

from typing import Sequence

import pygame

from sim.entities import Approach
from sim.world import LightView


class RoadRenderer:
    """Mixin that draws roads, lane markings, stop lines and lights."""

    def draw_road(self, surface: pygame.Surface) -> None:
        width, height = self.policy.canvas_width, self.policy.canvas_height
        left, top, _, _ = self.layout.box
        rw = self.policy.road_width
        pygame.draw.rect(surface, self.ROAD_COLOR, (0, top, width, rw))
        pygame.draw.rect(surface, self.ROAD_COLOR, (left, 0, rw, height))

    def draw_lane_markings(self, surface: pygame.Surface) -> None:
        cx, cy = self.layout.center
        for x in range(0, self.policy.canvas_width, self.DASH_STEP):
            pygame.draw.rect(
                surface, self.LANE_DASH_COLOR, (x, cy, self.DASH_LEN, self.DASH_WIDTH)
            )
        for y in range(0, self.policy.canvas_height, self.DASH_STEP):
            pygame.draw.rect(
                surface, self.LANE_DASH_COLOR, (cx, y, self.DASH_WIDTH, self.DASH_LEN)
            )

    def draw_stop_lines(self, surface: pygame.Surface) -> None:
        """One short bar across the inbound lane of each approach."""
        left, top, right, bottom = self.layout.box
        cx, cy = self.layout.center
        lines = {
            Approach.NORTH: ((left, bottom), (cx, bottom)),
            Approach.SOUTH: ((cx, top), (right, top)),
            Approach.EAST: ((left, top), (left, cy)),
            Approach.WEST: ((right, cy), (right, bottom)),
        }
        for start, end in lines.values():
            pygame.draw.line(surface, self.STOP_LINE_COLOR, start, end, 2)

    def draw_lights(self, surface: pygame.Surface, lights: Sequence[LightView]) -> None:
        for light in lights:
            rect = self.light_rect(light.position)
            texture = self.textures.lights[light.state]
            if texture.get_size() != rect.size:
                texture = pygame.transform.scale(texture, rect.size)
            surface.blit(texture, rect)

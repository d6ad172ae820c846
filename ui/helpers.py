"""
ui/helpers.py
=============
Utility mixin shared across UI modules: font loading, alpha-surface
drawing, text rendering and vehicle box geometry.
"""

from __future__ import annotations

from typing import Tuple

import pygame

from sim.entities import Point
from sim.physics import is_vertical
from sim.world import VehiclePose

from .types import ColorRGBA


class ViewHelpers:
    """Mixin of small drawing helpers used by every renderer."""

    # ── Fonts ─────────────────────────────────────────────────────────────

    @staticmethod
    def _load_font(size: int, bold: bool = False) -> pygame.font.Font:
        return pygame.font.SysFont("consolas,menlo,monospace", size, bold=bold)

    # ── Geometry ──────────────────────────────────────────────────────────

    def vehicle_rect(self, pose: VehiclePose) -> pygame.Rect:
        """Screen rect of a vehicle; east/west boxes are rotated."""
        w, h = self.policy.vehicle_width, self.policy.vehicle_height
        if not is_vertical(pose.direction):
            w, h = h, w
        return pygame.Rect(pose.position[0], pose.position[1], w, h)

    def light_rect(self, position: Point) -> pygame.Rect:
        size = self.policy.light_size
        return pygame.Rect(position[0], position[1], size, size)

    # ── Alpha drawing helpers ─────────────────────────────────────────────

    @staticmethod
    def draw_alpha_rect(
        target: pygame.Surface,
        color: ColorRGBA,
        rect: pygame.Rect,
        border_radius: int = 0,
    ) -> None:
        """Draw a semi-transparent rectangle from an RGBA colour."""
        tmp = pygame.Surface((rect.w, rect.h), pygame.SRCALPHA)
        pygame.draw.rect(tmp, color, (0, 0, rect.w, rect.h), border_radius=border_radius)
        target.blit(tmp, rect.topleft)

    # ── Text helper ───────────────────────────────────────────────────────

    @staticmethod
    def render_text(
        surface: pygame.Surface,
        font: pygame.font.Font,
        text: str,
        pos: Tuple[int, int],
        color: Tuple[int, ...] = (230, 230, 235),
        anchor: str = "topleft",
    ) -> pygame.Rect:
        """Render text with flexible *anchor* ('topleft', 'center', 'midright' …)."""
        img = font.render(text, True, color)
        rect = img.get_rect(**{anchor: pos})
        surface.blit(img, rect)
        return rect

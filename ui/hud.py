#!/usr/bin/env python3
"""HUD panel, legend, key help and pause banner (mixin)."""

from __future__ import annotations

import pygame

from sim.entities import APPROACHES, LightState
from sim.world import WorldSnapshot


class HudRenderer:
    """Mixin that draws every overlay / HUD element."""

    # ------------------------------------------------------------------ #
    #  Main HUD panel                                                      #
    # ------------------------------------------------------------------ #

    def draw_hud(self, surface: pygame.Surface, snapshot: WorldSnapshot) -> None:
        if self.font_small is None or self.font_tiny is None:
            return

        panel_rect = pygame.Rect(12, 12, 230, 128)
        self.draw_alpha_rect(
            surface, (*self.HUD_BG_COLOR, self.HUD_ALPHA), panel_rect, border_radius=6
        )
        pygame.draw.rect(surface, self.HUD_BORDER_COLOR, panel_rect, width=1, border_radius=6)

        x, y = panel_rect.x + 10, panel_rect.y + 8
        green = [light.approach for light in snapshot.lights if light.state is LightState.GREEN]
        green_label = ",".join(self.APPROACH_LABELS[a] for a in green) or "ALL RED"
        self.render_text(
            surface, self.font_small, f"GREEN {green_label}", (x, y),
            self.GO_COLOR if green else self.STOP_COLOR,
        )
        y += 20

        queues = "  ".join(
            f"{self.APPROACH_LABELS[a]}:{snapshot.queue_counts.get(a, 0)}"
            for a in APPROACHES
        )
        self.render_text(surface, self.font_tiny, f"QUEUE  {queues}", (x, y), self.HUD_TEXT_COLOR)
        y += 16

        lines = (
            f"VEHICLES {len(snapshot.vehicles)}",
            f"SPAWNED  {self.world.spawner.spawned}",
            f"EXITED   {self.world.motion.removed}",
            f"TICK     {snapshot.tick}",
            f"SCHED    {self.world.scheduler.name.upper()}",
        )
        for line in lines:
            self.render_text(surface, self.font_tiny, line, (x, y), self.HUD_DIM_COLOR)
            y += 14

    # ------------------------------------------------------------------ #
    #  Legend / key help                                                    #
    # ------------------------------------------------------------------ #

    def _draw_legend(self, surface: pygame.Surface) -> None:
        if self.font_tiny is None:
            return
        x = self.width - 120
        y = self.height - 16 - len(self.LEGEND_ITEMS) * 18 - 8
        box_w, box_h = 112, len(self.LEGEND_ITEMS) * 18 + 10
        pygame.draw.rect(
            surface, self.HUD_BG_COLOR, (x - 6, y - 4, box_w, box_h), border_radius=4
        )
        pygame.draw.rect(
            surface, self.HUD_BORDER_COLOR, (x - 6, y - 4, box_w, box_h), width=1, border_radius=4
        )
        for label, color in self.LEGEND_ITEMS:
            pygame.draw.circle(surface, color, (x + 4, y + 6), 4)
            text = self.font_tiny.render(label, True, (200, 200, 200))
            surface.blit(text, (x + 14, y))
            y += 18

    def _draw_key_help(self, surface: pygame.Surface) -> None:
        if self.font_tiny is None:
            return
        x, y = 16, self.height - 16 - len(self.KEY_HELP) * 14
        for line in self.KEY_HELP:
            self.render_text(surface, self.font_tiny, line, (x, y), self.HUD_DIM_COLOR)
            y += 14

    # ------------------------------------------------------------------ #
    #  Pause banner                                                        #
    # ------------------------------------------------------------------ #

    def _draw_pause_banner(self, surface: pygame.Surface) -> None:
        overlay = pygame.Surface((self.width, self.height), pygame.SRCALPHA)
        overlay.fill((0, 0, 0, 100))
        surface.blit(overlay, (0, 0))
        if self.font_title:
            text = self.font_title.render("PAUSED", True, (220, 220, 220))
            surface.blit(text, text.get_rect(center=(self.width // 2, self.height // 2)))

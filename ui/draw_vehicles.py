#!/usr/bin/env python3
"""Vehicle sprite rendering (mixin)."""

from __future__ import annotations

from typing import Sequence

import pygame

from sim.world import VehiclePose


class VehicleRenderer:
    """Mixin that draws every vehicle of a snapshot."""

    def draw_vehicles(self, surface: pygame.Surface, vehicles: Sequence[VehiclePose]) -> None:
        for pose in vehicles:
            self.draw_vehicle(surface, pose)

    def draw_vehicle(self, surface: pygame.Surface, pose: VehiclePose) -> None:
        rect = self.vehicle_rect(pose)
        texture = self._vehicle_texture(pose, rect.size)
        surface.blit(texture, rect)

    def _vehicle_texture(self, pose: VehiclePose, size) -> pygame.Surface:
        key = (pose.direction, pose.route)
        cached = self._scaled_vehicles.get(key)
        if cached is not None and cached.get_size() == tuple(size):
            return cached
        texture = self.textures.vehicles[key]
        if texture.get_size() != tuple(size):
            texture = pygame.transform.scale(texture, size)
        self._scaled_vehicles[key] = texture
        return texture

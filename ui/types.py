"""
ui/types.py
===========
Lightweight type aliases and containers used across every UI module.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Dict, Tuple

import pygame

from sim.entities import Approach, LightState, Route

ColorRGB = Tuple[int, int, int]
ColorRGBA = Tuple[int, int, int, int]

SpriteKey = Tuple[Approach, Route]


@dataclass
class TextureSet:
    """Surfaces keyed by what they depict.

    ``vehicles`` maps ``(direction, route)`` to a vehicle sprite and
    ``lights`` maps a :class:`LightState` to the light sprite.  Both are
    scaled to the target rect when drawn.
    """
    vehicles: Dict[SpriteKey, pygame.Surface]
    lights: Dict[LightState, pygame.Surface]

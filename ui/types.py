"""
ui/types.py
===========
Lightweight data containers used across every UI module.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Mapping, Tuple

ColorRGB = Tuple[int, int, int]
ColorRGBA = Tuple[int, int, int, int]


@dataclass
class Camera:
    """Viewport mapping world coordinates to screen pixels.

    World y grows downward like screen y, so there is no axis flip.
    """
    screen_w: int
    screen_h: int
    world_x: float = 0.0
    world_y: float = 0.0
    zoom: float = 1.0

    @classmethod
    def from_viewport(
        cls, viewport: Mapping[str, Any], screen_w: int, screen_h: int, zoom: float = 1.0
    ) -> "Camera":
        """Build a camera centred on a ``World.snapshot()["viewport"]`` dict."""
        return cls(screen_w, screen_h, float(viewport["x"]), float(viewport["y"]), zoom)

    def world_to_screen(self, wx: float, wy: float) -> Tuple[float, float]:
        cx = self.screen_w / 2
        cy = self.screen_h / 2
        sx = cx + (wx - self.world_x) * self.zoom
        sy = cy + (wy - self.world_y) * self.zoom
        return sx, sy

    def screen_to_world(self, sx: float, sy: float) -> Tuple[float, float]:
        cx = self.screen_w / 2
        cy = self.screen_h / 2
        wx = (sx - cx) / self.zoom + self.world_x
        wy = (sy - cy) / self.zoom + self.world_y
        return wx, wy

    def scale(self, length: float) -> float:
        return length * self.zoom

    @property
    def visible_world_x(self) -> Tuple[float, float]:
        """World-x span currently on screen."""
        half = self.screen_w / (2 * self.zoom)
        return self.world_x - half, self.world_x + half

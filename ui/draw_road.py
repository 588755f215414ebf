"""
ui/draw_road.py
===============
Renders the straight multi-lane road: grass verges, asphalt, dashed lane
dividers and the traffic signals placed on lane centres.

All methods are *pure renderers*: they read snapshot data and draw to a
surface.
"""

from __future__ import annotations

import math
from typing import Any, Mapping, Sequence

import pygame

from ui.helpers import draw_alpha_circle
from ui.types import Camera


class RoadRenderer:
    """Mixin that draws the road surface and the traffic signals."""

    # ------------------------------------------------------------------ #
    #  Road surface                                                        #
    # ------------------------------------------------------------------ #

    def draw_road(self, surface: pygame.Surface, road: Mapping[str, Any], cam: Camera) -> None:
        surface.fill(self.GRASS_COLOR)
        _, top = cam.world_to_screen(0.0, road["top"])
        _, bottom = cam.world_to_screen(0.0, road["bottom"])
        rect = pygame.Rect(0, int(top), surface.get_width(), int(math.ceil(bottom - top)))
        pygame.draw.rect(surface, self.ROAD_COLOR, rect)
        pygame.draw.line(surface, self.LANE_EDGE_COLOR, (0, int(top)),
                         (surface.get_width(), int(top)), self.LANE_LINE_WIDTH)
        pygame.draw.line(surface, self.LANE_EDGE_COLOR, (0, int(bottom)),
                         (surface.get_width(), int(bottom)), self.LANE_LINE_WIDTH)

    def draw_lane_markings(
        self, surface: pygame.Surface, road: Mapping[str, Any], cam: Camera
    ) -> None:
        """Dashed dividers between lanes, anchored in world x so they scroll."""
        period = self.LANE_DASH_LEN + self.LANE_DASH_GAP
        x0, x1 = cam.visible_world_x
        start = math.floor(x0 / period) * period
        for lane in range(1, int(road["lane_count"])):
            wy = road["top"] + lane * road["lane_height"]
            wx = start
            while wx < x1:
                sx0, sy = cam.world_to_screen(wx, wy)
                sx1, _ = cam.world_to_screen(wx + self.LANE_DASH_LEN, wy)
                pygame.draw.line(surface, self.LANE_DASH_COLOR,
                                 (int(sx0), int(sy)), (int(sx1), int(sy)),
                                 self.LANE_LINE_WIDTH)
                wx += period

    # ------------------------------------------------------------------ #
    #  Signals                                                             #
    # ------------------------------------------------------------------ #

    def draw_signals(
        self, surface: pygame.Surface, signals: Sequence[Mapping[str, Any]], cam: Camera
    ) -> None:
        x0, x1 = cam.visible_world_x
        for sig in signals:
            if not x0 - 20 <= sig["x"] <= x1 + 20:
                continue
            centre = self._to_px(cam.world_to_screen(sig["x"], sig["y"]))
            color = self.SIGNAL_COLORS.get(sig["state"], (128, 128, 128))
            radius = max(2, int(round(cam.scale(sig["radius"]))))
            draw_alpha_circle(surface, (*color, self.SIGNAL_GLOW_ALPHA), centre, radius * 3)
            pygame.draw.circle(surface, self.SIGNAL_HOUSING_COLOR, centre, radius + 2)
            pygame.draw.circle(surface, color, centre, radius)

#!/usr/bin/env python3
"""Obstacle cars, the controlled vehicle and its sensor rays (mixin)."""

from __future__ import annotations

import math
from typing import Any, Mapping, Sequence

import pygame

from .types import Camera


class VehicleRenderer:
    """Mixin that draws every car and the rayscan fan."""

    # ------------------------------------------------------------------ #
    #  Cars                                                                #
    # ------------------------------------------------------------------ #

    def _car_rect(self, car: Mapping[str, Any], cam: Camera) -> pygame.Rect:
        w = max(1, int(round(cam.scale(car["width"]))))
        h = max(1, int(round(cam.scale(car["height"]))))
        rect = pygame.Rect(0, 0, w, h)
        rect.center = self._to_px(cam.world_to_screen(car["x"], car["y"]))
        return rect

    def draw_obstacles(
        self, surface: pygame.Surface, obstacles: Sequence[Mapping[str, Any]], cam: Camera
    ) -> None:
        x0, x1 = cam.visible_world_x
        for car in obstacles:
            if car["x"] + car["width"] < x0 or car["x"] - car["width"] > x1:
                continue
            rect = self._car_rect(car, cam)
            pygame.draw.rect(surface, tuple(car["color"]), rect, border_radius=3)
            pygame.draw.rect(surface, (235, 235, 235), rect, width=1, border_radius=3)

    def draw_ego(self, surface: pygame.Surface, vehicle: Mapping[str, Any], cam: Camera) -> None:
        w = max(1, int(round(cam.scale(vehicle["width"]))))
        h = max(1, int(round(cam.scale(vehicle["height"]))))
        sprite = pygame.Surface((w, h), pygame.SRCALPHA)
        body = pygame.Rect(0, 0, w, h)
        pygame.draw.rect(sprite, self.EGO_COLOR, body, border_radius=3)

        # Nose marker on the heading side
        nose = pygame.Rect(w - max(2, w // 5), 0, max(2, w // 5), h)
        pygame.draw.rect(sprite, self.EGO_NOSE_COLOR, nose, border_radius=2)
        pygame.draw.rect(sprite, (235, 235, 235), body, width=1, border_radius=3)

        # pygame rotates counter-clockwise on screen; world y points down
        rotated = pygame.transform.rotate(sprite, -vehicle["angle"])
        dest = rotated.get_rect(center=self._to_px(cam.world_to_screen(vehicle["x"], vehicle["y"])))
        surface.blit(rotated, dest)

    # ------------------------------------------------------------------ #
    #  Rays                                                                #
    # ------------------------------------------------------------------ #

    def draw_rays(
        self, surface: pygame.Surface, rays: Sequence[Mapping[str, Any]], cam: Camera
    ) -> None:
        """Each ray from origin to its end, plus a marker where it hit something."""
        if not rays:
            return
        overlay = pygame.Surface(surface.get_size(), pygame.SRCALPHA)
        color = (*self.RAY_COLOR, self.RAY_ALPHA)
        for ray in rays:
            start = self._to_px(cam.world_to_screen(*ray["origin"]))
            end = self._to_px(cam.world_to_screen(*ray["end"]))
            pygame.draw.line(overlay, color, start, end, 1)
        surface.blit(overlay, (0, 0))

        radius = max(2, int(math.ceil(cam.scale(self.HIT_MARKER_RADIUS))))
        for ray in rays:
            kind = ray["type"]
            if kind is None:
                continue
            marker = self.SIGNAL_HIT_COLOR if kind == "signal" else self.OBSTACLE_HIT_COLOR
            end = self._to_px(cam.world_to_screen(*ray["end"]))
            pygame.draw.circle(surface, marker, end, radius)

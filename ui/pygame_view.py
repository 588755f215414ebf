#!/usr/bin/env python3
"""
Main view class: combines all UI mixins into one runnable Pygame window.

Module layout
─────────────
    ui/
    ├── types.py           – Camera, ColorRGB, ColorRGBA
    ├── constants.py       – ViewConstants mixin (all class-level constants)
    ├── helpers.py         – ViewHelpers mixin  (static utilities)
    ├── draw_road.py       – RoadRenderer mixin (grass, lanes, signals)
    ├── draw_vehicles.py   – VehicleRenderer mixin (cars, sensor rays)
    ├── hud.py             – HudRenderer mixin  (HUD, legend, debug, splash)
    └── pygame_view.py     – PygameTrafficView (this file – main loop)

The view owns the :class:`~sim.world.World` and drives it from the frame
clock: one ``world.tick`` per rendered frame, nothing on other threads.
"""

from __future__ import annotations

import logging
import os
from datetime import datetime
from typing import Any, Dict, Optional

import pygame

from sim.world import World

from .constants import ViewConstants
from .draw_road import RoadRenderer
from .draw_vehicles import VehicleRenderer
from .helpers import ViewHelpers
from .hud import HudRenderer
from .types import Camera

log = logging.getLogger("ui")


class PygameTrafficView(
    ViewConstants,
    ViewHelpers,
    RoadRenderer,
    VehicleRenderer,
    HudRenderer,
):
    """Rayscan road visualiser powered by Pygame.

    Inherits drawing logic from focused mixin modules so each file
    stays small and single-purpose.
    """

    def __init__(self, world: World, width: int = 1000, height: int = 700, fps: int = 60):
        self.world = world
        self.width = width
        self.height = height
        self.fps = fps

        self.screen: Optional[pygame.Surface] = None
        self.clock: Optional[pygame.time.Clock] = None
        self.font_small: Optional[pygame.font.Font] = None
        self.font_tiny: Optional[pygame.font.Font] = None
        self.font_title: Optional[pygame.font.Font] = None

        self.time_seconds = 0.0

        # UI state
        self.paused = False
        self.show_debug = False
        self.show_legend = True
        self.show_rays = True
        self.show_splash = True
        self.zoom = 1.0
        self._screenshot_flash_until = 0.0
        self._snapshot: Dict[str, Any] = world.snapshot()

    # ------------------------------------------------------------------ #
    #  Resize                                                              #
    # ------------------------------------------------------------------ #
    def _handle_resize(self, new_w: int, new_h: int) -> None:
        self.width = max(400, new_w)
        self.height = max(300, new_h)
        self.screen = pygame.display.set_mode(
            (self.width, self.height), pygame.RESIZABLE
        )

    # ------------------------------------------------------------------ #
    #  Screenshot                                                          #
    # ------------------------------------------------------------------ #
    def _take_screenshot(self) -> None:
        if self.screen is None:
            return
        os.makedirs(self.SCREENSHOT_DIR, exist_ok=True)
        stamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        path = os.path.join(self.SCREENSHOT_DIR, f"rayscan_{stamp}.png")
        pygame.image.save(self.screen, path)
        log.info("Screenshot saved to %s", path)
        self._screenshot_flash_until = self.time_seconds + 0.35

    # ------------------------------------------------------------------ #
    #  Input                                                               #
    # ------------------------------------------------------------------ #
    def _handle_key(self, key: int) -> None:
        if key == pygame.K_SPACE:
            self.paused = not self.paused
            log.info("Simulation %s", "paused" if self.paused else "resumed")
        elif key == pygame.K_F3:
            self.show_debug = not self.show_debug
        elif key == pygame.K_l:
            self.show_legend = not self.show_legend
        elif key == pygame.K_s:
            self.show_rays = not self.show_rays
        elif key == pygame.K_r:
            self.zoom = 1.0
            self.paused = False
            self.world.reset()
            self._snapshot = self.world.snapshot()
        elif key == pygame.K_F12:
            self._take_screenshot()
        elif key in (pygame.K_EQUALS, pygame.K_PLUS, pygame.K_KP_PLUS):
            self.zoom = min(self.ZOOM_MAX, self.zoom + self.ZOOM_STEP)
        elif key in (pygame.K_MINUS, pygame.K_KP_MINUS):
            self.zoom = max(self.ZOOM_MIN, self.zoom - self.ZOOM_STEP)

    # ------------------------------------------------------------------ #
    #  Main loop                                                           #
    # ------------------------------------------------------------------ #
    def run(self) -> None:
        pygame.init()
        pygame.display.set_caption("RAYSCAN TRAFFIC SIM")
        self.screen = pygame.display.set_mode(
            (self.width, self.height), pygame.RESIZABLE
        )
        self.clock = pygame.time.Clock()
        self.font_small = self._load_font(13, bold=False)
        self.font_tiny = self._load_font(11, bold=False)
        self.font_title = self._load_font(28, bold=True)

        running = True
        while running:
            dt_ms = max(0, self.clock.tick(self.fps))
            delta_time = dt_ms / 1000.0
            self.time_seconds += delta_time

            # ---- events ------------------------------------------------- #
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.VIDEORESIZE:
                    self._handle_resize(event.w, event.h)
                elif event.type == pygame.KEYDOWN:
                    if self.show_splash:
                        self.show_splash = False
                        continue
                    self._handle_key(event.key)

            # ---- splash ------------------------------------------------- #
            if self.show_splash:
                self.screen.fill(self.BG_COLOR)
                self._draw_splash(self.screen, self.time_seconds)
                pygame.display.flip()
                continue

            # ---- simulation tick ---------------------------------------- #
            if not self.paused:
                try:
                    self.world.tick(float(dt_ms))
                except Exception:
                    log.exception("World tick %d failed", self.world.tick_count)
                    pygame.quit()
                    raise
                self._snapshot = self.world.snapshot()
            snap = self._snapshot

            # ---- render ------------------------------------------------- #
            cam = Camera.from_viewport(snap["viewport"], self.width, self.height, self.zoom)
            self.screen.fill(self.BG_COLOR)
            self.draw_road(self.screen, snap["road"], cam)
            self.draw_lane_markings(self.screen, snap["road"], cam)
            self.draw_signals(self.screen, snap["signals"], cam)
            self.draw_obstacles(self.screen, snap["obstacles"], cam)
            if self.show_rays:
                self.draw_rays(self.screen, snap["rays"], cam)
            self.draw_ego(self.screen, snap["vehicle"], cam)

            # HUD layers (drawn on top, unzoomed)
            self.draw_hud(self.screen, snap)
            if self.show_legend:
                self._draw_legend(self.screen)
            if self.show_debug:
                self._draw_debug_overlay(self.screen, snap, delta_time)
            if self.paused:
                self._draw_pause_banner(self.screen)
            if self.time_seconds < self._screenshot_flash_until:
                flash = pygame.Surface(
                    (self.width, self.height), pygame.SRCALPHA
                )
                flash.fill((255, 255, 255, 40))
                self.screen.blit(flash, (0, 0))

            pygame.display.flip()

        pygame.quit()


# ---------------------------------------------------------------------- #
#  Convenience entry point                                                 #
# ---------------------------------------------------------------------- #
def run_pygame_view(
    world: World, width: int = 1000, height: int = 700, fps: int = 60
) -> None:
    view = PygameTrafficView(world=world, width=width, height=height, fps=fps)
    view.run()


if __name__ == "__main__":
    raise SystemExit(
        "pygame_view.py needs a World. Run `python main.py` "
        "or call run_pygame_view(World())."
    )

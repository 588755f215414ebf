#!/usr/bin/env python3
"""HUD panel, legend, debug overlay, splash screen, and pause banner (mixin)."""

from __future__ import annotations

from typing import Any, Mapping

import pygame

from .helpers import render_text


class HudRenderer:
    """Mixin that draws every overlay / HUD element."""

    # ------------------------------------------------------------------ #
    #  Main HUD panel                                                      #
    # ------------------------------------------------------------------ #

    def draw_hud(self, surface: pygame.Surface, snapshot: Mapping[str, Any]) -> None:
        if self.font_small is None or self.font_tiny is None:
            return

        vehicle = snapshot["vehicle"]
        decision = snapshot.get("decision") or {}
        stats = snapshot["stats"]
        manoeuvre = decision.get("manoeuvre", "-")

        lines = [
            (f"SPEED  {vehicle['speed']:.2f} / {vehicle['max_speed']:.1f}", self.HUD_TEXT_COLOR),
            (f"STATE  {vehicle['state'].upper()}",
             self.STOP_COLOR if vehicle["state"] == "stopped" else self.GO_COLOR),
            (f"LANE   {vehicle['current_lane']} -> {vehicle['target_lane']}", self.HUD_TEXT_COLOR),
            (f"DECIDE {manoeuvre.upper()}{'  BRAKE' if decision.get('braking') else ''}",
             self.MANOEUVRE_COLORS.get(manoeuvre, self.HUD_TEXT_COLOR)),
        ]
        sig_d = decision.get("signal_distance")
        if sig_d is not None:
            lines.append((f"RED    {sig_d:.1f}", self.STOP_COLOR))
        obs_d = decision.get("obstacle_distance")
        if obs_d is not None:
            lines.append((f"OBST   {obs_d:.1f}", self.OBSTACLE_HIT_COLOR))
        lines.append(
            (f"LANE CHANGES {stats['lane_changes']}   STOPS {stats['stop_events']}",
             (160, 160, 160))
        )

        row_h = 16
        panel_rect = pygame.Rect(16, 16, 250, len(lines) * row_h + 34)
        pygame.draw.rect(surface, self.HUD_BG_COLOR, panel_rect, border_radius=6)
        pygame.draw.rect(surface, self.HUD_BORDER_COLOR, panel_rect, width=1, border_radius=6)

        render_text(surface, self.font_tiny, f"EGO   TICK {snapshot['tick']}",
                    (panel_rect.x + 10, panel_rect.y + 6), (180, 180, 180))
        y = panel_rect.y + 26
        for text, color in lines:
            surface.blit(self.font_small.render(text, True, color), (panel_rect.x + 10, y))
            y += row_h

    # ------------------------------------------------------------------ #
    #  Splash screen                                                       #
    # ------------------------------------------------------------------ #

    def _draw_splash(self, surface: pygame.Surface, tick: float) -> None:
        if self.font_title is None or self.font_small is None:
            return
        title = self.font_title.render("RAYSCAN TRAFFIC SIM", True, (240, 240, 240))
        surface.blit(
            title,
            title.get_rect(center=(self.width // 2, self.height // 2 - 30)),
        )
        if int(tick * 2) % 2 == 0:
            prompt = self.font_small.render("Press any key to start", True, (160, 160, 160))
            surface.blit(
                prompt,
                prompt.get_rect(center=(self.width // 2, self.height // 2 + 20)),
            )
        lines = [
            "SPACE  Pause/Resume",
            "+ / -  Zoom in/out",
            "R      Reset world",
            "S      Toggle sensor rays",
            "L      Toggle legend",
            "F3     Debug overlay",
            "F12    Screenshot",
        ]
        y = self.height // 2 + 60
        for line in lines:
            t = self.font_tiny.render(line, True, (100, 100, 100)) if self.font_tiny else None
            if t:
                surface.blit(t, t.get_rect(center=(self.width // 2, y)))
                y += 16

    # ------------------------------------------------------------------ #
    #  Legend                                                               #
    # ------------------------------------------------------------------ #

    def _draw_legend(self, surface: pygame.Surface) -> None:
        if self.font_tiny is None:
            return
        x = self.width - 140
        y = self.height - 16 - len(self.LEGEND_ITEMS) * 18 - 8
        box_w, box_h = 132, len(self.LEGEND_ITEMS) * 18 + 10
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

    # ------------------------------------------------------------------ #
    #  Debug / FPS overlay                                                 #
    # ------------------------------------------------------------------ #

    def _draw_debug_overlay(
        self, surface: pygame.Surface, snapshot: Mapping[str, Any], dt: float
    ) -> None:
        if self.font_tiny is None:
            return
        fps = self.clock.get_fps() if self.clock else 0.0
        vehicle = snapshot["vehicle"]
        stats = snapshot["stats"]
        hits = sum(1 for ray in snapshot["rays"] if ray["type"] is not None)
        lines = [
            f"FPS  {fps:.1f}",
            f"DT   {dt * 1000:.1f} ms",
            f"POS  {vehicle['x']:.0f}, {vehicle['y']:.1f}",
            f"RAYS {len(snapshot['rays'])}  HITS {hits}",
            f"OBS  {len(snapshot['obstacles'])}  SIG {len(snapshot['signals'])}",
            f"RECY {stats['recycled_obstacles']} / {stats['recycled_signals']}",
            f"ZOOM {self.zoom:.1f}x",
            f"RES  {self.width}x{self.height}",
        ]
        x, y = self.width - 200, 16
        for line in lines:
            text = self.font_tiny.render(line, True, (0, 255, 127))
            surface.blit(text, (x, y))
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

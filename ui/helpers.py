"""
ui/helpers.py
=============
Pure utility functions shared across UI modules:
alpha-surface drawing, text rendering and snapshot field access.
"""

from __future__ import annotations

from typing import Any, Mapping, Optional, Tuple

import pygame


# ── Alpha drawing helpers ────────────────────────────────────────────────────

def draw_alpha_circle(
    target: pygame.Surface,
    color: Tuple[int, ...],
    centre: Tuple[int, int],
    radius: int,
) -> None:
    """Draw a semi-transparent circle."""
    if radius < 1:
        return
    size = radius * 2
    tmp = pygame.Surface((size, size), pygame.SRCALPHA)
    pygame.draw.circle(tmp, color, (radius, radius), radius)
    target.blit(tmp, (centre[0] - radius, centre[1] - radius))


# ── Text helper ──────────────────────────────────────────────────────────────

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


class ViewHelpers:
    """Mixin of small static utilities used by the renderers."""

    @staticmethod
    def _load_font(size: int, bold: bool = False) -> pygame.font.Font:
        for name in ("consolas", "dejavusansmono", "couriernew"):
            path = pygame.font.match_font(name, bold=bold)
            if path:
                return pygame.font.Font(path, size)
        return pygame.font.Font(None, size + 4)

    @staticmethod
    def _get(obj: Optional[Mapping[str, Any]], key: str, default: Any = None) -> Any:
        if obj is None:
            return default
        return obj.get(key, default)

    @staticmethod
    def _to_px(point: Tuple[float, float]) -> Tuple[int, int]:
        return int(round(point[0])), int(round(point[1]))

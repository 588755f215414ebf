#!/usr/bin/env python3
"""Visual constants shared across all renderers."""

from __future__ import annotations

from typing import Dict, Sequence, Tuple

from .types import ColorRGB


class ViewConstants:
    """Mixin providing every visual / layout constant."""

    BG_COLOR: ColorRGB = (15, 15, 15)
    GRASS_COLOR: ColorRGB = (34, 139, 34)
    ROAD_COLOR: ColorRGB = (51, 51, 51)
    LANE_DASH_COLOR: ColorRGB = (255, 255, 255)
    LANE_EDGE_COLOR: ColorRGB = (200, 200, 200)
    HUD_BG_COLOR: ColorRGB = (22, 22, 22)
    HUD_BORDER_COLOR: ColorRGB = (42, 42, 42)
    HUD_TEXT_COLOR: ColorRGB = (230, 230, 235)
    WARNING_COLOR: ColorRGB = (255, 60, 60)
    GO_COLOR: ColorRGB = (0, 255, 127)
    STOP_COLOR: ColorRGB = (255, 60, 60)

    EGO_COLOR: ColorRGB = (0, 0, 255)
    EGO_NOSE_COLOR: ColorRGB = (255, 255, 255)
    RAY_COLOR: ColorRGB = (255, 255, 0)
    RAY_ALPHA = 70
    SIGNAL_HIT_COLOR: ColorRGB = (255, 255, 0)
    OBSTACLE_HIT_COLOR: ColorRGB = (0, 120, 255)
    HIT_MARKER_RADIUS = 4

    SIGNAL_COLORS: Dict[str, ColorRGB] = {
        "green": (0, 220, 0),
        "yellow": (255, 220, 0),
        "red": (255, 40, 40),
    }
    SIGNAL_HOUSING_COLOR: ColorRGB = (20, 20, 20)
    SIGNAL_GLOW_ALPHA = 60

    LANE_DASH_LEN = 30
    LANE_DASH_GAP = 20
    LANE_LINE_WIDTH = 2

    ZOOM_MIN = 0.3
    ZOOM_MAX = 3.0
    ZOOM_STEP = 0.1

    LEGEND_ITEMS: Sequence[Tuple[str, ColorRGB]] = (
        ("EGO", (0, 0, 255)),
        ("SIGNAL HIT", (255, 255, 0)),
        ("OBSTACLE HIT", (0, 120, 255)),
        ("RED LIGHT", (255, 40, 40)),
    )

    MANOEUVRE_COLORS: Dict[str, ColorRGB] = {
        "stop": (255, 60, 60),
        "blocked": (255, 136, 0),
        "avoid": (86, 168, 255),
        "cruise": (0, 255, 127),
    }

    SCREENSHOT_DIR = "screenshots"

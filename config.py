#!/usr/bin/env python3
"""
config.py
=========
Application-wide configuration constants.

Values can be overridden via ``RAYSCAN_*`` environment variables (see
:mod:`main`).  This module is a thin, import-safe leaf: it never imports
from other project packages.
"""

# ── Simulation defaults ──────────────────────────────────────────────────────
DEFAULT_SEED: int = 0
DEFAULT_OBSTACLE_COUNT: int = 8
DEFAULT_LANE_COUNT: int = 4
DEFAULT_RAY_COUNT: int = 36
DEFAULT_HEADLESS_TICKS: int = 3600
HEADLESS_STATUS_EVERY: int = 600

# ── UI defaults ──────────────────────────────────────────────────────────────
WINDOW_WIDTH: int = 1000
WINDOW_HEIGHT: int = 700
TARGET_FPS: int = 60

# ── Log files (relative to the working directory) ────────────────────────────
LOG_FILE: str = "rayscan.log"
DRIVING_DEBUG_LOG_FILE: str = "driving_debug.log"

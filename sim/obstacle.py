#!/usr/bin/env python3
"""
sim/obstacle.py
===============
Autonomous obstacle cars.

An :class:`ObstacleCar` drives along −x at its own speed with no sensing,
no lane logic and no stopping.  When it falls behind the viewport it is
recycled ahead of the view into a random lane with a fresh random speed.
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from sim.geometry import Point, segment_intersect
from sim.road import Road, Viewport

log = logging.getLogger("obstacle")

ColorRGB = Tuple[int, int, int]

# red, green, orange, purple, yellow
OBSTACLE_COLORS: Sequence[ColorRGB] = (
    (255, 88, 88),
    (100, 226, 170),
    (255, 160, 100),
    (180, 120, 255),
    (246, 191, 90),
)


@dataclass
class ObstacleCar:
    """A rectangular obstacle vehicle.

    Attributes
    ----------
    id : str
        Unique identifier (e.g. ``OBS_004``).
    x, y : float
        Centre of the rectangle in world space.
    width, height : float
        Rectangle size.
    speed : float
        Distance travelled toward −x per tick.
    lane : int
        Lane the car was placed in.
    color : ColorRGB
        Body colour, chosen at spawn.
    """

    id: str
    x: float
    y: float
    width: float = 40.0
    height: float = 20.0
    speed: float = 2.0
    lane: int = 0
    color: ColorRGB = OBSTACLE_COLORS[0]

    # ── shape ─────────────────────────────────────────────────────────────
    def edges(self) -> List[Tuple[Point, Point]]:
        """Rectangle sides in the fixed order top, right, bottom, left."""
        hw = self.width / 2.0
        hh = self.height / 2.0
        top_left = Point(self.x - hw, self.y - hh)
        top_right = Point(self.x + hw, self.y - hh)
        bottom_right = Point(self.x + hw, self.y + hh)
        bottom_left = Point(self.x - hw, self.y + hh)
        return [
            (top_left, top_right),
            (top_right, bottom_right),
            (bottom_right, bottom_left),
            (bottom_left, top_left),
        ]

    def intersect(self, start: Point, end: Point) -> Optional[Point]:
        """First edge hit by the ray *start*-*end*, in edge order.

        The returned point is the hit on the first edge (top, right,
        bottom, left) that the ray crosses, which is not necessarily the
        edge closest to *start*.
        """
        for a, b in self.edges():
            hit = segment_intersect(start, end, a, b)
            if hit is not None:
                return hit
        return None

    # ── motion ────────────────────────────────────────────────────────────
    def update(self, viewport: Viewport, road: Road, rng: random.Random,
               speed_range: Tuple[float, float] = (2.0, 4.0),
               spawn_span: float = 3.0) -> bool:
        """Advance one tick; recycle ahead of the view once out of sight.

        Returns
        -------
        bool
            True when the car was recycled this tick.
        """
        self.x -= self.speed
        if self.x < viewport.left - self.width:
            self.reset_position(viewport, road, rng, speed_range, spawn_span)
            return True
        return False

    def reset_position(self, viewport: Viewport, road: Road, rng: random.Random,
                       speed_range: Tuple[float, float] = (2.0, 4.0),
                       spawn_span: float = 3.0) -> None:
        """Relocate ahead of the view into a random lane at a random speed."""
        self.x = viewport.right + self.width + rng.random() * viewport.width * spawn_span
        self.lane = rng.randrange(road.lane_count)
        self.y = road.lane_center(self.lane)
        low, high = speed_range
        self.speed = low + rng.random() * (high - low)
        log.debug("%s recycled to x=%.1f lane=%d speed=%.2f",
                  self.id, self.x, self.lane, self.speed)

    def as_dict(self) -> dict:
        return {
            "id": self.id,
            "x": self.x,
            "y": self.y,
            "width": self.width,
            "height": self.height,
            "speed": self.speed,
            "lane": self.lane,
            "color": self.color,
        }

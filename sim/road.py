#!/usr/bin/env python3
"""
sim/road.py
===========
Straight multi-lane road layout and the world viewport.

Defines :class:`Road` (lane centres and lane lookup for a horizontal
road of ``lane_count`` lanes below a grass verge) and :class:`Viewport`,
the camera window that decides when obstacles and signals are recycled.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from sim.traffic_policy import DrivingPolicy


# ── Viewport ──────────────────────────────────────────────────────────────────

@dataclass
class Viewport:
    """Camera window in world units.

    ``(x, y)`` is the centre of the window.  The viewport is an explicit
    field of :class:`~sim.world.World` and is passed to whatever needs it.
    """

    x: float
    y: float
    width: float
    height: float

    @property
    def left(self) -> float:
        return self.x - self.width / 2.0

    @property
    def right(self) -> float:
        return self.x + self.width / 2.0


# ── Road ──────────────────────────────────────────────────────────────────────

class Road:
    """Horizontal road with evenly sized lanes.

    Lane 0 is the top lane; lane ``lane_count - 1`` the bottom one.

    Parameters
    ----------
    lane_count : int
        Number of lanes.
    lane_height : float
        Height of one lane.
    grass_height : float
        Y coordinate of the top road edge.
    """

    def __init__(self, lane_count: int, lane_height: float, grass_height: float) -> None:
        self.lane_count = lane_count
        self.lane_height = lane_height
        self.grass_height = grass_height

    @classmethod
    def from_policy(cls, policy: DrivingPolicy) -> "Road":
        return cls(policy.lane_count, policy.lane_height, policy.grass_height)

    @property
    def top(self) -> float:
        return self.grass_height

    @property
    def bottom(self) -> float:
        return self.grass_height + self.lane_count * self.lane_height

    @property
    def middle_lane(self) -> int:
        return self.lane_count // 2

    def lane_center(self, lane: int) -> float:
        """Y coordinate of the centre line of *lane*."""
        return self.grass_height + self.lane_height / 2.0 + lane * self.lane_height

    def raw_lane_index(self, y: float) -> int:
        """Unclamped lane index for *y*; may be negative or past the last lane."""
        return math.floor((y - self.grass_height) / self.lane_height)

    def lane_index(self, y: float) -> int:
        """Lane containing *y*, clamped to ``[0, lane_count - 1]``.

        Points on the verge map to the nearest edge lane.
        """
        return min(max(self.raw_lane_index(y), 0), self.lane_count - 1)

    def has_lane(self, lane: int) -> bool:
        return 0 <= lane < self.lane_count

#!/usr/bin/env python3
"""
sim/traffic_policy.py
=====================
Tunable road, sensor, driving and scheduling parameters for the rayscan
simulation.  Every constant lives in the frozen :class:`DrivingPolicy`
dataclass so that experiments can swap policies without touching code.

Also provides the stateless helper :func:`stopping_distance`.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class DrivingPolicy:
    """Immutable bag of every tunable simulation parameter.

    Groups: world window, road geometry, controlled vehicle, obstacle
    traffic, sensor array, signals, lane-change and stopping behaviour.

    Raises
    ------
    ValueError
        On construction, when a value would make per-tick behaviour
        degenerate (zero rays, empty road, inverted speed range, ...).
    """

    # ── World window ──────────────────────────────────────────────────────
    view_width: float = 1000.0
    """Width of the visible world window; drives recycling distances."""

    view_height: float = 700.0
    """Height of the visible world window."""

    # ── Road geometry ─────────────────────────────────────────────────────
    lane_count: int = 4
    """Number of parallel lanes (index 0 is the top lane)."""

    lane_height: float = 100.0
    """Height of one lane in world units."""

    grass_height: float = 150.0
    """Verge above the road; lane 0 starts at this y."""

    # ── Controlled vehicle ────────────────────────────────────────────────
    vehicle_width: float = 40.0
    vehicle_height: float = 20.0

    max_speed: float = 4.0
    """Top speed of the controlled vehicle (units per tick)."""

    acceleration: float = 0.2
    """Speed gained per tick while driving."""

    deceleration: float = 0.2
    """Speed lost per tick while braking."""

    start_offset: float = 100.0
    """Distance from the left edge of the view where the vehicle starts."""

    # ── Obstacle traffic ──────────────────────────────────────────────────
    obstacle_count: int = 8
    obstacle_width: float = 40.0
    obstacle_height: float = 20.0

    obstacle_min_speed: float = 2.0
    obstacle_max_speed: float = 4.0
    """Obstacle speeds are drawn uniformly from ``[min, max)``."""

    obstacle_spawn_span: float = 3.0
    """Respawn offset ahead of the view, in multiples of ``view_width``."""

    # ── Sensor array ──────────────────────────────────────────────────────
    ray_count: int = 36
    ray_length: float = 500.0
    ray_spread_deg: float = 180.0
    """Total fan angle, centred on the vehicle heading."""

    # ── Signals ───────────────────────────────────────────────────────────
    signal_durations_ms: Tuple[float, float, float] = (15000.0, 5000.0, 15000.0)
    """Green, yellow and red durations in milliseconds."""

    signal_radius: float = 5.0
    """Radius of the circle rays are tested against."""

    signal_first_offset: float = 1500.0
    """Distance past the right edge of the view for the first signal."""

    signal_spacing: float = 1800.0
    """Minimum gap between consecutive signals along the road."""

    signal_spacing_jitter: float = 600.0
    """Random extra gap added when a signal is recycled ahead."""

    signals_per_lane: int = 3
    """Signals kept alive ahead of the vehicle, per lane."""

    # ── Lane change / stopping ────────────────────────────────────────────
    lane_obstacle_buffer: float = 150.0
    """A lane is blocked by any obstacle this close longitudinally."""

    lane_signal_buffer: float = 500.0
    """A lane is blocked by a red signal this far ahead."""

    stop_margin: float = 20.0
    """Braking starts within stopping distance plus this margin."""

    lane_change_fraction: float = 0.05
    """Fraction of the remaining lateral gap closed per tick."""

    lane_snap_threshold: float = 1.0
    """Remaining gap at which the vehicle snaps to the lane centre."""

    # ── Diagnostics ───────────────────────────────────────────────────────
    debug_log_every: int = 60
    """Emit a DEBUG world summary every N ticks (0 disables)."""

    def __post_init__(self) -> None:
        if self.ray_count < 1:
            raise ValueError(f"ray_count must be >= 1, got {self.ray_count}")
        if self.ray_length <= 0:
            raise ValueError(f"ray_length must be > 0, got {self.ray_length}")
        if not 0.0 <= self.ray_spread_deg <= 360.0:
            raise ValueError(
                f"ray_spread_deg must be within [0, 360], got {self.ray_spread_deg}"
            )
        if self.lane_count < 1:
            raise ValueError(f"lane_count must be >= 1, got {self.lane_count}")
        if self.lane_height <= 0:
            raise ValueError(f"lane_height must be > 0, got {self.lane_height}")
        if self.view_width <= 0 or self.view_height <= 0:
            raise ValueError("view_width and view_height must be > 0")
        if self.max_speed <= 0:
            raise ValueError(f"max_speed must be > 0, got {self.max_speed}")
        if self.acceleration <= 0 or self.deceleration <= 0:
            raise ValueError("acceleration and deceleration must be > 0")
        if self.obstacle_count < 0:
            raise ValueError(f"obstacle_count must be >= 0, got {self.obstacle_count}")
        if not 0.0 <= self.obstacle_min_speed <= self.obstacle_max_speed:
            raise ValueError(
                "obstacle speed range must satisfy 0 <= min <= max, got "
                f"[{self.obstacle_min_speed}, {self.obstacle_max_speed}]"
            )
        if len(self.signal_durations_ms) != 3:
            raise ValueError("signal_durations_ms needs one entry per state")
        if any(d <= 0 for d in self.signal_durations_ms):
            raise ValueError(
                f"signal durations must be > 0, got {self.signal_durations_ms}"
            )
        if self.signal_radius <= 0:
            raise ValueError(f"signal_radius must be > 0, got {self.signal_radius}")
        if self.signals_per_lane < 0:
            raise ValueError("signals_per_lane must be >= 0")
        if min(self.lane_obstacle_buffer, self.lane_signal_buffer, self.stop_margin) < 0:
            raise ValueError("lane buffers and stop_margin must be >= 0")
        if not 0.0 < self.lane_change_fraction <= 1.0:
            raise ValueError(
                f"lane_change_fraction must be within (0, 1], got {self.lane_change_fraction}"
            )
        if self.lane_snap_threshold <= 0:
            raise ValueError("lane_snap_threshold must be > 0")

    @property
    def road_height(self) -> float:
        return self.lane_height * self.lane_count


def stopping_distance(speed: float, acceleration: float) -> float:
    """Distance needed to reach zero speed at constant deceleration.

    Parameters
    ----------
    speed : float
        Current speed (units per tick).
    acceleration : float
        Rate used as the deceleration (units per tick per tick).

    Returns
    -------
    float
        ``speed**2 / (2 * acceleration)``.
    """
    return (speed * speed) / (2.0 * acceleration)

#!/usr/bin/env python3
"""
sim/sensors.py
==============
Rayscan sensor array.

The array casts a fan of rays from the vehicle centre, intersects each ray
with every signal and obstacle, and keeps the hit nearest to the vehicle.
Rays and detections are rebuilt from scratch on every
:meth:`SensorArray.update`; nothing carries over between ticks.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List, Optional, Protocol, Sequence

import numpy as np

from sim.geometry import Point, distance, polar_point
from sim.signal import TrafficSignal


class DetectionKind(str, Enum):
    SIGNAL = "signal"
    OBSTACLE = "obstacle"


class Intersectable(Protocol):
    """Anything a ray can hit."""

    id: str

    def intersect(self, start: Point, end: Point) -> Optional[Point]: ...


@dataclass(frozen=True)
class Detection:
    """A single sensed hit: where, what kind, and the light state for signals."""

    x: float
    y: float
    kind: DetectionKind
    source_id: str
    signal_state: Optional[str] = None

    @property
    def position(self) -> Point:
        return Point(self.x, self.y)

    @property
    def is_red_signal(self) -> bool:
        return self.kind is DetectionKind.SIGNAL and self.signal_state == "red"


@dataclass(frozen=True)
class Ray:
    """One cast ray.  ``detection`` is None when nothing was in range."""

    origin: Point
    angle: float
    end: Point
    detection: Optional[Detection] = None

    @property
    def length(self) -> float:
        return distance(self.origin, self.end)

    def as_dict(self) -> dict:
        det = self.detection
        return {
            "origin": tuple(self.origin),
            "end": tuple(self.end),
            "angle": self.angle,
            "type": det.kind.value if det else None,
            "state": det.signal_state if det else None,
        }


class SensorArray:
    """Fan of ``ray_count`` rays spread over ``ray_spread_deg`` degrees.

    Parameters
    ----------
    ray_count : int
        Number of rays; one ray points straight along the heading.
    ray_length : float
        Maximum sensing range.
    ray_spread_deg : float
        Total fan angle, centred on the heading.
    """

    def __init__(self, ray_count: int = 36, ray_length: float = 500.0,
                 ray_spread_deg: float = 180.0) -> None:
        if ray_count < 1:
            raise ValueError(f"ray_count must be >= 1, got {ray_count}")
        if ray_length <= 0:
            raise ValueError(f"ray_length must be > 0, got {ray_length}")
        self.ray_count = ray_count
        self.ray_length = ray_length
        self.ray_spread_deg = ray_spread_deg
        self.rays: List[Ray] = []
        self.detections: List[Detection] = []

        half = ray_spread_deg / 2.0
        if ray_count == 1:
            self._offsets = np.zeros(1)
        else:
            self._offsets = np.linspace(-half, half, ray_count)

    @property
    def angle_offsets(self) -> List[float]:
        """Per-ray angle relative to the heading, in degrees."""
        return [float(a) for a in self._offsets]

    def update(
        self,
        origin: Point,
        heading_deg: float,
        signals: Sequence[TrafficSignal],
        obstacles: Sequence[Intersectable],
    ) -> List[Detection]:
        """Recast every ray and rebuild :attr:`rays` and :attr:`detections`."""
        self.rays = []
        self.detections = []
        for offset in self._offsets:
            ray = self.cast(origin, heading_deg + float(offset), signals, obstacles)
            self.rays.append(ray)
            if ray.detection is not None:
                self.detections.append(ray.detection)
        return self.detections

    def cast(
        self,
        origin: Point,
        angle_deg: float,
        signals: Iterable[TrafficSignal],
        obstacles: Iterable[Intersectable],
    ) -> Ray:
        """Cast one ray and keep the candidate nearest to *origin*.

        Signals are scanned before obstacles and a candidate must be
        strictly nearer to replace the current best, so ties keep the
        first one found.
        """
        origin = Point(*origin)
        end = polar_point(origin, angle_deg, self.ray_length)
        best: Optional[Detection] = None
        best_dist = math.inf

        for sig in signals:
            hit = sig.intersect(origin, end)
            if hit is None:
                continue
            d = distance(origin, hit)
            if d < best_dist:
                best_dist = d
                best = Detection(hit.x, hit.y, DetectionKind.SIGNAL, sig.id,
                                 sig.state.value)

        for obs in obstacles:
            hit = obs.intersect(origin, end)
            if hit is None:
                continue
            d = distance(origin, hit)
            if d < best_dist:
                best_dist = d
                best = Detection(hit.x, hit.y, DetectionKind.OBSTACLE, obs.id)

        if best is None:
            return Ray(origin, angle_deg, end)
        return Ray(origin, angle_deg, best.position, best)

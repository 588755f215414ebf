#!/usr/bin/env python3
"""
sim/geometry.py
===============
Low-level intersection helpers used by :mod:`sim.signal`,
:mod:`sim.obstacle` and :mod:`sim.sensors`.

Keeping these in a separate module avoids circular imports and makes unit
testing straightforward.  Every function is pure.
"""

from __future__ import annotations

import math
from typing import NamedTuple, Optional


class Point(NamedTuple):
    """World-space point (x grows right, y grows down)."""

    x: float
    y: float


def distance(a: Point, b: Point) -> float:
    """Euclidean distance between *a* and *b*."""
    return math.hypot(b[0] - a[0], b[1] - a[1])


def segment_intersect(p1: Point, p2: Point, p3: Point, p4: Point) -> Optional[Point]:
    """Intersection of segment *p1*-*p2* with segment *p3*-*p4*.

    Both segments are written as ``a*x + b*y = c`` and solved with the
    determinant.  Parallel or collinear segments (determinant exactly zero)
    yield ``None``, as does a solution outside either segment's bounding box.
    Box bounds are inclusive.

    Returns
    -------
    Point or None
    """
    x1, y1 = p1
    x2, y2 = p2
    x3, y3 = p3
    x4, y4 = p4

    a1 = y2 - y1
    b1 = x1 - x2
    c1 = a1 * x1 + b1 * y1

    a2 = y4 - y3
    b2 = x3 - x4
    c2 = a2 * x3 + b2 * y3

    det = a1 * b2 - a2 * b1
    if det == 0:
        return None

    x = (b2 * c1 - b1 * c2) / det
    y = (a1 * c2 - a2 * c1) / det

    if not (min(x1, x2) <= x <= max(x1, x2) and min(x3, x4) <= x <= max(x3, x4)):
        return None
    if not (min(y1, y2) <= y <= max(y1, y2) and min(y3, y4) <= y <= max(y3, y4)):
        return None
    return Point(x, y)


def ray_circle_intersect(
    start: Point, end: Point, centre: Point, radius: float
) -> Optional[Point]:
    """First point where the segment *start*-*end* enters a circle.

    Solves ``|start + t*(end - start) - centre| = radius`` for *t*.  The
    smaller root wins when it lies in ``[0, 1]``; otherwise the larger root
    is tried (the ray starts inside the circle).  A zero-length ray has no
    direction and never hits.

    Parameters
    ----------
    start, end : Point
        Ray origin and maximum-range endpoint.
    centre : Point
        Circle centre.
    radius : float
        Circle radius.
    """
    dx = end[0] - start[0]
    dy = end[1] - start[1]
    fx = start[0] - centre[0]
    fy = start[1] - centre[1]

    a = dx * dx + dy * dy
    if a == 0:
        return None
    b = 2.0 * (fx * dx + fy * dy)
    c = (fx * fx + fy * fy) - radius * radius

    disc = b * b - 4.0 * a * c
    if disc < 0:
        return None

    root = math.sqrt(disc)
    t1 = (-b - root) / (2.0 * a)
    t2 = (-b + root) / (2.0 * a)

    for t in (t1, t2):
        if 0.0 <= t <= 1.0:
            return Point(start[0] + t * dx, start[1] + t * dy)
    return None


def polar_point(origin: Point, angle_deg: float, length: float) -> Point:
    """Point *length* units from *origin* along *angle_deg* (0 = +x)."""
    rad = math.radians(angle_deg)
    return Point(origin[0] + length * math.cos(rad), origin[1] + length * math.sin(rad))

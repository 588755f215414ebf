#!/usr/bin/env python3
"""
sim/signal.py
=============
Timed roadside traffic light.

A :class:`TrafficSignal` cycles GREEN → YELLOW → RED → GREEN with an
independent duration per state and is seen by the sensor array as a small
circle.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Tuple

from sim.geometry import Point, ray_circle_intersect


class SignalState(str, Enum):
    GREEN = "green"
    YELLOW = "yellow"
    RED = "red"


# Fixed cycle order
SIGNAL_CYCLE: Tuple[SignalState, ...] = (
    SignalState.GREEN,
    SignalState.YELLOW,
    SignalState.RED,
)


@dataclass
class TrafficSignal:
    """A single traffic light.

    Attributes
    ----------
    id : str
        Unique identifier (e.g. ``SIG_003``).
    x, y : float
        World-space position of the light.
    durations_ms : tuple of float
        Duration of the green, yellow and red states, in milliseconds.
    radius : float
        Detection radius used for ray intersection.
    state_index : int
        Index of the active state in :data:`SIGNAL_CYCLE`.
    timer_ms : float
        Time spent in the active state.
    """

    id: str
    x: float
    y: float
    durations_ms: Tuple[float, float, float] = (15000.0, 5000.0, 15000.0)
    radius: float = 5.0
    state_index: int = 0
    timer_ms: float = field(default=0.0, repr=False)

    @property
    def state(self) -> SignalState:
        return SIGNAL_CYCLE[self.state_index]

    @property
    def position(self) -> Point:
        return Point(self.x, self.y)

    @property
    def is_red(self) -> bool:
        return self.state is SignalState.RED

    def update(self, dt_ms: float) -> bool:
        """Accumulate *dt_ms* and advance at most one state.

        Once the timer reaches the active state's duration it resets to
        zero and the light moves to the next state in the cycle.  Overshoot
        is discarded: a huge *dt_ms* still advances exactly one state.

        Returns
        -------
        bool
            True when the state changed.
        """
        self.timer_ms += dt_ms
        if self.timer_ms < self.durations_ms[self.state_index]:
            return False
        self.timer_ms = 0.0
        self.state_index = (self.state_index + 1) % len(SIGNAL_CYCLE)
        return True

    def intersect(self, start: Point, end: Point) -> Optional[Point]:
        """Where the ray *start*-*end* first touches this light, if at all."""
        return ray_circle_intersect(start, end, self.position, self.radius)

    def as_dict(self) -> dict:
        return {
            "id": self.id,
            "x": self.x,
            "y": self.y,
            "radius": self.radius,
            "state": self.state.value,
            "timer_ms": self.timer_ms,
        }

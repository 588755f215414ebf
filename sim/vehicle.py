#!/usr/bin/env python3
"""
sim/vehicle.py
==============
The controlled vehicle record.

:class:`Vehicle` holds position, speed and lane bookkeeping only; all
behaviour lives in :class:`~sim.driving.DrivingController` and the sensor
fan in :class:`~sim.sensors.SensorArray`.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from sim.geometry import Point
from sim.sensors import SensorArray


class DrivingState(str, Enum):
    DRIVING = "driving"
    STOPPED = "stopped"


@dataclass
class Vehicle:
    """The ego car.

    Attributes
    ----------
    id : str
        Identifier shown in the HUD.
    x, y : float
        World-space centre.
    width, height : float
        Body size.
    angle : float
        Heading in degrees (0 = +x, the direction of travel).
    speed : float
        Current speed, kept within ``[0, max_speed]``.
    max_speed, acceleration, deceleration : float
        Longitudinal limits, per tick.
    current_lane, target_lane : int
        Committed lane and the lane being steered toward.
    state : DrivingState
        ``driving`` or ``stopped``.
    sensors : SensorArray or None
        Ray fan owned by this vehicle.
    """

    id: str
    x: float
    y: float
    width: float = 40.0
    height: float = 20.0
    angle: float = 0.0
    speed: float = 0.0
    max_speed: float = 4.0
    acceleration: float = 0.2
    deceleration: float = 0.2
    current_lane: int = 0
    target_lane: int = 0
    state: DrivingState = DrivingState.DRIVING
    sensors: Optional[SensorArray] = field(default=None, repr=False)

    @property
    def position(self) -> Point:
        return Point(self.x, self.y)

    @property
    def changing_lane(self) -> bool:
        """True while a lane change is in flight."""
        return self.target_lane != self.current_lane

    def as_dict(self) -> dict:
        return {
            "id": self.id,
            "x": self.x,
            "y": self.y,
            "width": self.width,
            "height": self.height,
            "angle": self.angle,
            "speed": self.speed,
            "max_speed": self.max_speed,
            "current_lane": self.current_lane,
            "target_lane": self.target_lane,
            "state": self.state.value,
        }

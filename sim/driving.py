#!/usr/bin/env python3
"""
sim/driving.py
==============
Driving-decision state machine for the controlled vehicle.

Each tick :class:`DrivingController` reads the sensor detections and picks
one manoeuvre, first match wins:

1. **stop**: a red signal ahead in the own lane.
2. **avoid**: an obstacle ahead; steer into a free neighbour lane,
   lower index first.
3. **blocked**: an obstacle ahead and no free neighbour lane; brake.
4. **cruise**: nothing relevant; accelerate toward max speed.

It then steers any lane change in flight and applies one longitudinal
step.  Obstacle cars never go through this controller.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Sequence

from sim.geometry import distance
from sim.obstacle import ObstacleCar
from sim.road import Road
from sim.sensors import Detection, DetectionKind
from sim.signal import TrafficSignal
from sim.traffic_policy import DrivingPolicy, stopping_distance
from sim.vehicle import DrivingState, Vehicle

log = logging.getLogger("driving")


class Manoeuvre(str, Enum):
    STOP = "stop"
    AVOID = "avoid"
    BLOCKED = "blocked"
    CRUISE = "cruise"


@dataclass(frozen=True)
class Decision:
    """Outcome of one :meth:`DrivingController.decide` call.

    Attributes
    ----------
    manoeuvre : Manoeuvre
        Branch taken.
    braking : bool
        True when the longitudinal step must shed speed.
    signal_distance : float or None
        Distance to the nearest relevant red signal.
    obstacle_distance : float or None
        Distance to the nearest relevant obstacle hit.
    stopping_distance : float or None
        ``speed**2 / (2 * acceleration)``, set on the stop branch.
    new_target_lane : int or None
        Lane a lane change was started toward this tick.
    """

    manoeuvre: Manoeuvre
    braking: bool = False
    signal_distance: Optional[float] = None
    obstacle_distance: Optional[float] = None
    stopping_distance: Optional[float] = None
    new_target_lane: Optional[int] = None

    def as_dict(self) -> dict:
        return {
            "manoeuvre": self.manoeuvre.value,
            "braking": self.braking,
            "signal_distance": self.signal_distance,
            "obstacle_distance": self.obstacle_distance,
            "stopping_distance": self.stopping_distance,
            "new_target_lane": self.new_target_lane,
        }


class DrivingController:
    """Turns detections into lane, speed and position updates.

    Parameters
    ----------
    road : Road
        Lane layout used for every lane lookup.
    policy : DrivingPolicy or None
        Tunable constants; uses defaults when *None*.
    """

    def __init__(self, road: Road, policy: Optional[DrivingPolicy] = None) -> None:
        self.road = road
        self.policy = policy or DrivingPolicy()

    # ── public tick ───────────────────────────────────────────────────────

    def step(
        self,
        vehicle: Vehicle,
        detections: Sequence[Detection],
        signals: Sequence[TrafficSignal],
        obstacles: Sequence[ObstacleCar],
    ) -> Decision:
        """Decide, steer and move *vehicle* for one tick."""
        decision = self.decide(vehicle, detections, signals, obstacles)
        self.steer(vehicle)
        self.move(vehicle, decision)
        return decision

    # ── decision ──────────────────────────────────────────────────────────

    def is_relevant(self, vehicle: Vehicle, det: Detection) -> bool:
        """Same lane as the vehicle (by y) and strictly ahead of it."""
        return (
            self.road.lane_index(det.y) == self.road.lane_index(vehicle.y)
            and det.x > vehicle.x
        )

    def decide(
        self,
        vehicle: Vehicle,
        detections: Sequence[Detection],
        signals: Sequence[TrafficSignal],
        obstacles: Sequence[ObstacleCar],
    ) -> Decision:
        """Pick this tick's manoeuvre and update state / target lane."""
        signal_dist = math.inf
        obstacle_dist = math.inf
        for det in detections:
            if not self.is_relevant(vehicle, det):
                continue
            d = distance(vehicle.position, det.position)
            if det.kind is DetectionKind.SIGNAL:
                if det.is_red_signal and d < signal_dist:
                    signal_dist = d
            elif d < obstacle_dist:
                obstacle_dist = d

        need_to_stop = signal_dist < math.inf
        obstacle_ahead = obstacle_dist < math.inf
        sig = signal_dist if need_to_stop else None
        obs = obstacle_dist if obstacle_ahead else None

        if need_to_stop:
            if vehicle.state is not DrivingState.STOPPED:
                log.debug("%s: red signal ahead at %.1f", vehicle.id, signal_dist)
            vehicle.state = DrivingState.STOPPED
            stop_dist = stopping_distance(vehicle.speed, vehicle.acceleration)
            braking = signal_dist <= stop_dist + self.policy.stop_margin
            return Decision(Manoeuvre.STOP, braking, sig, obs, stop_dist)

        vehicle.state = DrivingState.DRIVING

        if obstacle_ahead:
            # a change in flight keeps its target while that lane stays free
            if vehicle.changing_lane and self.is_lane_free(
                vehicle, vehicle.target_lane, signals, obstacles
            ):
                return Decision(Manoeuvre.AVOID, False, sig, obs)
            lane = vehicle.current_lane
            for candidate in (lane - 1, lane + 1):
                if candidate == vehicle.target_lane:
                    continue
                if self.road.has_lane(candidate) and self.is_lane_free(
                    vehicle, candidate, signals, obstacles
                ):
                    vehicle.target_lane = candidate
                    log.info("%s: lane change %d -> %d (obstacle at %.1f)",
                             vehicle.id, lane, candidate, obstacle_dist)
                    return Decision(Manoeuvre.AVOID, False, sig, obs,
                                    new_target_lane=candidate)
            log.debug("%s: no free lane, braking (obstacle at %.1f)",
                      vehicle.id, obstacle_dist)
            return Decision(Manoeuvre.BLOCKED, True, sig, obs)

        if not vehicle.changing_lane:
            vehicle.target_lane = vehicle.current_lane
        return Decision(Manoeuvre.CRUISE, False, sig, obs)

    def is_lane_free(
        self,
        vehicle: Vehicle,
        lane: int,
        signals: Sequence[TrafficSignal],
        obstacles: Sequence[ObstacleCar],
    ) -> bool:
        """True when *lane* has no nearby obstacle and no close red light ahead."""
        for car in obstacles:
            if (self.road.lane_index(car.y) == lane
                    and abs(car.x - vehicle.x) < self.policy.lane_obstacle_buffer):
                return False
        for sig in signals:
            if (sig.is_red and self.road.lane_index(sig.y) == lane
                    and 0.0 < sig.x - vehicle.x < self.policy.lane_signal_buffer):
                return False
        return True

    # ── lateral / longitudinal motion ─────────────────────────────────────

    def steer(self, vehicle: Vehicle) -> None:
        """Glide toward the target lane centre; snap and commit when close."""
        if not vehicle.changing_lane:
            return
        centre = self.road.lane_center(vehicle.target_lane)
        gap = centre - vehicle.y
        if abs(gap) > self.policy.lane_snap_threshold:
            vehicle.y += gap * self.policy.lane_change_fraction
            return
        vehicle.y = centre
        log.debug("%s: committed lane %d", vehicle.id, vehicle.target_lane)
        vehicle.current_lane = vehicle.target_lane

    def move(self, vehicle: Vehicle, decision: Decision) -> None:
        """Apply one speed step, then advance along +x."""
        if decision.braking:
            vehicle.speed = max(vehicle.speed - vehicle.deceleration, 0.0)
        elif vehicle.state is DrivingState.DRIVING:
            vehicle.speed = min(vehicle.speed + vehicle.acceleration, vehicle.max_speed)
        # stopped but still outside the braking zone: hold speed
        vehicle.x += vehicle.speed

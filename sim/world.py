#!/usr/bin/env python3
"""
sim/world.py
============
Entity registry and tick loop for the rayscan road.

The :class:`World` owns the controlled :class:`~sim.vehicle.Vehicle`, the
ordered obstacle and signal collections, the :class:`~sim.road.Viewport`
and the random source.  :meth:`World.tick` mutates them in a fixed order:

1. signals advance their timers;
2. the sensor array recasts every ray;
3. the driving controller decides, steers and moves the vehicle;
4. obstacles advance and recycle once out of view;
5. signals behind the view are dropped and replenished ahead;
6. the viewport recentres on the vehicle.
"""

from __future__ import annotations

import logging
import random
from typing import Any, Dict, List, Optional

from sim.driving import Decision, DrivingController, Manoeuvre
from sim.obstacle import OBSTACLE_COLORS, ObstacleCar
from sim.road import Road, Viewport
from sim.sensors import SensorArray
from sim.signal import TrafficSignal
from sim.traffic_policy import DrivingPolicy
from sim.vehicle import Vehicle

log = logging.getLogger("world")


class World:
    """Single-owner simulation state.

    Parameters
    ----------
    policy : DrivingPolicy or None
        Tunable constants; uses defaults when *None*.
    seed : int or None
        Random seed for reproducibility.
    """

    def __init__(
        self,
        policy: Optional[DrivingPolicy] = None,
        seed: Optional[int] = None,
    ) -> None:
        self.policy = policy or DrivingPolicy()
        self.road = Road.from_policy(self.policy)
        self.controller = DrivingController(self.road, self.policy)
        self._seed = seed
        self._init_entities()

    # ── initialisation / reset ────────────────────────────────────────────

    def _init_entities(self) -> None:
        p = self.policy
        self._rng = random.Random(self._seed)
        self.viewport = Viewport(
            x=0.0,
            y=self.road.lane_center(self.road.middle_lane),
            width=p.view_width,
            height=p.view_height,
        )
        self.vehicle = self._make_vehicle()
        self.obstacles: List[ObstacleCar] = [
            self._make_obstacle(idx) for idx in range(p.obstacle_count)
        ]
        self._signal_seq = 0
        self.signals: List[TrafficSignal] = []
        for lane in range(self.road.lane_count):
            x = self.viewport.right + p.signal_first_offset + lane * p.signal_spacing
            self.signals.append(self._make_signal(x, lane))
        self.last_decision: Optional[Decision] = None
        self.tick_count = 0
        self.lane_changes = 0
        self.stop_events = 0
        self.recycled_obstacles = 0
        self.recycled_signals = 0

    def reset(self) -> None:
        """Re-create every entity so the run can be replayed."""
        self._init_entities()
        log.info("World reset (seed=%s)", self._seed)

    def _make_vehicle(self) -> Vehicle:
        p = self.policy
        lane = self.road.middle_lane
        y = self.road.lane_center(lane)
        vehicle = Vehicle(
            id="EGO",
            x=self.viewport.left + p.start_offset,
            y=y,
            width=p.vehicle_width,
            height=p.vehicle_height,
            max_speed=p.max_speed,
            acceleration=p.acceleration,
            deceleration=p.deceleration,
            sensors=SensorArray(p.ray_count, p.ray_length, p.ray_spread_deg),
        )
        vehicle.current_lane = self.road.lane_index(y)
        vehicle.target_lane = vehicle.current_lane
        return vehicle

    def _make_obstacle(self, idx: int) -> ObstacleCar:
        p = self.policy
        lane = self._rng.randrange(self.road.lane_count)
        x = self.viewport.right + self._rng.random() * p.view_width * p.obstacle_spawn_span
        speed = p.obstacle_min_speed + self._rng.random() * (
            p.obstacle_max_speed - p.obstacle_min_speed
        )
        return ObstacleCar(
            id=f"OBS_{idx:03d}",
            x=x,
            y=self.road.lane_center(lane),
            width=p.obstacle_width,
            height=p.obstacle_height,
            speed=speed,
            lane=lane,
            color=self._rng.choice(OBSTACLE_COLORS),
        )

    def _make_signal(self, x: float, lane: int) -> TrafficSignal:
        sig = TrafficSignal(
            id=f"SIG_{self._signal_seq:03d}",
            x=x,
            y=self.road.lane_center(lane),
            durations_ms=self.policy.signal_durations_ms,
            radius=self.policy.signal_radius,
        )
        self._signal_seq += 1
        return sig

    # ── tick ──────────────────────────────────────────────────────────────

    def tick(self, dt_ms: float) -> Decision:
        """Advance the whole world by one frame of *dt_ms* milliseconds."""
        if dt_ms < 0:
            log.debug("negative dt %.3f ms clamped to 0", dt_ms)
            dt_ms = 0.0
        self.tick_count += 1
        p = self.policy
        vehicle = self.vehicle

        # 1. Signals
        for sig in self.signals:
            if sig.update(dt_ms):
                log.debug("%s -> %s", sig.id, sig.state.value)

        # 2. Sensors
        detections = vehicle.sensors.update(
            vehicle.position, vehicle.angle, self.signals, self.obstacles
        )

        # 3. Controller
        decision = self.controller.step(vehicle, detections, self.signals, self.obstacles)
        if decision.new_target_lane is not None:
            self.lane_changes += 1
        if decision.manoeuvre is Manoeuvre.STOP and (
            self.last_decision is None or self.last_decision.manoeuvre is not Manoeuvre.STOP
        ):
            self.stop_events += 1
        self.last_decision = decision

        # 4. Obstacles
        speed_range = (p.obstacle_min_speed, p.obstacle_max_speed)
        for car in self.obstacles:
            if car.update(self.viewport, self.road, self._rng, speed_range,
                          p.obstacle_spawn_span):
                self.recycled_obstacles += 1

        # 5. Signals behind the view
        self._recycle_signals()

        # 6. Viewport follows the vehicle along x only
        self.viewport.x = vehicle.x
        self.viewport.y = self.road.lane_center(self.road.middle_lane)

        if p.debug_log_every and self.tick_count % p.debug_log_every == 0:
            log.debug(
                "tick=%d pos=(%.1f,%.1f) spd=%.2f state=%s lane=%d->%d "
                "rays=%d hits=%d decision=%s brake=%s",
                self.tick_count, vehicle.x, vehicle.y, vehicle.speed,
                vehicle.state.value, vehicle.current_lane, vehicle.target_lane,
                len(vehicle.sensors.rays), len(detections),
                decision.manoeuvre.value, decision.braking,
            )
        return decision

    def _recycle_signals(self) -> None:
        p = self.policy
        cutoff = self.viewport.x - self.viewport.width
        kept = [sig for sig in self.signals if sig.x > cutoff]
        self.recycled_signals += len(self.signals) - len(kept)
        self.signals = kept
        wanted = self.road.lane_count * p.signals_per_lane
        while len(self.signals) < wanted:
            lane = self._rng.randrange(self.road.lane_count)
            if self.signals:
                x = self.signals[-1].x + p.signal_spacing + self._rng.random() * p.signal_spacing_jitter
            else:
                x = (self.viewport.right + p.signal_first_offset
                     + self._rng.random() * p.signal_spacing)
            self.signals.append(self._make_signal(x, lane))

    # ── read-back for renderers ───────────────────────────────────────────

    def snapshot(self) -> Dict[str, Any]:
        """JSON-compatible view of the state a renderer needs after a tick."""
        sensors = self.vehicle.sensors
        return {
            "tick": self.tick_count,
            "viewport": {
                "x": self.viewport.x,
                "y": self.viewport.y,
                "width": self.viewport.width,
                "height": self.viewport.height,
            },
            "road": {
                "lane_count": self.road.lane_count,
                "lane_height": self.road.lane_height,
                "top": self.road.top,
                "bottom": self.road.bottom,
            },
            "vehicle": self.vehicle.as_dict(),
            "obstacles": [car.as_dict() for car in self.obstacles],
            "signals": [sig.as_dict() for sig in self.signals],
            "rays": [ray.as_dict() for ray in sensors.rays] if sensors else [],
            "decision": self.last_decision.as_dict() if self.last_decision else None,
            "stats": {
                "lane_changes": self.lane_changes,
                "stop_events": self.stop_events,
                "recycled_obstacles": self.recycled_obstacles,
                "recycled_signals": self.recycled_signals,
            },
        }

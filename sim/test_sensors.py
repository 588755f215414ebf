#!/usr/bin/env python3
"""
Tests for the rayscan sensor array.
"""

from __future__ import annotations

import math
import random
import unittest

from sim.geometry import Point, distance
from sim.obstacle import ObstacleCar
from sim.sensors import DetectionKind, SensorArray
from sim.signal import SignalState, TrafficSignal


def _red(sig: TrafficSignal) -> TrafficSignal:
    sig.state_index = 2
    return sig


class FanLayoutTests(unittest.TestCase):
    def test_even_spread_centred_on_heading(self) -> None:
        sensors = SensorArray(ray_count=5, ray_length=100.0, ray_spread_deg=180.0)
        self.assertEqual(sensors.angle_offsets, [-90.0, -45.0, 0.0, 45.0, 90.0])

    def test_single_ray_points_along_heading(self) -> None:
        sensors = SensorArray(ray_count=1, ray_length=100.0, ray_spread_deg=180.0)
        sensors.update(Point(0, 0), 30.0, [], [])
        self.assertEqual(len(sensors.rays), 1)
        self.assertEqual(sensors.rays[0].angle, 30.0)

    def test_zero_rays_rejected(self) -> None:
        with self.assertRaises(ValueError):
            SensorArray(ray_count=0)

    def test_empty_world_gives_max_range_rays(self) -> None:
        sensors = SensorArray(ray_count=36, ray_length=500.0, ray_spread_deg=180.0)
        detections = sensors.update(Point(10, 20), 0.0, [], [])
        self.assertEqual(detections, [])
        self.assertEqual(len(sensors.rays), 36)
        for ray in sensors.rays:
            self.assertIsNone(ray.detection)
            self.assertAlmostEqual(ray.length, 500.0)

    def test_rays_are_rebuilt_each_update(self) -> None:
        sensors = SensorArray(ray_count=3, ray_length=300.0, ray_spread_deg=4.0)
        obstacles = [ObstacleCar(id="OBS_A", x=100.0, y=0.0)]
        sensors.update(Point(0, 0), 0.0, [], obstacles)
        sensors.update(Point(0, 0), 0.0, [], obstacles)
        self.assertEqual(len(sensors.rays), 3)
        self.assertEqual(len(sensors.detections), 3)


class NearestHitTests(unittest.TestCase):
    def setUp(self) -> None:
        self.sensors = SensorArray(ray_count=1, ray_length=500.0, ray_spread_deg=0.0)
        self.origin = Point(0.0, 0.0)

    def test_nearer_obstacle_wins(self) -> None:
        far = ObstacleCar(id="OBS_FAR", x=200.0, y=0.0)
        near = ObstacleCar(id="OBS_NEAR", x=100.0, y=0.0)
        self.sensors.update(self.origin, 0.0, [], [far, near])
        ray = self.sensors.rays[0]
        self.assertEqual(ray.detection.source_id, "OBS_NEAR")
        self.assertIs(ray.detection.kind, DetectionKind.OBSTACLE)
        # rectangle reports its first edge in scan order (the right edge)
        self.assertEqual(ray.end, Point(120.0, 0.0))

    def test_signal_in_front_of_obstacle_wins(self) -> None:
        sig = TrafficSignal(id="SIG_A", x=60.0, y=0.0)
        obstacle = ObstacleCar(id="OBS_A", x=100.0, y=0.0)
        detections = self.sensors.update(self.origin, 0.0, [sig], [obstacle])
        self.assertEqual(len(detections), 1)
        det = detections[0]
        self.assertIs(det.kind, DetectionKind.SIGNAL)
        self.assertEqual(det.signal_state, SignalState.GREEN.value)
        self.assertAlmostEqual(det.x, 55.0)
        self.assertFalse(det.is_red_signal)

    def test_obstacle_in_front_of_signal_wins(self) -> None:
        sig = _red(TrafficSignal(id="SIG_A", x=300.0, y=0.0))
        obstacle = ObstacleCar(id="OBS_A", x=100.0, y=0.0)
        detections = self.sensors.update(self.origin, 0.0, [sig], [obstacle])
        self.assertEqual([d.source_id for d in detections], ["OBS_A"])

    def test_detection_carries_current_signal_state(self) -> None:
        sig = TrafficSignal(id="SIG_A", x=300.0, y=0.0, durations_ms=(10.0, 10.0, 10.0))
        sig.update(10.0)
        ray = self.sensors.cast(self.origin, 0.0, [sig], [])
        self.assertEqual(ray.detection.signal_state, SignalState.YELLOW.value)
        self.assertEqual(ray.as_dict()["state"], "yellow")
        sig.update(10.0)
        ray = self.sensors.cast(self.origin, 0.0, [sig], [])
        self.assertEqual(ray.detection.signal_state, "red")

    def test_red_state_is_tagged(self) -> None:
        sig = _red(TrafficSignal(id="SIG_A", x=300.0, y=0.0))
        detections = self.sensors.update(self.origin, 0.0, [sig], [])
        self.assertEqual(detections[0].signal_state, "red")
        self.assertTrue(detections[0].is_red_signal)
        self.assertEqual(self.sensors.rays[0].as_dict()["type"], "signal")

    def test_out_of_range_entity_not_detected(self) -> None:
        obstacle = ObstacleCar(id="OBS_A", x=600.0, y=0.0)
        detections = self.sensors.update(self.origin, 0.0, [], [obstacle])
        self.assertEqual(detections, [])
        self.assertAlmostEqual(self.sensors.rays[0].end.x, 500.0)


class NearestHitPropertyTests(unittest.TestCase):
    def test_every_ray_keeps_minimum_distance_candidate(self) -> None:
        rng = random.Random(1234)
        sensors = SensorArray(ray_count=36, ray_length=500.0, ray_spread_deg=180.0)
        origin = Point(0.0, 0.0)
        for _ in range(10):
            obstacles = [
                ObstacleCar(id=f"OBS_{i}", x=rng.uniform(-400, 400),
                            y=rng.uniform(-400, 400))
                for i in range(8)
            ]
            signals = [
                TrafficSignal(id=f"SIG_{i}", x=rng.uniform(-400, 400),
                              y=rng.uniform(-400, 400))
                for i in range(4)
            ]
            sensors.update(origin, rng.uniform(0, 360), signals, obstacles)
            for ray in sensors.rays:
                full_end = Point(
                    origin.x + 500.0 * math.cos(math.radians(ray.angle)),
                    origin.y + 500.0 * math.sin(math.radians(ray.angle)),
                )
                candidates = [
                    distance(origin, hit)
                    for hit in (e.intersect(origin, full_end) for e in [*signals, *obstacles])
                    if hit is not None
                ]
                if candidates:
                    self.assertAlmostEqual(ray.length, min(candidates))
                    self.assertIsNotNone(ray.detection)
                else:
                    self.assertAlmostEqual(ray.length, 500.0)
                    self.assertIsNone(ray.detection)


if __name__ == "__main__":
    unittest.main()

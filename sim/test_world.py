#!/usr/bin/env python3
"""
Integration tests for the World tick loop: ordering, recycling,
viewport tracking, reproducibility and long-run invariants.
"""

from __future__ import annotations

import unittest

from sim.road import Road
from sim.traffic_policy import DrivingPolicy
from sim.vehicle import DrivingState
from sim.world import World

FRAME_MS = 1000.0 / 60.0


class RoadLayoutTests(unittest.TestCase):
    def setUp(self) -> None:
        self.road = Road(lane_count=4, lane_height=100.0, grass_height=150.0)

    def test_lane_centres(self) -> None:
        self.assertEqual([self.road.lane_center(i) for i in range(4)],
                         [200.0, 300.0, 400.0, 500.0])

    def test_lane_index_is_clamped(self) -> None:
        self.assertEqual(self.road.lane_index(10.0), 0)
        self.assertEqual(self.road.lane_index(349.9), 1)
        self.assertEqual(self.road.lane_index(350.0), 2)
        self.assertEqual(self.road.lane_index(900.0), 3)
        self.assertEqual(self.road.raw_lane_index(900.0), 7)

    def test_middle_lane_and_bounds(self) -> None:
        self.assertEqual(self.road.middle_lane, 2)
        self.assertEqual((self.road.top, self.road.bottom), (150.0, 550.0))
        self.assertFalse(self.road.has_lane(4))


class WorldSetupTests(unittest.TestCase):
    def test_initial_layout(self) -> None:
        world = World(seed=1)
        policy = world.policy
        self.assertEqual(len(world.obstacles), policy.obstacle_count)
        self.assertEqual(len(world.signals), policy.lane_count)
        self.assertEqual(world.vehicle.current_lane, world.road.middle_lane)
        self.assertEqual(world.vehicle.y, world.road.lane_center(world.road.middle_lane))
        self.assertEqual(world.vehicle.x, world.viewport.left + policy.start_offset)
        self.assertEqual(world.vehicle.speed, 0.0)
        self.assertIs(world.vehicle.state, DrivingState.DRIVING)
        for car in world.obstacles:
            self.assertGreaterEqual(car.x, world.viewport.right)
            self.assertEqual(car.y, world.road.lane_center(car.lane))

    def test_signals_replenished_after_first_tick(self) -> None:
        world = World(seed=2)
        world.tick(FRAME_MS)
        self.assertEqual(len(world.signals), world.policy.lane_count * world.policy.signals_per_lane)
        xs = [sig.x for sig in world.signals[world.policy.lane_count - 1:]]
        self.assertEqual(xs, sorted(xs))

    def test_custom_ray_count(self) -> None:
        world = World(DrivingPolicy(ray_count=7), seed=3)
        world.tick(FRAME_MS)
        self.assertEqual(len(world.vehicle.sensors.rays), 7)
        self.assertEqual(len(world.snapshot()["rays"]), 7)


class WorldTickTests(unittest.TestCase):
    def test_viewport_follows_vehicle(self) -> None:
        world = World(seed=4)
        for _ in range(30):
            world.tick(FRAME_MS)
            self.assertEqual(world.viewport.x, world.vehicle.x)
            self.assertEqual(world.viewport.y, world.road.lane_center(world.road.middle_lane))

    def test_negative_dt_is_clamped(self) -> None:
        world = World(seed=5)
        world.tick(-50.0)
        for sig in world.signals:
            self.assertGreaterEqual(sig.timer_ms, 0.0)
        self.assertEqual(world.tick_count, 1)

    def test_empty_road_reaches_max_speed(self) -> None:
        world = World(DrivingPolicy(obstacle_count=0), seed=6)
        for _ in range(40):
            world.tick(0.0)
        self.assertEqual(world.vehicle.speed, world.policy.max_speed)
        self.assertEqual(world.lane_changes, 0)

    def test_long_run_invariants(self) -> None:
        world = World(seed=7)
        road = world.road
        lo, hi = road.lane_center(0), road.lane_center(road.lane_count - 1)
        start_x = world.vehicle.x
        for _ in range(3000):
            world.tick(FRAME_MS)
            vehicle = world.vehicle
            self.assertGreaterEqual(vehicle.speed, 0.0)
            self.assertLessEqual(vehicle.speed, vehicle.max_speed)
            self.assertTrue(road.has_lane(vehicle.current_lane))
            self.assertTrue(road.has_lane(vehicle.target_lane))
            self.assertTrue(lo <= vehicle.y <= hi)
            if not vehicle.changing_lane:
                self.assertEqual(vehicle.y, road.lane_center(vehicle.current_lane))
            for sig in world.signals:
                self.assertLess(sig.timer_ms, sig.durations_ms[sig.state_index])
            for car in world.obstacles:
                self.assertTrue(road.has_lane(car.lane))
        self.assertEqual(len(world.obstacles), world.policy.obstacle_count)
        self.assertGreater(world.vehicle.x, start_x)


class WorldSnapshotTests(unittest.TestCase):
    def test_snapshot_shape(self) -> None:
        world = World(seed=8)
        world.tick(FRAME_MS)
        snap = world.snapshot()
        self.assertEqual(
            set(snap),
            {"tick", "viewport", "road", "vehicle", "obstacles", "signals",
             "rays", "decision", "stats"},
        )
        self.assertEqual(snap["tick"], 1)
        self.assertEqual(snap["vehicle"]["id"], "EGO")
        self.assertIn(snap["decision"]["manoeuvre"], {"stop", "avoid", "blocked", "cruise"})

    def test_same_seed_same_run(self) -> None:
        a, b = World(seed=42), World(seed=42)
        for _ in range(500):
            a.tick(FRAME_MS)
            b.tick(FRAME_MS)
        self.assertEqual(a.snapshot(), b.snapshot())

    def test_reset_replays_from_start(self) -> None:
        world = World(seed=9)
        first = world.snapshot()
        for _ in range(100):
            world.tick(FRAME_MS)
        world.reset()
        self.assertEqual(world.snapshot(), first)
        self.assertIsNone(world.last_decision)


if __name__ == "__main__":
    unittest.main()

#!/usr/bin/env python3
"""
Tests for obstacle-car shape and recycling.
"""

from __future__ import annotations

import random
import unittest

from sim.geometry import Point
from sim.obstacle import ObstacleCar
from sim.road import Road, Viewport


class ObstacleShapeTests(unittest.TestCase):
    def setUp(self) -> None:
        self.car = ObstacleCar(id="OBS_T", x=0.0, y=0.0, width=40.0, height=20.0)

    def test_first_edge_in_order_wins_over_nearest(self) -> None:
        # Crosses the left edge first along the ray, but the right edge
        # comes earlier in the top/right/bottom/left scan.
        hit = self.car.intersect(Point(-100, 0), Point(100, 0))
        self.assertEqual(hit, Point(20.0, 0.0))

    def test_vertical_ray_hits_top_edge(self) -> None:
        hit = self.car.intersect(Point(5, -100), Point(5, 100))
        self.assertEqual(hit, Point(5.0, -10.0))

    def test_ray_ending_inside_box_hits_entry_edge(self) -> None:
        hit = self.car.intersect(Point(-100, 0), Point(0, 0))
        self.assertEqual(hit, Point(-20.0, 0.0))

    def test_missing_ray(self) -> None:
        self.assertIsNone(self.car.intersect(Point(-100, 50), Point(100, 50)))

    def test_edges_close_the_rectangle(self) -> None:
        edges = self.car.edges()
        self.assertEqual(len(edges), 4)
        for (_, end), (start, _) in zip(edges, edges[1:] + edges[:1]):
            self.assertEqual(end, start)


class ObstacleMotionTests(unittest.TestCase):
    def setUp(self) -> None:
        self.road = Road(lane_count=4, lane_height=100.0, grass_height=150.0)
        self.view = Viewport(x=0.0, y=350.0, width=1000.0, height=700.0)

    def test_moves_toward_negative_x(self) -> None:
        car = ObstacleCar(id="OBS_T", x=200.0, y=300.0, speed=3.0)
        recycled = car.update(self.view, self.road, random.Random(0))
        self.assertFalse(recycled)
        self.assertEqual(car.x, 197.0)
        self.assertEqual(car.y, 300.0)

    def test_recycles_ahead_once_behind_view(self) -> None:
        car = ObstacleCar(id="OBS_T", x=-539.0, y=300.0, speed=2.0)
        recycled = car.update(self.view, self.road, random.Random(7))
        self.assertTrue(recycled)
        self.assertGreaterEqual(car.x, self.view.right + car.width)
        self.assertLess(car.x, self.view.right + car.width + 3 * self.view.width)
        self.assertTrue(self.road.has_lane(car.lane))
        self.assertEqual(car.y, self.road.lane_center(car.lane))
        self.assertGreaterEqual(car.speed, 2.0)
        self.assertLess(car.speed, 4.0)

    def test_reset_is_reproducible_with_seed(self) -> None:
        a = ObstacleCar(id="A", x=0.0, y=0.0)
        b = ObstacleCar(id="B", x=0.0, y=0.0)
        a.reset_position(self.view, self.road, random.Random(42))
        b.reset_position(self.view, self.road, random.Random(42))
        self.assertEqual((a.x, a.y, a.lane, a.speed), (b.x, b.y, b.lane, b.speed))

    def test_custom_speed_range(self) -> None:
        car = ObstacleCar(id="OBS_T", x=0.0, y=0.0)
        rng = random.Random(3)
        for _ in range(20):
            car.reset_position(self.view, self.road, rng, speed_range=(1.0, 1.5))
            self.assertTrue(1.0 <= car.speed < 1.5)


if __name__ == "__main__":
    unittest.main()

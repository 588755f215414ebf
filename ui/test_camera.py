#!/usr/bin/env python3
"""
Tests for the world-to-screen camera mapping.
"""

from __future__ import annotations

import unittest

from ui.types import Camera


class CameraTests(unittest.TestCase):
    def test_viewport_centre_maps_to_screen_centre(self) -> None:
        cam = Camera(1000, 700, world_x=2500.0, world_y=350.0)
        self.assertEqual(cam.world_to_screen(2500.0, 350.0), (500.0, 350.0))

    def test_y_grows_downward_without_flip(self) -> None:
        cam = Camera(1000, 700, world_x=0.0, world_y=350.0)
        _, sy_top = cam.world_to_screen(0.0, 150.0)
        _, sy_bottom = cam.world_to_screen(0.0, 550.0)
        self.assertLess(sy_top, sy_bottom)

    def test_zoom_scales_offsets(self) -> None:
        cam = Camera(1000, 700, world_x=0.0, world_y=0.0, zoom=2.0)
        self.assertEqual(cam.world_to_screen(10.0, -5.0), (520.0, 340.0))
        self.assertEqual(cam.scale(40.0), 80.0)

    def test_screen_to_world_inverts(self) -> None:
        cam = Camera(800, 600, world_x=123.0, world_y=456.0, zoom=1.5)
        wx, wy = cam.screen_to_world(*cam.world_to_screen(200.0, 300.0))
        self.assertAlmostEqual(wx, 200.0)
        self.assertAlmostEqual(wy, 300.0)

    def test_from_viewport_and_visible_span(self) -> None:
        cam = Camera.from_viewport({"x": 1000.0, "y": 350.0}, 1000, 700)
        self.assertEqual(cam.visible_world_x, (500.0, 1500.0))


if __name__ == "__main__":
    unittest.main()

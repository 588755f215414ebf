#!/usr/bin/env python3
"""
main.py
=======
Entry point: builds the :class:`~sim.world.World` from ``RAYSCAN_*``
environment overrides and runs it in the pygame window or headless.

Environment
-----------
RAYSCAN_SEED, RAYSCAN_OBSTACLES, RAYSCAN_LANES, RAYSCAN_RAYS
    World seed and policy overrides.
RAYSCAN_FPS
    Frame rate of the pygame window, also the headless tick length.
RAYSCAN_HEADLESS, RAYSCAN_TICKS
    Run *ticks* frames without a window when headless is truthy.
RAYSCAN_LOG_LEVEL
    ``DEBUG``, ``INFO``, ``WARNING`` ...
"""

import dataclasses
import logging
import os

from config import (
    DEFAULT_HEADLESS_TICKS,
    DEFAULT_LANE_COUNT,
    DEFAULT_OBSTACLE_COUNT,
    DEFAULT_RAY_COUNT,
    DEFAULT_SEED,
    HEADLESS_STATUS_EVERY,
    TARGET_FPS,
    WINDOW_HEIGHT,
    WINDOW_WIDTH,
)
from logging_setup import setup_logging
from sim.traffic_policy import DrivingPolicy
from sim.world import World

log = logging.getLogger("main")


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None


def _env_flag(name: str) -> bool:
    return os.environ.get(name, "").strip().lower() in ("1", "true", "yes", "on")


def build_policy() -> DrivingPolicy:
    """Default policy with the environment overrides applied."""
    return dataclasses.replace(
        DrivingPolicy(view_width=float(WINDOW_WIDTH), view_height=float(WINDOW_HEIGHT)),
        obstacle_count=_env_int("RAYSCAN_OBSTACLES", DEFAULT_OBSTACLE_COUNT),
        lane_count=_env_int("RAYSCAN_LANES", DEFAULT_LANE_COUNT),
        ray_count=_env_int("RAYSCAN_RAYS", DEFAULT_RAY_COUNT),
    )


def run_headless(world: World, ticks: int, fps: int) -> None:
    """Tick *world* at a fixed frame length without opening a window."""
    dt_ms = 1000.0 / fps
    for _ in range(ticks):
        try:
            world.tick(dt_ms)
        except Exception:
            log.exception("Tick %d failed", world.tick_count)
            raise
        if world.tick_count % HEADLESS_STATUS_EVERY == 0:
            v = world.vehicle
            log.info(
                "tick=%d x=%.0f lane=%d speed=%.2f state=%s lane_changes=%d stops=%d",
                world.tick_count, v.x, v.current_lane, v.speed, v.state.value,
                world.lane_changes, world.stop_events,
            )
    log.info("Headless run finished: %s", world.snapshot()["stats"])


def main() -> None:
    level_name = os.environ.get("RAYSCAN_LOG_LEVEL", "INFO").upper()
    setup_logging(getattr(logging, level_name, logging.INFO))

    policy = build_policy()
    seed = _env_int("RAYSCAN_SEED", DEFAULT_SEED)
    fps = max(1, _env_int("RAYSCAN_FPS", TARGET_FPS))
    world = World(policy, seed=seed)
    log.info(
        "Starting rayscan sim (seed=%d, lanes=%d, obstacles=%d, rays=%d)",
        seed, policy.lane_count, policy.obstacle_count, policy.ray_count,
    )

    try:
        if _env_flag("RAYSCAN_HEADLESS"):
            run_headless(world, _env_int("RAYSCAN_TICKS", DEFAULT_HEADLESS_TICKS), fps)
        else:
            from ui.pygame_view import run_pygame_view

            run_pygame_view(world, width=WINDOW_WIDTH, height=WINDOW_HEIGHT, fps=fps)
    except KeyboardInterrupt:
        log.info("Shutting down...")


if __name__ == "__main__":
    main()

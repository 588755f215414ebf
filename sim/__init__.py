"""
sim: Simulation core
===================

Modules
-------
geometry
    Segment / circle intersection primitives and distance.
road
    :class:`Road` lane layout and the :class:`Viewport` camera window.
traffic_policy
    :class:`DrivingPolicy` tunable constants and :func:`stopping_distance`.
signal
    :class:`TrafficSignal` timed green / yellow / red light.
obstacle
    :class:`ObstacleCar` autonomous rectangular traffic.
sensors
    :class:`SensorArray` rayscan fan, :class:`Ray` and :class:`Detection`.
vehicle
    :class:`Vehicle` controlled car record.
driving
    :class:`DrivingController` stop / avoid / cruise state machine.
world
    :class:`World` entity registry and tick loop.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True)
class TickMetrics:
    tick: int
    boids: int
    predators: int
    food_remaining: int
    poison_remaining: int
    eaten: int
    neighbor_checks: int
    average_speed: float
    tick_duration_ms: float = 0.0

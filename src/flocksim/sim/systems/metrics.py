from __future__ import annotations

import math
from typing import Sequence

from ..core.agent import Boid
from ..types.metrics import TickMetrics


def average_speed(agents: Sequence[Boid]) -> float:
    if not agents:
        return 0.0
    total = 0.0
    for agent in agents:
        velocity = agent.velocity
        total += math.sqrt(velocity.x * velocity.x + velocity.y * velocity.y + velocity.z * velocity.z)
    return total / len(agents)


def create_metrics(
    tick: int,
    boids: Sequence[Boid],
    predators: Sequence[Boid],
    food_remaining: int,
    poison_remaining: int,
    eaten: int,
    neighbor_checks: int,
    duration_ms: float,
) -> TickMetrics:
    return TickMetrics(
        tick=tick,
        boids=len(boids),
        predators=len(predators),
        food_remaining=food_remaining,
        poison_remaining=poison_remaining,
        eaten=eaten,
        neighbor_checks=neighbor_checks,
        average_speed=average_speed(list(boids) + list(predators)),
        tick_duration_ms=duration_ms,
    )

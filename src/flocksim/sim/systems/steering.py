from __future__ import annotations

from typing import Sequence

from pygame.math import Vector3

from ..core.agent import Boid
from ..core.config import RuleParams
from ..utils.math3d import clamp_length, distance, safe_normalize


def seek(agent: Boid, target: Vector3) -> Vector3:
    desired = safe_normalize(target - agent.position) * agent.max_speed
    steer = desired - agent.velocity
    return clamp_length(steer, agent.min_force, agent.max_force)


def align(agent: Boid, neighbors: Sequence[Boid], radius: float) -> Vector3:
    sum_x = 0.0
    sum_y = 0.0
    sum_z = 0.0
    count = 0
    for other in neighbors:
        dist = distance(agent.position, other.position)
        if 0.0 < dist < radius:
            velocity = other.velocity
            sum_x += velocity.x
            sum_y += velocity.y
            sum_z += velocity.z
            count += 1
    if count == 0:
        return Vector3()
    inv = 1.0 / count
    desired = safe_normalize(Vector3(sum_x * inv, sum_y * inv, sum_z * inv)) * agent.max_speed
    return clamp_length(desired - agent.velocity, agent.min_force, agent.max_force)


def cohesion(agent: Boid, neighbors: Sequence[Boid], radius: float) -> Vector3:
    sum_x = 0.0
    sum_y = 0.0
    sum_z = 0.0
    count = 0
    for other in neighbors:
        dist = distance(agent.position, other.position)
        if 0.0 < dist < radius:
            position = other.position
            sum_x += position.x
            sum_y += position.y
            sum_z += position.z
            count += 1
    if count == 0:
        return Vector3()
    inv = 1.0 / count
    return seek(agent, Vector3(sum_x * inv, sum_y * inv, sum_z * inv))


def repulsion(position: Vector3, other_position: Vector3) -> Vector3:
    """Unit vector away from ``other_position`` scaled by 1/d^2; zero when the points coincide."""

    dist = distance(position, other_position)
    if dist <= 0.0:
        return Vector3()
    return safe_normalize(position - other_position) / (dist * dist)


def separation(agent: Boid, neighbors: Sequence[Boid], radius: float) -> Vector3:
    accum = Vector3()
    count = 0
    for other in neighbors:
        dist = distance(agent.position, other.position)
        if 0.0 < dist < radius:
            accum += repulsion(agent.position, other.position)
            count += 1
    if count > 0:
        accum /= count
    if accum.length_squared() <= 0.0:
        return Vector3()
    desired = safe_normalize(accum) * agent.max_speed
    return clamp_length(desired - agent.velocity, agent.min_force, agent.max_force)


def flock(agent: Boid, agents: Sequence[Boid], params: RuleParams) -> None:
    """Accumulate the weighted align, cohesion and separation forces into ``agent.acceleration``."""

    alignment = align(agent, agents, params.align_perception) * params.align_weight
    cohere = cohesion(agent, agents, params.cohere_perception) * params.cohere_weight
    separate = separation(agent, agents, params.separate_perception) * params.separate_weight
    agent.acceleration += alignment
    agent.acceleration += cohere
    agent.acceleration += separate

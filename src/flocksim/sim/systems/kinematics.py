from __future__ import annotations

from typing import Union

from pygame.math import Vector3

from ..core.agent import Boid, TargetParticle
from ..utils.math3d import clamp_length, heading_angles, safe_normalize


def integrate(agent: Boid) -> None:
    """Advance one tick: move, take on the pending force, re-clamp speed, clear the force.

    Velocity is normalized before the speed clamp, so a zero velocity stays zero.
    """

    agent.position += agent.velocity
    velocity = agent.velocity + agent.acceleration
    agent.velocity = clamp_length(safe_normalize(velocity), agent.min_speed, agent.max_speed)
    agent.acceleration = Vector3()


def wrap_boundary(entity: Union[Boid, TargetParticle], width: float, depth: float) -> None:
    """Teleport to the opposite edge of the X/Z plane; ``width``/``depth`` are half extents.

    Only the first overflowing edge is corrected per call, X before Z.
    """

    position = entity.position
    if position.x > width:
        position.x = -width
    elif position.x < -width:
        position.x = width
    elif position.z > depth:
        position.z = -depth
    elif position.z < -depth:
        position.z = depth


def orientation(agent: Boid) -> tuple[float, float]:
    return heading_angles(agent.velocity)

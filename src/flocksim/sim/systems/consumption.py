from __future__ import annotations

import logging
from typing import List, Optional

from ..core.agent import Boid, TargetParticle
from ..utils.math3d import distance
from .steering import seek

logger = logging.getLogger(__name__)

DEFAULT_CONSUMPTION_RADIUS = 3.0


def nearest_target(agent: Boid, targets: List[TargetParticle]) -> tuple[int, float]:
    """Index and distance of the closest target; ties keep the first one scanned.

    Returns ``(-1, inf)`` for an empty collection.
    """

    record = float("inf")
    closest = -1
    for index, target in enumerate(targets):
        dist = distance(agent.position, target.position)
        if dist < record:
            record = dist
            closest = index
    return closest, record


def eat(
    agent: Boid, targets: List[TargetParticle], threshold: float = DEFAULT_CONSUMPTION_RADIUS
) -> Optional[TargetParticle]:
    """Steer toward the nearest target and consume it once it is within ``threshold``.

    The removed particle is returned; the remaining targets keep their order.
    """

    closest, record = nearest_target(agent, targets)
    if closest == -1:
        return None
    agent.acceleration += seek(agent, targets[closest].position)
    if record < threshold:
        eaten = targets.pop(closest)
        agent.eaten += 1
        logger.debug("Agent %d ate %s particle %d at distance %.3f", agent.id, eaten.kind.value, eaten.id, record)
        return eaten
    return None

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from pygame.math import Vector3


class AgentRole(str, Enum):
    BOID = "Boid"
    PREDATOR = "Predator"


class ParticleKind(str, Enum):
    FOOD = "Food"
    POISON = "Poison"


@dataclass(slots=True)
class Boid:
    id: int
    position: Vector3
    velocity: Vector3
    acceleration: Vector3 = field(default_factory=Vector3)
    max_speed: float = 20.0
    min_speed: float = 0.0
    max_force: float = 0.1
    min_force: float = 0.0
    role: AgentRole = AgentRole.BOID
    eaten: int = 0


@dataclass(slots=True)
class TargetParticle:
    id: int
    kind: ParticleKind
    position: Vector3

from __future__ import annotations

from pygame.math import Vector3

from flocksim.sim.core.agent import AgentRole, Boid, ParticleKind, TargetParticle


def test_boid_uses_slots_and_isolates_defaults():
    boid_a = Boid(id=1, position=Vector3(), velocity=Vector3())
    boid_b = Boid(id=2, position=Vector3(), velocity=Vector3())

    assert not hasattr(boid_a, "__dict__")
    assert hasattr(Boid, "__slots__")
    assert boid_a.acceleration is not boid_b.acceleration
    boid_a.acceleration.x = 1.5
    assert boid_b.acceleration.x == 0.0


def test_boid_defaults_match_flocking_limits():
    boid = Boid(id=0, position=Vector3(), velocity=Vector3())
    assert boid.max_speed == 20.0
    assert boid.min_speed == 0.0
    assert boid.max_force == 0.1
    assert boid.min_force == 0.0
    assert boid.role is AgentRole.BOID
    assert boid.eaten == 0


def test_target_particle_has_no_velocity():
    particle = TargetParticle(id=3, kind=ParticleKind.FOOD, position=Vector3(1.0, 0.0, 2.0))
    assert not hasattr(particle, "velocity")
    assert particle.kind.value == "Food"

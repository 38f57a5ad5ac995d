from __future__ import annotations

import logging
import math
from typing import Any, Dict, List, Mapping, Tuple
from time import perf_counter

from .agent import AgentRole, Boid, ParticleKind, TargetParticle
from .config import RuleParams, SimulationConfig
from .rng import DeterministicRng
from .spatial_grid import SpatialGrid
from . import parameters
from ..systems import consumption, kinematics, metrics as metrics_system, steering
from ..types.metrics import TickMetrics
from ..types.snapshot import Snapshot, SnapshotMetadata, SnapshotWorld

logger = logging.getLogger(__name__)


class World:
    def __init__(self, config: SimulationConfig):
        self._config = config
        self._rng = DeterministicRng(config.seed)
        self._grid = SpatialGrid(config.grid_cell_size) if config.neighbor_index == "grid" else None
        self._boids: List[Boid] = []
        self._predators: List[Boid] = []
        self._foods: List[TargetParticle] = []
        self._poisons: List[TargetParticle] = []
        self._neighbor_agents: List[Boid] = []
        self._next_id = 0
        self._next_particle_id = 0
        self._eaten_total = 0
        self._metrics: TickMetrics | None = None
        self._bootstrap_population()
        logger.info(
            "World created: scenario=%s seed=%d boids=%d predators=%d food=%d poison=%d",
            config.scenario,
            config.seed,
            len(self._boids),
            len(self._predators),
            len(self._foods),
            len(self._poisons),
        )

    @property
    def config(self) -> SimulationConfig:
        return self._config

    @property
    def boids(self) -> Tuple[Boid, ...]:
        return tuple(self._boids)

    @property
    def predators(self) -> Tuple[Boid, ...]:
        return tuple(self._predators)

    @property
    def foods(self) -> Tuple[TargetParticle, ...]:
        return tuple(self._foods)

    @property
    def poisons(self) -> Tuple[TargetParticle, ...]:
        return tuple(self._poisons)

    @property
    def eaten_total(self) -> int:
        return self._eaten_total

    @property
    def metrics(self) -> TickMetrics | None:
        return self._metrics

    def reset(self) -> None:
        self._boids.clear()
        self._predators.clear()
        self._foods.clear()
        self._poisons.clear()
        self._neighbor_agents.clear()
        if self._grid is not None:
            self._grid.clear()
        self._rng.reset()
        self._next_id = 0
        self._next_particle_id = 0
        self._eaten_total = 0
        self._metrics = None
        self._bootstrap_population()
        logger.info("World reset: scenario=%s seed=%d", self._config.scenario, self._config.seed)

    def update_parameters(self, updates: Mapping[str, Any]) -> Dict[str, float]:
        """Apply clamped parameter updates; takes effect on the next call to :meth:`step`."""

        applied = parameters.apply_updates(self._config, updates)
        if any(name.startswith(("boid.", "predator.")) for name in applied):
            self._apply_agent_limits()
        return applied

    def step(self, tick: int) -> TickMetrics:
        start = perf_counter()
        params = RuleParams.from_config(self._config)
        half_width = params.half_width
        half_depth = params.half_depth
        neighbor_checks = 0
        eaten = 0

        # Every force for this tick is computed before any agent moves.
        if self._boids:
            grid = self._grid
            if grid is not None:
                grid.clear()
                for agent in self._boids:
                    grid.insert(agent)
                query_radius = params.max_perception
                for agent in self._boids:
                    grid.collect_neighbors(agent.position, query_radius, self._neighbor_agents)
                    neighbor_checks += len(self._neighbor_agents)
                    steering.flock(agent, self._neighbor_agents, params)
            else:
                for agent in self._boids:
                    neighbor_checks += len(self._boids)
                    steering.flock(agent, self._boids, params)

        eat_poison = self._config.foraging.eat_poison
        for predator in self._predators:
            if consumption.eat(predator, self._foods, params.consumption_radius) is not None:
                eaten += 1
            if eat_poison and consumption.eat(predator, self._poisons, params.consumption_radius) is not None:
                eaten += 1

        for agent in self._boids:
            kinematics.integrate(agent)
            kinematics.wrap_boundary(agent, half_width, half_depth)
        for predator in self._predators:
            kinematics.integrate(predator)
            kinematics.wrap_boundary(predator, half_width, half_depth)
        for particle in self._foods:
            kinematics.wrap_boundary(particle, half_width, half_depth)
        for particle in self._poisons:
            kinematics.wrap_boundary(particle, half_width, half_depth)

        self._eaten_total += eaten
        elapsed_ms = (perf_counter() - start) * 1000.0
        metrics = metrics_system.create_metrics(
            tick,
            self._boids,
            self._predators,
            len(self._foods),
            len(self._poisons),
            eaten,
            neighbor_checks,
            elapsed_ms,
        )
        self._metrics = metrics
        return metrics

    def snapshot(self, tick: int) -> Snapshot:
        metrics = self._metrics if self._metrics is not None else self._snapshot_metrics_from_state(tick)
        agents_payload = [self._agent_snapshot(agent) for agent in self._boids]
        agents_payload.extend(self._agent_snapshot(agent) for agent in self._predators)
        particles_payload = [self._particle_snapshot(particle) for particle in self._foods]
        particles_payload.extend(self._particle_snapshot(particle) for particle in self._poisons)
        config = self._config
        metadata = SnapshotMetadata(
            scenario=config.scenario,
            sim_dt=config.time_step,
            tick_rate=0.0 if config.time_step <= 0 else 1.0 / config.time_step,
            seed=config.seed,
            config_version=config.config_version,
            neighbor_index=config.neighbor_index,
        )
        return Snapshot(
            tick=tick,
            metrics=metrics,
            agents=agents_payload,
            particles=particles_payload,
            world=SnapshotWorld(width=config.plane.width, depth=config.plane.depth),
            metadata=metadata,
        )

    def _bootstrap_population(self) -> None:
        config = self._config
        if config.scenario == "foraging":
            for _ in range(config.foraging.predator_count):
                self._predators.append(self._spawn_agent(AgentRole.PREDATOR))
            for _ in range(config.foraging.food_count):
                self._foods.append(self._spawn_particle(ParticleKind.FOOD))
            for _ in range(config.foraging.poison_count):
                self._poisons.append(self._spawn_particle(ParticleKind.POISON))
        else:
            for _ in range(config.boid_count):
                self._boids.append(self._spawn_agent(AgentRole.BOID))

    def _spawn_agent(self, role: AgentRole) -> Boid:
        config = self._config
        boid_config = config.boid
        position = self._rng.next_plane_point(config.plane.width, config.plane.depth)
        speed = self._rng.next_range(boid_config.initial_speed_min, boid_config.initial_speed_max)
        velocity = self._rng.next_plane_direction() * speed
        agent = Boid(id=self._next_id, position=position, velocity=velocity, role=role)
        self._set_limits(agent)
        self._next_id += 1
        return agent

    def _spawn_particle(self, kind: ParticleKind) -> TargetParticle:
        plane = self._config.plane
        particle = TargetParticle(
            id=self._next_particle_id,
            kind=kind,
            position=self._rng.next_plane_point(plane.width, plane.depth),
        )
        self._next_particle_id += 1
        return particle

    def _set_limits(self, agent: Boid) -> None:
        boid_config = self._config.boid
        agent.max_speed = boid_config.max_speed
        agent.min_speed = boid_config.min_speed
        if agent.role == AgentRole.PREDATOR:
            agent.max_force = self._config.foraging.predator_max_force
            agent.min_force = self._config.foraging.predator_min_force
        else:
            agent.max_force = boid_config.max_force
            agent.min_force = boid_config.min_force

    def _apply_agent_limits(self) -> None:
        for agent in self._boids:
            self._set_limits(agent)
        for agent in self._predators:
            self._set_limits(agent)

    @staticmethod
    def _agent_snapshot(agent: Boid) -> Dict[str, Any]:
        velocity = agent.velocity
        rotation_y, rotation_x = kinematics.orientation(agent)
        return {
            "id": agent.id,
            "role": agent.role.value,
            "x": agent.position.x,
            "y": agent.position.y,
            "z": agent.position.z,
            "vx": velocity.x,
            "vy": velocity.y,
            "vz": velocity.z,
            "speed": math.sqrt(velocity.x * velocity.x + velocity.y * velocity.y + velocity.z * velocity.z),
            "rotation_y": rotation_y,
            "rotation_x": rotation_x,
            "eaten": agent.eaten,
        }

    @staticmethod
    def _particle_snapshot(particle: TargetParticle) -> Dict[str, Any]:
        return {
            "id": particle.id,
            "kind": particle.kind.value,
            "x": particle.position.x,
            "y": particle.position.y,
            "z": particle.position.z,
        }

    def _snapshot_metrics_from_state(self, tick: int) -> TickMetrics:
        return metrics_system.create_metrics(
            tick,
            self._boids,
            self._predators,
            len(self._foods),
            len(self._poisons),
            0,
            0,
            0.0,
        )

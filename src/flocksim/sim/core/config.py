from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

import yaml

SCENARIOS = ("flocking", "foraging")
NEIGHBOR_INDEXES = ("brute", "grid")


@dataclass
class PlaneConfig:
    width: float = 300.0
    depth: float = 300.0

    @property
    def half_width(self) -> float:
        return self.width / 2

    @property
    def half_depth(self) -> float:
        return self.depth / 2


@dataclass
class FlockConfig:
    align: float = 1.0
    cohere: float = 1.0
    separate: float = 1.0


@dataclass
class VisionConfig:
    align_perception: float = 100.0
    cohere_perception: float = 100.0
    separate_perception: float = 100.0


@dataclass
class BoidConfig:
    max_speed: float = 20.0
    min_speed: float = 0.0
    max_force: float = 0.1
    min_force: float = 0.0
    initial_speed_min: float = 2.0
    initial_speed_max: float = 4.0


@dataclass
class ForagingConfig:
    predator_count: int = 1
    food_count: int = 20
    poison_count: int = 20
    # The predator always steers at full force.
    predator_max_force: float = 0.5
    predator_min_force: float = 0.5
    consumption_radius: float = 3.0
    eat_poison: bool = False


@dataclass
class SimulationConfig:
    scenario: str = "flocking"
    seed: int = 42
    boid_count: int = 200
    time_step: float = 1.0 / 60.0
    neighbor_index: str = "brute"
    grid_cell_size: float = 25.0
    config_version: str = "v1"
    plane: PlaneConfig = field(default_factory=PlaneConfig)
    flock: FlockConfig = field(default_factory=FlockConfig)
    vision: VisionConfig = field(default_factory=VisionConfig)
    boid: BoidConfig = field(default_factory=BoidConfig)
    foraging: ForagingConfig = field(default_factory=ForagingConfig)

    @staticmethod
    def from_yaml(path: Path) -> "SimulationConfig":
        data = yaml.safe_load(Path(path).read_text())
        return load_config(data or {})


@dataclass(frozen=True)
class RuleParams:
    """Per-tick, read-only view of the tunables every steering rule consults."""

    align_weight: float
    cohere_weight: float
    separate_weight: float
    align_perception: float
    cohere_perception: float
    separate_perception: float
    half_width: float
    half_depth: float
    consumption_radius: float

    @property
    def max_perception(self) -> float:
        return max(self.align_perception, self.cohere_perception, self.separate_perception)

    @staticmethod
    def from_config(config: SimulationConfig) -> "RuleParams":
        return RuleParams(
            align_weight=config.flock.align,
            cohere_weight=config.flock.cohere,
            separate_weight=config.flock.separate,
            align_perception=config.vision.align_perception,
            cohere_perception=config.vision.cohere_perception,
            separate_perception=config.vision.separate_perception,
            half_width=config.plane.half_width,
            half_depth=config.plane.half_depth,
            consumption_radius=config.foraging.consumption_radius,
        )


def load_config(raw: dict) -> SimulationConfig:
    if not isinstance(raw, dict):
        raise ValueError(f"Configuration must be a mapping, got {type(raw).__name__}")
    plane = PlaneConfig(**raw.get("plane", {}))
    flock = FlockConfig(**raw.get("flock", {}))
    vision = VisionConfig(**raw.get("vision", {}))
    boid = BoidConfig(**raw.get("boid", {}))
    foraging = ForagingConfig(**raw.get("foraging", {}))
    sim_values = {k: v for k, v in raw.items() if k not in {"plane", "flock", "vision", "boid", "foraging"}}
    config = SimulationConfig(plane=plane, flock=flock, vision=vision, boid=boid, foraging=foraging, **sim_values)
    if config.scenario not in SCENARIOS:
        raise ValueError(f"Unknown scenario: {config.scenario}")
    if config.neighbor_index not in NEIGHBOR_INDEXES:
        raise ValueError(f"Unknown neighbor index: {config.neighbor_index}")
    return config

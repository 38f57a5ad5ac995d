from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List

from .metrics import TickMetrics


@dataclass(slots=True)
class Snapshot:
    tick: int
    metrics: TickMetrics
    agents: List[Dict[str, Any]]
    particles: List[Dict[str, Any]]
    world: "SnapshotWorld"
    metadata: "SnapshotMetadata"


@dataclass(slots=True)
class SnapshotWorld:
    width: float
    depth: float


@dataclass(slots=True)
class SnapshotMetadata:
    scenario: str
    sim_dt: float
    tick_rate: float
    seed: int
    config_version: str
    neighbor_index: str

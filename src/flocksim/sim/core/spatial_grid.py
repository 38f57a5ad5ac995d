from __future__ import annotations

import math
from typing import TYPE_CHECKING, Dict, List, Tuple

from pygame.math import Vector3

if TYPE_CHECKING:
    from .agent import Boid


class SpatialGrid:
    """Buckets agents by their X/Z cell so neighbor queries skip far-away cells.

    Query results are ordered by agent id, matching the order of a full scan over
    an id-ordered agent list, so rules that average over neighbors give identical results.
    """

    def __init__(self, cell_size: float) -> None:
        if cell_size <= 0.0:
            raise ValueError(f"cell_size must be positive, got {cell_size}")
        self._cell_size = cell_size
        self._cells: Dict[Tuple[int, int], List["Boid"]] = {}
        self._active_keys: List[Tuple[int, int]] = []

    def clear(self) -> None:
        for key in self._active_keys:
            bucket = self._cells.get(key)
            if bucket:
                bucket.clear()
        self._active_keys.clear()

    def insert(self, agent: "Boid") -> None:
        key = self._cell_key(agent.position)
        bucket = self._cells.get(key)
        if bucket is None:
            bucket = []
            self._cells[key] = bucket
            self._active_keys.append(key)
        elif not bucket:
            # Bucket exists but was cleared at the start of this tick; mark it active again.
            self._active_keys.append(key)
        bucket.append(agent)

    def collect_neighbors(self, position: Vector3, radius: float, out_agents: List["Boid"]) -> None:
        """
        Fill ``out_agents`` with every agent whose distance to ``position`` is at most ``radius``.

        The agent at ``position`` itself is included; steering rules drop zero-distance entries.
        """

        out_agents.clear()
        base_key = self._cell_key(position)
        cell_range = int(math.ceil(radius / self._cell_size))
        radius_sq = radius * radius
        pos_x = position.x
        pos_y = position.y
        pos_z = position.z
        cells = self._cells
        append_agent = out_agents.append

        for dx in range(-cell_range, cell_range + 1):
            for dz in range(-cell_range, cell_range + 1):
                bucket = cells.get((base_key[0] + dx, base_key[1] + dz))
                if not bucket:
                    continue
                for agent in bucket:
                    pos = agent.position
                    offset_x = pos.x - pos_x
                    offset_y = pos.y - pos_y
                    offset_z = pos.z - pos_z
                    if offset_x * offset_x + offset_y * offset_y + offset_z * offset_z <= radius_sq:
                        append_agent(agent)

        out_agents.sort(key=lambda agent: agent.id)

    def _cell_key(self, position: Vector3) -> Tuple[int, int]:
        return (int(position.x // self._cell_size), int(position.z // self._cell_size))

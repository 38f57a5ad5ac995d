from __future__ import annotations

import math
import random

from pygame.math import Vector3


class DeterministicRng:
    def __init__(self, seed: int):
        self._seed = seed
        self._random = random.Random(seed)

    def reset(self) -> None:
        self._random.seed(self._seed)

    def next_range(self, low: float, high: float) -> float:
        return self._random.uniform(low, high)

    def next_plane_point(self, width: float, depth: float) -> Vector3:
        return Vector3(
            self.next_range(-width / 2, width / 2),
            0.0,
            self.next_range(-depth / 2, depth / 2),
        )

    def next_plane_direction(self) -> Vector3:
        angle = self._random.uniform(0, 2 * math.pi)
        return Vector3(math.sin(angle), 0.0, math.cos(angle))

from __future__ import annotations

import math

from pygame.math import Vector3


def safe_normalize(vector: Vector3) -> Vector3:
    magnitude_sq = vector.length_squared()
    if magnitude_sq <= 0.0:
        return Vector3()
    inv = 1.0 / math.sqrt(magnitude_sq)
    return Vector3(vector.x * inv, vector.y * inv, vector.z * inv)


def clamp_length(vector: Vector3, min_length: float, max_length: float) -> Vector3:
    """Return a copy of ``vector`` with its magnitude clamped into [min_length, max_length].

    A zero vector has no direction and stays zero.
    """

    magnitude_sq = vector.length_squared()
    if magnitude_sq <= 0.0:
        return Vector3()
    magnitude = math.sqrt(magnitude_sq)
    target = _clamp_value(magnitude, min_length, max_length)
    if target == magnitude:
        return Vector3(vector)
    scale = target / magnitude
    return Vector3(vector.x * scale, vector.y * scale, vector.z * scale)


def distance(a: Vector3, b: Vector3) -> float:
    dx = a.x - b.x
    dy = a.y - b.y
    dz = a.z - b.z
    return math.sqrt(dx * dx + dy * dy + dz * dz)


def heading_angles(velocity: Vector3) -> tuple[float, float]:
    """Rotation about the vertical axis and about the lateral axis for a cone pointing along ``velocity``."""

    horizontal = math.hypot(velocity.x, velocity.z)
    rotation_y = math.atan2(velocity.x, velocity.z) + math.pi
    rotation_x = math.atan2(velocity.y, horizontal) - math.pi / 2
    return rotation_y, rotation_x


def _clamp_value(value: float, min_value: float, max_value: float) -> float:
    return max(min_value, min(max_value, value))

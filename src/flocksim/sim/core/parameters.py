"""Named, range-constrained tunables that may change between ticks.

Each parameter maps a dotted name onto a field of :class:`SimulationConfig`.
Values outside the declared range are clamped rather than rejected.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, Mapping

from ..utils.math3d import _clamp_value
from .config import SimulationConfig

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ParameterSpec:
    name: str
    section: str
    attribute: str
    low: float
    high: float
    step: float
    label: str

    def clamp(self, value: float) -> float:
        return _clamp_value(float(value), self.low, self.high)


PARAMETERS: Dict[str, ParameterSpec] = {
    spec.name: spec
    for spec in (
        ParameterSpec("flock.align", "flock", "align", 0.0, 1.0, 0.1, "Align"),
        ParameterSpec("flock.cohere", "flock", "cohere", 0.0, 1.0, 0.1, "Cohere"),
        ParameterSpec("flock.separate", "flock", "separate", 0.0, 1.0, 0.1, "Separate"),
        ParameterSpec("vision.align_perception", "vision", "align_perception", 10.0, 100.0, 1.0, "Aligner Perception"),
        ParameterSpec("vision.cohere_perception", "vision", "cohere_perception", 10.0, 100.0, 1.0, "Coherer Perception"),
        ParameterSpec(
            "vision.separate_perception", "vision", "separate_perception", 10.0, 100.0, 1.0, "Separator Perception"
        ),
        ParameterSpec("plane.width", "plane", "width", 50.0, 300.0, 1.0, "Width"),
        ParameterSpec("plane.depth", "plane", "depth", 50.0, 300.0, 1.0, "Depth"),
        ParameterSpec("boid.max_speed", "boid", "max_speed", 0.0, 50.0, 0.5, "Max Speed"),
        ParameterSpec("boid.min_speed", "boid", "min_speed", 0.0, 50.0, 0.5, "Min Speed"),
        ParameterSpec("boid.max_force", "boid", "max_force", 0.0, 5.0, 0.01, "Max Force"),
        ParameterSpec("boid.min_force", "boid", "min_force", 0.0, 5.0, 0.01, "Min Force"),
        ParameterSpec("predator.max_force", "foraging", "predator_max_force", 0.0, 5.0, 0.01, "Predator Max Force"),
        ParameterSpec("predator.min_force", "foraging", "predator_min_force", 0.0, 5.0, 0.01, "Predator Min Force"),
        ParameterSpec(
            "foraging.consumption_radius", "foraging", "consumption_radius", 0.5, 20.0, 0.5, "Consumption Radius"
        ),
    )
}

# (lower, upper) parameter pairs kept ordered by apply_updates.
BOUND_PAIRS = (
    ("boid.min_speed", "boid.max_speed"),
    ("boid.min_force", "boid.max_force"),
    ("predator.min_force", "predator.max_force"),
)


def current_values(config: SimulationConfig) -> Dict[str, float]:
    return {name: float(getattr(getattr(config, spec.section), spec.attribute)) for name, spec in PARAMETERS.items()}


def describe(config: SimulationConfig) -> Dict[str, Dict[str, Any]]:
    values = current_values(config)
    return {
        name: {
            "value": values[name],
            "min": spec.low,
            "max": spec.high,
            "step": spec.step,
            "label": spec.label,
        }
        for name, spec in PARAMETERS.items()
    }


def apply_updates(config: SimulationConfig, updates: Mapping[str, Any]) -> Dict[str, float]:
    """Write clamped values into ``config`` and return what was actually applied.

    Unknown names are skipped. A value that cannot be read as a number raises ``ValueError``
    before anything is written.
    """

    pending: Dict[str, float] = {}
    for name, raw_value in updates.items():
        spec = PARAMETERS.get(name)
        if spec is None:
            logger.warning("Ignoring unknown parameter %r", name)
            continue
        try:
            pending[name] = spec.clamp(raw_value)
        except TypeError as exc:
            raise ValueError(f"Parameter {name} expects a number, got {raw_value!r}") from exc

    for name, value in pending.items():
        spec = PARAMETERS[name]
        setattr(getattr(config, spec.section), spec.attribute, value)
        logger.debug("Parameter %s set to %s", name, value)

    # A lower bound never ends up above its upper bound, whichever side was written.
    for low_name, high_name in BOUND_PAIRS:
        if low_name not in pending and high_name not in pending:
            continue
        low_spec = PARAMETERS[low_name]
        high_spec = PARAMETERS[high_name]
        low_section = getattr(config, low_spec.section)
        high_value = getattr(getattr(config, high_spec.section), high_spec.attribute)
        if getattr(low_section, low_spec.attribute) > high_value:
            setattr(low_section, low_spec.attribute, high_value)
            pending[low_name] = high_value
            logger.debug("Parameter %s pulled down to %s to stay below %s", low_name, high_value, high_name)
    return pending

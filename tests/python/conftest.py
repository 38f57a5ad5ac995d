import sys
from pathlib import Path

import pytest
from pygame.math import Vector3

ROOT = Path(__file__).resolve().parents[2]
src_root = ROOT / "src"
if str(src_root) not in sys.path:
    sys.path.insert(0, str(src_root))

from flocksim.sim.core.agent import Boid  # noqa: E402
from flocksim.sim.core.config import RuleParams  # noqa: E402


@pytest.fixture
def make_boid():
    def _make(
        agent_id: int = 0,
        position: tuple[float, float, float] = (0.0, 0.0, 0.0),
        velocity: tuple[float, float, float] = (0.0, 0.0, 0.0),
        **limits: float,
    ) -> Boid:
        return Boid(id=agent_id, position=Vector3(position), velocity=Vector3(velocity), **limits)

    return _make


@pytest.fixture
def rule_params():
    def _make(**overrides: float) -> RuleParams:
        values = dict(
            align_weight=1.0,
            cohere_weight=1.0,
            separate_weight=1.0,
            align_perception=100.0,
            cohere_perception=100.0,
            separate_perception=100.0,
            half_width=150.0,
            half_depth=150.0,
            consumption_radius=3.0,
        )
        values.update(overrides)
        return RuleParams(**values)

    return _make

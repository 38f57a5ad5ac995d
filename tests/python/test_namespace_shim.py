import os
import subprocess
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[2]


def _run_from_checkout(code: str) -> list[str]:
    env = os.environ.copy()
    env.pop("PYTHONPATH", None)
    env.setdefault("PYGAME_HIDE_SUPPORT_PROMPT", "1")
    proc = subprocess.run(
        [sys.executable, "-c", code],
        cwd=REPO_ROOT,
        env=env,
        capture_output=True,
        text=True,
    )
    assert proc.returncode == 0, proc.stderr
    return proc.stdout.strip().splitlines()


def test_repo_imports_without_editable_install():
    stdout = _run_from_checkout("import flocksim.headless; print(flocksim.headless.__file__)")
    assert stdout, "flocksim.headless path not printed"

    output_path = Path(stdout[-1]).resolve()
    expected_path = (REPO_ROOT / "src" / "flocksim" / "headless.py").resolve()
    assert output_path.samefile(expected_path)


def test_simulation_core_resolves_through_the_shim():
    code = (
        "import flocksim\n"
        "from flocksim.sim.core import world\n"
        "from flocksim.sim.core.config import SimulationConfig\n"
        "w = world.World(SimulationConfig(boid_count=2))\n"
        "w.step(0)\n"
        "print(len(w.boids))\n"
        "print(world.__file__)\n"
        "print(flocksim.__file__)\n"
    )
    boid_count, world_file, shim_file = _run_from_checkout(code)[-3:]

    assert boid_count == "2"
    assert Path(world_file).samefile(REPO_ROOT / "src" / "flocksim" / "sim" / "core" / "world.py")
    # The package itself is the root shim, so the src tree is reached through its __path__.
    assert Path(shim_file).samefile(REPO_ROOT / "flocksim" / "__init__.py")

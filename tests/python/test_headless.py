import csv
import json

import pytest

from flocksim.headless import run_headless


def _read_csv(path):
    with path.open(newline="") as handle:
        return list(csv.reader(handle))


def _small_config(tmp_path, body: str):
    path = tmp_path / "sim.yaml"
    path.write_text(body)
    return path


def test_headless_basic_log_header(tmp_path):
    log_path = tmp_path / "basic.csv"
    config_path = _small_config(tmp_path, "boid_count: 10\n")
    run_headless(steps=2, seed=1, log_path=log_path, deterministic_log=True, log_format="basic", config_path=config_path)
    rows = _read_csv(log_path)
    assert len(rows) == 3
    assert rows[0] == [
        "tick",
        "boids",
        "predators",
        "food_remaining",
        "poison_remaining",
        "eaten",
        "neighbor_checks",
        "avg_speed",
        "tick_ms",
    ]
    assert rows[1][1] == "10"
    assert rows[1][6] == "100"


def test_headless_detailed_log_ratios(tmp_path):
    log_path = tmp_path / "detailed.csv"
    config_path = _small_config(tmp_path, "boid_count: 8\nflock:\n  align: 1.0\n")
    run_headless(steps=3, seed=2, log_path=log_path, deterministic_log=True, config_path=config_path)
    rows = _read_csv(log_path)
    assert len(rows) == 4
    header = rows[0]
    idx = {name: i for i, name in enumerate(header)}
    for key in ["neighbor_checks_per_agent", "tick_ms_per_agent", "centroid_x", "centroid_z", "spread", "heading_order"]:
        assert key in idx

    first_row = rows[1]
    boids = int(first_row[idx["boids"]])
    neighbor_checks = int(first_row[idx["neighbor_checks"]])
    assert float(first_row[idx["neighbor_checks_per_agent"]]) == pytest.approx(neighbor_checks / boids, abs=1e-4)
    assert float(first_row[idx["tick_ms"]]) == 0.0
    assert 0.0 <= float(first_row[idx["heading_order"]]) <= 1.0 + 1e-4


def test_headless_is_deterministic(tmp_path):
    config_path = _small_config(tmp_path, "boid_count: 12\n")
    first = tmp_path / "a.csv"
    second = tmp_path / "b.csv"
    run_headless(steps=5, seed=9, log_path=first, deterministic_log=True, config_path=config_path)
    run_headless(steps=5, seed=9, log_path=second, deterministic_log=True, config_path=config_path)
    assert first.read_text() == second.read_text()


def test_headless_foraging_summary(tmp_path):
    summary_path = tmp_path / "summary.json"
    world = run_headless(
        steps=4,
        seed=3,
        log_path=None,
        deterministic_log=True,
        log_format="basic",
        summary_path=summary_path,
        summary_window=2,
        scenario="foraging",
    )
    payload = json.loads(summary_path.read_text())
    assert payload["steps"] == 4
    assert payload["seed"] == 3
    assert payload["scenario"] == "foraging"
    assert payload["tail_window"]["window"] == 2
    assert payload["eaten_total"] == world.eaten_total
    assert payload["food_remaining"]["max"] <= 20
    assert len(world.predators) == 1


def test_headless_rejects_unknown_options(tmp_path):
    with pytest.raises(ValueError):
        run_headless(steps=1, seed=1, log_path=None, log_format="verbose", scenario="foraging")
    with pytest.raises(ValueError):
        run_headless(steps=1, seed=1, log_path=None, scenario="herding")

"""Tests for JSON and CSV export."""

import csv
import json

from gym_forecast.engine import simulate
from gym_forecast.output import ROW_FIELDS, result_to_dict, snapshot_rows, write_csv, write_json
from gym_forecast.simulation_config import (
    EdvdJumpConfig,
    LossReviveConfig,
    SimulationConfiguration,
    StatValues,
)
from gym_forecast.presets import DEFAULT_PRICES
from gym_forecast.venues import GYMS


def _result():
    config = SimulationConfiguration(
        end_day=14,
        initial_stats=StatValues.uniform(10_000),
        edvd_jump=EdvdJumpConfig(frequency_days=7),
        loss_revive=LossReviveConfig(days_between=5),
        item_prices=DEFAULT_PRICES,
    )
    return config, simulate(GYMS, config)


def test_result_to_dict_shape():
    config, result = _result()
    data = result_to_dict(result, config.initial_stats.to_vector())
    assert set(data) == {
        "final_stats", "final_energy_spent", "section_boundaries", "features", "snapshots", "initial_stats",
    }
    assert data["initial_stats"]["strength"] == 10_000
    assert len(data["snapshots"]) == 14
    assert data["features"]["edvd_jump"]["occurrences"] == 2
    assert data["features"]["loss_revive"]["total_income"] == 2 * 10_000_000
    assert "xanax_cost" in data["features"]


def test_drift_exported():
    config = SimulationConfiguration(
        end_day=10,
        initial_stats=StatValues(strength=1_000_000, speed=10_000, defense=10_000, dexterity=10_000),
        stat_drift_percent=50,
    )
    data = result_to_dict(simulate(GYMS, config))
    assert data["drift"]["computed_on"] == 8
    assert data["drift"]["weights"]["speed"] > data["drift"]["weights"]["strength"]


def test_jump_sessions_exported():
    _, result = _result()
    data = result_to_dict(result)
    day7 = data["snapshots"][6]
    assert day7["events"] == ["edvd_jump"]
    assert [s["kind"] for s in day7["sessions"]] == ["edvd_jump", "regular"]
    assert day7["sessions"][0]["training"][0]["venue"]


def test_stats_rounded_for_display():
    _, result = _result()
    data = result_to_dict(result)
    for value in data["final_stats"].values():
        assert value == int(value)


def test_write_json(tmp_path):
    config, result = _result()
    path = tmp_path / "result.json"
    assert write_json(result, path, config.initial_stats.to_vector()) == 14
    loaded = json.loads(path.read_text())
    assert loaded["snapshots"][0]["day"] == 1


def test_snapshot_rows():
    _, result = _result()
    rows = snapshot_rows(result)
    assert len(rows) == 14
    assert all(set(row) == set(ROW_FIELDS) for row in rows)
    assert rows[0]["session"] == "day"


def test_per_session_rows():
    _, result = _result()
    rows = snapshot_rows(result, per_session=True)
    day7 = [row for row in rows if row["day"] == 7]
    assert [row["session"] for row in day7] == ["edvd_jump", "regular"]
    assert day7[0]["happy"] == (5025 + 2500) * 2


def test_write_csv(tmp_path):
    _, result = _result()
    path = tmp_path / "days.csv"
    assert write_csv(snapshot_rows(result), path) == 14
    with path.open() as f:
        rows = list(csv.DictReader(f))
    assert rows[0]["day"] == "1"
    assert list(rows[0]) == ROW_FIELDS

"""Tests for chained multi-section simulations."""

import pytest

from gym_forecast.engine import simulate
from gym_forecast.errors import InvalidConfiguration
from gym_forecast.models import STAT_ORDER, FeatureKind
from gym_forecast.sections import simulate_chained, validate_sections
from gym_forecast.simulation_config import EdvdJumpConfig, SimulationConfiguration, StatValues
from gym_forecast.venues import GYMS


def _section(start: int, end: int, **overrides) -> SimulationConfiguration:
    defaults = dict(
        name=f"days {start}-{end}",
        start_day=start,
        end_day=end,
        initial_stats=StatValues.uniform(10_000),
    )
    defaults.update(overrides)
    return SimulationConfiguration(**defaults)


class TestValidateSections:
    def test_orders_by_start_day(self):
        ordered = validate_sections([_section(16, 30), _section(1, 15)])
        assert [s.start_day for s in ordered] == [1, 16]

    def test_empty(self):
        with pytest.raises(InvalidConfiguration, match="At least one section"):
            validate_sections([])

    def test_must_start_on_day_one(self):
        with pytest.raises(InvalidConfiguration, match="must start on day 1"):
            validate_sections([_section(2, 30)])

    def test_gap(self):
        with pytest.raises(InvalidConfiguration, match="Gap between sections: days 16-19"):
            validate_sections([_section(1, 15), _section(20, 30)])

    def test_overlap(self):
        with pytest.raises(InvalidConfiguration, match="overlap"):
            validate_sections([_section(1, 15), _section(10, 30)])

    def test_total_days(self):
        validate_sections([_section(1, 15), _section(16, 30)], total_days=30)
        with pytest.raises(InvalidConfiguration, match="covers 60 days"):
            validate_sections([_section(1, 15), _section(16, 30)], total_days=60)


class TestChaining:
    def test_matches_single_run(self):
        chained = simulate_chained(GYMS, [_section(1, 15), _section(16, 30)])
        single = simulate(GYMS, _section(1, 30))
        for stat in STAT_ORDER:
            assert chained.final_stats.get(stat) == pytest.approx(single.final_stats.get(stat))
        assert chained.final_energy_spent == single.final_energy_spent

    def test_drift_carries_across_sections(self):
        lopsided = StatValues(strength=1_000_000, speed=10_000, defense=10_000, dexterity=10_000)
        drift = dict(initial_stats=lopsided, stat_drift_percent=100, drift_cadence_days=30)
        single = simulate(GYMS, _section(1, 30, **drift))
        chained = simulate_chained(GYMS, [_section(1, 15, **drift), _section(16, 30, **drift)])
        for stat in STAT_ORDER:
            assert chained.final_stats.get(stat) == pytest.approx(single.final_stats.get(stat))
        assert chained.final_energy_spent == single.final_energy_spent
        assert chained.drift == single.drift
        assert chained.drift.computed_on == 1

    def test_changed_drift_settings_recompute(self):
        lopsided = StatValues(strength=1_000_000, speed=10_000, defense=10_000, dexterity=10_000)
        first = _section(1, 15, initial_stats=lopsided, stat_drift_percent=100, drift_cadence_days=30)
        second = _section(16, 30, stat_drift_percent=50, drift_cadence_days=30)
        result = simulate_chained(GYMS, [first, second])
        assert result.drift.computed_on == 16

    def test_boundaries_and_snapshots(self):
        result = simulate_chained(GYMS, [_section(1, 10), _section(11, 20), _section(21, 30)])
        assert result.section_boundaries == [10, 20, 30]
        assert [s.day for s in result.snapshots] == list(range(1, 31))

    def test_later_initial_stats_ignored(self):
        first = _section(1, 15)
        second = _section(16, 30, initial_stats=StatValues.uniform(1))
        result = simulate_chained(GYMS, [first, second])
        boundary = next(s for s in result.snapshots if s.day == 15)
        day16 = next(s for s in result.snapshots if s.day == 16)
        assert day16.stats.total() > boundary.stats.total()

    def test_sections_change_weights(self):
        speed_only = StatValues(strength=0, speed=1, defense=0, dexterity=0)
        result = simulate_chained(GYMS, [_section(1, 15), _section(16, 30, weights=speed_only)])
        boundary = next(s for s in result.snapshots if s.day == 15)
        assert result.final_stats.strength == boundary.stats.strength
        assert result.final_stats.speed > boundary.stats.speed

    def test_features_merged(self):
        edvd = EdvdJumpConfig(frequency_days=7)
        result = simulate_chained(GYMS, [_section(1, 15, edvd_jump=edvd), _section(16, 30, edvd_jump=edvd)])
        days = [s.day for s in result.snapshots if FeatureKind.EDVD_JUMP in s.events]
        assert days == [7, 14, 22, 29]
        assert result.features[FeatureKind.EDVD_JUMP].occurrences == 4

    def test_feature_only_in_one_section(self):
        edvd = EdvdJumpConfig(frequency_days=7)
        result = simulate_chained(GYMS, [_section(1, 15), _section(16, 30, edvd_jump=edvd)])
        assert result.features[FeatureKind.EDVD_JUMP].occurrences == 2

    def test_bad_section_fails_before_running(self):
        sections = [_section(1, 15), _section(16, 30, locked_venue="nowhere")]
        with pytest.raises(InvalidConfiguration, match="Unknown locked venue"):
            simulate_chained(GYMS, sections)

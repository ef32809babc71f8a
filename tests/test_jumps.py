"""Unit tests for the jump and boost events."""

import pytest

from gym_forecast.items import energy_item_energy
from gym_forecast.jumps import (
    CandyJump,
    EdvdJump,
    EnergyJump,
    JumpEffect,
    LossRevive,
    StackedCandyJump,
    near_any,
)
from gym_forecast.jumps.base import next_free_day
from gym_forecast.jumps.candy import candy_happy
from gym_forecast.models import FeatureKind, IncomeResult, ProgressionState, SessionKind, Stat, StatVector
from gym_forecast.simulation_config import (
    CandyJumpConfig,
    EdvdJumpConfig,
    EnergyJumpConfig,
    ItemPrices,
    LossReviveConfig,
    StackedCandyJumpConfig,
)

PRICES = ItemPrices(
    dvd=4_000_000,
    xanax=830_000,
    ecstasy=60_000,
    points=45_000,
    candy={310: 1_000},
    energy_items={985: 30_000},
)


def _state(day: int = 1, stats: StatVector | None = None, weights: dict | None = None) -> ProgressionState:
    return ProgressionState(
        day=day,
        section_day=day,
        stats=stats or StatVector(1000, 1000, 1000, 1000),
        energy_spent=0.0,
        weights=weights or {stat: 1.0 for stat in Stat},
    )


def _edvd(**overrides) -> EdvdJump:
    options = dict(happy=5025, max_energy=150, xanax_per_day=3, prices=PRICES)
    config = overrides.pop("config", EdvdJumpConfig(frequency_days=7))
    options.update(overrides)
    return EdvdJump(config, **options)


class TestScheduling:
    def test_next_free_day(self):
        assert next_free_day(5, lambda day: False) == 5
        assert next_free_day(5, lambda day: day < 8) == 8

    def test_near_any_blocks_neighbours(self):
        near = near_any([20])
        assert [day for day in range(17, 24) if near(day)] == [19, 20, 21]

    def test_first_jump_on_frequency_day(self):
        assert _edvd().scheduled_day() == 7

    def test_first_jump_avoids_conflicts(self):
        assert _edvd(conflicts=near_any([7])).scheduled_day() == 9

    def test_record_advances(self):
        jump = _edvd()
        jump.record(7, JumpEffect(cost=1.0), None)
        assert jump.scheduled_day() == 14

    def test_defer_moves_to_next_day(self):
        jump = _edvd()
        jump.defer(7)
        assert jump.scheduled_day() == 8
        # deferring a day that is not scheduled does nothing
        jump.defer(3)
        assert jump.scheduled_day() == 8

    def test_count_limit(self):
        jump = _edvd(config=EdvdJumpConfig(frequency_days=7, limit="count", count=2))
        for day in (7, 14):
            assert jump.should_fire(day, _state(day))
            jump.record(day, jump.effect(day, _state(day)), StatVector())
        assert jump.scheduled_day() is None
        assert not jump.should_fire(21, _state(21))

    def test_stat_limit_trains_only_lagging_stats(self):
        jump = _edvd(config=EdvdJumpConfig(frequency_days=7, limit="stat", stat_target=2000))
        state = _state(7, stats=StatVector(strength=3000, speed=1000, defense=1000, dexterity=1000))
        assert jump.should_fire(7, state)
        assert jump.effect(7, state).stats_to_train == frozenset({Stat.SPEED, Stat.DEFENSE, Stat.DEXTERITY})

    def test_stat_limit_stops_when_reached(self):
        jump = _edvd(config=EdvdJumpConfig(frequency_days=7, limit="stat", stat_target=2000))
        state = _state(7, stats=StatVector(3000, 3000, 3000, 3000))
        assert not jump.should_fire(7, state)
        assert jump.scheduled_day() is None

    def test_stat_limit_ignores_unweighted_stats(self):
        jump = _edvd(config=EdvdJumpConfig(frequency_days=7, limit="stat", stat_target=2000))
        weights = {Stat.STRENGTH: 1.0, Stat.SPEED: 0.0, Stat.DEFENSE: 0.0, Stat.DEXTERITY: 0.0}
        state = _state(7, stats=StatVector(3000, 10, 10, 10), weights=weights)
        assert not jump.should_fire(7, state)


class TestEdvdJump:
    def test_happy(self):
        assert _edvd().jump_happy == (5025 + 2500) * 2

    def test_adult_novelties_doubles_dvd_happy(self):
        jump = _edvd(config=EdvdJumpConfig(frequency_days=7, dvds_used=2, adult_novelties=True))
        assert jump.jump_happy == (5025 + 10_000) * 2

    def test_cost(self):
        assert _edvd().cost_per_jump() == 4_000_000 + 4 * 830_000 + 60_000

    def test_cost_unknown_without_prices(self):
        assert _edvd(prices=None).cost_per_jump() is None
        assert _edvd(prices=ItemPrices(dvd=1)).cost_per_jump() is None

    def test_effect(self):
        effect = _edvd().effect(7, _state(7))
        assert effect.session_kind == SessionKind.EDVD_JUMP
        assert effect.session_energy == 1150
        assert effect.replaces_energy == 610
        assert "1 DVD" in effect.notes[0]

    def test_result_accumulates(self):
        jump = _edvd()
        jump.record(7, jump.effect(7, _state(7)), StatVector(10, 20, 30, 40))
        jump.record(14, jump.effect(14, _state(14)), StatVector(10, 20, 30, 40))
        result = jump.result()
        assert result.kind == FeatureKind.EDVD_JUMP
        assert result.occurrences == 2
        assert result.total_cost == pytest.approx(2 * 7_380_000)
        assert result.average_gains == StatVector(10, 20, 30, 40)

    def test_missing_price_makes_total_unknown(self):
        jump = _edvd(prices=None)
        jump.record(7, jump.effect(7, _state(7)), StatVector())
        assert jump.result().total_cost is None


class TestCandyJump:
    def _jump(self, config: CandyJumpConfig, has_refill: bool = False, energy_item_energy: float = 0.0):
        return CandyJump(
            config, happy=5025, max_energy=150, has_refill=has_refill,
            energy_item_energy=energy_item_energy, prices=PRICES,
        )

    def test_candy_happy_with_faction(self):
        assert candy_happy(151, 10, 50) == 150 * 1.5 * 10

    def test_happy(self):
        assert self._jump(CandyJumpConfig()).jump_happy == 5025 + 25 * 48

    def test_ecstasy_doubles(self):
        assert self._jump(CandyJumpConfig(drug_used="ecstasy")).jump_happy == (5025 + 1200) * 2

    def test_session_energy(self):
        assert self._jump(CandyJumpConfig()).session_energy == 150
        assert self._jump(CandyJumpConfig(use_point_refill=True)).session_energy == 300
        assert self._jump(CandyJumpConfig(drug_used="xanax")).session_energy == 400
        assert self._jump(CandyJumpConfig(), energy_item_energy=120).session_energy == 270

    def test_extra_energy(self):
        jump = self._jump(CandyJumpConfig(drug_used="xanax", use_point_refill=True))
        assert jump.extra_energy == 250 + 150
        included = self._jump(CandyJumpConfig(drug_used="xanax", drug_already_included=True), has_refill=True)
        assert included.extra_energy == 0

    def test_frequency(self):
        jump = self._jump(CandyJumpConfig(frequency_days=3))
        assert [day for day in range(1, 11) if jump.should_fire(day, _state(day))] == [1, 4, 7, 10]

    def test_cost(self):
        assert self._jump(CandyJumpConfig()).cost_per_day() == 48_000
        assert self._jump(CandyJumpConfig(drug_used="ecstasy")).cost_per_day() == 48_000 + 60_000
        assert self._jump(CandyJumpConfig(drug_used="ecstasy", drug_already_included=True)).cost_per_day() == 48_000

    def test_cost_unknown_for_unpriced_candy(self):
        assert self._jump(CandyJumpConfig(item_id=151)).cost_per_day() is None


class TestStackedCandyJump:
    def test_happy_and_cost(self):
        jump = StackedCandyJump(
            StackedCandyJumpConfig(frequency_days=14),
            happy=5025, max_energy=150, xanax_per_day=3, prices=PRICES,
        )
        assert jump.jump_happy == (5025 + 1200) * 2
        assert jump.cost_per_jump() == 48_000 + 4 * 830_000 + 60_000
        assert jump.scheduled_day() == 14
        assert jump.effect(14, _state(14)).session_kind == SessionKind.STACKED_CANDY_JUMP


class TestEnergyJump:
    def test_energy(self):
        jump = EnergyJump(EnergyJumpConfig(), max_energy=150, prices=PRICES)
        assert jump.energy == 5 * 24
        assert jump.cost_per_day() == 24 * 30_000

    def test_faction_boost(self):
        jump = EnergyJump(EnergyJumpConfig(faction_benefit_percent=50), max_energy=150)
        assert jump.energy == pytest.approx(180)
        assert jump.cost_per_day() is None

    def test_full_bar_items(self):
        assert energy_item_energy(367, 2, 0, 100) == 200

    def test_fires_every_day(self):
        jump = EnergyJump(EnergyJumpConfig(), max_energy=150)
        assert all(jump.should_fire(day, _state(day)) for day in range(1, 10))
        assert jump.effect(1, _state()).bonus_energy == 120


class TestLossRevive:
    def test_schedule(self):
        event = LossRevive(LossReviveConfig(days_between=7))
        assert not event.should_fire(6, _state(6))
        assert event.should_fire(7, _state(7))

    def test_late_occurrence_restarts_interval(self):
        event = LossRevive(LossReviveConfig(days_between=7))
        event.record(8, event.effect(8, _state(8)), None)
        assert not event.should_fire(14, _state(14))
        assert event.should_fire(15, _state(15))

    def test_result(self):
        event = LossRevive(LossReviveConfig(number_per_day=2, energy_cost=25, price_per_loss=1_000_000))
        effect = event.effect(7, _state(7))
        assert effect.energy_reduction == 50
        event.record(7, effect, None)
        result = event.result()
        assert isinstance(result, IncomeResult)
        assert result.occurrences == 1
        assert result.total_income == 2_000_000
        assert result.energy_used == 50

    def test_fit_to_energy_sells_whole_losses(self):
        event = LossRevive(LossReviveConfig(number_per_day=20, energy_cost=25, price_per_loss=1_000_000))
        effect = event.fit_to_energy(event.effect(7, _state(7)), 160)
        assert effect.energy_reduction == 150
        assert effect.income == 6_000_000
        assert effect.notes == ["Loss/Revive: 6 of 20 losses (25 energy each)"]

    def test_fit_to_energy_keeps_affordable_effect(self):
        event = LossRevive(LossReviveConfig(number_per_day=2, energy_cost=25))
        effect = event.effect(7, _state(7))
        assert event.fit_to_energy(effect, 1000) is effect
        assert effect.income == 2 * 10_000_000

"""Loss/revive: selling losses or revives costs energy and earns money."""

from __future__ import annotations

from gym_forecast.jumps.base import JumpEffect, JumpEvent
from gym_forecast.models import FeatureKind, IncomeResult, ProgressionState, StatVector
from gym_forecast.simulation_config import LossReviveConfig


class LossRevive(JumpEvent):
    """Fires every ``days_between`` section days, first on day ``days_between``.

    An occurrence that falls on a day where it cannot happen moves to the
    next day it can.
    """

    feature = FeatureKind.LOSS_REVIVE

    def __init__(self, config: LossReviveConfig):
        super().__init__()
        self.config = config
        self.next_day = config.days_between
        self.total_income = 0.0
        self.energy_used = 0.0

    def should_fire(self, day: int, state: ProgressionState) -> bool:
        return day >= self.next_day

    def effect(self, day: int, state: ProgressionState) -> JumpEffect:
        return self._effect_for(self.config.number_per_day)

    def fit_to_energy(self, effect: JumpEffect, energy: float) -> JumpEffect:
        """Only whole losses the remaining energy pays for are sold."""
        cost = self.config.energy_cost
        if cost <= 0 or effect.energy_reduction <= energy:
            return effect
        return self._effect_for(int(max(energy, 0.0) // cost))

    def _effect_for(self, performed: int) -> JumpEffect:
        c = self.config
        planned = c.number_per_day
        count = f"{performed}" if performed == planned else f"{performed} of {planned}"
        return JumpEffect(
            energy_reduction=performed * c.energy_cost,
            income=performed * c.price_per_loss,
            notes=[f"Loss/Revive: {count} loss{'es' if planned > 1 else ''} ({c.energy_cost:g} energy each)"],
        )

    def record(self, day: int, effect: JumpEffect, gains: StatVector | None) -> None:
        self.occurrences += 1
        self.total_income += effect.income
        self.energy_used += effect.energy_reduction
        self.next_day = day + self.config.days_between

    def result(self) -> IncomeResult:
        return IncomeResult(
            kind=self.feature,
            occurrences=self.occurrences,
            total_income=self.total_income,
            energy_used=self.energy_used,
        )

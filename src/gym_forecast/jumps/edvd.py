"""eDVD jump: DVDs plus ecstasy for a large happiness boost."""

from __future__ import annotations

from collections.abc import Callable

from gym_forecast.energy import post_jump_energy
from gym_forecast.items import DVD_HAPPY, DVD_HAPPY_ADULT_NOVELTIES, JUMP_ENERGY
from gym_forecast.jumps.base import JumpEffect, ScheduledJump
from gym_forecast.models import FeatureKind, ProgressionState, SessionKind
from gym_forecast.simulation_config import EdvdJumpConfig, ItemPrices

# xanax stacked over the day before plus the one taken on the jump day
XANAX_PER_BIG_JUMP = 4


class EdvdJump(ScheduledJump):
    feature = FeatureKind.EDVD_JUMP

    def __init__(
        self,
        config: EdvdJumpConfig,
        *,
        happy: float,
        max_energy: int,
        xanax_per_day: int,
        prices: ItemPrices | None = None,
        conflicts: Callable[[int], bool] = lambda day: False,
    ):
        super().__init__(config.frequency_days, config.limit, config.count, config.stat_target, conflicts)
        self.config = config
        self.happy = happy
        self.max_energy = max_energy
        self.xanax_per_day = xanax_per_day
        self.prices = prices

    @property
    def jump_happy(self) -> float:
        per_dvd = DVD_HAPPY_ADULT_NOVELTIES if self.config.adult_novelties else DVD_HAPPY
        return (self.happy + per_dvd * self.config.dvds_used) * 2

    def cost_per_jump(self) -> float | None:
        prices = self.prices
        if prices is None or prices.dvd is None or prices.xanax is None or prices.ecstasy is None:
            return None
        return self.config.dvds_used * prices.dvd + XANAX_PER_BIG_JUMP * prices.xanax + prices.ecstasy

    def effect(self, day: int, state: ProgressionState) -> JumpEffect:
        dvds = self.config.dvds_used
        note = f"eDVD jump: {dvds} DVD{'s' if dvds > 1 else ''}, 1 Ecstasy"
        if self.config.adult_novelties:
            note += " (10* Adult Novelties)"
        return JumpEffect(
            session_kind=SessionKind.EDVD_JUMP,
            happy=self.jump_happy,
            session_energy=JUMP_ENERGY,
            replaces_energy=post_jump_energy(self.max_energy, self.xanax_per_day),
            cost=self.cost_per_jump(),
            stats_to_train=self._stats_to_train,
            notes=[note],
        )

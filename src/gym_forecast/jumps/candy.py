"""Candy jumps.

A half candy jump trains one bar (plus optional refill, xanax and energy
items) at candy-boosted happiness on a regular schedule. A stacked candy
jump is a big jump like the eDVD one, using candy instead of DVDs.
"""

from __future__ import annotations

from collections.abc import Callable

from gym_forecast.energy import post_jump_energy
from gym_forecast.items import CANDIES, ENERGY_PER_XANAX, JUMP_ENERGY
from gym_forecast.jumps.base import JumpEffect, JumpEvent, ScheduledJump
from gym_forecast.jumps.edvd import XANAX_PER_BIG_JUMP
from gym_forecast.models import FeatureKind, ProgressionState, SessionKind
from gym_forecast.simulation_config import CandyJumpConfig, ItemPrices, StackedCandyJumpConfig


def candy_happy(item_id: int, quantity: int, faction_percent: float) -> float:
    """Happiness from ``quantity`` candies, faction boost included."""
    return CANDIES[item_id].happy * (1 + faction_percent / 100) * quantity


def _candy_price(prices: ItemPrices | None, item_id: int) -> float | None:
    if prices is None:
        return None
    return prices.candy.get(item_id)


class CandyJump(JumpEvent):
    """Half candy jump on section days 1, 1 + N, 1 + 2N, ..."""

    feature = FeatureKind.CANDY_JUMP

    def __init__(
        self,
        config: CandyJumpConfig,
        *,
        happy: float,
        max_energy: int,
        has_refill: bool,
        energy_item_energy: float = 0.0,
        prices: ItemPrices | None = None,
    ):
        super().__init__()
        self.config = config
        self.happy = happy
        self.max_energy = max_energy
        self.has_refill = has_refill
        self.energy_item_energy = energy_item_energy
        self.prices = prices

    @property
    def jump_happy(self) -> float:
        c = self.config
        value = self.happy + candy_happy(c.item_id, c.quantity, c.faction_benefit_percent)
        if c.drug_used == "ecstasy":
            value *= 2
        return value

    @property
    def session_energy(self) -> float:
        energy = float(self.max_energy)
        if self.config.use_point_refill:
            energy += self.max_energy
        if self.config.drug_used == "xanax":
            energy += ENERGY_PER_XANAX
        return energy + self.energy_item_energy

    @property
    def extra_energy(self) -> float:
        """Energy added to the day for a drug or refill not already counted."""
        extra = 0.0
        if self.config.drug_used == "xanax" and not self.config.drug_already_included:
            extra += ENERGY_PER_XANAX
        if self.config.use_point_refill and not self.has_refill:
            extra += self.max_energy
        return extra

    def cost_per_day(self) -> float | None:
        c = self.config
        price = _candy_price(self.prices, c.item_id)
        if price is None:
            return None
        cost = c.quantity * price
        if c.drug_used != "none" and not c.drug_already_included:
            drug_price = self.prices.xanax if c.drug_used == "xanax" else self.prices.ecstasy
            if drug_price is None:
                return None
            cost += drug_price
        return cost

    def should_fire(self, day: int, state: ProgressionState) -> bool:
        return (day - 1) % self.config.frequency_days == 0

    def effect(self, day: int, state: ProgressionState) -> JumpEffect:
        c = self.config
        drug = {"xanax": " + Xanax", "ecstasy": " + Ecstasy"}.get(c.drug_used, "")
        happy = self.jump_happy
        return JumpEffect(
            session_kind=SessionKind.CANDY_JUMP,
            happy=happy,
            session_energy=self.session_energy,
            bonus_energy=self.extra_energy,
            cost=self.cost_per_day(),
            notes=[f"Half candy jump: {c.quantity} x {CANDIES[c.item_id].happy} happy candy{drug} at happy {happy:,.0f}"],
        )


class StackedCandyJump(ScheduledJump):
    feature = FeatureKind.STACKED_CANDY_JUMP

    def __init__(
        self,
        config: StackedCandyJumpConfig,
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
        c = self.config
        return (self.happy + candy_happy(c.item_id, c.quantity, c.faction_benefit_percent)) * 2

    def cost_per_jump(self) -> float | None:
        price = _candy_price(self.prices, self.config.item_id)
        if price is None or self.prices.xanax is None or self.prices.ecstasy is None:
            return None
        return self.config.quantity * price + XANAX_PER_BIG_JUMP * self.prices.xanax + self.prices.ecstasy

    def effect(self, day: int, state: ProgressionState) -> JumpEffect:
        c = self.config
        faction = f" (+{c.faction_benefit_percent:g}% faction perk)" if c.faction_benefit_percent > 0 else ""
        return JumpEffect(
            session_kind=SessionKind.STACKED_CANDY_JUMP,
            happy=self.jump_happy,
            session_energy=JUMP_ENERGY,
            replaces_energy=post_jump_energy(self.max_energy, self.xanax_per_day),
            cost=self.cost_per_jump(),
            stats_to_train=self._stats_to_train,
            notes=[f"Stacked candy jump: {c.quantity} candies ({CANDIES[c.item_id].happy} happy{faction}), 1 Ecstasy"],
        )

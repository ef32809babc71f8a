"""Energy item jump: drinks or hotel coupons used every ordinary day."""

from __future__ import annotations

from gym_forecast.items import ENERGY_ITEMS, energy_item_energy
from gym_forecast.jumps.base import JumpEffect, JumpEvent
from gym_forecast.models import FeatureKind, ProgressionState
from gym_forecast.simulation_config import EnergyJumpConfig, ItemPrices


class EnergyJump(JumpEvent):
    feature = FeatureKind.ENERGY_JUMP
    marks_day = False

    def __init__(self, config: EnergyJumpConfig, *, max_energy: int, prices: ItemPrices | None = None):
        super().__init__()
        self.config = config
        self.max_energy = max_energy
        self.prices = prices

    @property
    def energy(self) -> float:
        c = self.config
        return energy_item_energy(c.item_id, c.quantity, c.faction_benefit_percent, self.max_energy)

    def cost_per_day(self) -> float | None:
        if self.prices is None:
            return None
        price = self.prices.energy_items.get(self.config.item_id)
        if price is None:
            return None
        return self.config.quantity * price

    def should_fire(self, day: int, state: ProgressionState) -> bool:
        return True

    def effect(self, day: int, state: ProgressionState) -> JumpEffect:
        item = ENERGY_ITEMS[self.config.item_id]
        return JumpEffect(
            bonus_energy=self.energy,
            cost=self.cost_per_day(),
            notes=[f"Used {self.config.quantity} {item.name}"],
        )

"""Diabetes Day jumps.

During the November event happiness can be pushed to the 99,999 cap for
one or two jumps. Each jump trains the usual 1150 stacked energy plus
whatever bonus sources are left:

- one energy item per jump from a shared inventory, green eggs (500 energy)
  before feathery hotel coupons (one full bar);
- seasonal mail (250 energy) on the first jump;
- the logo click (50 energy) on the last jump.

Items are taken out of the inventory as they are planned, so a second jump
never reuses what the first one consumed.
"""

from __future__ import annotations

from dataclasses import dataclass

from gym_forecast.energy import post_jump_energy
from gym_forecast.formula import MAX_HAPPY
from gym_forecast.items import GREEN_EGG_ENERGY, JUMP_ENERGY, LOGO_CLICK_ENERGY, SEASONAL_MAIL_ENERGY
from gym_forecast.jumps.base import JumpEffect, JumpEvent
from gym_forecast.models import DiabetesDayResult, FeatureKind, ProgressionState, SessionKind, StatVector
from gym_forecast.simulation_config import DiabetesDayConfig


@dataclass(frozen=True)
class DiabetesDayJumpPlan:
    day: int  # global day
    index: int
    bonus_energy: float
    sources: tuple[str, ...]

    @property
    def jump_energy(self) -> float:
        return JUMP_ENERGY + self.bonus_energy


def plan_diabetes_day(config: DiabetesDayConfig, jump_days: list[int], max_energy: int) -> list[DiabetesDayJumpPlan]:
    green_eggs = config.green_eggs
    coupons = config.feathery_hotel_coupons
    plans: list[DiabetesDayJumpPlan] = []
    for index, day in enumerate(jump_days):
        bonus = 0.0
        sources: list[str] = []
        if green_eggs > 0:
            green_eggs -= 1
            bonus += GREEN_EGG_ENERGY
            sources.append("Green Egg")
        elif coupons > 0:
            coupons -= 1
            bonus += max_energy
            sources.append("FHC")
        if index == 0 and config.seasonal_mail:
            bonus += SEASONAL_MAIL_ENERGY
            sources.append("Seasonal Mail")
        if index == len(jump_days) - 1 and config.logo_energy_click:
            bonus += LOGO_CLICK_ENERGY
            sources.append("Logo Energy Click")
        plans.append(DiabetesDayJumpPlan(day=day, index=index, bonus_energy=bonus, sources=tuple(sources)))
    return plans


class DiabetesDayJump(JumpEvent):
    """Fires on the planned global days that fall inside the section."""

    feature = FeatureKind.DIABETES_DAY

    def __init__(
        self,
        config: DiabetesDayConfig,
        jump_days: list[int],
        *,
        section_start: int,
        section_end: int,
        max_energy: int,
        xanax_per_day: int,
    ):
        super().__init__()
        self.config = config
        self.section_start = section_start
        self.max_energy = max_energy
        self.xanax_per_day = xanax_per_day
        self.plans = plan_diabetes_day(config, jump_days, max_energy)
        self._pending = [p for p in self.plans if section_start <= p.day <= section_end]
        self.jump_days: list[int] = []
        self.jump_gains: list[StatVector] = []
        self.bonus_energy: list[float] = []

    def section_days(self) -> list[int]:
        """Section-relative days of every planned jump."""
        return [p.day - self.section_start + 1 for p in self.plans]

    def scheduled_day(self) -> int | None:
        if not self._pending:
            return None
        return self._pending[0].day - self.section_start + 1

    def should_fire(self, day: int, state: ProgressionState) -> bool:
        return bool(self._pending) and self._pending[0].day == state.day

    def defer(self, day: int) -> None:
        # calendar-bound; a jump on a skipped day is lost
        if self.scheduled_day() == day:
            self._pending.pop(0)

    def effect(self, day: int, state: ProgressionState) -> JumpEffect:
        plan = self._pending[0]
        return JumpEffect(
            session_kind=SessionKind.DD_JUMP,
            happy=MAX_HAPPY,
            session_energy=plan.jump_energy,
            replaces_energy=post_jump_energy(self.max_energy, self.xanax_per_day),
            cost=0.0,
            notes=[", ".join(("Diabetes Day jump",) + plan.sources)],
        )

    def record(self, day: int, effect: JumpEffect, gains: StatVector | None) -> None:
        plan = self._pending.pop(0)
        super().record(day, effect, gains)
        self.jump_days.append(plan.day)
        self.jump_gains.append(gains.copy() if gains is not None else StatVector())
        self.bonus_energy.append(plan.bonus_energy)

    def result(self) -> DiabetesDayResult:
        return DiabetesDayResult(
            jump_days=list(self.jump_days),
            jump_gains=[g.copy() for g in self.jump_gains],
            bonus_energy=list(self.bonus_energy),
        )

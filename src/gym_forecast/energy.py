"""Daily energy budget and its split across the four stats.

Energy regenerates at 30/hour on a 150 bar (20/hour on a 100 bar). Time
not played is assumed to be sleep, which refills at most one full bar.
"""

from __future__ import annotations

import math
from collections.abc import Mapping

from gym_forecast.errors import InvalidConfiguration
from gym_forecast.items import ENERGY_PER_XANAX
from gym_forecast.models import STAT_ORDER, DriftState, Stat, StatVector, Venue

HOURS_PER_DAY = 24
STACKING_SLEEP_HOURS = 8
POST_JUMP_HOURS = 12


def energy_per_hour(max_energy: int = 150) -> int:
    return 20 if max_energy == 100 else 30


def daily_energy(
    hours_played: float,
    xanax_per_day: int,
    has_refill: bool,
    bonus_energy: float = 0.0,
    max_energy: int = 150,
) -> float:
    """Total energy available on an ordinary day."""
    rate = energy_per_hour(max_energy)
    hours = min(max(hours_played, 0), HOURS_PER_DAY)
    if hours >= HOURS_PER_DAY:
        natural = HOURS_PER_DAY * rate
    else:
        natural = min(max_energy, (HOURS_PER_DAY - hours) * rate) + hours * rate

    energy = natural + xanax_per_day * ENERGY_PER_XANAX
    if has_refill:
        energy += max_energy
    return energy + bonus_energy


def stacking_day_energy(max_energy: int, has_refill: bool) -> float:
    """Energy trained the day before a big jump, while drugs are being stacked."""
    energy = min(max_energy, STACKING_SLEEP_HOURS * energy_per_hour(max_energy))
    if has_refill:
        energy += max_energy
    return energy


def post_jump_energy(max_energy: int, xanax_per_day: int) -> float:
    """Energy left for ordinary training after a big jump."""
    energy = POST_JUMP_HOURS * energy_per_hour(max_energy)
    if xanax_per_day >= 3:
        energy += ENERGY_PER_XANAX
    return energy


def allocate(total_energy: float, weights: Mapping[Stat, float]) -> dict[Stat, int]:
    """Split ``total_energy`` across stats in proportion to ``weights``.

    Shares are floored to whole energy, so the sum never exceeds the total.
    Stats with zero weight get nothing.
    """
    total_weight = sum(max(w, 0.0) for w in weights.values())
    if total_weight <= 0:
        raise InvalidConfiguration("At least one stat weight must be greater than zero")
    total = max(total_energy, 0.0)

    allocation: dict[Stat, int] = {}
    for stat in STAT_ORDER:
        weight = weights.get(stat, 0.0)
        if weight <= 0:
            allocation[stat] = 0
            continue
        allocation[stat] = math.floor(total * weight / total_weight)
    return allocation


def trains_for(energy: float, venue: Venue) -> int:
    return int(energy // venue.energy_per_train)


def is_skipped_day(day: int, days_skipped_per_month: int) -> bool:
    """Whether ``day`` is one of the evenly spread skipped days of its month.

    With 2 skipped days per 30-day month days 15 and 30 are skipped, with 3
    days 10, 20 and 30.
    """
    if days_skipped_per_month <= 0:
        return False
    day_in_month = (day - 1) % 30 + 1
    interval = 30 / days_skipped_per_month
    for i in range(1, days_skipped_per_month + 1):
        if day_in_month == math.floor(i * interval + 0.5):
            return True
    return False


# --- Stat drift correction ---------------------------------------------------


def drift_weights(targets: Mapping[Stat, float], stats: StatVector, percent: float) -> dict[Stat, float]:
    """Re-derive weights so lagging stats get more energy.

    Each weighted stat's target share ``t`` is pushed by
    ``percent/100 * (t - a)`` where ``a`` is its achieved share among the
    weighted stats. Zero-weight stats stay at zero.
    """
    weighted = [stat for stat in STAT_ORDER if targets.get(stat, 0.0) > 0]
    total_weight = sum(targets[stat] for stat in weighted)
    achieved_total = sum(stats.get(stat) for stat in weighted)
    if total_weight <= 0 or achieved_total <= 0 or percent <= 0:
        return {stat: targets.get(stat, 0.0) for stat in STAT_ORDER}

    factor = percent / 100
    adjusted: dict[Stat, float] = {stat: 0.0 for stat in STAT_ORDER}
    for stat in weighted:
        target_share = targets[stat] / total_weight
        achieved_share = stats.get(stat) / achieved_total
        adjusted[stat] = max(0.0, target_share + factor * (target_share - achieved_share))

    norm = sum(adjusted.values())
    if norm <= 0:
        return {stat: targets.get(stat, 0.0) for stat in STAT_ORDER}
    return {stat: adjusted[stat] / norm for stat in STAT_ORDER}


class DriftPolicy:
    """Recomputes drift-corrected weights every ``cadence_days`` global days.

    ``state`` resumes from weights derived earlier (the previous section of a
    chained run), so they are only replaced on the next cadence day. Once
    ``energy_spent`` reaches ``until_energy`` the plain targets apply again.
    """

    def __init__(
        self,
        targets: Mapping[Stat, float],
        percent: float,
        cadence_days: int,
        until_energy: float | None = None,
        state: DriftState | None = None,
    ):
        self.targets = dict(targets)
        self.percent = percent
        self.cadence_days = cadence_days
        self.until_energy = until_energy
        self._current: dict[Stat, float] | None = dict(state.weights) if state is not None else None
        self._computed_on: int | None = state.computed_on if state is not None else None

    @property
    def state(self) -> DriftState | None:
        if self.percent <= 0 or self._current is None:
            return None
        return DriftState(dict(self._current), self._computed_on)

    def weights_for(self, day: int, stats: StatVector, energy_spent: float = 0.0) -> dict[Stat, float]:
        if self.percent <= 0:
            return dict(self.targets)
        if self.until_energy is not None and energy_spent >= self.until_energy:
            self._current = self._computed_on = None
            return dict(self.targets)
        if self._current is None or (day - 1) % self.cadence_days == 0:
            self._current = drift_weights(self.targets, stats, self.percent)
            self._computed_on = day
        return dict(self._current)


def energy_budget_floor(
    days: int,
    xanax_per_day: int,
    has_refill: bool,
    max_energy: int = 150,
    initial_energy_spent: float = 0.0,
) -> float:
    """Lower bound on energy spent over ``days`` active days.

    Counts only drug and refill energy on top of the starting total; natural
    regeneration always adds more than the whole-train remainders lose.
    """
    per_day = xanax_per_day * ENERGY_PER_XANAX + (max_energy if has_refill else 0)
    return initial_energy_spent + days * per_day

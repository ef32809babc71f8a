"""Shared contract for jump and boost events.

An event decides whether it fires on a section day, describes its effect on
that day's happiness and energy, and keeps its own tally of occurrences,
cost and attributed gains. The engine owns the day loop; events never touch
stats directly.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field

from gym_forecast.models import (
    FeatureKind,
    FeatureResult,
    JumpFeatureResult,
    ProgressionState,
    SessionKind,
    Stat,
    StatVector,
)

MIN_DAYS_BETWEEN_BIG_JUMPS = 2


@dataclass
class JumpEffect:
    """What an event does to the day it fires on.

    ``session_energy`` is trained at ``happy`` before ordinary training. Big
    jumps set ``replaces_energy``, which becomes the ordinary energy for the
    rest of the day.
    """

    session_kind: SessionKind | None = None
    happy: float | None = None
    session_energy: float = 0.0
    replaces_energy: float | None = None
    bonus_energy: float = 0.0
    energy_reduction: float = 0.0
    cost: float | None = 0.0
    income: float = 0.0
    stats_to_train: frozenset[Stat] | None = None
    notes: list[str] = field(default_factory=list)


class JumpEvent(ABC):
    """Base class for every event kind."""

    feature: FeatureKind
    # whether a day it fires on is always snapshotted with its sessions
    marks_day = True

    def __init__(self):
        self.occurrences = 0
        self.total_cost: float | None = 0.0
        self.total_gains = StatVector()

    @abstractmethod
    def should_fire(self, day: int, state: ProgressionState) -> bool:
        """Whether the event fires on section day ``day``."""

    @abstractmethod
    def effect(self, day: int, state: ProgressionState) -> JumpEffect:
        """Effect for a day on which ``should_fire`` returned True."""

    def scheduled_day(self) -> int | None:
        """Next planned section day, for events that need a stacking day."""
        return None

    def defer(self, day: int) -> None:
        """Move a planned occurrence that could not happen on ``day``."""

    def fit_to_energy(self, effect: JumpEffect, energy: float) -> JumpEffect:
        """Cut ``effect.energy_reduction`` down to the ``energy`` left in the pool."""
        effect.energy_reduction = min(effect.energy_reduction, max(energy, 0.0))
        return effect

    def record(self, day: int, effect: JumpEffect, gains: StatVector | None) -> None:
        self.occurrences += 1
        if self.total_cost is not None:
            self.total_cost = None if effect.cost is None else self.total_cost + effect.cost
        if gains is not None:
            self.total_gains = self.total_gains.plus(gains)

    def result(self) -> FeatureResult:
        return JumpFeatureResult(
            kind=self.feature,
            occurrences=self.occurrences,
            total_cost=self.total_cost,
            total_gains=self.total_gains.copy(),
        )


def next_free_day(proposed: int, conflicts: Callable[[int], bool]) -> int:
    while conflicts(proposed):
        proposed += 1
    return proposed


def near_any(days: Iterable[int]) -> Callable[[int], bool]:
    """Conflict predicate: within two days of any of ``days``."""
    blocked = tuple(days)

    def conflicts(day: int) -> bool:
        return any(abs(day - other) < MIN_DAYS_BETWEEN_BIG_JUMPS for other in blocked)

    return conflicts


class ScheduledJump(JumpEvent):
    """Big periodic jump (eDVD, stacked candy) with an optional limit.

    The first jump is on section day ``frequency_days``. A ``count`` limit
    stops after that many jumps; a ``stat`` limit only trains weighted stats
    still below the target and stops once none are left.
    """

    def __init__(
        self,
        frequency_days: int,
        limit: str = "indefinite",
        count: int | None = None,
        stat_target: float | None = None,
        conflicts: Callable[[int], bool] = lambda day: False,
    ):
        super().__init__()
        self.frequency_days = frequency_days
        self.limit = limit
        self.count = count
        self.stat_target = stat_target
        self.conflicts = conflicts
        self.next_day: int | None = next_free_day(frequency_days, conflicts)
        self._stats_to_train: frozenset[Stat] | None = None

    def _exhausted(self) -> bool:
        return self.limit == "count" and self.count is not None and self.occurrences >= self.count

    def scheduled_day(self) -> int | None:
        if self.next_day is None or self._exhausted():
            return None
        return self.next_day

    def should_fire(self, day: int, state: ProgressionState) -> bool:
        if self.scheduled_day() != day:
            return False
        self._stats_to_train = None
        if self.limit == "stat" and self.stat_target is not None:
            below = frozenset(
                stat for stat, weight in state.weights.items()
                if weight > 0 and state.stats.get(stat) < self.stat_target
            )
            if not below:
                self.next_day = None
                return False
            self._stats_to_train = below
        return True

    def record(self, day: int, effect: JumpEffect, gains: StatVector | None) -> None:
        super().record(day, effect, gains)
        self.next_day = next_free_day(day + self.frequency_days, self.conflicts)

    def defer(self, day: int) -> None:
        if self.next_day == day:
            self.next_day = next_free_day(day + 1, self.conflicts)

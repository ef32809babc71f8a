"""Core data models for the simulation."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum
from typing import Union


class Stat(str, Enum):
    STRENGTH = "strength"
    SPEED = "speed"
    DEFENSE = "defense"
    DEXTERITY = "dexterity"


STAT_ORDER: tuple[Stat, ...] = (Stat.STRENGTH, Stat.SPEED, Stat.DEFENSE, Stat.DEXTERITY)


@dataclass
class StatVector:
    """The four battle stats at a point in time."""

    strength: float = 0.0
    speed: float = 0.0
    defense: float = 0.0
    dexterity: float = 0.0

    def get(self, stat: Stat | str) -> float:
        if stat == Stat.STRENGTH:
            return self.strength
        elif stat == Stat.SPEED:
            return self.speed
        elif stat == Stat.DEFENSE:
            return self.defense
        elif stat == Stat.DEXTERITY:
            return self.dexterity
        raise KeyError(f"unknown stat: {stat!r}")

    def set(self, stat: Stat | str, value: float) -> None:
        if stat == Stat.STRENGTH:
            self.strength = value
        elif stat == Stat.SPEED:
            self.speed = value
        elif stat == Stat.DEFENSE:
            self.defense = value
        elif stat == Stat.DEXTERITY:
            self.dexterity = value
        else:
            raise KeyError(f"unknown stat: {stat!r}")

    def add(self, stat: Stat | str, amount: float) -> None:
        self.set(stat, self.get(stat) + amount)

    def copy(self) -> StatVector:
        return StatVector(self.strength, self.speed, self.defense, self.dexterity)

    def total(self) -> float:
        return self.strength + self.speed + self.defense + self.dexterity

    def minus(self, other: StatVector) -> StatVector:
        return StatVector(
            self.strength - other.strength,
            self.speed - other.speed,
            self.defense - other.defense,
            self.dexterity - other.dexterity,
        )

    def plus(self, other: StatVector) -> StatVector:
        return StatVector(
            self.strength + other.strength,
            self.speed + other.speed,
            self.defense + other.defense,
            self.dexterity + other.dexterity,
        )

    def scaled(self, factor: float) -> StatVector:
        return StatVector(
            self.strength * factor,
            self.speed * factor,
            self.defense * factor,
            self.dexterity * factor,
        )

    def as_dict(self) -> dict[str, float]:
        return {stat.value: self.get(stat) for stat in STAT_ORDER}

    @classmethod
    def from_mapping(cls, values: dict) -> StatVector:
        vector = cls()
        for key, value in values.items():
            vector.set(key, float(value))
        return vector


@dataclass(frozen=True)
class Venue:
    """A gym: per-stat dots (None = stat not offered) and unlock requirements."""

    name: str
    display_name: str
    strength: float | None
    speed: float | None
    defense: float | None
    dexterity: float | None
    energy_per_train: int
    energy_to_unlock: int
    cost_to_unlock: int
    specialty_requirement: Callable[[StatVector], bool] | None = None

    def dots(self, stat: Stat | str) -> float | None:
        if stat == Stat.STRENGTH:
            return self.strength
        elif stat == Stat.SPEED:
            return self.speed
        elif stat == Stat.DEFENSE:
            return self.defense
        elif stat == Stat.DEXTERITY:
            return self.dexterity
        raise KeyError(f"unknown stat: {stat!r}")

    def offers(self, stat: Stat | str) -> bool:
        return self.dots(stat) is not None

    @property
    def is_specialty(self) -> bool:
        return self.specialty_requirement is not None


class SessionKind(str, Enum):
    REGULAR = "regular"
    EDVD_JUMP = "edvd_jump"
    CANDY_JUMP = "candy_jump"
    STACKED_CANDY_JUMP = "stacked_candy_jump"
    DD_JUMP = "dd_jump"


class FeatureKind(str, Enum):
    EDVD_JUMP = "edvd_jump"
    CANDY_JUMP = "candy_jump"
    STACKED_CANDY_JUMP = "stacked_candy_jump"
    ENERGY_JUMP = "energy_jump"
    LOSS_REVIVE = "loss_revive"
    DIABETES_DAY = "diabetes_day"
    XANAX_COST = "xanax_cost"
    POINTS_REFILL_COST = "points_refill_cost"
    ISLAND_COST = "island_cost"


@dataclass
class TrainingDetail:
    stat: Stat
    venue: str
    energy: int
    trains: int
    gain: float


@dataclass
class TrainingSession:
    """One block of trains done at a single happiness value."""

    kind: SessionKind
    happy: float
    stats_after: StatVector
    details: list[TrainingDetail] = field(default_factory=list)
    notes: list[str] = field(default_factory=list)

    @property
    def energy_used(self) -> int:
        return sum(d.energy for d in self.details)

    @property
    def gains(self) -> StatVector:
        gains = StatVector()
        for detail in self.details:
            gains.add(detail.stat, detail.gain)
        return gains


@dataclass
class DailySnapshot:
    """State at the end of one simulated day.

    ``sessions`` is only filled on days where a jump or boost event fired.
    """

    day: int
    stats: StatVector
    venues: dict[Stat, str | None]
    energy_spent: float
    energy_available: float
    sessions: list[TrainingSession] = field(default_factory=list)
    events: list[FeatureKind] = field(default_factory=list)
    notes: list[str] = field(default_factory=list)
    skipped: bool = False


# --- Feature results ---------------------------------------------------------


def _add_optional(a: float | None, b: float | None) -> float | None:
    if a is None or b is None:
        return None
    return a + b


@dataclass(frozen=True)
class JumpFeatureResult:
    """Occurrences, cost and attributed gains of one periodic jump kind.

    ``total_cost`` is None when item prices were not provided.
    """

    kind: FeatureKind
    occurrences: int
    total_cost: float | None
    total_gains: StatVector

    @property
    def cost_per_occurrence(self) -> float | None:
        if self.total_cost is None or self.occurrences == 0:
            return None
        return self.total_cost / self.occurrences

    @property
    def average_gains(self) -> StatVector:
        if self.occurrences == 0:
            return StatVector()
        return self.total_gains.scaled(1 / self.occurrences)

    def merge(self, other: JumpFeatureResult) -> JumpFeatureResult:
        return JumpFeatureResult(
            kind=self.kind,
            occurrences=self.occurrences + other.occurrences,
            total_cost=_add_optional(self.total_cost, other.total_cost),
            total_gains=self.total_gains.plus(other.total_gains),
        )


@dataclass(frozen=True)
class DailyCostResult:
    """A recurring per-day expense (drugs, point refills, island upkeep)."""

    kind: FeatureKind
    days: int
    total_cost: float

    @property
    def cost_per_day(self) -> float:
        return self.total_cost / self.days if self.days else 0.0

    def merge(self, other: DailyCostResult) -> DailyCostResult:
        return DailyCostResult(self.kind, self.days + other.days, self.total_cost + other.total_cost)


@dataclass(frozen=True)
class IncomeResult:
    kind: FeatureKind
    occurrences: int
    total_income: float
    energy_used: float

    def merge(self, other: IncomeResult) -> IncomeResult:
        return IncomeResult(
            self.kind,
            self.occurrences + other.occurrences,
            self.total_income + other.total_income,
            self.energy_used + other.energy_used,
        )


@dataclass(frozen=True)
class DiabetesDayResult:
    """Per-jump attribution for Diabetes Day, in firing order."""

    jump_days: list[int]
    jump_gains: list[StatVector]
    bonus_energy: list[float]
    kind: FeatureKind = FeatureKind.DIABETES_DAY

    @property
    def occurrences(self) -> int:
        return len(self.jump_days)

    @property
    def total_gains(self) -> StatVector:
        total = StatVector()
        for gains in self.jump_gains:
            total = total.plus(gains)
        return total

    def merge(self, other: DiabetesDayResult) -> DiabetesDayResult:
        return DiabetesDayResult(
            jump_days=self.jump_days + other.jump_days,
            jump_gains=self.jump_gains + other.jump_gains,
            bonus_energy=self.bonus_energy + other.bonus_energy,
        )


FeatureResult = Union[JumpFeatureResult, DailyCostResult, IncomeResult, DiabetesDayResult]


@dataclass(frozen=True)
class DriftState:
    """Drift-corrected weights in effect and the global day they were derived."""

    weights: dict[Stat, float]
    computed_on: int


@dataclass
class SimulationResult:
    snapshots: list[DailySnapshot]
    final_stats: StatVector
    final_energy_spent: float
    features: dict[FeatureKind, FeatureResult] = field(default_factory=dict)
    section_boundaries: list[int] = field(default_factory=list)
    drift: DriftState | None = None

    @property
    def total_cost(self) -> float | None:
        """Sum of all known costs minus loss/revive income."""
        total = 0.0
        for result in self.features.values():
            if isinstance(result, IncomeResult):
                total -= result.total_income
            elif isinstance(result, (JumpFeatureResult, DailyCostResult)):
                if result.total_cost is None:
                    return None
                total += result.total_cost
        return total


@dataclass
class ProgressionState:
    """Mutable state threaded through one run."""

    day: int  # global day index
    section_day: int  # 1-based day within the current section
    stats: StatVector
    energy_spent: float
    weights: dict[Stat, float]

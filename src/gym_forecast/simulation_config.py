"""Simulation inputs: Pydantic validation for what-if configurations.

Shape and range errors surface as ``pydantic.ValidationError``. Semantic
checks that need the gym catalog (unknown or incompatible locked gym, zero
total weight) are done by the engine and raise ``InvalidConfiguration``.
"""

from __future__ import annotations

from datetime import date
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from gym_forecast.errors import InvalidConfiguration
from gym_forecast.items import CANDIES, ENERGY_ITEMS
from gym_forecast.models import STAT_ORDER, Stat, StatVector

DAYS_PER_MONTH = 30


class StatValues(BaseModel):
    """Four non-negative per-stat numbers (stats, weights or perk percentages)."""

    model_config = ConfigDict(frozen=True)

    strength: float = Field(default=0.0, ge=0)
    speed: float = Field(default=0.0, ge=0)
    defense: float = Field(default=0.0, ge=0)
    dexterity: float = Field(default=0.0, ge=0)

    @classmethod
    def uniform(cls, value: float) -> StatValues:
        return cls(strength=value, speed=value, defense=value, dexterity=value)

    @classmethod
    def from_vector(cls, vector: StatVector) -> StatValues:
        return cls(**vector.as_dict())

    def to_vector(self) -> StatVector:
        return StatVector(self.strength, self.speed, self.defense, self.dexterity)

    def get(self, stat: Stat | str) -> float:
        return self.to_vector().get(stat)

    def total(self) -> float:
        return self.strength + self.speed + self.defense + self.dexterity

    def as_mapping(self) -> dict[Stat, float]:
        return {stat: self.get(stat) for stat in STAT_ORDER}


class CompanyBenefit(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str = "none"
    unlock_speed_multiplier: float = Field(default=1.0, gt=0)
    bonus_energy_per_day: float = Field(default=0.0, ge=0)
    gain_multiplier: float = Field(default=1.0, gt=0)


def company_benefit(kind: str, stars: int = 10) -> CompanyBenefit:
    """Preset company benefits.

    ``music_store`` unlocks gyms 30% faster, ``candle_shop`` gives 5 energy
    per star (7-10 stars) each day, ``fitness_center`` adds 3% to gym gains.
    """
    if kind == "none":
        return CompanyBenefit()
    if kind == "music_store":
        return CompanyBenefit(name="music_store", unlock_speed_multiplier=1.3)
    if kind == "candle_shop":
        if not 7 <= stars <= 10:
            raise ValueError("candle shop benefit needs 7-10 stars")
        return CompanyBenefit(name="candle_shop", bonus_energy_per_day=stars * 5)
    if kind == "fitness_center":
        return CompanyBenefit(name="fitness_center", gain_multiplier=1.03)
    raise ValueError(f"unknown company benefit: {kind!r}")


class ItemPrices(BaseModel):
    """Market prices; any missing price leaves the matching cost unknown."""

    model_config = ConfigDict(frozen=True)

    dvd: float | None = Field(default=None, ge=0)
    xanax: float | None = Field(default=None, ge=0)
    ecstasy: float | None = Field(default=None, ge=0)
    points: float | None = Field(default=None, ge=0)
    candy: dict[int, float] = Field(default_factory=dict)
    energy_items: dict[int, float] = Field(default_factory=dict)


JumpLimit = Literal["indefinite", "count", "stat"]


class _LimitedJump(BaseModel):
    model_config = ConfigDict(frozen=True)

    frequency_days: int = Field(default=7, ge=1)
    limit: JumpLimit = "indefinite"
    count: int | None = Field(default=None, ge=0)
    stat_target: float | None = Field(default=None, gt=0)

    @model_validator(mode="after")
    def limit_has_value(self):
        if self.limit == "count" and self.count is None:
            raise ValueError("count is required when limit is 'count'")
        if self.limit == "stat" and self.stat_target is None:
            raise ValueError("stat_target is required when limit is 'stat'")
        return self


class EdvdJumpConfig(_LimitedJump):
    dvds_used: int = Field(default=1, ge=1)
    adult_novelties: bool = False


class StackedCandyJumpConfig(_LimitedJump):
    item_id: int = 310
    quantity: int = Field(default=48, ge=1)
    faction_benefit_percent: float = Field(default=0.0, ge=0)

    @field_validator("item_id")
    @classmethod
    def known_candy(cls, v: int) -> int:
        if v not in CANDIES:
            raise ValueError(f"unknown candy item id: {v}")
        return v


class CandyJumpConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    frequency_days: int = Field(default=1, ge=1)
    item_id: int = 310
    quantity: int = Field(default=48, ge=1)
    faction_benefit_percent: float = Field(default=0.0, ge=0)
    drug_used: Literal["none", "xanax", "ecstasy"] = "none"
    drug_already_included: bool = False
    use_point_refill: bool = False

    @field_validator("item_id")
    @classmethod
    def known_candy(cls, v: int) -> int:
        if v not in CANDIES:
            raise ValueError(f"unknown candy item id: {v}")
        return v


class EnergyJumpConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    item_id: int = 985
    quantity: int = Field(default=24, ge=1)
    faction_benefit_percent: float = Field(default=0.0, ge=0)

    @field_validator("item_id")
    @classmethod
    def known_energy_item(cls, v: int) -> int:
        if v not in ENERGY_ITEMS:
            raise ValueError(f"unknown energy item id: {v}")
        return v


class LossReviveConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    number_per_day: int = Field(default=1, ge=1)
    energy_cost: float = Field(default=25, ge=0)
    days_between: int = Field(default=7, ge=1)
    price_per_loss: float = Field(default=10_000_000, ge=0)


class DiabetesDayConfig(BaseModel):
    """Diabetes Day jumps on fixed global days.

    ``jump_days`` may be omitted when the simulation has a ``start_date``;
    the days are then derived from the November 13/15 event dates.
    """

    model_config = ConfigDict(frozen=True)

    number_of_jumps: Literal[1, 2] = 2
    feathery_hotel_coupons: int = Field(default=0, ge=0, le=2)
    green_eggs: int = Field(default=0, ge=0, le=2)
    seasonal_mail: bool = False
    logo_energy_click: bool = False
    jump_days: list[int] | None = None

    @field_validator("jump_days")
    @classmethod
    def days_ascending(cls, v: list[int] | None) -> list[int] | None:
        if v is None:
            return v
        if any(day < 1 for day in v):
            raise ValueError("jump_days must be >= 1")
        if sorted(set(v)) != v:
            raise ValueError("jump_days must be strictly ascending")
        return v

    @model_validator(mode="after")
    def days_match_jump_count(self) -> DiabetesDayConfig:
        if self.jump_days is not None and len(self.jump_days) != self.number_of_jumps:
            raise ValueError(f"expected {self.number_of_jumps} jump_days, got {len(self.jump_days)}")
        return self


def diabetes_day_jump_days(start_date: date, number_of_jumps: int) -> list[int]:
    """Simulation days (day 1 = ``start_date``) of the next Diabetes Day jumps.

    Two jumps fall on November 13 and 15, a single jump on November 15. Once
    November 15 has passed the following year's event is used.
    """
    year = start_date.year
    if start_date > date(year, 11, 15):
        year += 1
    dates = [date(year, 11, 13), date(year, 11, 15)] if number_of_jumps == 2 else [date(year, 11, 15)]
    # a Nov 13 already behind the start date leaves only the Nov 15 jump
    return [(d - start_date).days + 1 for d in dates if d >= start_date]


class SimulationConfiguration(BaseModel):
    """All knobs of one simulated span of days.

    ``start_day``/``end_day`` are global day indices; a standalone run uses
    the defaults (day 1 through twelve 30-day months).
    """

    model_config = ConfigDict(frozen=True)

    name: str = "default"
    start_day: int = Field(default=1, ge=1)
    end_day: int | None = Field(default=None, ge=1)
    start_date: date | None = None

    initial_stats: StatValues = Field(default_factory=lambda: StatValues.uniform(1000))
    weights: StatValues = Field(default_factory=lambda: StatValues.uniform(1))
    perks: StatValues = Field(default_factory=lambda: StatValues.uniform(2))
    happy: float = Field(default=5025, ge=0, le=99_999)

    hours_played: float = Field(default=16, ge=0)
    xanax_per_day: int = Field(default=3, ge=0)
    points_refill: bool = False
    max_energy: Literal[100, 150] = 150
    manual_energy: float | None = Field(default=None, ge=0)
    company_benefit: CompanyBenefit = Field(default_factory=CompanyBenefit)

    starting_venue: str | None = None
    locked_venue: str | None = None
    initial_energy_spent: float | None = Field(default=None, ge=0)

    stat_drift_percent: float = Field(default=0.0, ge=0, le=100)
    drift_cadence_days: int = Field(default=7, ge=1)
    drift_until_venue: str | None = "chachas"
    days_skipped_per_month: int = Field(default=0, ge=0, le=DAYS_PER_MONTH)
    snapshot_interval: int = Field(default=1, ge=1)

    island_cost_per_day: float | None = Field(default=None, ge=0)
    item_prices: ItemPrices | None = None

    edvd_jump: EdvdJumpConfig | None = None
    candy_jump: CandyJumpConfig | None = None
    stacked_candy_jump: StackedCandyJumpConfig | None = None
    energy_jump: EnergyJumpConfig | None = None
    loss_revive: LossReviveConfig | None = None
    diabetes_day: DiabetesDayConfig | None = None

    @classmethod
    def for_months(cls, months: int, **kwargs) -> SimulationConfiguration:
        return cls(end_day=months * DAYS_PER_MONTH, **kwargs)

    @model_validator(mode="after")
    def day_range_valid(self) -> SimulationConfiguration:
        if self.end_day is not None and self.end_day < self.start_day:
            raise ValueError(f"end_day ({self.end_day}) must not be before start_day ({self.start_day})")
        if self.manual_energy is not None and self.end_day not in (None, self.start_day):
            raise ValueError("manual_energy simulates a single day; end_day must equal start_day")
        return self

    @model_validator(mode="after")
    def diabetes_day_scheduled(self) -> SimulationConfiguration:
        if self.diabetes_day is not None and self.diabetes_day.jump_days is None and self.start_date is None:
            raise ValueError("diabetes_day needs jump_days or a start_date")
        return self

    @property
    def last_day(self) -> int:
        if self.end_day is not None:
            return self.end_day
        if self.manual_energy is not None:
            return self.start_day
        return self.start_day + 12 * DAYS_PER_MONTH - 1

    @property
    def total_days(self) -> int:
        return self.last_day - self.start_day + 1

    def diabetes_day_days(self) -> list[int]:
        """Global days of the configured Diabetes Day jumps, in order."""
        if self.diabetes_day is None:
            return []
        if self.diabetes_day.jump_days is not None:
            return list(self.diabetes_day.jump_days)
        if self.start_date is None:
            raise InvalidConfiguration("diabetes_day needs jump_days or a start_date")
        return diabetes_day_jump_days(self.start_date, self.diabetes_day.number_of_jumps)

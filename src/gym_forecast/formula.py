"""Gym gain formula.

Per-train stat gain as a function of the current stat value, happiness,
perk bonus, gym dots and energy per train. Rounding follows half-up
semantics (``floor(x * 10**p + 0.5) / 10**p``), not Python's banker's
``round()``; the happiness multiplier is rounded twice and both steps
matter for matching observed in-game values.
"""

from __future__ import annotations

import math

from gym_forecast.models import Stat

DAMPING_THRESHOLD = 50_000_000
DAMPING_DIVISOR = 8.77635
HAPPY_SCALE = 250
HAPPY_COEFFICIENT = 0.07
MAX_HAPPY = 99_999
GAIN_DIVISOR = 200_000

# (happy lookup term, flat lookup term) per stat
STAT_CONSTANTS: dict[Stat, tuple[float, float]] = {
    Stat.STRENGTH: (1600, 1700),
    Stat.SPEED: (1600, 2000),
    Stat.DEFENSE: (2100, -600),
    Stat.DEXTERITY: (1800, 1500),
}


def round_half_up(value: float, places: int = 0) -> float:
    """Round to ``places`` decimals with ties going up."""
    factor = 10 ** places
    return math.floor(value * factor + 0.5) / factor


def two_stage_round(value: float, places: int = 2) -> int:
    """Round to ``places`` decimals first, then to an integer.

    ``175 * 0.70`` evaluates to ``122.49999999999999``; a single half-up
    rounding gives 122 while the two-stage rounding gives the intended 123.
    """
    return int(round_half_up(round_half_up(value, places), 0))


def happiness_multiplier(happy: float) -> float:
    inner = round_half_up(math.log(1 + happy / HAPPY_SCALE), 4)
    return round_half_up(1 + HAPPY_COEFFICIENT * inner, 4)


def damped_stat_value(value: float) -> float:
    """Stat value used by the formula, compressed above 50M."""
    if value < DAMPING_THRESHOLD:
        return value
    return (value - DAMPING_THRESHOLD) / (DAMPING_DIVISOR * math.log(value)) + DAMPING_THRESHOLD


def compute_stat_gain(
    stat: Stat,
    current_value: float,
    happy: float,
    perk_percent: float,
    dots: float,
    energy_per_train: float,
) -> float:
    """Gain for a single train of ``stat``.

    Never negative. The result scales linearly with dots, energy per train
    and ``1 + perk_percent / 100``.
    """
    happy_term, flat_term = STAT_CONSTANTS[Stat(stat)]
    base = (
        damped_stat_value(current_value) * happiness_multiplier(happy)
        + 8 * happy ** 1.05
        + happy_term * (1 - (happy / MAX_HAPPY) ** 2)
        + flat_term
    )
    gain = dots * energy_per_train * (1 + perk_percent / 100) / GAIN_DIVISOR * base
    return max(gain, 0.0)


def cumulative_stat_gain(
    stat: Stat,
    current_value: float,
    happy: float,
    perk_percent: float,
    dots: float,
    energy_per_train: float,
    trains: int,
    gain_multiplier: float = 1.0,
) -> float:
    """Total gain of ``trains`` consecutive trains.

    Each train's gain is added to the stat before the next one is computed.
    """
    value = current_value
    for _ in range(trains):
        value += compute_stat_gain(stat, value, happy, perk_percent, dots, energy_per_train) * gain_multiplier
    return value - current_value

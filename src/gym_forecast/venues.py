"""Gym catalog and best-gym selection.

The catalog is plain immutable data: a tuple of ``Venue`` records in unlock
order. It is passed to the engine explicitly, so alternative catalogs (e.g.
for tests or what-if runs) need no global state.
"""

from __future__ import annotations

from collections.abc import Sequence

from gym_forecast.models import STAT_ORDER, Stat, StatVector, Venue

SPECIALTY_RATIO = 1.25


def _defensive_pair_dominates(stats: StatVector) -> bool:
    return stats.defense + stats.dexterity >= SPECIALTY_RATIO * (stats.strength + stats.speed)


def _offensive_pair_dominates(stats: StatVector) -> bool:
    return stats.strength + stats.speed >= SPECIALTY_RATIO * (stats.defense + stats.dexterity)


def _single_stat_dominates(stat: Stat):
    def requirement(stats: StatVector) -> bool:
        others = [stats.get(other) for other in STAT_ORDER if other != stat]
        return stats.get(stat) >= SPECIALTY_RATIO * max(others)

    requirement.__name__ = f"{stat.value}_dominates"
    return requirement


def _gym(name, display_name, dots, energy_per_train, energy_to_unlock, cost_to_unlock, requirement=None) -> Venue:
    strength, speed, defense, dexterity = dots
    return Venue(
        name=name,
        display_name=display_name,
        strength=strength,
        speed=speed,
        defense=defense,
        dexterity=dexterity,
        energy_per_train=energy_per_train,
        energy_to_unlock=energy_to_unlock,
        cost_to_unlock=cost_to_unlock,
        specialty_requirement=requirement,
    )


GYMS: tuple[Venue, ...] = (
    # Lightweight
    _gym("premierfitness", "Premier Fitness", (2.0, 2.0, 2.0, 2.0), 5, 0, 10),
    _gym("averagejoes", "Average Joes", (2.4, 2.4, 2.7, 2.4), 5, 200, 100),
    _gym("woodysworkout", "Woody's Workout", (2.7, 3.2, 3.0, 2.7), 5, 700, 250),
    _gym("beachbods", "Beach Bods", (3.2, 3.2, 3.2, None), 5, 1700, 500),
    _gym("silvergym", "Silver Gym", (3.4, 3.6, 3.4, 3.2), 5, 3700, 1000),
    _gym("pourfemme", "Pour Femme", (3.4, 3.6, 3.6, 3.8), 5, 6450, 2500),
    _gym("daviesden", "Davies Den", (3.7, None, 3.7, 3.7), 5, 9450, 5000),
    _gym("globalgym", "Global Gym", (4.0, 4.0, 4.0, 4.0), 5, 12950, 10000),
    # Middleweight
    _gym("knuckleheads", "Knuckle Heads", (4.8, 4.4, 4.0, 4.2), 10, 16950, 50000),
    _gym("pioneerfitness", "Pioneer Fitness", (4.4, 4.6, 4.8, 4.4), 10, 22950, 100000),
    _gym("anabolicanomalies", "Anabolic Anomalies", (5.0, 4.6, 5.2, 4.6), 10, 29950, 250000),
    _gym("core", "Core", (5.0, 5.2, 5.0, 5.0), 10, 37950, 500000),
    _gym("racingfitness", "Racing Fitness", (5.0, 5.4, 4.8, 5.2), 10, 48950, 1000000),
    _gym("completecardio", "Complete Cardio", (5.5, 5.7, 5.5, 5.2), 10, 61370, 2000000),
    _gym("legsbumsandtums", "Legs, Bums and Tums", (None, 5.5, 5.5, 5.7), 10, 79370, 3000000),
    _gym("deepburn", "Deep Burn", (6.0, 6.0, 6.0, 6.0), 10, 97470, 5000000),
    # Heavyweight
    _gym("apollogym", "Apollo Gym", (6.0, 6.2, 6.4, 6.2), 10, 121610, 7500000),
    _gym("gunshop", "Gun Shop", (6.5, 6.4, 6.2, 6.2), 10, 152870, 10000000),
    _gym("forcetraining", "Force Training", (6.4, 6.5, 6.4, 6.8), 10, 189480, 15000000),
    _gym("chachas", "Cha Cha's", (6.4, 6.4, 6.8, 7.0), 10, 236120, 20000000),
    _gym("atlas", "Atlas", (7.0, 6.4, 6.4, 6.5), 10, 292640, 30000000),
    _gym("lastround", "Last Round", (6.8, 6.5, 7.0, 6.5), 10, 360415, 50000000),
    _gym("theedge", "The Edge", (6.8, 7.0, 7.0, 6.8), 10, 444950, 75000000),
    _gym("georges", "George's", (7.3, 7.3, 7.3, 7.3), 10, 551255, 100000000),
    # Specialty
    _gym("balboasgym", "Balboa's Gym", (None, None, 7.5, 7.5), 25, 236120, 50000000, _defensive_pair_dominates),
    _gym("frontlinefitness", "Frontline Fitness", (7.5, 7.5, None, None), 25, 236120, 50000000,
         _offensive_pair_dominates),
    _gym("gym3000", "Gym 3000", (8.0, None, None, None), 50, 551255, 100000000, _single_stat_dominates(Stat.STRENGTH)),
    _gym("mrisoyamas", "Mr. Isoyama's", (None, None, 8.0, None), 50, 551255, 100000000,
         _single_stat_dominates(Stat.DEFENSE)),
    _gym("totalrebound", "Total Rebound", (None, 8.0, None, None), 50, 551255, 100000000,
         _single_stat_dominates(Stat.SPEED)),
    _gym("elites", "Elites", (None, None, None, 8.0), 50, 551255, 100000000, _single_stat_dominates(Stat.DEXTERITY)),
)


def venue_by_name(catalog: Sequence[Venue], name: str) -> Venue | None:
    """Look a venue up by identifier or display name (case-insensitive)."""
    wanted = name.strip().lower()
    for venue in catalog:
        if venue.name == wanted or venue.display_name.lower() == wanted:
            return venue
    return None


def venue_index(catalog: Sequence[Venue], name: str) -> int:
    venue = venue_by_name(catalog, name)
    if venue is None:
        raise KeyError(f"unknown venue: {name!r}")
    return catalog.index(venue)


def is_unlocked(venue: Venue, energy_spent: float, unlock_speed_multiplier: float = 1.0) -> bool:
    return energy_spent >= venue.energy_to_unlock / unlock_speed_multiplier


def best_venue(
    catalog: Sequence[Venue],
    stat: Stat,
    energy_spent: float,
    unlock_speed_multiplier: float,
    stats: StatVector,
) -> Venue | None:
    """Highest-dots unlocked venue for ``stat``, or None if none qualifies.

    Ties go to the venue that comes first in the catalog. Specialty
    requirements are checked against ``stats`` on every call.
    """
    best: Venue | None = None
    best_dots = 0.0
    for venue in catalog:
        dots = venue.dots(stat)
        if dots is None:
            continue
        if not is_unlocked(venue, energy_spent, unlock_speed_multiplier):
            continue
        if venue.specialty_requirement is not None and not venue.specialty_requirement(stats):
            continue
        if best is None or dots > best_dots:
            best = venue
            best_dots = dots
    return best

"""Tests for the gym catalog and best-gym selection."""

import pytest

from gym_forecast.models import Stat, StatVector
from gym_forecast.venues import GYMS, best_venue, is_unlocked, venue_by_name, venue_index


def _uniform(value: float) -> StatVector:
    return StatVector(value, value, value, value)


class TestCatalog:
    def test_size(self):
        assert len(GYMS) == 30
        assert sum(1 for g in GYMS if g.is_specialty) == 6

    def test_names_unique(self):
        names = [g.name for g in GYMS]
        assert len(names) == len(set(names))

    def test_standard_gyms_in_unlock_order(self):
        standard = [g.energy_to_unlock for g in GYMS if not g.is_specialty]
        assert standard == sorted(standard)

    def test_first_gym_free_and_complete(self):
        first = GYMS[0]
        assert first.energy_to_unlock == 0
        assert all(first.offers(stat) for stat in Stat)

    def test_missing_stats(self):
        beach = venue_by_name(GYMS, "beachbods")
        assert beach.dots(Stat.DEXTERITY) is None
        assert not beach.offers(Stat.DEXTERITY)
        assert beach.offers(Stat.STRENGTH)


class TestLookup:
    def test_by_identifier(self):
        assert venue_by_name(GYMS, "silvergym").display_name == "Silver Gym"

    def test_by_display_name_case_insensitive(self):
        assert venue_by_name(GYMS, "SILVER GYM").name == "silvergym"
        assert venue_by_name(GYMS, "  cha cha's ").name == "chachas"

    def test_unknown(self):
        assert venue_by_name(GYMS, "nowhere") is None

    def test_index(self):
        assert venue_index(GYMS, "premierfitness") == 0
        with pytest.raises(KeyError):
            venue_index(GYMS, "nowhere")


class TestUnlock:
    def test_threshold_inclusive(self):
        silver = venue_by_name(GYMS, "silvergym")
        assert is_unlocked(silver, 3700)
        assert not is_unlocked(silver, 3699)

    def test_multiplier_lowers_requirement(self):
        silver = venue_by_name(GYMS, "silvergym")
        assert not is_unlocked(silver, 3000)
        assert is_unlocked(silver, 3000, unlock_speed_multiplier=1.3)


class TestBestVenue:
    def test_new_player(self):
        venue = best_venue(GYMS, Stat.STRENGTH, 0, 1.0, _uniform(1000))
        assert venue.name == "premierfitness"

    def test_highest_dots_wins(self):
        assert best_venue(GYMS, Stat.STRENGTH, 3700, 1.0, _uniform(1000)).name == "silvergym"

    def test_tie_goes_to_earlier_gym(self):
        # Silver Gym and Pour Femme both give 3.6 speed
        assert best_venue(GYMS, Stat.SPEED, 6450, 1.0, _uniform(1000)).name == "silvergym"
        # Global Gym and Knuckle Heads both give 4.0 defense
        assert best_venue(GYMS, Stat.DEFENSE, 16950, 1.0, _uniform(1000)).name == "globalgym"

    def test_skips_gyms_without_the_stat(self):
        # Davies Den has no speed
        assert best_venue(GYMS, Stat.SPEED, 9450, 1.0, _uniform(1000)).name in {"silvergym", "pourfemme"}

    def test_unlock_multiplier(self):
        assert best_venue(GYMS, Stat.STRENGTH, 3000, 1.3, _uniform(1000)).name == "silvergym"

    def test_specialty_requires_dominant_stat(self):
        spent = 600_000
        assert best_venue(GYMS, Stat.STRENGTH, spent, 1.0, _uniform(10_000_000)).name == "georges"
        lopsided = StatVector(strength=20_000_000, speed=1_000_000, defense=1_000_000, dexterity=1_000_000)
        assert best_venue(GYMS, Stat.STRENGTH, spent, 1.0, lopsided).name == "gym3000"

    def test_pair_specialty(self):
        stats = StatVector(strength=1_000_000, speed=1_000_000, defense=10_000_000, dexterity=10_000_000)
        assert best_venue(GYMS, Stat.DEFENSE, 600_000, 1.0, stats).name == "balboasgym"

    def test_more_energy_never_downgrades(self):
        stats = _uniform(1000)
        thresholds = sorted({g.energy_to_unlock for g in GYMS})
        for stat in Stat:
            dots = [best_venue(GYMS, stat, spent, 1.0, stats).dots(stat) for spent in thresholds]
            assert dots == sorted(dots)

    def test_no_eligible_venue(self):
        beach_only = (venue_by_name(GYMS, "beachbods"),)
        assert best_venue(beach_only, Stat.DEXTERITY, 10_000, 1.0, _uniform(1000)) is None
        assert best_venue(beach_only, Stat.STRENGTH, 0, 1.0, _uniform(1000)) is None
        assert best_venue((), Stat.STRENGTH, 0, 1.0, _uniform(1000)) is None

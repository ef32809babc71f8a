"""Section chaining: several configurations run back to back.

Each section starts from the exact final stats and energy spent of the one
before it. Drift-corrected weights carry over too while the drift settings
stay the same, so a chained run matches one uninterrupted run. Feature
results are merged by summing totals, so per-occurrence averages are derived
from the merged totals.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from gym_forecast.engine import ProgressionEngine
from gym_forecast.errors import InvalidConfiguration
from gym_forecast.models import FeatureKind, FeatureResult, SimulationResult, Venue
from gym_forecast.simulation_config import SimulationConfiguration, StatValues

logger = logging.getLogger(__name__)


def validate_sections(
    sections: Sequence[SimulationConfiguration], total_days: int | None = None,
) -> list[SimulationConfiguration]:
    """Return sections ordered by start day, or raise if they do not tile the range."""
    if not sections:
        raise InvalidConfiguration("At least one section is required")

    ordered = sorted(sections, key=lambda s: s.start_day)
    if ordered[0].start_day != 1:
        raise InvalidConfiguration(f"First section must start on day 1, not day {ordered[0].start_day}")

    for previous, current in zip(ordered, ordered[1:]):
        expected = previous.last_day + 1
        if current.start_day > expected:
            raise InvalidConfiguration(
                f"Gap between sections: days {expected}-{current.start_day - 1} are not covered"
            )
        if current.start_day < expected:
            raise InvalidConfiguration(
                f"Sections overlap: '{current.name}' starts on day {current.start_day} "
                f"but '{previous.name}' runs until day {previous.last_day}"
            )

    if total_days is not None and ordered[-1].last_day != total_days:
        raise InvalidConfiguration(
            f"Sections end on day {ordered[-1].last_day} but the simulation covers {total_days} days"
        )
    return ordered


def same_drift(a: SimulationConfiguration, b: SimulationConfiguration) -> bool:
    return (
        a.weights == b.weights
        and a.stat_drift_percent == b.stat_drift_percent
        and a.drift_cadence_days == b.drift_cadence_days
        and a.drift_until_venue == b.drift_until_venue
    )


def merge_features(
    merged: dict[FeatureKind, FeatureResult], features: dict[FeatureKind, FeatureResult],
) -> dict[FeatureKind, FeatureResult]:
    result = dict(merged)
    for kind, feature in features.items():
        result[kind] = result[kind].merge(feature) if kind in result else feature
    return result


def simulate_chained(
    catalog: Sequence[Venue],
    sections: Sequence[SimulationConfiguration],
    total_days: int | None = None,
) -> SimulationResult:
    """Run ``sections`` in day order as one continuous simulation.

    All sections are validated and their engines built before any day is
    simulated, so a bad section fails the whole run up front.
    """
    ordered = validate_sections(sections, total_days)
    for section in ordered:
        ProgressionEngine(catalog, section)

    snapshots = []
    features: dict[FeatureKind, FeatureResult] = {}
    boundaries: list[int] = []
    previous: SimulationResult | None = None
    previous_section: SimulationConfiguration | None = None

    for section in ordered:
        drift = None
        if previous is not None:
            drift = previous.drift if same_drift(previous_section, section) else None
            section = section.model_copy(update={
                "initial_stats": StatValues.from_vector(previous.final_stats),
                "initial_energy_spent": previous.final_energy_spent,
            })
        logger.info("Running section '%s' (days %d-%d)", section.name, section.start_day, section.last_day)
        previous = ProgressionEngine(catalog, section, drift=drift).run()
        previous_section = section
        snapshots.extend(previous.snapshots)
        features = merge_features(features, previous.features)
        boundaries.append(section.last_day)

    return SimulationResult(
        snapshots=snapshots,
        final_stats=previous.final_stats,
        final_energy_spent=previous.final_energy_spent,
        features=features,
        section_boundaries=boundaries,
        drift=previous.drift,
    )

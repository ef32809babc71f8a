"""Output handlers: JSON and CSV export of simulation results.

Stats stay unrounded inside the engine; everything here is rounded for
display only.
"""

from __future__ import annotations

import csv
import json
from pathlib import Path

from gym_forecast.formula import round_half_up
from gym_forecast.models import (
    STAT_ORDER,
    DailyCostResult,
    DiabetesDayResult,
    FeatureResult,
    IncomeResult,
    JumpFeatureResult,
    SimulationResult,
    StatVector,
    TrainingSession,
)

ROW_FIELDS = [
    "day", "session", "happy", "strength", "speed", "defense", "dexterity", "total",
    "energy_spent", "energy_available", "venues", "notes",
]


def _rounded(vector: StatVector, places: int = 0) -> dict[str, float]:
    return {stat.value: round_half_up(vector.get(stat), places) for stat in STAT_ORDER}


def feature_to_dict(feature: FeatureResult) -> dict:
    if isinstance(feature, JumpFeatureResult):
        return {
            "occurrences": feature.occurrences,
            "total_cost": feature.total_cost,
            "cost_per_occurrence": feature.cost_per_occurrence,
            "total_gains": _rounded(feature.total_gains, 2),
            "average_gains": _rounded(feature.average_gains, 2),
        }
    if isinstance(feature, DailyCostResult):
        return {"days": feature.days, "total_cost": feature.total_cost, "cost_per_day": feature.cost_per_day}
    if isinstance(feature, IncomeResult):
        return {
            "occurrences": feature.occurrences,
            "total_income": feature.total_income,
            "energy_used": feature.energy_used,
        }
    if isinstance(feature, DiabetesDayResult):
        return {
            "jump_days": feature.jump_days,
            "jump_gains": [_rounded(g, 2) for g in feature.jump_gains],
            "bonus_energy": feature.bonus_energy,
            "total_gains": _rounded(feature.total_gains, 2),
        }
    raise TypeError(f"unsupported feature result: {type(feature).__name__}")


def _session_to_dict(session: TrainingSession) -> dict:
    return {
        "kind": session.kind.value,
        "happy": round_half_up(session.happy),
        "stats_after": _rounded(session.stats_after),
        "gains": _rounded(session.gains, 2),
        "training": [
            {"stat": d.stat.value, "venue": d.venue, "energy": d.energy, "trains": d.trains}
            for d in session.details
        ],
        "notes": session.notes,
    }


def result_to_dict(result: SimulationResult, initial_stats: StatVector | None = None) -> dict:
    """JSON-ready view of a result."""
    data: dict = {
        "final_stats": _rounded(result.final_stats),
        "final_energy_spent": result.final_energy_spent,
        "section_boundaries": result.section_boundaries,
        "features": {kind.value: feature_to_dict(f) for kind, f in result.features.items()},
        "snapshots": [
            {
                "day": s.day,
                "stats": _rounded(s.stats),
                "venues": {stat.value: venue for stat, venue in s.venues.items()},
                "energy_spent": s.energy_spent,
                "energy_available": s.energy_available,
                "events": [e.value for e in s.events],
                "sessions": [_session_to_dict(session) for session in s.sessions],
                "notes": s.notes,
            }
            for s in result.snapshots
        ],
    }
    if result.drift is not None:
        data["drift"] = {
            "weights": {stat.value: weight for stat, weight in result.drift.weights.items()},
            "computed_on": result.drift.computed_on,
        }
    if initial_stats is not None:
        data["initial_stats"] = _rounded(initial_stats)
    return data


def snapshot_rows(result: SimulationResult, per_session: bool = False) -> list[dict]:
    """Flat rows, one per snapshot day or, with ``per_session``, one per session."""
    rows: list[dict] = []
    for snapshot in result.snapshots:
        venues = "; ".join(f"{stat.value}: {venue}" for stat, venue in snapshot.venues.items() if venue)
        base = {
            "day": snapshot.day,
            "energy_spent": round_half_up(snapshot.energy_spent),
            "energy_available": round_half_up(snapshot.energy_available),
            "venues": venues,
        }
        if per_session and snapshot.sessions:
            for session in snapshot.sessions:
                stats = _rounded(session.stats_after)
                rows.append({
                    **base,
                    "session": session.kind.value,
                    "happy": round_half_up(session.happy),
                    **stats,
                    "total": sum(stats.values()),
                    "notes": " | ".join(session.notes),
                })
            continue
        stats = _rounded(snapshot.stats)
        rows.append({
            **base,
            "session": "day",
            "happy": None,
            **stats,
            "total": sum(stats.values()),
            "notes": " | ".join(snapshot.notes),
        })
    return rows


def write_json(result: SimulationResult, output_path: str | Path, initial_stats: StatVector | None = None) -> int:
    """Write a result to a JSON file.

    Returns the number of snapshots written.
    """
    path = Path(output_path)
    with path.open("w") as f:
        json.dump(result_to_dict(result, initial_stats), f, indent=2, ensure_ascii=False)
    return len(result.snapshots)


def write_csv(rows: list[dict], output_path: str | Path) -> int:
    """Write flat rows to a CSV file. Returns the number of rows written."""
    path = Path(output_path)
    with path.open("w", newline="") as f:
        writer = csv.DictWriter(f, fieldnames=ROW_FIELDS)
        writer.writeheader()
        writer.writerows(rows)
    return len(rows)

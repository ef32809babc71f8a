"""Deterministic gym stat-growth forecasting."""

from gym_forecast.engine import ProgressionEngine, compare, simulate
from gym_forecast.errors import InvalidConfiguration
from gym_forecast.models import SimulationResult, Stat, StatVector
from gym_forecast.sections import simulate_chained
from gym_forecast.simulation_config import SimulationConfiguration
from gym_forecast.venues import GYMS

__all__ = [
    "GYMS",
    "InvalidConfiguration",
    "ProgressionEngine",
    "SimulationConfiguration",
    "SimulationResult",
    "Stat",
    "StatVector",
    "compare",
    "simulate",
    "simulate_chained",
]

"""Jump and boost events, one module per kind."""

from gym_forecast.jumps.base import JumpEffect, JumpEvent, ScheduledJump, near_any
from gym_forecast.jumps.candy import CandyJump, StackedCandyJump
from gym_forecast.jumps.diabetes_day import DiabetesDayJump, DiabetesDayJumpPlan, plan_diabetes_day
from gym_forecast.jumps.edvd import EdvdJump
from gym_forecast.jumps.energy_items import EnergyJump
from gym_forecast.jumps.loss_revive import LossRevive

__all__ = [
    "CandyJump",
    "DiabetesDayJump",
    "DiabetesDayJumpPlan",
    "EdvdJump",
    "EnergyJump",
    "JumpEffect",
    "JumpEvent",
    "LossRevive",
    "ScheduledJump",
    "StackedCandyJump",
    "near_any",
    "plan_diabetes_day",
]

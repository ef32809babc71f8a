"""Pre-built configurations for quick forecasts."""

from __future__ import annotations

from gym_forecast.simulation_config import (
    CandyJumpConfig,
    DiabetesDayConfig,
    EdvdJumpConfig,
    ItemPrices,
    LossReviveConfig,
    SimulationConfiguration,
    StatValues,
    company_benefit,
)

DEFAULT_PRICES = ItemPrices(
    dvd=4_000_000,
    xanax=830_000,
    ecstasy=60_000,
    points=45_000,
    candy={310: 1_000, 36: 2_500, 528: 6_000, 529: 8_000, 151: 60_000},
    energy_items={985: 30_000, 986: 40_000, 987: 150_000, 530: 300_000, 532: 500_000, 533: 700_000, 367: 12_000_000},
)

NEW_PLAYER = SimulationConfiguration(
    name="new_player",
    end_day=360,
    initial_stats=StatValues.uniform(1_000),
    hours_played=8,
    xanax_per_day=0,
    happy=5_025,
)

BALANCED = SimulationConfiguration(
    name="balanced",
    end_day=360,
    initial_stats=StatValues.uniform(80_000),
    weights=StatValues.uniform(1),
    happy=5_025,
    xanax_per_day=3,
    points_refill=True,
    item_prices=DEFAULT_PRICES,
)

SPEED_DEX = SimulationConfiguration(
    name="speed_dex",
    end_day=360,
    initial_stats=StatValues(strength=250_000, speed=400_000, defense=250_000, dexterity=400_000),
    weights=StatValues(strength=1, speed=1.25, defense=1, dexterity=1.25),
    perks=StatValues.uniform(7),
    xanax_per_day=3,
    points_refill=True,
    company_benefit=company_benefit("music_store"),
    starting_venue="knuckleheads",
    item_prices=DEFAULT_PRICES,
)

WEEKLY_EDVD = SimulationConfiguration(
    name="weekly_edvd",
    end_day=360,
    initial_stats=StatValues.uniform(1_000_000),
    perks=StatValues.uniform(10),
    xanax_per_day=3,
    points_refill=True,
    starting_venue="chachas",
    edvd_jump=EdvdJumpConfig(frequency_days=7, dvds_used=5),
    loss_revive=LossReviveConfig(),
    item_prices=DEFAULT_PRICES,
)

HALF_CANDY = SimulationConfiguration(
    name="half_candy",
    end_day=180,
    initial_stats=StatValues.uniform(50_000),
    xanax_per_day=2,
    candy_jump=CandyJumpConfig(frequency_days=1, item_id=151, quantity=48, drug_used="ecstasy"),
    company_benefit=company_benefit("candle_shop", stars=10),
    item_prices=DEFAULT_PRICES,
)

DIABETES_DAY = SimulationConfiguration(
    name="diabetes_day",
    end_day=60,
    initial_stats=StatValues.uniform(5_000_000),
    perks=StatValues.uniform(12),
    xanax_per_day=3,
    points_refill=True,
    starting_venue="georges",
    diabetes_day=DiabetesDayConfig(
        number_of_jumps=2,
        green_eggs=1,
        feathery_hotel_coupons=1,
        seasonal_mail=True,
        logo_energy_click=True,
        jump_days=[20, 22],
    ),
)

PRESETS: dict[str, SimulationConfiguration] = {
    "new_player": NEW_PLAYER,
    "balanced": BALANCED,
    "speed_dex": SPEED_DEX,
    "weekly_edvd": WEEKLY_EDVD,
    "half_candy": HALF_CANDY,
    "diabetes_day": DIABETES_DAY,
}

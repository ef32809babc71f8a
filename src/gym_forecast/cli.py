"""CLI interface for the gym stat-growth forecaster."""

from __future__ import annotations

import json
import sys
from pathlib import Path

import click
from pydantic import ValidationError

from gym_forecast.config import LOG_FORMATS, Config
from gym_forecast.engine import simulate
from gym_forecast.errors import InvalidConfiguration
from gym_forecast.formula import compute_stat_gain, cumulative_stat_gain
from gym_forecast.logging import setup_logging
from gym_forecast.models import STAT_ORDER, DiabetesDayResult, IncomeResult, Stat
from gym_forecast.output import snapshot_rows, write_csv, write_json
from gym_forecast.presets import PRESETS
from gym_forecast.simulation_config import DAYS_PER_MONTH, SimulationConfiguration
from gym_forecast.venues import GYMS, venue_by_name


@click.group()
@click.option("--log-format", type=click.Choice(LOG_FORMATS), help="Override GYM_FORECAST_LOG_FORMAT.")
@click.pass_context
def main(ctx: click.Context, log_format: str | None):
    """Gym stat-growth forecaster."""
    try:
        config = Config.from_env()
    except RuntimeError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)
    setup_logging(log_format or config.log_format, config.level)
    ctx.obj = config


@main.command("simulate")
@click.option(
    "--preset", "preset_name",
    type=click.Choice(list(PRESETS.keys())),
    help="Use a preset configuration.",
)
@click.option(
    "--config-file",
    type=click.Path(exists=True, path_type=Path),
    help="Load a configuration from a JSON file.",
)
@click.option("--months", type=int, help="Override the horizon in 30-day months.")
@click.option("--snapshot-interval", type=int, help="Keep every Nth day (jump days are always kept).")
@click.option("--output", "-o", type=click.Path(path_type=Path), help="Write the result to a JSON file.")
@click.option("--csv", "csv_path", type=click.Path(path_type=Path), help="Write one row per day to a CSV file.")
@click.pass_obj
def simulate_command(
    config: Config,
    preset_name: str | None,
    config_file: Path | None,
    months: int | None,
    snapshot_interval: int | None,
    output: Path | None,
    csv_path: Path | None,
):
    """Forecast stat growth for one configuration."""
    if preset_name and config_file:
        click.echo("Error: Specify either --preset or --config-file, not both.", err=True)
        sys.exit(1)

    if not preset_name and not config_file:
        click.echo("Error: Specify --preset or --config-file.", err=True)
        sys.exit(1)

    try:
        if config_file:
            with config_file.open() as f:
                sim_config = SimulationConfiguration.model_validate(json.load(f))
        else:
            sim_config = PRESETS[preset_name]

        updates: dict = {"snapshot_interval": snapshot_interval or config.snapshot_interval}
        if months is not None:
            updates["end_day"] = sim_config.start_day + months * DAYS_PER_MONTH - 1
        sim_config = SimulationConfiguration.model_validate({**sim_config.model_dump(), **updates})

        click.echo(f"Simulating {sim_config.name} for {sim_config.total_days} days...")
        result = simulate(GYMS, sim_config)
    except (ValidationError, InvalidConfiguration) as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    initial = sim_config.initial_stats.to_vector()
    for stat in STAT_ORDER:
        start, end = initial.get(stat), result.final_stats.get(stat)
        click.echo(f"  {stat.value}: {start:,.0f} -> {end:,.0f} (+{end - start:,.0f})")
    click.echo(f"  total: {initial.total():,.0f} -> {result.final_stats.total():,.0f}")
    click.echo(f"  energy spent: {result.final_energy_spent:,.0f}")

    for kind, feature in result.features.items():
        if isinstance(feature, IncomeResult):
            click.echo(f"  {kind.value}: {feature.occurrences} times, income {feature.total_income:,.0f}")
        elif isinstance(feature, DiabetesDayResult):
            click.echo(f"  {kind.value}: {feature.occurrences} jumps, +{feature.total_gains.total():,.0f} stats")
        elif feature.total_cost is None:
            click.echo(f"  {kind.value}: cost unknown (missing item prices)")
        else:
            click.echo(f"  {kind.value}: cost {feature.total_cost:,.0f}")

    if output:
        n = write_json(result, output, initial_stats=initial)
        click.echo(f"Wrote {n} snapshots to {output}")
    if csv_path:
        n = write_csv(snapshot_rows(result), csv_path)
        click.echo(f"Wrote {n} rows to {csv_path}")


@main.command("list-presets")
def list_presets():
    """List available preset configurations."""
    for name, preset in PRESETS.items():
        stats = preset.initial_stats
        click.echo(f"{name}:")
        click.echo(f"  Days: {preset.start_day}-{preset.last_day}")
        click.echo(f"  Stats: {stats.strength:,.0f}/{stats.speed:,.0f}/{stats.defense:,.0f}/{stats.dexterity:,.0f}")
        click.echo(f"  Happy: {preset.happy:,.0f}")
        click.echo(f"  Xanax/day: {preset.xanax_per_day}, refill: {'yes' if preset.points_refill else 'no'}")
        jumps = [
            label for label, enabled in (
                ("eDVD", preset.edvd_jump), ("candy", preset.candy_jump),
                ("stacked candy", preset.stacked_candy_jump), ("energy", preset.energy_jump),
                ("loss/revive", preset.loss_revive), ("Diabetes Day", preset.diabetes_day),
            ) if enabled is not None
        ]
        click.echo(f"  Jumps: {', '.join(jumps) or 'none'}")
        click.echo()


@main.command("list-gyms")
def list_gyms():
    """List the gym catalog with dots per stat."""
    for venue in GYMS:
        dots = " ".join(
            f"{stat.value[:3]}={venue.dots(stat) if venue.offers(stat) else '-'}" for stat in STAT_ORDER
        )
        special = " (specialty)" if venue.is_specialty else ""
        click.echo(
            f"{venue.name:<18} {venue.display_name:<22} {dots}  "
            f"{venue.energy_per_train}E  unlock {venue.energy_to_unlock:,}E{special}"
        )


@main.command("gain")
@click.argument("stat", type=click.Choice([s.value for s in STAT_ORDER]))
@click.argument("value", type=float)
@click.option("--happy", type=float, default=5025, show_default=True)
@click.option("--perk", type=float, default=0.0, show_default=True, help="Perk bonus in percent.")
@click.option("--gym", "gym_name", required=True, help="Gym identifier or display name.")
@click.option("--energy", type=int, help="Total energy to spend (default: a single train).")
def gain(stat: str, value: float, happy: float, perk: float, gym_name: str, energy: int | None):
    """Stat gain for one train, or for a block of energy, at a given gym."""
    venue = venue_by_name(GYMS, gym_name)
    if venue is None:
        click.echo(f"Error: Unknown gym {gym_name!r}.", err=True)
        sys.exit(1)
    target = Stat(stat)
    dots = venue.dots(target)
    if dots is None:
        click.echo(f"Error: {venue.display_name} does not train {stat}.", err=True)
        sys.exit(1)

    single = compute_stat_gain(target, value, happy, perk, dots, venue.energy_per_train)
    click.echo(f"{venue.display_name}, {stat} {value:,.0f} at happy {happy:,.0f}: {single:,.4f} per train")
    if energy is not None:
        trains = energy // venue.energy_per_train
        total = cumulative_stat_gain(target, value, happy, perk, dots, venue.energy_per_train, trains)
        click.echo(f"{trains} trains ({trains * venue.energy_per_train}E): {total:,.2f} total")

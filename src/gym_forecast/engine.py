"""Progression engine: a day-by-day loop over gym training and jump events.

Each day: pick up drift-corrected weights, let at most one big jump (Diabetes
Day, then eDVD, then stacked candy) take over the day, otherwise apply the
ordinary boosts (energy items, candy jump, loss/revive), and finally train
whatever energy is left at the base happiness. Jump training and ordinary
training are kept as separate sessions.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence

from gym_forecast.energy import (
    DriftPolicy,
    allocate,
    daily_energy,
    is_skipped_day,
    stacking_day_energy,
    trains_for,
)
from gym_forecast.errors import InvalidConfiguration
from gym_forecast.formula import cumulative_stat_gain
from gym_forecast.items import POINTS_PER_REFILL
from gym_forecast.jumps import (
    CandyJump,
    DiabetesDayJump,
    EdvdJump,
    EnergyJump,
    JumpEffect,
    JumpEvent,
    LossRevive,
    StackedCandyJump,
    near_any,
)
from gym_forecast.jumps.base import MIN_DAYS_BETWEEN_BIG_JUMPS
from gym_forecast.logging import RunLogger
from gym_forecast.models import (
    STAT_ORDER,
    DailyCostResult,
    DailySnapshot,
    DriftState,
    FeatureKind,
    FeatureResult,
    ProgressionState,
    SessionKind,
    SimulationResult,
    Stat,
    StatVector,
    TrainingDetail,
    TrainingSession,
    Venue,
)
from gym_forecast.simulation_config import SimulationConfiguration
from gym_forecast.venues import best_venue, venue_by_name

logger = logging.getLogger(__name__)


def validate_configuration(catalog: Sequence[Venue], config: SimulationConfiguration) -> None:
    """Raise InvalidConfiguration for the first semantic problem found."""
    if config.last_day < config.start_day:
        raise InvalidConfiguration(f"Day range {config.start_day}-{config.last_day} is empty")

    if config.weights.total() <= 0:
        raise InvalidConfiguration("At least one stat weight must be greater than zero")

    if config.starting_venue is not None and venue_by_name(catalog, config.starting_venue) is None:
        raise InvalidConfiguration(f"Unknown starting venue: {config.starting_venue!r}")

    if config.stat_drift_percent > 0 and config.drift_until_venue is not None:
        if venue_by_name(catalog, config.drift_until_venue) is None:
            raise InvalidConfiguration(f"Unknown drift_until_venue: {config.drift_until_venue!r}")

    if config.locked_venue is not None:
        venue = venue_by_name(catalog, config.locked_venue)
        if venue is None:
            raise InvalidConfiguration(f"Unknown locked venue: {config.locked_venue!r}")
        unsupported = [s.value for s in STAT_ORDER if config.weights.get(s) > 0 and not venue.offers(s)]
        if unsupported:
            raise InvalidConfiguration(
                f"Locked venue {venue.display_name} does not train weighted stat(s): {', '.join(unsupported)}"
            )


class ProgressionEngine:
    """Runs one configuration over its day range."""

    def __init__(
        self, catalog: Sequence[Venue], config: SimulationConfiguration, drift: DriftState | None = None,
    ):
        validate_configuration(catalog, config)
        self.catalog = tuple(catalog)
        self.config = config
        self.locked = venue_by_name(self.catalog, config.locked_venue) if config.locked_venue else None
        self.drift = DriftPolicy(
            config.weights.as_mapping(),
            config.stat_drift_percent,
            config.drift_cadence_days,
            until_energy=self._drift_until_energy(),
            state=drift,
        )
        self.big_events, self.minor_events = self._build_events()
        self._seen_venues: set[str] = set()
        self._log = RunLogger(logger, config.name)

    # --- setup ---------------------------------------------------------------

    @property
    def base_energy(self) -> float:
        c = self.config
        if c.manual_energy is not None:
            return c.manual_energy
        return daily_energy(
            c.hours_played,
            c.xanax_per_day,
            c.points_refill,
            c.company_benefit.bonus_energy_per_day,
            c.max_energy,
        )

    def _drift_until_energy(self) -> float | None:
        c = self.config
        if c.stat_drift_percent <= 0 or c.drift_until_venue is None:
            return None
        venue = venue_by_name(self.catalog, c.drift_until_venue)
        return venue.energy_to_unlock

    def initial_energy_spent(self) -> float:
        c = self.config
        if c.initial_energy_spent is not None:
            return c.initial_energy_spent
        if c.starting_venue is not None:
            return venue_by_name(self.catalog, c.starting_venue).energy_to_unlock
        return 0.0

    def _build_events(self) -> tuple[list[JumpEvent], list[JumpEvent]]:
        c = self.config
        big: list[JumpEvent] = []
        minor: list[JumpEvent] = []

        dd: DiabetesDayJump | None = None
        if c.diabetes_day is not None:
            dd = DiabetesDayJump(
                c.diabetes_day,
                c.diabetes_day_days(),
                section_start=c.start_day,
                section_end=c.last_day,
                max_energy=c.max_energy,
                xanax_per_day=c.xanax_per_day,
            )
            big.append(dd)
        near_dd = near_any(dd.section_days() if dd is not None else ())

        edvd: EdvdJump | None = None
        if c.edvd_jump is not None:
            edvd = EdvdJump(
                c.edvd_jump,
                happy=c.happy,
                max_energy=c.max_energy,
                xanax_per_day=c.xanax_per_day,
                prices=c.item_prices,
                conflicts=near_dd,
            )
            big.append(edvd)

        if c.stacked_candy_jump is not None:
            def near_dd_or_edvd(day: int) -> bool:
                if near_dd(day):
                    return True
                edvd_day = edvd.scheduled_day() if edvd is not None else None
                return edvd_day is not None and abs(day - edvd_day) < MIN_DAYS_BETWEEN_BIG_JUMPS

            big.append(StackedCandyJump(
                c.stacked_candy_jump,
                happy=c.happy,
                max_energy=c.max_energy,
                xanax_per_day=c.xanax_per_day,
                prices=c.item_prices,
                conflicts=near_dd_or_edvd,
            ))

        energy_jump: EnergyJump | None = None
        if c.energy_jump is not None:
            energy_jump = EnergyJump(c.energy_jump, max_energy=c.max_energy, prices=c.item_prices)
            minor.append(energy_jump)
        if c.candy_jump is not None:
            minor.append(CandyJump(
                c.candy_jump,
                happy=c.happy,
                max_energy=c.max_energy,
                has_refill=c.points_refill,
                energy_item_energy=energy_jump.energy if energy_jump is not None else 0.0,
                prices=c.item_prices,
            ))
        if c.loss_revive is not None:
            minor.append(LossRevive(c.loss_revive))
        return big, minor

    # --- training ------------------------------------------------------------

    def _venue_for(
        self, stat: Stat, state: ProgressionState, energy_spent: float, stats: StatVector,
    ) -> Venue | None:
        if self.locked is not None:
            return self.locked
        venue = best_venue(
            self.catalog, stat, energy_spent, self.config.company_benefit.unlock_speed_multiplier, stats,
        )
        if venue is not None and venue.name not in self._seen_venues:
            self._seen_venues.add(venue.name)
            self._log.debug("Training %s at %s", stat.value, venue.display_name)
        return venue

    def _train(
        self,
        state: ProgressionState,
        energy: float,
        happy: float,
        kind: SessionKind,
        only: frozenset[Stat] | None = None,
        notes: Sequence[str] = (),
    ) -> TrainingSession:
        """Train ``energy`` split by weight; each stat uses one gym for the session."""
        session = TrainingSession(kind=kind, happy=happy, stats_after=state.stats.copy(), notes=list(notes))
        weights = {s: w for s, w in state.weights.items() if w > 0 and (only is None or s in only)}
        if not weights or energy <= 0:
            return session

        c = self.config
        stats_before = state.stats.copy()
        spent_before = state.energy_spent
        for stat, share in allocate(energy, weights).items():
            if share <= 0:
                continue
            venue = self._venue_for(stat, state, spent_before, stats_before)
            if venue is None:
                continue
            trains = trains_for(share, venue)
            if trains == 0:
                continue
            current = state.stats.get(stat)
            gain = cumulative_stat_gain(
                stat,
                current,
                happy,
                c.perks.get(stat),
                venue.dots(stat),
                venue.energy_per_train,
                trains,
                c.company_benefit.gain_multiplier,
            )
            energy_used = trains * venue.energy_per_train
            state.stats.set(stat, current + gain)
            state.energy_spent += energy_used
            session.details.append(TrainingDetail(stat, venue.display_name, energy_used, trains, gain))

        session.stats_after = state.stats.copy()
        return session

    # --- day loop ------------------------------------------------------------

    def _pick_big_jump(self, day: int, state: ProgressionState, skipped: bool) -> JumpEvent | None:
        chosen: JumpEvent | None = None
        for event in self.big_events:
            if event.scheduled_day() != day:
                continue
            if skipped or chosen is not None:
                event.defer(day)
            elif event.should_fire(day, state):
                chosen = event
        return chosen

    def _is_stacking_day(self, day: int) -> bool:
        return any(event.scheduled_day() == day + 1 for event in self.big_events)

    def run(self) -> SimulationResult:
        c = self.config
        state = ProgressionState(
            day=c.start_day,
            section_day=1,
            stats=c.initial_stats.to_vector(),
            energy_spent=self.initial_energy_spent(),
            weights=c.weights.as_mapping(),
        )
        base_energy = self.base_energy
        snapshots: list[DailySnapshot] = []
        active_days = 0

        self._log.info(
            "Simulating %s: days %d-%d, %.0f energy/day",
            c.name, c.start_day, c.last_day, base_energy,
            extra={"gym_forecast_days": c.total_days},
        )

        for day in range(c.start_day, c.last_day + 1):
            self._log.day = day
            section_day = day - c.start_day + 1
            state.day = day
            state.section_day = section_day
            state.weights = self.drift.weights_for(day, state.stats, state.energy_spent)

            skipped = is_skipped_day(day, c.days_skipped_per_month)
            sessions: list[TrainingSession] = []
            fired: list[JumpEvent] = []
            notes: list[str] = []
            venues: dict[Stat, str | None] = {stat: None for stat in STAT_ORDER}

            big = self._pick_big_jump(section_day, state, skipped)
            if skipped:
                pool = 0.0
                notes.append("Day skipped (war/vacation)")
            else:
                active_days += 1
                pool = base_energy
                if big is None and self._is_stacking_day(section_day):
                    pool = stacking_day_energy(c.max_energy, c.points_refill)
                    notes.append("Stacking for tomorrow's jump")
            available = pool

            if big is not None:
                effect = big.effect(section_day, state)
                session = self._train(
                    state, effect.session_energy, effect.happy, effect.session_kind,
                    effect.stats_to_train, effect.notes,
                )
                big.record(section_day, effect, session.gains)
                sessions.append(session)
                fired.append(big)
                notes.extend(effect.notes)
                pool = effect.replaces_energy or 0.0
                available = effect.session_energy + pool
                self._log.debug("%s at happy %.0f", big.feature.value, effect.happy)
            elif not skipped:
                pool = self._apply_minor_events(section_day, state, pool, sessions, fired, notes)
                available = pool + sum(s.energy_used for s in sessions)

            marked = any(event.marks_day for event in fired)
            if pool > 0:
                regular = self._train(state, pool, c.happy, SessionKind.REGULAR)
                if marked:
                    sessions.append(regular)
                for detail in regular.details:
                    venues[detail.stat] = detail.venue
            for session in sessions:
                for detail in session.details:
                    if venues[detail.stat] is None:
                        venues[detail.stat] = detail.venue

            if section_day == 1 or day == c.last_day or (section_day - 1) % c.snapshot_interval == 0 or marked:
                snapshots.append(DailySnapshot(
                    day=day,
                    stats=state.stats.copy(),
                    venues=venues,
                    energy_spent=state.energy_spent,
                    energy_available=available,
                    sessions=sessions if marked else [],
                    events=[event.feature for event in fired],
                    notes=notes,
                    skipped=skipped,
                ))

        self._log.day = None
        result = SimulationResult(
            snapshots=snapshots,
            final_stats=state.stats.copy(),
            final_energy_spent=state.energy_spent,
            features=self._feature_results(active_days),
            drift=self.drift.state,
        )
        self._log.info(
            "Finished %s: total stats %.0f, energy spent %.0f",
            c.name, result.final_stats.total(), result.final_energy_spent,
            extra={"gym_forecast_energy_spent": result.final_energy_spent},
        )
        return result

    def _apply_minor_events(
        self,
        day: int,
        state: ProgressionState,
        pool: float,
        sessions: list[TrainingSession],
        fired: list[JumpEvent],
        notes: list[str],
    ) -> float:
        """Apply energy items, candy jump and loss/revive; return the energy left."""
        effects: list[tuple[JumpEvent, JumpEffect]] = [
            (event, event.effect(day, state)) for event in self.minor_events if event.should_fire(day, state)
        ]
        for _, effect in effects:
            pool += effect.bonus_energy
        for i, (event, effect) in enumerate(effects):
            if effect.energy_reduction > 0:
                effect = event.fit_to_energy(effect, pool)
                effects[i] = (event, effect)
                pool -= effect.energy_reduction

        for event, effect in effects:
            gains = None
            if effect.session_kind is not None:
                session = self._train(
                    state, min(effect.session_energy, pool), effect.happy, effect.session_kind, notes=effect.notes,
                )
                pool -= session.energy_used
                sessions.append(session)
                gains = session.gains
            event.record(day, effect, gains)
            fired.append(event)
            notes.extend(effect.notes)
        return pool

    def _feature_results(self, active_days: int) -> dict[FeatureKind, FeatureResult]:
        c = self.config
        features: dict[FeatureKind, FeatureResult] = {}
        for event in self.big_events + self.minor_events:
            features[event.feature] = event.result()

        prices = c.item_prices
        if prices is not None and prices.xanax is not None and c.xanax_per_day > 0:
            features[FeatureKind.XANAX_COST] = DailyCostResult(
                FeatureKind.XANAX_COST, active_days, active_days * c.xanax_per_day * prices.xanax,
            )
        if prices is not None and prices.points is not None and c.points_refill:
            features[FeatureKind.POINTS_REFILL_COST] = DailyCostResult(
                FeatureKind.POINTS_REFILL_COST, active_days, active_days * POINTS_PER_REFILL * prices.points,
            )
        if c.island_cost_per_day is not None:
            features[FeatureKind.ISLAND_COST] = DailyCostResult(
                FeatureKind.ISLAND_COST, c.total_days, c.total_days * c.island_cost_per_day,
            )
        return features


def simulate(catalog: Sequence[Venue], config: SimulationConfiguration) -> SimulationResult:
    """Run a single configuration over its day range."""
    return ProgressionEngine(catalog, config).run()


def compare(
    catalog: Sequence[Venue], configs: Mapping[str, SimulationConfiguration],
) -> dict[str, SimulationResult]:
    """Run several independent configurations against the same catalog."""
    return {name: simulate(catalog, config) for name, config in configs.items()}

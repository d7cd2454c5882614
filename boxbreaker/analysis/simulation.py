"""
Monte Carlo box simulation.

Opens ``n_trials`` virtual booster boxes using the same slot model as the
closed-form EV and reports the distribution of box values. Its mean should
agree with ev_box within sampling noise; the percentiles show how swingy a
single box is.
"""

from collections.abc import Mapping, Sequence
from dataclasses import dataclass

import numpy as np

from boxbreaker.analysis.ev_model import bucket_mean, foil_slot_value
from boxbreaker.models.pack_model import PackModelConfig
from boxbreaker.models.rarity import FOIL_SLOT_RARITIES, RARE_SLOT_RARITIES, Finish
from boxbreaker.models.summary import RaritySummary


@dataclass(frozen=True)
class SimulationResult:
    """Distribution of simulated box values."""

    mean: float
    p5: float
    p50: float
    p95: float
    trials: int

    def to_dict(self) -> dict[str, float]:
        return {"mean": self.mean, "p5": self.p5, "p50": self.p50, "p95": self.p95}


def _draw(
    rng: np.random.Generator,
    odds: Sequence[float],
    values: Sequence[float],
    shape: tuple[int, int],
) -> np.ndarray:
    """
    Draw categorical samples and return their values.

    Uniform draws are matched against the cumulative odds. Draws landing
    past the table's total (tables summing to less than 1) pull nothing of
    value, matching the closed-form EV where missing mass contributes 0.
    """
    cumulative = np.cumsum(np.asarray(odds, dtype=float))
    picks = np.searchsorted(cumulative, rng.random(shape), side="left")
    priced = np.append(np.asarray(values, dtype=float), 0.0)
    return priced[np.minimum(picks, len(values))]


def _percentile(ordered: np.ndarray, q: float) -> float:
    return float(ordered[int(np.floor(q * (len(ordered) - 1)))])


def simulate_box_ev(
    summaries: Mapping[str, RaritySummary],
    config: PackModelConfig,
    n_trials: int,
    seed: int | None = None,
) -> SimulationResult:
    """
    Simulate opening ``n_trials`` boxes.

    Args:
        summaries: Rarity summaries; bucket means are the pull values
        config: Pack model, usually the result of apply_scenario
        n_trials: Number of boxes to open
        seed: Seed for a reproducible run

    Returns:
        Mean and 5th/50th/95th percentile box value. All zeros when
        n_trials is not positive or there are no summaries.
    """
    if n_trials <= 0 or not summaries:
        return SimulationResult(mean=0.0, p5=0.0, p50=0.0, p95=0.0, trials=max(n_trials, 0))

    rng = np.random.default_rng(seed)
    packs = config.packs_per_box
    floor = config.bulk_floor

    rare_draws = packs * config.slots.rare_or_higher_slots
    rare_values = _draw(
        rng,
        [config.rare_odds(r) for r in RARE_SLOT_RARITIES],
        [bucket_mean(summaries, r, Finish.BASE) for r in RARE_SLOT_RARITIES],
        (n_trials, rare_draws),
    )
    foil_values = _draw(
        rng,
        [config.foil_odds_for(r) for r in FOIL_SLOT_RARITIES],
        [foil_slot_value(summaries, r, floor) for r in FOIL_SLOT_RARITIES],
        (n_trials, packs),
    )

    bulk_per_box = packs * (
        config.slots.commons * floor.common + config.slots.uncommons * floor.uncommon
    )
    boxes = rare_values.sum(axis=1) + foil_values.sum(axis=1) + bulk_per_box
    ordered = np.sort(boxes)

    return SimulationResult(
        mean=float(boxes.mean()),
        p5=_percentile(ordered, 0.05),
        p50=_percentile(ordered, 0.50),
        p95=_percentile(ordered, 0.95),
        trials=n_trials,
    )

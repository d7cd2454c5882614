"""
Set report.

Runs the whole pricing pipeline for one release group:

    printings + price sources -> reconciled prices -> rarity summaries
    -> scenario-adjusted pack model -> pack/box/case EV, hit odds,
    optional Monte Carlo and sealed product comparison

The hosting application owns the selected set, scenario and priority and
passes them in on every call. A report is rebuilt from scratch whenever
any of them changes.

"No pricing data" is reported as ``has_pricing_data=False`` with every EV
set to None. An EV of 0.0 always means the priced cards are worth nothing.
"""

import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any

from boxbreaker.analysis.ev_model import (
    EVBreakdown,
    HitOdds,
    apply_scenario,
    ev_box,
    ev_breakdown,
    ev_case,
    summarize_hit_odds,
)
from boxbreaker.analysis.simulation import SimulationResult, simulate_box_ev
from boxbreaker.config import settings
from boxbreaker.models.pack_model import PackModelConfig
from boxbreaker.models.price import PriceIndex
from boxbreaker.models.printing import Printing
from boxbreaker.models.summary import RaritySummary
from boxbreaker.services.rarity_summary import build_rarity_summaries, priced_count
from boxbreaker.services.reconciler import PriceReconciler
from boxbreaker.services.release_groups import get_set_name
from boxbreaker.services.sealed_products import find_sealed_prices, value_ratio

logger = logging.getLogger(__name__)

DEFAULT_SCENARIO = "base"


@dataclass(frozen=True)
class SealedComparison:
    """Computed EV next to what the sealed product sells for."""

    box_price: float | None
    case_price: float | None
    box_value_ratio: float | None
    case_value_ratio: float | None


@dataclass(frozen=True)
class SetReport:
    """EV figures for one release group under one scenario and priority."""

    release_group: str
    set_name: str
    scenario: str
    priority: tuple[str, ...]
    price_field: str
    summaries: dict[str, RaritySummary]
    priced_printings: int
    pack_ev: float | None
    box_ev: float | None
    case_ev: float | None
    breakdown: EVBreakdown | None
    hit_odds: HitOdds | None
    simulation: SimulationResult | None = None
    sealed: SealedComparison | None = None

    @property
    def has_pricing_data(self) -> bool:
        return bool(self.summaries)

    def status_message(self) -> str:
        """Short, user-facing description of the report."""
        if not self.has_pricing_data:
            return f"{self.set_name}: no pricing data available"
        return (
            f"{self.set_name} ({self.scenario}): "
            f"pack ${self.pack_ev:,.2f}, box ${self.box_ev:,.2f}, case ${self.case_ev:,.2f} "
            f"from {self.priced_printings} priced printings"
        )


def build_set_report(
    printings: Sequence[Printing],
    sources: Mapping[str, PriceIndex],
    pack_model: PackModelConfig,
    release_group: str,
    scenario: str = DEFAULT_SCENARIO,
    priority: Sequence[str] | None = None,
    price_field: str | None = None,
    simulation_trials: int = 0,
    sealed_prices: Any | None = None,
    seed: int | None = None,
) -> SetReport:
    """
    Build the EV report for one release group.

    Args:
        printings: All printings in the catalog
        sources: Source name -> PriceIndex
        pack_model: Base pack model (scenarios are applied here)
        release_group: Set code to report on
        scenario: Scenario name; unknown names use the base odds
        priority: Source priority, defaults to settings.pricing_priority
        price_field: Price field, defaults to settings.price_field
        simulation_trials: Monte Carlo boxes to open; 0 skips the simulation
        sealed_prices: Raw sealed product price blob, if available
        seed: Seed for the simulation

    Returns:
        SetReport. EV fields are None when the set has no pricing data.
    """
    order = tuple(settings.pricing_priority if priority is None else priority)
    field = settings.price_field if price_field is None else price_field
    set_name = get_set_name(release_group)

    reconciler = PriceReconciler(sources, order, field)
    summaries = build_rarity_summaries(printings, reconciler, field, release_group)
    config = apply_scenario(pack_model, scenario)

    if not summaries:
        return SetReport(
            release_group=release_group,
            set_name=set_name,
            scenario=scenario,
            priority=order,
            price_field=field,
            summaries=summaries,
            priced_printings=0,
            pack_ev=None,
            box_ev=None,
            case_ev=None,
            breakdown=None,
            hit_odds=None,
        )

    breakdown = ev_breakdown(summaries, config, field)
    pack = breakdown.total
    box = ev_box(pack, config)
    case = ev_case(pack, config)

    simulation = None
    if simulation_trials > 0:
        simulation = simulate_box_ev(summaries, config, simulation_trials, seed=seed)

    sealed = None
    if sealed_prices is not None:
        found = find_sealed_prices(sealed_prices, set_name)
        sealed = SealedComparison(
            box_price=found.box,
            case_price=found.case,
            box_value_ratio=value_ratio(box, found.box),
            case_value_ratio=value_ratio(case, found.case),
        )

    report = SetReport(
        release_group=release_group,
        set_name=set_name,
        scenario=scenario,
        priority=order,
        price_field=field,
        summaries=summaries,
        priced_printings=priced_count(summaries),
        pack_ev=pack,
        box_ev=box,
        case_ev=case,
        breakdown=breakdown,
        hit_odds=summarize_hit_odds(config),
        simulation=simulation,
        sealed=sealed,
    )

    logger.info(
        "set_report_built",
        extra={
            "release_group": release_group,
            "scenario": scenario,
            "pack_ev": pack,
            "priced_printings": report.priced_printings,
        },
    )
    return report

from boxbreaker.analysis.ev_model import (
    EVBreakdown,
    HitOdds,
    apply_scenario,
    at_least_one_in,
    ev_box,
    ev_breakdown,
    ev_case,
    ev_pack,
    redistribute_chase_odds,
    summarize_hit_odds,
)
from boxbreaker.analysis.report import SealedComparison, SetReport, build_set_report
from boxbreaker.analysis.simulation import SimulationResult, simulate_box_ev

__all__ = [
    "EVBreakdown",
    "HitOdds",
    "SealedComparison",
    "SetReport",
    "SimulationResult",
    "apply_scenario",
    "at_least_one_in",
    "build_set_report",
    "ev_box",
    "ev_breakdown",
    "ev_case",
    "ev_pack",
    "redistribute_chase_odds",
    "simulate_box_ev",
    "summarize_hit_odds",
]

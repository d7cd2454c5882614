"""
Expected value model.

Combines rarity summaries with pack slot odds:

    pack EV = rare_or_higher_slots * sum(rare_slot_odds[r] * mean(r|base))
            + sum(foil_odds[r] * mean(r|foil))        # chase tier reads r|special
            + commons * bulk.common + uncommons * bulk.uncommon

Box and case EV are plain multiples of pack EV. Every function here is
pure: inputs are never modified and missing summary buckets contribute 0.
"""

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field

from boxbreaker.config import MAX_ENCHANTED_PER_PACK
from boxbreaker.models.pack_model import (
    ODDS_EPSILON,
    BulkFloor,
    PackModelConfig,
    odds_total,
    sanitize_odds,
)
from boxbreaker.models.printing import summary_key
from boxbreaker.models.rarity import (
    CHASE_RARITY,
    FOIL_SLOT_RARITIES,
    RARE_SLOT_RARITIES,
    Finish,
    Rarity,
)
from boxbreaker.models.summary import RaritySummary

logger = logging.getLogger(__name__)

# Foil-slot rarities that fall back to the bulk floor when unpriced
_BULK_RARITIES = (Rarity.COMMON, Rarity.UNCOMMON)


def clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


# =============================================================================
# SCENARIOS
# =============================================================================


def apply_scenario(base_config: PackModelConfig, scenario_name: str) -> PackModelConfig:
    """
    Apply a named scenario to a copy of the base config.

    Scenario rare-slot odds replace the base table wholesale. A scenario
    chase-tier rate moves foil-slot mass to or from the other rarities in
    proportion to their current share.

    Returns:
        A deep copy. Unknown scenario names return the unchanged copy.
    """
    config = base_config.model_copy(deep=True)

    scenario = config.scenarios.get(scenario_name)
    if scenario is None:
        logger.debug("scenario_not_found", extra={"scenario": scenario_name})
        return config

    if scenario.rare_slot_odds is not None:
        config.rare_slot_odds = dict(scenario.rare_slot_odds)

    if scenario.foil_enchanted_per_pack is not None:
        config.foil_odds = redistribute_chase_odds(
            config.foil_odds, scenario.foil_enchanted_per_pack
        )

    return config


def redistribute_chase_odds(
    foil_odds: Mapping[Rarity, float],
    target: float,
) -> dict[Rarity, float]:
    """
    Set the chase-tier foil odds to ``target`` and rebalance the others.

    Each non-chase entry gives up (or receives) ``delta * share`` where
    ``delta = target - current`` and ``share`` is its fraction of the
    non-chase mass. Entries are clamped at zero; any mass lost to clamping
    is recovered by rescaling the non-chase entries so the table keeps its
    original total.

    Known edge case: when the non-chase mass is zero there is nothing to
    redistribute. The chase entry is still set and the table total moves
    by ``delta`` (a warning is logged).
    """
    target = clamp(target, 0.0, MAX_ENCHANTED_PER_PACK)
    original_total = odds_total(foil_odds)
    current = foil_odds.get(CHASE_RARITY, 0.0)
    delta = target - current

    others = [r for r in FOIL_SLOT_RARITIES if r is not CHASE_RARITY and r in foil_odds]
    others_total = sum(foil_odds[r] for r in others)

    adjusted: dict[Rarity, float] = {}
    if others_total > 0:
        for rarity in others:
            share = foil_odds[rarity] / others_total
            adjusted[rarity] = max(0.0, foil_odds[rarity] - delta * share)
    else:
        adjusted = {rarity: foil_odds[rarity] for rarity in others}
        if delta:
            logger.warning(
                "chase_odds_unredistributed",
                extra={"remainder": delta, "target": target},
            )

    desired_others = max(min(original_total, 1.0) - target, 0.0)
    adjusted_total = sum(adjusted.values())
    if adjusted_total > 0 and abs(adjusted_total - desired_others) > ODDS_EPSILON:
        scale = desired_others / adjusted_total
        adjusted = {rarity: odds * scale for rarity, odds in adjusted.items()}

    adjusted[CHASE_RARITY] = target
    return sanitize_odds(adjusted, "foil_odds")


# =============================================================================
# CLOSED-FORM EV
# =============================================================================


@dataclass(frozen=True)
class EVBreakdown:
    """
    Pack EV split by slot type.

    Attributes:
        rare_slots: Contribution of all rare-or-higher slots together
        foil_slot: Contribution of the single foil slot
        bulk: Contribution of the guaranteed commons and uncommons
        contributions: ``"{rarity}|{finish}"`` -> contribution to pack EV
    """

    rare_slots: float = 0.0
    foil_slot: float = 0.0
    bulk: float = 0.0
    contributions: dict[str, float] = field(default_factory=dict)

    @property
    def total(self) -> float:
        return self.rare_slots + self.foil_slot + self.bulk


def bucket_mean(summaries: Mapping[str, RaritySummary], rarity: Rarity, finish: Finish) -> float:
    """Mean price of a bucket, 0 when the bucket is missing."""
    summary = summaries.get(summary_key(rarity, finish))
    return summary.mean if summary is not None else 0.0


def foil_slot_value(
    summaries: Mapping[str, RaritySummary],
    rarity: Rarity,
    bulk_floor: BulkFloor | None = None,
) -> float:
    """
    Value of pulling ``rarity`` in the foil slot.

    The chase tier is priced from its special bucket, falling back to a
    foil bucket. Unpriced common/uncommon foils fall back to the bulk floor.
    """
    if rarity is CHASE_RARITY:
        special = summaries.get(summary_key(rarity, Finish.SPECIAL))
        if special is not None:
            return special.mean
        return bucket_mean(summaries, rarity, Finish.FOIL)

    value = bucket_mean(summaries, rarity, Finish.FOIL)
    if not value and bulk_floor is not None and rarity in _BULK_RARITIES:
        return getattr(bulk_floor, rarity.value)
    return value


def _as_bulk_floor(bulk_floor: BulkFloor | Mapping[str, float] | None, config: PackModelConfig) -> BulkFloor:
    if bulk_floor is None:
        return config.bulk_floor
    if isinstance(bulk_floor, BulkFloor):
        return bulk_floor
    return BulkFloor(
        common=bulk_floor.get("common", 0.0),
        uncommon=bulk_floor.get("uncommon", 0.0),
    )


def ev_breakdown(
    summaries: Mapping[str, RaritySummary],
    config: PackModelConfig,
    price_field: str = "market",
    bulk_floor: BulkFloor | Mapping[str, float] | None = None,
) -> EVBreakdown:
    """
    Compute pack EV with per-slot and per-bucket contributions.

    Args:
        summaries: Rarity summaries (already built for ``price_field``)
        config: Pack model, usually the result of apply_scenario
        price_field: Price field the summaries were built from. Only
            logged; prices are not re-selected here.
        bulk_floor: Overrides config.bulk_floor

    Returns:
        A zero breakdown when there are no summaries at all; "no pricing
        data" is not turned into a bulk-floor-only EV.
    """
    if not summaries:
        return EVBreakdown()

    floor = _as_bulk_floor(bulk_floor, config)
    contributions: dict[str, float] = {}

    slots = config.slots.rare_or_higher_slots
    rare_slots = 0.0
    for rarity in RARE_SLOT_RARITIES:
        contribution = slots * config.rare_odds(rarity) * bucket_mean(summaries, rarity, Finish.BASE)
        contributions[summary_key(rarity, Finish.BASE)] = contribution
        rare_slots += contribution

    foil_slot = 0.0
    for rarity in FOIL_SLOT_RARITIES:
        contribution = config.foil_odds_for(rarity) * foil_slot_value(summaries, rarity, floor)
        finish = Finish.SPECIAL if rarity is CHASE_RARITY else Finish.FOIL
        contributions[summary_key(rarity, finish)] = contribution
        foil_slot += contribution

    bulk = config.slots.commons * floor.common + config.slots.uncommons * floor.uncommon

    logger.debug(
        "pack_ev_computed",
        extra={
            "price_field": price_field,
            "rare_slots": rare_slots,
            "foil_slot": foil_slot,
            "bulk": bulk,
        },
    )

    return EVBreakdown(
        rare_slots=rare_slots,
        foil_slot=foil_slot,
        bulk=bulk,
        contributions=contributions,
    )


def ev_pack(
    summaries: Mapping[str, RaritySummary],
    config: PackModelConfig,
    price_field: str = "market",
    bulk_floor: BulkFloor | Mapping[str, float] | None = None,
) -> float:
    """
    Expected value of one pack. 0 when there are no summaries.

    ``price_field`` does not re-select prices; build the summaries for the
    field you want.
    """
    return ev_breakdown(summaries, config, price_field, bulk_floor).total


def ev_box(pack_ev: float, config: PackModelConfig) -> float:
    return pack_ev * config.packs_per_box


def ev_case(pack_ev: float, config: PackModelConfig) -> float:
    return pack_ev * config.boxes_per_case * config.packs_per_box


# =============================================================================
# HIT ODDS
# =============================================================================


def at_least_one_in(p_per_pack: float, n_packs: int) -> float:
    """Probability of at least one hit in ``n_packs``: 1 - (1 - p)^n."""
    if n_packs <= 0:
        return 0.0
    p = clamp(p_per_pack, 0.0, 1.0)
    return 1.0 - (1.0 - p) ** n_packs


@dataclass(frozen=True)
class HitOdds:
    """Chase-tier hit chances and expected legendary pulls."""

    chase_per_pack: float
    chase_per_box: float
    chase_per_case: float
    legendary_per_pack: float
    legendary_per_box: float

    def to_dict(self) -> dict[str, dict[str, float]]:
        return {
            CHASE_RARITY.value: {
                "per_pack": self.chase_per_pack,
                "per_box": self.chase_per_box,
                "per_case": self.chase_per_case,
            },
            Rarity.LEGENDARY.value: {
                "expected_per_pack": self.legendary_per_pack,
                "expected_per_box": self.legendary_per_box,
            },
        }


def summarize_hit_odds(config: PackModelConfig) -> HitOdds:
    """
    Hit odds for a pack model.

    The chase tier only appears in the foil slot, so its per-pack chance
    is the foil-slot chase odds.
    """
    chase = config.foil_odds_for(CHASE_RARITY)
    legendary = config.slots.rare_or_higher_slots * config.rare_odds(Rarity.LEGENDARY)

    return HitOdds(
        chase_per_pack=chase,
        chase_per_box=at_least_one_in(chase, config.packs_per_box),
        chase_per_case=at_least_one_in(chase, config.packs_per_case),
        legendary_per_pack=legendary,
        legendary_per_box=legendary * config.packs_per_box,
    )

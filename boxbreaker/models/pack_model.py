"""
Pack model: slot probabilities for one booster product.

A booster pack is modelled as:
- ``commons`` + ``uncommons`` guaranteed low-value slots (bulk floor)
- ``rare_or_higher_slots`` slots drawn from ``rare_slot_odds``
- one foil slot drawn from ``foil_odds`` (any rarity, including the chase tier)

INVARIANTS:
- Every odds table sums to at most 1
- No odds entry is negative

Tables that break either invariant on load are repaired (negatives
clamped, oversized tables rescaled) and a warning is logged. Repair never
aborts loading; only structurally wrong input (non-numeric odds) fails
validation.
"""

import logging
import math
from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, Field, ValidationInfo, field_validator

from boxbreaker.models.rarity import RARE_SLOT_RARITIES, Rarity
from boxbreaker.parsers.rarity import lookup_rarity

logger = logging.getLogger(__name__)

# Tolerance when checking that a table sums to at most 1
ODDS_EPSILON = 1e-9


def odds_total(table: Mapping[Rarity, float]) -> float:
    """Total probability mass of an odds table."""
    return sum(table.values())


def sanitize_odds(table: Mapping[Rarity, float], table_name: str) -> dict[Rarity, float]:
    """
    Clamp negative or non-finite entries to 0 and rescale a table whose
    mass exceeds 1.

    Returns a new dict; the input is not modified.
    """
    cleaned: dict[Rarity, float] = {}
    for rarity, odds in table.items():
        if not math.isfinite(odds) or odds < 0:
            logger.warning(
                "odds_entry_clamped",
                extra={"table": table_name, "rarity": rarity.value, "odds": odds},
            )
            odds = 0.0
        cleaned[rarity] = float(odds)

    total = odds_total(cleaned)
    if total > 1 + ODDS_EPSILON:
        logger.warning(
            "odds_table_rescaled",
            extra={"table": table_name, "total": total},
        )
        cleaned = {rarity: odds / total for rarity, odds in cleaned.items()}

    return cleaned


def _normalize_odds_keys(value: Any, table_name: str) -> Any:
    """Accept any rarity spelling as an odds key ("super rare", "Super_Rare", ...)."""
    if not isinstance(value, Mapping):
        return value

    normalized: dict[Rarity, Any] = {}
    for key, odds in value.items():
        rarity = lookup_rarity(key)
        if rarity is None:
            logger.warning(
                "odds_key_unrecognized",
                extra={"table": table_name, "key": str(key)},
            )
            continue
        if rarity in normalized and _is_number(odds) and _is_number(normalized[rarity]):
            # Aliases of one tier (e.g. two chase labels) share its mass
            normalized[rarity] = normalized[rarity] + odds
        else:
            normalized[rarity] = odds
    return normalized


def _is_number(value: Any) -> bool:
    return isinstance(value, int | float) and not isinstance(value, bool)


def _restrict_to_rare_slot(table: dict[Rarity, float], table_name: str) -> dict[Rarity, float]:
    dropped = [r.value for r in table if r not in RARE_SLOT_RARITIES]
    if dropped:
        logger.warning(
            "rare_slot_odds_dropped",
            extra={"table": table_name, "rarities": dropped},
        )
    return {r: odds for r, odds in table.items() if r in RARE_SLOT_RARITIES}


class SlotCounts(BaseModel):
    """How many cards of each slot type a pack holds."""

    commons: int = Field(default=6, ge=0)
    uncommons: int = Field(default=3, ge=0)
    rare_or_higher_slots: int = Field(default=2, ge=0)


class BulkFloor(BaseModel):
    """Assumed resale value of a single base common / uncommon."""

    common: float = Field(default=0.0, ge=0.0, allow_inf_nan=False)
    uncommon: float = Field(default=0.0, ge=0.0, allow_inf_nan=False)


class ScenarioOverride(BaseModel):
    """
    Named what-if adjustment to the base odds.

    Attributes:
        rare_slot_odds: Replaces the base rare-slot table wholesale
        foil_enchanted_per_pack: Target chase-tier rate for the foil slot
    """

    rare_slot_odds: dict[Rarity, float] | None = None
    foil_enchanted_per_pack: float | None = Field(default=None, allow_inf_nan=False)

    @field_validator("rare_slot_odds", mode="before")
    @classmethod
    def _normalize_keys(cls, value: Any) -> Any:
        return _normalize_odds_keys(value, "scenario.rare_slot_odds")

    @field_validator("rare_slot_odds")
    @classmethod
    def _sanitize(cls, value: dict[Rarity, float] | None) -> dict[Rarity, float] | None:
        if value is None:
            return None
        table = _restrict_to_rare_slot(value, "scenario.rare_slot_odds")
        return sanitize_odds(table, "scenario.rare_slot_odds")


class PackModelConfig(BaseModel):
    """Probability table and product sizes driving the EV model."""

    rare_slot_odds: dict[Rarity, float]
    foil_odds: dict[Rarity, float]
    slots: SlotCounts = Field(default_factory=SlotCounts)
    packs_per_box: int = Field(default=24, ge=0)
    boxes_per_case: int = Field(default=4, ge=0)
    bulk_floor: BulkFloor = Field(default_factory=BulkFloor)
    scenarios: dict[str, ScenarioOverride] = Field(default_factory=dict)

    @field_validator("rare_slot_odds", "foil_odds", mode="before")
    @classmethod
    def _normalize_keys(cls, value: Any, info: ValidationInfo) -> Any:
        return _normalize_odds_keys(value, info.field_name)

    @field_validator("rare_slot_odds")
    @classmethod
    def _sanitize_rare_slot(cls, value: dict[Rarity, float]) -> dict[Rarity, float]:
        return sanitize_odds(_restrict_to_rare_slot(value, "rare_slot_odds"), "rare_slot_odds")

    @field_validator("foil_odds")
    @classmethod
    def _sanitize_foil(cls, value: dict[Rarity, float]) -> dict[Rarity, float]:
        return sanitize_odds(value, "foil_odds")

    @property
    def packs_per_case(self) -> int:
        return self.packs_per_box * self.boxes_per_case

    def rare_odds(self, rarity: Rarity) -> float:
        return self.rare_slot_odds.get(rarity, 0.0)

    def foil_odds_for(self, rarity: Rarity) -> float:
        return self.foil_odds.get(rarity, 0.0)

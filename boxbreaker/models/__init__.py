from boxbreaker.models.card import Card
from boxbreaker.models.pack_model import (
    BulkFloor,
    PackModelConfig,
    ScenarioOverride,
    SlotCounts,
    odds_total,
    sanitize_odds,
)
from boxbreaker.models.price import (
    PRICE_FIELDS,
    PriceComparison,
    PriceIndex,
    PriceObservation,
    ReconciledPrice,
)
from boxbreaker.models.printing import Printing, summary_key
from boxbreaker.models.rarity import (
    CHASE_RARITY,
    FOIL_SLOT_RARITIES,
    RARE_SLOT_RARITIES,
    Finish,
    Rarity,
)
from boxbreaker.models.summary import RaritySummary

__all__ = [
    "BulkFloor",
    "CHASE_RARITY",
    "Card",
    "FOIL_SLOT_RARITIES",
    "Finish",
    "PRICE_FIELDS",
    "PackModelConfig",
    "PriceComparison",
    "PriceIndex",
    "PriceObservation",
    "Printing",
    "RARE_SLOT_RARITIES",
    "Rarity",
    "RaritySummary",
    "ReconciledPrice",
    "ScenarioOverride",
    "SlotCounts",
    "odds_total",
    "sanitize_odds",
    "summary_key",
]

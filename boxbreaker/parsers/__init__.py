from boxbreaker.parsers.catalog import parse_card, parse_catalog
from boxbreaker.parsers.prices import (
    SOURCE_ADAPTERS,
    adapt_justtcg,
    adapt_lorcast,
    index_prices,
    index_source,
    index_sources,
    parse_price,
)
from boxbreaker.parsers.rarity import DEFAULT_CHASE_ALIASES, lookup_rarity, normalize_rarity

__all__ = [
    "DEFAULT_CHASE_ALIASES",
    "SOURCE_ADAPTERS",
    "adapt_justtcg",
    "adapt_lorcast",
    "index_prices",
    "index_source",
    "index_sources",
    "lookup_rarity",
    "normalize_rarity",
    "parse_card",
    "parse_catalog",
    "parse_price",
]

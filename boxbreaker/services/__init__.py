"""
BoxBreaker services.

Catalog expansion, price reconciliation and aggregation.
"""

from boxbreaker.services.data_store import (
    PRICE_SOURCE_FILES,
    load_catalog,
    load_json,
    load_pack_model,
    load_price_sources,
    load_sealed_prices,
)
from boxbreaker.services.printing_expander import expand_printings
from boxbreaker.services.rarity_summary import (
    build_rarity_summaries,
    median,
    priced_count,
    trim_outliers,
    trimmed_mean,
)
from boxbreaker.services.reconciler import (
    PriceReconciler,
    compare_sources,
    filter_comparisons,
    resolve_price,
)
from boxbreaker.services.release_groups import (
    SET_NAMES,
    SET_RELEASE_ORDER,
    SPECIAL_SETS,
    ReleaseGroup,
    get_set_name,
    list_release_groups,
)
from boxbreaker.services.sealed_products import SealedPrices, find_sealed_prices, value_ratio

__all__ = [
    # Data loading
    "PRICE_SOURCE_FILES",
    "load_catalog",
    "load_json",
    "load_pack_model",
    "load_price_sources",
    "load_sealed_prices",
    # Catalog expansion
    "expand_printings",
    # Reconciliation
    "PriceReconciler",
    "compare_sources",
    "filter_comparisons",
    "resolve_price",
    # Summaries
    "build_rarity_summaries",
    "median",
    "priced_count",
    "trim_outliers",
    "trimmed_mean",
    # Release groups
    "SET_NAMES",
    "SET_RELEASE_ORDER",
    "SPECIAL_SETS",
    "ReleaseGroup",
    "get_set_name",
    "list_release_groups",
    # Sealed product
    "SealedPrices",
    "find_sealed_prices",
    "value_ratio",
]

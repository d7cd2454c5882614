"""
Sealed product market prices.

Looks up what a booster box or case of a set actually sells for, so the
computed EV can be compared with the price of buying the product.
"""

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from boxbreaker.parsers.prices import parse_price

BOOSTER_BOX = "booster_box"
CASE = "case"


@dataclass(frozen=True, slots=True)
class SealedPrices:
    """Observed market prices for one set's sealed product. None when unknown."""

    box: float | None = None
    case: float | None = None


def find_sealed_prices(blob: Any, set_name: str) -> SealedPrices:
    """
    Find the box and case price for a set.

    Args:
        blob: ``{"products": {key: {"product_type", "set", "best_price": {"price"}}}}``
        set_name: Display name of the set (see release_groups.get_set_name)

    Returns:
        SealedPrices with None for anything missing or unparseable.
    """
    products = blob.get("products") if isinstance(blob, Mapping) else None
    if not isinstance(products, Mapping):
        return SealedPrices()

    box: float | None = None
    case: float | None = None
    for product in products.values():
        if not isinstance(product, Mapping) or product.get("set") != set_name:
            continue
        best = product.get("best_price")
        price = parse_price(best.get("price")) if isinstance(best, Mapping) else None
        if product.get("product_type") == BOOSTER_BOX and price is not None:
            box = price
        elif product.get("product_type") == CASE and price is not None:
            case = price

    return SealedPrices(box=box, case=case)


def value_ratio(expected_value: float | None, market_price: float | None) -> float | None:
    """EV per dollar spent on the sealed product. None without a usable price."""
    if expected_value is None or market_price is None or market_price <= 0:
        return None
    return expected_value / market_price

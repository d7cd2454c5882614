"""
Rarity summaries.

Aggregates reconciled prices into per-(rarity, finish) statistics that the
EV model consumes. Printings without a usable price are left out of the
statistics entirely; they never count as zero.

An empty result means "no pricing data for this scope". Callers must
present that differently from an EV of zero.
"""

import logging
import math
from collections.abc import Callable, Iterable, Mapping, Sequence

from boxbreaker.config import MIN_TRIM_SAMPLE_SIZE, settings
from boxbreaker.models.price import PriceIndex, ReconciledPrice
from boxbreaker.models.printing import Printing
from boxbreaker.models.summary import RaritySummary
from boxbreaker.services.reconciler import PriceReconciler

logger = logging.getLogger(__name__)

PriceLookup = Callable[[str], ReconciledPrice | None]

# Source name reported when summaries are built from a bare PriceIndex
SINGLE_SOURCE_NAME = "default"


def median(values: Sequence[float]) -> float:
    """Middle value, or the average of the two middle values. 0 when empty."""
    if not values:
        return 0.0
    ordered = sorted(values)
    mid = len(ordered) // 2
    if len(ordered) % 2:
        return ordered[mid]
    return (ordered[mid - 1] + ordered[mid]) / 2


def trim_outliers(values: Sequence[float], fraction: float = 0.10) -> list[float]:
    """
    Sort and drop ``floor(n * fraction)`` values from each end.

    Samples smaller than MIN_TRIM_SAMPLE_SIZE are returned sorted but
    untrimmed, so small rarities (a handful of legendaries) keep every price.
    A fraction that would drop the whole sample trims nothing.
    """
    ordered = sorted(values)
    if len(ordered) < MIN_TRIM_SAMPLE_SIZE or fraction <= 0:
        return ordered
    k = math.floor(len(ordered) * fraction)
    if k == 0 or 2 * k >= len(ordered):
        return ordered
    return ordered[k : len(ordered) - k]


def trimmed_mean(values: Sequence[float], fraction: float = 0.10) -> float:
    """Mean of the symmetrically trimmed sample. 0 when empty."""
    kept = trim_outliers(values, fraction)
    if not kept:
        return 0.0
    return sum(kept) / len(kept)


def _as_lookup(price_lookup: PriceLookup | Mapping[str, object], price_field: str) -> PriceLookup:
    if isinstance(price_lookup, PriceReconciler):
        if price_lookup.field != price_field:
            return price_lookup.with_field(price_field)
        return price_lookup
    if isinstance(price_lookup, Mapping):
        index: PriceIndex = dict(price_lookup)  # type: ignore[arg-type]
        return PriceReconciler({SINGLE_SOURCE_NAME: index}, [SINGLE_SOURCE_NAME], price_field)
    return price_lookup


def build_rarity_summaries(
    printings: Iterable[Printing],
    price_lookup: PriceLookup | PriceIndex,
    price_field: str = "market",
    release_group: str | None = None,
    trim_fraction: float | None = None,
) -> dict[str, RaritySummary]:
    """
    Build rarity summaries for a set of printings.

    Args:
        printings: All printings (filtered here by release group)
        price_lookup: A PriceReconciler (or any printing_id -> ReconciledPrice
            callable), or a single PriceIndex
        price_field: Observation field to summarize
        release_group: Only summarize printings from this set code
        trim_fraction: Fraction trimmed from each end for the mean.
            Defaults to settings.trim_fraction.

    Returns:
        Dict keyed by ``"{rarity}|{finish}"``. Empty when nothing is priced.
    """
    lookup = _as_lookup(price_lookup, price_field)
    fraction = settings.trim_fraction if trim_fraction is None else trim_fraction

    buckets: dict[str, list[float]] = {}
    bucket_sources: dict[str, dict[str, int]] = {}
    considered = 0

    for printing in printings:
        if release_group and printing.set_code != release_group:
            continue
        considered += 1

        price = lookup(printing.printing_id)
        if price is None or price.value <= 0:
            continue

        key = printing.bucket_key
        buckets.setdefault(key, []).append(price.value)
        counts = bucket_sources.setdefault(key, {})
        counts[price.source] = counts.get(price.source, 0) + 1

    summaries: dict[str, RaritySummary] = {}
    for key, values in buckets.items():
        rarity, finish = key.split("|")
        summaries[key] = RaritySummary(
            rarity=rarity,
            finish=finish,
            count=len(values),
            mean=trimmed_mean(values, fraction),
            median=median(values),
            min=min(values),
            max=max(values),
            sources=bucket_sources[key],
        )

    if not summaries:
        logger.info(
            "no_pricing_data",
            extra={"release_group": release_group, "printings_considered": considered},
        )

    return summaries


def priced_count(summaries: Mapping[str, RaritySummary]) -> int:
    """Number of priced printings behind a summary table."""
    return sum(s.count for s in summaries.values())

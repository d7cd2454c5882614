"""
Multi-source price reconciliation.

Several pricing sources cover overlapping subsets of the catalog with
different numbers. Reconciliation picks ONE authoritative price per
printing: the first source in the caller's priority list that has a
usable (non-null, positive) value.

INVARIANT: The chosen source depends only on the priority list, never on
the iteration order of the sources mapping.
"""

import logging
from collections.abc import Iterable, Mapping, Sequence

from boxbreaker.models.price import PRICE_FIELDS, PriceComparison, PriceIndex, ReconciledPrice
from boxbreaker.models.printing import Printing

logger = logging.getLogger(__name__)


def resolve_price(
    printing_id: str,
    sources: Mapping[str, PriceIndex],
    priority: Sequence[str],
    field: str = "market",
) -> ReconciledPrice | None:
    """
    Resolve the authoritative price for one printing.

    Args:
        printing_id: Printing to price
        sources: Source name -> PriceIndex
        priority: Source names, most trusted first
        field: Observation field to read (market, low, median)

    Returns:
        The first usable price in priority order, or None when no listed
        source has one. None is the normal "no data" outcome.
    """
    for source in priority:
        index = sources.get(source)
        if index is None:
            continue
        observation = index.get(printing_id)
        if observation is None:
            continue
        value = observation.value(field)
        if value is not None and value > 0:
            return ReconciledPrice(
                printing_id=printing_id,
                value=value,
                source=source,
                field=field,
            )
    return None


class PriceReconciler:
    """
    Price lookup bound to a set of sources, a priority order and a field.

    Instances are callables (``reconciler(printing_id)``) so they can be
    passed anywhere a price lookup is expected.
    """

    def __init__(
        self,
        sources: Mapping[str, PriceIndex],
        priority: Sequence[str],
        field: str = "market",
    ):
        if field not in PRICE_FIELDS:
            raise ValueError(f"Unknown price field: {field!r}")

        self._sources = dict(sources)
        self._priority = tuple(priority)
        self._field = field

        missing = [name for name in self._priority if name not in self._sources]
        if missing:
            logger.info(
                "pricing_sources_unavailable",
                extra={"missing_sources": missing, "priority": list(self._priority)},
            )

    @property
    def priority(self) -> tuple[str, ...]:
        return self._priority

    @property
    def field(self) -> str:
        return self._field

    def resolve(self, printing_id: str) -> ReconciledPrice | None:
        return resolve_price(printing_id, self._sources, self._priority, self._field)

    __call__ = resolve

    def with_priority(self, priority: Sequence[str]) -> "PriceReconciler":
        """Same sources, different priority order."""
        return PriceReconciler(self._sources, priority, self._field)

    def with_field(self, field: str) -> "PriceReconciler":
        return PriceReconciler(self._sources, self._priority, field)

    def coverage(self, printings: Iterable[Printing]) -> dict[str, int]:
        """Source name -> number of the given printings it ends up pricing."""
        counts: dict[str, int] = {}
        for printing in printings:
            price = self.resolve(printing.printing_id)
            if price is not None:
                counts[price.source] = counts.get(price.source, 0) + 1
        return counts


# =============================================================================
# SOURCE COMPARISON
# =============================================================================


def compare_sources(
    printings: Iterable[Printing],
    sources: Mapping[str, PriceIndex],
    field: str = "market",
    release_group: str | None = None,
) -> list[PriceComparison]:
    """
    Compare prices for printings that two or more sources cover.

    Args:
        printings: Printings to compare
        sources: Source name -> PriceIndex
        field: Observation field to compare
        release_group: Only compare printings from this set

    Returns:
        Comparisons sorted by spread, largest disagreement first.
    """
    comparisons: list[PriceComparison] = []

    for printing in printings:
        if release_group and printing.set_code != release_group:
            continue

        prices: dict[str, float] = {}
        for name in sorted(sources):
            observation = sources[name].get(printing.printing_id)
            value = observation.value(field) if observation else None
            if value is not None and value > 0:
                prices[name] = value

        if len(prices) < 2:
            continue

        low, high = min(prices.values()), max(prices.values())
        spread = high - low
        comparisons.append(
            PriceComparison(
                printing_id=printing.printing_id,
                name=printing.name,
                set_code=printing.set_code,
                rarity=printing.rarity.value,
                finish=printing.finish.value,
                prices=prices,
                spread=spread,
                percent_diff=spread / low * 100,
            )
        )

    comparisons.sort(key=lambda c: (-c.spread, c.printing_id))
    return comparisons


def filter_comparisons(
    comparisons: Iterable[PriceComparison],
    min_percent_diff: float = 0.0,
    min_spread: float = 0.0,
    limit: int | None = None,
) -> list[PriceComparison]:
    """Keep comparisons whose disagreement is at least the given thresholds."""
    kept = [
        c for c in comparisons if c.percent_diff >= min_percent_diff and c.spread >= min_spread
    ]
    return kept if limit is None else kept[:limit]

from dataclasses import dataclass

PRICE_FIELDS = ("market", "low", "median")


@dataclass(frozen=True, slots=True)
class PriceObservation:
    """
    One source's price for a printing.

    Numeric fields are None when the source has no data. Zero and negative
    values never appear here; the indexer turns them into None.
    """

    market: float | None = None
    low: float | None = None
    median: float | None = None
    timestamp: str | None = None

    def value(self, field: str) -> float | None:
        """Return the named price field, or None for an unknown field."""
        if field not in PRICE_FIELDS:
            return None
        value: float | None = getattr(self, field)
        return value

    def has_data(self) -> bool:
        return any(getattr(self, f) is not None for f in PRICE_FIELDS)


# printing_id -> observation, one per source
PriceIndex = dict[str, PriceObservation]


@dataclass(frozen=True, slots=True)
class ReconciledPrice:
    """The authoritative price chosen for a printing."""

    printing_id: str
    value: float
    source: str
    field: str = "market"


@dataclass(frozen=True, slots=True)
class PriceComparison:
    """
    Side-by-side prices for one printing across sources.

    Attributes:
        prices: Source name -> usable price, only sources that had one
        spread: Highest minus lowest price
        percent_diff: Spread relative to the lowest price, in percent
    """

    printing_id: str
    name: str
    set_code: str
    rarity: str
    finish: str
    prices: dict[str, float]
    spread: float
    percent_diff: float

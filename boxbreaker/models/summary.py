from dataclasses import dataclass, field


@dataclass(frozen=True)
class RaritySummary:
    """
    Price statistics for every priced printing in one (rarity, finish) bucket.

    Attributes:
        count: Printings with a usable price (unpriced printings are excluded)
        mean: Trimmed mean of the bucket
        median: Median of the untrimmed bucket
        sources: Source name -> number of printings it priced
    """

    rarity: str
    finish: str
    count: int
    mean: float
    median: float
    min: float
    max: float
    sources: dict[str, int] = field(default_factory=dict)

    @property
    def key(self) -> str:
        return f"{self.rarity}|{self.finish}"

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    model_config = SettingsConfigDict(env_file=".env", env_prefix="BOXBREAKER_")

    app_name: str = "BoxBreaker"
    debug: bool = False

    data_dir: Path = Path(__file__).parent.parent / "data"

    # First source with a usable price wins
    pricing_priority: list[str] = ["justtcg", "dreamborn", "lorcast"]

    # Which PriceObservation field feeds the summaries (market, low, median)
    price_field: str = "market"

    # Fraction dropped from EACH end of a sorted price bucket
    trim_fraction: float = Field(default=0.10, ge=0.0, lt=0.5)

    simulation_trials: int = 5000

    # Alternate labels for the exclusive chase rarity
    chase_rarity_aliases: list[str] = ["enchanted", "iconic", "epic"]


settings = Settings()


# =============================================================================
# PRICING CONSTANTS
# =============================================================================

# Buckets smaller than this are averaged without trimming
MIN_TRIM_SAMPLE_SIZE = 5

# Upper bound for a scenario's chase-tier-per-pack rate
MAX_ENCHANTED_PER_PACK = 0.05

# Lorcast reports this (or more) when it has no real price
LORCAST_PLACEHOLDER_PRICE = 999.0

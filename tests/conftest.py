import pytest

from boxbreaker.models.card import Card
from boxbreaker.models.pack_model import PackModelConfig
from boxbreaker.models.price import PriceObservation


@pytest.fixture
def pack_model_data() -> dict:
    """Raw pack model JSON with complete odds tables."""
    return {
        "rare_slot_odds": {"rare": 0.78, "super rare": 0.17, "legendary": 0.05},
        "foil_odds": {
            "common": 0.54,
            "uncommon": 0.25,
            "rare": 0.12,
            "super rare": 0.05,
            "legendary": 0.0275,
            "enchanted": 0.0125,
        },
        "slots": {"commons": 6, "uncommons": 3, "rare_or_higher_slots": 2},
        "packs_per_box": 24,
        "boxes_per_case": 4,
        "scenarios": {
            "base": {},
            "conservative": {"foil_enchanted_per_pack": 0.01},
            "generous": {
                "rare_slot_odds": {"rare": 0.7, "super rare": 0.2, "legendary": 0.1},
                "foil_enchanted_per_pack": 0.03,
            },
        },
    }


@pytest.fixture
def pack_model(pack_model_data: dict) -> PackModelConfig:
    return PackModelConfig.model_validate(pack_model_data)


@pytest.fixture
def sample_cards() -> list[Card]:
    """A small two-set catalog."""
    return [
        Card(id="001-001", name="Ariel", subtitle="On Human Legs", rarity="Uncommon", set_code="001", number="1"),
        Card(id="001-002", name="Stitch", subtitle="Rock Star", rarity="Rare", set_code="001", number="2"),
        Card(id="001-003", name="Elsa", subtitle="Snow Queen", rarity="Super Rare", set_code="001", number="3"),
        Card(id="001-004", name="Maleficent", subtitle="Monstrous Dragon", rarity="Legendary", set_code="001", number="4"),
        Card(id="001-205", name="Elsa", subtitle="Spirit of Winter", rarity="Enchanted", set_code="001", number="205"),
        Card(id="002-001", name="Mickey Mouse", subtitle="Brave Little Tailor", rarity="Rare", set_code="002", number="1"),
    ]


@pytest.fixture
def price_sources() -> dict[str, dict[str, PriceObservation]]:
    """Two overlapping sources; justtcg is the usual first choice."""
    return {
        "justtcg": {
            "001-002-base": PriceObservation(market=2.0),
            "001-003-base": PriceObservation(market=6.0),
            "001-205-foil": PriceObservation(market=250.0),
        },
        "dreamborn": {
            "001-001-foil": PriceObservation(market=0.75),
            "001-002-base": PriceObservation(market=4.0),
            "001-002-foil": PriceObservation(market=9.0),
            "001-004-base": PriceObservation(market=30.0),
            "002-001-base": PriceObservation(market=1.5),
        },
    }

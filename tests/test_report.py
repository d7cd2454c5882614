import pytest

from boxbreaker.analysis.report import build_set_report
from boxbreaker.models.card import Card
from boxbreaker.models.pack_model import PackModelConfig
from boxbreaker.models.price import PriceObservation
from boxbreaker.models.printing import Printing
from boxbreaker.services.printing_expander import expand_printings

PRIORITY = ["justtcg", "dreamborn"]


@pytest.fixture
def printings(sample_cards: list[Card]) -> list[Printing]:
    return expand_printings(sample_cards)


class TestBuildSetReport:
    def test_priced_set(
        self,
        printings: list[Printing],
        price_sources: dict[str, dict[str, PriceObservation]],
        pack_model: PackModelConfig,
    ) -> None:
        report = build_set_report(printings, price_sources, pack_model, "001", priority=PRIORITY)

        assert report.has_pricing_data
        assert report.set_name == "The First Chapter"
        assert report.priority == ("justtcg", "dreamborn")
        assert report.priced_printings == 6
        assert report.pack_ev is not None
        assert report.box_ev == pytest.approx(report.pack_ev * 24)
        assert report.case_ev == pytest.approx(report.pack_ev * 96)
        assert report.hit_odds is not None
        assert report.simulation is None
        assert "pack $" in report.status_message()

    def test_set_without_prices(
        self,
        printings: list[Printing],
        price_sources: dict[str, dict[str, PriceObservation]],
        pack_model: PackModelConfig,
    ) -> None:
        cards = [Card(id="003-001", name="Nobody", rarity="Rare", set_code="003", number="1")]

        report = build_set_report(
            printings + expand_printings(cards), price_sources, pack_model, "003", priority=PRIORITY
        )

        assert not report.has_pricing_data
        assert report.pack_ev is None
        assert report.box_ev is None
        assert report.case_ev is None
        assert report.hit_odds is None
        assert report.status_message() == "Into the Inklands: no pricing data available"

    def test_priority_changes_result(
        self,
        printings: list[Printing],
        price_sources: dict[str, dict[str, PriceObservation]],
        pack_model: PackModelConfig,
    ) -> None:
        first = build_set_report(printings, price_sources, pack_model, "001", priority=PRIORITY)
        flipped = build_set_report(
            printings, price_sources, pack_model, "001", priority=list(reversed(PRIORITY))
        )

        # 001-002-base is $2 from justtcg and $4 from dreamborn
        assert first.summaries["rare|base"].mean == 2.0
        assert flipped.summaries["rare|base"].mean == 4.0
        assert flipped.pack_ev > first.pack_ev

    def test_scenario_applied(
        self,
        printings: list[Printing],
        price_sources: dict[str, dict[str, PriceObservation]],
        pack_model: PackModelConfig,
    ) -> None:
        base = build_set_report(printings, price_sources, pack_model, "001", priority=PRIORITY)
        generous = build_set_report(
            printings, price_sources, pack_model, "001", scenario="generous", priority=PRIORITY
        )

        assert generous.scenario == "generous"
        assert generous.pack_ev > base.pack_ev
        assert generous.hit_odds.chase_per_pack == pytest.approx(0.03)

    def test_simulation_and_sealed(
        self,
        printings: list[Printing],
        price_sources: dict[str, dict[str, PriceObservation]],
        pack_model: PackModelConfig,
    ) -> None:
        sealed_blob = {
            "products": {
                "tfc-box": {
                    "product_type": "booster_box",
                    "set": "The First Chapter",
                    "best_price": {"price": 150},
                }
            }
        }

        report = build_set_report(
            printings,
            price_sources,
            pack_model,
            "001",
            priority=PRIORITY,
            simulation_trials=200,
            sealed_prices=sealed_blob,
            seed=5,
        )

        assert report.simulation is not None
        assert report.simulation.trials == 200
        assert report.sealed is not None
        assert report.sealed.box_price == 150.0
        assert report.sealed.box_value_ratio == pytest.approx(report.box_ev / 150.0)
        assert report.sealed.case_price is None
        assert report.sealed.case_value_ratio is None

import pytest

from boxbreaker.models.card import Card
from boxbreaker.models.price import PriceObservation
from boxbreaker.services.printing_expander import expand_printings
from boxbreaker.services.rarity_summary import (
    SINGLE_SOURCE_NAME,
    build_rarity_summaries,
    median,
    priced_count,
    trim_outliers,
    trimmed_mean,
)
from boxbreaker.services.reconciler import PriceReconciler


class TestMedian:
    def test_odd(self) -> None:
        assert median([5.0, 1.0, 3.0]) == 3.0

    def test_even(self) -> None:
        assert median([4.0, 1.0, 3.0, 2.0]) == 2.5

    def test_empty(self) -> None:
        assert median([]) == 0.0


class TestTrimmedMean:
    def test_small_sample_not_trimmed(self) -> None:
        values = [1.0, 2.0, 3.0, 100.0]
        assert trim_outliers(values) == [1.0, 2.0, 3.0, 100.0]
        assert trimmed_mean(values) == pytest.approx(26.5)

    def test_drops_extremes_when_fraction_times_count_at_least_one(self) -> None:
        values = [float(v) for v in range(1, 11)] + [1000.0]  # 11 samples, k = 1

        kept = trim_outliers(values)

        assert min(values) not in kept
        assert max(values) not in kept
        assert trimmed_mean(values) == pytest.approx(sum(range(2, 11)) / 9)

    def test_five_samples_with_ten_percent_keeps_all(self) -> None:
        # floor(5 * 0.1) == 0
        assert trim_outliers([5.0, 4.0, 3.0, 2.0, 1.0]) == [1.0, 2.0, 3.0, 4.0, 5.0]

    def test_larger_fraction(self) -> None:
        values = [1.0, 2.0, 3.0, 4.0, 50.0]
        assert trim_outliers(values, fraction=0.2) == [2.0, 3.0, 4.0]

    def test_fraction_dropping_everything_keeps_sample(self) -> None:
        values = [1.0, 2.0, 3.0, 4.0, 5.0, 6.0]

        assert trim_outliers(values, fraction=0.5) == values
        assert trimmed_mean(values, fraction=0.5) == pytest.approx(3.5)
        assert trimmed_mean(values, fraction=0.9) == pytest.approx(3.5)

    def test_zero_fraction(self) -> None:
        assert trimmed_mean([1.0, 2.0, 3.0, 4.0, 10.0], fraction=0) == 4.0

    def test_empty(self) -> None:
        assert trimmed_mean([]) == 0.0


class TestBuildRaritySummaries:
    def test_groups_by_rarity_and_finish(self, sample_cards: list[Card], price_sources: dict) -> None:
        reconciler = PriceReconciler(price_sources, ["justtcg", "dreamborn"])

        summaries = build_rarity_summaries(expand_printings(sample_cards), reconciler, release_group="001")

        assert set(summaries) == {
            "uncommon|foil",
            "rare|base",
            "rare|foil",
            "super_rare|base",
            "legendary|base",
            "enchanted|special",
        }
        rare = summaries["rare|base"]
        assert rare.count == 1
        assert rare.mean == 2.0
        assert rare.sources == {"justtcg": 1}
        assert summaries["enchanted|special"].mean == 250.0

    def test_release_group_filter(self, sample_cards: list[Card], price_sources: dict) -> None:
        reconciler = PriceReconciler(price_sources, ["justtcg", "dreamborn"])

        summaries = build_rarity_summaries(expand_printings(sample_cards), reconciler, release_group="002")

        assert list(summaries) == ["rare|base"]
        assert summaries["rare|base"].mean == 1.5

    def test_unpriced_printings_excluded(self) -> None:
        cards = [Card(id=f"s-{n}", name=str(n), rarity="rare", set_code="s") for n in range(3)]
        index = {"s-0-base": PriceObservation(market=3.0), "s-1-base": PriceObservation(market=None)}

        summaries = build_rarity_summaries(expand_printings(cards), index)

        summary = summaries["rare|base"]
        assert summary.count == 1
        assert summary.min == 3.0
        assert summary.sources == {SINGLE_SOURCE_NAME: 1}

    def test_statistics(self) -> None:
        prices = [1.0, 2.0, 3.0, 4.0, 5.0, 6.0, 7.0, 8.0, 9.0, 100.0]
        cards = [Card(id=f"s-{n}", name=str(n), rarity="super rare", set_code="s") for n in range(len(prices))]
        index = {f"s-{n}-base": PriceObservation(market=p) for n, p in enumerate(prices)}

        summary = build_rarity_summaries(expand_printings(cards), index)["super_rare|base"]

        assert summary.count == 10
        assert summary.mean == pytest.approx(sum(range(2, 10)) / 8)
        assert summary.median == 5.5
        assert summary.min == 1.0
        assert summary.max == 100.0

    def test_price_field(self) -> None:
        cards = [Card(id="s-1", name="A", rarity="rare", set_code="s")]
        index = {"s-1-base": PriceObservation(market=3.0, low=1.0)}

        summaries = build_rarity_summaries(expand_printings(cards), index, price_field="low")

        assert summaries["rare|base"].mean == 1.0

    def test_reconciler_field_overridden_by_price_field(self, price_sources: dict) -> None:
        cards = [Card(id="001-002", name="Stitch", rarity="rare", set_code="001")]
        reconciler = PriceReconciler(price_sources, ["justtcg"], field="market")

        assert build_rarity_summaries(expand_printings(cards), reconciler, price_field="median") == {}

    def test_no_prices_is_empty(self, sample_cards: list[Card]) -> None:
        summaries = build_rarity_summaries(expand_printings(sample_cards), {})
        assert summaries == {}
        assert priced_count(summaries) == 0

    def test_returns_new_mapping_each_call(self, sample_cards: list[Card], price_sources: dict) -> None:
        reconciler = PriceReconciler(price_sources, ["justtcg", "dreamborn"])
        printings = expand_printings(sample_cards)

        first = build_rarity_summaries(printings, reconciler)
        second = build_rarity_summaries(printings, reconciler)

        assert first == second
        assert first is not second

    def test_priced_count(self, sample_cards: list[Card], price_sources: dict) -> None:
        reconciler = PriceReconciler(price_sources, ["justtcg", "dreamborn"])
        summaries = build_rarity_summaries(expand_printings(sample_cards), reconciler)
        assert priced_count(summaries) == 7

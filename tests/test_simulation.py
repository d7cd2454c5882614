import pytest

from boxbreaker.analysis.ev_model import ev_box, ev_pack
from boxbreaker.analysis.simulation import simulate_box_ev
from boxbreaker.models.card import Card
from boxbreaker.models.pack_model import PackModelConfig
from boxbreaker.models.price import PriceObservation
from boxbreaker.models.summary import RaritySummary
from boxbreaker.services.printing_expander import expand_printings
from boxbreaker.services.rarity_summary import build_rarity_summaries
from boxbreaker.services.reconciler import PriceReconciler


@pytest.fixture
def summaries(
    sample_cards: list[Card],
    price_sources: dict[str, dict[str, PriceObservation]],
) -> dict[str, RaritySummary]:
    reconciler = PriceReconciler(price_sources, ["justtcg", "dreamborn"])
    return build_rarity_summaries(expand_printings(sample_cards), reconciler, release_group="001")


class TestSimulateBoxEv:
    def test_mean_matches_closed_form(
        self, summaries: dict[str, RaritySummary], pack_model: PackModelConfig
    ) -> None:
        expected = ev_box(ev_pack(summaries, pack_model), pack_model)

        result = simulate_box_ev(summaries, pack_model, 5000, seed=7)

        assert result.trials == 5000
        assert result.mean == pytest.approx(expected, rel=0.05)

    def test_percentiles_ordered(
        self, summaries: dict[str, RaritySummary], pack_model: PackModelConfig
    ) -> None:
        result = simulate_box_ev(summaries, pack_model, 2000, seed=1)

        assert 0 <= result.p5 <= result.p50 <= result.p95

    def test_seed_reproducible(
        self, summaries: dict[str, RaritySummary], pack_model: PackModelConfig
    ) -> None:
        first = simulate_box_ev(summaries, pack_model, 500, seed=42)
        second = simulate_box_ev(summaries, pack_model, 500, seed=42)

        assert first == second

    def test_zero_trials(
        self, summaries: dict[str, RaritySummary], pack_model: PackModelConfig
    ) -> None:
        result = simulate_box_ev(summaries, pack_model, 0)

        assert result.to_dict() == {"mean": 0.0, "p5": 0.0, "p50": 0.0, "p95": 0.0}
        assert result.trials == 0

    def test_no_summaries(self, pack_model: PackModelConfig) -> None:
        result = simulate_box_ev({}, pack_model, 100, seed=3)
        assert result.mean == 0.0

    def test_incomplete_tables_pull_nothing(self) -> None:
        # Half of the rare slot draws land past the table and are worth 0
        config = PackModelConfig.model_validate({"rare_slot_odds": {"rare": 0.5}, "foil_odds": {}})
        summaries = {
            "rare|base": RaritySummary(
                rarity="rare", finish="base", count=1, mean=1.0, median=1.0, min=1.0, max=1.0
            )
        }

        result = simulate_box_ev(summaries, config, 4000, seed=11)

        # 24 packs * 2 slots * 0.5 * $1
        assert result.mean == pytest.approx(24.0, rel=0.05)

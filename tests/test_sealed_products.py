import pytest

from boxbreaker.services.sealed_products import SealedPrices, find_sealed_prices, value_ratio


@pytest.fixture
def sealed_blob() -> dict:
    return {
        "products": {
            "tfc-box": {
                "product_type": "booster_box",
                "set": "The First Chapter",
                "best_price": {"price": "180.00"},
            },
            "tfc-case": {
                "product_type": "case",
                "set": "The First Chapter",
                "best_price": {"price": 700},
            },
            "rotf-box": {
                "product_type": "booster_box",
                "set": "Rise of the Floodborn",
                "best_price": {"price": 0},
            },
        }
    }


class TestFindSealedPrices:
    def test_box_and_case(self, sealed_blob: dict) -> None:
        assert find_sealed_prices(sealed_blob, "The First Chapter") == SealedPrices(box=180.0, case=700.0)

    def test_zero_price_is_missing(self, sealed_blob: dict) -> None:
        assert find_sealed_prices(sealed_blob, "Rise of the Floodborn") == SealedPrices()

    def test_unknown_set(self, sealed_blob: dict) -> None:
        assert find_sealed_prices(sealed_blob, "Fabled") == SealedPrices()

    def test_malformed_blob(self) -> None:
        assert find_sealed_prices(["not", "a", "dict"], "The First Chapter") == SealedPrices()
        assert find_sealed_prices({"products": {"x": "junk"}}, "The First Chapter") == SealedPrices()


class TestValueRatio:
    def test_ratio(self) -> None:
        assert value_ratio(270.0, 180.0) == pytest.approx(1.5)

    def test_missing_values(self) -> None:
        assert value_ratio(None, 180.0) is None
        assert value_ratio(100.0, None) is None
        assert value_ratio(100.0, 0.0) is None

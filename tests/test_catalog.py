from boxbreaker.parsers.catalog import UNKNOWN_SET, parse_card, parse_catalog


class TestParseCard:
    def test_reads_core_fields(self) -> None:
        card = parse_card(
            {
                "id": "001-042",
                "name": "Belle",
                "title": "Strange but Special",
                "rarity": "Legendary",
                "setId": "001",
                "number": 42,
                "cost": 4,
                "strength": "2",
                "willpower": 4,
                "lore": 3,
                "colors": ["Amber"],
                "franchise": "Beauty and the Beast",
            }
        )

        assert card.id == "001-042"
        assert card.full_name == "Belle - Strange but Special"
        assert card.set_code == "001"
        assert card.number == "42"
        assert card.strength == 2
        assert card.colors == ("Amber",)
        assert card.finishes is None

    def test_set_code_from_nested_set(self) -> None:
        card = parse_card({"id": "x", "name": "A", "set": {"code": "003", "name": "Into the Inklands"}})
        assert card.set_code == "003"
        assert card.set_name == "Into the Inklands"

    def test_missing_set_is_unknown(self) -> None:
        assert parse_card({"id": "x", "name": "A"}).set_code == UNKNOWN_SET

    def test_id_derived_from_set_and_number(self) -> None:
        card = parse_card({"name": "A", "setCode": "002", "nr": 7})
        assert card.id == "002-7"

    def test_variants_become_finishes(self) -> None:
        card = parse_card({"id": "x", "name": "A", "variants": ["Base", {"finish": "cold foil"}, 3]})
        assert card.finishes == ("base", "cold foil")

    def test_empty_variants_means_default(self) -> None:
        assert parse_card({"id": "x", "name": "A", "variants": []}).finishes is None

    def test_non_numeric_attributes_are_none(self) -> None:
        card = parse_card({"id": "x", "name": "A", "cost": "X", "lore": True})
        assert card.cost is None
        assert card.lore is None


class TestParseCatalog:
    def test_list_catalog(self) -> None:
        cards = parse_catalog([{"id": "a", "name": "A"}, {"id": "b", "name": "B"}])
        assert [c.id for c in cards] == ["a", "b"]

    def test_mapping_catalog(self) -> None:
        cards = parse_catalog({"a": {"id": "a", "name": "A"}})
        assert cards[0].id == "a"

    def test_skips_non_mapping_records(self) -> None:
        cards = parse_catalog([{"id": "a", "name": "A"}, "junk", None])
        assert len(cards) == 1

    def test_unrecognized_blob_is_empty(self) -> None:
        assert parse_catalog("not a catalog") == []
        assert parse_catalog(None) == []

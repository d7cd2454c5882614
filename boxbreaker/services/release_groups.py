"""
Release groups (sets).

Display names and ordering for the booster products the EV is scoped to.
Main sets sort by release order; convention and promo sets follow.
"""

from collections.abc import Iterable
from dataclasses import dataclass

from boxbreaker.models.card import Card

SET_NAMES: dict[str, str] = {
    "001": "The First Chapter",
    "002": "Rise of the Floodborn",
    "003": "Into the Inklands",
    "004": "Ursula's Return",
    "005": "Shimmering Skies",
    "006": "Azurite Sea",
    "007": "Archazia's Island",
    "008": "Reign of Jafar",
    "009": "Fabled",
    "C1": "Convention Exclusives",
    "D23": "D23 Expo Exclusives",
    "P1": "Promos Series 1",
    "P2": "Promos Series 2",
}

SET_RELEASE_ORDER: tuple[str, ...] = (
    "001",
    "002",
    "003",
    "004",
    "005",
    "006",
    "007",
    "008",
    "009",
)

# Not sold in booster boxes
SPECIAL_SETS = frozenset({"C1", "D23", "P1", "P2"})


@dataclass(frozen=True, slots=True)
class ReleaseGroup:
    """A set present in the catalog."""

    code: str
    name: str
    card_count: int
    is_special: bool

    @property
    def is_booster_product(self) -> bool:
        return not self.is_special


def get_set_name(code: str) -> str:
    """Display name for a set code, ``"Set {code}"`` when unknown."""
    return SET_NAMES.get(code, f"Set {code}")


def list_release_groups(cards: Iterable[Card]) -> list[ReleaseGroup]:
    """
    Count cards per set and order the sets for display.

    Returns:
        Main sets in release order, then special sets, then unknown
        codes alphabetically.
    """
    counts: dict[str, int] = {}
    for card in cards:
        counts[card.set_code] = counts.get(card.set_code, 0) + 1

    groups = [
        ReleaseGroup(
            code=code,
            name=get_set_name(code),
            card_count=count,
            is_special=code in SPECIAL_SETS,
        )
        for code, count in counts.items()
    ]
    groups.sort(key=_sort_key)
    return groups


def _sort_key(group: ReleaseGroup) -> tuple[int, int, str]:
    if group.code in SET_RELEASE_ORDER:
        return (0, SET_RELEASE_ORDER.index(group.code), group.code)
    if group.is_special:
        return (1, 0, group.code)
    return (2, 0, group.code)

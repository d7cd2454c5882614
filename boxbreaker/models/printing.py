from dataclasses import dataclass

from boxbreaker.models.rarity import Finish, Rarity


@dataclass(frozen=True, slots=True)
class Printing:
    """
    One sellable finish of a card.

    ``printing_id`` is always ``{card_id}-{declared_finish}``. ``finish`` is
    the bucket the printing is priced in, which differs from the declared
    finish for chase-tier cards (always ``special``).
    """

    printing_id: str
    card_id: str
    name: str
    set_code: str
    number: str
    rarity: Rarity
    finish: Finish
    declared_finish: str
    is_special_rarity: bool = False

    @property
    def bucket_key(self) -> str:
        return summary_key(self.rarity, self.finish)


def summary_key(rarity: Rarity | str, finish: Finish | str) -> str:
    """Key used for rarity summaries: ``"{rarity}|{finish}"``."""
    rarity_value = rarity.value if isinstance(rarity, Rarity) else rarity
    finish_value = finish.value if isinstance(finish, Finish) else finish
    return f"{rarity_value}|{finish_value}"

"""
Printing expansion.

Expands each catalog card into the concrete products that are bought and
sold: one Printing per finish.

Identifier rule: ``printing_id = "{card_id}-{declared_finish}"``, where the
declared finish is the token the catalog lists (``base``/``foil`` by
default). Pricing sources key chase-tier cards by that same token, so the
id never uses the ``special`` bucket finish. The declared token is kept on
the Printing so the id can always be rebuilt from stored fields.
"""

from collections.abc import Iterable

from boxbreaker.models.card import Card
from boxbreaker.models.printing import Printing
from boxbreaker.models.rarity import CHASE_RARITY, Finish
from boxbreaker.parsers.rarity import normalize_rarity

DEFAULT_FINISHES: tuple[str, ...] = (Finish.BASE.value, Finish.FOIL.value)


def expand_printings(
    catalog: Iterable[Card],
    chase_aliases: Iterable[str] | None = None,
) -> list[Printing]:
    """
    Expand cards into printings.

    Args:
        catalog: Cards to expand
        chase_aliases: Labels meaning the chase tier (defaults to settings)

    Returns:
        Printings in catalog order, finishes in declared order.
    """
    aliases = None if chase_aliases is None else frozenset(chase_aliases)
    printings: list[Printing] = []

    for card in catalog:
        rarity = normalize_rarity(card.rarity, aliases)
        is_chase = rarity is CHASE_RARITY

        for declared in _declared_finishes(card):
            printings.append(
                Printing(
                    printing_id=f"{card.id}-{declared}",
                    card_id=card.id,
                    name=card.full_name,
                    set_code=card.set_code,
                    number=card.number,
                    rarity=rarity,
                    finish=Finish.SPECIAL if is_chase else _bucket_finish(declared),
                    declared_finish=declared,
                    is_special_rarity=is_chase,
                )
            )

    return printings


def _declared_finishes(card: Card) -> tuple[str, ...]:
    if not card.finishes:
        return DEFAULT_FINISHES

    seen: dict[str, None] = {}
    for finish in card.finishes:
        token = finish.strip().lower()
        if token:
            seen.setdefault(token, None)
    return tuple(seen) or DEFAULT_FINISHES


def _bucket_finish(declared: str) -> Finish:
    # Cold foil, holofoil, etc. all sell in the foil slot. Only the chase
    # tier uses the special bucket.
    if declared == Finish.BASE.value:
        return Finish.BASE
    return Finish.FOIL

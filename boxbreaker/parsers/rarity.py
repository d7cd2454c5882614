"""
Rarity normalization.

Pricing sources and catalogs disagree on how rarities are spelled
("Super Rare", "super_rare", "SUPER RARE"). Everything downstream works
with the canonical Rarity enum produced here.
"""

import re
from collections.abc import Iterable

from boxbreaker.config import settings
from boxbreaker.models.rarity import Rarity

DEFAULT_CHASE_ALIASES: frozenset[str] = frozenset(settings.chase_rarity_aliases)

_SEPARATORS = re.compile(r"[\s_\-]+")

_BASE_TIERS: dict[str, Rarity] = {
    "common": Rarity.COMMON,
    "uncommon": Rarity.UNCOMMON,
    "rare": Rarity.RARE,
    "super rare": Rarity.SUPER_RARE,
    "legendary": Rarity.LEGENDARY,
}


def _clean(raw: object) -> str:
    if not isinstance(raw, str):
        return ""
    return _SEPARATORS.sub(" ", raw).strip().lower()


def normalize_rarity(
    raw: object,
    chase_aliases: Iterable[str] | None = None,
) -> Rarity:
    """
    Map a raw rarity label to a canonical Rarity.

    Args:
        raw: Rarity as spelled by the source. Any type is accepted.
        chase_aliases: Labels meaning the chase tier. Defaults to the
            configured aliases.

    Returns:
        The canonical rarity. Unknown or missing labels become COMMON.
    """
    label = _clean(raw)

    tier = _BASE_TIERS.get(label)
    if tier is not None:
        return tier

    if label == Rarity.ENCHANTED.value:
        return Rarity.ENCHANTED

    aliases = DEFAULT_CHASE_ALIASES if chase_aliases is None else chase_aliases
    if label and label in {_clean(alias) for alias in aliases}:
        return Rarity.ENCHANTED

    return Rarity.COMMON


def lookup_rarity(
    raw: object,
    chase_aliases: Iterable[str] | None = None,
) -> Rarity | None:
    """
    Strict variant of normalize_rarity for configuration keys.

    Returns None instead of COMMON when the label is not recognized, so a
    typo in an odds table is not silently counted as common.
    """
    rarity = normalize_rarity(raw, chase_aliases)
    if rarity is Rarity.COMMON and _clean(raw) != Rarity.COMMON.value:
        return None
    return rarity

from enum import Enum


class Rarity(str, Enum):
    """Canonical rarity tiers, lowest to highest."""

    COMMON = "common"
    UNCOMMON = "uncommon"
    RARE = "rare"
    SUPER_RARE = "super_rare"
    LEGENDARY = "legendary"
    ENCHANTED = "enchanted"


class Finish(str, Enum):
    """Sellable finish of a printing."""

    BASE = "base"
    FOIL = "foil"
    SPECIAL = "special"


# Occupants of a rare-or-better slot
RARE_SLOT_RARITIES: tuple[Rarity, ...] = (
    Rarity.RARE,
    Rarity.SUPER_RARE,
    Rarity.LEGENDARY,
)

# Occupants of the foil slot, in cumulative draw order
FOIL_SLOT_RARITIES: tuple[Rarity, ...] = tuple(Rarity)

CHASE_RARITY = Rarity.ENCHANTED

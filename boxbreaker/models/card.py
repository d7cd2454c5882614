from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Card:
    """
    A logical card as listed in the catalog.

    Attributes:
        id: Catalog identifier (e.g., "001-042")
        name: Card name
        rarity: Rarity exactly as the catalog spells it
        set_code: Release group code (e.g., "001", "D23")
        number: Collector number within the set
        subtitle: Version title printed under the name
        finishes: Explicit finish list, or None for the usual base + foil
    """

    id: str
    name: str
    rarity: str
    set_code: str
    number: str = ""
    subtitle: str | None = None
    set_name: str | None = None
    cost: int | None = None
    strength: int | None = None
    willpower: int | None = None
    lore: int | None = None
    colors: tuple[str, ...] = ()
    franchise: str | None = None
    finishes: tuple[str, ...] | None = None

    @property
    def full_name(self) -> str:
        """Name with subtitle, as shown on the card."""
        if self.subtitle:
            return f"{self.name} - {self.subtitle}"
        return self.name

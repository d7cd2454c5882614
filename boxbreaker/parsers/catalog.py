"""
Card catalog parser.

Turns raw catalog JSON (a list of card records, or a mapping of id to
record) into immutable Card objects. Catalog exports spell the same
fields several ways; this module is the only place that knows them.
"""

import logging
from collections.abc import Mapping
from typing import Any

from boxbreaker.models.card import Card

logger = logging.getLogger(__name__)

UNKNOWN_SET = "UNK"


def parse_catalog(raw: Any) -> list[Card]:
    """
    Parse a raw catalog blob into cards.

    Args:
        raw: A list of card records, or a dict mapping card id to record

    Returns:
        Cards in catalog order. Records that are not mappings are skipped.
    """
    if isinstance(raw, Mapping):
        records = list(raw.values())
    elif isinstance(raw, list):
        records = raw
    else:
        logger.warning(
            "catalog_unrecognized_shape",
            extra={"type": type(raw).__name__},
        )
        return []

    cards: list[Card] = []
    skipped = 0
    for record in records:
        if not isinstance(record, Mapping):
            skipped += 1
            continue
        cards.append(parse_card(record))

    if skipped:
        logger.info(
            "catalog_records_skipped",
            extra={"skipped": skipped, "parsed": len(cards)},
        )

    return cards


def parse_card(record: Mapping[str, Any]) -> Card:
    """Build a Card from a single catalog record."""
    set_code = _set_code(record)
    number = str(record.get("number", record.get("nr", "")) or "")
    card_id = str(record.get("id") or f"{set_code}-{number}")

    return Card(
        id=card_id,
        name=str(record.get("name") or "Unknown"),
        rarity=str(record.get("rarity") or ""),
        set_code=set_code,
        number=number,
        subtitle=record.get("subtitle") or record.get("title") or record.get("version"),
        set_name=_set_name(record),
        cost=_to_int(record.get("cost")),
        strength=_to_int(record.get("strength")),
        willpower=_to_int(record.get("willpower")),
        lore=_to_int(record.get("lore")),
        colors=_colors(record),
        franchise=record.get("franchise"),
        finishes=_finishes(record),
    )


def _set_code(record: Mapping[str, Any]) -> str:
    for key in ("setId", "setCode", "set_code"):
        if record.get(key):
            return str(record[key])

    set_field = record.get("set")
    if isinstance(set_field, Mapping):
        code = set_field.get("code")
        return str(code) if code else UNKNOWN_SET
    if set_field:
        return str(set_field)

    return UNKNOWN_SET


def _set_name(record: Mapping[str, Any]) -> str | None:
    set_field = record.get("set")
    if isinstance(set_field, Mapping) and set_field.get("name"):
        return str(set_field["name"])
    name = record.get("setName") or record.get("set_name")
    return str(name) if name else None


def _finishes(record: Mapping[str, Any]) -> tuple[str, ...] | None:
    raw = record.get("variants", record.get("finishes"))
    if not isinstance(raw, list):
        return None

    finishes: list[str] = []
    for entry in raw:
        # Variant lists hold either plain tokens or {"finish": ...} objects
        token = entry.get("finish") if isinstance(entry, Mapping) else entry
        if isinstance(token, str) and token.strip():
            finishes.append(token.strip().lower())

    return tuple(finishes) or None


def _colors(record: Mapping[str, Any]) -> tuple[str, ...]:
    colors = record.get("colors")
    if isinstance(colors, list):
        return tuple(str(c) for c in colors)
    color = record.get("color") or colors
    if isinstance(color, str) and color:
        return tuple(c.strip() for c in color.split("-") if c.strip())
    return ()


def _to_int(value: Any) -> int | None:
    if isinstance(value, bool):
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None

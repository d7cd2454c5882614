"""
Price source indexing.

Every pricing source ships its own JSON layout. This module is the single
place that knows those layouts: it turns a raw blob into a PriceIndex
(printing_id -> PriceObservation) and nothing downstream ever inspects
raw price JSON.

Two canonical shapes are understood:

- Rows: a list of flat records carrying ``printing_id`` (or ``id``, or
  ``set_code`` + ``number`` + ``finish``) and ``market``/``low``/``median``.
- Card map: a dict keyed by card id whose values hold one price node per
  finish (``{"base": {...}, "foil": {...}}``).

Payloads in any other layout go through a source adapter first
(see SOURCE_ADAPTERS), which rewrites them into one of the two shapes.

INVARIANT: Indexing never raises on malformed content. Bad rows are
skipped and counted.
"""

import logging
import math
from collections.abc import Callable, Mapping
from typing import Any

from boxbreaker.config import LORCAST_PLACEHOLDER_PRICE
from boxbreaker.models.price import PriceIndex, PriceObservation

logger = logging.getLogger(__name__)


def parse_price(value: Any) -> float | None:
    """
    Parse a raw price into a positive float.

    Returns None for missing, unparseable, non-finite, zero or negative
    values. A zero price means "no data", never "worthless".
    """
    if value is None or isinstance(value, bool):
        return None
    try:
        price = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(price) or price <= 0:
        return None
    return price


def index_prices(source_blob: Any) -> PriceIndex:
    """
    Normalize one source's raw JSON into a PriceIndex.

    Args:
        source_blob: A list of price rows or a dict of card id -> finish nodes

    Returns:
        Dict mapping printing ids to observations. Empty for unusable input.
    """
    if isinstance(source_blob, list):
        return _index_rows(source_blob)
    if isinstance(source_blob, Mapping):
        return _index_card_map(source_blob)

    logger.warning(
        "price_source_unrecognized_shape",
        extra={"type": type(source_blob).__name__},
    )
    return {}


def _index_rows(rows: list[Any]) -> PriceIndex:
    index: PriceIndex = {}
    skipped = 0

    for row in rows:
        if not isinstance(row, Mapping):
            skipped += 1
            continue

        printing_id = _row_printing_id(row)
        if printing_id is None:
            logger.debug("price_row_without_id", extra={"row": dict(row)})
            skipped += 1
            continue

        index[printing_id] = PriceObservation(
            market=parse_price(row.get("market")),
            low=parse_price(row.get("low")),
            median=parse_price(row.get("median")),
            timestamp=_timestamp(row),
        )

    _log_skips("rows", skipped, len(index))
    return index


def _row_printing_id(row: Mapping[str, Any]) -> str | None:
    for key in ("printing_id", "id"):
        value = row.get(key)
        if isinstance(value, str | int) and not isinstance(value, bool) and str(value):
            return str(value)

    # Rows keyed by set/number/finish instead of an explicit id
    set_code, number, finish = row.get("set_code"), row.get("number"), row.get("finish")
    if set_code and number and finish:
        return f"{set_code}-{number}-{finish}"

    return None


def _index_card_map(cards: Mapping[str, Any]) -> PriceIndex:
    index: PriceIndex = {}
    skipped = 0

    for card_id, node in cards.items():
        if not isinstance(node, Mapping):
            skipped += 1
            continue

        found = False
        for finish, finish_node in node.items():
            observation = _finish_observation(finish_node)
            if observation is None:
                continue
            index[f"{card_id}-{str(finish).lower()}"] = observation
            found = True

        if not found:
            skipped += 1

    _log_skips("card_map", skipped, len(index))
    return index


def _finish_observation(node: Any) -> PriceObservation | None:
    """
    Read one per-finish price node.

    Accepts ``{"market": .., "low": .., "median": ..}``, a bare
    ``{"price": x}``, or a TCGplayer sub-node ``{"TP": {"price": x}}``.
    A single price fills all three fields.
    """
    if not isinstance(node, Mapping):
        return None

    if any(key in node for key in ("market", "low", "median")):
        return PriceObservation(
            market=parse_price(node.get("market")),
            low=parse_price(node.get("low")),
            median=parse_price(node.get("median")),
            timestamp=_timestamp(node),
        )

    tcgplayer = node.get("TP")
    if isinstance(tcgplayer, Mapping) and "price" in tcgplayer:
        price = parse_price(tcgplayer.get("price"))
    elif "price" in node:
        price = parse_price(node.get("price"))
    else:
        return None

    return PriceObservation(market=price, low=price, median=price, timestamp=_timestamp(node))


def _timestamp(node: Mapping[str, Any]) -> str | None:
    value = node.get("ts") or node.get("updated")
    return str(value) if value else None


def _log_skips(shape: str, skipped: int, indexed: int) -> None:
    if skipped:
        logger.info(
            "price_entries_skipped",
            extra={"shape": shape, "skipped": skipped, "indexed": indexed},
        )


# =============================================================================
# SOURCE ADAPTERS
# =============================================================================

JUSTTCG_CONDITION = "Near Mint"
JUSTTCG_BASE_PRINTINGS = frozenset({"normal", "regular", "base"})
JUSTTCG_FOIL_PRINTINGS = frozenset({"holofoil", "cold foil", "foil"})


def adapt_justtcg(blob: Any) -> dict[str, dict[str, dict[str, float]]]:
    """
    Rewrite a JustTCG payload into the card-map shape.

    JustTCG lists every condition/printing combination per card::

        {"cards": {"001-001": {"variants": {
            "Near_Mint_Normal": {"condition": "Near Mint", "printing": "Normal", "price": 0.25},
            ...
        }}}}

    Only Near Mint variants are used. The first positive price per finish wins.
    """
    cards = blob.get("cards") if isinstance(blob, Mapping) else None
    if not isinstance(cards, Mapping):
        return {}

    adapted: dict[str, dict[str, dict[str, float]]] = {}
    for card_id, card in cards.items():
        variants = card.get("variants") if isinstance(card, Mapping) else None
        if isinstance(variants, Mapping):
            variants = list(variants.values())
        if not isinstance(variants, list):
            continue

        finishes: dict[str, dict[str, float]] = {}
        for variant in variants:
            if not isinstance(variant, Mapping):
                continue
            if variant.get("condition", JUSTTCG_CONDITION) != JUSTTCG_CONDITION:
                continue
            finish = _justtcg_finish(variant.get("printing"))
            price = parse_price(variant.get("price"))
            if finish is None or price is None or finish in finishes:
                continue
            finishes[finish] = {"price": price}

        if finishes:
            adapted[str(card_id)] = finishes

    return adapted


def _justtcg_finish(printing: Any) -> str | None:
    label = str(printing or "Normal").strip().lower()
    if label in JUSTTCG_BASE_PRINTINGS:
        return "base"
    if label in JUSTTCG_FOIL_PRINTINGS:
        return "foil"
    return None


def adapt_lorcast(blob: Any) -> list[dict[str, Any]]:
    """
    Rewrite a Lorcast card dump into price rows.

    Lorcast cards carry ``prices: {"usd": "0.12", "usd_foil": "0.80"}``,
    either at the top level or under ``raw_data``. Prices at or above the
    placeholder value are dropped.
    """
    if isinstance(blob, Mapping):
        blob = blob.get("cards")
    if not isinstance(blob, list):
        return []

    rows: list[dict[str, Any]] = []
    for card in blob:
        if not isinstance(card, Mapping) or not card.get("id"):
            continue
        prices = card.get("prices")
        if not isinstance(prices, Mapping):
            raw_data = card.get("raw_data")
            prices = raw_data.get("prices") if isinstance(raw_data, Mapping) else None
        if not isinstance(prices, Mapping):
            continue

        for finish, key in (("base", "usd"), ("foil", "usd_foil")):
            price = parse_price(prices.get(key))
            if price is None or price >= LORCAST_PLACEHOLDER_PRICE:
                continue
            rows.append(
                {
                    "printing_id": f"{card['id']}-{finish}",
                    "market": price,
                    "low": price,
                    "median": price,
                    "ts": card.get("updated_at"),
                }
            )

    return rows


SOURCE_ADAPTERS: dict[str, Callable[[Any], Any]] = {
    "justtcg": adapt_justtcg,
    "lorcast": adapt_lorcast,
}


def index_source(source_name: str, blob: Any) -> PriceIndex:
    """Index a named source, applying its adapter if one is registered."""
    adapter = SOURCE_ADAPTERS.get(source_name)
    if adapter is not None:
        blob = adapter(blob)

    index = index_prices(blob)
    logger.debug("price_source_indexed", extra={"source": source_name, "entries": len(index)})
    return index


def index_sources(blobs: Mapping[str, Any]) -> dict[str, PriceIndex]:
    """Index every available source. Sources whose blob is None are left out."""
    return {name: index_source(name, blob) for name, blob in blobs.items() if blob is not None}

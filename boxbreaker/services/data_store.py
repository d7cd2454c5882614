"""
Data store.

Loads the JSON files the engine works from: the card catalog, the pack
model and one file per pricing source. Fetching those files is done by
separate scripts; this module only reads what is on disk.
"""

import json
import logging
from pathlib import Path
from typing import Any

from boxbreaker.config import settings
from boxbreaker.models.card import Card
from boxbreaker.models.pack_model import PackModelConfig
from boxbreaker.models.price import PriceIndex
from boxbreaker.parsers.catalog import parse_catalog
from boxbreaker.parsers.prices import index_source

logger = logging.getLogger(__name__)

CATALOG_FILE = "cards.json"
PACK_MODEL_FILE = "pack_model.json"
SEALED_PRICES_FILE = "BOX_PRICING.json"

# Source name -> file holding that source's raw payload
PRICE_SOURCE_FILES: dict[str, str] = {
    "dreamborn": "USD.json",
    "lorcast": "LORCAST.json",
    "justtcg": "JUSTTCG.json",
}


def _data_dir(data_dir: Path | None) -> Path:
    return settings.data_dir if data_dir is None else data_dir


def load_json(path: Path) -> Any:
    """
    Read a JSON file.

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValueError: If the file is not valid JSON
    """
    if not path.exists():
        raise FileNotFoundError(f"Data file not found at {path}.")

    try:
        with open(path, encoding="utf-8") as f:
            return json.load(f)
    except json.JSONDecodeError as e:
        raise ValueError(f"Data file at {path} is corrupted: {e}") from e


def load_optional_json(path: Path) -> Any | None:
    """Read a JSON file that may legitimately be absent. Returns None if so."""
    try:
        return load_json(path)
    except FileNotFoundError:
        logger.warning("optional_data_file_missing", extra={"path": str(path)})
        return None


def load_catalog(data_dir: Path | None = None) -> list[Card]:
    """
    Load the card catalog.

    Raises:
        FileNotFoundError: If cards.json doesn't exist
        ValueError: If cards.json is corrupted
    """
    path = _data_dir(data_dir) / CATALOG_FILE
    cards = parse_catalog(load_json(path))
    logger.info("Loaded %d cards from %s", len(cards), path)
    return cards


def load_pack_model(path: Path | None = None) -> PackModelConfig:
    """
    Load and validate the pack model.

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValueError: If the file is corrupted
        pydantic.ValidationError: If odds are not numeric
    """
    if path is None:
        path = settings.data_dir / PACK_MODEL_FILE
    return PackModelConfig.model_validate(load_json(path))


def load_price_sources(
    data_dir: Path | None = None,
    source_files: dict[str, str] | None = None,
) -> dict[str, PriceIndex]:
    """
    Load and index every pricing source found on disk.

    Missing source files are skipped with a warning. A corrupted file
    raises ValueError.

    Returns:
        Source name -> PriceIndex for each source that was found.
    """
    directory = _data_dir(data_dir)
    files = PRICE_SOURCE_FILES if source_files is None else source_files

    sources: dict[str, PriceIndex] = {}
    for name, filename in files.items():
        blob = load_optional_json(directory / filename)
        if blob is None:
            continue
        sources[name] = index_source(name, blob)
        logger.info("Indexed %d prices from %s", len(sources[name]), name)

    return sources


def load_sealed_prices(data_dir: Path | None = None) -> Any | None:
    """Raw sealed product price file, or None when there isn't one."""
    return load_optional_json(_data_dir(data_dir) / SEALED_PRICES_FILE)

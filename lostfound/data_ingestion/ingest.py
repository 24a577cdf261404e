"""
Bulk import of lost-property logs.

Usage (validation only):
    python -m lostfound.data_ingestion.ingest path/to/items.csv
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import TYPE_CHECKING, List

import pandas as pd
from pydantic import ValidationError

from ..items.models import ItemCreate, ItemStatus
from .config import DEFAULT_INGESTION_CONFIG, IngestionConfig

if TYPE_CHECKING:
    from ..items.store import ItemRepository

logger = logging.getLogger(__name__)

CANONICAL_COLUMNS: List[str] = [
    "title",
    "description",
    "category",
    "status",
    "location",
    "date_lost_found",
    "contact_info",
]

_COLUMN_ALIASES: dict[str, List[str]] = {
    "title": ["title", "name", "item", "item_name"],
    "description": ["description", "details", "notes"],
    "category": ["category", "type_of_item", "kind"],
    "status": ["status", "type", "report_type"],
    "location": ["location", "place", "where", "last_seen"],
    "date_lost_found": ["date_lost_found", "date", "date_found", "date_lost"],
    "contact_info": ["contact_info", "contact", "email", "phone"],
}


def _normalize_status(value: object, default: str) -> str | None:
    if value is None or pd.isna(value):
        return default
    raw = str(value).strip().lower()
    if not raw:
        return default
    if raw in ("lost", "missing"):
        return ItemStatus.lost.value
    if raw in ("found", "turned in", "recovered"):
        return ItemStatus.found.value
    return None


def _normalize_date(value: object) -> str | None:
    parsed = pd.to_datetime(value, errors="coerce")
    if pd.isna(parsed):
        return None
    return parsed.strftime("%Y-%m-%d")


def normalize_frame(df: pd.DataFrame, config: IngestionConfig = DEFAULT_INGESTION_CONFIG) -> pd.DataFrame:
    """Map a raw export onto ``CANONICAL_COLUMNS`` and drop unusable rows."""

    def _first_present(columns: List[str]) -> str | None:
        lowered = {c.strip().lower(): c for c in df.columns}
        for col in columns:
            if col in lowered:
                return lowered[col]
        return None

    canonical = pd.DataFrame(index=df.index)
    for target, aliases in _COLUMN_ALIASES.items():
        source = _first_present(aliases)
        if source is None:
            canonical[target] = pd.NA
        else:
            canonical[target] = df[source].astype("string").str.strip()

    canonical["category"] = canonical["category"].fillna("Other")
    canonical["description"] = canonical["description"].fillna(canonical["title"])
    canonical["status"] = canonical["status"].apply(
        lambda v: _normalize_status(v, config.default_status)
    )
    canonical["date_lost_found"] = canonical["date_lost_found"].apply(_normalize_date)

    canonical = canonical.replace("", pd.NA).dropna(subset=CANONICAL_COLUMNS)
    return canonical[CANONICAL_COLUMNS].reset_index(drop=True)


def load_items_csv(path: Path, config: IngestionConfig = DEFAULT_INGESTION_CONFIG) -> list[ItemCreate]:
    df = pd.read_csv(path, dtype=str)
    canonical = normalize_frame(df, config)
    dropped = len(df) - len(canonical)
    if dropped:
        logger.warning("Skipped %d incomplete rows in %s", dropped, path)

    items: list[ItemCreate] = []
    for idx, row in enumerate(canonical.to_dict(orient="records")):
        try:
            items.append(ItemCreate(**row))
        except ValidationError as exc:
            logger.warning("Skipped invalid row %d in %s: %s", idx, path, exc)
    return items


def run_ingestion(
    store: ItemRepository,
    config: IngestionConfig = DEFAULT_INGESTION_CONFIG,
    path: Path | None = None,
) -> int:
    """
    Import listings from a CSV export into *store*.

    Steps:
    - Read the CSV and map its columns onto the Item schema.
    - Create one item per usable row, owned by ``config.owner_user_id``.

    Returns the number of items created.
    """
    source = path or config.seed_csv
    if source is None:
        return 0

    created = 0
    for data in load_items_csv(source, config):
        store.create_item(data, config.owner_user_id)
        created += 1
    logger.info("Imported %d items from %s", created, source)
    return created


if __name__ == "__main__":
    # Dry run: validate an export before pointing LOSTFOUND_SEED_CSV at it.
    logging.basicConfig(level=logging.INFO)
    rows = load_items_csv(Path(sys.argv[1]))
    print(f"Validation complete. {len(rows)} importable items.")

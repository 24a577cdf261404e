from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root
load_dotenv(Path(__file__).resolve().parent.parent.parent / ".env")


def _env_path(name: str) -> Path | None:
    value = os.getenv(name, "").strip()
    return Path(value) if value else None


@dataclass(frozen=True)
class IngestionConfig:
    """
    Configuration for bulk-importing listings from a CSV export.
    """

    seed_csv: Path | None = _env_path("LOSTFOUND_SEED_CSV")
    owner_user_id: str = os.getenv("LOSTFOUND_IMPORT_OWNER", "user-1")
    default_status: str = "found"


DEFAULT_INGESTION_CONFIG = IngestionConfig()

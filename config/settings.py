"""Environment-driven settings. Values come from the process env or a .env file."""

import os
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv

from config.defaults import (
    DEFAULT_FETCH_TIMEOUT_SECONDS, DEFAULT_GROUPING, DEFAULT_LISTINGS_PATHS,
    DEFAULT_REFERENCE_PATHS,
)

BASE_DIR = Path(__file__).resolve().parents[1]
load_dotenv(BASE_DIR / ".env")


def _split_paths(raw: Optional[str], default: List[str]) -> List[str]:
    if not raw:
        return list(default)
    return [p.strip() for p in raw.split(",") if p.strip()]


class Settings:
    LISTINGS_PATHS = _split_paths(os.getenv("MPI_LISTINGS_PATHS"), DEFAULT_LISTINGS_PATHS)
    REFERENCE_PATHS = _split_paths(os.getenv("MPI_REFERENCE_PATH"), DEFAULT_REFERENCE_PATHS)
    REFERENCE_DIR = os.getenv("MPI_REFERENCE_DIR", "").strip() or None
    DEFAULT_GROUPING = os.getenv("MPI_DEFAULT_GROUPING", DEFAULT_GROUPING)

    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
    LOG_FILE = os.getenv("LOG_FILE", "").strip() or None

    @property
    def FETCH_TIMEOUT_SECONDS(self) -> float:
        raw = os.getenv("MPI_FETCH_TIMEOUT")
        try:
            return float(raw) if raw else DEFAULT_FETCH_TIMEOUT_SECONDS
        except ValueError:
            return DEFAULT_FETCH_TIMEOUT_SECONDS

    def rule_config(self) -> dict:
        """Per-run overrides derived from the environment."""
        return {"fetch_timeout_seconds": self.FETCH_TIMEOUT_SECONDS}

    def __repr__(self):
        return f"<Settings listings={self.LISTINGS_PATHS} grouping={self.DEFAULT_GROUPING}>"


# Singleton
settings = Settings()

"""Configuration helpers and Settings container.

This module provides a small `Settings` dataclass and `get_settings` which
reads the pipeline options from the environment (a `.env` file at the project
root is loaded first).
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
import os

from dotenv import load_dotenv

# Explicitly load .env from project root
PROJECT_ROOT = Path(__file__).resolve().parents[2]
load_dotenv(PROJECT_ROOT / ".env")

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}


@dataclass(frozen=True)
class Settings:
    """Container for pipeline configuration read from the environment.

    Attributes:
        listings_csv: Path to the listings CSV file.
        output_dir: Directory where Gold CSVs and charts are written.
        borough: Borough to restrict the analysis to, or None for all.
        min_group_size: Minimum listings a neighborhood needs to be ranked.
        top_n: Number of neighborhoods to keep.
        strict: Reject invalid prices at aggregation time instead of dropping them.
    """
    listings_csv: Path
    output_dir: Path
    borough: str | None
    min_group_size: int
    top_n: int
    strict: bool


def _int_env(name: str, default: int, minimum: int) -> int:
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        value = int(raw)
    except ValueError:
        raise RuntimeError(f"{name} must be an integer, got {raw!r}.") from None
    if value < minimum:
        raise RuntimeError(f"{name} must be >= {minimum}, got {value}.")
    return value


def _bool_env(name: str, default: bool) -> bool:
    raw = os.getenv(name, "").strip().lower()
    if not raw:
        return default
    if raw in _TRUE:
        return True
    if raw in _FALSE:
        return False
    raise RuntimeError(f"{name} must be a boolean (true/false), got {raw!r}.")


def parse_borough(value: str | None) -> str | None:
    """Normalize a borough option; empty or 'all' means no filter."""
    if value is None:
        return None
    value = value.strip()
    if not value or value.lower() == "all":
        return None
    return value


def get_settings() -> Settings:
    """Read environment variables and return a frozen `Settings` object.

    Raises:
        RuntimeError: if a numeric or boolean variable cannot be parsed or is
            out of range.
    """
    listings_csv = Path(os.getenv("LISTINGS_CSV", "data/listings.csv"))
    output_dir = Path(os.getenv("OUTPUT_DIR", "data/gold"))
    borough = parse_borough(os.getenv("BOROUGH", "Manhattan"))

    return Settings(
        listings_csv=listings_csv,
        output_dir=output_dir,
        borough=borough,
        min_group_size=_int_env("MIN_GROUP_SIZE", 50, minimum=1),
        top_n=_int_env("TOP_N", 10, minimum=0),
        strict=_bool_env("STRICT", True),
    )

"""Read the listings CSV into a Raw-layer Dask DataFrame.

Every column is read as text; type coercion happens in the Clean layer. The
schema check here only guarantees that the required columns exist and that the
numeric attribute columns can be coerced.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, cast

import pandas as pd
import dask.dataframe as dd

from airbnb_pipeline.errors import InputNotFound, SchemaMismatch

log = logging.getLogger(__name__)

REQUIRED_COLUMNS = [
    "id",
    "price",
    "neighborhood",
    "borough",
    "accommodates",
    "bathrooms",
    "bedrooms",
    "beds",
    "review_scores_rating",
    "number_of_reviews",
    "listing_url",
]

NUMERIC_COLUMNS = [
    "accommodates",
    "bathrooms",
    "bedrooms",
    "beds",
    "review_scores_rating",
    "number_of_reviews",
]

# Inside Airbnb exports use these names
COLUMN_ALIASES = {
    "neighbourhood_cleansed": "neighborhood",
    "neighbourhood_group_cleansed": "borough",
}


def apply_aliases(columns: list[str]) -> dict[str, str]:
    """Return the rename mapping for alias columns whose canonical name is absent."""
    present = set(columns)
    return {
        alias: canonical
        for alias, canonical in COLUMN_ALIASES.items()
        if alias in present and canonical not in present
    }


def check_schema(pdf: pd.DataFrame) -> None:
    """Check that numeric attribute columns only hold numbers or blanks.

    Args:
        pdf: pandas DataFrame with the required columns.

    Raises:
        SchemaMismatch: if a non-null value in a numeric column cannot be
            coerced to a number.
    """
    for col in NUMERIC_COLUMNS:
        raw = pdf[col]
        coerced = pd.to_numeric(raw, errors="coerce")
        bad = raw.notna() & coerced.isna()
        if raw.dtype == object or pd.api.types.is_string_dtype(raw.dtype):
            bad &= raw.astype(str).str.strip() != ""
        n_bad = int(bad.sum())
        if n_bad:
            sample = raw[bad].iloc[0]
            raise SchemaMismatch(
                f"Column {col!r} expects numbers; {n_bad} value(s) are not numeric "
                f"(e.g. {sample!r})."
            )


def read_listings(path: Path) -> Any:
    """Read a listings CSV into a Dask DataFrame restricted to the required columns.

    Args:
        path: Local path to the CSV file.

    Returns:
        Dask DataFrame with the columns in `REQUIRED_COLUMNS`, all as text.

    Raises:
        InputNotFound: if `path` is not an existing file.
        SchemaMismatch: if a required column is missing or a numeric column
            holds non-numeric values.
    """
    path = Path(path)
    if not path.is_file():
        raise InputNotFound(f"Listings CSV not found: {path}")

    log.info("Reading listings from %s", path)
    dd_mod = cast(Any, dd)
    ddf = dd_mod.read_csv(str(path), dtype=str, blocksize=None)

    renames = apply_aliases(list(ddf.columns))
    if renames:
        log.info("Renaming alias columns: %s", renames)
        ddf = ddf.rename(columns=renames)

    missing = [c for c in REQUIRED_COLUMNS if c not in ddf.columns]
    if missing:
        raise SchemaMismatch(f"Listings CSV is missing required column(s): {', '.join(missing)}")

    ddf = ddf[REQUIRED_COLUMNS]
    check_schema(ddf[NUMERIC_COLUMNS].compute())

    log.info("Loaded %d raw listings", int(ddf.shape[0].compute()))
    return ddf

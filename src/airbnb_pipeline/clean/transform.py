"""Cleaning and normalization utilities.

This module contains transformations that are applied partition-wise using
Dask. The output is a Dask DataFrame whose schema is stable and suitable for
Pydantic validation and for the Gold aggregations.
"""
from __future__ import annotations

import logging
from typing import Any, Iterable

import numpy as np
import pandas as pd

from airbnb_pipeline.ingest.load_csv import NUMERIC_COLUMNS

log = logging.getLogger(__name__)

TEXT_COLUMNS = ["id", "neighborhood", "borough", "listing_url"]


def parse_price(values: pd.Series) -> pd.Series:
    """Convert a price column to floats.

    Numeric input is returned as float. Text such as ``"$1,250.00"`` has the
    currency symbol and thousands separators removed; anything that still does
    not parse becomes NaN.

    Args:
        values: Series of prices, numeric or text.

    Returns:
        float64 Series aligned with `values`.
    """
    if pd.api.types.is_numeric_dtype(values.dtype):
        return values.astype("float64")

    text = (
        values.astype("object")
        .where(values.notna(), "")
        .astype(str)
        .str.replace(r"[$,\s]", "", regex=True)
    )
    return pd.to_numeric(text, errors="coerce").astype("float64")


def _normalize_text(values: pd.Series) -> pd.Series:
    # strip + collapse internal whitespace; empty → None
    out = values.astype("object").where(values.notna(), None)
    mask = out.notna()
    out[mask] = (
        out[mask].astype(str).str.strip().str.replace(r"\s+", " ", regex=True)
    )
    return out.replace({"": None})


def _clean_partition(pdf: pd.DataFrame) -> pd.DataFrame:
    """Partition-level cleaning function applied via map_partitions.

    Args:
        pdf: Pandas DataFrame for the partition.

    Returns:
        Cleaned Pandas DataFrame with rows lacking a finite price removed.
    """
    pdf = pdf.copy()

    for col in TEXT_COLUMNS:
        if col in pdf.columns:
            pdf[col] = _normalize_text(pdf[col])

    pdf["price"] = parse_price(pdf["price"])

    for col in NUMERIC_COLUMNS:
        if col in pdf.columns:
            pdf[col] = pd.to_numeric(pdf[col], errors="coerce").astype("float64")

    keep = np.isfinite(pdf["price"].to_numpy(dtype="float64"))
    return pdf.loc[keep]


def clean_listings_ddf(ddf: Any) -> Any:
    """Clean raw listings.

    Performs text normalization, price parsing, numeric coercion and drops
    listings whose price is missing or non-finite.

    Returns:
        Transformed Dask DataFrame; every row has a finite `price`.
    """
    log.info("Starting clean_listings_ddf transformation")
    meta = _clean_partition(ddf._meta)
    return ddf.map_partitions(_clean_partition, meta=meta)


def filter_borough(ddf: Any, borough: str | None) -> Any:
    """Return the listings located in `borough` (case-insensitive).

    Args:
        ddf: Dask or pandas DataFrame with a cleaned `borough` column.
        borough: Borough name, or None to keep every listing.
    """
    if borough is None:
        return ddf
    target = borough.strip().lower()
    return ddf[ddf["borough"].str.lower() == target]


def filter_to_groups(frame: Any, key: str, groups: Iterable[Any]) -> Any:
    """Return the rows whose `key` value is one of `groups`."""
    return frame[frame[key].isin(list(groups))]

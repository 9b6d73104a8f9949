"""Validation utilities for the Clean layer.

This module validates partition data against the Pydantic `Listing` model.
Validation is diagnostic: rows that fail are counted and logged, not removed.
"""
from __future__ import annotations

import logging
from typing import Any, cast

import pandas as pd
from dask import compute, delayed  # type: ignore[attr-defined]
from pydantic import ValidationError

from airbnb_pipeline.models import Listing

log = logging.getLogger(__name__)


def _nan_to_none(rec: dict[str, Any]) -> dict[str, Any]:
    return {k: (None if v is None or (isinstance(v, float) and pd.isna(v)) else v) for k, v in rec.items()}


def validate_partition(pdf: pd.DataFrame) -> tuple[list[dict[str, Any]], int]:
    """Validate a pandas partition of listings using Pydantic.

    Args:
        pdf: Pandas DataFrame for the partition.

    Returns:
        A tuple of (list_of_validated_records, bad_count).
    """
    good: list[dict[str, Any]] = []
    bad = 0

    for rec in pdf.to_dict(orient="records"):
        rec = _nan_to_none(rec)
        if rec.get("id") is not None:
            rec["id"] = str(rec["id"])
        try:
            m = Listing.model_validate(rec)
            good.append(m.model_dump(mode="python"))
        except ValidationError:
            bad += 1

    return good, bad


def validate_listings(ddf: Any) -> tuple[int, int]:
    """Validate every partition and log the number of rows failing the schema.

    Uses `to_delayed()` so each partition is validated as a plain pandas frame.

    Returns:
        Tuple `(good_rows, bad_rows)`.
    """
    tasks = [delayed(validate_partition)(part) for part in ddf.to_delayed()]
    results = cast(Any, compute)(*tasks)

    good_total = sum(len(g) for g, _ in results)
    bad_total = sum(b for _, b in results)

    if bad_total:
        log.warning("%d cleaned listing(s) failed Listing validation", bad_total)
    log.info("Validation complete: good=%d bad=%d", good_total, bad_total)
    return good_total, bad_total

"""Gold aggregation functions.

Functions in this module build Gold-layer tables from the Clean layer. Gold
tables are small: inputs are materialized to pandas (Dask input is computed)
and the results are returned as pandas DataFrames or plain lists.

Expectations:
- Input: a pandas or Dask DataFrame of cleaned listings with columns such as
  `neighborhood`, `borough`, `price`, `review_scores_rating`
- Outputs: DataFrames with descriptive columns documented on each function
  docstring.
"""
from __future__ import annotations

import logging
from typing import Any, Iterable

import numpy as np
import pandas as pd

from airbnb_pipeline.errors import InvalidInput, SchemaMismatch

log = logging.getLogger(__name__)

SUMMARY_COLUMNS = ["group", "count", "min", "mean", "median", "sd", "iqr", "max"]
RANKED_COLUMNS = ["rank", "group", "median", "count"]


def _to_pandas(frame: Any) -> pd.DataFrame:
    """Materialize a Dask DataFrame; pandas input is returned as is."""
    if isinstance(frame, pd.DataFrame):
        return frame
    return frame.compute()


def _require_columns(pdf: pd.DataFrame, *columns: str) -> None:
    missing = [c for c in columns if c not in pdf.columns]
    if missing:
        raise SchemaMismatch(f"Missing column(s) for aggregation: {', '.join(missing)}")


def _as_float(values: pd.Series) -> np.ndarray:
    return pd.to_numeric(values, errors="coerce").astype("float64").to_numpy()


def _valid_mask(values: pd.Series) -> np.ndarray:
    """True where a value is numeric, non-null and finite."""
    return np.isfinite(_as_float(values))


# =========================================================
# AGGREGATION PIPELINE
# =========================================================

def _group_medians(
    rows: Any,
    group_key: str,
    value_field: str,
    min_group_size: int,
    strict: bool,
) -> pd.DataFrame:
    """Return `group`, `median`, `count` for groups with enough rows, ranked.

    Ranking is by descending median; equal medians are ordered by ascending
    group identifier so the result is deterministic.
    """
    if min_group_size < 1:
        raise ValueError(f"min_group_size must be >= 1, got {min_group_size}")

    pdf = _to_pandas(rows)
    if pdf.empty:
        return pd.DataFrame(columns=["group", "median", "count"])
    _require_columns(pdf, group_key, value_field)

    valid = _valid_mask(pdf[value_field])
    n_invalid = int((~valid).sum())
    if n_invalid:
        if strict:
            raise InvalidInput(
                f"{n_invalid} row(s) have a null or non-finite {value_field!r}; "
                "clean the input or use lenient mode"
            )
        log.warning("Dropping %d row(s) with invalid %r (lenient mode)", n_invalid, value_field)
        pdf = pdf.loc[valid]

    values = pd.DataFrame({
        "group": pdf[group_key].to_numpy(dtype=object),
        "value": _as_float(pdf[value_field]),
    })
    grouped = (
        values.dropna(subset=["group"])
        .groupby("group", sort=False)["value"]
        .agg(median="median", count="size")
        .reset_index()
    )
    grouped = grouped[grouped["count"] >= min_group_size]

    return grouped.sort_values(
        ["median", "group"],
        ascending=[False, True],
        kind="mergesort",
    ).reset_index(drop=True)


def top_n_groups_by_median(
    rows: Any,
    group_key: str,
    value_field: str,
    min_group_size: int,
    top_n: int,
    strict: bool = True,
) -> list[Any]:
    """Return the identifiers of the `top_n` groups with the highest median.

    Groups with fewer than `min_group_size` rows are excluded before ranking.
    Rows with a null `group_key` belong to no group.

    Args:
        rows: pandas or Dask DataFrame.
        group_key: Column to group by (e.g. `neighborhood`).
        value_field: Numeric column whose median is ranked (e.g. `price`).
        min_group_size: Minimum number of rows a group needs (>= 1).
        top_n: Maximum number of groups to return (>= 0).
        strict: When True, null/non-finite values raise `InvalidInput`; when
            False they are dropped with a warning.

    Returns:
        List of distinct group identifiers, length
        ``min(top_n, surviving groups)``, sorted by descending median with
        ascending identifier as tie-break. Empty input yields ``[]``.

    Raises:
        ValueError: on out-of-range `min_group_size` or `top_n`.
        InvalidInput: in strict mode, when `value_field` holds invalid values.
        SchemaMismatch: when `group_key` or `value_field` is not a column.
    """
    return rank_groups_by_median(
        rows, group_key, value_field, min_group_size, top_n, strict=strict
    )["group"].tolist()


def rank_groups_by_median(
    rows: Any,
    group_key: str,
    value_field: str,
    min_group_size: int,
    top_n: int,
    strict: bool = True,
) -> pd.DataFrame:
    """Same ranking as `top_n_groups_by_median`, as a Gold table.

    Returns:
        pandas DataFrame with columns `rank` (1-based), `group`, `median`,
        `count`.
    """
    if top_n < 0:
        raise ValueError(f"top_n must be >= 0, got {top_n}")

    ranked = _group_medians(rows, group_key, value_field, min_group_size, strict).head(top_n)
    ranked = ranked.assign(rank=range(1, len(ranked) + 1))
    return ranked[RANKED_COLUMNS].reset_index(drop=True)


def _summarize(values: pd.Series) -> dict[str, Any]:
    count = int(values.size)
    if count == 0:
        return {"count": 0, "min": None, "mean": None, "median": None,
                "sd": None, "iqr": None, "max": None}
    q1, median, q3 = values.quantile([0.25, 0.5, 0.75], interpolation="linear").tolist()
    sd = values.std(ddof=1)
    return {
        "count": count,
        "min": float(values.min()),
        "mean": float(values.mean()),
        "median": float(median),
        "sd": None if pd.isna(sd) else float(sd),
        "iqr": float(q3 - q1),
        "max": float(values.max()),
    }


def summary_stats_by_group(
    rows: Any,
    group_key: str,
    value_field: str,
    groups: Iterable[Any] | None = None,
) -> pd.DataFrame:
    """Compute min, mean, median, sample sd, IQR and max per group.

    Only rows with a finite, non-null `value_field` contribute; invalid values
    are excluded rather than rejected. Quartiles use linear interpolation
    between order statistics, the same convention as the median.

    Args:
        rows: pandas or Dask DataFrame.
        group_key: Column to group by.
        value_field: Numeric column to summarize.
        groups: Optional groups to report, in output order. A requested group
            with no valid rows gets `count` 0 and null statistics.

    Returns:
        pandas DataFrame with columns `group`, `count`, `min`, `mean`,
        `median`, `sd`, `iqr`, `max`. Without `groups`, rows are ordered by
        ascending group.
    """
    pdf = _to_pandas(rows)
    if not pdf.empty:
        _require_columns(pdf, group_key, value_field)
        pdf = pdf.loc[_valid_mask(pdf[value_field])]
        pdf = pdf.dropna(subset=[group_key])

    by_group: dict[Any, pd.Series] = {}
    if not pdf.empty:
        values = pd.Series(_as_float(pdf[value_field]))
        for key, part in values.groupby(pdf[group_key].to_numpy(dtype=object), sort=True):
            by_group[key] = part

    order = list(groups) if groups is not None else sorted(by_group)
    records = [
        {"group": key, **_summarize(by_group.get(key, pd.Series(dtype="float64")))}
        for key in order
    ]
    return pd.DataFrame(records, columns=SUMMARY_COLUMNS)


# =========================================================
# REPORT GOLD TABLES
# =========================================================

def gold_borough_price_summary(ddf: Any) -> pd.DataFrame:
    """Return price summary statistics per borough."""
    return summary_stats_by_group(ddf, "borough", "price")


def gold_top_neighborhoods(
    ddf: Any,
    min_group_size: int = 50,
    top_n: int = 10,
    strict: bool = True,
) -> pd.DataFrame:
    """Return neighborhoods ranked by median price.

    Args:
        ddf: Cleaned (and usually borough-filtered) listings.
        min_group_size: Minimum listings per neighborhood.
        top_n: Number of neighborhoods to keep.
        strict: See `top_n_groups_by_median`.

    Returns:
        pandas DataFrame with columns `rank`, `group`, `median`, `count`.
    """
    return rank_groups_by_median(ddf, "neighborhood", "price", min_group_size, top_n, strict=strict)


def gold_neighborhood_price_summary(ddf: Any, groups: Iterable[Any]) -> pd.DataFrame:
    """Return price summary statistics for `groups`, in the given order."""
    return summary_stats_by_group(ddf, "neighborhood", "price", groups=groups)


def gold_neighborhood_review_summary(ddf: Any, groups: Iterable[Any]) -> pd.DataFrame:
    """Return review score summary statistics for `groups`.

    Listings without a review score are left out of this table only; they
    still count towards the price tables.
    """
    return summary_stats_by_group(ddf, "neighborhood", "review_scores_rating", groups=groups)

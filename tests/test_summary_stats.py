from __future__ import annotations

import math

import pandas as pd
import dask.dataframe as dd
import pytest

from airbnb_pipeline.aggregate.build_gold import (
    gold_neighborhood_review_summary,
    summary_stats_by_group,
)


def test_six_statistics_for_four_values() -> None:
    pdf = pd.DataFrame({"neighborhood": ["Y"] * 4, "price": [10.0, 20.0, 30.0, 40.0]})
    out = summary_stats_by_group(pdf, "neighborhood", "price")
    row = out.iloc[0]
    assert row["group"] == "Y"
    assert row["count"] == 4
    assert row["min"] == 10
    assert row["max"] == 40
    assert row["mean"] == 25
    assert row["median"] == 25
    assert row["sd"] == pytest.approx(12.9099, abs=1e-4)
    # linear interpolation: Q1 = 17.5, Q3 = 32.5
    assert row["iqr"] == pytest.approx(15.0)


def test_columns_and_default_order() -> None:
    pdf = pd.DataFrame({"neighborhood": ["b", "a", "b"], "price": [1.0, 2.0, 3.0]})
    out = summary_stats_by_group(pdf, "neighborhood", "price")
    assert list(out.columns) == ["group", "count", "min", "mean", "median", "sd", "iqr", "max"]
    assert out["group"].tolist() == ["a", "b"]


def test_requested_groups_keep_given_order() -> None:
    pdf = pd.DataFrame({"neighborhood": ["a", "b", "c"], "price": [1.0, 2.0, 3.0]})
    out = summary_stats_by_group(pdf, "neighborhood", "price", groups=["c", "a"])
    assert out["group"].tolist() == ["c", "a"]


def test_invalid_values_are_excluded_not_rejected() -> None:
    pdf = pd.DataFrame({
        "neighborhood": ["a", "a", "a", "a"],
        "price": [10.0, math.nan, math.inf, 30.0],
    })
    row = summary_stats_by_group(pdf, "neighborhood", "price").iloc[0]
    assert row["count"] == 2
    assert row["mean"] == 20
    assert row["max"] == 30


def test_single_row_group_has_no_sample_sd() -> None:
    pdf = pd.DataFrame({"neighborhood": ["a"], "price": [5.0]})
    row = summary_stats_by_group(pdf, "neighborhood", "price").iloc[0]
    assert row["count"] == 1
    assert pd.isna(row["sd"])
    assert row["iqr"] == 0


def test_requested_group_without_rows_is_empty_row() -> None:
    pdf = pd.DataFrame({"neighborhood": ["a"], "price": [5.0]})
    out = summary_stats_by_group(pdf, "neighborhood", "price", groups=["a", "missing"])
    missing = out.iloc[1]
    assert missing["count"] == 0
    assert pd.isna(missing["median"])


def test_review_summary_ignores_missing_scores() -> None:
    pdf = pd.DataFrame({
        "neighborhood": ["a", "a", "a"],
        "price": [100.0, 200.0, 300.0],
        "review_scores_rating": [4.0, None, 5.0],
    })
    ddf = dd.from_pandas(pdf, npartitions=1)
    row = gold_neighborhood_review_summary(ddf, ["a"]).iloc[0]
    assert row["count"] == 2
    assert row["mean"] == 4.5


def test_empty_input_gives_empty_table() -> None:
    out = summary_stats_by_group(pd.DataFrame(), "neighborhood", "price")
    assert out.empty
    assert list(out.columns)[0] == "group"

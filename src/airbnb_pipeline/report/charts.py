"""Chart builders used by the CLI and the Streamlit report.

Every builder takes a pandas DataFrame of cleaned listings and returns an
Altair chart; `save_chart` writes a chart as a standalone HTML file.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Sequence

import altair as alt
import pandas as pd

log = logging.getLogger(__name__)

RIDGE_STEP = 40
RIDGE_OVERLAP = 1.5


def price_histogram_by_borough(pdf: pd.DataFrame, max_bins: int = 40, columns: int = 3) -> Any:
    """Faceted histogram of nightly price, one panel per borough."""
    data = pdf[["borough", "price"]].dropna()
    return (
        alt.Chart(data)
        .mark_bar()
        .encode(
            x=alt.X("price:Q", bin=alt.Bin(maxbins=max_bins), title="Price per night"),
            y=alt.Y("count():Q", title="Listings"),
            tooltip=["count():Q"],
        )
        .properties(width=220, height=160)
        .facet(facet=alt.Facet("borough:N", title=None), columns=columns)
        .resolve_scale(y="independent")
    )


def price_ridgeline(pdf: pd.DataFrame, groups: Sequence[str]) -> Any:
    """Ridge plot of smoothed price densities, one row per neighborhood.

    Rows follow the order of `groups` (usually the median-price ranking).
    """
    data = pdf.loc[pdf["neighborhood"].isin(list(groups)), ["neighborhood", "price"]]
    lo = float(data["price"].min()) if not data.empty else 0.0
    hi = float(data["price"].max()) if not data.empty else 1.0

    return (
        alt.Chart(data, height=RIDGE_STEP)
        .transform_density(
            "price",
            groupby=["neighborhood"],
            as_=["price", "density"],
            extent=[lo, hi],
        )
        .mark_area(interpolate="monotone", fillOpacity=0.8, stroke="lightgray", strokeWidth=0.5)
        .encode(
            x=alt.X("price:Q", title="Price per night"),
            y=alt.Y(
                "density:Q",
                axis=None,
                scale=alt.Scale(range=[RIDGE_STEP, -RIDGE_STEP * RIDGE_OVERLAP]),
            ),
            fill=alt.Fill("neighborhood:N", legend=None),
        )
        .facet(
            row=alt.Row(
                "neighborhood:N",
                title=None,
                sort=list(groups),
                header=alt.Header(labelAngle=0, labelAlign="left"),
            )
        )
        .properties(bounds="flush")
        .configure_facet(spacing=0)
        .configure_view(stroke=None)
    )


def review_score_boxplot(pdf: pd.DataFrame, groups: Sequence[str]) -> Any:
    """Boxplot of review scores per neighborhood; listings without a score are dropped."""
    data = pdf.loc[
        pdf["neighborhood"].isin(list(groups)) & pdf["review_scores_rating"].notna(),
        ["neighborhood", "review_scores_rating"],
    ]
    return (
        alt.Chart(data)
        .mark_boxplot()
        .encode(
            x=alt.X("neighborhood:N", sort=list(groups), title=None),
            y=alt.Y("review_scores_rating:Q", title="Review score", scale=alt.Scale(zero=False)),
        )
        .properties(height=320)
    )


def save_chart(chart: Any, path: Path) -> Path:
    """Save `chart` as standalone HTML at `path`, creating parent directories."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    chart.save(str(path))
    log.info("Saved chart: %s", path)
    return path

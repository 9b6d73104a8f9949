from __future__ import annotations

import pandas as pd
import streamlit as st

from airbnb_pipeline.config import get_settings
from airbnb_pipeline.errors import ListingsError
from airbnb_pipeline.ingest.load_csv import read_listings
from airbnb_pipeline.clean.transform import clean_listings_ddf, filter_borough, filter_to_groups
from airbnb_pipeline.aggregate.build_gold import (
    gold_borough_price_summary,
    gold_top_neighborhoods,
    gold_neighborhood_price_summary,
    gold_neighborhood_review_summary,
)
from airbnb_pipeline.report.charts import (
    price_histogram_by_borough,
    price_ridgeline,
    review_score_boxplot,
)

# =====================================================
# Page config
# =====================================================
st.set_page_config(page_title="Airbnb Listings Report", layout="wide")
st.title("🏙️ Airbnb Listings: Prices by Borough and Neighborhood")

settings = get_settings()

# =====================================================
# Data (Raw → Clean, cached per CSV path)
# =====================================================
@st.cache_data
def load_listings(path: str) -> pd.DataFrame:
    """Read and clean the listings CSV into a pandas DataFrame.

    Args:
        path: Local CSV path.

    Returns:
        Cleaned listings; every row has a finite price.
    """
    return clean_listings_ddf(read_listings(path)).compute()


try:
    listings = load_listings(str(settings.listings_csv))
except ListingsError as exc:
    st.error(f"Unable to load listings: {exc}")
    st.stop()


def center_dataframe(df: pd.DataFrame):
    """Center-align column headers and values for display."""
    return (
        df.style
        .set_properties(**{"text-align": "center"})
        .set_table_styles(
            [{"selector": "th", "props": [("text-align", "center")]}]
        )
        .format(precision=2)
    )


boroughs = sorted(listings["borough"].dropna().unique())
default_index = boroughs.index(settings.borough) if settings.borough in boroughs else 0

with st.sidebar:
    borough = st.selectbox("Borough", boroughs, index=default_index) if boroughs else None
    min_group_size = st.number_input("Minimum listings per neighborhood", min_value=1, value=settings.min_group_size)
    top_n = st.number_input("Neighborhoods to show", min_value=0, value=settings.top_n)

# =====================================================
# SECTION 1 — PRICES ACROSS BOROUGHS
# =====================================================
st.header("💵 Prices across boroughs")

st.markdown(
    f"The data holds **{len(listings):,}** listings with a usable nightly price. "
    "Listings whose price was missing or could not be read were dropped before "
    "any of the analysis below. Each panel shows how prices are distributed in "
    "one borough; the long right tails are why the report ranks by median price "
    "rather than the mean."
)

st.altair_chart(price_histogram_by_borough(listings), width="content")
st.dataframe(center_dataframe(gold_borough_price_summary(listings)), width="stretch")

st.divider()

# =====================================================
# SECTION 2 — MOST EXPENSIVE NEIGHBORHOODS
# =====================================================
st.header(f"🏘️ Most expensive neighborhoods in {borough}")

in_borough = filter_borough(listings, borough)
ranked = gold_top_neighborhoods(in_borough, int(min_group_size), int(top_n))
groups = ranked["group"].tolist()

if not groups:
    st.warning(
        f"No neighborhood in {borough} has at least {int(min_group_size)} listings. "
        "Lower the minimum in the sidebar."
    )
    st.stop()

st.markdown(
    f"Only neighborhoods with at least **{int(min_group_size)}** listings are "
    "ranked, so a handful of luxury listings cannot push a small neighborhood "
    "to the top. Ties in median price are ordered alphabetically."
)
st.dataframe(center_dataframe(ranked), width="stretch")

top = filter_to_groups(in_borough, "neighborhood", groups)

st.subheader("Price distributions")
st.markdown(
    "Each ridge is a smoothed density of nightly prices for one neighborhood, "
    "in ranking order."
)
st.altair_chart(price_ridgeline(top, groups), width="stretch")
st.dataframe(center_dataframe(gold_neighborhood_price_summary(top, groups)), width="stretch")

st.divider()

# =====================================================
# SECTION 3 — REVIEW SCORES
# =====================================================
st.header("⭐ Review scores")

n_missing = int(top["review_scores_rating"].isna().sum())
st.markdown(
    f"Do guests rate the expensive neighborhoods higher? {n_missing:,} of these "
    "listings have no review score yet; they are left out of this section only."
)
st.altair_chart(review_score_boxplot(top, groups), width="stretch")
st.dataframe(center_dataframe(gold_neighborhood_review_summary(top, groups)), width="stretch")

# =====================================================
# Footer
# =====================================================
st.caption("Inside Airbnb listings • Dask • pandas • Altair • Streamlit")

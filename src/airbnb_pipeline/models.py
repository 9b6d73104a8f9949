"""Pydantic models used for Clean and Gold validation.

These models define the expected schema for Clean listings and the Gold
outputs written by the pipeline and read by the report.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator
import math


class Listing(BaseModel):
    """Schema for a cleaned listing row.

    Attributes:
        id: Opaque listing identifier.
        price: Nightly price; finite and non-negative after cleaning.
        neighborhood: Neighborhood name (grouping key).
        borough: Borough name (coarse filter).
        accommodates: Guest capacity.
        bathrooms: Number of bathrooms, may be missing.
        bedrooms: Number of bedrooms, may be missing.
        beds: Number of beds, may be missing.
        review_scores_rating: Average review score, may be missing.
        number_of_reviews: Review count, may be missing.
        listing_url: Public URL of the listing.
    """
    model_config = ConfigDict(extra="forbid")
    id: str
    price: float = Field(..., ge=0)
    neighborhood: str | None
    borough: str | None
    accommodates: float | None = Field(None, ge=0)
    bathrooms: float | None = Field(None, ge=0)
    bedrooms: float | None = Field(None, ge=0)
    beds: float | None = Field(None, ge=0)
    review_scores_rating: float | None = Field(None, ge=0)
    number_of_reviews: float | None = Field(None, ge=0)
    listing_url: str | None

    @field_validator("price")
    @classmethod
    def _finite_price(cls, v: float) -> float:
        if not math.isfinite(v):
            raise ValueError("price must be finite")
        return v


class RankedGroup(BaseModel):
    """Gold model for a group ranked by median value."""
    model_config = ConfigDict(extra="forbid")
    rank: int = Field(..., ge=1)
    group: str
    median: float
    count: int = Field(..., ge=1)


class GroupSummary(BaseModel):
    """Gold model with six summary statistics of one group."""
    model_config = ConfigDict(extra="forbid")
    group: str
    count: int = Field(..., ge=0)
    min: float | None
    mean: float | None
    median: float | None
    sd: float | None
    iqr: float | None
    max: float | None

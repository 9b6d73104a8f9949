from __future__ import annotations

from pathlib import Path

import pandas as pd
import pytest

HEADER = [
    "id", "listing_url", "neighbourhood_cleansed", "neighbourhood_group_cleansed",
    "price", "accommodates", "bathrooms", "bedrooms", "beds",
    "number_of_reviews", "review_scores_rating", "host_name",
]

# (neighborhood, borough, price, review score)
SAMPLE = [
    # Tribeca: 4 priced listings, median 400
    ("Tribeca", "Manhattan", "$300.00", 4.5),
    ("Tribeca", "Manhattan", "$350.00", 4.6),
    ("Tribeca", "Manhattan", "$450.00", 4.7),
    ("Tribeca", "Manhattan", "$1,200.00", 4.9),
    # Harlem: 4 priced listings, median 100, one without a review score
    ("Harlem", "Manhattan", "$80.00", 4.2),
    ("Harlem", "Manhattan", "$90.00", None),
    ("Harlem", "Manhattan", "$110.00", 4.8),
    ("Harlem", "Manhattan", "$150.00", 4.9),
    # Chelsea: only 2 listings
    ("Chelsea", "Manhattan", "$500.00", 4.4),
    ("Chelsea", "Manhattan", "$600.00", 4.3),
    # unusable prices, dropped during cleaning
    ("Harlem", "Manhattan", "", 4.0),
    ("Tribeca", "Manhattan", "n/a", 4.0),
    ("Bushwick", "Brooklyn", "$70.00", 4.1),
    ("Bushwick", "Brooklyn", "$75.00", 4.2),
    ("Bushwick", "Brooklyn", "$95.00", 4.3),
]


@pytest.fixture
def listings_csv(tmp_path: Path) -> Path:
    """Small Inside Airbnb style export written to a temporary CSV."""
    rows = [
        {
            "id": str(1000 + i),
            "listing_url": f"https://www.airbnb.com/rooms/{1000 + i}",
            "neighbourhood_cleansed": neighborhood,
            "neighbourhood_group_cleansed": borough,
            "price": price,
            "accommodates": 2,
            "bathrooms": 1,
            "bedrooms": 1,
            "beds": 1,
            "number_of_reviews": 10,
            "review_scores_rating": score,
            "host_name": "Host",
        }
        for i, (neighborhood, borough, price, score) in enumerate(SAMPLE)
    ]
    path = tmp_path / "listings.csv"
    pd.DataFrame(rows, columns=HEADER).to_csv(path, index=False)
    return path

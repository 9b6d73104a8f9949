"""airbnb_pipeline package.

Contains modules for reading an Airbnb listings CSV, cleaning & validating
listings, building Gold-layer aggregations (ranked neighborhoods and summary
statistics), and rendering the charts used by the Streamlit report.

Architecture:
- Raw → Clean → Gold layers; Gold tables are written as CSV files
- Dask is used for partitioned reads and transforms
- Pydantic models validate the Clean and Gold layers
"""

__all__ = ["__version__"]
__version__ = "0.1.0"

"""Raw-layer ingestion: reading the listings CSV into Dask."""

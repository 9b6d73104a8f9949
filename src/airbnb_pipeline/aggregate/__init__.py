"""Gold-layer aggregation helpers.

This package contains routines that convert the Clean layer into small
analytical Gold tables (neighborhoods ranked by median price, per-group
summary statistics) and write them to CSV.
"""

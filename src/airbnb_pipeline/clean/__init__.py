"""Cleaning utilities for the pipeline.

Provides functions to normalize raw listing fields, parse prices, filter
listings by borough or group, and validate the Clean layer.
"""

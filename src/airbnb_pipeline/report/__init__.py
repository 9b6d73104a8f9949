"""Altair charts for the listings report."""

"""Utilities for writing Gold DataFrames to disk.

Gold datasets are small (aggregated) and already materialized to pandas. Each
table is written to `<out_dir>/<name>.csv`, replacing any previous run.
"""

from __future__ import annotations

import logging
from pathlib import Path

import pandas as pd

log = logging.getLogger(__name__)


def write_gold(pdf: pd.DataFrame, name: str, out_dir: Path) -> Path:
    """Write a Gold table as CSV.

    Args:
        pdf: pandas DataFrame representing the gold dataset.
        name: Table name; used as the file stem.
        out_dir: Output directory, created if needed.

    Returns:
        Path of the written CSV file.
    """
    out_dir = Path(out_dir)
    out_dir.mkdir(parents=True, exist_ok=True)
    out_path = out_dir / f"{name}.csv"

    log.info("Writing gold table: %s", name)
    if pdf.empty:
        log.warning("No rows to write for %s", name)

    pdf.to_csv(out_path, index=False)
    log.info("Gold write complete for %s: %d rows -> %s", name, len(pdf), out_path)
    return out_path

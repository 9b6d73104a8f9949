"""Command-line interface for orchestrating the pipeline.

Provides subcommands: `rank`, `summary`, `charts`, and `all`. Each command
is implemented as a `cmd_*` function that accepts the resolved `Run` options.
Tables printed to stdout are CSV; logs go to stderr and `logs/pipeline.log`.
"""
from __future__ import annotations

import argparse
import logging
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import pandas as pd

from airbnb_pipeline.config import Settings, get_settings, parse_borough
from airbnb_pipeline.errors import ListingsError
from airbnb_pipeline.logging_config import configure_logging

# INGEST
from airbnb_pipeline.ingest.load_csv import read_listings

# CLEAN
from airbnb_pipeline.clean.transform import clean_listings_ddf, filter_borough, filter_to_groups
from airbnb_pipeline.clean.validate import validate_listings

# GOLD
from airbnb_pipeline.aggregate.build_gold import (
    gold_borough_price_summary,
    gold_top_neighborhoods,
    gold_neighborhood_price_summary,
    gold_neighborhood_review_summary,
)
from airbnb_pipeline.aggregate.export import write_gold

# CHARTS
from airbnb_pipeline.report.charts import (
    price_histogram_by_borough,
    price_ridgeline,
    review_score_boxplot,
    save_chart,
)

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class Run:
    """Resolved options for one invocation (CLI flags over Settings)."""
    csv: Path
    out_dir: Path
    borough: str | None
    min_group_size: int
    top_n: int
    strict: bool


# --------------------------------------------------
# Helpers
# --------------------------------------------------
def _resolve(args: argparse.Namespace, s: Settings) -> Run:
    """Merge CLI flags with configuration defaults."""
    min_group_size = args.min_group_size if args.min_group_size is not None else s.min_group_size
    top_n = args.top_n if args.top_n is not None else s.top_n
    if min_group_size < 1:
        raise SystemExit("--min-group-size must be >= 1")
    if top_n < 0:
        raise SystemExit("--top-n must be >= 0")

    return Run(
        csv=Path(args.csv) if args.csv else s.listings_csv,
        out_dir=Path(args.out_dir) if args.out_dir else s.output_dir,
        borough=parse_borough(args.borough) if args.borough is not None else s.borough,
        min_group_size=min_group_size,
        top_n=top_n,
        strict=s.strict and not args.lenient,
    )


def _load_clean(run: Run) -> Any:
    """Raw → Clean: read the CSV, clean prices, log validation failures."""
    ddf = clean_listings_ddf(read_listings(run.csv))
    validate_listings(ddf)
    return ddf


def _borough_frame(run: Run, ddf: Any) -> pd.DataFrame:
    pdf = filter_borough(ddf, run.borough).compute()
    log.info(
        "Listings with a valid price in %s: %d",
        run.borough or "all boroughs",
        len(pdf),
    )
    return pdf


def _emit(pdf: pd.DataFrame) -> None:
    pdf.to_csv(sys.stdout, index=False)


# --------------------------------------------------
# RANK
# --------------------------------------------------
def cmd_rank(run: Run) -> pd.DataFrame:
    """Rank neighborhoods by median price and write `ranked_groups.csv`.

    Returns:
        The ranked Gold table.
    """
    pdf = _borough_frame(run, _load_clean(run))
    ranked = gold_top_neighborhoods(pdf, run.min_group_size, run.top_n, strict=run.strict)
    write_gold(ranked, "ranked_groups", run.out_dir)
    _emit(ranked)
    return ranked


# --------------------------------------------------
# SUMMARY
# --------------------------------------------------
def cmd_summary(run: Run) -> pd.DataFrame:
    """Rank neighborhoods, then write and print their price summary statistics."""
    ddf = _load_clean(run)
    write_gold(gold_borough_price_summary(ddf), "borough_price_summary", run.out_dir)

    pdf = _borough_frame(run, ddf)
    ranked = gold_top_neighborhoods(pdf, run.min_group_size, run.top_n, strict=run.strict)
    groups = ranked["group"].tolist()
    write_gold(ranked, "ranked_groups", run.out_dir)

    top = filter_to_groups(pdf, "neighborhood", groups)
    price = gold_neighborhood_price_summary(top, groups)
    write_gold(price, "neighborhood_price_summary", run.out_dir)
    write_gold(gold_neighborhood_review_summary(top, groups), "neighborhood_review_summary", run.out_dir)

    _emit(price)
    return price


# --------------------------------------------------
# CHARTS
# --------------------------------------------------
def cmd_charts(run: Run) -> list[Path]:
    """Write the borough histogram, price ridge plot and review boxplot as HTML."""
    ddf = _load_clean(run)
    all_pdf = ddf.compute()
    pdf = filter_borough(all_pdf, run.borough)
    groups = gold_top_neighborhoods(pdf, run.min_group_size, run.top_n, strict=run.strict)["group"].tolist()
    if not groups:
        log.warning("No neighborhood has at least %d listings; ridge and box plots are empty", run.min_group_size)

    chart_dir = run.out_dir / "charts"
    return [
        save_chart(price_histogram_by_borough(all_pdf), chart_dir / "price_by_borough.html"),
        save_chart(price_ridgeline(pdf, groups), chart_dir / "price_ridgeline.html"),
        save_chart(review_score_boxplot(pdf, groups), chart_dir / "review_scores.html"),
    ]


# --------------------------------------------------
# ALL
# --------------------------------------------------
def cmd_all(run: Run) -> None:
    """Convenience: run summary → charts with the provided args."""
    cmd_summary(run)
    cmd_charts(run)


COMMANDS = {
    "rank": cmd_rank,
    "summary": cmd_summary,
    "charts": cmd_charts,
    "all": cmd_all,
}


# --------------------------------------------------
# CLI
# --------------------------------------------------
def _add_common(p: argparse.ArgumentParser) -> None:
    p.add_argument("--csv", default=None, help="listings CSV (default: LISTINGS_CSV)")
    p.add_argument("--borough", default=None, help="borough to analyse, or 'all'")
    p.add_argument("--min-group-size", type=int, default=None)
    p.add_argument("--top-n", type=int, default=None)
    p.add_argument("--out-dir", default=None, help="directory for gold tables and charts")
    p.add_argument(
        "--lenient",
        action="store_true",
        help="drop invalid prices at aggregation instead of failing",
    )


def build_parser() -> argparse.ArgumentParser:
    """Build and return the top-level argument parser for the CLI.

    The returned parser has subcommands `rank`, `summary`, `charts`, and
    `all`, each accepting the same data options.

    Returns:
        Configured argparse.ArgumentParser instance.
    """
    p = argparse.ArgumentParser(prog="airbnb-pipeline")
    sub = p.add_subparsers(dest="cmd", required=True)

    for name in COMMANDS:
        _add_common(sub.add_parser(name))

    return p


def main(argv: list[str] | None = None) -> int:
    """CLI entry point: parse args, configure logging and dispatch commands."""
    configure_logging(Path("logs/pipeline.log"))

    args = build_parser().parse_args(argv)
    command = COMMANDS.get(args.cmd)
    if command is None:
        raise SystemExit(2)

    try:
        command(_resolve(args, get_settings()))
    except ListingsError as e:
        log.error("%s: %s", type(e).__name__, e)
        return 1

    return 0


if __name__ == "__main__":
    raise SystemExit(main())

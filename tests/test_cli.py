from __future__ import annotations

import io
from pathlib import Path

import pandas as pd
import pytest

from airbnb_pipeline.cli import build_parser, main

ENV_VARS = ["LISTINGS_CSV", "OUTPUT_DIR", "BOROUGH", "MIN_GROUP_SIZE", "TOP_N", "STRICT"]


@pytest.fixture(autouse=True)
def _workdir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    # logs/pipeline.log is written relative to the working directory
    monkeypatch.chdir(tmp_path)
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


def test_parser_has_subcommands() -> None:
    p = build_parser()
    args = p.parse_args(["rank", "--top-n", "3", "--lenient"])
    assert args.cmd == "rank"
    assert args.top_n == 3
    assert args.lenient is True


def test_rank_prints_and_writes_ranking(
    listings_csv: Path, tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    out_dir = tmp_path / "gold"
    code = main([
        "rank", "--csv", str(listings_csv), "--borough", "Manhattan",
        "--min-group-size", "3", "--top-n", "5", "--out-dir", str(out_dir),
    ])
    assert code == 0

    printed = pd.read_csv(io.StringIO(capsys.readouterr().out))
    assert printed["group"].tolist() == ["Tribeca", "Harlem"]
    assert printed["median"].tolist() == [400.0, 100.0]

    written = pd.read_csv(out_dir / "ranked_groups.csv")
    assert written["group"].tolist() == ["Tribeca", "Harlem"]


def test_summary_writes_gold_tables(
    listings_csv: Path, tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    out_dir = tmp_path / "gold"
    assert main([
        "summary", "--csv", str(listings_csv), "--min-group-size", "3",
        "--top-n", "1", "--out-dir", str(out_dir),
    ]) == 0

    printed = pd.read_csv(io.StringIO(capsys.readouterr().out))
    assert printed["group"].tolist() == ["Tribeca"]
    assert printed.loc[0, "max"] == 1200.0

    for name in ("ranked_groups", "borough_price_summary",
                 "neighborhood_price_summary", "neighborhood_review_summary"):
        assert (out_dir / f"{name}.csv").exists()

    boroughs = pd.read_csv(out_dir / "borough_price_summary.csv")
    assert boroughs["group"].tolist() == ["Brooklyn", "Manhattan"]


def test_review_summary_excludes_missing_scores(listings_csv: Path, tmp_path: Path) -> None:
    out_dir = tmp_path / "gold"
    main(["summary", "--csv", str(listings_csv), "--min-group-size", "3", "--out-dir", str(out_dir)])
    reviews = pd.read_csv(out_dir / "neighborhood_review_summary.csv").set_index("group")
    assert reviews.loc["Harlem", "count"] == 3
    assert reviews.loc["Tribeca", "count"] == 4


def test_charts_written(listings_csv: Path, tmp_path: Path) -> None:
    out_dir = tmp_path / "out"
    assert main(["charts", "--csv", str(listings_csv), "--min-group-size", "2", "--out-dir", str(out_dir)]) == 0
    for name in ("price_by_borough", "price_ridgeline", "review_scores"):
        assert (out_dir / "charts" / f"{name}.html").exists()


def test_missing_csv_exits_non_zero(tmp_path: Path) -> None:
    assert main(["rank", "--csv", str(tmp_path / "missing.csv")]) == 1
    assert "InputNotFound" in (tmp_path / "logs" / "pipeline.log").read_text(encoding="utf-8")


def test_borough_all_ranks_every_borough(
    listings_csv: Path, tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    main([
        "rank", "--csv", str(listings_csv), "--borough", "all",
        "--min-group-size", "3", "--out-dir", str(tmp_path / "gold"),
    ])
    printed = pd.read_csv(io.StringIO(capsys.readouterr().out))
    assert printed["group"].tolist() == ["Tribeca", "Harlem", "Bushwick"]

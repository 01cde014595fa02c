"""CLI entrypoint for season betting-trends reports."""

from __future__ import annotations

import argparse
import logging
import re
import sys
import time
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

from cfb_trends.cli_markdown import render_trends_markdown
from cfb_trends.errors import CLIError, TrendsError
from cfb_trends.ingest import (
    completed_games,
    filter_by_conference,
    load_games,
    load_matchup_lines,
)
from cfb_trends.io_utils import atomic_write_json, atomic_write_text, dumps_json
from cfb_trends.line_index import build_line_index
from cfb_trends.runtime_config import load_runtime_config, set_current_runtime_config
from cfb_trends.settings import Settings
from cfb_trends.trends import aggregate_trends

logger = logging.getLogger(__name__)

DATA_SOURCE = "CFBD API"


def _conference_slug(conference: str) -> str:
    slug = re.sub(r"[^a-z0-9]+", "-", conference.strip().lower()).strip("-")
    return slug or "all"


def _load_settings(config_path: str) -> Settings:
    if config_path.strip():
        set_current_runtime_config(load_runtime_config(Path(config_path.strip())))
        return Settings.from_runtime()
    try:
        return Settings.from_runtime()
    except RuntimeError as exc:
        logger.debug("runtime config unavailable, using environment settings: %s", exc)
        return Settings()


def _resolve_input(cli_value: str, *, data_dir: str, default_name: str) -> Path:
    if cli_value.strip():
        return Path(cli_value.strip()).expanduser()
    return Path(data_dir).expanduser() / default_name


def _emit(text: str, *, out: str) -> None:
    if out.strip():
        path = Path(out.strip()).expanduser()
        atomic_write_text(path, text)
        print(f"report_path={path}")
        return
    print(text, end="" if text.endswith("\n") else "\n")


def _write_report(payload: dict[str, Any], *, reports_dir: str, fmt: str) -> Path:
    """Write a report under `reports_dir` as `trends_<year>_<conference>.<ext>`."""
    suffix = "md" if fmt == "markdown" else "json"
    name = f"trends_{payload['year']}_{_conference_slug(payload['conference'])}.{suffix}"
    path = Path(reports_dir).expanduser() / name
    if fmt == "markdown":
        atomic_write_text(path, render_trends_markdown(payload))
    else:
        atomic_write_json(path, payload)
    print(f"report_path={path}")
    return path


def build_trends_payload(
    *,
    games_path: Path,
    lines_path: Path,
    year: int,
    conference: str,
    preferred_provider: str,
) -> dict[str, Any]:
    """Load payload files, aggregate trends, and wrap them in the response body."""
    started = time.perf_counter()
    games = completed_games(load_games(games_path))
    games = filter_by_conference(games, conference)
    line_index = build_line_index(
        load_matchup_lines(lines_path), preferred_provider=preferred_provider
    )
    logger.info("processing %d completed games (%d indexed lines)", len(games), len(line_index))

    report = aggregate_trends(games, line_index)
    elapsed_ms = int(round((time.perf_counter() - started) * 1000))
    return {
        "success": True,
        "year": year,
        "conference": conference,
        "totalGames": report.total_games,
        "trends": report.to_dict(),
        "meta": {
            "processingTimeMs": elapsed_ms,
            "timestamp": datetime.now(UTC).isoformat().replace("+00:00", "Z"),
            "dataSource": DATA_SOURCE,
            "gamesWithLines": report.games_with_lines,
            "preferredProvider": preferred_provider,
        },
    }


def _cmd_report(args: argparse.Namespace) -> int:
    settings = args.settings
    year = args.year if args.year is not None else settings.default_year
    conference = args.conference.strip() or settings.default_conference
    provider = args.provider.strip() or settings.preferred_provider
    games_path = _resolve_input(
        args.games, data_dir=settings.data_dir, default_name=f"games_{year}.json"
    )
    lines_path = _resolve_input(
        args.lines, data_dir=settings.data_dir, default_name=f"lines_{year}.json"
    )

    payload = build_trends_payload(
        games_path=games_path,
        lines_path=lines_path,
        year=year,
        conference=conference,
        preferred_provider=provider,
    )
    if args.write and not args.out.strip():
        _write_report(payload, reports_dir=settings.reports_dir, fmt=args.format)
    elif args.format == "markdown":
        _emit(render_trends_markdown(payload), out=args.out)
    else:
        _emit(dumps_json(payload), out=args.out)
    return 0


def _cmd_lines(args: argparse.Namespace) -> int:
    settings = args.settings
    provider = args.provider.strip() or settings.preferred_provider
    if not args.lines.strip():
        raise CLIError("--lines is required")
    index = build_line_index(
        load_matchup_lines(Path(args.lines.strip()).expanduser()),
        preferred_provider=provider,
    )
    rows = {
        key: {
            "provider": quote.provider,
            "spread": quote.spread,
            "overUnder": quote.over_under,
            "homeMoneyline": quote.home_moneyline,
            "awayMoneyline": quote.away_moneyline,
        }
        for key, quote in index.items()
    }
    _emit(dumps_json(rows), out="")
    return 0


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="cfb-trends")
    parser.add_argument("--config", default="", help="Path to runtime.toml")
    parser.add_argument("--log-level", default="", help="Logging level (default from settings)")
    parser.add_argument("--data-dir", default="", help="Override the payload data directory")
    parser.add_argument("--reports-dir", default="", help="Override the report output directory")
    subparsers = parser.add_subparsers(dest="command")

    report = subparsers.add_parser(
        "report", help="Aggregate straight-up, ATS and totals trends for one season"
    )
    report.set_defaults(func=_cmd_report)
    report.add_argument("--games", default="", help="Games payload JSON (default: data dir)")
    report.add_argument("--lines", default="", help="Lines payload JSON (default: data dir)")
    report.add_argument("--year", type=int, default=None)
    report.add_argument("--conference", default="")
    report.add_argument("--provider", default="", help="Preferred line provider")
    report.add_argument("--format", choices=("json", "markdown"), default="json")
    report.add_argument("--out", default="")
    report.add_argument(
        "--write",
        action="store_true",
        help="Write the report into the reports dir instead of stdout",
    )

    lines = subparsers.add_parser("lines", help="Show the selected quote per matchup key")
    lines.set_defaults(func=_cmd_lines)
    lines.add_argument("--lines", default="")
    lines.add_argument("--provider", default="")

    return parser


def main(argv: list[str] | None = None) -> int:
    """Run the CLI."""
    parser = _build_parser()
    args = parser.parse_args(argv)
    func = getattr(args, "func", None)
    if func is None:
        parser.print_help()
        return 0
    try:
        args.settings = _load_settings(args.config)
        overrides = {
            key: value.strip()
            for key, value in (("data_dir", args.data_dir), ("reports_dir", args.reports_dir))
            if value.strip()
        }
        if overrides:
            args.settings = args.settings.model_copy(update=overrides)
        logging.basicConfig(
            level=(args.log_level.strip() or args.settings.log_level).upper(),
            format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        )
        return int(func(args))
    except (TrendsError, FileNotFoundError, ValueError, RuntimeError) as exc:
        print(str(exc), file=sys.stderr)
        return 2


if __name__ == "__main__":
    raise SystemExit(main())

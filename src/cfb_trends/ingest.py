"""Normalize downloaded games/lines payloads into typed records."""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable
from pathlib import Path
from typing import Any

from cfb_trends.errors import PayloadError
from cfb_trends.models import Game, LineQuote, MatchupLines
from cfb_trends.util.parsing import clean_text, safe_float, safe_int

logger = logging.getLogger(__name__)

ALL_CONFERENCES = "All"


def _score(payload: dict[str, Any], *keys: str) -> int | None:
    for key in keys:
        value = safe_int(payload.get(key))
        if value is not None:
            return value
    return None


def parse_game(payload: Any) -> Game | None:
    """Build a `Game` from one games-payload row.

    Scores are read from `homePoints`/`awayPoints`, falling back to
    `homeScore`/`awayScore`. Rows without team names or a week return None.
    """
    if not isinstance(payload, dict):
        return None
    home_team = clean_text(payload.get("homeTeam"))
    away_team = clean_text(payload.get("awayTeam"))
    week = safe_int(payload.get("week"))
    if not home_team or not away_team or week is None:
        return None
    completed = payload.get("completed", False)
    return Game(
        home_team=home_team,
        away_team=away_team,
        week=week,
        home_score=_score(payload, "homePoints", "homeScore"),
        away_score=_score(payload, "awayPoints", "awayScore"),
        periods=safe_int(payload.get("periods")),
        home_conference=clean_text(payload.get("homeConference")),
        away_conference=clean_text(payload.get("awayConference")),
        completed=completed if isinstance(completed, bool) else False,
    )


def parse_line_quote(payload: Any) -> LineQuote | None:
    if not isinstance(payload, dict):
        return None
    return LineQuote(
        provider=clean_text(payload.get("provider")),
        spread=safe_float(payload.get("spread")),
        over_under=safe_float(payload.get("overUnder")),
        home_moneyline=safe_int(payload.get("homeMoneyline")),
        away_moneyline=safe_int(payload.get("awayMoneyline")),
    )


def parse_matchup_lines(payload: Any) -> MatchupLines | None:
    """Build `MatchupLines` from one lines-payload row, keeping quote order."""
    if not isinstance(payload, dict):
        return None
    home_team = clean_text(payload.get("homeTeam"))
    away_team = clean_text(payload.get("awayTeam"))
    week = safe_int(payload.get("week"))
    if not home_team or not away_team or week is None:
        return None
    raw_lines = payload.get("lines", [])
    if not isinstance(raw_lines, list):
        raw_lines = []
    quotes = [parse_line_quote(item) for item in raw_lines]
    return MatchupLines(
        home_team=home_team,
        away_team=away_team,
        week=week,
        lines=tuple(quote for quote in quotes if quote is not None),
    )


def completed_games(games: Iterable[Game]) -> list[Game]:
    """Keep games flagged completed with both scores present."""
    return [game for game in games if game.completed and game.has_scores]


def filter_by_conference(games: Iterable[Game], conference: str) -> list[Game]:
    """Keep games where either side plays in `conference`; `All` keeps every game."""
    wanted = conference.strip()
    if not wanted or wanted == ALL_CONFERENCES:
        return list(games)
    return [
        game
        for game in games
        if game.home_conference == wanted or game.away_conference == wanted
    ]


def _load_json_array(path: Path) -> list[Any]:
    if not path.exists():
        raise FileNotFoundError(f"missing payload file: {path}")
    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise PayloadError(f"invalid JSON payload: {path}") from exc
    if not isinstance(payload, list):
        raise PayloadError(f"payload root must be a JSON array: {path}")
    return payload


def load_games(path: Path) -> list[Game]:
    rows = _load_json_array(path)
    games = [game for game in (parse_game(row) for row in rows) if game is not None]
    if len(games) != len(rows):
        logger.info("dropped %d unparseable game rows from %s", len(rows) - len(games), path)
    return games


def load_matchup_lines(path: Path) -> list[MatchupLines]:
    rows = _load_json_array(path)
    matchups = [item for item in (parse_matchup_lines(row) for row in rows) if item is not None]
    if len(matchups) != len(rows):
        logger.info(
            "dropped %d unparseable lines rows from %s", len(rows) - len(matchups), path
        )
    return matchups

"""Season betting-trend aggregation over completed games and selected quotes."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping

from cfb_trends.line_index import game_key
from cfb_trends.models import Game, LineQuote
from cfb_trends.report import OutcomeTally, TrendsReport, TrendsTally
from cfb_trends.util.parsing import safe_float, safe_int

logger = logging.getLogger(__name__)

HOME = "home"
AWAY = "away"
TIE = "tie"
PUSH = "push"

OVER = "over"
UNDER = "under"

BLOWOUT_MARGIN = 21
TOTAL_PUSH_TOLERANCE = 0.5
SPREAD_BUCKET_LIMITS: tuple[tuple[str, float], ...] = (
    ("small", 3.0),
    ("medium", 7.0),
    ("large", 14.0),
)
LARGEST_SPREAD_BUCKET = "huge"


def _other_side(side: str) -> str:
    return AWAY if side == HOME else HOME


def game_outcome(home_score: int, away_score: int) -> str:
    """Straight-up result: `home`, `away`, or `tie`."""
    if home_score > away_score:
        return HOME
    if away_score > home_score:
        return AWAY
    return TIE


def favorite_side(spread: float) -> str | None:
    """Favored side for a home-relative spread; None for a pick-em."""
    if spread < 0:
        return HOME
    if spread > 0:
        return AWAY
    return None


def grade_ats(home_score: int, away_score: int, spread: float) -> str:
    """Side covering a home-relative spread, or `push`.

    The favorite covers only by winning by more than the spread; landing exactly
    on it is a push. Pick-em games go to the straight-up winner.
    """
    favorite = favorite_side(spread)
    if favorite is None:
        outcome = game_outcome(home_score, away_score)
        return PUSH if outcome == TIE else outcome
    required_margin = abs(spread)
    if favorite == HOME:
        actual_margin = home_score - away_score
    else:
        actual_margin = away_score - home_score
    if actual_margin > required_margin:
        return favorite
    if actual_margin == required_margin:
        return PUSH
    return _other_side(favorite)


def grade_total(total_score: int, over_under: float) -> str:
    """Grade a combined score against a posted total: `over`, `under`, or `push`."""
    if abs(total_score - over_under) < TOTAL_PUSH_TOLERANCE:
        return PUSH
    if total_score > over_under:
        return OVER
    return UNDER


def spread_bucket(spread: float) -> str:
    size = abs(spread)
    for name, upper in SPREAD_BUCKET_LIMITS:
        if size <= upper:
            return name
    return LARGEST_SPREAD_BUCKET


def _valid_scores(game: Game) -> tuple[int, int] | None:
    home_score = safe_int(game.home_score)
    away_score = safe_int(game.away_score)
    if home_score is None or away_score is None:
        return None
    if home_score < 0 or away_score < 0:
        return None
    return home_score, away_score


def _tally_team_records(categories: dict[str, OutcomeTally], result: str) -> None:
    home = categories["homeTeams"]
    away = categories["awayTeams"]
    if result == HOME:
        home.wins += 1
        away.losses += 1
    elif result == AWAY:
        away.wins += 1
        home.losses += 1
    else:
        home.draws += 1
        away.draws += 1


def _tally_favorite_records(
    categories: dict[str, OutcomeTally], *, favorite: str, result: str
) -> None:
    dog = _other_side(favorite)
    favorites = (categories["favorites"], categories[f"{favorite}Favorites"])
    dogs = (categories["dogs"], categories[f"{dog}Dogs"])
    if result == favorite:
        winners, losers = favorites, dogs
    elif result == dog:
        winners, losers = dogs, favorites
    else:
        for tally in (*favorites, *dogs):
            tally.draws += 1
        return
    for tally in winners:
        tally.wins += 1
    for tally in losers:
        tally.losses += 1


def _tally_lined_game(
    tally: TrendsTally,
    game: Game,
    *,
    home_score: int,
    away_score: int,
    spread: float,
    over_under: float | None,
) -> None:
    outcome = game_outcome(home_score, away_score)
    favorite = favorite_side(spread)
    total_score = home_score + away_score

    if favorite is not None:
        _tally_favorite_records(tally.straight_up, favorite=favorite, result=outcome)

    ats_result = grade_ats(home_score, away_score, spread)
    _tally_team_records(tally.against_the_spread, ats_result)
    if favorite is not None:
        _tally_favorite_records(tally.against_the_spread, favorite=favorite, result=ats_result)

    if over_under is not None:
        total_result = grade_total(total_score, over_under)
        segment = "overtimeGames" if game.is_overtime else "nonOvertimeGames"
        for name in ("allGames", segment):
            bucket = tally.over_under[name]
            if total_result == PUSH:
                bucket.pushes += 1
            elif total_result == OVER:
                bucket.overs += 1
            else:
                bucket.unders += 1

    spread_range = tally.spread_ranges[spread_bucket(spread)]
    spread_range.games += 1
    if favorite is not None and outcome != TIE:
        if outcome == favorite:
            spread_range.fav_wins += 1
        else:
            spread_range.dog_wins += 1

    if abs(home_score - away_score) >= BLOWOUT_MARGIN:
        tally.blowouts.games += 1
        if over_under is not None:
            if total_score > over_under:
                tally.blowouts.overs += 1
            else:
                tally.blowouts.unders += 1


def _quote_numbers(quote: LineQuote | None) -> tuple[float | None, float | None]:
    if quote is None:
        return None, None
    spread = safe_float(quote.spread)
    over_under = safe_float(quote.over_under)
    if over_under is not None and over_under <= 0:
        over_under = None
    return spread, over_under


def aggregate_trends(games: Iterable[Game], line_index: Mapping[str, LineQuote]) -> TrendsReport:
    """Aggregate straight-up, ATS, totals, spread-range and blowout trends.

    Every game with two valid scores counts toward the home/away straight-up
    records. Line-dependent categories only see games whose matchup has a quote
    with a numeric spread. Games without valid scores are skipped without error,
    so a low `total_games` can mean bad input rows rather than fewer games.
    """
    tally = TrendsTally()
    for game in games:
        scores = _valid_scores(game)
        if scores is None:
            logger.debug("skipping game without valid scores: %s", game_key(game))
            continue
        home_score, away_score = scores
        tally.total_games += 1
        _tally_team_records(tally.straight_up, game_outcome(home_score, away_score))

        spread, over_under = _quote_numbers(line_index.get(game_key(game)))
        if spread is None:
            continue
        tally.games_with_lines += 1
        _tally_lined_game(
            tally,
            game,
            home_score=home_score,
            away_score=away_score,
            spread=spread,
            over_under=over_under,
        )

    logger.debug(
        "aggregated %d games (%d with lines)", tally.total_games, tally.games_with_lines
    )
    return tally.finalize()

"""Season betting trends from completed games and point-spread quotes."""

from cfb_trends.line_index import build_line_index, matchup_key, select_quote
from cfb_trends.models import Game, LineQuote, MatchupLines
from cfb_trends.report import TrendsReport
from cfb_trends.trends import aggregate_trends

__all__ = [
    "Game",
    "LineQuote",
    "MatchupLines",
    "TrendsReport",
    "aggregate_trends",
    "build_line_index",
    "matchup_key",
    "select_quote",
]

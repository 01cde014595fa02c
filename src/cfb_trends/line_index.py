"""Matchup-keyed index of selected betting quotes."""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from cfb_trends.models import Game, LineQuote, MatchupLines

DEFAULT_PREFERRED_PROVIDER = "consensus"
KEY_SEPARATOR = "_"

LineIndex = dict[str, LineQuote]


def matchup_key(home_team: str, away_team: str, week: int) -> str:
    """Build the lookup key for one matchup.

    Team names are joined verbatim; callers normalize names before indexing.
    """
    return KEY_SEPARATOR.join((home_team, away_team, str(week)))


def game_key(game: Game) -> str:
    return matchup_key(game.home_team, game.away_team, game.week)


def select_quote(
    quotes: Sequence[LineQuote],
    *,
    preferred_provider: str = DEFAULT_PREFERRED_PROVIDER,
) -> LineQuote | None:
    """Pick the preferred provider's quote, else the first quote offered."""
    if not quotes:
        return None
    for quote in quotes:
        if quote.provider == preferred_provider:
            return quote
    return quotes[0]


def build_line_index(
    matchups: Iterable[MatchupLines],
    *,
    preferred_provider: str = DEFAULT_PREFERRED_PROVIDER,
) -> LineIndex:
    """Index one selected quote per matchup key.

    The first matchup entry carrying any quotes claims its key. Later entries for
    the same key are ignored, even when they offer the preferred provider.
    """
    index: LineIndex = {}
    for matchup in matchups:
        key = matchup_key(matchup.home_team, matchup.away_team, matchup.week)
        if key in index:
            continue
        selected = select_quote(matchup.lines, preferred_provider=preferred_provider)
        if selected is None:
            continue
        index[key] = selected
    return index

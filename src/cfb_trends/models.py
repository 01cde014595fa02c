"""Typed records for game results and betting quotes."""

from __future__ import annotations

from dataclasses import dataclass

REGULATION_PERIODS = 4


@dataclass(frozen=True)
class Game:
    """One finished contest."""

    home_team: str
    away_team: str
    week: int
    home_score: int | None
    away_score: int | None
    periods: int | None = None
    home_conference: str = ""
    away_conference: str = ""
    completed: bool = True

    @property
    def has_scores(self) -> bool:
        return self.home_score is not None and self.away_score is not None

    @property
    def is_overtime(self) -> bool:
        return self.periods is not None and self.periods > REGULATION_PERIODS


@dataclass(frozen=True)
class LineQuote:
    """One sportsbook's spread/total quote, home-team relative."""

    provider: str
    spread: float | None
    over_under: float | None = None
    home_moneyline: int | None = None
    away_moneyline: int | None = None


@dataclass(frozen=True)
class MatchupLines:
    """All quotes offered for one matchup, in upstream order."""

    home_team: str
    away_team: str
    week: int
    lines: tuple[LineQuote, ...] = ()

"""Trends report schema, per-call tallies, and percentage finalization."""

from __future__ import annotations

import math
from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

RECORD_CATEGORIES: tuple[str, ...] = (
    "awayTeams",
    "homeTeams",
    "favorites",
    "dogs",
    "awayFavorites",
    "awayDogs",
    "homeFavorites",
    "homeDogs",
)
TOTALS_CATEGORIES: tuple[str, ...] = ("overtimeGames", "nonOvertimeGames", "allGames")
SPREAD_BUCKETS: tuple[str, ...] = ("small", "medium", "large", "huge")


def percentage(numerator: int, denominator: int) -> int:
    """Whole-number percentage rounded half-up; 0 when the denominator is 0."""
    if denominator <= 0:
        return 0
    return int(math.floor((numerator / denominator) * 100 + 0.5))


@dataclass(frozen=True)
class RecordCategory:
    wins: int
    losses: int
    ties: int
    percentage: int

    def to_dict(self) -> dict[str, int]:
        return {
            "wins": self.wins,
            "losses": self.losses,
            "ties": self.ties,
            "percentage": self.percentage,
        }


@dataclass(frozen=True)
class AtsCategory:
    wins: int
    losses: int
    pushes: int
    percentage: int

    def to_dict(self) -> dict[str, int]:
        return {
            "wins": self.wins,
            "losses": self.losses,
            "pushes": self.pushes,
            "percentage": self.percentage,
        }


@dataclass(frozen=True)
class TotalsCategory:
    overs: int
    unders: int
    pushes: int
    over_percentage: int
    under_percentage: int

    def to_dict(self) -> dict[str, int]:
        return {
            "overs": self.overs,
            "unders": self.unders,
            "pushes": self.pushes,
            "overPercentage": self.over_percentage,
            "underPercentage": self.under_percentage,
        }


@dataclass(frozen=True)
class SpreadRangeCategory:
    games: int
    fav_wins: int
    dog_wins: int
    fav_percentage: int
    dog_percentage: int

    def to_dict(self) -> dict[str, int]:
        return {
            "games": self.games,
            "favWins": self.fav_wins,
            "dogWins": self.dog_wins,
            "favPercentage": self.fav_percentage,
            "dogPercentage": self.dog_percentage,
        }


@dataclass(frozen=True)
class BlowoutCategory:
    games: int
    overs: int
    unders: int
    over_percentage: int

    def to_dict(self) -> dict[str, int]:
        return {
            "games": self.games,
            "overs": self.overs,
            "unders": self.unders,
            "overPercentage": self.over_percentage,
        }


@dataclass(frozen=True)
class TrendsReport:
    """Finalized season trends. Category mappings are read-only."""

    straight_up: Mapping[str, RecordCategory]
    against_the_spread: Mapping[str, AtsCategory]
    over_under: Mapping[str, TotalsCategory]
    spread_ranges: Mapping[str, SpreadRangeCategory]
    blowouts: BlowoutCategory
    total_games: int
    games_with_lines: int

    def to_dict(self) -> dict[str, Any]:
        """Serialize the trend categories with camelCase keys."""
        return {
            "straightUp": {key: value.to_dict() for key, value in self.straight_up.items()},
            "againstTheSpread": {
                key: value.to_dict() for key, value in self.against_the_spread.items()
            },
            "overUnder": {key: value.to_dict() for key, value in self.over_under.items()},
            "spreadRanges": {key: value.to_dict() for key, value in self.spread_ranges.items()},
            "situational": {"blowouts": self.blowouts.to_dict()},
        }


@dataclass
class OutcomeTally:
    wins: int = 0
    losses: int = 0
    draws: int = 0

    @property
    def total(self) -> int:
        return self.wins + self.losses + self.draws

    def as_record(self) -> RecordCategory:
        return RecordCategory(
            wins=self.wins,
            losses=self.losses,
            ties=self.draws,
            percentage=percentage(self.wins, self.total),
        )

    def as_ats(self) -> AtsCategory:
        return AtsCategory(
            wins=self.wins,
            losses=self.losses,
            pushes=self.draws,
            percentage=percentage(self.wins, self.total),
        )


@dataclass
class TotalsTally:
    overs: int = 0
    unders: int = 0
    pushes: int = 0

    def freeze(self) -> TotalsCategory:
        total = self.overs + self.unders + self.pushes
        return TotalsCategory(
            overs=self.overs,
            unders=self.unders,
            pushes=self.pushes,
            over_percentage=percentage(self.overs, total),
            under_percentage=percentage(self.unders, total),
        )


@dataclass
class SpreadRangeTally:
    games: int = 0
    fav_wins: int = 0
    dog_wins: int = 0

    def freeze(self) -> SpreadRangeCategory:
        return SpreadRangeCategory(
            games=self.games,
            fav_wins=self.fav_wins,
            dog_wins=self.dog_wins,
            fav_percentage=percentage(self.fav_wins, self.games),
            dog_percentage=percentage(self.dog_wins, self.games),
        )


@dataclass
class BlowoutTally:
    games: int = 0
    overs: int = 0
    unders: int = 0

    def freeze(self) -> BlowoutCategory:
        return BlowoutCategory(
            games=self.games,
            overs=self.overs,
            unders=self.unders,
            over_percentage=percentage(self.overs, self.overs + self.unders),
        )


def _record_tallies() -> dict[str, OutcomeTally]:
    return {name: OutcomeTally() for name in RECORD_CATEGORIES}


@dataclass
class TrendsTally:
    """Zeroed counters for one aggregation call."""

    straight_up: dict[str, OutcomeTally] = field(default_factory=_record_tallies)
    against_the_spread: dict[str, OutcomeTally] = field(default_factory=_record_tallies)
    over_under: dict[str, TotalsTally] = field(
        default_factory=lambda: {name: TotalsTally() for name in TOTALS_CATEGORIES}
    )
    spread_ranges: dict[str, SpreadRangeTally] = field(
        default_factory=lambda: {name: SpreadRangeTally() for name in SPREAD_BUCKETS}
    )
    blowouts: BlowoutTally = field(default_factory=BlowoutTally)
    total_games: int = 0
    games_with_lines: int = 0

    def finalize(self) -> TrendsReport:
        """Compute percentages and return the read-only report."""
        return TrendsReport(
            straight_up=MappingProxyType(
                {name: tally.as_record() for name, tally in self.straight_up.items()}
            ),
            against_the_spread=MappingProxyType(
                {name: tally.as_ats() for name, tally in self.against_the_spread.items()}
            ),
            over_under=MappingProxyType(
                {name: tally.freeze() for name, tally in self.over_under.items()}
            ),
            spread_ranges=MappingProxyType(
                {name: tally.freeze() for name, tally in self.spread_ranges.items()}
            ),
            blowouts=self.blowouts.freeze(),
            total_games=self.total_games,
            games_with_lines=self.games_with_lines,
        )

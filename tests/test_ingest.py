import json
from pathlib import Path

import pytest

from cfb_trends.errors import PayloadError
from cfb_trends.ingest import (
    completed_games,
    filter_by_conference,
    load_games,
    load_matchup_lines,
    parse_game,
    parse_matchup_lines,
)


def _game_row(**overrides: object) -> dict:
    row: dict = {
        "homeTeam": "Georgia",
        "awayTeam": "Alabama",
        "week": 1,
        "homePoints": 28,
        "awayPoints": 21,
        "completed": True,
        "periods": 4,
        "homeConference": "SEC",
        "awayConference": "SEC",
    }
    row.update(overrides)
    return row


def test_parse_game_reads_points_fields() -> None:
    game = parse_game(_game_row())

    assert game is not None
    assert (game.home_team, game.away_team, game.week) == ("Georgia", "Alabama", 1)
    assert (game.home_score, game.away_score) == (28, 21)
    assert game.periods == 4
    assert game.is_overtime is False
    assert game.home_conference == "SEC"


def test_parse_game_falls_back_to_score_fields_and_keeps_zero() -> None:
    row = _game_row(homeScore=17, awayPoints=0)
    del row["homePoints"]
    game = parse_game(row)

    assert game is not None
    assert game.home_score == 17
    assert game.away_score == 0


def test_parse_game_rejects_rows_without_identity() -> None:
    assert parse_game(_game_row(homeTeam="")) is None
    assert parse_game(_game_row(week=None)) is None
    assert parse_game(["not", "a", "row"]) is None


def test_completed_games_requires_flag_and_both_scores() -> None:
    games = [
        parse_game(_game_row()),
        parse_game(_game_row(completed=False)),
        parse_game(_game_row(awayPoints=None)),
        parse_game(_game_row(periods=5)),
    ]
    kept = completed_games(game for game in games if game is not None)

    assert len(kept) == 2
    assert kept[1].is_overtime is True


def test_filter_by_conference_matches_either_side() -> None:
    games = [
        parse_game(_game_row()),
        parse_game(_game_row(homeConference="Big Ten", awayConference="SEC")),
        parse_game(_game_row(homeConference="Big 12", awayConference="Pac-12")),
    ]
    typed = [game for game in games if game is not None]

    assert len(filter_by_conference(typed, "All")) == 3
    assert len(filter_by_conference(typed, "SEC")) == 2
    assert len(filter_by_conference(typed, "Big 12")) == 1
    assert filter_by_conference(typed, "ACC") == []


def test_parse_matchup_lines_keeps_order_and_coerces_numbers() -> None:
    matchup = parse_matchup_lines(
        {
            "homeTeam": "Georgia",
            "awayTeam": "Alabama",
            "week": "1",
            "lines": [
                {"provider": "Bovada", "spread": "-3.5", "overUnder": "48.5"},
                {"provider": "consensus", "spread": "N/A", "homeMoneyline": "-150"},
                "garbage",
            ],
        }
    )

    assert matchup is not None
    assert matchup.week == 1
    assert [quote.provider for quote in matchup.lines] == ["Bovada", "consensus"]
    assert matchup.lines[0].spread == -3.5
    assert matchup.lines[0].over_under == 48.5
    assert matchup.lines[1].spread is None
    assert matchup.lines[1].home_moneyline == -150


def test_parse_matchup_lines_tolerates_missing_lines() -> None:
    matchup = parse_matchup_lines({"homeTeam": "A", "awayTeam": "B", "week": 2, "lines": None})
    assert matchup is not None
    assert matchup.lines == ()


def test_load_payload_files(tmp_path: Path) -> None:
    games_path = tmp_path / "games.json"
    lines_path = tmp_path / "lines.json"
    games_path.write_text(json.dumps([_game_row(), {"homeTeam": "X"}]), encoding="utf-8")
    lines_path.write_text(
        json.dumps(
            [
                {
                    "homeTeam": "Georgia",
                    "awayTeam": "Alabama",
                    "week": 1,
                    "lines": [{"provider": "consensus", "spread": -3, "overUnder": 45}],
                }
            ]
        ),
        encoding="utf-8",
    )

    games = load_games(games_path)
    matchups = load_matchup_lines(lines_path)

    assert len(games) == 1
    assert matchups[0].lines[0].spread == -3.0


def test_load_games_errors(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        load_games(tmp_path / "missing.json")

    not_array = tmp_path / "object.json"
    not_array.write_text(json.dumps({"games": []}), encoding="utf-8")
    with pytest.raises(PayloadError):
        load_games(not_array)

    broken = tmp_path / "broken.json"
    broken.write_text("[{", encoding="utf-8")
    with pytest.raises(PayloadError):
        load_matchup_lines(broken)


def test_non_finite_score_row_is_not_completed(tmp_path: Path) -> None:
    games_path = tmp_path / "games.json"
    games_path.write_text(
        json.dumps([_game_row(), _game_row(homePoints="Infinity"), _game_row(awayPoints="nan")]),
        encoding="utf-8",
    )

    games = load_games(games_path)

    assert len(games) == 3
    assert games[1].home_score is None
    assert games[2].away_score is None
    assert len(completed_games(games)) == 1


def test_rows_without_completed_flag_are_dropped() -> None:
    row = _game_row()
    del row["completed"]
    game = parse_game(row)

    assert game is not None
    assert game.completed is False
    assert completed_games([game]) == []
    assert parse_game(_game_row(completed="yes")).completed is False  # type: ignore[union-attr]

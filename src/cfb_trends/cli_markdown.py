"""Markdown render helpers for CLI trends reports."""

from __future__ import annotations

from typing import Any


def _table(
    title: str,
    categories: dict[str, Any],
    columns: tuple[tuple[str, str], ...],
) -> list[str]:
    lines = [f"## {title}", ""]
    header = " | ".join(["Category", *(label for label, _ in columns)])
    lines.append(f"| {header} |")
    lines.append("| " + " | ".join(["---"] * (len(columns) + 1)) + " |")
    for name, row in categories.items():
        if not isinstance(row, dict):
            continue
        cells = [name, *(str(row.get(key, 0)) for _, key in columns)]
        lines.append("| " + " | ".join(cells) + " |")
    lines.append("")
    return lines


def render_trends_markdown(report: dict[str, Any]) -> str:
    trends = report.get("trends", {}) if isinstance(report.get("trends"), dict) else {}
    meta = report.get("meta", {}) if isinstance(report.get("meta"), dict) else {}
    situational = (
        trends.get("situational", {}) if isinstance(trends.get("situational"), dict) else {}
    )

    lines: list[str] = []
    lines.append("# Betting Trends")
    lines.append("")
    lines.append(f"- year: `{report.get('year', '')}`")
    lines.append(f"- conference: `{report.get('conference', '')}`")
    lines.append(f"- total_games: `{report.get('totalGames', 0)}`")
    lines.append(f"- games_with_lines: `{meta.get('gamesWithLines', 0)}`")
    lines.append(f"- preferred_provider: `{meta.get('preferredProvider', '')}`")
    lines.append("")

    lines.extend(
        _table(
            "Straight Up",
            trends.get("straightUp", {}),
            (("W", "wins"), ("L", "losses"), ("T", "ties"), ("Win %", "percentage")),
        )
    )
    lines.extend(
        _table(
            "Against The Spread",
            trends.get("againstTheSpread", {}),
            (("W", "wins"), ("L", "losses"), ("P", "pushes"), ("Cover %", "percentage")),
        )
    )
    lines.extend(
        _table(
            "Over/Under",
            trends.get("overUnder", {}),
            (
                ("Over", "overs"),
                ("Under", "unders"),
                ("Push", "pushes"),
                ("Over %", "overPercentage"),
                ("Under %", "underPercentage"),
            ),
        )
    )
    lines.extend(
        _table(
            "Spread Ranges",
            trends.get("spreadRanges", {}),
            (
                ("Games", "games"),
                ("Fav W", "favWins"),
                ("Dog W", "dogWins"),
                ("Fav %", "favPercentage"),
                ("Dog %", "dogPercentage"),
            ),
        )
    )
    lines.extend(
        _table(
            "Situational",
            situational,
            (
                ("Games", "games"),
                ("Over", "overs"),
                ("Under", "unders"),
                ("Over %", "overPercentage"),
            ),
        )
    )
    return "\n".join(lines)

"""Build breakdown inputs from persisted stat and score rows.

The surrounding application stores one stat row per game, position and
quarter, and one score row per game, team and quarter. The helpers here
turn those rows into the :class:`GameWithPositionStats` and
:class:`OfficialQuarterScore` records the breakdown calculators consume.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from courtstats.adapters.schemas import (
    ATTACK_POSITIONS,
    DEFENCE_POSITIONS,
    QUARTER_LABELS,
    GameWithPositionStats,
    OfficialQuarterScore,
    PositionQuarterStats,
    quarter_label,
)

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from courtstats.adapters.schemas import GameScoreEntry, GameStatRecord

logger = logging.getLogger(__name__)


def build_games_with_position_stats(
    records: Iterable[GameStatRecord],
    *,
    team_id: int | str | None = None,
) -> list[GameWithPositionStats]:
    """Group stat rows into per-game, per-quarter position stats.

    GS and GA rows contribute their ``goals_for``; GK and GD rows
    contribute their ``goals_against``. Rows for non-scoring positions
    are ignored, and a quarter only appears for a game when at least one
    scoring-position row exists for it.

    Args:
        records: Persisted stat rows, in any order.
        team_id: When given, only rows for this team are used.

    Returns:
        One entry per game, in order of first appearance.
    """
    by_game: dict[int | str, dict[str, dict[str, float]]] = {}
    for record in records:
        if team_id is not None and record.team_id != team_id:
            continue
        if record.position in ATTACK_POSITIONS:
            value = record.goals_for
        elif record.position in DEFENCE_POSITIONS:
            value = record.goals_against
        else:
            continue

        quarters = by_game.setdefault(record.game_id, {})
        totals = quarters.setdefault(quarter_label(record.quarter), {})
        key = record.position.lower()
        totals[key] = totals.get(key, 0.0) + value

    games = [
        GameWithPositionStats(
            game_id=game_id,
            quarter_stats={
                label: PositionQuarterStats(**totals)
                for label, totals in sorted(quarters.items())
            },
        )
        for game_id, quarters in by_game.items()
    ]
    logger.debug("Built position stats for %d games", len(games))
    return games


def build_official_quarter_scores(
    entries: Iterable[GameScoreEntry],
    team_id: int | str,
) -> list[OfficialQuarterScore]:
    """Turn per-team score rows into *team_id*'s official quarter scores.

    Within each game, *team_id*'s row for a quarter is its goals for and
    any other team's row is its goals against. Every game yields all
    four quarters; a quarter with no rows scores zero.

    Args:
        entries: Persisted score rows for one or more games.
        team_id: Team whose perspective the scores are built from.

    Returns:
        Four scores per game, games in order of first appearance.
    """
    by_game: dict[int | str, dict[str, list[float]]] = {}
    for entry in entries:
        quarters = by_game.setdefault(
            entry.game_id, {label: [0.0, 0.0] for label in QUARTER_LABELS}
        )
        slot = quarters[quarter_label(entry.quarter)]
        if entry.team_id == team_id:
            slot[0] = entry.score
        else:
            slot[1] = entry.score

    return [
        OfficialQuarterScore(quarter=label, goals_for=scored, goals_against=conceded)
        for quarters in by_game.values()
        for label, (scored, conceded) in quarters.items()
    ]


def merge_official_scores(
    scores: Iterable[OfficialQuarterScore],
) -> list[OfficialQuarterScore]:
    """Sum scores that share a quarter label.

    Args:
        scores: Per-game or already aggregated quarter scores.

    Returns:
        One score per distinct label, in order of first appearance.
    """
    merged: dict[str, list[float]] = {}
    for score in scores:
        totals = merged.setdefault(score.quarter, [0.0, 0.0])
        totals[0] += score.goals_for
        totals[1] += score.goals_against
    return [
        OfficialQuarterScore(quarter=label, goals_for=scored, goals_against=conceded)
        for label, (scored, conceded) in merged.items()
    ]


def final_score(scores: Sequence[OfficialQuarterScore]) -> tuple[float, float]:
    """Return ``(goals_for, goals_against)`` summed over *scores*."""
    return (
        sum(score.goals_for for score in scores),
        sum(score.goals_against for score in scores),
    )


def game_result(goals_for: float, goals_against: float) -> str:
    """Return ``"win"``, ``"loss"`` or ``"draw"``."""
    if goals_for > goals_against:
        return "win"
    if goals_for < goals_against:
        return "loss"
    return "draw"

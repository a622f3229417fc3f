"""Per-game position averages across a set of games."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Collection, Iterable

    from courtstats.adapters.schemas import GameStatRecord


@dataclass(frozen=True, slots=True)
class PositionAverages:
    """Average goals per game credited to each scoring position.

    Attributes:
        gs_avg_goals_for: Goal Shooter goals for per game.
        ga_avg_goals_for: Goal Attack goals for per game.
        gd_avg_goals_against: Goal Defence goals against per game.
        gk_avg_goals_against: Goal Keeper goals against per game.
        attacking_total: ``gs_avg_goals_for + ga_avg_goals_for``.
        defending_total: ``gd_avg_goals_against + gk_avg_goals_against``.
        games_with_position_stats: Number of games averaged over.
    """

    gs_avg_goals_for: float
    ga_avg_goals_for: float
    gd_avg_goals_against: float
    gk_avg_goals_against: float
    attacking_total: float
    defending_total: float
    games_with_position_stats: int


def calculate_position_averages(
    records: Iterable[GameStatRecord],
    *,
    team_id: int | str | None = None,
    eligible_game_ids: Collection[int | str] | None = None,
) -> PositionAverages:
    """Average scoring-position goals over games with position stats.

    The divisor is the number of games, not the number of times a
    position was filled, so a position covered twice in a game still
    counts once towards the game count. Only games in which the
    selected team has rows are counted.

    Args:
        records: Persisted stat rows.
        team_id: When given, only this team's rows are used.
        eligible_game_ids: When given, only these games count, e.g.
            games whose status allows statistics (not forfeits or byes).

    Returns:
        A :class:`PositionAverages`; all zeros when no game qualifies.
    """
    totals = {"GS": 0.0, "GA": 0.0, "GD": 0.0, "GK": 0.0}
    games: set[int | str] = set()

    for record in records:
        if eligible_game_ids is not None and record.game_id not in eligible_game_ids:
            continue
        if team_id is not None and record.team_id != team_id:
            continue
        games.add(record.game_id)
        if record.position in ("GS", "GA"):
            totals[record.position] += record.goals_for
        elif record.position in ("GD", "GK"):
            totals[record.position] += record.goals_against

    count = len(games)
    if count == 0:
        return PositionAverages(0.0, 0.0, 0.0, 0.0, 0.0, 0.0, 0)

    gs = totals["GS"] / count
    ga = totals["GA"] / count
    gd = totals["GD"] / count
    gk = totals["GK"] / count
    return PositionAverages(
        gs_avg_goals_for=gs,
        ga_avg_goals_for=ga,
        gd_avg_goals_against=gd,
        gk_avg_goals_against=gk,
        attacking_total=gs + ga,
        defending_total=gd + gk,
        games_with_position_stats=count,
    )

"""Batch reconciliation across teams.

Wires a :class:`~courtstats.adapters.base.StatsSource` to both breakdown
layers, producing a single :class:`polars.DataFrame` with one row per
team and quarter.

Public API
----------
.. function:: reconcile_teams

    Run the per-quarter calculator and the consistency facade for every
    team and return a tidy polars DataFrame.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import polars as pl
from tqdm import tqdm

from courtstats.breakdown.consistent import get_consistent_stats_breakdown
from courtstats.breakdown.quarters import calculate_quarter_position_breakdowns
from courtstats.config import ReconcileConfig
from courtstats.exceptions import RecordError

if TYPE_CHECKING:
    from collections.abc import Iterable

    from courtstats.adapters.base import StatsSource

logger = logging.getLogger(__name__)

_POSITION_COLUMNS: tuple[str, ...] = (
    "gs",
    "ga",
    "gk",
    "gd",
    "goals_for",
    "goals_against",
)


def reconcile_teams(
    source: StatsSource,
    team_ids: Iterable[int | str] | None = None,
    *,
    config: ReconcileConfig | None = None,
) -> pl.DataFrame:
    """Reconcile every team's quarter breakdowns.

    Teams without any official scores are skipped with a warning.

    Args:
        source: Provider of position stats and official scores.
        team_ids: Teams to reconcile. All of the source's teams when
            ``None``.
        config: Reconciliation settings; defaults when ``None``.

    Returns:
        A :class:`polars.DataFrame` with metadata columns (``team_id``,
        ``quarter``, ``games``, ``data_quality``, ``used_fallback``),
        the season-total breakdown columns (``gs`` .. ``goals_against``)
        and the per-game breakdown columns with an ``avg_`` prefix.
        Per-game columns average over the games with position stats
        and are null for a team without any.

    Raises:
        RecordError: If no team produced any rows.
    """
    config = config or ReconcileConfig()
    teams = list(team_ids) if team_ids is not None else source.list_team_ids()

    rows: list[dict[str, object]] = []
    for team_id in tqdm(
        teams,
        desc="Reconciling teams",
        unit="team",
        disable=not config.show_progress,
    ):
        scores = source.load_official_scores(team_id)
        if not scores:
            logger.warning("No official scores for team %s; skipping", team_id)
            continue
        games = source.load_position_stats(team_id)

        season = calculate_quarter_position_breakdowns(games, scores, config=config)
        # Averages only cover games with position stats.
        per_game = get_consistent_stats_breakdown(
            games,
            source.load_official_scores(
                team_id, game_ids=[game.game_id for game in games]
            ),
            config=config,
        )
        averages = {item.quarter: item for item in per_game.per_quarter}

        for total in season.breakdowns:
            average = averages.get(total.quarter)
            row: dict[str, object] = {
                "team_id": team_id,
                "quarter": total.quarter,
                "games": len(games),
                "data_quality": total.data_quality,
                "used_fallback": total.used_fallback,
            }
            for name in _POSITION_COLUMNS:
                row[name] = getattr(total, name)
                row[f"avg_{name}"] = (
                    getattr(average, name) if average is not None else None
                )
            rows.append(row)

    if not rows:
        msg = f"No reconciled rows produced for teams {teams!r}"
        raise RecordError(msg)

    return pl.DataFrame(rows)

"""Shared test fixtures for the court statistics reconciliation engine.

Provides reusable fixtures used across multiple test modules:

* :func:`make_game` -- factory for games from ``Q1=(gs, ga, gk, gd)``.
* :func:`perfect_game` -- one game with Q1 stats that match its score.
* :func:`partial_game` -- one game with stats for Q1 and Q2 only.
* :func:`four_quarter_scores` -- official scores for Q1-Q4.
* :func:`random_season` -- seeded synthetic season of games and
  per-game official scores for property-style checks.
* :func:`fractional_season` -- the same games with fractional scores.
* :func:`stats_frame` / :func:`scores_frame` -- polars frames of
  persisted rows for two teams meeting in two games.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np
import polars as pl
import pytest

from courtstats.adapters.frames import SCORE_COLUMNS, STAT_COLUMNS
from courtstats.adapters.schemas import (
    QUARTER_LABELS,
    GameWithPositionStats,
    OfficialQuarterScore,
    PositionQuarterStats,
)

if TYPE_CHECKING:
    from collections.abc import Callable

# ------------------------------------------------------------------
# Synthetic season parameters
# ------------------------------------------------------------------

N_GAMES: int = 8
QUARTER_RECORDED_PROB: float = 0.7
MAX_POSITION_GOALS: int = 12


def _make_game(
    game_id: int | str,
    **quarters: tuple[float, float, float, float],
) -> GameWithPositionStats:
    """Build a game from ``Q1=(gs, ga, gk, gd)`` style keyword arguments."""
    return GameWithPositionStats(
        game_id=game_id,
        quarter_stats={
            label: PositionQuarterStats(*values) for label, values in quarters.items()
        },
    )


@pytest.fixture()
def make_game() -> Callable[..., GameWithPositionStats]:
    """Factory building a game from per-quarter position tuples."""
    return _make_game


@pytest.fixture()
def perfect_game() -> GameWithPositionStats:
    """One game whose Q1 position stats sum to its Q1 score (8-2)."""
    return _make_game(1, Q1=(5, 3, 0, 2))


@pytest.fixture()
def partial_game() -> GameWithPositionStats:
    """One game with position stats recorded for Q1 and Q2 only."""
    return _make_game(2, Q1=(5, 3, 0, 2), Q2=(2, 2, 1, 1))


@pytest.fixture()
def four_quarter_scores() -> list[OfficialQuarterScore]:
    """Official scores for all four quarters of a single game."""
    return [
        OfficialQuarterScore("Q1", 8, 2),
        OfficialQuarterScore("Q2", 4, 2),
        OfficialQuarterScore("Q3", 10, 4),
        OfficialQuarterScore("Q4", 6, 6),
    ]


@pytest.fixture()
def random_season() -> tuple[list[GameWithPositionStats], list[OfficialQuarterScore]]:
    """Seeded season of games with patchy position stats.

    Each game records each quarter with probability
    :data:`QUARTER_RECORDED_PROB`; position goals are drawn from
    ``[0, MAX_POSITION_GOALS]``. Official scores are drawn
    independently so they rarely match the position totals, which is
    what the reconciliation has to cope with.
    """
    rng = np.random.default_rng(seed=42)
    games: list[GameWithPositionStats] = []
    scores: list[OfficialQuarterScore] = []

    for game_id in range(1, N_GAMES + 1):
        quarter_stats: dict[str, PositionQuarterStats] = {}
        for label in QUARTER_LABELS:
            if rng.random() < QUARTER_RECORDED_PROB:
                gs, ga, gk, gd = rng.integers(0, MAX_POSITION_GOALS + 1, size=4)
                quarter_stats[label] = PositionQuarterStats(
                    float(gs), float(ga), float(gk), float(gd)
                )
            scored, conceded = rng.integers(0, 20, size=2)
            scores.append(OfficialQuarterScore(label, int(scored), int(conceded)))
        games.append(
            GameWithPositionStats(game_id=game_id, quarter_stats=quarter_stats)
        )

    return games, scores


@pytest.fixture()
def fractional_season(
    random_season: tuple[list[GameWithPositionStats], list[OfficialQuarterScore]],
) -> tuple[list[GameWithPositionStats], list[OfficialQuarterScore]]:
    """The synthetic season with official scores in steps of 0.05.

    Fractional totals land between display tenths, so the rounded
    target and the raw total can disagree.
    """
    games, scores = random_season
    rng = np.random.default_rng(seed=11)
    fractional = [
        OfficialQuarterScore(
            score.quarter,
            int(rng.integers(0, 400)) / 20,
            int(rng.integers(0, 400)) / 20,
        )
        for score in scores
    ]
    return games, fractional


@pytest.fixture()
def stats_frame() -> pl.DataFrame:
    """Persisted stat rows: team 7 recorded games 100 and 101, team 9 game 100.

    Team 7 has no stats for Q4 of game 101, and its game 100 Q3 only
    has a Centre row.
    """
    rows = [
        # game 100, team 7
        (100, 7, "GS", 1, 6, 0),
        (100, 7, "GA", 1, 2, 0),
        (100, 7, "GK", 1, 0, 3),
        (100, 7, "GD", 1, 0, 1),
        (100, 7, "GS", 2, 4, 0),
        (100, 7, "GA", 2, 4, 0),
        (100, 7, "GK", 2, 0, 2),
        (100, 7, "GD", 2, 0, 2),
        (100, 7, "C", 3, 0, 0),
        (100, 7, "GS", 4, 5, 0),
        (100, 7, "GA", 4, 1, 0),
        (100, 7, "GK", 4, 0, 4),
        (100, 7, "GD", 4, 0, 0),
        # game 101, team 7
        (101, 7, "GS", 1, 3, 0),
        (101, 7, "GA", 1, 3, 0),
        (101, 7, "GK", 1, 0, 2),
        (101, 7, "GD", 1, 0, 2),
        (101, 7, "GS", 2, 7, 0),
        (101, 7, "GA", 2, 1, 0),
        (101, 7, "GS", 3, 2, 0),
        (101, 7, "GA", 3, 2, 0),
        (101, 7, "GK", 3, 0, 5),
        (101, 7, "GD", 3, 0, 1),
        # game 100, team 9
        (100, 9, "GS", 1, 3, 0),
        (100, 9, "GA", 1, 1, 0),
        (100, 9, "GK", 1, 0, 6),
        (100, 9, "GD", 1, 0, 2),
    ]
    return pl.DataFrame(
        rows,
        schema=list(STAT_COLUMNS),
        orient="row",
    )


@pytest.fixture()
def scores_frame() -> pl.DataFrame:
    """Official score rows for games 100 (team 7 v 9) and 101 (team 7 v 12)."""
    rows = [
        (100, 7, 1, 8),
        (100, 9, 1, 4),
        (100, 7, 2, 8),
        (100, 9, 2, 4),
        (100, 7, 3, 5),
        (100, 9, 3, 5),
        (100, 7, 4, 6),
        (100, 9, 4, 4),
        (101, 7, 1, 6),
        (101, 12, 1, 4),
        (101, 7, 2, 8),
        (101, 12, 2, 3),
        (101, 7, 3, 4),
        (101, 12, 3, 6),
        (101, 7, 4, 7),
        (101, 12, 4, 2),
    ]
    return pl.DataFrame(
        rows,
        schema=list(SCORE_COLUMNS),
        orient="row",
    )

"""Validation and reconciliation of scores recorded by both clubs.

When both clubs in a game enter their own scores, the home side's goals
for should equal the away side's goals against and vice versa. These
helpers detect a mismatch and pick an official score from the two
records using a named strategy.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum

from courtstats.breakdown.rounding import round_half_away
from courtstats.exceptions import ReconciliationError

logger = logging.getLogger(__name__)


class ReconcileStrategy(str, Enum):
    """How a mismatched pair of club records is resolved."""

    AVERAGE = "average"
    HOME_PRIORITY = "home-priority"
    AWAY_PRIORITY = "away-priority"
    HIGHER = "higher"
    LOWER = "lower"


@dataclass(frozen=True, slots=True)
class TeamScore:
    """One club's record of a game.

    Attributes:
        team_id: Identifier of the recording team.
        goals_for: Goals the team recorded for itself.
        goals_against: Goals the team recorded against itself.
    """

    team_id: int | str
    goals_for: int
    goals_against: int

    def __post_init__(self) -> None:
        """Reject negative counts."""
        if self.goals_for < 0 or self.goals_against < 0:
            msg = (
                f"TeamScore counts must be non-negative, got "
                f"for={self.goals_for} against={self.goals_against}"
            )
            raise ValueError(msg)


@dataclass(frozen=True, slots=True)
class ScoreMismatch:
    """Comparison of the home and away clubs' records.

    Attributes:
        home: The home club's record.
        away: The away club's record.
        home_discrepancy: ``home.goals_for - away.goals_against``.
        away_discrepancy: ``away.goals_for - home.goals_against``.
    """

    home: TeamScore
    away: TeamScore
    home_discrepancy: int
    away_discrepancy: int

    @property
    def is_valid(self) -> bool:
        """``True`` when both records agree."""
        return self.home_discrepancy == 0 and self.away_discrepancy == 0


@dataclass(frozen=True, slots=True)
class ReconciledScore:
    """The score chosen from two club records.

    Attributes:
        home_score: Goals credited to the home team.
        away_score: Goals credited to the away team.
        method: Label of the rule that produced the score.
    """

    home_score: int
    away_score: int
    method: str


def validate_inter_club_scores(home: TeamScore, away: TeamScore) -> ScoreMismatch:
    """Compare the two clubs' records of the same game."""
    return ScoreMismatch(
        home=home,
        away=away,
        home_discrepancy=home.goals_for - away.goals_against,
        away_discrepancy=away.goals_for - home.goals_against,
    )


def get_reconciled_score(
    home: TeamScore,
    away: TeamScore,
    strategy: ReconcileStrategy | str = ReconcileStrategy.HOME_PRIORITY,
) -> ReconciledScore:
    """Pick an official score from two possibly disagreeing records.

    Args:
        home: The home club's record.
        away: The away club's record.
        strategy: Rule applied when the records disagree.

    Returns:
        A :class:`ReconciledScore`. Agreeing records always produce
        ``method="exact-match"``.

    Raises:
        ReconciliationError: If *strategy* is not a known strategy.
    """
    try:
        strategy = ReconcileStrategy(strategy)
    except ValueError:
        msg = (
            f"Unknown reconcile strategy {strategy!r}; expected one of "
            f"{tuple(s.value for s in ReconcileStrategy)}"
        )
        raise ReconciliationError(msg) from None

    mismatch = validate_inter_club_scores(home, away)
    if mismatch.is_valid:
        return ReconciledScore(home.goals_for, away.goals_for, "exact-match")

    logger.debug(
        "Score mismatch between teams %s and %s, resolving with %s",
        home.team_id,
        away.team_id,
        strategy.value,
    )

    if strategy is ReconcileStrategy.HOME_PRIORITY:
        return ReconciledScore(home.goals_for, home.goals_against, "home-team-priority")
    if strategy is ReconcileStrategy.AWAY_PRIORITY:
        return ReconciledScore(away.goals_against, away.goals_for, "away-team-priority")
    if strategy is ReconcileStrategy.HIGHER:
        return ReconciledScore(
            max(home.goals_for, away.goals_against),
            max(away.goals_for, home.goals_against),
            "higher-value",
        )
    if strategy is ReconcileStrategy.LOWER:
        return ReconciledScore(
            min(home.goals_for, away.goals_against),
            min(away.goals_for, home.goals_against),
            "lower-value",
        )
    return ReconciledScore(
        int(round_half_away((home.goals_for + away.goals_against) / 2, 0)),
        int(round_half_away((away.goals_for + home.goals_against) / 2, 0)),
        "averaged",
    )


def score_discrepancy_warning(mismatch: ScoreMismatch) -> str | None:
    """Return a human-readable warning, or ``None`` when records agree."""
    if mismatch.is_valid:
        return None
    return (
        f"Score mismatch detected: home team discrepancy "
        f"{mismatch.home_discrepancy}, away team discrepancy "
        f"{mismatch.away_discrepancy}"
    )

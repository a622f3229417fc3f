"""Internal data schemas for the court statistics reconciliation engine.

Defines the canonical records that cross the boundary between the
surrounding application (stat and score retrieval) and the breakdown
calculators. Every schema is a frozen, slotted dataclass whose
invariants are checked at construction, so calculators can trust
their inputs without re-validating them.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from types import MappingProxyType
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Mapping

COURT_POSITIONS: tuple[str, ...] = ("GS", "GA", "WA", "C", "WD", "GD", "GK")
ATTACK_POSITIONS: tuple[str, ...] = ("GS", "GA")
DEFENCE_POSITIONS: tuple[str, ...] = ("GK", "GD")
SCORING_POSITIONS: tuple[str, ...] = ATTACK_POSITIONS + DEFENCE_POSITIONS
QUARTER_LABELS: tuple[str, ...] = ("Q1", "Q2", "Q3", "Q4")

_PAIR_TOLERANCE = 1e-9


def quarter_label(quarter: int) -> str:
    """Return the label (``"Q1"``..``"Q4"``) for a quarter number."""
    if not 1 <= quarter <= len(QUARTER_LABELS):
        msg = f"quarter must be between 1 and {len(QUARTER_LABELS)}, got {quarter}"
        raise ValueError(msg)
    return QUARTER_LABELS[quarter - 1]


def _check_non_negative(owner: str, **values: float) -> None:
    for name, value in values.items():
        if not math.isfinite(value) or value < 0:
            msg = f"{owner}.{name} must be a finite non-negative number, got {value!r}"
            raise ValueError(msg)


@dataclass(frozen=True, slots=True)
class PositionQuarterStats:
    """Goals credited to the four scoring positions in one quarter.

    Attributes:
        gs: Goals for credited to Goal Shooter.
        ga: Goals for credited to Goal Attack.
        gk: Goals against conceded by Goal Keeper.
        gd: Goals against conceded by Goal Defence.
    """

    gs: float = 0.0
    ga: float = 0.0
    gk: float = 0.0
    gd: float = 0.0

    def __post_init__(self) -> None:
        """Reject negative or non-finite counts."""
        _check_non_negative(
            "PositionQuarterStats", gs=self.gs, ga=self.ga, gk=self.gk, gd=self.gd
        )


@dataclass(frozen=True, slots=True)
class GameWithPositionStats:
    """One completed game's position-level record.

    A quarter missing from ``quarter_stats`` means no position data was
    recorded for it, which is not the same as a quarter of zeros.

    Attributes:
        game_id: Unique game identifier.
        quarter_stats: Read-only mapping from quarter label to the
            position stats recorded for that quarter.
    """

    game_id: int | str
    quarter_stats: Mapping[str, PositionQuarterStats]

    def __post_init__(self) -> None:
        """Freeze the mapping and check its values."""
        for label, stats in self.quarter_stats.items():
            if not isinstance(stats, PositionQuarterStats):
                msg = (
                    f"quarter_stats[{label!r}] must be PositionQuarterStats, "
                    f"got {type(stats).__name__}"
                )
                raise TypeError(msg)
        object.__setattr__(
            self, "quarter_stats", MappingProxyType(dict(self.quarter_stats))
        )

    def has_quarter(self, quarter: str) -> bool:
        """Return ``True`` if position data was recorded for *quarter*."""
        return quarter in self.quarter_stats


@dataclass(frozen=True, slots=True)
class OfficialQuarterScore:
    """Authoritative scoreboard total for one quarter.

    Either one game's quarter, or the same quarter summed across a
    season. Position-derived figures only ever subdivide these totals.

    Attributes:
        quarter: Quarter label, matching the ``quarter_stats`` keys.
        goals_for: Goals scored by the team.
        goals_against: Goals conceded by the team.
    """

    quarter: str
    goals_for: float
    goals_against: float

    def __post_init__(self) -> None:
        """Reject negative or non-finite totals."""
        _check_non_negative(
            "OfficialQuarterScore",
            goals_for=self.goals_for,
            goals_against=self.goals_against,
        )


@dataclass(frozen=True, slots=True)
class PositionPercentages:
    """Attack and defence split across the four scoring positions.

    Attack (``gs + ga``) and defence (``gk + gd``) are normalised
    independently; each pair sums to one.
    """

    gs: float
    ga: float
    gk: float
    gd: float

    def __post_init__(self) -> None:
        """Check ranges and that each pair sums to one."""
        for field in ("gs", "ga", "gk", "gd"):
            value = getattr(self, field)
            if not 0.0 <= value <= 1.0:
                msg = f"PositionPercentages.{field} must be in [0, 1], got {value!r}"
                raise ValueError(msg)
        if not math.isclose(self.gs + self.ga, 1.0, abs_tol=_PAIR_TOLERANCE):
            msg = f"gs + ga must equal 1, got {self.gs + self.ga!r}"
            raise ValueError(msg)
        if not math.isclose(self.gk + self.gd, 1.0, abs_tol=_PAIR_TOLERANCE):
            msg = f"gk + gd must equal 1, got {self.gk + self.gd!r}"
            raise ValueError(msg)

    @classmethod
    def even(cls) -> PositionPercentages:
        """Return the flat 50/50 split for both pairs."""
        return cls(gs=0.5, ga=0.5, gk=0.5, gd=0.5)

    @classmethod
    def from_totals(
        cls,
        gs: float,
        ga: float,
        gk: float,
        gd: float,
        default: PositionPercentages | None = None,
    ) -> PositionPercentages:
        """Normalise raw goal totals into percentages.

        Args:
            gs: Total goals for credited to Goal Shooter.
            ga: Total goals for credited to Goal Attack.
            gk: Total goals against credited to Goal Keeper.
            gd: Total goals against credited to Goal Defence.
            default: Split used for a pair whose total is zero. The
                even split when ``None``.

        Returns:
            A :class:`PositionPercentages` instance.
        """
        fallback = default if default is not None else cls.even()
        attack = gs + ga
        defence = gk + gd
        if attack > 0:
            gs_pct, ga_pct = gs / attack, ga / attack
        else:
            gs_pct, ga_pct = fallback.gs, fallback.ga
        if defence > 0:
            gk_pct, gd_pct = gk / defence, gd / defence
        else:
            gk_pct, gd_pct = fallback.gk, fallback.gd
        return cls(gs=gs_pct, ga=ga_pct, gk=gk_pct, gd=gd_pct)


@dataclass(frozen=True, slots=True)
class GameStatRecord:
    """A persisted per-position, per-quarter stat row.

    Attributes:
        game_id: Identifier of the game the row belongs to.
        team_id: Identifier of the team the stats were recorded for.
        position: Court position code; one of :data:`COURT_POSITIONS`.
        quarter: Quarter number, 1-4.
        goals_for: Goals scored while in this position.
        goals_against: Goals conceded while in this position.
    """

    game_id: int | str
    team_id: int | str
    position: str
    quarter: int
    goals_for: int = 0
    goals_against: int = 0

    def __post_init__(self) -> None:
        """Validate position, quarter and counts."""
        if self.position not in COURT_POSITIONS:
            msg = f"position must be one of {COURT_POSITIONS}, got {self.position!r}"
            raise ValueError(msg)
        quarter_label(self.quarter)
        _check_non_negative(
            "GameStatRecord",
            goals_for=self.goals_for,
            goals_against=self.goals_against,
        )


@dataclass(frozen=True, slots=True)
class GameScoreEntry:
    """A persisted official score row: one team's goals in one quarter.

    Attributes:
        game_id: Identifier of the game.
        team_id: Identifier of the team that scored.
        quarter: Quarter number, 1-4.
        score: Goals the team scored in the quarter.
    """

    game_id: int | str
    team_id: int | str
    quarter: int
    score: int

    def __post_init__(self) -> None:
        """Validate quarter and score."""
        quarter_label(self.quarter)
        _check_non_negative("GameScoreEntry", score=self.score)

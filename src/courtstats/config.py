"""Configuration dataclasses for the court statistics reconciliation engine.

All configuration containers are frozen (immutable) and slotted. Each
dataclass provides sensible defaults so that a zero-argument
``ReconcileConfig()`` is always valid.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path


class FallbackPolicy(str, Enum):
    """Where position percentages come from when a quarter has no data.

    ``SEASON`` uses the attack/defence split summed over every game and
    quarter; ``EVEN`` uses a flat 50/50 split.
    """

    SEASON = "season"
    EVEN = "even"


@dataclass(frozen=True, slots=True)
class RoundingConfig:
    """Precision settings shared by every adjustment pass.

    Attributes:
        decimal_places: Number of decimal places all displayed figures
            are rounded to.
        pair_tolerance: Largest residual (exclusive) the two-value
            adjustment will absorb. Must be wider than one unit at
            ``decimal_places``, so the combined rounding error of two
            halves is covered, and narrower than two units.
    """

    decimal_places: int = 1
    pair_tolerance: float = 0.11

    def __post_init__(self) -> None:
        """Validate precision and tolerance."""
        if self.decimal_places < 0:
            msg = f"decimal_places must be >= 0, got {self.decimal_places}"
            raise ValueError(msg)

        unit = 10.0**-self.decimal_places
        if not unit < self.pair_tolerance < 2 * unit:
            msg = (
                f"pair_tolerance must be in ({unit}, {2 * unit}) for "
                f"decimal_places={self.decimal_places}, got {self.pair_tolerance}"
            )
            raise ValueError(msg)


@dataclass(frozen=True, slots=True)
class BreakdownConfig:
    """Fallback policies for the two breakdown layers.

    Attributes:
        quarter_fallback: Policy used by the per-quarter calculator
            when no fallback percentages are supplied.
        aggregate_fallback: Policy used by the consistency facade for
            quarters without position data.
    """

    quarter_fallback: FallbackPolicy = FallbackPolicy.SEASON
    aggregate_fallback: FallbackPolicy = FallbackPolicy.EVEN

    def __post_init__(self) -> None:
        """Coerce policy names such as ``"even"`` into :class:`FallbackPolicy`."""
        for name in ("quarter_fallback", "aggregate_fallback"):
            value = getattr(self, name)
            try:
                policy = FallbackPolicy(value)
            except ValueError:
                msg = (
                    f"{name} must be one of "
                    f"{tuple(p.value for p in FallbackPolicy)}, got {value!r}"
                )
                raise ValueError(msg) from None
            object.__setattr__(self, name, policy)


@dataclass(frozen=True, slots=True)
class ReconcileConfig:
    """Master configuration for a reconciliation run.

    Attributes:
        data_dir: Directory holding the stat and score input files.
        output_dir: Directory reconciled outputs are written to.
        rounding: Precision settings.
        breakdown: Fallback policies.
        show_progress: Whether batch runs display a progress bar.

    Raises:
        ValueError: If any configuration invariant is violated.
    """

    data_dir: Path = field(default_factory=lambda: Path("data/input"))
    output_dir: Path = field(default_factory=lambda: Path("data/output"))
    rounding: RoundingConfig = field(default_factory=RoundingConfig)
    breakdown: BreakdownConfig = field(default_factory=BreakdownConfig)
    show_progress: bool = True

    def __post_init__(self) -> None:
        """Validate configuration invariants after initialization."""
        if Path(self.output_dir) == Path(self.data_dir):
            msg = (
                f"output_dir must differ from data_dir, both are "
                f"{str(self.data_dir)!r}"
            )
            raise ValueError(msg)

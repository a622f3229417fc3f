"""Court statistics reconciliation engine.

Derives consistent, rounded, sum-matching quarter-by-quarter netball
position breakdowns from raw position stats and official scores.
"""

from courtstats.config import ReconcileConfig
from courtstats.exceptions import CourtStatsError

__version__ = "0.1.0"

__all__ = ["CourtStatsError", "ReconcileConfig", "__version__"]

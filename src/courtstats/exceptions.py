"""Custom exceptions for the court statistics reconciliation engine.

All exceptions inherit from :class:`CourtStatsError` so callers can catch
the full family with a single ``except CourtStatsError`` clause.

The breakdown calculators themselves never raise for well-typed input;
these exceptions belong to the layers that feed them.
"""


class CourtStatsError(Exception):
    """Base exception for all court statistics errors."""


class RecordError(CourtStatsError):
    """Raised when persisted stat or score rows cannot be turned into records."""


class ReconciliationError(CourtStatsError):
    """Raised when two clubs' recorded scores cannot be reconciled."""

class ScoringError(Exception):
    """Base exception for the scoring core."""


class UnknownMetricError(ScoringError):
    """Raised when a metric identifier has no reference band.

    This is a programming error, not a runtime condition.
    """

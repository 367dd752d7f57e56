class InsightError(Exception):
    """Raised when a narrative cannot be generated."""

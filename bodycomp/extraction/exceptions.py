class ExtractionError(Exception):
    """Raised when a report image cannot be turned into a reading."""

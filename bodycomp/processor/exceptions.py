class ProcessorError(Exception):
    """Base exception for all processor-related errors."""


class ReportNotFoundError(ProcessorError):
    """Raised when a report upload cannot be found in the database."""


class SubjectNotFoundError(ProcessorError):
    """Raised when a tracked subject cannot be found in the database."""


class UnsupportedStorageDiskError(ProcessorError):
    """Raised when an upload uses an unsupported storage disk type."""


class UploadTooLargeError(ProcessorError):
    """Raised when an upload exceeds the configured size limit."""


class UnsupportedMediaTypeError(ProcessorError):
    """Raised when an upload is not an image."""


class ManualEntryError(ProcessorError):
    """Raised when a manually entered measurement cannot be saved."""

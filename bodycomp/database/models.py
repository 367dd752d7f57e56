from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class ReportUpload:
    """Represents a row from the report_uploads table (subset of columns)."""

    id: int
    uuid: str
    subject_id: int
    storage_disk: str
    mime_type: str
    file_size_bytes: int
    status: str = "pending"
    error_message: str | None = None
    measurement_id: int | None = None
    processed_at: datetime | None = None


class UploadStatus:
    PENDING = "pending"
    PROCESSED = "processed"
    MANUAL_ENTRY_REQUIRED = "manual_entry_required"
    FAILED = "failed"

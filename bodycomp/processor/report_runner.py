from bodycomp.database.models import UploadStatus
from bodycomp.database.repositories.report_uploads_repository import ReportUploadsRepository
from bodycomp.logging.logger import Log
from bodycomp.processor.exceptions import ReportNotFoundError
from bodycomp.processor.processor import Processor


class ReportRunner:
    """Run the processor for one upload and record failures on the upload."""

    def __init__(self, processor: Processor, upload_repo: ReportUploadsRepository) -> None:
        self._processor = processor
        self._upload_repo = upload_repo

    def run(self, upload_id: int) -> bool:
        """Process an upload. Returns False when processing failed."""
        try:
            self._processor.process(upload_id)
        except ReportNotFoundError as exc:
            Log.error(str(exc))
            return False
        except Exception as exc:
            self._handle_failure(upload_id, exc)
            return False
        Log.info(f"Upload {upload_id} completed successfully")
        return True

    def _handle_failure(self, upload_id: int, exc: Exception) -> None:
        Log.error(f"Upload {upload_id} failed: {exc}")
        try:
            self._upload_repo.mark_status(upload_id, UploadStatus.FAILED, str(exc))
        except Exception as mark_exc:
            Log.error(f"Could not record failure for upload {upload_id}: {mark_exc}")

from pathlib import Path
from typing import ClassVar

from bodycomp.database.models import ReportUpload
from bodycomp.extraction.models import ReportImage
from bodycomp.processor.exceptions import (
    UnsupportedMediaTypeError,
    UnsupportedStorageDiskError,
    UploadTooLargeError,
)


def report_file_path(files_root: Path, subject_id: int, uuid: str, extension: str) -> Path:
    """Build path to a report image: {files_root}/{subject_id}/{uuid}{extension}"""
    return files_root / str(subject_id) / f"{uuid}{extension}"


class FileLoader:
    """Resolves the filesystem path for a report upload and reads the image."""

    FILES_ROOT = Path("/app/files")
    MAX_UPLOAD_BYTES = 10 * 1024 * 1024
    EXTENSIONS: ClassVar[dict[str, str]] = {
        "image/jpeg": ".jpg",
        "image/png": ".png",
        "image/webp": ".webp",
        "image/heic": ".heic",
    }

    def __init__(self, files_root: Path | None = None, max_bytes: int | None = None) -> None:
        self._files_root = files_root if files_root is not None else self.FILES_ROOT
        self._max_bytes = max_bytes if max_bytes is not None else self.MAX_UPLOAD_BYTES

    def load(self, upload: ReportUpload) -> ReportImage:
        """Read the report image from disk.

        Raises:
            UnsupportedStorageDiskError: if storage_disk is not 'local'.
            UnsupportedMediaTypeError: if the upload is not a supported image type.
            UploadTooLargeError: if the upload exceeds the size limit.
            FileNotFoundError: if the file does not exist at the resolved path.
        """
        if upload.storage_disk != "local":
            raise UnsupportedStorageDiskError(
                f"storage_disk '{upload.storage_disk}' is not supported"
            )
        extension = self.EXTENSIONS.get(upload.mime_type)
        if extension is None:
            raise UnsupportedMediaTypeError(f"mime_type '{upload.mime_type}' is not an image")
        if upload.file_size_bytes > self._max_bytes:
            raise self._too_large(upload.file_size_bytes)

        path = report_file_path(self._files_root, upload.subject_id, upload.uuid, extension)
        if not path.exists():
            raise FileNotFoundError(f"File not found: {path}")
        data = path.read_bytes()
        if len(data) > self._max_bytes:
            raise self._too_large(len(data))
        return ReportImage(data=data, mime_type=upload.mime_type)

    def _too_large(self, size: int) -> UploadTooLargeError:
        return UploadTooLargeError(f"Upload is {size} bytes, limit is {self._max_bytes}")

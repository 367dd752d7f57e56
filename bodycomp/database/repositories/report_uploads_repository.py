from typing import Any

from psycopg.rows import dict_row
from psycopg.types.json import Jsonb

from bodycomp.database.connection import get_connection
from bodycomp.database.models import ReportUpload
from bodycomp.processor.exceptions import ReportNotFoundError


class ReportUploadsRepository:
    """Database operations for the report_uploads table."""

    def find_by_id(self, upload_id: int) -> ReportUpload:
        """Find a report upload by ID.

        Raises:
            ReportNotFoundError: if no upload with this ID exists.
        """
        with get_connection() as conn:
            with conn.cursor(row_factory=dict_row) as cur:
                cur.execute(
                    """
                    SELECT id, uuid, subject_id, storage_disk, mime_type,
                           file_size_bytes, status, error_message,
                           measurement_id, processed_at
                    FROM report_uploads
                    WHERE id = %s
                    """,
                    (upload_id,),
                )
                row = cur.fetchone()

        if row is None:
            raise ReportNotFoundError(f"Report upload {upload_id} not found")

        return ReportUpload(
            id=row["id"],
            uuid=str(row["uuid"]),
            subject_id=row["subject_id"],
            storage_disk=row["storage_disk"],
            mime_type=row["mime_type"],
            file_size_bytes=row["file_size_bytes"],
            status=row["status"],
            error_message=row["error_message"],
            measurement_id=row["measurement_id"],
            processed_at=row["processed_at"],
        )

    def find_extracted_result(self, upload_id: int) -> dict[str, Any] | None:
        """Return the stored extraction JSON, or None when extraction never ran.

        Raises:
            ReportNotFoundError: if no upload with this ID exists.
        """
        with get_connection() as conn:
            with conn.cursor() as cur:
                cur.execute(
                    "SELECT extracted_result FROM report_uploads WHERE id = %s",
                    (upload_id,),
                )
                row = cur.fetchone()

        if row is None:
            raise ReportNotFoundError(f"Report upload {upload_id} not found")
        return row[0]

    def update_extraction(self, upload_id: int, extracted: dict[str, Any]) -> None:
        """Persist the extracted fields as JSONB.

        Raises:
            ReportNotFoundError: if no upload with this ID exists.
        """
        self._update(
            upload_id,
            "SET extracted_result = %s, updated_at = NOW()",
            (Jsonb(extracted),),
        )

    def update_measurement(self, upload_id: int, measurement_id: int) -> None:
        self._update(
            upload_id,
            "SET measurement_id = %s, updated_at = NOW()",
            (measurement_id,),
        )

    def update_evaluation(self, upload_id: int, evaluation: dict[str, Any]) -> None:
        self._update(
            upload_id,
            "SET evaluation = %s, updated_at = NOW()",
            (Jsonb(evaluation),),
        )

    def update_insights(self, upload_id: int, insights: str) -> None:
        self._update(
            upload_id,
            "SET insights = %s, updated_at = NOW()",
            (insights,),
        )

    def mark_status(self, upload_id: int, status: str, error: str | None = None) -> None:
        """Set the final processing status and stamp processed_at."""
        self._update(
            upload_id,
            """
            SET status = %s, error_message = %s,
                processed_at = NOW(), updated_at = NOW()
            """,
            (status, error),
        )

    @staticmethod
    def _update(upload_id: int, set_clause: str, params: tuple[Any, ...]) -> None:
        with get_connection() as conn:
            with conn.cursor() as cur:
                cur.execute(
                    f"UPDATE report_uploads {set_clause} WHERE id = %s",  # noqa: S608
                    (*params, upload_id),
                )
                if cur.rowcount == 0:
                    raise ReportNotFoundError(f"Report upload {upload_id} not found")
            conn.commit()

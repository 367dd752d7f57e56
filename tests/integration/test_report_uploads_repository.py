from typing import Any

import psycopg
import pytest

from bodycomp.database.models import ReportUpload, UploadStatus
from bodycomp.database.repositories.report_uploads_repository import ReportUploadsRepository
from bodycomp.processor.exceptions import ReportNotFoundError


def _column(db_conn: psycopg.Connection[Any], upload_id: int, column: str) -> Any:
    with db_conn.cursor() as cur:
        cur.execute(
            f"SELECT {column} FROM report_uploads WHERE id = %s",  # noqa: S608
            (upload_id,),
        )
        row = cur.fetchone()
    db_conn.commit()
    assert row is not None
    return row[0]


@pytest.mark.integration
class TestReportUploadsRepositoryFindById:
    def test_find_by_id_returns_upload(self, seed_upload: ReportUpload) -> None:
        upload = ReportUploadsRepository().find_by_id(seed_upload.id)
        assert upload.uuid == seed_upload.uuid
        assert upload.subject_id == seed_upload.subject_id
        assert upload.mime_type == "image/jpeg"
        assert upload.status == UploadStatus.PENDING

    def test_find_by_id_raises_when_not_found(self) -> None:
        with pytest.raises(ReportNotFoundError, match="999999 not found"):
            ReportUploadsRepository().find_by_id(999999)


@pytest.mark.integration
class TestReportUploadsRepositoryUpdates:
    def test_update_extraction_persists_json(
        self, seed_upload: ReportUpload, db_conn: psycopg.Connection[Any]
    ) -> None:
        ReportUploadsRepository().update_extraction(seed_upload.id, {"weight": 81.5})
        assert _column(db_conn, seed_upload.id, "extracted_result") == {"weight": 81.5}

    def test_update_evaluation_and_insights(
        self, seed_upload: ReportUpload, db_conn: psycopg.Connection[Any]
    ) -> None:
        repo = ReportUploadsRepository()
        repo.update_evaluation(seed_upload.id, {"overall": {"score": 72}})
        repo.update_insights(seed_upload.id, "Keep going.")
        assert _column(db_conn, seed_upload.id, "evaluation") == {"overall": {"score": 72}}
        assert _column(db_conn, seed_upload.id, "insights") == "Keep going."

    def test_mark_status_failed_records_error(self, seed_upload: ReportUpload) -> None:
        repo = ReportUploadsRepository()
        repo.mark_status(seed_upload.id, UploadStatus.FAILED, "boom")
        upload = repo.find_by_id(seed_upload.id)
        assert upload.status == UploadStatus.FAILED
        assert upload.error_message == "boom"
        assert upload.processed_at is not None

    def test_updates_raise_when_not_found(self) -> None:
        repo = ReportUploadsRepository()
        with pytest.raises(ReportNotFoundError):
            repo.update_insights(999999, "x")
        with pytest.raises(ReportNotFoundError):
            repo.mark_status(999999, UploadStatus.PROCESSED)

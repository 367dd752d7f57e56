import os
import uuid
from collections.abc import Generator
from typing import Any

import psycopg
import pytest

from bodycomp.config.settings import Settings
from bodycomp.database.connection import apply_schema, close_pool, get_connection, init_pool
from bodycomp.database.models import ReportUpload


def _test_settings() -> Settings:
    os.environ.setdefault("DB_DATABASE", "bodycomp_test")
    return Settings()


@pytest.fixture(scope="session")
def test_settings() -> Settings:
    return _test_settings()


@pytest.fixture(scope="session", autouse=True)
def integration_pool(test_settings: Settings) -> Generator[None, None, None]:
    try:
        init_pool(test_settings)
        apply_schema()
    except Exception as e:
        close_pool()
        pytest.skip(f"PostgreSQL test DB not available: {e}. Set DB_* env to run.")
    try:
        yield
    finally:
        close_pool()


@pytest.fixture
def db_conn(integration_pool: None) -> Generator[psycopg.Connection[Any], None, None]:
    with get_connection() as conn:
        yield conn


@pytest.fixture
def seed_subject(db_conn: psycopg.Connection[Any]) -> Generator[int, None, None]:
    """Insert a subject; its measurements and uploads are removed with it."""
    with db_conn.cursor() as cur:
        cur.execute(
            """
            INSERT INTO subjects (name, gender, age, height_cm, notes)
            VALUES (%s, %s, %s, %s, %s)
            RETURNING id
            """,
            ("Alex", "male", 38, 170.0, "on GLP-1"),
        )
        row = cur.fetchone()
        assert row is not None
        subject_id = row[0]
    db_conn.commit()
    try:
        yield subject_id
    finally:
        with db_conn.cursor() as cur:
            cur.execute("DELETE FROM subjects WHERE id = %s", (subject_id,))
        db_conn.commit()


@pytest.fixture
def seed_upload(db_conn: psycopg.Connection[Any], seed_subject: int) -> ReportUpload:
    upload_uuid = str(uuid.uuid4())
    with db_conn.cursor() as cur:
        cur.execute(
            """
            INSERT INTO report_uploads (uuid, subject_id, storage_disk, mime_type, file_size_bytes)
            VALUES (%s::uuid, %s, %s, %s, %s)
            RETURNING id
            """,
            (upload_uuid, seed_subject, "local", "image/jpeg", 3),
        )
        row = cur.fetchone()
        assert row is not None
        upload_id = row[0]
    db_conn.commit()
    return ReportUpload(
        id=upload_id,
        uuid=upload_uuid,
        subject_id=seed_subject,
        storage_disk="local",
        mime_type="image/jpeg",
        file_size_bytes=3,
    )

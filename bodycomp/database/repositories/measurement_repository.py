from dataclasses import fields
from typing import Any

from psycopg import sql
from psycopg.rows import dict_row

from bodycomp.database.connection import get_connection
from bodycomp.extraction.models import PartialReading
from bodycomp.measurements.models import Measurement, MeasurementInput

READING_COLUMNS: tuple[str, ...] = tuple(
    f.name for f in fields(PartialReading) if f.name != "measurement_date"
)

_SELECT_COLUMNS = sql.SQL(", ").join(
    sql.Identifier(name)
    for name in (
        "id",
        "subject_id",
        "week_number",
        "measurement_date",
        "medication_dose",
        "status",
        "created_at",
        *READING_COLUMNS,
    )
)


class MeasurementRepository:
    """Database operations for the measurements table."""

    def insert(self, subject_id: int, week_number: int, data: MeasurementInput) -> int:
        """Insert a measurement and return its ID."""
        columns = (
            "subject_id",
            "week_number",
            "measurement_date",
            "medication_dose",
            "status",
            *READING_COLUMNS,
        )
        values: list[Any] = [
            subject_id,
            week_number,
            data.measurement_date,
            data.medication_dose,
            data.status,
            *(getattr(data.reading, name) for name in READING_COLUMNS),
        ]
        query = sql.SQL("INSERT INTO measurements ({}) VALUES ({}) RETURNING id").format(
            sql.SQL(", ").join(sql.Identifier(c) for c in columns),
            sql.SQL(", ").join(sql.Placeholder() for _ in columns),
        )
        with get_connection() as conn:
            with conn.cursor() as cur:
                cur.execute(query, values)
                row = cur.fetchone()
            conn.commit()

        if row is None:
            raise RuntimeError("INSERT into measurements returned no id")
        return int(row[0])

    def count_for_subject(self, subject_id: int) -> int:
        with get_connection() as conn:
            with conn.cursor() as cur:
                cur.execute(
                    "SELECT COUNT(*) FROM measurements WHERE subject_id = %s",
                    (subject_id,),
                )
                row = cur.fetchone()
        return int(row[0]) if row is not None else 0

    def list_for_subject(self, subject_id: int) -> list[Measurement]:
        """All measurements for a subject ordered by week number, then date."""
        query = sql.SQL(
            """
            SELECT {}
            FROM measurements
            WHERE subject_id = %s
            ORDER BY week_number, measurement_date, id
            """
        ).format(_SELECT_COLUMNS)
        with get_connection() as conn:
            with conn.cursor(row_factory=dict_row) as cur:
                cur.execute(query, (subject_id,))
                rows = cur.fetchall()
        return [self._to_measurement(row) for row in rows]

    def latest_for_subject(self, subject_id: int) -> Measurement | None:
        query = sql.SQL(
            """
            SELECT {}
            FROM measurements
            WHERE subject_id = %s
            ORDER BY week_number DESC, measurement_date DESC, id DESC
            LIMIT 1
            """
        ).format(_SELECT_COLUMNS)
        with get_connection() as conn:
            with conn.cursor(row_factory=dict_row) as cur:
                cur.execute(query, (subject_id,))
                row = cur.fetchone()
        if row is None:
            return None
        return self._to_measurement(row)

    @staticmethod
    def _to_measurement(row: dict[str, Any]) -> Measurement:
        reading = PartialReading(
            measurement_date=row["measurement_date"],
            **{name: row[name] for name in READING_COLUMNS},
        )
        return Measurement(
            id=row["id"],
            subject_id=row["subject_id"],
            week_number=row["week_number"],
            measurement_date=row["measurement_date"],
            reading=reading,
            medication_dose=row["medication_dose"],
            status=row["status"],
            created_at=row["created_at"],
        )

from psycopg.rows import dict_row

from bodycomp.database.connection import get_connection
from bodycomp.measurements.models import Subject
from bodycomp.processor.exceptions import SubjectNotFoundError
from bodycomp.scoring.models import Gender


class SubjectRepository:
    """Database operations for the subjects table."""

    def find_by_id(self, subject_id: int) -> Subject:
        """Find a tracked subject by ID.

        Raises:
            SubjectNotFoundError: if no subject with this ID exists.
        """
        with get_connection() as conn:
            with conn.cursor(row_factory=dict_row) as cur:
                cur.execute(
                    """
                    SELECT id, name, gender, age, height_cm, notes
                    FROM subjects
                    WHERE id = %s
                    """,
                    (subject_id,),
                )
                row = cur.fetchone()

        if row is None:
            raise SubjectNotFoundError(f"Subject {subject_id} not found")

        return Subject(
            id=row["id"],
            name=row["name"],
            gender=Gender(row["gender"]),
            age=row["age"],
            height_cm=row["height_cm"],
            notes=row["notes"],
        )

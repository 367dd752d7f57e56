from bodycomp.database.repositories.measurement_repository import MeasurementRepository
from bodycomp.logging.logger import Log
from bodycomp.measurements.models import MeasurementInput


def resolve_week_number(explicit: int | None, existing_count: int) -> int:
    """An explicit week number wins; otherwise the next one after existing measurements."""
    if explicit is not None:
        return explicit
    return existing_count + 1


class MeasurementService:
    """Saves measurements for a subject, assigning week numbers."""

    def __init__(self, repo: MeasurementRepository) -> None:
        self._repo = repo

    def add(self, subject_id: int, data: MeasurementInput) -> int:
        """Save a measurement and return its ID."""
        existing = 0 if data.week_number is not None else self._repo.count_for_subject(subject_id)
        week_number = resolve_week_number(data.week_number, existing)
        measurement_id = self._repo.insert(subject_id, week_number, data)
        Log.info(
            f"Saved measurement {measurement_id} for subject {subject_id}",
            week=week_number,
            fields=len(data.reading.filled_fields()),
        )
        return measurement_id

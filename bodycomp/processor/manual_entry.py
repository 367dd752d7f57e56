from collections.abc import Mapping

from bodycomp.database.models import UploadStatus
from bodycomp.database.repositories.report_uploads_repository import ReportUploadsRepository
from bodycomp.extraction.validator import validate_and_build
from bodycomp.logging.logger import Log
from bodycomp.measurements.form import parse_measurement_form, prefill_from_extraction
from bodycomp.measurements.models import MeasurementInput, Subject
from bodycomp.measurements.service import MeasurementService
from bodycomp.processor.exceptions import ManualEntryError
from bodycomp.processor.steps import evaluation_payload
from bodycomp.scoring.evaluator import evaluate
from bodycomp.scoring.protein import protein_range


class ManualEntry:
    """Saves a measurement typed in by hand.

    With an upload, the form is pre-filled from that upload's stored
    extraction and saving it completes the upload the pipeline left in
    `manual_entry_required`.
    """

    def __init__(
        self,
        measurement_service: MeasurementService,
        upload_repo: ReportUploadsRepository,
    ) -> None:
        self._measurement_service = measurement_service
        self._upload_repo = upload_repo

    def save(
        self,
        subject: Subject,
        form: Mapping[str, str],
        upload_id: int | None = None,
    ) -> int:
        """Save the measurement and return its ID.

        Raises:
            MeasurementFormError: if a form value cannot be parsed.
            ReportNotFoundError: if the upload does not exist.
            ManualEntryError: if nothing was entered, or the upload belongs to
                another subject or is already processed.
        """
        if upload_id is None:
            data = parse_measurement_form(form)
        else:
            data = self._prefilled(subject, form, upload_id)
        if data.reading.is_empty():
            raise ManualEntryError("No measurement values entered")

        measurement_id = self._measurement_service.add(subject.id, data)
        if upload_id is not None:
            self._complete_upload(subject, upload_id, measurement_id, data)
        return measurement_id

    def _prefilled(
        self,
        subject: Subject,
        form: Mapping[str, str],
        upload_id: int,
    ) -> MeasurementInput:
        upload = self._upload_repo.find_by_id(upload_id)
        if upload.subject_id != subject.id:
            raise ManualEntryError(
                f"Upload {upload_id} belongs to subject {upload.subject_id}, not {subject.id}"
            )
        if upload.status == UploadStatus.PROCESSED:
            raise ManualEntryError(f"Upload {upload_id} is already processed")
        stored = self._upload_repo.find_extracted_result(upload_id) or {}
        return prefill_from_extraction(form, validate_and_build(stored))

    def _complete_upload(
        self,
        subject: Subject,
        upload_id: int,
        measurement_id: int,
        data: MeasurementInput,
    ) -> None:
        self._upload_repo.update_measurement(upload_id, measurement_id)
        evaluation = evaluate(data.reading.to_metric_reading(), subject.gender)
        protein = None
        if data.reading.weight is not None:
            protein = protein_range(data.reading.weight, subject.protein_profile)
        self._upload_repo.update_evaluation(upload_id, evaluation_payload(evaluation, protein))
        self._upload_repo.mark_status(upload_id, UploadStatus.PROCESSED)
        Log.info(f"Upload {upload_id} completed by manual entry", measurement_id=measurement_id)

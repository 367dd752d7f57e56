from dataclasses import asdict
from typing import Any

from bodycomp.database.models import UploadStatus
from bodycomp.database.repositories.report_uploads_repository import ReportUploadsRepository
from bodycomp.database.repositories.subject_repository import SubjectRepository
from bodycomp.extraction.base import BaseExtractor
from bodycomp.extraction.exceptions import ExtractionError
from bodycomp.extraction.models import PartialReading
from bodycomp.insights.exceptions import InsightError
from bodycomp.insights.generator import InsightGenerator
from bodycomp.logging.logger import Log
from bodycomp.measurements.models import MeasurementInput
from bodycomp.measurements.service import MeasurementService
from bodycomp.processor.file_loader import FileLoader
from bodycomp.processor.pipeline import PipelineContext, PipelineStep
from bodycomp.scoring.evaluator import evaluate
from bodycomp.scoring.models import Evaluation, ProteinRange
from bodycomp.scoring.protein import protein_range


class LoadReportStep(PipelineStep):
    def __init__(
        self,
        file_loader: FileLoader,
        upload_repo: ReportUploadsRepository,
        subject_repo: SubjectRepository,
    ) -> None:
        self._file_loader = file_loader
        self._upload_repo = upload_repo
        self._subject_repo = subject_repo

    def run(self, context: PipelineContext) -> PipelineContext:
        upload = self._upload_repo.find_by_id(context.upload_id)
        context.upload = upload
        context.subject = self._subject_repo.find_by_id(upload.subject_id)
        context.image = self._file_loader.load(upload)
        Log.info(
            f"Loaded {len(context.image.data)} bytes for upload {context.upload_id}",
            subject_id=upload.subject_id,
        )
        return context


class ExtractReadingStep(PipelineStep):
    """Extraction failures degrade to an empty reading so the upload falls back to manual entry."""

    def __init__(self, extractor: BaseExtractor) -> None:
        self._extractor = extractor

    def run(self, context: PipelineContext) -> PipelineContext:
        if context.image is None:
            raise ValueError("PipelineContext.image must be set before extraction")
        try:
            context.extracted = self._extractor.extract(context.image)
        except ExtractionError as exc:
            Log.warning(f"Extraction failed for upload {context.upload_id}: {exc}")
            context.extracted = PartialReading()
        return context


class PersistExtractionStep(PipelineStep):
    def __init__(self, upload_repo: ReportUploadsRepository) -> None:
        self._upload_repo = upload_repo

    def run(self, context: PipelineContext) -> PipelineContext:
        self._upload_repo.update_extraction(context.upload_id, context.extracted.to_payload())
        return context


class PersistMeasurementStep(PipelineStep):
    def __init__(
        self,
        measurement_service: MeasurementService,
        upload_repo: ReportUploadsRepository,
    ) -> None:
        self._measurement_service = measurement_service
        self._upload_repo = upload_repo

    def run(self, context: PipelineContext) -> PipelineContext:
        if context.upload is None:
            raise ValueError("PipelineContext.upload must be set before saving a measurement")
        if context.extracted.is_empty():
            context.manual_entry_required = True
            Log.warning(f"No data read from upload {context.upload_id}, manual entry required")
            return context

        data = MeasurementInput().merge_extracted(context.extracted)
        context.measurement_id = self._measurement_service.add(context.upload.subject_id, data)
        self._upload_repo.update_measurement(context.upload_id, context.measurement_id)
        return context


class EvaluateStep(PipelineStep):
    def __init__(self, upload_repo: ReportUploadsRepository) -> None:
        self._upload_repo = upload_repo

    def run(self, context: PipelineContext) -> PipelineContext:
        if context.manual_entry_required:
            return context
        if context.subject is None:
            raise ValueError("PipelineContext.subject must be set before evaluation")

        evaluation = evaluate(context.extracted.to_metric_reading(), context.subject.gender)
        context.evaluation = evaluation
        if context.extracted.weight is not None:
            context.protein = protein_range(
                context.extracted.weight, context.subject.protein_profile
            )
        self._upload_repo.update_evaluation(
            context.upload_id, evaluation_payload(evaluation, context.protein)
        )
        Log.info(
            f"Evaluated upload {context.upload_id}: "
            f"{evaluation.overall.score} ({evaluation.overall.label})"
        )
        return context


class GenerateInsightsStep(PipelineStep):
    """Insights are optional: a failed call leaves them empty."""

    def __init__(
        self,
        generator: InsightGenerator,
        upload_repo: ReportUploadsRepository,
    ) -> None:
        self._generator = generator
        self._upload_repo = upload_repo

    def run(self, context: PipelineContext) -> PipelineContext:
        if context.evaluation is None or context.subject is None:
            return context
        try:
            context.insights = self._generator.generate(
                context.subject, context.extracted, context.evaluation.overall
            )
        except InsightError as exc:
            Log.warning(f"Insights unavailable for upload {context.upload_id}: {exc}")
            return context
        self._upload_repo.update_insights(context.upload_id, context.insights)
        return context


class MarkProcessedStep(PipelineStep):
    def __init__(self, upload_repo: ReportUploadsRepository) -> None:
        self._upload_repo = upload_repo

    def run(self, context: PipelineContext) -> PipelineContext:
        status = (
            UploadStatus.MANUAL_ENTRY_REQUIRED
            if context.manual_entry_required
            else UploadStatus.PROCESSED
        )
        self._upload_repo.mark_status(context.upload_id, status)
        Log.info(f"Upload {context.upload_id} marked as {status}")
        return context


def evaluation_payload(
    evaluation: Evaluation,
    protein: ProteinRange | None = None,
) -> dict[str, Any]:
    """JSON-ready view of an evaluation."""
    return {
        "overall": {
            "score": evaluation.overall.score,
            "tier": evaluation.overall.tier.value,
            "label": evaluation.overall.label,
            "color": evaluation.overall.color,
        },
        "per_metric": [asdict(metric) for metric in evaluation.per_metric],
        "protein": asdict(protein) if protein is not None else None,
    }

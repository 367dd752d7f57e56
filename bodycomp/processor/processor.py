from collections.abc import Sequence

from bodycomp.ai.client_base import BaseChatClient
from bodycomp.ai.factory import ChatClientFactory
from bodycomp.config.settings import Settings
from bodycomp.database.repositories.measurement_repository import MeasurementRepository
from bodycomp.database.repositories.report_uploads_repository import ReportUploadsRepository
from bodycomp.database.repositories.subject_repository import SubjectRepository
from bodycomp.extraction.extractor import Extractor
from bodycomp.insights.generator import InsightGenerator
from bodycomp.logging.logger import Log
from bodycomp.measurements.service import MeasurementService
from bodycomp.processor.file_loader import FileLoader
from bodycomp.processor.pipeline import PipelineContext, PipelineStep
from bodycomp.processor.steps import (
    EvaluateStep,
    ExtractReadingStep,
    GenerateInsightsStep,
    LoadReportStep,
    MarkProcessedStep,
    PersistExtractionStep,
    PersistMeasurementStep,
)


class Processor:
    """Runs the report pipeline for one upload.

    Pipeline: load -> extract -> persist extraction -> save measurement
    -> evaluate -> insights -> mark processed.
    """

    def __init__(self, steps: Sequence[PipelineStep]) -> None:
        self._steps = list(steps)

    def process(self, upload_id: int) -> PipelineContext:
        Log.info(f"Processing report upload {upload_id}")
        context = PipelineContext(upload_id=upload_id)
        for step in self._steps:
            Log.debug(f"Running {type(step).__name__} for upload {upload_id}")
            context = step.run(context)
        return context


def build_processor(
    settings: Settings,
    client: BaseChatClient | None = None,
) -> Processor:
    """Build a Processor with all required adapters."""
    if client is None:
        client = ChatClientFactory.create(settings)
    upload_repo = ReportUploadsRepository()
    file_loader = FileLoader(
        files_root=settings.files_root,
        max_bytes=settings.max_upload_bytes,
    )
    extractor = Extractor(
        client=client,
        model=settings.extraction_model_name,
        temperature=settings.ai_temperature,
    )
    generator = InsightGenerator(client=client, model=settings.insights_model_name)
    measurement_service = MeasurementService(MeasurementRepository())
    return Processor(
        steps=[
            LoadReportStep(file_loader, upload_repo, SubjectRepository()),
            ExtractReadingStep(extractor),
            PersistExtractionStep(upload_repo),
            PersistMeasurementStep(measurement_service, upload_repo),
            EvaluateStep(upload_repo),
            GenerateInsightsStep(generator, upload_repo),
            MarkProcessedStep(upload_repo),
        ]
    )

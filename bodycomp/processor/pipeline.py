from abc import ABC, abstractmethod
from dataclasses import dataclass, field

from bodycomp.database.models import ReportUpload
from bodycomp.extraction.models import PartialReading, ReportImage
from bodycomp.measurements.models import Subject
from bodycomp.scoring.models import Evaluation, ProteinRange


@dataclass(slots=True)
class PipelineContext:
    upload_id: int
    upload: ReportUpload | None = None
    subject: Subject | None = None
    image: ReportImage | None = None
    extracted: PartialReading = field(default_factory=PartialReading)
    measurement_id: int | None = None
    manual_entry_required: bool = False
    evaluation: Evaluation | None = None
    protein: ProteinRange | None = None
    insights: str = ""


class PipelineStep(ABC):
    @abstractmethod
    def run(self, context: PipelineContext) -> PipelineContext:
        raise NotImplementedError

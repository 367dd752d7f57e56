from bodycomp.extraction.base import BaseExtractor
from bodycomp.extraction.exceptions import ExtractionError
from bodycomp.extraction.extractor import Extractor
from bodycomp.extraction.models import PartialReading, ReportImage

__all__ = ["BaseExtractor", "ExtractionError", "Extractor", "PartialReading", "ReportImage"]

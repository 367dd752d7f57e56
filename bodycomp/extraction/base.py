from abc import ABC, abstractmethod

from bodycomp.extraction.models import PartialReading, ReportImage


class BaseExtractor(ABC):
    """Contract for report extractors."""

    @abstractmethod
    def extract(self, image: ReportImage) -> PartialReading:
        """Read body-composition fields from a report image.

        Returns:
            PartialReading; any field may be None.

        Raises:
            ExtractionError: on any failure.
        """

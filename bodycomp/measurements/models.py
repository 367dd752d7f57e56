from dataclasses import dataclass, field, fields, replace
from datetime import date, datetime

from bodycomp.extraction.models import PartialReading
from bodycomp.scoring.models import Gender, ProteinProfile


@dataclass(frozen=True)
class Subject:
    """A tracked person."""

    id: int
    name: str
    gender: Gender
    age: int | None = None
    height_cm: float | None = None
    notes: str | None = None

    @property
    def protein_profile(self) -> ProteinProfile:
        return ProteinProfile.for_gender(self.gender)

    def describe(self) -> str:
        """Short description used in AI prompts, e.g. 'Alex (male, 38 years, 170cm, ...)'."""
        details = [self.gender.value]
        if self.age is not None:
            details.append(f"{self.age} years")
        if self.height_cm is not None:
            details.append(f"{self.height_cm:g}cm")
        if self.notes:
            details.append(self.notes)
        return f"{self.name} ({', '.join(details)})"


@dataclass(frozen=True)
class MeasurementInput:
    """A measurement about to be saved: manual form values, extracted values, or both."""

    measurement_date: date = field(default_factory=date.today)
    week_number: int | None = None
    medication_dose: float | None = None
    status: str | None = None
    reading: PartialReading = field(default_factory=PartialReading)

    def merge_extracted(self, extracted: PartialReading) -> "MeasurementInput":
        """Overlay extracted values; fields the extractor could not read keep their value."""
        updates = {
            f.name: getattr(extracted, f.name)
            for f in fields(extracted)
            if getattr(extracted, f.name) is not None and f.name != "measurement_date"
        }
        merged = replace(
            self,
            reading=replace(self.reading, **updates),
        )
        if extracted.measurement_date is not None:
            merged = replace(merged, measurement_date=extracted.measurement_date)
        return merged


@dataclass(frozen=True)
class Measurement:
    """A saved measurement row."""

    id: int
    subject_id: int
    week_number: int
    measurement_date: date
    reading: PartialReading
    medication_dose: float | None = None
    status: str | None = None
    created_at: datetime | None = None

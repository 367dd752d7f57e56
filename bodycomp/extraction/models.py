import base64
from dataclasses import asdict, dataclass, fields
from datetime import date

from bodycomp.scoring.models import MetricReading


@dataclass(frozen=True)
class ReportImage:
    """Photographed body-composition report."""

    data: bytes
    mime_type: str

    def to_data_url(self) -> str:
        encoded = base64.b64encode(self.data).decode("ascii")
        return f"data:{self.mime_type};base64,{encoded}"


@dataclass(frozen=True)
class PartialReading:
    """Best-effort fields read from a report. Every field may be missing."""

    measurement_date: date | None = None
    weight: float | None = None
    bmi: float | None = None
    body_fat_percent: float | None = None
    fat_mass: float | None = None
    lean_mass: float | None = None
    muscle_mass: float | None = None
    muscle_rate_percent: float | None = None
    skeletal_muscle_percent: float | None = None
    bone_mass: float | None = None
    protein_mass: float | None = None
    protein_percent: float | None = None
    body_water_percent: float | None = None
    moisture_content: float | None = None
    subcutaneous_fat_percent: float | None = None
    visceral_fat: float | None = None
    bmr: int | None = None
    metabolic_age: int | None = None
    whr: float | None = None

    def filled_fields(self) -> list[str]:
        return [f.name for f in fields(self) if getattr(self, f.name) is not None]

    def is_empty(self) -> bool:
        """True when no body-composition value was read (a date alone does not count)."""
        return not [name for name in self.filled_fields() if name != "measurement_date"]

    def to_metric_reading(self) -> MetricReading:
        return MetricReading(
            weight=self.weight,
            bmi=self.bmi,
            body_fat_percent=self.body_fat_percent,
            muscle_rate_percent=self.muscle_rate_percent,
            visceral_fat=self.visceral_fat,
            body_water_percent=self.body_water_percent,
            protein_percent=self.protein_percent,
            bone_mass=self.bone_mass,
            bmr=float(self.bmr) if self.bmr is not None else None,
        )

    def to_payload(self) -> dict[str, object]:
        """JSON-ready dict with the date as ISO string."""
        payload = asdict(self)
        if self.measurement_date is not None:
            payload["measurement_date"] = self.measurement_date.isoformat()
        return payload

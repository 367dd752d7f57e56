from collections.abc import Sequence
from dataclasses import dataclass

from bodycomp.measurements.models import Measurement, Subject


@dataclass(frozen=True)
class SubjectSummary:
    """Progress of one subject across their measurements."""

    name: str
    description: str
    measurements: int
    latest_weight: float | None = None
    initial_weight: float | None = None
    weight_change: float | None = None
    body_fat_percent: float | None = None
    muscle_rate_percent: float | None = None
    visceral_fat: float | None = None
    bmi: float | None = None
    bmr: int | None = None

    def to_prompt_block(self) -> str:
        return "\n".join([
            f"DATA FOR {self.description.upper()}:",
            f"- Weight: {_fmt(self.latest_weight)} kg "
            f"(initial: {_fmt(self.initial_weight)} kg, change: {_fmt(self.weight_change)} kg)",
            f"- Body fat: {_fmt(self.body_fat_percent)}%",
            f"- Muscle rate: {_fmt(self.muscle_rate_percent)}%",
            f"- Visceral fat: {_fmt(self.visceral_fat)}",
            f"- BMI: {_fmt(self.bmi)}",
            f"- BMR: {_fmt(self.bmr)} kcal",
            f"- Total measurements: {self.measurements}",
        ])


def summarize(subject: Subject, measurements: Sequence[Measurement]) -> SubjectSummary:
    """Summarize measurements ordered oldest first."""
    if not measurements:
        return SubjectSummary(name=subject.name, description=subject.describe(), measurements=0)

    first = measurements[0].reading
    latest = measurements[-1].reading
    weight_change = None
    if latest.weight is not None and first.weight is not None:
        weight_change = round(latest.weight - first.weight, 1)

    return SubjectSummary(
        name=subject.name,
        description=subject.describe(),
        measurements=len(measurements),
        latest_weight=latest.weight,
        initial_weight=first.weight,
        weight_change=weight_change,
        body_fat_percent=latest.body_fat_percent,
        muscle_rate_percent=latest.muscle_rate_percent,
        visceral_fat=latest.visceral_fat,
        bmi=latest.bmi,
        bmr=latest.bmr,
    )


def _fmt(value: float | int | None) -> str:
    return "n/a" if value is None else f"{value:g}"

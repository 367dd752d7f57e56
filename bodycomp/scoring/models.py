from collections.abc import Mapping
from dataclasses import dataclass, fields
from enum import Enum


class Gender(Enum):
    MALE = "male"
    FEMALE = "female"

    @classmethod
    def from_is_male(cls, is_male: bool) -> "Gender":
        return cls.MALE if is_male else cls.FEMALE


class Metric(Enum):
    """Metrics that carry a reference band."""

    BMI = "bmi"
    BODY_FAT_PERCENT = "body_fat_percent"
    MUSCLE_RATE_PERCENT = "muscle_rate_percent"
    VISCERAL_FAT = "visceral_fat"
    BODY_WATER_PERCENT = "body_water_percent"
    PROTEIN_PERCENT = "protein_percent"
    BONE_MASS = "bone_mass"


class BandPosition(Enum):
    BELOW = "below"
    IDEAL = "ideal"
    ABOVE = "above"
    MISSING = "missing"


class MissingMetricPolicy(Enum):
    """How unmeasured metrics enter the overall score.

    WORST_CASE scores a missing metric as 0 and keeps it in the average.
    EXCLUDE drops it from the denominator.
    """

    WORST_CASE = "worst_case"
    EXCLUDE = "exclude"


class Tier(Enum):
    HEALTHY = "healthy"
    ATTENTION = "attention"
    RISK = "risk"

    @property
    def label(self) -> str:
        return _TIER_LABELS[self]

    @property
    def color(self) -> str:
        return _TIER_COLORS[self]


_TIER_LABELS = {
    Tier.HEALTHY: "Healthy",
    Tier.ATTENTION: "Attention",
    Tier.RISK: "Risk",
}

_TIER_COLORS = {
    Tier.HEALTHY: "emerald",
    Tier.ATTENTION: "amber",
    Tier.RISK: "rose",
}


@dataclass(frozen=True)
class MetricReading:
    """Body-composition snapshot. None means the metric was not measured."""

    weight: float | None = None
    bmi: float | None = None
    body_fat_percent: float | None = None
    muscle_rate_percent: float | None = None
    visceral_fat: float | None = None
    body_water_percent: float | None = None
    protein_percent: float | None = None
    bone_mass: float | None = None
    bmr: float | None = None

    @classmethod
    def from_mapping(cls, data: Mapping[str, object]) -> "MetricReading":
        """Build a reading from a loose mapping, ignoring unknown keys."""
        values: dict[str, float | None] = {}
        for f in fields(cls):
            raw = data.get(f.name)
            if isinstance(raw, (int, float)) and not isinstance(raw, bool):
                values[f.name] = float(raw)
            else:
                values[f.name] = None
        return cls(**values)

    def value_of(self, metric: Metric) -> float | None:
        return getattr(self, metric.value)


@dataclass(frozen=True)
class ReferenceBand:
    """Ideal [min, max] range for a metric. Risk ceilings are supplied per call."""

    ideal_min: float
    ideal_max: float

    def display(self, suffix: str = "") -> str:
        return f"{_format_bound(self.ideal_min)}-{_format_bound(self.ideal_max)}{suffix}"


def _format_bound(value: float) -> str:
    return str(int(value)) if float(value).is_integer() else str(value)


@dataclass(frozen=True)
class NormalizedMetric:
    name: str
    label: str
    score: float
    raw_display_value: str
    ideal_band_display: str


@dataclass(frozen=True)
class OverallScore:
    score: int
    tier: Tier

    @property
    def label(self) -> str:
        return self.tier.label

    @property
    def color(self) -> str:
        return self.tier.color


@dataclass(frozen=True)
class Evaluation:
    per_metric: tuple[NormalizedMetric, ...]
    overall: OverallScore


class ProteinProfile(Enum):
    """Daily protein multiplier profiles in g/kg.

    A: trains 2-3x per week, preserve muscle mass (1.5-2.0).
    B: no training, avoid lean mass loss (1.2-1.5).
    """

    A = "A"
    B = "B"

    @classmethod
    def for_gender(cls, gender: Gender) -> "ProteinProfile":
        return cls.A if gender is Gender.MALE else cls.B


@dataclass(frozen=True)
class ProteinRange:
    min: int
    max: int
    recommended: int

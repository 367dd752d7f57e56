"""Per-metric wellness scores and the overall score for one reading."""

from dataclasses import dataclass

from bodycomp.scoring.aggregator import aggregate
from bodycomp.scoring.models import (
    Evaluation,
    Gender,
    Metric,
    MetricReading,
    MissingMetricPolicy,
    NormalizedMetric,
)
from bodycomp.scoring.normalizer import normalize
from bodycomp.scoring.reference import resolve_band

NOT_AVAILABLE = "N/A"


@dataclass(frozen=True)
class RadarAxis:
    """One scored axis: which metric, its risk ceiling, and how to display it."""

    metric: Metric
    label: str
    risk_max: float
    decimals: int = 1
    suffix: str = ""
    ideal_min_override: float | None = None
    upper_bound_only: bool = False


RADAR_AXES: tuple[RadarAxis, ...] = (
    RadarAxis(Metric.BMI, "BMI", risk_max=35.0),
    RadarAxis(Metric.BODY_FAT_PERCENT, "Body fat %", risk_max=40.0, suffix="%"),
    RadarAxis(Metric.MUSCLE_RATE_PERCENT, "Muscle %", risk_max=50.0, suffix="%"),
    RadarAxis(
        Metric.VISCERAL_FAT,
        "Visceral fat",
        risk_max=20.0,
        decimals=0,
        ideal_min_override=1.0,
        upper_bound_only=True,
    ),
    RadarAxis(Metric.BODY_WATER_PERCENT, "Water %", risk_max=75.0, suffix="%"),
    RadarAxis(Metric.PROTEIN_PERCENT, "Protein %", risk_max=25.0, suffix="%"),
)


def evaluate(
    reading: MetricReading,
    gender: Gender | bool,
    policy: MissingMetricPolicy = MissingMetricPolicy.WORST_CASE,
) -> Evaluation:
    """Score every radar axis for a reading and aggregate the overall score.

    `gender` may be passed as a Gender or as an is-male flag.
    """
    if isinstance(gender, bool):
        gender = Gender.from_is_male(gender)

    per_metric: list[NormalizedMetric] = []
    raw_scores: list[float | None] = []
    for axis in RADAR_AXES:
        normalized = _score_axis(axis, reading, gender)
        per_metric.append(normalized)
        measured = reading.value_of(axis.metric) is not None
        raw_scores.append(normalized.score if measured else None)

    return Evaluation(per_metric=tuple(per_metric), overall=aggregate(raw_scores, policy))


def _score_axis(axis: RadarAxis, reading: MetricReading, gender: Gender) -> NormalizedMetric:
    band = resolve_band(axis.metric, gender)
    ideal_min = band.ideal_min if axis.ideal_min_override is None else axis.ideal_min_override
    value = reading.value_of(axis.metric)
    score = normalize(value, ideal_min, band.ideal_max, axis.risk_max)
    return NormalizedMetric(
        name=axis.metric.value,
        label=axis.label,
        score=score,
        raw_display_value=_display_value(value, axis),
        ideal_band_display=_display_band(axis, band.display(axis.suffix), band.ideal_max),
    )


def _display_value(value: float | None, axis: RadarAxis) -> str:
    if value is None:
        return NOT_AVAILABLE
    return f"{value:.{axis.decimals}f}{axis.suffix}"


def _display_band(axis: RadarAxis, band_display: str, ideal_max: float) -> str:
    if axis.upper_bound_only:
        return f"<{ideal_max:g}{axis.suffix}"
    return band_display

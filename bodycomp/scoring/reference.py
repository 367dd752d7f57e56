"""Static reference bands for body-composition metrics."""

from collections.abc import Mapping
from types import MappingProxyType

from bodycomp.scoring.exceptions import UnknownMetricError
from bodycomp.scoring.models import BandPosition, Gender, Metric, ReferenceBand

GenderedBands = Mapping[Gender, ReferenceBand]

REFERENCE_BANDS: Mapping[Metric, ReferenceBand | GenderedBands] = MappingProxyType({
    Metric.BMI: ReferenceBand(18.5, 24.9),
    Metric.BODY_FAT_PERCENT: MappingProxyType({
        Gender.MALE: ReferenceBand(10.0, 20.0),
        Gender.FEMALE: ReferenceBand(18.0, 28.0),
    }),
    Metric.MUSCLE_RATE_PERCENT: MappingProxyType({
        Gender.MALE: ReferenceBand(33.0, 39.0),
        Gender.FEMALE: ReferenceBand(24.0, 30.0),
    }),
    Metric.VISCERAL_FAT: ReferenceBand(1.0, 9.0),
    Metric.BODY_WATER_PERCENT: ReferenceBand(50.0, 65.0),
    Metric.PROTEIN_PERCENT: ReferenceBand(16.0, 20.0),
    Metric.BONE_MASS: MappingProxyType({
        Gender.MALE: ReferenceBand(2.5, 3.5),
        Gender.FEMALE: ReferenceBand(1.8, 2.5),
    }),
})


def resolve_band(metric: Metric | str, gender: Gender) -> ReferenceBand:
    """Return the ideal band for a metric, selecting by gender where the table splits.

    Raises:
        UnknownMetricError: if the metric has no entry in the table.
    """
    key = _coerce_metric(metric)
    entry = REFERENCE_BANDS.get(key)
    if entry is None:
        raise UnknownMetricError(f"No reference band for metric {metric!r}")
    if isinstance(entry, ReferenceBand):
        return entry
    return entry[gender]


def classify_value(
    metric: Metric | str,
    gender: Gender,
    value: float | None,
) -> BandPosition:
    """Place a raw value relative to its ideal band."""
    band = resolve_band(metric, gender)
    if value is None:
        return BandPosition.MISSING
    if value < band.ideal_min:
        return BandPosition.BELOW
    if value > band.ideal_max:
        return BandPosition.ABOVE
    return BandPosition.IDEAL


def _coerce_metric(metric: Metric | str) -> Metric:
    if isinstance(metric, Metric):
        return metric
    try:
        return Metric(metric)
    except ValueError as exc:
        raise UnknownMetricError(f"Unknown metric {metric!r}") from exc

import math
from collections.abc import Sequence

from bodycomp.scoring.models import MissingMetricPolicy, OverallScore, Tier

HEALTHY_THRESHOLD = 80
ATTENTION_THRESHOLD = 60


def round_half_up(value: float) -> int:
    """Round to the nearest integer with .5 going up."""
    return math.floor(value + 0.5)


def classify(score: float) -> Tier:
    """Single source of the tier cut points."""
    if score >= HEALTHY_THRESHOLD:
        return Tier.HEALTHY
    if score >= ATTENTION_THRESHOLD:
        return Tier.ATTENTION
    return Tier.RISK


def aggregate(
    scores: Sequence[float | None],
    policy: MissingMetricPolicy = MissingMetricPolicy.WORST_CASE,
) -> OverallScore:
    """Average per-metric scores into one rounded overall score with its tier."""
    if policy is MissingMetricPolicy.EXCLUDE:
        counted = [s for s in scores if s is not None]
    else:
        counted = [0.0 if s is None else s for s in scores]

    mean = sum(counted) / len(counted) if counted else 0.0
    score = round_half_up(mean)
    return OverallScore(score=score, tier=classify(score))

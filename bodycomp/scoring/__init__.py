from bodycomp.scoring.aggregator import aggregate, classify
from bodycomp.scoring.evaluator import evaluate
from bodycomp.scoring.exceptions import ScoringError, UnknownMetricError
from bodycomp.scoring.models import (
    Evaluation,
    Gender,
    Metric,
    MetricReading,
    MissingMetricPolicy,
    OverallScore,
    ProteinProfile,
    ProteinRange,
    Tier,
)
from bodycomp.scoring.normalizer import normalize
from bodycomp.scoring.protein import protein_range
from bodycomp.scoring.reference import classify_value, resolve_band

__all__ = [
    "Evaluation",
    "Gender",
    "Metric",
    "MetricReading",
    "MissingMetricPolicy",
    "OverallScore",
    "ProteinProfile",
    "ProteinRange",
    "ScoringError",
    "Tier",
    "UnknownMetricError",
    "aggregate",
    "classify",
    "classify_value",
    "evaluate",
    "normalize",
    "protein_range",
    "resolve_band",
]

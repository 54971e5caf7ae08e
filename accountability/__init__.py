"""Leader accountability evaluation and scoring engine."""

from accountability.engine import AccountabilityEngine
from accountability.services.accountability_composer import AccountabilityFields, apply_fields, compose
from accountability.services.profile_completeness import CompletionMap, evaluate_completeness
from accountability.scorers.weighted_aggregator import ScoreBreakdown, aggregate
from accountability.validators.answer_normalizer import InvalidAnswerError, normalize

__version__ = "0.1.0"

__all__ = [
    "AccountabilityEngine",
    "AccountabilityFields",
    "CompletionMap",
    "InvalidAnswerError",
    "ScoreBreakdown",
    "aggregate",
    "apply_fields",
    "compose",
    "evaluate_completeness",
    "normalize",
]

"""Deterministic scoring modules for leader evaluations."""

from accountability.scorers.evaluation_stats import EvaluationStats, RankedLeader, rank_leaders, summarize_evaluations
from accountability.scorers.question_bank_registry import (
    evaluation_data_from_dict,
    list_categories,
    load_evaluation_data,
)
from accountability.scorers.weighted_aggregator import (
    CategoryScore,
    ScoreBreakdown,
    SectionScore,
    SectionStatus,
    aggregate,
    get_rating,
    score_category,
)

__all__ = [
    # Aggregation
    "aggregate",
    "score_category",
    "get_rating",
    "ScoreBreakdown",
    "CategoryScore",
    "SectionScore",
    "SectionStatus",
    # Cross-evaluator statistics
    "EvaluationStats",
    "summarize_evaluations",
    "RankedLeader",
    "rank_leaders",
    # Catalog loading
    "load_evaluation_data",
    "evaluation_data_from_dict",
    "list_categories",
]

"""
Evaluation statistics across assessors.

A leader is usually evaluated by many assessors. This module summarizes their
breakdowns: count, average/min/max final score and average percentage per
category. With no evaluations, averages stay absent rather than zero, so
"not yet evaluated" is distinguishable from "scored zero".

Leaders can then be ranked by their average score, optionally restricted to
an average-score band.
"""

from collections.abc import Mapping
from typing import Iterable, Optional

from pydantic import BaseModel, Field

from accountability.constants import STATS_DECIMALS
from accountability.scorers.weighted_aggregator import ScoreBreakdown


class EvaluationStats(BaseModel):
    """Summary of all evaluations submitted for one leader."""

    total_evaluations: int = 0
    average_score: Optional[float] = None
    min_score: Optional[float] = None
    max_score: Optional[float] = None
    category_averages: dict[str, float] = Field(
        default_factory=dict,
        description="category key -> average percentage of that category's maxScore",
    )


class RankedLeader(BaseModel):
    """One row of a leaderboard; rank is 1-based."""

    rank: int
    slug: str
    stats: EvaluationStats


def summarize_evaluations(breakdowns: Iterable[ScoreBreakdown]) -> EvaluationStats:
    """Summarize many assessors' breakdowns for one leader."""
    breakdowns = list(breakdowns)
    if not breakdowns:
        return EvaluationStats()

    finals = [b.final_score for b in breakdowns]

    pct_by_category: dict[str, list[float]] = {}
    for breakdown in breakdowns:
        for category in breakdown.categories:
            pct_by_category.setdefault(category.category, []).append(category.pct)

    return EvaluationStats(
        total_evaluations=len(breakdowns),
        average_score=round(sum(finals) / len(finals), STATS_DECIMALS),
        min_score=round(min(finals), STATS_DECIMALS),
        max_score=round(max(finals), STATS_DECIMALS),
        category_averages={
            key: round(sum(values) / len(values), STATS_DECIMALS) for key, values in pct_by_category.items()
        },
    )


def rank_leaders(
    stats_by_leader: Mapping[str, EvaluationStats],
    limit: Optional[int] = 10,
    min_score: Optional[float] = None,
    max_score: Optional[float] = None,
) -> list[RankedLeader]:
    """
    Rank leaders by average final score, highest first.

    Leaders without evaluations are left out. Ties are broken by evaluation
    count (more first), then slug, so the order is stable.

    Args:
        stats_by_leader: leader slug -> that leader's EvaluationStats
        limit: Maximum rows to return; None returns all
        min_score: Inclusive lower bound on the average score
        max_score: Inclusive upper bound on the average score

    Raises:
        ValueError: limit is negative or the score band is inverted
    """
    if limit is not None and limit < 0:
        raise ValueError(f"limit must be non-negative, got {limit}")
    if min_score is not None and max_score is not None and min_score > max_score:
        raise ValueError(f"min_score {min_score} exceeds max_score {max_score}")

    candidates = [
        (slug, stats)
        for slug, stats in stats_by_leader.items()
        if stats.average_score is not None
        and (min_score is None or stats.average_score >= min_score)
        and (max_score is None or stats.average_score <= max_score)
    ]
    candidates.sort(key=lambda item: (-item[1].average_score, -item[1].total_evaluations, item[0]))
    if limit is not None:
        candidates = candidates[:limit]

    return [RankedLeader(rank=i, slug=slug, stats=stats) for i, (slug, stats) in enumerate(candidates, start=1)]

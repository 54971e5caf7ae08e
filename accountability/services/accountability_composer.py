"""
Accountability Composer - merges a score breakdown, completeness and disputes
into the derived accountability fields stored on a leader.

Score rules:
  - No breakdown means no new evaluation: the leader's existing score is kept,
    and a leader never evaluated keeps an absent score (never zero).
  - A breakdown publishes its final score rounded to one decimal, clamped to
    0-100. A non-finite final score falls back to the previous score.

compose() is a pure function of its inputs and never raises on malformed
upstream data; problems are logged and the affected value degrades to absent.
"""

import logging
import math
from collections.abc import Mapping
from typing import Any, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from accountability.constants import SCORE_DECIMALS, SCORE_MAX, SCORE_MIN
from accountability.models.leader import Leader, read_leader
from accountability.scorers.weighted_aggregator import ScoreBreakdown, get_rating
from accountability.services.dispute_tracker import DisputeTracker
from accountability.services.profile_completeness import CompletionMap, evaluate_completeness

logger = logging.getLogger(__name__)

PROFILE_COMPLETE = "complete"
PROFILE_INCOMPLETE = "incomplete"


class AccountabilityFields(BaseModel):
    """Derived fields written back onto a leader record."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    accountability_score: Optional[float] = Field(
        None, alias="accountabilityScore", description="0-100, absent when never evaluated"
    )
    completion_status: dict[str, bool] = Field(default_factory=dict, alias="completionStatus")
    completion_percentage: int = Field(0, alias="completionPercentage")
    profile_state: Literal["complete", "incomplete"] = Field(PROFILE_INCOMPLETE, alias="profileState")
    disputed_fields: tuple[str, ...] = Field(default_factory=tuple, alias="disputedFields")
    rating: Optional[str] = Field(None, description="Rating band title for the published score")

    def to_record(self) -> dict[str, Any]:
        """Persisted (camelCase) form."""
        return self.model_dump(by_alias=True, mode="json")


def _valid_score(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool) and math.isfinite(value)


def _previous_score(leader: Leader) -> Optional[float]:
    score = leader.accountability_score
    if score is None:
        return None
    if not _valid_score(score) or not SCORE_MIN <= score <= SCORE_MAX:
        logger.warning(f"Discarding invalid stored accountabilityScore for '{leader.slug}': {score!r}")
        return None
    return score


def _resolve_score(leader: Leader, breakdown: Optional[ScoreBreakdown]) -> Optional[float]:
    previous = _previous_score(leader)
    if breakdown is None:
        return previous

    final = getattr(breakdown, "final_score", None)
    if not _valid_score(final):
        logger.warning(f"Breakdown for '{leader.slug}' has non-finite final score {final!r}; keeping previous score")
        return previous

    clamped = max(SCORE_MIN, min(SCORE_MAX, float(final)))
    return round(clamped, SCORE_DECIMALS)


def _resolve_completion(
    leader: Leader, completion_map: Union[CompletionMap, Mapping[str, Any], None]
) -> CompletionMap:
    if completion_map is None:
        return evaluate_completeness(leader)
    if isinstance(completion_map, CompletionMap):
        return CompletionMap.from_sections(completion_map.sections)
    if isinstance(completion_map, Mapping):
        return CompletionMap.from_sections(completion_map)
    logger.warning(f"Ignoring malformed completion map ({type(completion_map).__name__}); re-evaluating")
    return evaluate_completeness(leader)


def compose(
    leader: Union[Leader, Mapping[str, Any]],
    score_breakdown: Optional[ScoreBreakdown],
    completion_map: Union[CompletionMap, Mapping[str, Any], None] = None,
    tracker: Optional[DisputeTracker] = None,
) -> AccountabilityFields:
    """
    Compose the derived accountability fields for a leader.

    Args:
        leader: Leader model or raw leader record
        score_breakdown: New evaluation result, or None when nothing was evaluated
        completion_map: Section completeness; None re-evaluates from the leader
        tracker: Dispute tracker (default: standard resolved statuses)

    Returns:
        AccountabilityFields ready to persist
    """
    record = read_leader(leader)
    tracker = tracker or DisputeTracker()

    score = _resolve_score(record, score_breakdown)
    completion = _resolve_completion(record, completion_map)
    disputed = tracker.reconcile(record)
    rating = get_rating(score)[0] if score is not None else None

    return AccountabilityFields(
        accountability_score=score,
        completion_status=completion.sections,
        completion_percentage=completion.percentage,
        profile_state=PROFILE_COMPLETE if completion.is_complete else PROFILE_INCOMPLETE,
        disputed_fields=disputed,
        rating=rating,
    )


def apply_fields(leader: Leader, fields: AccountabilityFields) -> Leader:
    """Return a copy of the leader with the composed fields applied."""
    return leader.model_copy(
        update={
            "accountability_score": fields.accountability_score,
            "completion_status": dict(fields.completion_status),
            "disputed_fields": list(fields.disputed_fields),
        }
    )

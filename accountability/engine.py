"""
AccountabilityEngine - entry point tying validation, scoring, completeness
and composition together.

Usage:
    engine = AccountabilityEngine()  # loads the configured question bank
    breakdown = engine.score({"capacity.0.0": 10, "character.0.0": 6})
    fields = engine.recompute(leader, answers)
    leader = engine.apply(leader, fields)

The engine holds only immutable reference data (the question bank), so one
instance can serve many leaders concurrently. Callers serialize recomputes
for the same leader slug.
"""

import logging
from collections.abc import Mapping
from typing import Any, Iterable, Optional, Union

from accountability.models.leader import Leader, read_leader
from accountability.models.question_bank import EvaluationData
from accountability.scorers.evaluation_stats import EvaluationStats, summarize_evaluations
from accountability.scorers.question_bank_registry import load_evaluation_data
from accountability.scorers.weighted_aggregator import ScoreBreakdown, aggregate
from accountability.services.accountability_composer import AccountabilityFields, apply_fields, compose
from accountability.services.dispute_tracker import DisputeTracker
from accountability.services.profile_completeness import evaluate_completeness
from accountability.utils.scoring_audit import ScoringAuditLog
from accountability.validators.answer_normalizer import normalize, parse_answer_set

logger = logging.getLogger(__name__)


class AccountabilityEngine:
    """Scores evaluations and derives leader accountability fields."""

    def __init__(self, evaluation_data: Optional[EvaluationData] = None, tracker: Optional[DisputeTracker] = None):
        self.evaluation_data = evaluation_data if evaluation_data is not None else load_evaluation_data()
        self.tracker = tracker or DisputeTracker()

    def score(self, answers: Mapping[Any, Any], audit_log: Optional[ScoringAuditLog] = None) -> ScoreBreakdown:
        """
        Validate and aggregate one assessor's answer set.

        Raises:
            InvalidAnswerError: The answer set does not match the question bank
        """
        parsed = parse_answer_set(answers)
        validated = normalize(parsed, self.evaluation_data)
        return aggregate(validated, self.evaluation_data, audit_log=audit_log)

    def recompute(
        self,
        leader: Union[Leader, Mapping[str, Any]],
        answers: Optional[Mapping[Any, Any]] = None,
        audit_log: Optional[ScoringAuditLog] = None,
    ) -> AccountabilityFields:
        """
        Recompute a leader's derived fields.

        Without answers the stored score is kept and only completeness and
        disputes are refreshed.

        Raises:
            InvalidAnswerError: answers were given and failed validation
        """
        leader = read_leader(leader)

        breakdown = self.score(answers, audit_log=audit_log) if answers is not None else None
        completion = evaluate_completeness(leader)
        fields = compose(leader, breakdown, completion, tracker=self.tracker)

        slug = leader.slug
        logger.debug(
            f"Recomputed '{slug}': score={fields.accountability_score} "
            f"completion={fields.completion_percentage}% disputed={list(fields.disputed_fields)}"
        )
        return fields

    def apply(self, leader: Leader, fields: AccountabilityFields) -> Leader:
        """Return an updated copy of the leader; persistence is the caller's job."""
        return apply_fields(leader, fields)

    def summarize(self, breakdowns: Iterable[ScoreBreakdown]) -> EvaluationStats:
        """Statistics across many assessors' evaluations of one leader."""
        return summarize_evaluations(breakdowns)

"""Services that derive a leader's accountability fields."""

from accountability.services.accountability_composer import (
    PROFILE_COMPLETE,
    PROFILE_INCOMPLETE,
    AccountabilityFields,
    apply_fields,
    compose,
)
from accountability.services.dispute_tracker import DisputeTracker
from accountability.services.profile_completeness import CompletionMap, evaluate_completeness

__all__ = [
    "AccountabilityFields",
    "CompletionMap",
    "DisputeTracker",
    "PROFILE_COMPLETE",
    "PROFILE_INCOMPLETE",
    "apply_fields",
    "compose",
    "evaluate_completeness",
]

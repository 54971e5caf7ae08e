"""
Validators for the accountability engine.

This module provides validation utilities for:
- Answer sets submitted against the evaluation question bank
- The uniform "is this populated" rule applied to leader records
"""

from .answer_normalizer import (
    AnswerKey,
    InvalidAnswerError,
    ValidatedAnswers,
    normalize,
    parse_answer_key,
    parse_answer_set,
)
from .base_validator import has_any_populated, is_populated

__all__ = [
    # Answer validation
    "AnswerKey",
    "InvalidAnswerError",
    "ValidatedAnswers",
    "normalize",
    "parse_answer_key",
    "parse_answer_set",
    # Emptiness rule
    "is_populated",
    "has_any_populated",
]

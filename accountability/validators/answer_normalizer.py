"""
Answer Normalizer - validates a respondent's selections against the question bank.

Every answered question must resolve to an existing category/section/question,
and the stored value must equal one of that question's option values. This
guards against stale or tampered client-side state before any scoring runs.

Unanswered questions are absent from the answer set. A question answered with
a zero-valued option is kept as 0, which is different from absent.
"""

import logging
import math
from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Iterator, Optional

from accountability.models.question_bank import EvaluationData

logger = logging.getLogger(__name__)

AnswerKey = tuple[str, int, int]


class InvalidAnswerError(ValueError):
    """An answer references a missing question or a value no option offers.

    Attributes:
        category: Category key from the offending answer
        section_index: Section index (None if the key could not be parsed)
        question_index: Question index (None if the key could not be parsed)
        reason: Human-readable description
    """

    def __init__(
        self,
        reason: str,
        category: Optional[str] = None,
        section_index: Optional[int] = None,
        question_index: Optional[int] = None,
    ):
        self.reason = reason
        self.category = category
        self.section_index = section_index
        self.question_index = question_index
        super().__init__(f"{self.location}: {reason}")

    @property
    def location(self) -> str:
        parts = [str(p) for p in (self.category, self.section_index, self.question_index) if p is not None]
        return ".".join(parts) if parts else "<answer set>"

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for an API error body."""
        return {
            "error": "invalid_answer",
            "category": self.category,
            "section_index": self.section_index,
            "question_index": self.question_index,
            "reason": self.reason,
        }


@dataclass(frozen=True)
class ValidatedAnswers:
    """Answer set that passed validation against a specific question bank.

    Only normalize() should construct this. The mapping is read-only.
    """

    values: Mapping[AnswerKey, float] = field(default_factory=dict)

    def __post_init__(self):
        object.__setattr__(self, "values", MappingProxyType(dict(self.values)))

    def __len__(self) -> int:
        return len(self.values)

    def __contains__(self, key: object) -> bool:
        return key in self.values

    def __iter__(self) -> Iterator[AnswerKey]:
        return iter(self.values)

    def get(self, category: str, section_index: int, question_index: int) -> Optional[float]:
        """Value for a question, or None when it was not answered."""
        return self.values.get((category, section_index, question_index))

    def for_category(self, category: str) -> dict[tuple[int, int], float]:
        return {(s, q): v for (c, s, q), v in self.values.items() if c == category}


# =============================================================================
# Parsing
# =============================================================================


def _parse_index(raw: Any) -> Optional[int]:
    if isinstance(raw, bool):
        return None
    if isinstance(raw, int):
        return raw
    if isinstance(raw, str) and raw.strip().lstrip("-").isdigit():
        return int(raw.strip())
    return None


def parse_answer_key(raw_key: Any) -> AnswerKey:
    """
    Parse an answer key from its wire form.

    Accepts a 3-tuple/list (category, section, question) or a dotted string
    "category.section.question".

    Raises:
        InvalidAnswerError: If the key cannot be parsed
    """
    if isinstance(raw_key, str):
        parts = raw_key.split(".")
    elif isinstance(raw_key, (tuple, list)):
        parts = list(raw_key)
    else:
        raise InvalidAnswerError(f"Unrecognised answer key {raw_key!r}")

    if len(parts) != 3:
        raise InvalidAnswerError(f"Answer key {raw_key!r} must have category, section and question")

    category, raw_section, raw_question = parts
    if not isinstance(category, str) or not category.strip():
        raise InvalidAnswerError(f"Answer key {raw_key!r} has no category")

    section_index = _parse_index(raw_section)
    question_index = _parse_index(raw_question)
    if section_index is None or question_index is None:
        raise InvalidAnswerError(
            f"Answer key {raw_key!r} has non-integer indices",
            category=category,
            section_index=section_index,
            question_index=question_index,
        )
    return category.strip(), section_index, question_index


def parse_answer_set(raw: Mapping[Any, Any]) -> dict[AnswerKey, Any]:
    """Convert a decoded request body into an answer set keyed by (category, section, question).

    Values are passed through untouched; normalize() validates them.
    """
    if not isinstance(raw, Mapping):
        raise InvalidAnswerError(f"Answer set must be a mapping, got {type(raw).__name__}")

    answers: dict[AnswerKey, Any] = {}
    for raw_key, value in raw.items():
        key = parse_answer_key(raw_key)
        if key in answers:
            raise InvalidAnswerError("Question answered more than once", *key)
        answers[key] = value
    return answers


# =============================================================================
# Validation
# =============================================================================


def _as_number(value: Any) -> Optional[float]:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    if not math.isfinite(value):
        return None
    return float(value)


def _sort_key(item: tuple[Any, Any]) -> tuple[str, str]:
    # Deterministic order even when keys are malformed or mixed types
    return (type(item[0]).__name__, repr(item[0]))


def normalize(answers: Mapping[Any, Any], evaluation_data: EvaluationData) -> ValidatedAnswers:
    """
    Validate an answer set against the question bank.

    Entries are checked in sorted key order and the first failure is raised,
    so the same bad submission always reports the same location.

    Args:
        answers: Mapping of (category, section index, question index) -> option value
        evaluation_data: The question bank the answers were collected against

    Returns:
        ValidatedAnswers holding the same values as floats

    Raises:
        InvalidAnswerError: If a reference is out of range or a value matches no option
    """
    if not isinstance(answers, Mapping):
        raise InvalidAnswerError(f"Answer set must be a mapping, got {type(answers).__name__}")

    validated: dict[AnswerKey, float] = {}
    for raw_key, raw_value in sorted(answers.items(), key=_sort_key):
        category, section_index, question_index = parse_answer_key(raw_key)

        if not evaluation_data.has_category(category):
            raise InvalidAnswerError("Unknown category", category, section_index, question_index)
        sections = evaluation_data.category(category).sections

        if not 0 <= section_index < len(sections):
            raise InvalidAnswerError(
                f"Section index out of range (category has {len(sections)} sections)",
                category,
                section_index,
                question_index,
            )
        questions = sections[section_index].questions

        if not 0 <= question_index < len(questions):
            raise InvalidAnswerError(
                f"Question index out of range (section has {len(questions)} questions)",
                category,
                section_index,
                question_index,
            )
        question = questions[question_index]

        value = _as_number(raw_value)
        if value is None:
            raise InvalidAnswerError(
                f"Answer value {raw_value!r} is not a number",
                category,
                section_index,
                question_index,
            )
        if not question.has_value(value):
            allowed = sorted(question.values)
            raise InvalidAnswerError(
                f"Value {raw_value!r} matches no option (allowed: {allowed})",
                category,
                section_index,
                question_index,
            )

        key = (category, section_index, question_index)
        if key in validated:
            raise InvalidAnswerError("Question answered more than once", *key)
        validated[key] = value

    logger.debug(f"Validated {len(validated)} answers across {len({k[0] for k in validated})} categories")
    return ValidatedAnswers(values=validated)

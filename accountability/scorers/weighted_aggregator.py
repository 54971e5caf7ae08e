"""
Weighted Aggregator - folds validated answers into section, category and final scores.

Scoring rules:
1. Section ratio = sum of answered values / sum of max option values of the
   answered questions only. Unanswered questions are excluded from both sides,
   so partial submissions are not penalized. No answers -> ratio 0.
2. Section weights are renormalized by their observed sum within the category,
   so a category can never exceed its maxScore whatever the catalog says.
3. Category score = sum(ratio * effective weight) * maxScore.
4. Final score = sum of category scores / sum of maxScores * 100.

The breakdown keeps every intermediate value so reviewers and the UI can show
partial detail, not just the final number.

CRITICAL: Pure function of (answers, catalog). No I/O, no shared state.
"""

import logging
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field

from accountability.constants import RATING_BANDS, SCORE_MAX, SCORE_MIN, WEIGHT_SUM_TOLERANCE
from accountability.models.question_bank import EvaluationCategory, EvaluationData
from accountability.utils.scoring_audit import AuditEvent, ScoringAuditLog
from accountability.validators.answer_normalizer import ValidatedAnswers

logger = logging.getLogger(__name__)


class SectionStatus(str, Enum):
    """How much of a section was answered."""

    FULL = "full"  # Every question answered
    PARTIAL = "partial"  # Some questions answered, scored on those only
    MISSING = "missing"  # Nothing answered, contributes zero


class SectionScore(BaseModel):
    """Score for one weighted section."""

    subgroup: str = Field(description="Section name")
    weight: float = Field(description="Weight as defined in the catalog")
    effective_weight: float = Field(description="Weight after renormalization within the category")
    earned: float = Field(description="Sum of answered option values")
    possible: float = Field(description="Sum of max option values for answered questions")
    ratio: float = Field(description="earned / possible, 0 when nothing answered")
    points: float = Field(description="Category points contributed (ratio * effective_weight * maxScore)")
    answered: int = Field(description="Questions answered")
    total: int = Field(description="Questions in the section")
    status: SectionStatus

    @property
    def pct(self) -> float:
        """Percentage of the section's attainable points earned."""
        return self.ratio * 100


class CategoryScore(BaseModel):
    """Score for one evaluation category (capacity, competence, character)."""

    category: str = Field(description="Category key")
    title: str
    score: float = Field(description="Points earned, 0..max_score")
    max_score: float
    weight_sum: float = Field(description="Observed sum of section weights before renormalization")
    renormalized: bool = Field(description="True when section weights did not sum to 1.0")
    sections: list[SectionScore] = Field(default_factory=list)

    @property
    def pct(self) -> float:
        return (self.score / self.max_score * 100) if self.max_score > 0 else 0.0

    @property
    def answered(self) -> int:
        return sum(s.answered for s in self.sections)

    @property
    def total(self) -> int:
        return sum(s.total for s in self.sections)


class ScoreBreakdown(BaseModel):
    """Full aggregation result for one submitted evaluation."""

    final_score: float = Field(description="0-100 percentage of summed category maxScores")
    categories: list[CategoryScore] = Field(default_factory=list)
    answered: int = Field(description="Questions answered across the catalog")
    total: int = Field(description="Questions in the catalog")
    rating: str = Field(description="Rating band title")
    recommendation: str
    score_summary: str = Field(default="", description="Plain-English summary")

    def category(self, key: str) -> CategoryScore:
        for c in self.categories:
            if c.category == key:
                return c
        raise KeyError(key)

    @property
    def category_scores(self) -> dict[str, float]:
        return {c.category: c.score for c in self.categories}


# =============================================================================
# Rating bands
# =============================================================================


def get_rating(final_score: float) -> tuple[str, str]:
    """Map a final score to its (title, recommendation) rating band."""
    for threshold, title, recommendation in RATING_BANDS:
        if final_score >= threshold:
            return title, recommendation
    _, title, recommendation = RATING_BANDS[-1]
    return title, recommendation


def _describe_category(pct: float, label: str) -> str:
    if pct >= 85:
        return f"exceptional {label}"
    elif pct >= 70:
        return f"strong {label}"
    elif pct >= 55:
        return f"good {label}"
    elif pct >= 40:
        return f"moderate {label}"
    return f"limited {label}"


def _build_score_summary(final_score: float, categories: list[CategoryScore], answered: int, total: int) -> str:
    """Deterministic plain-English summary naming the strongest and weakest categories."""
    if not categories:
        return f"Scores {final_score:.1f}/100."
    ranked = sorted(categories, key=lambda c: (-c.pct, c.category))
    top = _describe_category(ranked[0].pct, ranked[0].category)
    if len(ranked) > 1:
        bottom = _describe_category(ranked[-1].pct, ranked[-1].category)
        text = f"Scores {final_score:.1f}/100 with {top} and {bottom}"
    else:
        text = f"Scores {final_score:.1f}/100 with {top}"
    if answered < total:
        text += f" ({answered} of {total} questions answered)"
    return text + "."


# =============================================================================
# Aggregation
# =============================================================================


def _clamp(value: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, value))


def score_category(
    key: str,
    category: EvaluationCategory,
    answers: ValidatedAnswers,
    audit_log: Optional[ScoringAuditLog] = None,
) -> CategoryScore:
    """Score one category from validated answers."""
    weight_sum = category.weight_sum
    renormalized = abs(weight_sum - 1.0) > WEIGHT_SUM_TOLERANCE
    if renormalized:
        logger.debug(f"Renormalizing {key} section weights (sum={weight_sum})")
        if audit_log is not None:
            audit_log.record(
                key,
                AuditEvent.RENORMALIZED_WEIGHTS,
                detail={"weight_sum": weight_sum, "sections": len(category.sections)},
            )

    sections: list[SectionScore] = []
    total_ratio = 0.0
    for s_idx, section in enumerate(category.sections):
        earned = 0.0
        possible = 0.0
        answered = 0
        for q_idx, question in enumerate(section.questions):
            value = answers.get(key, s_idx, q_idx)
            if value is None:
                continue
            answered += 1
            earned += value
            possible += question.max_value

        ratio = earned / possible if possible > 0 else 0.0
        ratio = _clamp(ratio, 0.0, 1.0)
        effective_weight = section.weight / weight_sum if weight_sum > 0 else 0.0
        points = ratio * effective_weight * category.max_score

        if answered == 0:
            status = SectionStatus.MISSING
        elif answered < len(section.questions):
            status = SectionStatus.PARTIAL
        else:
            status = SectionStatus.FULL

        if audit_log is not None:
            if status == SectionStatus.MISSING:
                audit_log.record(
                    key,
                    AuditEvent.UNANSWERED_SECTION,
                    section=section.subgroup,
                    detail={"questions": len(section.questions)},
                    points_affected=effective_weight * category.max_score,
                )
            elif status == SectionStatus.PARTIAL:
                audit_log.record(
                    key,
                    AuditEvent.PARTIAL_SECTION,
                    section=section.subgroup,
                    detail={"answered": answered, "questions": len(section.questions)},
                )
            if answered > 0 and possible == 0:
                audit_log.record(key, AuditEvent.ZERO_MAX_SECTION, section=section.subgroup)

        total_ratio += ratio * effective_weight
        sections.append(
            SectionScore(
                subgroup=section.subgroup,
                weight=section.weight,
                effective_weight=effective_weight,
                earned=earned,
                possible=possible,
                ratio=ratio,
                points=points,
                answered=answered,
                total=len(section.questions),
                status=status,
            )
        )

    score = _clamp(total_ratio * category.max_score, 0.0, category.max_score)
    return CategoryScore(
        category=key,
        title=category.title,
        score=score,
        max_score=category.max_score,
        weight_sum=weight_sum,
        renormalized=renormalized,
        sections=sections,
    )


def aggregate(
    validated_answers: ValidatedAnswers,
    evaluation_data: EvaluationData,
    audit_log: Optional[ScoringAuditLog] = None,
) -> ScoreBreakdown:
    """
    Aggregate validated answers into a ScoreBreakdown.

    Args:
        validated_answers: Output of normalize() against the same catalog
        evaluation_data: The question bank
        audit_log: Optional audit trail for renormalization and skipped sections

    Returns:
        ScoreBreakdown with per-section, per-category and final scores
    """
    categories = [
        score_category(key, category, validated_answers, audit_log) for key, category in evaluation_data.items()
    ]

    total_max = sum(c.max_score for c in categories)
    earned = sum(c.score for c in categories)
    final_score = earned / total_max * SCORE_MAX if total_max > 0 else SCORE_MIN
    final_score = _clamp(final_score, SCORE_MIN, SCORE_MAX)

    answered = sum(c.answered for c in categories)
    total = sum(c.total for c in categories)
    rating, recommendation = get_rating(final_score)

    logger.debug(
        f"Aggregated {answered}/{total} answers: final={final_score:.2f} "
        + " ".join(f"{c.category}={c.score:.2f}/{c.max_score:g}" for c in categories)
    )

    return ScoreBreakdown(
        final_score=final_score,
        categories=categories,
        answered=answered,
        total=total,
        rating=rating,
        recommendation=recommendation,
        score_summary=_build_score_summary(final_score, categories, answered, total),
    )

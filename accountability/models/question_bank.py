"""
Pydantic models for the evaluation question bank.

The question bank is static reference data: three categories (capacity,
competence, character), each split into weighted sections of multiple-choice
questions. Models are frozen and use tuples so a loaded catalog can be shared
across threads and passed explicitly to every scoring call.
"""

from types import MappingProxyType
from typing import Iterator, Mapping

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator, model_validator


class Option(BaseModel):
    """One selectable answer; value is its score contribution."""

    model_config = ConfigDict(frozen=True)

    label: str = Field(..., description="Answer text shown to the assessor")
    value: float = Field(..., ge=0, description="Points contributed when selected")


class Question(BaseModel):
    """A multiple-choice question. Option order is display order only."""

    model_config = ConfigDict(frozen=True)

    text: str = Field(..., description="Question text")
    options: tuple[Option, ...] = Field(..., min_length=1, description="Selectable answers")

    @property
    def max_value(self) -> float:
        """Highest attainable value for this question."""
        return max(option.value for option in self.options)

    @property
    def values(self) -> frozenset[float]:
        return frozenset(option.value for option in self.options)

    def has_value(self, value: float) -> bool:
        return value in self.values


class Section(BaseModel):
    """Weighted subgroup of questions within a category.

    Weights are relative within the category. The aggregator renormalizes by
    the observed sum, so any positive weight is accepted.
    """

    model_config = ConfigDict(frozen=True)

    subgroup: str = Field(..., description="Section name (e.g., 'Vision and Strategic Thinking')")
    weight: float = Field(..., gt=0, description="Relative weight within the category")
    questions: tuple[Question, ...] = Field(default_factory=tuple)

    @property
    def max_points(self) -> float:
        return sum(q.max_value for q in self.questions)


class EvaluationCategory(BaseModel):
    """Top-level evaluation grouping scored out of max_score."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    title: str = Field(..., description="Display title (e.g., 'Capacity Assessment')")
    max_score: float = Field(..., gt=0, alias="maxScore", description="Points this category contributes")
    sections: tuple[Section, ...] = Field(default_factory=tuple)

    @property
    def weight_sum(self) -> float:
        return sum(section.weight for section in self.sections)

    @property
    def question_count(self) -> int:
        return sum(len(section.questions) for section in self.sections)


class EvaluationData(BaseModel):
    """The full question catalog, keyed by category.

    Iteration follows catalog order. The loader in
    scorers.question_bank_registry enforces the three standard categories;
    directly constructed instances may hold any non-empty set.
    """

    model_config = ConfigDict(frozen=True)

    # Read-only view after validation
    categories: dict[str, EvaluationCategory] = Field(..., description="category key -> category")

    @field_validator("categories")
    @classmethod
    def _non_empty(cls, v: dict[str, EvaluationCategory]) -> Mapping[str, EvaluationCategory]:
        if not v:
            raise ValueError("EvaluationData requires at least one category")
        return MappingProxyType(dict(v))

    @field_serializer("categories")
    def _dump_categories(self, v: Mapping[str, EvaluationCategory]) -> dict[str, EvaluationCategory]:
        return dict(v)

    @model_validator(mode="after")
    def _keys_are_names(self) -> "EvaluationData":
        for key in self.categories:
            if not key or not key.strip():
                raise ValueError("Category keys must be non-empty strings")
        return self

    def items(self) -> Iterator[tuple[str, EvaluationCategory]]:
        """Iterate (key, category) pairs in catalog order."""
        return iter(self.categories.items())

    def has_category(self, key: str) -> bool:
        return key in self.categories

    def category(self, key: str) -> EvaluationCategory:
        return self.categories[key]

    @property
    def total_max_score(self) -> float:
        return sum(c.max_score for c in self.categories.values())

    @property
    def question_count(self) -> int:
        return sum(c.question_count for c in self.categories.values())

"""Tests for cross-assessor evaluation statistics."""

import pytest

from accountability.scorers.evaluation_stats import EvaluationStats, rank_leaders, summarize_evaluations
from accountability.scorers.weighted_aggregator import aggregate
from accountability.validators.answer_normalizer import normalize


def _breakdown(catalog, answers):
    return aggregate(normalize(answers, catalog), catalog)


class TestSummarizeEvaluations:
    def test_empty(self):
        stats = summarize_evaluations([])
        assert stats.total_evaluations == 0
        assert stats.average_score is None
        assert stats.min_score is None
        assert stats.max_score is None
        assert stats.category_averages == {}

    def test_single(self, two_question_catalog):
        stats = summarize_evaluations([_breakdown(two_question_catalog, {("capacity", 0, 0): 2})])
        assert stats.total_evaluations == 1
        assert stats.average_score == 100
        assert stats.category_averages == {"capacity": 100}

    def test_many(self, two_question_catalog):
        breakdowns = [
            _breakdown(two_question_catalog, {("capacity", 0, 0): 2}),  # 100
            _breakdown(two_question_catalog, {("capacity", 0, 0): 2, ("capacity", 0, 1): 0}),  # 50
            _breakdown(two_question_catalog, {("capacity", 0, 0): 1, ("capacity", 0, 1): 0}),  # 25
        ]
        stats = summarize_evaluations(breakdowns)
        assert stats.total_evaluations == 3
        assert stats.average_score == pytest.approx(58.33)
        assert stats.min_score == 25
        assert stats.max_score == 100

    def test_category_averages(self, standard_catalog, max_answers):
        breakdowns = [
            _breakdown(standard_catalog, max_answers(standard_catalog)),
            _breakdown(standard_catalog, {}),
        ]
        stats = summarize_evaluations(breakdowns)
        assert stats.category_averages == {"capacity": 50, "competence": 50, "character": 50}
        assert stats.average_score == 50

    def test_accepts_generator(self, two_question_catalog):
        stats = summarize_evaluations(_breakdown(two_question_catalog, {}) for _ in range(2))
        assert stats.total_evaluations == 2
        assert stats.average_score == 0


def _stats(average, count=1):
    return EvaluationStats(total_evaluations=count, average_score=average, min_score=average, max_score=average)


class TestRankLeaders:
    def test_highest_average_first(self):
        ranked = rank_leaders({"ada-obi": _stats(61.5), "musa-bello": _stats(82.0), "ngozi-eze": _stats(47.25)})
        assert [(r.rank, r.slug) for r in ranked] == [(1, "musa-bello"), (2, "ada-obi"), (3, "ngozi-eze")]
        assert ranked[0].stats.average_score == 82.0

    def test_unevaluated_leaders_left_out(self):
        ranked = rank_leaders({"ada-obi": _stats(50.0), "new-face": EvaluationStats()})
        assert [r.slug for r in ranked] == ["ada-obi"]

    def test_ties_broken_by_count_then_slug(self):
        ranked = rank_leaders({"b": _stats(70.0), "a": _stats(70.0), "c": _stats(70.0, count=5)})
        assert [r.slug for r in ranked] == ["c", "a", "b"]

    def test_limit(self):
        stats = {f"leader-{i}": _stats(float(i)) for i in range(20)}
        assert len(rank_leaders(stats)) == 10
        assert len(rank_leaders(stats, limit=None)) == 20
        assert rank_leaders(stats, limit=0) == []

    def test_score_band_is_inclusive(self):
        stats = {"low": _stats(49.99), "edge": _stats(50.0), "mid": _stats(64.0), "high": _stats(65.01)}
        ranked = rank_leaders(stats, min_score=50, max_score=65)
        assert [r.slug for r in ranked] == ["mid", "edge"]

    @pytest.mark.parametrize("kwargs", [{"limit": -1}, {"min_score": 80, "max_score": 20}])
    def test_invalid_arguments(self, kwargs):
        with pytest.raises(ValueError):
            rank_leaders({}, **kwargs)

    def test_from_breakdowns(self, two_question_catalog):
        stats = {
            "ada-obi": summarize_evaluations([_breakdown(two_question_catalog, {("capacity", 0, 0): 2})]),
            "musa-bello": summarize_evaluations([_breakdown(two_question_catalog, {("capacity", 0, 0): 0})]),
        }
        assert [r.slug for r in rank_leaders(stats)] == ["ada-obi", "musa-bello"]

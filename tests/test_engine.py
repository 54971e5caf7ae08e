"""Tests for the AccountabilityEngine entry point."""

import pytest

from accountability.engine import AccountabilityEngine
from accountability.models.leader import Leader
from accountability.scorers.question_bank_registry import load_evaluation_data
from accountability.utils.scoring_audit import ScoringAuditLog
from accountability.validators.answer_normalizer import InvalidAnswerError


@pytest.fixture
def engine(standard_catalog):
    return AccountabilityEngine(standard_catalog)


class TestScore:
    def test_dotted_keys(self, engine):
        breakdown = engine.score({"competence.0.0": 4, "competence.1.0": 4})
        assert breakdown.category("competence").score == pytest.approx(30)
        assert breakdown.final_score == pytest.approx(30)

    def test_invalid_answer_rejected(self, engine):
        with pytest.raises(InvalidAnswerError):
            engine.score({"capacity.0.9": 10})

    def test_duplicate_keys_rejected(self, engine):
        with pytest.raises(InvalidAnswerError):
            engine.score({"capacity.0.0": 10, ("capacity", 0, 0): 5})

    def test_audit_log(self, engine):
        audit_log = ScoringAuditLog()
        engine.score({"capacity.0.0": 10}, audit_log=audit_log)
        assert len(audit_log) > 0


class TestRecompute:
    def test_with_answers(self, engine, full_leader_record):
        fields = engine.recompute(Leader.from_record(full_leader_record), {"competence.0.0": 4})
        assert fields.accountability_score == 15.0
        assert fields.completion_percentage == 100
        assert fields.disputed_fields == ("policyDecisions",)

    def test_without_answers_keeps_score(self, engine, full_leader_record):
        fields = engine.recompute(full_leader_record)
        assert fields.accountability_score == 72.5

    def test_never_evaluated(self, engine, basic_leader_record):
        fields = engine.recompute(basic_leader_record)
        assert fields.accountability_score is None
        assert fields.completion_percentage == 14

    def test_malformed_scalar_does_not_raise(self, engine, full_leader_record):
        full_leader_record["isPublished"] = "maybe"
        fields = engine.recompute(full_leader_record)
        assert fields.accountability_score == 72.5
        assert fields.completion_status["basicInfo"] is True

    def test_non_record_input(self, engine):
        fields = engine.recompute(["not", "a", "leader"])
        assert fields.accountability_score is None
        assert fields.completion_percentage == 0

    def test_invalid_answers_raise_before_compose(self, engine, full_leader_record):
        with pytest.raises(InvalidAnswerError):
            engine.recompute(full_leader_record, {"charisma.0.0": 1})

    def test_apply(self, engine, basic_leader_record):
        leader = Leader.from_record(basic_leader_record)
        updated = engine.apply(leader, engine.recompute(leader, {"character.0.0": 10, "character.1.0": 10}))
        assert updated.accountability_score == 40.0
        assert updated.completion_status["basicInfo"] is True
        assert leader.accountability_score is None

    def test_summarize(self, engine):
        stats = engine.summarize([engine.score({}), engine.score({"character.0.0": 10, "character.1.0": 10})])
        assert stats.total_evaluations == 2
        assert stats.average_score == 20


class TestDefaultCatalog:
    def test_loads_configured_catalog(self, monkeypatch):
        monkeypatch.delenv("ACCOUNTABILITY_QUESTION_BANK", raising=False)
        engine = AccountabilityEngine()
        assert engine.evaluation_data == load_evaluation_data()
        assert engine.evaluation_data.question_count == 36

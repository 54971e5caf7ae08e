"""Tests for the scoring audit trail."""

import json
import logging

from accountability.utils.scoring_audit import AuditEvent, ScoringAuditLog


class TestScoringAuditLog:
    def test_warning_events_tracked(self):
        audit_log = ScoringAuditLog(subject="ada-obi")
        audit_log.record("capacity", AuditEvent.UNANSWERED_SECTION, section="Delivery")
        audit_log.record("capacity", AuditEvent.PARTIAL_SECTION, section="Vision")

        assert len(audit_log) == 2
        warnings = audit_log.get_warnings()
        assert [w.event for w in warnings] == [AuditEvent.UNANSWERED_SECTION]
        assert "ada-obi" in warnings[0].warning_message
        assert audit_log.get_all_entries()[1].warning_message is None

    def test_renormalized_weights_is_not_a_warning(self, caplog):
        audit_log = ScoringAuditLog(subject="ada-obi")
        with caplog.at_level(logging.DEBUG, logger="accountability.utils.scoring_audit"):
            entry = audit_log.record("capacity", AuditEvent.RENORMALIZED_WEIGHTS, detail={"weight_sum": 27})

        assert entry.warning_message is None
        assert audit_log.get_warnings() == []
        assert audit_log.entries_for(AuditEvent.RENORMALIZED_WEIGHTS) == [entry]
        assert not [r for r in caplog.records if r.levelno >= logging.WARNING]

    def test_unanswered_section_warning_names_section(self):
        audit_log = ScoringAuditLog()
        entry = audit_log.record("character", AuditEvent.UNANSWERED_SECTION, section="Courage", points_affected=5.0)
        assert "character/Courage" in entry.warning_message
        assert entry.points_affected == 5.0

    def test_entries_for(self):
        audit_log = ScoringAuditLog()
        audit_log.record("capacity", AuditEvent.PARTIAL_SECTION, section="A")
        audit_log.record("competence", AuditEvent.PARTIAL_SECTION, section="B")
        audit_log.record("competence", AuditEvent.ZERO_MAX_SECTION, section="B")
        assert [e.section for e in audit_log.entries_for(AuditEvent.PARTIAL_SECTION)] == ["A", "B"]

    def test_export_to_json(self, tmp_path):
        audit_log = ScoringAuditLog(subject="musa-bello")
        audit_log.record("capacity", AuditEvent.RENORMALIZED_WEIGHTS, detail={"weight_sum": 27, "sections": 9})
        audit_log.record("capacity", AuditEvent.UNANSWERED_SECTION, section="Delivery")
        path = tmp_path / "audit" / "scoring.json"
        audit_log.export_to_json(path)

        data = json.loads(path.read_text())
        assert data["subject"] == "musa-bello"
        assert data["total_entries"] == 2
        assert data["total_warnings"] == 1
        assert data["entries"][0]["event"] == "renormalized_weights"
        assert data["entries"][0]["detail"] == {"weight_sum": 27, "sections": 9}
        assert data["warnings"][0]["section"] == "Delivery"

    def test_clear(self):
        audit_log = ScoringAuditLog()
        audit_log.record("capacity", AuditEvent.UNANSWERED_SECTION, section="A")
        audit_log.clear()
        assert len(audit_log) == 0
        assert audit_log.get_warnings() == []

    def test_returned_lists_are_copies(self):
        audit_log = ScoringAuditLog()
        audit_log.record("capacity", AuditEvent.PARTIAL_SECTION)
        audit_log.get_all_entries().clear()
        assert len(audit_log) == 1

"""Data models for the question bank and leader records."""

from accountability.models.leader import (
    DERIVED_FIELDS,
    AttendanceRecord,
    BillsRecord,
    CorruptionCase,
    Leader,
    LeaderContact,
    ManifestoItem,
    Performance,
    PolicyAction,
    read_leader,
)
from accountability.models.question_bank import (
    EvaluationCategory,
    EvaluationData,
    Option,
    Question,
    Section,
)

__all__ = [
    # Question bank
    "Option",
    "Question",
    "Section",
    "EvaluationCategory",
    "EvaluationData",
    # Leader
    "Leader",
    "LeaderContact",
    "ManifestoItem",
    "CorruptionCase",
    "PolicyAction",
    "AttendanceRecord",
    "BillsRecord",
    "Performance",
    "DERIVED_FIELDS",
    "read_leader",
]

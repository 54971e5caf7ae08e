"""Logging and audit utilities."""

from accountability.utils.logger import (
    EngineLogger,
    MillisecondsFormatter,
    RecomputeRunContext,
    configure_global_logging,
    get_logger,
)
from accountability.utils.scoring_audit import AuditEvent, ScoringAuditEntry, ScoringAuditLog

__all__ = [
    "EngineLogger",
    "MillisecondsFormatter",
    "RecomputeRunContext",
    "configure_global_logging",
    "get_logger",
    "AuditEvent",
    "ScoringAuditEntry",
    "ScoringAuditLog",
]

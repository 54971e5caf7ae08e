"""
Scoring Audit Trail - Captures aggregation decisions for debugging and transparency.

When a score is shaped by incomplete or inconsistent inputs, this module logs:
- Categories whose section weights were renormalized (routine, not a warning)
- Sections scored from a subset of their questions
- Sections with no answers (contributing zero)

This enables:
1. Debugging of unexpected scores
2. Explaining partial submissions to reviewers
3. Detection of weight-entry mistakes in the question catalog

The audit log is passed explicitly to aggregate(); there is no global instance.
"""

import json
import logging
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Any, Optional

logger = logging.getLogger(__name__)


class AuditEvent(Enum):
    """What the aggregator did that deserves a record."""

    RENORMALIZED_WEIGHTS = "renormalized_weights"  # Section weights did not sum to 1.0 (routine for integer weights)
    PARTIAL_SECTION = "partial_section"  # Scored from answered questions only
    UNANSWERED_SECTION = "unanswered_section"  # No answers, contributes zero
    ZERO_MAX_SECTION = "zero_max_section"  # Answered questions can only score zero


# Events surfaced as warnings; the rest are recorded at debug level
WARNING_EVENTS = frozenset({AuditEvent.UNANSWERED_SECTION})


@dataclass
class ScoringAuditEntry:
    """A single audit entry for one aggregation decision."""

    category: str
    event: AuditEvent
    section: Optional[str] = None
    subject: str = ""  # Leader slug when known
    detail: dict[str, Any] = field(default_factory=dict)
    points_affected: float = 0.0
    timestamp: datetime = field(default_factory=datetime.now)
    warning_message: Optional[str] = None

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "subject": self.subject,
            "category": self.category,
            "section": self.section,
            "event": self.event.value,
            "detail": self.detail,
            "points_affected": self.points_affected,
            "timestamp": self.timestamp.isoformat(),
            "warning_message": self.warning_message,
        }


class ScoringAuditLog:
    """Collects audit entries while scoring one or more evaluations.

    Usage:
        audit_log = ScoringAuditLog()
        breakdown = aggregate(validated, evaluation_data, audit_log=audit_log)

        # Sections that were skipped or weights that were rescaled
        warnings = audit_log.get_warnings()

        # Export for debugging
        audit_log.export_to_json("/tmp/scoring_audit.json")
    """

    def __init__(self, subject: str = ""):
        self.subject = subject
        self._entries: list[ScoringAuditEntry] = []
        self._warnings: list[ScoringAuditEntry] = []

    def record(
        self,
        category: str,
        event: AuditEvent,
        section: Optional[str] = None,
        detail: Optional[dict[str, Any]] = None,
        points_affected: float = 0.0,
    ) -> ScoringAuditEntry:
        """Record an aggregation decision.

        Args:
            category: Category key (e.g., "capacity")
            event: What happened
            section: Section subgroup name, if the event is section-level
            detail: Structured context (weights, counts)
            points_affected: Category points the decision moved

        Returns:
            The created audit entry
        """
        entry = ScoringAuditEntry(
            category=category,
            event=event,
            section=section,
            subject=self.subject,
            detail=detail or {},
            points_affected=points_affected,
        )
        self._entries.append(entry)

        if event in WARNING_EVENTS:
            where = f"{category}/{section}" if section else category
            prefix = f"{self.subject}: " if self.subject else ""
            entry.warning_message = f"AUDIT WARNING: {prefix}{event.value} in {where} {entry.detail}"
            self._warnings.append(entry)
            logger.warning(entry.warning_message)
        else:
            logger.debug(f"Audit: {event.value} in {category}/{section or '-'} {entry.detail}")

        return entry

    def get_warnings(self) -> list[ScoringAuditEntry]:
        """Get entries flagged as warnings."""
        return self._warnings.copy()

    def get_all_entries(self) -> list[ScoringAuditEntry]:
        """Get all audit entries."""
        return self._entries.copy()

    def entries_for(self, event: AuditEvent) -> list[ScoringAuditEntry]:
        return [e for e in self._entries if e.event == event]

    def export_to_json(self, filepath: str | Path) -> None:
        """Export audit log to JSON file.

        Args:
            filepath: Path to output JSON file
        """
        filepath = Path(filepath)
        filepath.parent.mkdir(parents=True, exist_ok=True)

        data = {
            "generated_at": datetime.now().isoformat(),
            "subject": self.subject,
            "total_entries": len(self._entries),
            "total_warnings": len(self._warnings),
            "entries": [e.to_dict() for e in self._entries],
            "warnings": [e.to_dict() for e in self._warnings],
        }

        with open(filepath, "w") as f:
            json.dump(data, f, indent=2)

        logger.info(f"Exported {len(self._entries)} audit entries to {filepath}")

    def clear(self) -> None:
        """Clear all entries (for reuse between submissions)."""
        self._entries.clear()
        self._warnings.clear()

    def __len__(self) -> int:
        return len(self._entries)

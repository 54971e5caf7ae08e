"""
Dispute Tracker - maintains the set of leader attributes under active dispute.

A corruption case puts its related attributes under dispute when it is an
active dispute:
  - at least one source backs the claim
  - the leader has publicly responded (the claim is contested)
  - its status is not a resolved status (resolved, closed, dismissed, ...)

A case with no related fields concerns the corruptionCases record itself.

Reconciliation against a leader:
  - attributes referenced by an active dispute are flagged
  - attributes referenced only by non-active cases are unflagged
  - manual flags not referenced by any case are kept
  - names that are not leader attributes are dropped with a warning

All operations return new sorted tuples; input collections are never mutated.
"""

import logging
from typing import Iterable, Optional

from accountability.constants import DEFAULT_DISPUTED_FIELD, RESOLVED_CASE_STATUSES
from accountability.models.leader import CorruptionCase, Leader
from accountability.validators.base_validator import is_populated

logger = logging.getLogger(__name__)


class DisputeTracker:
    """Set operations over disputed field names, keyed by attribute alias."""

    def __init__(self, resolved_statuses: Optional[Iterable[str]] = None):
        statuses = RESOLVED_CASE_STATUSES if resolved_statuses is None else resolved_statuses
        self.resolved_statuses = frozenset(s.strip().lower() for s in statuses)
        self.disputable = Leader.disputable_fields()

    def _canonical(self, name: str) -> Optional[str]:
        """Alias form of a disputable attribute, or None for dangling names."""
        if not isinstance(name, str):
            return None
        alias = Leader.to_attribute_name(name.strip())
        if alias is None or alias not in self.disputable:
            return None
        return alias

    def _canonical_set(self, fields: Iterable[str], context: str) -> set[str]:
        result = set()
        for name in fields or ():
            alias = self._canonical(name)
            if alias is None:
                logger.warning(f"Dropping dangling disputed field {name!r} ({context})")
                continue
            result.add(alias)
        return result

    def is_active_dispute(self, case: CorruptionCase) -> bool:
        """True when a case is sourced, publicly contested and unresolved."""
        if not any(is_populated(source) for source in case.sources):
            return False
        if not is_populated(case.public_response):
            return False
        status = (case.status or "").strip().lower()
        return status not in self.resolved_statuses

    def referenced_fields(self, case: CorruptionCase) -> set[str]:
        """Leader attributes a case concerns."""
        if not case.related_fields:
            return {DEFAULT_DISPUTED_FIELD}
        fields = self._canonical_set(case.related_fields, "corruption case relatedFields")
        return fields or {DEFAULT_DISPUTED_FIELD}

    def add(self, fields: Iterable[str], name: str) -> tuple[str, ...]:
        """
        Flag a field as disputed. Adding an already-flagged field is a no-op.

        Raises:
            ValueError: name is not a disputable leader attribute
        """
        alias = self._canonical(name)
        if alias is None:
            raise ValueError(f"Not a disputable leader attribute: {name!r}")
        current = self._canonical_set(fields, "add")
        current.add(alias)
        return tuple(sorted(current))

    def remove(self, fields: Iterable[str], name: str) -> tuple[str, ...]:
        """Unflag a field. Removing an unflagged field is a no-op."""
        current = self._canonical_set(fields, "remove")
        alias = self._canonical(name)
        if alias is not None:
            current.discard(alias)
        return tuple(sorted(current))

    def reconcile(self, leader: Leader) -> tuple[str, ...]:
        """
        Recompute a leader's disputed fields from its corruption cases.

        Args:
            leader: Leader with its current disputedFields and corruption cases

        Returns:
            Sorted tuple of disputed attribute names
        """
        current = self._canonical_set(leader.disputed_fields, f"leader '{leader.slug}'")

        active: set[str] = set()
        inactive: set[str] = set()
        for case in leader.corruption_cases or []:
            if self.is_active_dispute(case):
                active |= self.referenced_fields(case)
            else:
                inactive |= self.referenced_fields(case)

        cleared = inactive - active
        result = (current - cleared) | active

        added = active - current
        removed = current & cleared
        if added or removed:
            logger.info(f"Disputes for '{leader.slug}': added={sorted(added)} cleared={sorted(removed)}")

        return tuple(sorted(result))

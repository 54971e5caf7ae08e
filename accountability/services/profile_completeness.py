"""
Profile Completeness Evaluator - which profile sections of a leader carry data.

Seven fixed sections are checked independently with the uniform emptiness
rule from validators.base_validator:

    basicInfo            fullName, officeHeld, level and state all populated
    contactInfo          contact.email or contact.whatsapp populated
    ideology             ideology populated
    manifesto            at least one manifesto item
    corruptionCases      at least one corruption case
    policyDecisions      at least one policy action
    performanceTracking  attendance or bills has a populated field

The percentage is round(complete sections / 7 * 100). Evaluation never
raises: malformed sub-records count as empty.
"""

import logging
from collections.abc import Mapping
from typing import Any, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from accountability.constants import (
    BASIC_INFO_FIELDS,
    COMPLETION_SECTIONS,
    CONTACT_FIELDS,
    SECTION_BASIC_INFO,
    SECTION_CONTACT_INFO,
    SECTION_CORRUPTION_CASES,
    SECTION_IDEOLOGY,
    SECTION_MANIFESTO,
    SECTION_PERFORMANCE_TRACKING,
    SECTION_POLICY_DECISIONS,
)
from accountability.models.leader import Leader, read_leader
from accountability.validators.base_validator import has_any_populated, is_populated

logger = logging.getLogger(__name__)


class CompletionMap(BaseModel):
    """Per-section completeness for one leader, in display order."""

    model_config = ConfigDict(frozen=True)

    sections: dict[str, bool] = Field(default_factory=dict, description="section name -> complete")
    percentage: int = Field(0, ge=0, le=100)
    missing: list[str] = Field(default_factory=list, description="Incomplete sections in display order")

    @classmethod
    def from_sections(cls, sections: Optional[Mapping[str, Any]]) -> "CompletionMap":
        """Build a map over the seven known sections.

        Missing keys count as incomplete; unknown keys are dropped.
        """
        sections = sections or {}
        unknown = sorted(str(k) for k in sections if k not in COMPLETION_SECTIONS)
        if unknown:
            logger.warning(f"Dropping unknown completion sections: {unknown}")

        normalized = {name: bool(sections.get(name, False)) for name in COMPLETION_SECTIONS}
        complete = sum(normalized.values())
        return cls(
            sections=normalized,
            percentage=round(complete / len(COMPLETION_SECTIONS) * 100),
            missing=[name for name, done in normalized.items() if not done],
        )

    @property
    def is_complete(self) -> bool:
        return not self.missing

    def __getitem__(self, section: str) -> bool:
        return self.sections[section]


def _basic_info_complete(leader: Leader) -> bool:
    return all(is_populated(leader.get_attribute(name)) for name in BASIC_INFO_FIELDS)


def _performance_complete(leader: Leader) -> bool:
    performance = leader.performance_tracking
    if performance is None:
        return False
    return is_populated(performance.attendance) or is_populated(performance.bills)


def evaluate_completeness(leader: Union[Leader, Mapping[str, Any]]) -> CompletionMap:
    """
    Evaluate which profile sections of a leader are complete.

    Args:
        leader: Leader model or raw leader record

    Returns:
        CompletionMap with the seven section flags, percentage and missing list
    """
    record = read_leader(leader)

    sections = {
        SECTION_BASIC_INFO: _basic_info_complete(record),
        SECTION_CONTACT_INFO: has_any_populated(record.contact, CONTACT_FIELDS),
        SECTION_IDEOLOGY: is_populated(record.ideology),
        SECTION_MANIFESTO: is_populated(record.manifesto),
        SECTION_CORRUPTION_CASES: is_populated(record.corruption_cases),
        SECTION_POLICY_DECISIONS: is_populated(record.policy_decisions),
        SECTION_PERFORMANCE_TRACKING: _performance_complete(record),
    }
    completion = CompletionMap.from_sections(sections)
    logger.debug(f"Completeness for '{record.slug}': {completion.percentage}% missing={completion.missing}")
    return completion

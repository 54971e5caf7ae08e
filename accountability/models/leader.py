"""
Pydantic models for leader accountability records.

Leader records reach the engine loosely shaped: optional sub-records may be
absent, null, or of the wrong type. Each sub-record is an explicit optional
field, and malformed values are coerced to "absent" (or dropped from their
list) with a logged warning instead of failing validation. Coercion happens
at the narrowest level that can be repaired: a bad scalar inside a contact
or corruption case clears that scalar and keeps its siblings. Only the slug
is required.

Attributes are snake_case; aliases match the persisted camelCase record, and
disputed field names and completion keys use the alias form.
"""

import logging
import math
from collections.abc import Mapping
from typing import Any, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError, ValidationInfo, field_validator, model_validator

logger = logging.getLogger(__name__)


# =============================================================================
# Lenient coercion helpers
# =============================================================================


def _coerce_text(value: Any, field_name: str) -> Optional[str]:
    if value is None or isinstance(value, str):
        return value
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    logger.warning(f"Ignoring malformed {field_name}: expected text, got {type(value).__name__}")
    return None


def _coerce_text_list(value: Any, field_name: str) -> list[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value] if value.strip() else []
    if not isinstance(value, (list, tuple, set, frozenset)):
        logger.warning(f"Ignoring malformed {field_name}: expected list, got {type(value).__name__}")
        return []
    return [item for item in value if isinstance(item, str)]


def _coerce_number(value: Any, field_name: str) -> Optional[float]:
    if value is None:
        return None
    if isinstance(value, bool):
        logger.warning(f"Ignoring malformed {field_name}: boolean")
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        logger.warning(f"Ignoring malformed {field_name}: {value!r}")
        return None
    if not math.isfinite(number):
        logger.warning(f"Ignoring malformed {field_name}: {value!r}")
        return None
    return number


def _coerce_counter(value: Any, field_name: str) -> Union[str, int, float, None]:
    if value is None or isinstance(value, str):
        return value
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return value
    logger.warning(f"Ignoring malformed {field_name}: expected number or text, got {type(value).__name__}")
    return None


_BOOL_TEXT = {"true": True, "yes": True, "1": True, "false": False, "no": False, "0": False}


def _coerce_bool(value: Any, field_name: str) -> Optional[bool]:
    if value is None or isinstance(value, bool):
        return value
    if isinstance(value, str) and value.strip().lower() in _BOOL_TEXT:
        return _BOOL_TEXT[value.strip().lower()]
    if isinstance(value, int) and value in (0, 1):
        return bool(value)
    logger.warning(f"Ignoring malformed {field_name}: {value!r}")
    return None


def _coerce_completion(value: Any) -> Optional[dict[str, bool]]:
    if value is None:
        return None
    if not isinstance(value, Mapping):
        logger.warning("Ignoring malformed completionStatus")
        return None
    return {str(k): bool(v) for k, v in value.items()}


def _coerce_slug(value: Any) -> Optional[str]:
    if isinstance(value, str):
        return value
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return None


# =============================================================================
# Sub-records
# =============================================================================


class _Record(BaseModel):
    """Base for nested leader sub-records."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")


def _label(info: ValidationInfo) -> str:
    return info.field_name or "field"


class LeaderContact(_Record):
    email: Optional[str] = None
    whatsapp: Optional[str] = None

    @field_validator("email", "whatsapp", mode="before")
    @classmethod
    def _text(cls, v: Any, info: ValidationInfo) -> Optional[str]:
        return _coerce_text(v, f"contact.{_label(info)}")


class ManifestoItem(_Record):
    """A campaign promise and its delivery status (Fulfilled, In Progress, Broken)."""

    title: Optional[str] = None
    status: Optional[str] = None

    @field_validator("title", "status", mode="before")
    @classmethod
    def _text(cls, v: Any, info: ValidationInfo) -> Optional[str]:
        return _coerce_text(v, f"manifesto.{_label(info)}")


class CorruptionCase(_Record):
    """A corruption allegation with its sources and the leader's response.

    related_fields names the leader attributes the sourced claim concerns;
    an empty list means the case only concerns the corruptionCases record.
    A lone source or related field given as a string is read as a
    one-item list.
    """

    summary: Optional[str] = None
    status: Optional[str] = None
    public_response: Optional[str] = Field(None, alias="publicResponse")
    sources: list[str] = Field(default_factory=list)
    related_fields: list[str] = Field(default_factory=list, alias="relatedFields")

    @field_validator("summary", "status", "public_response", mode="before")
    @classmethod
    def _text(cls, v: Any, info: ValidationInfo) -> Optional[str]:
        return _coerce_text(v, f"corruptionCases.{_label(info)}")

    @field_validator("sources", "related_fields", mode="before")
    @classmethod
    def _text_list(cls, v: Any, info: ValidationInfo) -> list[str]:
        return _coerce_text_list(v, f"corruptionCases.{_label(info)}")


class PolicyAction(_Record):
    title: Optional[str] = None
    description: Optional[str] = None
    impact_score: Optional[float] = Field(None, alias="impactScore")
    date: Optional[str] = None

    @field_validator("title", "description", "date", mode="before")
    @classmethod
    def _text(cls, v: Any, info: ValidationInfo) -> Optional[str]:
        return _coerce_text(v, f"policyDecisions.{_label(info)}")

    @field_validator("impact_score", mode="before")
    @classmethod
    def _impact(cls, v: Any) -> Optional[float]:
        return _coerce_number(v, "policyDecisions.impactScore")


# Counters arrive as strings from forms and as numbers from imports
CounterValue = Union[str, int, float, None]


class AttendanceRecord(_Record):
    total_sessions: CounterValue = Field(None, alias="totalSessions")
    sessions_attended: CounterValue = Field(None, alias="sessionsAttended")
    notes: Optional[str] = None

    @field_validator("total_sessions", "sessions_attended", mode="before")
    @classmethod
    def _counter(cls, v: Any, info: ValidationInfo) -> CounterValue:
        return _coerce_counter(v, f"attendance.{_label(info)}")

    @field_validator("notes", mode="before")
    @classmethod
    def _text(cls, v: Any) -> Optional[str]:
        return _coerce_text(v, "attendance.notes")


class BillsRecord(_Record):
    sponsored: CounterValue = None
    passed: CounterValue = None
    achievements: Optional[str] = None

    @field_validator("sponsored", "passed", mode="before")
    @classmethod
    def _counter(cls, v: Any, info: ValidationInfo) -> CounterValue:
        return _coerce_counter(v, f"bills.{_label(info)}")

    @field_validator("achievements", mode="before")
    @classmethod
    def _text(cls, v: Any) -> Optional[str]:
        return _coerce_text(v, "bills.achievements")


class Performance(_Record):
    """Legislative performance counters."""

    attendance: Optional[AttendanceRecord] = None
    bills: Optional[BillsRecord] = None

    @model_validator(mode="before")
    @classmethod
    def _tolerate_malformed(cls, data: Any) -> Any:
        if not isinstance(data, Mapping):
            return data
        data = dict(data)
        for key, model in (("attendance", AttendanceRecord), ("bills", BillsRecord)):
            if key in data:
                data[key] = coerce_record(model, data[key], f"performanceTracking.{key}")
        return data


def coerce_record(model: type[BaseModel], value: Any, field_name: str) -> Optional[BaseModel]:
    """Validate a nested record, returning None when it is absent or malformed."""
    if value is None or isinstance(value, model):
        return value
    if not isinstance(value, Mapping):
        logger.warning(f"Ignoring malformed {field_name}: expected object, got {type(value).__name__}")
        return None
    try:
        return model.model_validate(value)
    except ValidationError as e:
        logger.warning(f"Ignoring malformed {field_name}: {e.error_count()} validation error(s)")
        return None


def coerce_records(model: type[BaseModel], value: Any, field_name: str) -> Optional[list]:
    """Validate a list of nested records, dropping malformed items."""
    if value is None:
        return None
    if not isinstance(value, (list, tuple)):
        logger.warning(f"Ignoring malformed {field_name}: expected list, got {type(value).__name__}")
        return []
    records = []
    for i, item in enumerate(value):
        record = coerce_record(model, item, f"{field_name}[{i}]")
        if record is not None:
            records.append(record)
    return records


# =============================================================================
# Leader
# =============================================================================

_TEXT_FIELDS = (
    "full_name",
    "office_held",
    "political_party",
    "level",
    "state",
    "lga",
    "ward",
    "image_url",
    "positioning",
    "active_years",
    "nationality",
    "date_of_birth",
    "religion",
    "state_of_origin",
    "town",
    "ideology",
)

_LIST_FIELDS = {
    "manifesto": ManifestoItem,
    "corruption_cases": CorruptionCase,
    "policy_decisions": PolicyAction,
}

_RECORD_FIELDS = {
    "contact": LeaderContact,
    "performance_tracking": Performance,
}

# Attributes recomputed by the engine, never disputed or edited directly
DERIVED_FIELDS = frozenset({"accountabilityScore", "completionStatus", "disputedFields"})


class Leader(BaseModel):
    """The accountability subject.

    Identity is the stable slug. Derived attributes (accountability_score,
    completion_status, disputed_fields) are written only through the composer.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    slug: str = Field(..., description="Stable leader identifier")

    # Basic info
    full_name: Optional[str] = Field(None, alias="fullName")
    office_held: Optional[str] = Field(None, alias="officeHeld")
    political_party: Optional[str] = Field(None, alias="politicalParty")
    level: Optional[str] = Field(None, description="Federal, State or Local")
    state: Optional[str] = None
    lga: Optional[str] = None
    ward: Optional[str] = None
    image_url: Optional[str] = Field(None, alias="imageUrl")

    # Profile detail
    positioning: Optional[str] = None
    active_years: Optional[str] = Field(None, alias="activeYears")
    nationality: Optional[str] = None
    date_of_birth: Optional[str] = Field(None, alias="dateOfBirth")
    religion: Optional[str] = None
    state_of_origin: Optional[str] = Field(None, alias="stateOfOrigin")
    town: Optional[str] = None
    previous_offices: list[str] = Field(default_factory=list, alias="previousOffices")
    ideology: Optional[str] = None

    # Accountability sources
    contact: Optional[LeaderContact] = None
    manifesto: Optional[list[ManifestoItem]] = None
    corruption_cases: Optional[list[CorruptionCase]] = Field(None, alias="corruptionCases")
    policy_decisions: Optional[list[PolicyAction]] = Field(None, alias="policyDecisions")
    performance_tracking: Optional[Performance] = Field(None, alias="performanceTracking")

    # Derived
    disputed_fields: list[str] = Field(default_factory=list, alias="disputedFields")
    completion_status: Optional[dict[str, bool]] = Field(None, alias="completionStatus")
    accountability_score: Optional[float] = Field(None, alias="accountabilityScore")

    is_published: Optional[bool] = Field(None, alias="isPublished")


    @model_validator(mode="before")
    @classmethod
    def _tolerate_malformed(cls, data: Any) -> Any:
        if not isinstance(data, Mapping):
            return data
        data = dict(data)
        for name, info in cls.model_fields.items():
            key = info.alias if info.alias and info.alias in data else name
            if key not in data:
                continue
            label = info.alias or name
            value = data[key]
            if name == "slug":
                slug = _coerce_slug(value)
                data[key] = value if slug is None else slug
            elif name in _TEXT_FIELDS:
                data[key] = _coerce_text(value, label)
            elif name in _LIST_FIELDS:
                data[key] = coerce_records(_LIST_FIELDS[name], value, label)
            elif name in _RECORD_FIELDS:
                data[key] = coerce_record(_RECORD_FIELDS[name], value, label)
            elif name in ("previous_offices", "disputed_fields"):
                data[key] = _coerce_text_list(value, label)
            elif name == "completion_status":
                data[key] = _coerce_completion(value)
            elif name == "accountability_score":
                data[key] = _coerce_number(value, label)
            elif name == "is_published":
                data[key] = _coerce_bool(value, label)
        return data

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> "Leader":
        """Build a Leader from a raw persisted record.

        Tolerates a missing slug (logged) so read-only evaluation of partial
        records never fails. Numeric slugs are kept as text.
        """
        data = dict(record)
        slug = _coerce_slug(data.get("slug"))
        if slug is None:
            logger.warning("Leader record has no slug; evaluating anonymously")
            slug = ""
        data["slug"] = slug
        return cls.model_validate(data)

    @classmethod
    def attribute_names(cls) -> frozenset[str]:
        """All leader attribute names in persisted (alias) form."""
        return frozenset(info.alias or name for name, info in cls.model_fields.items())

    @classmethod
    def disputable_fields(cls) -> frozenset[str]:
        """Attributes that may appear in disputedFields."""
        return cls.attribute_names() - DERIVED_FIELDS - {"slug"}

    @classmethod
    def to_attribute_name(cls, name: str) -> Optional[str]:
        """Map a snake_case or alias name to its alias form, or None if unknown."""
        info = cls.model_fields.get(name)
        if info is not None:
            return info.alias or name
        if name in cls.attribute_names():
            return name
        return None

    def get_attribute(self, name: str) -> Any:
        """Read an attribute by alias or snake_case name."""
        for field_name, info in type(self).model_fields.items():
            if name in (field_name, info.alias):
                return getattr(self, field_name)
        raise KeyError(name)


def read_leader(leader: Any) -> Leader:
    """
    Read a Leader from a model or raw record without ever raising.

    A record that still fails validation keeps its slug and stored score so
    recomputes never erase a published number.
    """
    if isinstance(leader, Leader):
        return leader
    if not isinstance(leader, Mapping):
        logger.warning(f"Expected a leader record, got {type(leader).__name__}; reading as empty")
        return Leader(slug="")
    try:
        return Leader.from_record(leader)
    except ValidationError as e:
        slug = _coerce_slug(leader.get("slug")) or ""
        score = _coerce_number(leader.get("accountabilityScore", leader.get("accountability_score")), "accountabilityScore")
        logger.warning(f"Leader record '{slug}' could not be read: {e.error_count()} error(s); keeping slug and score")
        return Leader(slug=slug, accountability_score=score)

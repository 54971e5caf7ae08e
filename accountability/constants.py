"""
Global constants for the accountability engine.

Centralizes the score scale, profile section names and rating thresholds
used across scorers and services.
"""

# Scoring scale
SCORE_MIN = 0.0
SCORE_MAX = 100.0  # Final score is a percentage of the summed category maxScores
SCORE_DECIMALS = 1  # Published accountabilityScore precision (matches result screen)
STATS_DECIMALS = 2  # Averages across evaluations
WEIGHT_SUM_TOLERANCE = 1e-9  # Deviation from 1.0 that triggers renormalization logging

# Standard evaluation categories, in display order
STANDARD_CATEGORIES = ("capacity", "competence", "character")

# Profile sections tracked in completionStatus, in display order
SECTION_BASIC_INFO = "basicInfo"
SECTION_CONTACT_INFO = "contactInfo"
SECTION_IDEOLOGY = "ideology"
SECTION_MANIFESTO = "manifesto"
SECTION_CORRUPTION_CASES = "corruptionCases"
SECTION_POLICY_DECISIONS = "policyDecisions"
SECTION_PERFORMANCE_TRACKING = "performanceTracking"

COMPLETION_SECTIONS = (
    SECTION_BASIC_INFO,
    SECTION_CONTACT_INFO,
    SECTION_IDEOLOGY,
    SECTION_MANIFESTO,
    SECTION_CORRUPTION_CASES,
    SECTION_POLICY_DECISIONS,
    SECTION_PERFORMANCE_TRACKING,
)

# Required leader attributes (by alias) for the basic info section
BASIC_INFO_FIELDS = ("fullName", "officeHeld", "level", "state")
CONTACT_FIELDS = ("email", "whatsapp")

# Rating bands: (minimum final score, title, recommendation), highest first
RATING_BANDS = [
    (90, "Outstanding Leadership Potential", "Highly recommended for leadership."),
    (80, "Strong Leadership Capacity", "Recommended for leadership with minor improvements."),
    (65, "Moderate Leadership Readiness", "Some qualities present, but needs improvements."),
    (50, "Basic Leadership Fitness", "Needs significant development before assuming office."),
    (0, "Unfit for Office", "Not recommended for leadership."),
]

# Corruption case statuses that close a dispute (compared case-insensitively)
RESOLVED_CASE_STATUSES = frozenset(
    {
        "resolved",
        "closed",
        "dismissed",
        "withdrawn",
        "acquitted",
        "convicted",
        "cleared",
    }
)

# Field referenced by a corruption case that names no specific attribute
DEFAULT_DISPUTED_FIELD = "corruptionCases"

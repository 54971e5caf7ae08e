"""Shared fixtures for accountability engine tests.

Catalog fixtures are built in memory; `bundled_catalog` loads the YAML
question bank that ships with the package.
"""

import sys
from pathlib import Path

import pytest

# Make the package importable without installing it
sys.path.insert(0, str(Path(__file__).parent.parent))


def _options(*values):
    return [{"label": f"Option {v}", "value": v} for v in values]


@pytest.fixture
def two_question_catalog():
    """One category (maxScore 100), one section (weight 1.0), two questions valued {0, 1, 2}."""
    from accountability.models.question_bank import EvaluationData

    return EvaluationData.model_validate(
        {
            "categories": {
                "capacity": {
                    "title": "Capacity Assessment",
                    "maxScore": 100,
                    "sections": [
                        {
                            "subgroup": "Vision",
                            "weight": 1.0,
                            "questions": [
                                {"text": "Q1", "options": _options(0, 1, 2)},
                                {"text": "Q2", "options": _options(0, 1, 2)},
                            ],
                        }
                    ],
                }
            }
        }
    )


@pytest.fixture
def catalog_dict():
    """Three standard categories with uneven weights that do not sum to 1."""
    return {
        "version": "test",
        "categories": {
            "capacity": {
                "title": "Capacity Assessment",
                "maxScore": 30,
                "sections": [
                    {
                        "subgroup": "Vision",
                        "weight": 3,
                        "questions": [
                            {"text": "C1", "options": _options(0, 5, 10)},
                            {"text": "C2", "options": _options(0, 5, 10)},
                        ],
                    },
                    {
                        "subgroup": "Delivery",
                        "weight": 1,
                        "questions": [{"text": "C3", "options": _options(0, 5, 10)}],
                    },
                ],
            },
            "competence": {
                "title": "Competence Assessment",
                "maxScore": 30,
                "sections": [
                    {
                        "subgroup": "Education",
                        "weight": 0.5,
                        "questions": [{"text": "K1", "options": _options(0, 2, 4)}],
                    },
                    {
                        "subgroup": "Policy",
                        "weight": 0.5,
                        "questions": [{"text": "K2", "options": _options(0, 2, 4)}],
                    },
                ],
            },
            "character": {
                "title": "Character Assessment",
                "maxScore": 40,
                "sections": [
                    {
                        "subgroup": "Integrity",
                        "weight": 6,
                        "questions": [{"text": "H1", "options": _options(0, 6, 10)}],
                    },
                    {
                        "subgroup": "Courage",
                        "weight": 5,
                        "questions": [{"text": "H2", "options": _options(0, 6, 10)}],
                    },
                ],
            },
        },
    }


@pytest.fixture
def standard_catalog(catalog_dict):
    from accountability.scorers.question_bank_registry import evaluation_data_from_dict

    return evaluation_data_from_dict(catalog_dict)


@pytest.fixture
def bundled_catalog():
    from accountability.config import BUNDLED_QUESTION_BANK
    from accountability.scorers.question_bank_registry import load_evaluation_data

    return load_evaluation_data(BUNDLED_QUESTION_BANK)


@pytest.fixture
def max_answers():
    """Answer every question in a catalog with its highest-valued option."""

    def _build(catalog):
        answers = {}
        for key, category in catalog.items():
            for s_idx, section in enumerate(category.sections):
                for q_idx, question in enumerate(section.questions):
                    answers[(key, s_idx, q_idx)] = question.max_value
        return answers

    return _build


@pytest.fixture
def basic_leader_record():
    """Basic info set, empty contact, everything else absent."""
    return {
        "slug": "ada-obi",
        "fullName": "Ada Obi",
        "officeHeld": "Senator",
        "level": "Federal",
        "state": "Enugu",
        "contact": {},
    }


@pytest.fixture
def full_leader_record():
    """A leader with every profile section populated."""
    return {
        "slug": "musa-bello",
        "fullName": "Musa Bello",
        "officeHeld": "Governor",
        "politicalParty": "Progressive Party",
        "level": "State",
        "state": "Kano",
        "contact": {"email": "office@example.org", "whatsapp": ""},
        "ideology": "Social democracy",
        "manifesto": [
            {"title": "Free primary healthcare", "status": "In Progress"},
            {"title": "Rural roads", "status": "Fulfilled"},
        ],
        "corruptionCases": [
            {
                "summary": "Contract inflation allegation",
                "status": "Under investigation",
                "publicResponse": "The contract followed due process.",
                "sources": ["https://news.example.org/contract"],
                "relatedFields": ["policyDecisions"],
            }
        ],
        "policyDecisions": [{"title": "Budget transparency portal", "impactScore": 7}],
        "performanceTracking": {
            "attendance": {"totalSessions": "120", "sessionsAttended": "98"},
            "bills": {"sponsored": 4, "passed": 1},
        },
        "accountabilityScore": 72.5,
    }

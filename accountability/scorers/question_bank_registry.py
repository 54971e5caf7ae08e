"""Question Bank Registry: loads the evaluation catalog from YAML.

The catalog is static reference data. It is read once at startup, validated
into frozen EvaluationData and then passed explicitly to every scoring call.

Usage:
    from accountability.scorers.question_bank_registry import load_evaluation_data

    evaluation_data = load_evaluation_data()  # bundled catalog or $ACCOUNTABILITY_QUESTION_BANK
    evaluation_data.category("character").max_score  # 40
"""

import logging
from pathlib import Path
from typing import Any, Optional

import yaml

from accountability.config import get_question_bank_path
from accountability.constants import STANDARD_CATEGORIES
from accountability.models.question_bank import EvaluationData

logger = logging.getLogger(__name__)


def _validate_categories(categories: dict[str, Any]) -> None:
    """Validate that the catalog holds exactly the standard categories."""
    missing = set(STANDARD_CATEGORIES) - set(categories.keys())
    if missing:
        raise ValueError(f"Question bank missing categories: {sorted(missing)}")
    extra = set(categories.keys()) - set(STANDARD_CATEGORIES)
    if extra:
        raise ValueError(f"Question bank has unexpected categories: {sorted(extra)}")


def evaluation_data_from_dict(raw: dict[str, Any], require_standard_categories: bool = True) -> EvaluationData:
    """Build EvaluationData from a parsed catalog document.

    Accepts either {"categories": {...}} or the bare category mapping.

    Raises:
        ValueError: Document is not a mapping or the category set is wrong
        pydantic.ValidationError: A category, section, question or option is invalid
    """
    if not isinstance(raw, dict):
        raise ValueError(f"Question bank must be a mapping, got {type(raw).__name__}")

    categories = raw.get("categories", raw)
    if not isinstance(categories, dict):
        raise ValueError("Question bank 'categories' must be a mapping")

    if require_standard_categories:
        _validate_categories(categories)

    return EvaluationData.model_validate({"categories": categories})


def load_evaluation_data(path: Optional[str | Path] = None) -> EvaluationData:
    """Load and validate the evaluation catalog.

    Args:
        path: Catalog YAML file. Defaults to the configured catalog path.

    Raises:
        FileNotFoundError: Catalog file does not exist
        ValueError / pydantic.ValidationError: Catalog content is invalid
    """
    config_path = Path(path) if path is not None else get_question_bank_path()
    if not config_path.exists():
        raise FileNotFoundError(f"Question bank not found at {config_path}")

    with open(config_path) as f:
        raw = yaml.safe_load(f)

    evaluation_data = evaluation_data_from_dict(raw or {})

    version = raw.get("version", "unversioned") if isinstance(raw, dict) else "unversioned"
    logger.info(
        f"Loaded question bank {version} from {config_path}: "
        f"{len(evaluation_data.categories)} categories, {evaluation_data.question_count} questions, "
        f"max score {evaluation_data.total_max_score:g}"
    )
    return evaluation_data


def list_categories(evaluation_data: EvaluationData) -> list[str]:
    """List category keys in catalog order."""
    return [key for key, _ in evaluation_data.items()]

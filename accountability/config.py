"""
Central configuration for catalog paths and logging.

The evaluation question catalog ships with the package. Deployments can point
the engine at a different catalog or log location via environment variables:
  - ACCOUNTABILITY_QUESTION_BANK (default: bundled evaluation_questions.yaml)
  - ACCOUNTABILITY_LOG_LEVEL (default: INFO)
  - ACCOUNTABILITY_LOG_DIR (default: ./logs)

Entry scripts call dotenv's load_dotenv() before reading these.
"""

import os
from pathlib import Path

BUNDLED_QUESTION_BANK = Path(__file__).parent / "data" / "evaluation_questions.yaml"


def get_question_bank_path() -> Path:
    """
    Get the evaluation question catalog path.

    Uses ACCOUNTABILITY_QUESTION_BANK environment variable if set, otherwise
    defaults to the catalog bundled with the package.

    Returns:
        Path to the YAML catalog
    """
    env_path = os.environ.get("ACCOUNTABILITY_QUESTION_BANK")
    if env_path:
        return Path(env_path).expanduser().resolve()
    return BUNDLED_QUESTION_BANK


def get_log_level() -> str:
    """Get the configured log level name."""
    return os.environ.get("ACCOUNTABILITY_LOG_LEVEL", "INFO").upper()


def get_log_dir() -> Path:
    """Get the directory for log files."""
    env_path = os.environ.get("ACCOUNTABILITY_LOG_DIR")
    if env_path:
        return Path(env_path).expanduser().resolve()
    return Path.cwd() / "logs"

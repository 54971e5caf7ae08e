"""
Logging infrastructure for the accountability engine.

Provides:
- Structured logging with millisecond timestamps
- Console and optional file output
- Error/warning tracking and per-run recompute summaries

Library modules log through logging.getLogger(__name__); entry scripts call
configure_global_logging() once so every module shares the same format.
"""

import logging
import sys
from contextlib import contextmanager
from datetime import datetime
from pathlib import Path
from typing import Optional

from accountability.config import get_log_dir

DATE_FORMAT = "%Y-%m-%d %H:%M:%S,%f"


def _format_string(stage: Optional[str]) -> str:
    if stage:
        return f"%(asctime)s | %(levelname)-8s | {stage} | %(filename)s:%(lineno)d | %(message)s"
    return "%(asctime)s | %(levelname)-8s | %(filename)s:%(lineno)d | %(message)s"


def _with_fields(message: str, fields: dict) -> str:
    if not fields:
        return message
    formatted = " ".join(f"{k}={v}" for k, v in fields.items())
    return f"{message} [{formatted}]"


class MillisecondsFormatter(logging.Formatter):
    """Formatter that renders %f as three-digit milliseconds."""

    def formatTime(self, record, datefmt=None):  # noqa: N802 - must match parent class method name
        ct = datetime.fromtimestamp(record.created)
        if datefmt and "%f" in datefmt:
            return ct.strftime(datefmt.replace(",%f", "")) + f",{int(record.msecs):03d}"
        elif datefmt:
            return ct.strftime(datefmt)
        return ct.strftime("%Y-%m-%d %H:%M:%S") + f",{int(record.msecs):03d}"


class EngineLogger:
    """
    Logger for recompute runs with structured key=value output.
    """

    def __init__(
        self,
        name: str = "accountability_engine",
        log_level: str = "INFO",
        log_file: Optional[str] = None,
        log_dir: Optional[Path] = None,
        stage: Optional[str] = None,
    ):
        """
        Initialize the engine logger.

        Args:
            name: Logger name
            log_level: Logging level (DEBUG, INFO, WARNING, ERROR)
            log_file: Optional log file name
            log_dir: Directory for log files (defaults to ACCOUNTABILITY_LOG_DIR)
            stage: Optional stage label included in every line (e.g., "recompute")
        """
        self.logger = logging.getLogger(name)
        self.logger.setLevel(getattr(logging, log_level.upper()))
        self.stage = stage

        # Avoid duplicate lines through the root logger
        self.logger.propagate = False
        if self.logger.handlers:
            self.logger.handlers.clear()

        fmt_str = _format_string(stage)

        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(getattr(logging, log_level.upper()))
        console_handler.setFormatter(MillisecondsFormatter(fmt_str, datefmt=DATE_FORMAT))
        self.logger.addHandler(console_handler)

        self.log_path: Optional[Path] = None
        if log_file:
            if log_dir is None:
                log_dir = get_log_dir()
            log_dir.mkdir(parents=True, exist_ok=True)
            self.log_path = log_dir / log_file

            file_handler = logging.FileHandler(self.log_path)
            file_handler.setLevel(logging.DEBUG)
            file_handler.setFormatter(MillisecondsFormatter(fmt_str, datefmt=DATE_FORMAT))
            self.logger.addHandler(file_handler)

            self.info(f"Logging to file: {self.log_path}")

        self.errors: list[dict] = []
        self.warnings: list[dict] = []

        # Recompute outcomes for the run summary
        self.recomputed = 0
        self.rejected = 0
        self.rejections: list[dict] = []

    def debug(self, message: str, **kwargs):
        self.logger.debug(_with_fields(message, kwargs), stacklevel=2)

    def info(self, message: str, **kwargs):
        self.logger.info(_with_fields(message, kwargs), stacklevel=2)

    def warning(self, message: str, **kwargs):
        """Log warning message and track for reporting."""
        message = _with_fields(message, kwargs)
        self.logger.warning(message, stacklevel=2)
        self.warnings.append(
            {
                "message": message,
                "timestamp": datetime.now().isoformat(),
                "data": kwargs,
            }
        )

    def error(self, message: str, exception: Optional[Exception] = None, **kwargs):
        """Log error message and track for reporting."""
        if exception:
            message = f"{message} | Exception: {str(exception)}"
        message = _with_fields(message, kwargs)
        self.logger.error(message, exc_info=exception is not None, stacklevel=2)
        self.errors.append(
            {
                "message": message,
                "exception": str(exception) if exception else None,
                "timestamp": datetime.now().isoformat(),
                "data": kwargs,
            }
        )

    def log_recompute_complete(
        self,
        slug: str,
        accountability_score: Optional[float],
        completion_percentage: int,
        disputed: int,
        duration_seconds: float,
    ):
        """Log one leader's recomputed accountability fields."""
        self.recomputed += 1
        self.info(
            "Recomputed accountability fields",
            slug=slug,
            score=accountability_score,
            completion=f"{completion_percentage}%",
            disputed=disputed,
            duration_seconds=round(duration_seconds, 3),
        )

    def log_rejected_submission(self, slug: str, reason: str, location: Optional[str] = None):
        """Log an answer set rejected by validation. Rejections are expected input, not errors."""
        self.rejected += 1
        detail = {"slug": slug, "reason": reason, "timestamp": datetime.now().isoformat()}
        if location:
            detail["location"] = location
        self.rejections.append(detail)
        self.warning("Rejected evaluation submission", slug=slug, reason=reason, location=location)

    @contextmanager
    def time_leader(self, slug: str, operation: str):
        """
        Time and log one operation on a leader.

        Usage:
            with logger.time_leader("jane-doe", "recompute"):
                fields = engine.recompute(leader, answers)
        """
        start_time = datetime.now()
        self.debug(f"Starting {operation}", slug=slug)
        try:
            yield
            duration = (datetime.now() - start_time).total_seconds()
            self.debug(f"Completed {operation}", slug=slug, duration_seconds=round(duration, 3))
        except Exception as e:
            duration = (datetime.now() - start_time).total_seconds()
            self.error(f"Failed {operation}", exception=e, slug=slug, duration_seconds=round(duration, 3))
            raise

    def get_error_summary(self) -> dict:
        """Get summary of errors and warnings for reporting."""
        return {
            "total_errors": len(self.errors),
            "total_warnings": len(self.warnings),
            "errors": self.errors,
            "warnings": self.warnings,
        }

    def generate_summary(self) -> dict:
        """Aggregate statistics for a recompute run."""
        attempted = self.recomputed + self.rejected
        return {
            "recompute": {
                "attempted": attempted,
                "recomputed": self.recomputed,
                "rejected": self.rejected,
                "rejection_rate_percent": round(self.rejected / attempted * 100, 1) if attempted else 0.0,
                "rejections": self.rejections,
            },
            "errors": {"total": len(self.errors), "details": self.errors},
            "warnings": {"total": len(self.warnings), "details": self.warnings},
            "timestamp": datetime.now().isoformat(),
        }

    def clear_tracking(self):
        """Clear tracked errors, warnings and recompute counts between runs."""
        self.errors = []
        self.warnings = []
        self.recomputed = 0
        self.rejected = 0
        self.rejections = []


# ============================================================================
# Global Logger Instance
# ============================================================================

_default_logger: Optional[EngineLogger] = None


def get_logger(
    name: str = "accountability_engine",
    log_level: str = "INFO",
    log_file: Optional[str] = None,
    stage: Optional[str] = None,
) -> EngineLogger:
    """
    Get or create the default engine logger.

    Args:
        name: Logger name
        log_level: Logging level
        log_file: Optional log file
        stage: Optional stage label (e.g., "recompute")

    Returns:
        EngineLogger instance
    """
    global _default_logger

    if _default_logger is None:
        _default_logger = EngineLogger(
            name=name,
            log_level=log_level,
            log_file=log_file,
            stage=stage,
        )

    return _default_logger


# ============================================================================
# Context Manager for Recompute Runs
# ============================================================================


class RecomputeRunContext:
    """
    Brackets a batch recompute with start/complete lines.

    Usage:
        with RecomputeRunContext(logger, num_leaders=10) as ctx:
            for leader in leaders:
                ...
                ctx.increment_success()  # or ctx.increment_failure()
    """

    def __init__(self, logger: EngineLogger, num_leaders: int):
        self.logger = logger
        self.num_leaders = num_leaders
        self.start_time: Optional[datetime] = None
        self.succeeded = 0
        self.failed = 0

    def __enter__(self):
        self.start_time = datetime.now()
        self.logger.info("=" * 60)
        self.logger.info(f"Recompute started - {self.num_leaders} leaders", num_leaders=self.num_leaders)
        self.logger.info("=" * 60)
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        duration = (datetime.now() - self.start_time).total_seconds()
        self.logger.info("=" * 60)
        self.logger.info(
            "Recompute completed",
            succeeded=self.succeeded,
            failed=self.failed,
            total=self.succeeded + self.failed,
            duration_seconds=round(duration, 2),
        )
        self.logger.info("=" * 60)
        return False

    def increment_success(self):
        self.succeeded += 1

    def increment_failure(self):
        self.failed += 1


# ============================================================================
# Global Logging Configuration
# ============================================================================


def configure_global_logging(log_level: str = "INFO", stage: Optional[str] = None):
    """
    Configure the root logger with the unified format.

    Call this early in script startup so module-level loggers
    (logging.getLogger(__name__)) share one format.

    Args:
        log_level: Logging level to apply globally (DEBUG, INFO, WARNING, ERROR)
        stage: Optional stage label (e.g., "recompute")
    """
    formatter = MillisecondsFormatter(_format_string(stage), datefmt=DATE_FORMAT)

    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, log_level.upper()))
    root_logger.handlers.clear()

    root_handler = logging.StreamHandler(sys.stdout)
    root_handler.setLevel(getattr(logging, log_level.upper()))
    root_handler.setFormatter(formatter)
    root_logger.addHandler(root_handler)

    # Package loggers propagate to root
    package_logger = logging.getLogger("accountability")
    package_logger.handlers.clear()
    package_logger.propagate = True
    package_logger.setLevel(getattr(logging, log_level.upper()))

"""Tests for engine logging helpers."""

import logging

import pytest

from accountability.utils.logger import (
    EngineLogger,
    MillisecondsFormatter,
    RecomputeRunContext,
    configure_global_logging,
)


@pytest.fixture
def engine_logger():
    return EngineLogger(name="accountability_test", log_level="DEBUG")


class TestEngineLogger:
    def test_structured_fields(self, capsys):
        engine_logger = EngineLogger(name="accountability_test", log_level="DEBUG")
        engine_logger.info("Recomputed", slug="ada-obi", score=50.0)
        out = capsys.readouterr().out
        assert "Recomputed [slug=ada-obi score=50.0]" in out

    def test_tracks_warnings_and_errors(self, engine_logger):
        engine_logger.warning("Dropped dangling field", field="shoeSize")
        engine_logger.error("Recompute failed", exception=RuntimeError("boom"), slug="x")
        summary = engine_logger.get_error_summary()
        assert summary["total_warnings"] == 1
        assert summary["total_errors"] == 1
        assert "boom" in summary["errors"][0]["message"]

    def test_recompute_summary(self, engine_logger):
        engine_logger.log_recompute_complete("ada-obi", 50.0, 14, 0, 0.01)
        engine_logger.log_rejected_submission("musa-bello", "Unknown category", "charisma.0.0")
        summary = engine_logger.generate_summary()
        assert summary["recompute"]["attempted"] == 2
        assert summary["recompute"]["rejected"] == 1
        assert summary["recompute"]["rejection_rate_percent"] == 50.0
        assert summary["recompute"]["rejections"][0]["location"] == "charisma.0.0"

        engine_logger.clear_tracking()
        assert engine_logger.generate_summary()["recompute"]["attempted"] == 0

    def test_time_leader_reraises(self, engine_logger):
        with pytest.raises(ValueError):
            with engine_logger.time_leader("ada-obi", "recompute"):
                raise ValueError("bad record")
        assert len(engine_logger.errors) == 1

    def test_file_handler(self, tmp_path):
        engine_logger = EngineLogger(name="accountability_file_test", log_file="run.log", log_dir=tmp_path)
        engine_logger.info("hello")
        for handler in engine_logger.logger.handlers:
            handler.flush()
        assert "hello" in (tmp_path / "run.log").read_text()


class TestRecomputeRunContext:
    def test_counts(self, capsys):
        engine_logger = EngineLogger(name="accountability_test", log_level="DEBUG")
        with RecomputeRunContext(engine_logger, num_leaders=2) as ctx:
            ctx.increment_success()
            ctx.increment_failure()
        out = capsys.readouterr().out
        assert "Recompute completed" in out
        assert "succeeded=1 failed=1 total=2" in out

    def test_does_not_swallow_exceptions(self, engine_logger):
        with pytest.raises(KeyError):
            with RecomputeRunContext(engine_logger, num_leaders=1):
                raise KeyError("slug")


class TestFormatting:
    def test_milliseconds(self):
        formatter = MillisecondsFormatter("%(asctime)s", datefmt="%Y-%m-%d %H:%M:%S,%f")
        record = logging.LogRecord("x", logging.INFO, __file__, 1, "msg", None, None)
        stamp = formatter.format(record)
        assert len(stamp.split(",")[-1]) == 3

    def test_configure_global_logging(self):
        root = logging.getLogger()
        saved_handlers, saved_level = list(root.handlers), root.level
        package_level = logging.getLogger("accountability").level
        try:
            configure_global_logging("WARNING", stage="recompute")
            assert root.level == logging.WARNING
            assert len(root.handlers) == 1
            assert logging.getLogger("accountability").propagate
        finally:
            root.handlers[:] = saved_handlers
            root.setLevel(saved_level)
            logging.getLogger("accountability").setLevel(package_level)

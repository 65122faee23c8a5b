"""
Tests for structured logging.
"""

import io
import json

from inclusive_jobs.monitoring.logging import (
    LogLevel,
    StructuredLogger,
    configure_logging,
    get_logger,
)


class TestStructuredLogger:
    """Event records and levels."""

    def test_json_record(self):
        out = io.StringIO()
        logger = StructuredLogger(level=LogLevel.DEBUG, output=out)

        logger.points_awarded("SEO", 5, total=20)
        record = json.loads(out.getvalue())

        assert record["event"] == "points_awarded"
        assert record["skill"] == "SEO"
        assert record["amount"] == 5
        assert record["total"] == 20
        assert record["level"] == "debug"

    def test_level_filtering(self):
        out = io.StringIO()
        logger = StructuredLogger(level=LogLevel.WARNING, output=out)

        logger.info("ignored")
        logger.error("kept")

        lines = out.getvalue().splitlines()
        assert len(lines) == 1
        assert json.loads(lines[0])["event"] == "kept"

    def test_bind_adds_context(self):
        out = io.StringIO()
        logger = StructuredLogger(output=out).bind(view="resources")

        logger.info("opened")

        assert json.loads(out.getvalue())["view"] == "resources"

    def test_human_format(self):
        out = io.StringIO()
        logger = StructuredLogger(level=LogLevel.DEBUG, output=out, json_format=False)

        logger.setting_changed("speech_enabled", True)

        line = out.getvalue()
        assert " DEBUG setting_changed: speech_enabled -> True " in line
        assert "setting=speech_enabled value=True" in line

    def test_progress_reset_event(self):
        out = io.StringIO()
        StructuredLogger(level=LogLevel.DEBUG, output=out).progress_reset()

        assert json.loads(out.getvalue())["event"] == "progress_reset"


class TestGlobalLogger:
    """configure_logging and get_logger."""

    def test_configure_replaces_global(self):
        out = io.StringIO()
        logger = configure_logging("warning", output=out)

        assert get_logger() is logger
        assert logger.level is LogLevel.WARNING

    def test_quiet_fixture_captures_events(self, quiet_structured_logger):
        get_logger().quiz_attempt("SEO", "basic", passed=True, attempts=1)

        record = json.loads(quiet_structured_logger.getvalue())
        assert record["quiz_id"] == "basic"

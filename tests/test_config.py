"""
Tests for application configuration.
"""

from pathlib import Path

import pytest

from inclusive_jobs.accessibility.speech_backends import SpeechBackendMode
from inclusive_jobs.config import AppConfig


class TestAppConfig:
    """Defaults and environment overrides."""

    def test_defaults(self, tmp_path):
        config = AppConfig(data_dir=tmp_path)

        assert config.storage_path == tmp_path / "storage.json"
        assert config.speech_backend is SpeechBackendMode.AUTO
        assert config.overlay_max_words == 8
        assert config.overlay_max_letters == 20
        assert config.readable_min_length == 2
        assert config.log_level == "info"

    def test_from_env(self):
        config = AppConfig.from_env({
            "INCLUSIVE_JOBS_DATA_DIR": "/tmp/jobs",
            "INCLUSIVE_JOBS_SPEECH": "Speech-Dispatcher",
            "INCLUSIVE_JOBS_LOG_LEVEL": "DEBUG",
        })

        assert config.data_dir == Path("/tmp/jobs")
        assert config.speech_backend is SpeechBackendMode.SPEECH_DISPATCHER
        assert config.log_level == "debug"

    def test_from_env_none(self):
        assert AppConfig.from_env({"INCLUSIVE_JOBS_SPEECH": "none"}).speech_backend is (
            SpeechBackendMode.NONE
        )

    def test_unknown_speech_mode(self):
        with pytest.raises(ValueError):
            AppConfig.from_env({"INCLUSIVE_JOBS_SPEECH": "robot"})

    def test_unknown_log_level(self):
        with pytest.raises(ValueError):
            AppConfig.from_env({"INCLUSIVE_JOBS_LOG_LEVEL": "loud"})

"""
Application configuration for Inclusive Jobs.

All options have defaults; environment variables override the ones an
operator is likely to change per machine.

Environment:
    INCLUSIVE_JOBS_DATA_DIR   - Directory holding storage.json
    INCLUSIVE_JOBS_SPEECH     - auto, nvda, say, speech-dispatcher, none
    INCLUSIVE_JOBS_LOG_LEVEL  - debug, info, warning, error, critical
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from inclusive_jobs.accessibility.overlay import DEFAULT_GLYPH_URL_TEMPLATE
from inclusive_jobs.accessibility.speech_backends.base import SpeechBackendMode

_SPEECH_MODES = {
    "auto": SpeechBackendMode.AUTO,
    "nvda": SpeechBackendMode.NVDA,
    "say": SpeechBackendMode.SAY,
    "speech-dispatcher": SpeechBackendMode.SPEECH_DISPATCHER,
    "none": SpeechBackendMode.NONE,
}

_LOG_LEVELS = ("debug", "info", "warning", "error", "critical")


def _default_data_dir() -> Path:
    return Path(os.environ.get("INCLUSIVE_JOBS_DATA_DIR", "~/.inclusive_jobs")).expanduser()


@dataclass
class AppConfig:
    """Configuration for the whole client.

    Example:
        config = AppConfig(data_dir=Path("/tmp/jobs"), speech_backend=SpeechBackendMode.NONE)
        storage = JSONFileStorage(config.storage_path)
    """
    # Persistence
    data_dir: Path = field(default_factory=_default_data_dir)
    storage_file: str = "storage.json"

    # Speech
    speech_backend: SpeechBackendMode = SpeechBackendMode.AUTO

    # Sign overlay
    glyph_url_template: str = DEFAULT_GLYPH_URL_TEMPLATE
    overlay_max_words: int = 8
    overlay_max_letters: int = 20

    # Event observer
    readable_min_length: int = 2

    # Logging
    log_level: str = "info"
    log_json: bool = False

    @property
    def storage_path(self) -> Path:
        """Full path of the storage file."""
        return Path(self.data_dir) / self.storage_file

    @classmethod
    def from_env(cls, environ: dict[str, str] | None = None) -> "AppConfig":
        """Build a config from environment variables.

        Args:
            environ: Mapping to read (defaults to os.environ)

        Returns:
            AppConfig with overrides applied

        Raises:
            ValueError: If a variable holds an unknown value
        """
        env = os.environ if environ is None else environ
        config = cls()

        data_dir = env.get("INCLUSIVE_JOBS_DATA_DIR")
        if data_dir:
            config.data_dir = Path(data_dir).expanduser()

        speech = env.get("INCLUSIVE_JOBS_SPEECH")
        if speech:
            mode = _SPEECH_MODES.get(speech.strip().lower())
            if mode is None:
                raise ValueError(
                    f"Unknown INCLUSIVE_JOBS_SPEECH value '{speech}'. "
                    f"Expected one of: {', '.join(_SPEECH_MODES)}"
                )
            config.speech_backend = mode

        level = env.get("INCLUSIVE_JOBS_LOG_LEVEL")
        if level:
            level = level.strip().lower()
            if level not in _LOG_LEVELS:
                raise ValueError(f"Unknown INCLUSIVE_JOBS_LOG_LEVEL value '{level}'")
            config.log_level = level

        return config

"""
Structured logging for Inclusive Jobs.

Audit-style events (a setting toggled, points awarded, progress reset)
go through this logger as one machine-parseable line each, separate from
the standard library debug logging every module does.

Example:
    events = configure_logging("debug", json_format=False)
    events.points_awarded("SEO", 5, total=20)
    # 2024-05-01 10:00:00 DEBUG points_awarded: +5 pts in SEO (skill=SEO amount=5 total=20)
"""

from __future__ import annotations

import json
import logging
import sys
import threading
import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, TextIO


class LogLevel(Enum):
    """Event severities, named after the standard library levels."""

    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"

    @property
    def numeric(self) -> int:
        return getattr(logging, self.name)


@dataclass
class EventRecord:
    """One structured event.

    Attributes:
        event: Event name, e.g. ``points_awarded``
        level: Severity name
        message: Optional human-readable summary
        fields: Event payload merged with any bound context
        timestamp: Epoch seconds
        logger: Name of the emitting logger
    """

    event: str
    level: str
    message: str = ""
    fields: dict[str, Any] = field(default_factory=dict)
    timestamp: float = field(default_factory=time.time)
    logger: str = "inclusive_jobs"

    def as_dict(self) -> dict[str, Any]:
        """Flat mapping: the payload sits next to the fixed keys."""
        out = {
            "timestamp": self.timestamp,
            "logger": self.logger,
            "level": self.level,
            "event": self.event,
            "message": self.message,
        }
        out.update(self.fields)
        return out

    def to_json(self) -> str:
        return json.dumps(self.as_dict(), default=str)

    def to_text(self) -> str:
        stamp = time.strftime("%Y-%m-%d %H:%M:%S", time.localtime(self.timestamp))
        line = f"{stamp} {self.level.upper()} {self.event}"
        if self.message:
            line += f": {self.message}"
        if self.fields:
            pairs = " ".join(f"{key}={value}" for key, value in self.fields.items())
            line += f" ({pairs})"
        return line


class StructuredLogger:
    """Writes ``EventRecord`` lines to a stream.

    Example:
        events = StructuredLogger(level=LogLevel.DEBUG)
        events.setting_changed("speech_enabled", True)

        resources = events.bind(view="resources")
        resources.info("opened")
    """

    def __init__(
        self,
        name: str = "inclusive_jobs",
        level: LogLevel = LogLevel.INFO,
        output: TextIO | None = None,
        json_format: bool = True,
        context: dict[str, Any] | None = None,
    ):
        """Initialize the logger.

        Args:
            name: Logger name stamped on every record
            level: Events below this severity are dropped
            output: Stream to write to (stderr when None)
            json_format: One JSON object per line, else plain text
            context: Fields added to every record
        """
        self.name = name
        self.level = level
        self.output = output
        self.json_format = json_format
        self.context = dict(context or {})
        self._lock = threading.Lock()

    def bind(self, **context: Any) -> "StructuredLogger":
        """A logger sharing this one's settings with extra fixed fields."""
        return StructuredLogger(
            self.name,
            self.level,
            self.output,
            self.json_format,
            {**self.context, **context},
        )

    def enabled_for(self, level: LogLevel) -> bool:
        return level.numeric >= self.level.numeric

    def log(self, level: LogLevel, event: str, message: str = "", **fields: Any) -> None:
        if not self.enabled_for(level):
            return

        record = EventRecord(
            event=event,
            level=level.value,
            message=message,
            fields={**self.context, **fields},
            logger=self.name,
        )
        line = record.to_json() if self.json_format else record.to_text()

        with self._lock:
            print(line, file=self.output or sys.stderr)

    def debug(self, event: str, message: str = "", **fields: Any) -> None:
        self.log(LogLevel.DEBUG, event, message, **fields)

    def info(self, event: str, message: str = "", **fields: Any) -> None:
        self.log(LogLevel.INFO, event, message, **fields)

    def warning(self, event: str, message: str = "", **fields: Any) -> None:
        self.log(LogLevel.WARNING, event, message, **fields)

    def error(self, event: str, message: str = "", **fields: Any) -> None:
        self.log(LogLevel.ERROR, event, message, **fields)

    # Domain events

    def setting_changed(self, setting: str, value: Any, **extra: Any) -> None:
        """An accessibility toggle or typography bundle changed."""
        self.debug("setting_changed", f"{setting} -> {value}", setting=setting, value=value, **extra)

    def points_awarded(self, skill: str, amount: int, total: int, **extra: Any) -> None:
        """Points were added to a skill."""
        self.debug(
            "points_awarded",
            f"+{amount} pts in {skill}",
            skill=skill,
            amount=amount,
            total=total,
            **extra,
        )

    def quiz_attempt(
        self,
        skill: str,
        quiz_id: str,
        passed: bool,
        attempts: int,
        **extra: Any,
    ) -> None:
        """A quiz or typing test attempt was recorded."""
        self.debug(
            "quiz_attempt",
            skill=skill,
            quiz_id=quiz_id,
            passed=passed,
            attempts=attempts,
            **extra,
        )

    def progress_reset(self, **extra: Any) -> None:
        """All learning progress was cleared."""
        self.debug("progress_reset", "All learning progress cleared", **extra)


_global_logger: StructuredLogger | None = None


def configure_logging(
    level: LogLevel | str = LogLevel.INFO,
    output: TextIO | None = None,
    json_format: bool = True,
) -> StructuredLogger:
    """Install the process-wide event logger.

    Also sets the level of the standard library ``inclusive_jobs`` logger
    so module-level debug logging follows the same threshold.

    Raises:
        ValueError: If ``level`` is not a known level name
    """
    global _global_logger

    if isinstance(level, str):
        level = LogLevel(level.lower())

    _global_logger = StructuredLogger(level=level, output=output, json_format=json_format)
    logging.getLogger("inclusive_jobs").setLevel(level.numeric)
    return _global_logger


def get_logger() -> StructuredLogger:
    """The process-wide event logger, created with defaults on first use."""
    global _global_logger

    if _global_logger is None:
        _global_logger = StructuredLogger()
    return _global_logger

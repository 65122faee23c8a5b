"""
Monitoring for Inclusive Jobs.

Components:
    StructuredLogger - One JSON or text line per domain event

Example:
    from inclusive_jobs.monitoring import configure_logging

    logger = configure_logging(level="debug", json_format=False)
"""

from inclusive_jobs.monitoring.logging import (
    EventRecord,
    LogLevel,
    StructuredLogger,
    configure_logging,
    get_logger,
)

__all__ = [
    "EventRecord",
    "LogLevel",
    "StructuredLogger",
    "configure_logging",
    "get_logger",
]

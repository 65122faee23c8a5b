"""
Inclusive Jobs - Accessible job board client.

Architecture:
    Storage → Settings Store → Event Observer → Effectors (speech, sign, live regions)
    Storage → Progress Tracker → subscribed views

Public API:
    AccessibilityBridge - Composes the accessibility layer around a document
    SettingsStore       - Persisted toggles and ReadEasy typography
    ProgressTracker     - Learning points, completions, quiz results
    ResourcesHub        - Selected skills and award rules
    AppConfig           - Configuration (+ environment overrides)

Subpackages:
    accessibility   - DOM model, extractor, observer, speech, sign overlay, announcer
    learning        - Progress, quizzes, typing tests, resources
    jobs            - Postings, filtering, saved jobs
    chat            - Local direct-messaging fallback
    monitoring      - Structured logging
    testing         - MockSpeechBackend

Example:
    from inclusive_jobs import AccessibilityBridge, JSONFileStorage

    storage = JSONFileStorage("~/.inclusive_jobs/storage.json")
    with AccessibilityBridge(storage=storage) as bridge:
        bridge.settings.set_sign_on_hover_enabled(True)
"""

from inclusive_jobs.config import AppConfig
from inclusive_jobs.storage import JSONFileStorage, KeyValueStorage, MemoryStorage, StorageEvent
from inclusive_jobs.accessibility import (
    AccessibilityBridge,
    AccessibilitySettings,
    ReadEasyParams,
    SettingsStore,
)
from inclusive_jobs.learning import Badge, LearningState, ProgressTracker, ResourcesHub

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "AppConfig",
    # Storage
    "KeyValueStorage",
    "MemoryStorage",
    "JSONFileStorage",
    "StorageEvent",
    # Accessibility
    "AccessibilityBridge",
    "AccessibilitySettings",
    "ReadEasyParams",
    "SettingsStore",
    # Learning
    "Badge",
    "LearningState",
    "ProgressTracker",
    "ResourcesHub",
]

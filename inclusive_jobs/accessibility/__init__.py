"""
Accessibility interaction layer for Inclusive Jobs.

Modules:
    dom             - Minimal element tree and event target
    settings        - Persisted toggles and ReadEasy typography
    presentation    - Writes typography onto the page
    extractor       - Element -> speakable text
    speech          - Speech effector (one utterance in flight)
    speech_backends - NVDA, say, speech-dispatcher
    overlay         - Sign-language fingerspelling overlay
    announcer       - Assertive and polite live regions
    observer        - Global focus and pointer listeners
    bridge          - Composes all of the above

Example:
    from inclusive_jobs.accessibility import AccessibilityBridge

    bridge = AccessibilityBridge(storage=storage, document=document)
    teardown = bridge.activate()
"""

from inclusive_jobs.accessibility.announcer import (
    Announcement,
    AnnouncementChannel,
    AnnouncementPriority,
    LiveRegionAnnouncer,
    install_live_regions,
)
from inclusive_jobs.accessibility.bridge import AccessibilityBridge
from inclusive_jobs.accessibility.dom import Document, Element, Event
from inclusive_jobs.accessibility.extractor import extract_speakable_text, is_readable
from inclusive_jobs.accessibility.observer import EventObserver, ObserverConfig
from inclusive_jobs.accessibility.overlay import (
    OverlayConfig,
    SignGlyph,
    SignOverlay,
    build_rows,
)
from inclusive_jobs.accessibility.presentation import TypographyPresenter
from inclusive_jobs.accessibility.settings import (
    AccessibilitySettings,
    ReadEasyParams,
    SettingsStore,
)
from inclusive_jobs.accessibility.speech import SpeechEffector

__all__ = [
    # Bridge (core)
    "AccessibilityBridge",
    # Settings
    "AccessibilitySettings",
    "ReadEasyParams",
    "SettingsStore",
    "TypographyPresenter",
    # DOM
    "Document",
    "Element",
    "Event",
    # Observer / extractor
    "EventObserver",
    "ObserverConfig",
    "extract_speakable_text",
    "is_readable",
    # Effectors
    "SpeechEffector",
    "SignOverlay",
    "SignGlyph",
    "OverlayConfig",
    "build_rows",
    "LiveRegionAnnouncer",
    "AnnouncementChannel",
    "Announcement",
    "AnnouncementPriority",
    "install_live_regions",
]

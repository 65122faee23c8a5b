"""
Testing Utilities for Inclusive Jobs.

Components:
    MockSpeechBackend - Speech backend that records instead of speaking

Usage:
    from inclusive_jobs.testing import MockSpeechBackend

    mock = MockSpeechBackend()
    bridge = AccessibilityBridge(storage=storage, speech_backend=mock)
    bridge.speech.speak("Hello")
    mock.assert_spoken("Hello")
"""

from inclusive_jobs.testing.mock import CallRecord, MockConfig, MockSpeechBackend

__all__ = [
    "CallRecord",
    "MockConfig",
    "MockSpeechBackend",
]

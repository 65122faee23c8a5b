"""
Speech Backends - Platform text-to-speech capabilities.

Each platform has its own backend module that can be developed and
tested independently:

- nvda.py              - NVDA controller client (Windows)
- say.py               - 'say' command (macOS)
- speech_dispatcher.py - spd-say (Linux)

The backends follow a common protocol, so adding a platform never
touches the speech effector.
"""

from inclusive_jobs.accessibility.speech_backends.base import (
    NullSpeechBackend,
    SpeechBackend,
    SpeechBackendMode,
    Utterance,
)
from inclusive_jobs.accessibility.speech_backends.detection import (
    detect_speech_backend,
    get_available_backends,
)

__all__ = [
    "NullSpeechBackend",
    "SpeechBackend",
    "SpeechBackendMode",
    "Utterance",
    "detect_speech_backend",
    "get_available_backends",
]

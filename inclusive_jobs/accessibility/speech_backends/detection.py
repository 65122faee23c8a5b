"""
Speech Backend Detection - Pick the platform speech capability.

This module probes the system for a usable text-to-speech capability and
returns the matching backend, or None when there is nothing to speak
through (which callers treat as a silent no-op).
"""

from __future__ import annotations

import importlib
import logging
import sys
from typing import Optional, Type

from inclusive_jobs.accessibility.speech_backends.base import (
    NullSpeechBackend,
    SpeechBackend,
    SpeechBackendMode,
)

logger = logging.getLogger(__name__)

_MODE_TO_MODULE = {
    SpeechBackendMode.NVDA: ("nvda", "NVDABackend"),
    SpeechBackendMode.SAY: ("say", "SayBackend"),
    SpeechBackendMode.SPEECH_DISPATCHER: ("speech_dispatcher", "SpeechDispatcherBackend"),
}


def _load_backend_class(mode: SpeechBackendMode) -> Type[SpeechBackend]:
    module_name, class_name = _MODE_TO_MODULE[mode]
    module = importlib.import_module(
        f"inclusive_jobs.accessibility.speech_backends.{module_name}"
    )
    return getattr(module, class_name)


def get_available_backends() -> list[Type[SpeechBackend]]:
    """Get backend classes that make sense on this platform.

    Returns:
        List of backend classes (not instances) in preference order
    """
    if sys.platform == "win32":
        modes = [SpeechBackendMode.NVDA]
    elif sys.platform == "darwin":
        modes = [SpeechBackendMode.SAY]
    else:
        modes = [SpeechBackendMode.SPEECH_DISPATCHER]

    return [_load_backend_class(mode) for mode in modes]


def detect_speech_backend(
    mode: SpeechBackendMode = SpeechBackendMode.AUTO,
) -> Optional[SpeechBackend]:
    """Return a backend for the requested mode.

    Detection order for AUTO:
    1. NVDA (Windows) - speaks through the user's own screen reader
    2. say (macOS) - built-in
    3. spd-say (Linux) - speech-dispatcher client

    Args:
        mode: Which backend to use

    Returns:
        Backend instance, or None if the capability is unavailable
    """
    if mode == SpeechBackendMode.NONE:
        return NullSpeechBackend()

    if mode == SpeechBackendMode.AUTO:
        candidates = get_available_backends()
    else:
        candidates = [_load_backend_class(mode)]

    for backend_class in candidates:
        backend = backend_class()
        if backend.is_available:
            logger.debug(f"Using speech backend: {backend.name}")
            return backend

    logger.debug(f"No speech backend available for mode {mode.name}")
    return None

"""
Speech Effector - At most one utterance in flight.

Every new request pre-empts the previous one: the effector cancels
whatever is playing and starts the new utterance immediately. There is
no queue. Without a speech capability every call is a silent no-op, and
a backend that fails is logged and otherwise ignored.
"""

from __future__ import annotations

import logging
from typing import Optional

from inclusive_jobs.accessibility.speech_backends.base import SpeechBackend, Utterance

logger = logging.getLogger(__name__)


class SpeechEffector:
    """Speak and stop through a platform speech backend.

    Example:
        speech = SpeechEffector(detect_speech_backend())
        speech.speak("Apply now")
        speech.speak("Saved jobs")   # cancels "Apply now" first
        speech.stop()
    """

    def __init__(self, backend: Optional[SpeechBackend] = None) -> None:
        """Initialize the effector.

        Args:
            backend: Speech capability; None means speech is unavailable
        """
        self._backend = backend
        self._current: Optional[Utterance] = None

    @property
    def backend(self) -> Optional[SpeechBackend]:
        return self._backend

    @property
    def available(self) -> bool:
        return self._backend is not None and self._backend.is_available

    @property
    def current_text(self) -> Optional[str]:
        """Text of the utterance most recently started and not stopped."""
        return self._current.text if self._current else None

    def speak(self, text: str) -> None:
        """Cancel any current utterance and speak ``text``."""
        if self._backend is None:
            return

        text = (text or "").strip()
        if not text:
            return

        utterance = Utterance(text)
        self._current = None
        try:
            self._backend.cancel()
            self._backend.speak(utterance)
        except Exception as e:
            logger.warning(f"Speech backend {self._backend.name} failed: {e}")
            return

        self._current = utterance
        logger.debug(f"Speaking {len(text)} chars via {self._backend.name}")

    def stop(self) -> None:
        """Cancel without starting new speech."""
        self._current = None
        if self._backend is None:
            return
        try:
            self._backend.cancel()
        except Exception as e:
            logger.warning(f"Speech backend {self._backend.name} failed to cancel: {e}")

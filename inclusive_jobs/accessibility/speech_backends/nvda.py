"""
NVDA Backend - Speech through the NVDA screen reader.

NVDA (NonVisual Desktop Access) ships nvdaControllerClient.dll, which
lets other programs speak through the user's running screen reader
instead of a second, competing voice.
"""

from __future__ import annotations

import ctypes
import logging
from typing import Optional

from inclusive_jobs.accessibility.speech_backends.base import SpeechBackend, Utterance

logger = logging.getLogger(__name__)


class NVDABackend(SpeechBackend):
    """Backend for the NVDA screen reader (Windows).

    Example:
        backend = NVDABackend()
        if backend.is_available:
            backend.speak(Utterance("Apply now"))
    """

    def __init__(self) -> None:
        self._controller: Optional[ctypes.CDLL] = None
        self._load_controller()

    def _load_controller(self) -> None:
        """Attempt to load the NVDA controller client."""
        try:
            self._controller = ctypes.windll.LoadLibrary("nvdaControllerClient.dll")
        except (OSError, AttributeError):
            self._controller = None

    @property
    def name(self) -> str:
        return "NVDA"

    @property
    def is_available(self) -> bool:
        """Check if NVDA is running."""
        if not self._controller:
            return False

        try:
            # Returns 0 when NVDA is running
            return self._controller.nvdaController_testIfRunning() == 0
        except OSError:
            return False

    def speak(self, utterance: Utterance) -> None:
        if not self._controller:
            return

        try:
            self._controller.nvdaController_cancelSpeech()
            self._controller.nvdaController_speakText(utterance.text)
        except OSError as e:
            logger.warning(f"NVDA speech failed: {e}")

    def cancel(self) -> None:
        if not self._controller:
            return

        try:
            self._controller.nvdaController_cancelSpeech()
        except OSError as e:
            logger.warning(f"NVDA cancel failed: {e}")

    def close(self) -> None:
        self.cancel()
        self._controller = None

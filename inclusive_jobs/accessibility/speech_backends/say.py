"""
Say Backend - macOS system speech via the 'say' command.

Each utterance runs as its own 'say' process; cancelling terminates it,
which stops the audio immediately.
"""

from __future__ import annotations

import logging
import shutil
import subprocess
from typing import Optional

from inclusive_jobs.accessibility.speech_backends.base import SpeechBackend, Utterance

logger = logging.getLogger(__name__)

# 'say' default speaking rate, words per minute
_DEFAULT_WPM = 175


class SayBackend(SpeechBackend):
    """Backend for the macOS 'say' command.

    Example:
        backend = SayBackend()
        backend.speak(Utterance("Saved jobs", rate=1.2))
    """

    def __init__(self, executable: str = "say") -> None:
        self._executable = executable
        self._process: Optional[subprocess.Popen] = None

    @property
    def name(self) -> str:
        return "say"

    @property
    def is_available(self) -> bool:
        return shutil.which(self._executable) is not None

    def speak(self, utterance: Utterance) -> None:
        self.cancel()

        args = [self._executable]
        if utterance.rate != 1.0:
            args += ["-r", str(max(1, int(_DEFAULT_WPM * utterance.rate)))]
        args += ["--", utterance.text]

        try:
            self._process = subprocess.Popen(
                args,
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
            )
        except OSError as e:
            logger.warning(f"'say' failed to start: {e}")
            self._process = None

    def cancel(self) -> None:
        process, self._process = self._process, None
        if process is None or process.poll() is not None:
            return

        process.terminate()
        try:
            process.wait(timeout=1.0)
        except subprocess.TimeoutExpired:
            process.kill()

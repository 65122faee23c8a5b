"""
Speech Dispatcher Backend - Linux speech via spd-say.

speech-dispatcher is the speech service Orca and most Linux desktops use.
The spd-say client returns as soon as the message is queued, and
``spd-say --cancel`` stops everything the client has queued.
"""

from __future__ import annotations

import logging
import shutil
import subprocess

from inclusive_jobs.accessibility.speech_backends.base import SpeechBackend, Utterance

logger = logging.getLogger(__name__)


def _scale(value: float) -> int:
    """Map a 1.0-centred multiplier onto speech-dispatcher's -100..100."""
    return max(-100, min(100, int((value - 1.0) * 100)))


class SpeechDispatcherBackend(SpeechBackend):
    """Backend for speech-dispatcher through the spd-say client.

    Example:
        backend = SpeechDispatcherBackend()
        if backend.is_available:
            backend.speak(Utterance("Job filters"))
    """

    def __init__(self, executable: str = "spd-say") -> None:
        self._executable = executable

    @property
    def name(self) -> str:
        return "speech-dispatcher"

    @property
    def is_available(self) -> bool:
        return shutil.which(self._executable) is not None

    def _run(self, args: list[str]) -> None:
        try:
            subprocess.run(
                [self._executable, *args],
                capture_output=True,
                timeout=2.0,
            )
        except (OSError, subprocess.SubprocessError) as e:
            logger.warning(f"spd-say failed: {e}")

    def speak(self, utterance: Utterance) -> None:
        self.cancel()

        args: list[str] = []
        if utterance.rate != 1.0:
            args += ["--rate", str(_scale(utterance.rate))]
        if utterance.pitch != 1.0:
            args += ["--pitch", str(_scale(utterance.pitch))]
        if utterance.volume != 1.0:
            # 1.0 is full volume, which is speech-dispatcher's 100
            args += ["--volume", str(_scale(utterance.volume * 2.0))]
        args += ["--", utterance.text]
        self._run(args)

    def cancel(self) -> None:
        self._run(["--cancel"])

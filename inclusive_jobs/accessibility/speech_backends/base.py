"""
Speech Backend Base - Abstract platform speech capability.

This module defines the protocol every platform text-to-speech backend
implements, so the speech effector can stay ignorant of the operating
system it runs on.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum, auto


class SpeechBackendMode(Enum):
    """Speech backend detection/selection mode."""
    AUTO = auto()               # Pick the first available backend
    NVDA = auto()               # Force NVDA controller client (Windows)
    SAY = auto()                # Force macOS 'say'
    SPEECH_DISPATCHER = auto()  # Force spd-say (Linux)
    NONE = auto()               # Disable speech output


@dataclass
class Utterance:
    """A single request to speak.

    Attributes:
        text: Plain text to speak
        rate: Rate multiplier (1.0 = platform default)
        pitch: Pitch multiplier (1.0 = platform default)
        volume: Volume (0.0-1.0)
    """
    text: str
    rate: float = 1.0
    pitch: float = 1.0
    volume: float = 1.0


class SpeechBackend(ABC):
    """Abstract base class for platform speech backends.

    Backends handle:
    - Detecting whether the capability exists on this machine
    - Starting an utterance without blocking the caller
    - Cancelling whatever is currently being spoken

    Backends never raise for platform failures; they log and degrade.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable backend name."""
        ...

    @property
    @abstractmethod
    def is_available(self) -> bool:
        """Whether the capability can be used right now."""
        ...

    @abstractmethod
    def speak(self, utterance: Utterance) -> None:
        """Start speaking an utterance (fire-and-forget)."""
        ...

    @abstractmethod
    def cancel(self) -> None:
        """Stop any utterance in flight."""
        ...

    def close(self) -> None:
        """Release platform resources."""
        self.cancel()


class NullSpeechBackend(SpeechBackend):
    """No-op backend when no speech capability exists.

    Used as a fallback to avoid null checks throughout the code.
    """

    @property
    def name(self) -> str:
        return "None"

    @property
    def is_available(self) -> bool:
        return False

    def speak(self, utterance: Utterance) -> None:
        pass

    def cancel(self) -> None:
        pass

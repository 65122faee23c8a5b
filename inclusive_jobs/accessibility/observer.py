"""
Event Observer - Global focus and pointer subscription.

Translates raw focus and pointer events into speech and sign-overlay
requests. The element currently under the pointer is held as a single
optional reference and compared by identity, so moving within the same
element never re-triggers its effects.

Example:
    observer = EventObserver(settings, speech, overlay)
    teardown = observer.attach(document)
    ...
    teardown()   # listeners removed, overlay hidden, speech cancelled
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Optional

from inclusive_jobs.accessibility.dom import Document, Element, Event
from inclusive_jobs.accessibility.extractor import (
    MIN_READABLE_LENGTH,
    extract_speakable_text,
    is_readable,
)
from inclusive_jobs.accessibility.overlay import SignOverlay
from inclusive_jobs.accessibility.settings import SettingsStore
from inclusive_jobs.accessibility.speech import SpeechEffector

logger = logging.getLogger(__name__)


@dataclass
class ObserverConfig:
    """Event observer tunables.

    Attributes:
        readable_min_length: Shortest label or text worth reading
    """
    readable_min_length: int = MIN_READABLE_LENGTH


class EventObserver:
    """Owns the page-wide focusin, pointerover and pointerout listeners."""

    def __init__(
        self,
        settings: SettingsStore,
        speech: SpeechEffector,
        overlay: SignOverlay,
        config: Optional[ObserverConfig] = None,
    ) -> None:
        self.settings = settings
        self.speech = speech
        self.overlay = overlay
        self.config = config or ObserverConfig()

        self._document: Optional[Document] = None
        self._hover_target: Optional[Element] = None
        self._handlers: dict[str, Callable[[Event], None]] = {
            "focusin": self.on_focus_in,
            "pointerover": self.on_pointer_over,
            "pointerout": self.on_pointer_out,
        }

    @property
    def hover_target(self) -> Optional[Element]:
        return self._hover_target

    @property
    def attached(self) -> bool:
        return self._document is not None

    def attach(self, document: Document) -> Callable[[], None]:
        """Register the global listeners on ``document``.

        Re-attaching first tears down any previous registration.

        Returns:
            The teardown function
        """
        if self._document is not None:
            self.teardown()

        for event_type, handler in self._handlers.items():
            document.add_event_listener(event_type, handler)
        self._document = document
        return self.teardown

    def teardown(self) -> None:
        """Reverse every registration and clear transient effects."""
        if self._document is not None:
            for event_type, handler in self._handlers.items():
                self._document.remove_event_listener(event_type, handler)
            self._document = None

        self.reset()

    def reset(self) -> None:
        """Forget the hover target, hide the overlay and cancel speech."""
        self._hover_target = None
        self.overlay.hide()
        self.speech.stop()

    def _readable(self, element: Optional[Element]) -> bool:
        return is_readable(element, self.config.readable_min_length)

    # Handlers

    def on_focus_in(self, event: Event) -> None:
        if not self.settings.get().speech_enabled:
            return

        target = event.target
        if not self._readable(target):
            return

        text = extract_speakable_text(target)
        if text:
            self.speech.speak(text)

    def on_pointer_over(self, event: Event) -> None:
        target = event.target
        if not self._readable(target):
            return

        if target is self._hover_target:
            return
        self._hover_target = target

        text = extract_speakable_text(target)
        if not text:
            return

        settings = self.settings.get()
        if settings.hover_speech_active:
            self.speech.speak(text)
        if settings.sign_on_hover_enabled:
            self.overlay.show(text)

    def on_pointer_out(self, event: Event) -> None:
        current = self._hover_target
        if current is None:
            return

        related = event.related_target
        if related is None or not current.contains(related):
            self._hover_target = None
            self.overlay.hide()

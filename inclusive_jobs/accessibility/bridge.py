"""
Accessibility Bridge - Composes the accessibility interaction layer.

The bridge wires the settings store, the three effectors and the event
observer around one document and one storage, and gives the layer a
single activation/teardown lifecycle.

Example:
    bridge = AccessibilityBridge(storage=storage, document=document)

    with bridge:
        bridge.settings.set_speech_enabled(True)
        bridge.announce_section("Jobs", "Browse open roles")

        results = bridge.channel(AnnouncementPriority.POLITE)
        results.send("3 jobs match your filters")
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Callable, Optional

from inclusive_jobs.accessibility.announcer import (
    AnnouncementChannel,
    AnnouncementPriority,
    LiveRegionAnnouncer,
    install_live_regions,
)
from inclusive_jobs.accessibility.dom import Document
from inclusive_jobs.accessibility.observer import EventObserver, ObserverConfig
from inclusive_jobs.accessibility.overlay import OverlayConfig, SignOverlay
from inclusive_jobs.accessibility.presentation import TypographyPresenter
from inclusive_jobs.accessibility.settings import AccessibilitySettings, SettingsStore
from inclusive_jobs.accessibility.speech import SpeechEffector
from inclusive_jobs.accessibility.speech_backends import SpeechBackend, detect_speech_backend
from inclusive_jobs.storage import KeyValueStorage, MemoryStorage

if TYPE_CHECKING:
    from inclusive_jobs.config import AppConfig

logger = logging.getLogger(__name__)


def _hover_toggles(settings: AccessibilitySettings) -> tuple[bool, bool, bool]:
    return (
        settings.speech_enabled,
        settings.speak_on_hover_enabled,
        settings.sign_on_hover_enabled,
    )


class AccessibilityBridge:
    """Central coordination point for the accessibility layer.

    The bridge owns:
    - The settings store (persisted toggles and typography)
    - The speech, sign overlay and live-region effectors
    - The global event observer and its lifecycle
    """

    def __init__(
        self,
        config: Optional["AppConfig"] = None,
        storage: Optional[KeyValueStorage] = None,
        document: Optional[Document] = None,
        speech_backend: Optional[SpeechBackend] = None,
    ) -> None:
        """Initialize the bridge.

        Args:
            config: Application config (defaults if None)
            storage: Persistence for settings (in-memory if None)
            document: Page the layer is attached to (a blank one if None)
            speech_backend: Speech capability (detected from the config's
                speech mode if None)
        """
        if config is None:
            from inclusive_jobs.config import AppConfig
            config = AppConfig()

        self.config = config
        self.storage = storage if storage is not None else MemoryStorage()
        self.document = document if document is not None else Document()

        if speech_backend is None:
            speech_backend = detect_speech_backend(config.speech_backend)
        self.speech = SpeechEffector(speech_backend)

        self.presenter = TypographyPresenter(self.document)
        self.settings = SettingsStore(self.storage, speech=self.speech, presenter=self.presenter)
        self.overlay = SignOverlay(
            self.document,
            OverlayConfig(
                max_words=config.overlay_max_words,
                max_letters=config.overlay_max_letters,
                glyph_url_template=config.glyph_url_template,
            ),
        )
        self.announcer = LiveRegionAnnouncer(self.document)
        self.observer = EventObserver(
            self.settings,
            self.speech,
            self.overlay,
            ObserverConfig(readable_min_length=config.readable_min_length),
        )

        self._page_channel: Optional[AnnouncementChannel] = None
        self._unsubscribe: Optional[Callable[[], None]] = None
        self._toggles: Optional[tuple[bool, bool, bool]] = None

    @property
    def active(self) -> bool:
        return self.observer.attached

    def activate(self) -> Callable[[], None]:
        """Install live regions, apply typography and attach the observer.

        Returns:
            The teardown function
        """
        if self.active:
            return self.teardown

        install_live_regions(self.document)
        self.settings.apply_presentation()
        self.observer.attach(self.document)

        self._toggles = _hover_toggles(self.settings.get())
        self._unsubscribe = self.settings.subscribe(self._on_settings_changed)

        logger.debug("Accessibility layer activated")
        return self.teardown

    def teardown(self) -> None:
        """Detach everything; safe to call more than once."""
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None

        self.observer.teardown()
        logger.debug("Accessibility layer torn down")

    def _on_settings_changed(self, settings: AccessibilitySettings) -> None:
        # Changing any hover toggle restarts the hover session
        toggles = _hover_toggles(settings)
        if toggles != self._toggles:
            self._toggles = toggles
            self.observer.reset()

    def announce_section(self, title: str, description: Optional[str] = None) -> bool:
        """Write a page or section change to the assertive region."""
        return self.announcer.announce(title, description, source="section")

    def channel(
        self,
        priority: AnnouncementPriority = AnnouncementPriority.ASSERTIVE,
        speak: bool = True,
        name: Optional[str] = None,
    ) -> AnnouncementChannel:
        """Create a message channel for one call site.

        Args:
            priority: Region the channel writes to
            speak: Also speak messages while speech is enabled
            name: Channel name attached to its announcements
        """
        return AnnouncementChannel(
            self.announcer,
            priority,
            speech=self.speech if speak else None,
            settings=self.settings if speak else None,
            name=name,
        )

    def announce_page(self, message: str) -> bool:
        """Send through the bridge's own page channel."""
        if self._page_channel is None:
            self._page_channel = self.channel(name="page")
        return self._page_channel.send(message)

    def __enter__(self) -> "AccessibilityBridge":
        self.activate()
        return self

    def __exit__(self, *exc) -> None:
        self.teardown()

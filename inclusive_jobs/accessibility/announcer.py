"""
Live-Region Announcer - Messages for assistive technology.

Two invisible regions live in the page: an assertive one for section and
page changes, and a polite one for low-urgency status such as filter
result counts. Writing one never touches the other.

Components:
    AnnouncementPriority - ARIA live-region politeness
    LiveRegionAnnouncer  - Writes the regions, notifies listeners
    AnnouncementChannel  - Per-call-site sender with duplicate suppression

Example:
    install_live_regions(document)
    announcer = LiveRegionAnnouncer(document)

    announcer.announce("Jobs", "Browse open roles")
    # a11y-announcer: "Jobs. Browse open roles"

    results = AnnouncementChannel(announcer, AnnouncementPriority.POLITE)
    results.send("3 jobs match your filters")
    results.send("3 jobs match your filters")   # suppressed
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import TYPE_CHECKING, Callable, Optional

from inclusive_jobs.accessibility.dom import Document, Element

if TYPE_CHECKING:
    from inclusive_jobs.accessibility.settings import SettingsStore
    from inclusive_jobs.accessibility.speech import SpeechEffector

logger = logging.getLogger(__name__)

ASSERTIVE_REGION_ID = "a11y-announcer"
POLITE_REGION_ID = "a11y-status"


class AnnouncementPriority(Enum):
    """Live-region politeness levels."""
    POLITE = auto()     # Read when the user is idle
    ASSERTIVE = auto()  # Interrupts current speech


_REGION_IDS = {
    AnnouncementPriority.ASSERTIVE: ASSERTIVE_REGION_ID,
    AnnouncementPriority.POLITE: POLITE_REGION_ID,
}


@dataclass
class Announcement:
    """A message written to a live region.

    Attributes:
        text: Text written to the region
        priority: Which region received it
        source: Optional channel name, for debugging
        timestamp: When it was written (epoch seconds)
    """
    text: str
    priority: AnnouncementPriority = AnnouncementPriority.ASSERTIVE
    source: Optional[str] = None
    timestamp: float = field(default_factory=time.time)


AnnouncementListener = Callable[[Announcement], None]


def format_announcement(title: str, description: Optional[str] = None) -> str:
    """Join a title and optional description with ". "."""
    if description:
        return f"{title}. {description}"
    return title


def install_live_regions(document: Document) -> tuple[Element, Element]:
    """Create both live regions in the body if they are missing.

    Returns:
        (assertive region, polite region)
    """
    regions = []
    for priority, region_id in _REGION_IDS.items():
        region = document.get_element_by_id(region_id)
        if region is None:
            region = Element("div", {
                "id": region_id,
                "aria-live": priority.name.lower(),
                "aria-atomic": "true",
            })
            region.class_list.add("sr-only")
            document.body.append_child(region)
        regions.append(region)
    return regions[0], regions[1]


class LiveRegionAnnouncer:
    """Writes text into the page's live regions.

    A region that is not in the document makes the write a silent no-op.
    """

    def __init__(self, document: Optional[Document] = None) -> None:
        self.document = document
        self._listeners: list[AnnouncementListener] = []

    def region(self, priority: AnnouncementPriority) -> Optional[Element]:
        if self.document is None:
            return None
        return self.document.get_element_by_id(_REGION_IDS[priority])

    def _write(self, text: str, priority: AnnouncementPriority, source: Optional[str]) -> bool:
        region = self.region(priority)
        if region is None:
            logger.debug(f"No {priority.name.lower()} live region; dropping announcement")
            return False

        region.text_content = text
        announcement = Announcement(text=text, priority=priority, source=source)

        for listener in list(self._listeners):
            try:
                listener(announcement)
            except Exception:
                logger.exception("Announcement listener failed")

        return True

    def announce(
        self,
        title: str,
        description: Optional[str] = None,
        source: Optional[str] = None,
    ) -> bool:
        """Replace the assertive region's text.

        Returns:
            True if the region exists and was written
        """
        return self._write(
            format_announcement(title, description),
            AnnouncementPriority.ASSERTIVE,
            source,
        )

    def status(self, message: str, source: Optional[str] = None) -> bool:
        """Replace the polite region's text.

        Returns:
            True if the region exists and was written
        """
        return self._write(message, AnnouncementPriority.POLITE, source)

    def add_listener(self, listener: AnnouncementListener) -> None:
        if listener not in self._listeners:
            self._listeners.append(listener)

    def remove_listener(self, listener: AnnouncementListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)


class AnnouncementChannel:
    """A message channel owned by one call site.

    A message identical to the one this channel sent last is dropped;
    other channels are not consulted. When a speech effector and the
    settings store are given, messages are also spoken while speech is
    enabled.
    """

    def __init__(
        self,
        announcer: LiveRegionAnnouncer,
        priority: AnnouncementPriority = AnnouncementPriority.ASSERTIVE,
        speech: Optional["SpeechEffector"] = None,
        settings: Optional["SettingsStore"] = None,
        name: Optional[str] = None,
    ) -> None:
        self.announcer = announcer
        self.priority = priority
        self.name = name
        self._speech = speech
        self._settings = settings
        self._last: Optional[str] = None

    @property
    def last_message(self) -> Optional[str]:
        return self._last

    def send(self, message: str) -> bool:
        """Announce ``message`` unless it repeats the previous one.

        Returns:
            True if the message was dispatched
        """
        if not message or message == self._last:
            return False

        self._last = message

        if self.priority is AnnouncementPriority.POLITE:
            self.announcer.status(message, source=self.name)
        else:
            self.announcer.announce(message, source=self.name)

        if (
            self._speech is not None
            and self._settings is not None
            and self._settings.get().speech_enabled
        ):
            self._speech.speak(message)

        return True

    def reset(self) -> None:
        """Forget the last message so it can be sent again."""
        self._last = None

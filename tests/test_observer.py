"""
Tests for the focus and pointer event observer.
"""

import pytest

from inclusive_jobs.accessibility.dom import Document, Element, Event
from inclusive_jobs.accessibility.observer import EventObserver
from inclusive_jobs.accessibility.overlay import SignOverlay
from inclusive_jobs.accessibility.settings import SettingsStore
from inclusive_jobs.accessibility.speech import SpeechEffector


@pytest.fixture
def page(document):
    """A job card with a labelled button inside."""
    card = Element("article", children=["Frontend Developer at Acme"])
    button = Element("button", {"aria-label": "Apply now"}, [Element("span", children=["Go"])])
    card.append_child(button)
    document.main.append_child(card)
    return card, button


@pytest.fixture
def observer(storage, mock_backend, document):
    speech = SpeechEffector(mock_backend)
    obs = EventObserver(SettingsStore(storage, speech=speech), speech, SignOverlay(document))
    obs.attach(document)
    yield obs
    obs.teardown()


class TestFocus:
    """Speech on keyboard focus."""

    def test_focus_speaks_when_enabled(self, observer, document, page, mock_backend):
        _, button = page
        observer.settings.set_speech_enabled(True)

        document.dispatch_event(Event("focusin", target=button))

        mock_backend.assert_spoken("Apply now")

    def test_focus_silent_when_speech_disabled(self, observer, document, page, mock_backend):
        _, button = page

        document.dispatch_event(Event("focusin", target=button))

        mock_backend.assert_not_called()

    def test_focus_on_main_ignored(self, observer, document, mock_backend):
        observer.settings.set_speech_enabled(True)

        document.dispatch_event(Event("focusin", target=document.main))

        mock_backend.assert_not_called()

    def test_new_focus_preempts(self, observer, document, page, mock_backend):
        card, button = page
        observer.settings.set_speech_enabled(True)

        document.dispatch_event(Event("focusin", target=card))
        document.dispatch_event(Event("focusin", target=button))

        assert mock_backend.speaking == "Apply now"
        assert mock_backend.cancel_count >= 2


class TestHover:
    """Speech and sign overlay on pointer hover."""

    def test_hover_speech_requires_master_toggle(self, observer, document, page, mock_backend):
        _, button = page
        observer.settings.set_speak_on_hover_enabled(True)

        document.dispatch_event(Event("pointerover", target=button))

        mock_backend.assert_not_called()

    def test_hover_speaks(self, observer, document, page, mock_backend):
        _, button = page
        observer.settings.set_speech_enabled(True)
        observer.settings.set_speak_on_hover_enabled(True)

        document.dispatch_event(Event("pointerover", target=button))

        mock_backend.assert_spoken("Apply now")

    def test_hover_shows_overlay(self, observer, document, page, mock_backend):
        _, button = page
        observer.settings.set_sign_on_hover_enabled(True)

        document.dispatch_event(Event("pointerover", target=button))

        assert observer.overlay.is_visible
        assert len(observer.overlay.rows) == 2
        mock_backend.assert_not_called()

    def test_reentry_on_same_element_does_not_retrigger(self, observer, document, page):
        _, button = page
        observer.settings.set_sign_on_hover_enabled(True)

        document.dispatch_event(Event("pointerover", target=button))
        panel = observer.overlay.element
        document.dispatch_event(Event("pointerover", target=button))

        assert observer.overlay.element is panel
        assert observer.hover_target is button

    def test_pointer_out_into_child_keeps_overlay(self, observer, document, page):
        _, button = page
        observer.settings.set_sign_on_hover_enabled(True)
        child = button.child_elements[0]

        document.dispatch_event(Event("pointerover", target=button))
        document.dispatch_event(Event("pointerout", target=button, related_target=child))

        assert observer.overlay.is_visible
        assert observer.hover_target is button

    def test_pointer_out_hides_overlay(self, observer, document, page):
        card, button = page
        observer.settings.set_sign_on_hover_enabled(True)

        document.dispatch_event(Event("pointerover", target=button))
        document.dispatch_event(Event("pointerout", target=button, related_target=None))

        assert not observer.overlay.is_visible
        assert observer.hover_target is None

    def test_pointer_out_to_unrelated_element(self, observer, document, page):
        card, button = page
        observer.settings.set_sign_on_hover_enabled(True)
        elsewhere = Element("p", children=["Footer"])
        document.body.append_child(elsewhere)

        document.dispatch_event(Event("pointerover", target=button))
        document.dispatch_event(Event("pointerout", target=button, related_target=elsewhere))

        assert not observer.overlay.is_visible

    def test_unreadable_target_ignored(self, observer, document):
        observer.settings.set_sign_on_hover_enabled(True)

        document.dispatch_event(Event("pointerover", target=document.body))

        assert observer.hover_target is None
        assert not observer.overlay.is_visible


class TestLifecycle:
    """Attach and teardown."""

    def test_attach_registers_three_listeners(self, observer, document):
        assert observer.attached
        assert document.listener_count() == 3

    def test_teardown_removes_listeners(self, observer, document, page, mock_backend):
        _, button = page
        observer.settings.set_sign_on_hover_enabled(True)
        document.dispatch_event(Event("pointerover", target=button))

        observer.teardown()

        assert document.listener_count() == 0
        assert not observer.attached
        assert not observer.overlay.is_visible
        assert observer.hover_target is None

    def test_events_after_teardown_ignored(self, observer, document, page, mock_backend):
        _, button = page
        observer.settings.set_speech_enabled(True)
        observer.teardown()

        document.dispatch_event(Event("focusin", target=button))

        mock_backend.assert_not_called()

    def test_reattach_moves_listeners(self, observer, document):
        other = Document()
        observer.attach(other)

        assert document.listener_count() == 0
        assert other.listener_count() == 3

    def test_attach_returns_teardown(self, storage, mock_backend, document):
        speech = SpeechEffector(mock_backend)
        obs = EventObserver(SettingsStore(storage), speech, SignOverlay(document))

        teardown = obs.attach(document)
        teardown()

        assert document.listener_count() == 0

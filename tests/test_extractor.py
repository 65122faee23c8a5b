"""
Tests for speakable text extraction.
"""

import pytest

from inclusive_jobs.accessibility.dom import Document, Element
from inclusive_jobs.accessibility.extractor import extract_speakable_text, is_readable


class TestExtractSpeakableText:
    """Priority order of text sources."""

    def test_aria_label_wins(self):
        el = Element("button", {"aria-label": "Apply now", "title": "Apply"}, ["Go"])
        assert extract_speakable_text(el) == "Apply now"

    def test_title_before_text(self):
        el = Element("span", {"title": "Remote role"}, ["RR"])
        assert extract_speakable_text(el) == "Remote role"

    def test_rendered_text_trimmed(self):
        el = Element("p", children=["  Saved jobs \n"])
        assert extract_speakable_text(el) == "Saved jobs"

    def test_whitespace_only_label_skipped(self):
        el = Element("span", {"aria-label": "   "}, ["Filters"])
        assert extract_speakable_text(el) == "Filters"

    def test_hidden_text_falls_back_to_raw_text(self):
        """Hidden subtrees have no rendered text but still have content."""
        el = Element("span", children=[Element("em", children=["Hidden hint"], hidden=True)])

        assert el.inner_text == ""
        assert extract_speakable_text(el) == "Hidden hint"

    def test_nearest_button_label(self):
        icon = Element("svg")
        Element("button", {"aria-label": "Close dialog"}, [icon])

        assert extract_speakable_text(icon) == "Close dialog"

    def test_nearest_link_text(self):
        icon = Element("i")
        Element("a", {"href": "/jobs"}, [icon, " Jobs "])

        assert extract_speakable_text(icon) == "Jobs"

    def test_blank_link_yields_none(self):
        icon = Element("i")
        Element("a", {"href": "/jobs"}, [icon, "   "])

        assert extract_speakable_text(icon) is None

    def test_empty_element(self):
        assert extract_speakable_text(Element("div")) is None

    def test_none(self):
        assert extract_speakable_text(None) is None


class TestIsReadable:
    """Readability predicate."""

    @pytest.mark.parametrize("tag", ["html", "body", "main"])
    def test_page_containers_excluded(self, tag):
        assert not is_readable(Element(tag, children=["Lots of text"]))

    def test_main_landmark_role_excluded(self):
        assert not is_readable(Element("div", {"role": "main"}, ["Content"]))

    def test_document_main_excluded(self):
        doc = Document()
        doc.main.append_child("Job listings")

        assert not is_readable(doc.main)

    def test_short_text_excluded(self):
        assert not is_readable(Element("span", children=[" x "]))

    def test_two_characters_readable(self):
        assert is_readable(Element("span", children=["OK"]))

    def test_label_counts(self):
        assert is_readable(Element("button", {"aria-label": "Search"}))

    def test_custom_min_length(self):
        assert not is_readable(Element("span", children=["Jobs"]), min_length=5)

    def test_none(self):
        assert not is_readable(None)

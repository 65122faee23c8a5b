"""
Sign Overlay - Simulated fingerspelling for hovered text.

Renders a fixed, non-interactive panel near the bottom-right corner with
one row per word and one hand-sign glyph per letter.

Components:
    SignGlyph  - One letter and the image that shows it
    build_rows - Pure text -> rows-of-glyphs model
    SignOverlay - Puts the panel into (and takes it out of) a document

Example:
    overlay = SignOverlay(document)
    overlay.show("Apply now")   # 2 rows: A P P L Y / N O W
    overlay.hide()
"""

from __future__ import annotations

import logging
import re
import unicodedata
from dataclasses import dataclass
from typing import Optional

from inclusive_jobs.accessibility.dom import Document, Element

logger = logging.getLogger(__name__)

DEFAULT_GLYPH_URL_TEMPLATE = (
    "https://commons.wikimedia.org/wiki/Special:FilePath/Sign_language_{letter}.svg"
)

_NON_LETTER = re.compile(r"[^A-Z]")

PANEL_STYLE = {
    "position": "fixed",
    "bottom": "24px",
    "right": "24px",
    "z-index": "9999",
    "background": "#ffffff",
    "padding": "16px",
    "border-radius": "16px",
    "box-shadow": "0 12px 30px rgba(0,0,0,.25)",
    "display": "flex",
    "flex-direction": "column",
    "gap": "12px",
    "max-width": "75vw",
    "pointer-events": "none",
}

ROW_STYLE = {
    "display": "flex",
    "gap": "6px",
    "align-items": "center",
}


@dataclass(frozen=True)
class SignGlyph:
    """A single fingerspelled letter."""
    letter: str
    url: str

    @property
    def alt(self) -> str:
        return f"Sign language letter {self.letter}"


@dataclass
class OverlayConfig:
    """Overlay tunables.

    Attributes:
        max_words: Rows rendered at most
        max_letters: Glyphs per row at most
        glyph_url_template: Image URL with a ``{letter}`` placeholder
        glyph_size_px: Width and height of each glyph
    """
    max_words: int = 8
    max_letters: int = 20
    glyph_url_template: str = DEFAULT_GLYPH_URL_TEMPLATE
    glyph_size_px: int = 38


def word_letters(word: str, max_letters: int = 20) -> list[str]:
    """Displayable letters of a word.

    Upper-cased and NFD-normalized so accented letters keep their base
    letter; anything outside A-Z is dropped.
    """
    folded = unicodedata.normalize("NFD", word.upper())
    return list(_NON_LETTER.sub("", folded))[:max_letters]


def build_rows(text: str, config: Optional[OverlayConfig] = None) -> list[list[SignGlyph]]:
    """Rows of glyphs for a piece of text.

    Words without any displayable letter contribute no row, so blank or
    punctuation-only text yields an empty list.
    """
    config = config or OverlayConfig()
    words = (text or "").split()[: config.max_words]

    rows = []
    for word in words:
        letters = word_letters(word, config.max_letters)
        if letters:
            rows.append([
                SignGlyph(letter, config.glyph_url_template.format(letter=letter))
                for letter in letters
            ])
    return rows


class SignOverlay:
    """The overlay effector. At most one panel exists at a time."""

    def __init__(self, document: Optional[Document] = None, config: Optional[OverlayConfig] = None):
        self.document = document
        self.config = config or OverlayConfig()
        self._element: Optional[Element] = None
        self._rows: list[list[SignGlyph]] = []

    @property
    def element(self) -> Optional[Element]:
        """The panel currently in the document, if any."""
        return self._element

    @property
    def rows(self) -> list[list[SignGlyph]]:
        return list(self._rows)

    @property
    def is_visible(self) -> bool:
        return self._element is not None

    def _render(self, rows: list[list[SignGlyph]]) -> Element:
        size = f"{self.config.glyph_size_px}px"
        panel = Element("div", {"aria-hidden": "true", "class": "sign-overlay"})
        panel.style.update(PANEL_STYLE)

        for row in rows:
            row_el = Element("div")
            row_el.style.update(ROW_STYLE)
            for glyph in row:
                img = Element("img", {"src": glyph.url, "alt": glyph.alt, "loading": "lazy"})
                img.style.update({"width": size, "height": size, "object-fit": "contain"})
                row_el.append_child(img)
            panel.append_child(row_el)

        return panel

    def show(self, text: str) -> bool:
        """Replace any existing panel with one for ``text``.

        Returns:
            True if a panel is now shown
        """
        self.hide()

        if self.document is None:
            return False

        rows = build_rows(text, self.config)
        if not rows:
            return False

        self._element = self._render(rows)
        self._rows = rows
        self.document.body.append_child(self._element)
        logger.debug(f"Sign overlay shown with {len(rows)} rows")
        return True

    def hide(self) -> None:
        """Remove the panel; nothing happens if none is shown."""
        if self._element is not None:
            self._element.remove()
            self._element = None
            self._rows = []

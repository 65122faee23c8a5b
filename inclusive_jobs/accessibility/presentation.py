"""
ReadEasy Presentation - Apply dyslexia-friendly typography.

The stylesheet reads four CSS custom properties from the root element
and switches on the ``a11y-dyslexic`` class. This module is the only
place that writes them.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

from inclusive_jobs.accessibility.dom import Document

if TYPE_CHECKING:
    from inclusive_jobs.accessibility.settings import ReadEasyParams

READ_EASY_CLASS = "a11y-dyslexic"

FONT_SIZE_PROPERTY = "--readease-font-size"
LINE_HEIGHT_PROPERTY = "--readease-line-height"
LETTER_SPACING_PROPERTY = "--readease-letter-spacing"
WORD_SPACING_PROPERTY = "--readease-word-spacing"


def _num(value: float) -> str:
    """Format a number the way CSS expects (no trailing zeros)."""
    text = f"{value:.3f}".rstrip("0").rstrip(".")
    return text or "0"


def typography_properties(params: "ReadEasyParams") -> dict[str, str]:
    """CSS custom properties for a parameter bundle.

    Args:
        params: ReadEasy typography parameters

    Returns:
        Property name to CSS value
    """
    return {
        FONT_SIZE_PROPERTY: f"{_num(params.font_size_percent)}%",
        LINE_HEIGHT_PROPERTY: _num(params.line_height),
        LETTER_SPACING_PROPERTY: f"{_num(params.letter_spacing_em)}em",
        WORD_SPACING_PROPERTY: f"{_num(params.word_spacing_em)}em",
    }


class TypographyPresenter:
    """Writes ReadEasy typography onto a document's root element.

    Example:
        presenter = TypographyPresenter(document)
        presenter.apply(True, ReadEasyParams(font_size_percent=120))
        document.document_element.style["--readease-font-size"]  # "120%"
    """

    def __init__(self, document: Optional[Document] = None) -> None:
        self.document = document

    def apply(self, enabled: bool, params: "ReadEasyParams") -> None:
        """Toggle ReadEasy and write (or clear) the typography properties."""
        if self.document is None:
            return

        root = self.document.document_element
        props = typography_properties(params)

        if enabled:
            root.class_list.add(READ_EASY_CLASS)
            root.style.update(props)
        else:
            root.class_list.discard(READ_EASY_CLASS)
            for name in props:
                root.style.pop(name, None)

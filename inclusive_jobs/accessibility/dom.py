"""
DOM Model - A minimal element tree and event target.

The accessibility layer reasons about "elements under focus or pointer".
This module gives it a small, dependency-free tree with just the parts of
the browser DOM it relies on: attributes, rendered vs raw text, subtree
containment, nearest-ancestor lookup and global event listeners.

Example:
    doc = Document()
    button = doc.create_element("button", {"aria-label": "Apply now"})
    doc.main.append_child(button)

    doc.add_event_listener("focusin", handler)
    doc.dispatch_event(Event("focusin", target=button))
"""

from __future__ import annotations

import html
from dataclasses import dataclass
from typing import Callable, Iterator, Optional, Union


# Elements rendered without a closing tag
_VOID_TAGS = {"IMG", "BR", "HR", "INPUT", "META", "LINK"}


class Element:
    """A node in the element tree.

    Children may be other elements or plain strings (text nodes).

    Attributes:
        tag_name: Upper-case tag name, as the DOM reports it
        attributes: Attribute name to value
        children: Child nodes in document order
        hidden: Whether the element is rendered (hidden subtrees have no
            rendered text)
        style: Inline style properties
        class_list: CSS classes
    """

    def __init__(
        self,
        tag: str,
        attributes: Optional[dict[str, str]] = None,
        children: Optional[list[Union["Element", str]]] = None,
        hidden: bool = False,
    ) -> None:
        self.tag_name = tag.upper()
        self.attributes: dict[str, str] = dict(attributes or {})
        self.children: list[Union[Element, str]] = []
        self.parent: Optional[Element] = None
        self.hidden = hidden
        self.style: dict[str, str] = {}
        self.class_list: set[str] = set()

        for child in children or []:
            self.append_child(child)

    def __repr__(self) -> str:
        ident = f"#{self.id}" if self.id else ""
        return f"<{self.tag_name.lower()}{ident}>"

    # Attributes

    @property
    def id(self) -> Optional[str]:
        return self.attributes.get("id")

    def get_attribute(self, name: str) -> Optional[str]:
        return self.attributes.get(name)

    def set_attribute(self, name: str, value: str) -> None:
        self.attributes[name] = str(value)

    def remove_attribute(self, name: str) -> None:
        self.attributes.pop(name, None)

    # Tree

    def append_child(self, child: Union["Element", str]) -> Union["Element", str]:
        """Append a child node, detaching it from any previous parent."""
        if isinstance(child, Element):
            if child is self or child.contains(self):
                raise ValueError("Cannot append an element to its own subtree")
            child.remove()
            child.parent = self
        self.children.append(child)
        return child

    def remove(self) -> None:
        """Detach this element from its parent."""
        if self.parent is not None:
            self.parent.children = [c for c in self.parent.children if c is not self]
            self.parent = None

    @property
    def child_elements(self) -> list["Element"]:
        return [c for c in self.children if isinstance(c, Element)]

    @property
    def child_element_count(self) -> int:
        return len(self.child_elements)

    def iter_descendants(self) -> Iterator["Element"]:
        """Yield descendant elements depth-first, in document order."""
        for child in self.child_elements:
            yield child
            yield from child.iter_descendants()

    def contains(self, other: Optional["Element"]) -> bool:
        """Whether ``other`` is this element or one of its descendants."""
        node = other
        while node is not None:
            if node is self:
                return True
            node = node.parent
        return False

    def closest(self, *tags: str) -> Optional["Element"]:
        """Nearest inclusive ancestor whose tag is one of ``tags``."""
        wanted = {t.upper() for t in tags}
        node: Optional[Element] = self
        while node is not None:
            if node.tag_name in wanted:
                return node
            node = node.parent
        return None

    # Text

    @property
    def text_content(self) -> str:
        """All descendant text, rendered or not."""
        parts = []
        for child in self.children:
            parts.append(child if isinstance(child, str) else child.text_content)
        return "".join(parts)

    @text_content.setter
    def text_content(self, value: str) -> None:
        for child in self.child_elements:
            child.parent = None
        self.children = [value] if value else []

    @property
    def inner_text(self) -> str:
        """Rendered text only; hidden subtrees contribute nothing."""
        if self.hidden:
            return ""
        parts = []
        for child in self.children:
            parts.append(child if isinstance(child, str) else child.inner_text)
        return "".join(parts)

    # Serialization

    def to_html(self) -> str:
        attrs = dict(self.attributes)
        if self.class_list:
            attrs["class"] = " ".join(sorted(self.class_list))
        if self.style:
            attrs["style"] = "; ".join(f"{k}: {v}" for k, v in self.style.items())
        if self.hidden:
            attrs["hidden"] = ""

        attr_str = "".join(
            f' {name}="{html.escape(value, quote=True)}"' if value != "" else f" {name}"
            for name, value in attrs.items()
        )
        tag = self.tag_name.lower()

        if self.tag_name in _VOID_TAGS:
            return f"<{tag}{attr_str}>"

        inner = "".join(
            html.escape(c) if isinstance(c, str) else c.to_html()
            for c in self.children
        )
        return f"<{tag}{attr_str}>{inner}</{tag}>"


@dataclass
class Event:
    """A UI event dispatched through the document.

    Attributes:
        type: Event type (focusin, pointerover, pointerout)
        target: Element the event is aimed at
        related_target: For pointerout, the element the pointer moved to
    """
    type: str
    target: Optional[Element] = None
    related_target: Optional[Element] = None


EventHandler = Callable[[Event], None]


class Document:
    """Root of an element tree plus its global event listeners.

    Example:
        doc = Document()
        doc.body.append_child(Element("p", children=["Hello"]))
    """

    def __init__(self, with_main: bool = True) -> None:
        self.document_element = Element("html")
        self.head = Element("head")
        self.body = Element("body")
        self.document_element.append_child(self.head)
        self.document_element.append_child(self.body)

        self.main: Optional[Element] = None
        if with_main:
            self.main = Element("main", {"id": "main-content", "role": "main"})
            self.body.append_child(self.main)

        self._listeners: dict[str, list[EventHandler]] = {}

    def create_element(
        self,
        tag: str,
        attributes: Optional[dict[str, str]] = None,
        children: Optional[list[Union[Element, str]]] = None,
    ) -> Element:
        return Element(tag, attributes, children)

    def get_element_by_id(self, element_id: str) -> Optional[Element]:
        for el in self.document_element.iter_descendants():
            if el.id == element_id:
                return el
        return None

    def add_event_listener(self, event_type: str, handler: EventHandler) -> None:
        handlers = self._listeners.setdefault(event_type, [])
        if handler not in handlers:
            handlers.append(handler)

    def remove_event_listener(self, event_type: str, handler: EventHandler) -> None:
        handlers = self._listeners.get(event_type, [])
        if handler in handlers:
            handlers.remove(handler)

    def listener_count(self, event_type: Optional[str] = None) -> int:
        """Number of registered handlers, for one type or all."""
        if event_type is not None:
            return len(self._listeners.get(event_type, []))
        return sum(len(h) for h in self._listeners.values())

    def dispatch_event(self, event: Event) -> None:
        """Run every handler registered for the event's type, in order."""
        for handler in list(self._listeners.get(event.type, [])):
            handler(event)

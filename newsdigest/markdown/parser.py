"""HTML parsing: raw markup into an immutable :class:`Element` tree.

BeautifulSoup does the tokenising; this module only converts the soup into
the engine's own node types.  Every walk here is iterative so that markup
nested thousands of levels deep cannot exhaust the interpreter stack.
"""

from __future__ import annotations

import logging
from typing import Iterator, Optional, Union

from bs4 import BeautifulSoup, NavigableString, ParserRejectedMarkup, Tag
from bs4.element import (
    CData,
    Comment,
    Declaration,
    Doctype,
    ProcessingInstruction,
)

from newsdigest.markdown.models import Element, Node, Text

logger = logging.getLogger(__name__)

DOCUMENT_TAG = "[document]"

# NavigableString subclasses that never carry document text.
_NON_TEXT_STRINGS = (Comment, CData, Declaration, Doctype, ProcessingInstruction)


class HtmlParseError(ValueError):
    """Raised when markup cannot be turned into a node tree."""


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

def _attributes(tag: Tag) -> dict[str, str]:
    attrs: dict[str, str] = {}
    for name, value in tag.attrs.items():
        if isinstance(value, (list, tuple)):
            value = " ".join(value)
        attrs[name.lower()] = "" if value is None else str(value)
    return attrs


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def tree_from_soup(tag: Tag) -> Element:
    """Convert a BeautifulSoup tag (or whole soup) into an :class:`Element`.

    Builds bottom-up with an explicit stack of frames; each frame holds the
    source tag, an iterator over its contents and the converted children
    collected so far.
    """
    frames: list[tuple[Tag, Iterator, list[Node]]] = [(tag, iter(tag.contents), [])]

    while True:
        source, pending, converted = frames[-1]
        child = next(pending, None)

        if child is None:
            frames.pop()
            element = Element(
                tag=source.name or DOCUMENT_TAG,
                attributes=_attributes(source),
                children=tuple(converted),
            )
            if not frames:
                return element
            frames[-1][2].append(element)
        elif isinstance(child, Tag):
            frames.append((child, iter(child.contents), []))
        elif isinstance(child, NavigableString) and not isinstance(child, _NON_TEXT_STRINGS):
            converted.append(Text(str(child)))


def parse_soup(html: Union[str, bytes]) -> BeautifulSoup:
    """Parse *html* with the ``html.parser`` builder.

    Raises:
        HtmlParseError: If *html* is not ``str``/``bytes`` or the parser
            rejects the markup.
    """
    if not isinstance(html, (str, bytes)):
        raise HtmlParseError(f"expected str or bytes, got {type(html).__name__}")

    try:
        soup = BeautifulSoup(html, "html.parser")
    except ParserRejectedMarkup as exc:
        logger.debug("html.parser rejected %d bytes of markup: %s", len(html), exc)
        raise HtmlParseError(f"parse failed: {exc}") from exc

    return soup


def parse_html(html: Union[str, bytes]) -> Element:
    """Parse *html* and return the document root, an :class:`Element`
    tagged ``"[document]"``.

    Raises:
        HtmlParseError: See :func:`parse_soup`.
    """
    return tree_from_soup(parse_soup(html))


def iter_elements(root: Element) -> Iterator[Element]:
    """Yield *root* and every descendant element in document order."""
    stack: list[Element] = [root]
    while stack:
        element = stack.pop()
        yield element
        stack.extend(
            child for child in reversed(element.children) if isinstance(child, Element)
        )


def find_first(root: Element, tag: str) -> Optional[Element]:
    """Return the first element named *tag* in document order, or ``None``."""
    tag = tag.lower()
    for element in iter_elements(root):
        if element.tag == tag:
            return element
    return None


def find_body(root: Element) -> Element:
    """Return the ``body`` element when present, else *root* itself."""
    return find_first(root, "body") or root


def text_content(node: Node) -> str:
    """Concatenate the text of every descendant text node, untrimmed."""
    if isinstance(node, Text):
        return node.value

    parts: list[str] = []
    stack: list[Node] = [node]
    while stack:
        current = stack.pop()
        if isinstance(current, Text):
            parts.append(current.value)
        else:
            stack.extend(reversed(current.children))
    return "".join(parts)

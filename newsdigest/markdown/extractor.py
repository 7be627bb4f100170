"""Structured extractor: walks a node tree and emits markdown fragments.

Every element is mapped to a :class:`TagCategory` first and the walk
dispatches on that category.  Unknown tags fall into ``OTHER`` and are
treated as transparent, so unusual markup loses formatting, never text.

The walk is recursive with an explicit depth counter.  Nodes deeper than
``budget.max_depth`` contribute nothing.
"""

from __future__ import annotations

from newsdigest.markdown.models import (
    DEFAULT_BUDGET,
    Element,
    ExtractionBudget,
    Node,
    TagCategory,
    Text,
)
from newsdigest.markdown.parser import text_content

HEADING_TAGS = {"h1": 1, "h2": 2, "h3": 3, "h4": 4, "h5": 5, "h6": 6}

CONTAINER_TAGS = frozenset(
    {
        "ul",
        "ol",
        "div",
        "section",
        "blockquote",
        "cite",
        "strong",
        "em",
        "span",
        "article",
        "main",
    }
)


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

def _is_external_href(href: str) -> bool:
    href = href.strip()
    if not href or href.startswith("#"):
        return False
    return not href.lower().startswith("javascript:")


def _code_text(pre: Element) -> str:
    """Text of the outermost ``code`` elements inside *pre*, else of *pre*."""
    blocks: list[str] = []
    stack: list[Element] = [
        child for child in reversed(pre.children) if isinstance(child, Element)
    ]
    while stack:
        element = stack.pop()
        if element.tag == "code":
            blocks.append(text_content(element))
        else:
            stack.extend(
                child for child in reversed(element.children) if isinstance(child, Element)
            )
    return "".join(blocks) or text_content(pre)


def _extract_children(element: Element, budget: ExtractionBudget, depth: int) -> str:
    """Extract the children of *element*, which sits at *depth*.

    Text children share their parent's depth; child elements sit one deeper.
    """
    parts: list[str] = []
    for child in element.children:
        if isinstance(child, Text):
            parts.append(extract(child, budget, depth))
        else:
            parts.append(extract(child, budget, depth + 1))
    return "".join(parts)


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def categorize(element: Element) -> TagCategory:
    """Map *element* to the extraction rule it is handled by."""
    tag = element.tag
    if tag in HEADING_TAGS:
        return TagCategory.HEADING
    if tag == "p":
        return TagCategory.PARAGRAPH
    if tag == "li":
        return TagCategory.LIST_ITEM
    if tag in CONTAINER_TAGS:
        return TagCategory.CONTAINER
    if tag == "a" and element.get("href"):
        return TagCategory.LINK
    if tag == "code":
        return TagCategory.INLINE_CODE
    if tag == "pre":
        return TagCategory.CODE_BLOCK
    return TagCategory.OTHER


def extract(node: Node, budget: ExtractionBudget = DEFAULT_BUDGET, depth: int = 0) -> str:
    """Return the markdown fragment for *node* and everything below it.

    Args:
        node: The node to extract.
        budget: Size and depth limits.
        depth: Depth of *node* relative to the extraction root.  Child
            elements are extracted at ``depth + 1``; text children at
            ``depth``.

    Returns:
        The raw, un-normalized fragment.  Never raises for a well-formed
        tree.
    """
    if depth > budget.max_depth:
        return ""

    if isinstance(node, Text):
        text = node.value.strip()
        if not text or len(text) > budget.max_text_node_length:
            return ""
        return text + " "

    category = categorize(node)

    if category is TagCategory.HEADING:
        level = HEADING_TAGS[node.tag]
        content = _extract_children(node, budget, depth).strip()
        return "\n" + "#" * level + " " + content + "\n\n"

    if category is TagCategory.PARAGRAPH:
        content = _extract_children(node, budget, depth).strip()
        return content + "\n\n" if content else ""

    if category is TagCategory.LIST_ITEM:
        return "- " + _extract_children(node, budget, depth).strip() + "\n"

    if category is TagCategory.LINK:
        href = node.get("href") or ""
        link_text = _extract_children(node, budget, depth).strip()
        if _is_external_href(href):
            return f"[{link_text}]({href.strip()}) "
        return link_text + " "

    if category is TagCategory.INLINE_CODE:
        return "`" + text_content(node) + "` "

    if category is TagCategory.CODE_BLOCK:
        code = _code_text(node).strip()
        if len(code) >= budget.max_code_block_length:
            return ""
        body = code + "\n" if code else ""
        return "```\n" + body + "```\n\n"

    # CONTAINER and OTHER are both transparent.
    return _extract_children(node, budget, depth)

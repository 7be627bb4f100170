"""Noise filter: drops subtrees that never carry article content."""

from __future__ import annotations

from typing import Iterator

from newsdigest.markdown.models import Element, Node, Text

NOISE_TAGS = frozenset(
    {"script", "style", "noscript", "nav", "header", "footer", "aside"}
)

# Class tokens / ids marking comment sections, navigation and breadcrumbs.
NOISE_MARKERS = frozenset(
    {"comment", "comments", "navigation", "breadcrumb", "breadcrumbs"}
)


def is_noise(element: Element) -> bool:
    """Return ``True`` when *element* heads a non-content subtree."""
    if element.tag in NOISE_TAGS:
        return True
    if (element.get("id") or "").strip().lower() in NOISE_MARKERS:
        return True
    return any(token.lower() in NOISE_MARKERS for token in element.classes)


def strip_noise(root: Element) -> Element:
    """Return a copy of *root* without any noise subtrees.

    The root itself is always kept.  Subtrees with nothing removed are
    shared with the input rather than copied, so an input without noise
    comes back as the very same object.
    """
    frames: list[tuple[Element, Iterator[Node], list[Node]]] = [
        (root, iter(root.children), [])
    ]

    while True:
        element, pending, kept = frames[-1]
        child = next(pending, None)

        if child is None:
            frames.pop()
            unchanged = len(kept) == len(element.children) and all(
                a is b for a, b in zip(kept, element.children)
            )
            rebuilt = element if unchanged else element.with_children(tuple(kept))
            if not frames:
                return rebuilt
            frames[-1][2].append(rebuilt)
        elif isinstance(child, Text):
            kept.append(child)
        elif not is_noise(child):
            frames.append((child, iter(child.children), []))

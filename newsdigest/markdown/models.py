"""Data models for the markdown extraction engine.

The node tree is immutable: the parser builds it once, the noise filter
returns a new tree sharing untouched subtrees, and the extractor only reads.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Mapping, Optional, Union

# Deepest walk an ExtractionBudget may request.  Each level of the
# extractor costs two interpreter frames.
MAX_DEPTH_LIMIT = 200


@dataclass(frozen=True)
class Text:
    """A text fragment of the parsed document."""

    value: str


@dataclass(frozen=True)
class Element:
    """A parsed HTML element.

    ``tag`` is stored lower-cased.  ``attributes`` is a read-only mapping;
    multi-valued attributes such as ``class`` are joined with a space.
    """

    tag: str
    attributes: Mapping[str, str] = field(default_factory=dict, hash=False)
    children: tuple[Node, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "tag", self.tag.lower())
        if not isinstance(self.attributes, MappingProxyType):
            object.__setattr__(self, "attributes", MappingProxyType(dict(self.attributes)))
        if not isinstance(self.children, tuple):
            object.__setattr__(self, "children", tuple(self.children))

    def get(self, name: str) -> Optional[str]:
        """Return the attribute *name*, or ``None`` when it is absent."""
        return self.attributes.get(name)

    @property
    def classes(self) -> list[str]:
        return (self.attributes.get("class") or "").split()

    def with_children(self, children: tuple[Node, ...]) -> Element:
        return replace(self, children=children)


Node = Union[Text, Element]


class TagCategory(enum.Enum):
    """Closed set of extraction rules an element can dispatch to."""

    HEADING = "heading"
    PARAGRAPH = "paragraph"
    LIST_ITEM = "list_item"
    CONTAINER = "container"
    LINK = "link"
    INLINE_CODE = "inline_code"
    CODE_BLOCK = "code_block"
    OTHER = "other"


@dataclass(frozen=True)
class ExtractionBudget:
    """Limits bounding recursion depth and emitted text size.

    Attributes:
        max_depth: Nodes deeper than this are skipped entirely.
        max_text_node_length: Text nodes longer than this (after trimming)
            are dropped, not truncated.
        max_code_block_length: ``pre`` blocks at or over this length are
            dropped.
        max_output_line_length: Output lines longer than this are dropped
            by the normalizer.
    """

    max_depth: int = 50
    max_text_node_length: int = 10_000
    max_code_block_length: int = 50_000
    max_output_line_length: int = 50_000

    def __post_init__(self) -> None:
        for name in (
            "max_depth",
            "max_text_node_length",
            "max_code_block_length",
            "max_output_line_length",
        ):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
                raise ValueError(f"{name} must be a positive integer, got {value!r}")
        if self.max_depth > MAX_DEPTH_LIMIT:
            raise ValueError(
                f"max_depth must not exceed {MAX_DEPTH_LIMIT}, got {self.max_depth}"
            )

    def with_overrides(self, **overrides: Optional[int]) -> ExtractionBudget:
        """Return a copy with every non-``None`` keyword applied."""
        return replace(self, **{k: v for k, v in overrides.items() if v is not None})


DEFAULT_BUDGET = ExtractionBudget()

"""Markdown extraction engine — bounded HTML to structured text."""

from newsdigest.markdown.converter import html_to_markdown, tree_to_markdown
from newsdigest.markdown.extractor import categorize, extract
from newsdigest.markdown.models import (
    DEFAULT_BUDGET,
    Element,
    ExtractionBudget,
    Node,
    TagCategory,
    Text,
)
from newsdigest.markdown.noise import is_noise, strip_noise
from newsdigest.markdown.normalizer import normalize
from newsdigest.markdown.parser import HtmlParseError, find_body, parse_html, tree_from_soup

__all__ = [
    "html_to_markdown",
    "tree_to_markdown",
    "categorize",
    "extract",
    "normalize",
    "is_noise",
    "strip_noise",
    "parse_html",
    "tree_from_soup",
    "find_body",
    "HtmlParseError",
    "DEFAULT_BUDGET",
    "Element",
    "ExtractionBudget",
    "Node",
    "TagCategory",
    "Text",
]

"""HTML to markdown pipeline.

    parse -> body -> strip noise -> extract -> normalize

Each stage is pure; the only side effect here is debug logging.
"""

from __future__ import annotations

import logging
from typing import Optional, Union

from newsdigest.config import settings
from newsdigest.markdown.extractor import extract
from newsdigest.markdown.models import Element, ExtractionBudget
from newsdigest.markdown.noise import strip_noise
from newsdigest.markdown.normalizer import normalize
from newsdigest.markdown.parser import find_body, parse_html

logger = logging.getLogger(__name__)


def tree_to_markdown(root: Element, budget: Optional[ExtractionBudget] = None) -> str:
    """Convert an already-parsed tree rooted at *root* into a document.

    Args:
        root: Extraction root.  Its noise subtrees are filtered out first.
        budget: Limits to apply.  Defaults to ``settings.extraction_budget()``.

    Returns:
        The normalized document; ``""`` when nothing usable remains.
    """
    budget = budget or settings.extraction_budget()
    filtered = strip_noise(root)
    return normalize(extract(filtered, budget), budget)


def html_to_markdown(
    html: Union[str, bytes],
    budget: Optional[ExtractionBudget] = None,
) -> str:
    """Convert raw *html* into a markdown document.

    Extraction starts at ``<body>`` when the document has one, else at the
    document root.

    Raises:
        HtmlParseError: If the markup cannot be parsed.  Nothing is
            extracted in that case.
    """
    root = parse_html(html)
    document = tree_to_markdown(find_body(root), budget)
    logger.debug("Converted %d chars of HTML into %d chars of markdown", len(html), len(document))
    return document

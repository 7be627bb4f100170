"""Text normalizer: turns the raw fragment stream into the final document."""

from __future__ import annotations

import re

from newsdigest.markdown.models import DEFAULT_BUDGET, ExtractionBudget

_BLANK_RUN = re.compile(r"\n{3,}")


def normalize(raw_text: str, budget: ExtractionBudget = DEFAULT_BUDGET) -> str:
    """Normalize extractor output into a document.

    Each line is trimmed and lines longer than
    ``budget.max_output_line_length`` are dropped.  Empty lines never carry
    content; a run of them collapses to a single blank line between content
    lines.  The result has no leading or trailing whitespace.

    Normalizing an already-normalized document returns it unchanged.
    """
    lines = [line.strip() for line in raw_text.splitlines()]
    kept = [line for line in lines if len(line) <= budget.max_output_line_length]
    return _BLANK_RUN.sub("\n\n", "\n".join(kept)).strip()

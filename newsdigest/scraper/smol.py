"""smol.ai newsletter source: issue listing and issue pages."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Optional

from bs4 import BeautifulSoup, Tag
from pydantic import ValidationError

from newsdigest.markdown import ExtractionBudget, tree_from_soup, tree_to_markdown
from newsdigest.markdown.parser import parse_soup
from newsdigest.scraper.models import RawPage, SmolIssue

logger = logging.getLogger(__name__)

SMOL_BASE_URL = "https://news.smol.ai"

# Tried in order when the page has no ``.content-area``.
CONTENT_SELECTOR = (
    'article, main, [role="main"], .content, .article-content, '
    ".post-content, .entry-content"
)


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

def _parse_date(value: Optional[str]) -> datetime:
    """Parse an ISO-8601 ``datetime`` attribute; fall back to now (UTC)."""
    if value:
        try:
            parsed = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
        except ValueError:
            logger.debug("Unparseable datetime attribute %r", value)
        else:
            if parsed.tzinfo is None:
                parsed = parsed.replace(tzinfo=timezone.utc)
            return parsed
    return datetime.now(timezone.utc)


def _content_area(soup: BeautifulSoup) -> Tag:
    return (
        soup.select_one(".content-area")
        or soup.select_one(CONTENT_SELECTOR)
        or soup.body
        or soup
    )


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def parse_issue_list(html: str, base_url: str = SMOL_BASE_URL) -> list[str]:
    """Return absolute issue URLs from the ``/issues/`` listing page.

    Raises:
        HtmlParseError: If *html* cannot be parsed.
    """
    soup = parse_soup(html)
    prefix = base_url.rstrip("/")
    return [
        prefix + anchor["href"]
        for anchor in soup.select('li a[href^="/issues/"]')
    ]


def parse_issue(
    raw: RawPage,
    budget: Optional[ExtractionBudget] = None,
) -> Optional[SmolIssue]:
    """Convert a fetched issue page into a :class:`SmolIssue`.

    The title comes from the first ``h1``; a page without one yields
    ``None``.  The date comes from the first element carrying a
    ``datetime`` attribute.

    Raises:
        HtmlParseError: If ``raw.html`` cannot be parsed.
    """
    soup = parse_soup(raw.html)

    heading = soup.find("h1")
    title = heading.get_text().strip() if heading else ""
    if not title:
        logger.info("Skipping %s: no title found", raw.url)
        return None

    dated = soup.find(attrs={"datetime": True})
    date = _parse_date(dated.get("datetime") if dated else None)

    markdown = tree_to_markdown(tree_from_soup(_content_area(soup)), budget)

    try:
        return SmolIssue(url=raw.url, date=date, title=title, markdown_content=markdown)
    except ValidationError as exc:
        logger.info("Discarding %s: %s", raw.url, exc)
        return None

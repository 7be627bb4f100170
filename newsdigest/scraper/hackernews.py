"""Hacker News source: front-page story links and linked articles.

Both parsers work on HTML the caller already fetched.
"""

from __future__ import annotations

import logging
from typing import Optional
from urllib.parse import urljoin, urlparse

from pydantic import ValidationError

from newsdigest.config import settings
from newsdigest.markdown import ExtractionBudget, HtmlParseError, html_to_markdown
from newsdigest.markdown.parser import parse_soup
from newsdigest.scraper.models import HackerNewsArticle, RawPage, StoryLink

logger = logging.getLogger(__name__)

HN_FRONT_PAGE = "https://news.ycombinator.com/"
HN_HOST = "news.ycombinator.com"


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

def _extract_domain(url: str) -> Optional[str]:
    """Return the hostname of *url*, or ``None`` when it has none."""
    try:
        return urlparse(url).hostname or None
    except ValueError:
        return None


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def is_usable(markdown: str, min_length: Optional[int] = None) -> bool:
    """Return ``True`` when *markdown* is long enough to count as content.

    Args:
        markdown: A converted document.
        min_length: Minimum number of characters.  Defaults to
            ``settings.min_content_length``.
    """
    threshold = settings.min_content_length if min_length is None else min_length
    return len(markdown) >= threshold


def parse_front_page(html: str, page_url: str = HN_FRONT_PAGE) -> list[StoryLink]:
    """Return the external story links on a Hacker News listing page.

    Relative hrefs are resolved against *page_url*.  Links pointing back
    into Hacker News (Ask HN, job posts, ...) are skipped.

    Raises:
        HtmlParseError: If *html* cannot be parsed.
    """
    soup = parse_soup(html)
    links: list[StoryLink] = []

    for anchor in soup.select(".titleline > a"):
        href = (anchor.get("href") or "").strip()
        title = anchor.get_text().strip()
        if not href or not title:
            continue

        url = urljoin(page_url, href)
        if HN_HOST in url:
            continue

        try:
            links.append(StoryLink(title=title, url=url, hn_url=page_url))
        except ValidationError:
            logger.debug("Skipping story %r with unusable URL %r", title, url)

    logger.info("Found %d story links on %s", len(links), page_url)
    return links


def parse_article(
    raw: RawPage,
    title: str,
    hn_url: str,
    budget: Optional[ExtractionBudget] = None,
) -> Optional[HackerNewsArticle]:
    """Convert a fetched article page into a :class:`HackerNewsArticle`.

    Returns ``None`` (never raises) when the page cannot be parsed, its
    markdown is too short to be real content, or the result fails
    validation.
    """
    try:
        markdown = html_to_markdown(raw.html, budget)
    except HtmlParseError as exc:
        logger.info("Could not parse %s: %s", raw.url, exc)
        return None

    if not is_usable(markdown):
        logger.info("Discarding %s: only %d chars of content", raw.url, len(markdown))
        return None

    try:
        return HackerNewsArticle(
            url=raw.url,
            hn_url=hn_url,
            title=title,
            domain=_extract_domain(raw.url),
            markdown_content=markdown,
        )
    except ValidationError as exc:
        logger.info("Discarding %s: %s", raw.url, exc)
        return None

"""Scraper package — source-specific parsers over already-fetched pages."""

from newsdigest.scraper.hackernews import is_usable, parse_article, parse_front_page
from newsdigest.scraper.models import HackerNewsArticle, RawPage, SmolIssue, StoryLink
from newsdigest.scraper.smol import parse_issue, parse_issue_list

__all__ = [
    "parse_front_page",
    "parse_article",
    "parse_issue_list",
    "parse_issue",
    "is_usable",
    "RawPage",
    "StoryLink",
    "HackerNewsArticle",
    "SmolIssue",
]

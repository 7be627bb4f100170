"""Data models for the source parsers."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, HttpUrl


@dataclass
class RawPage:
    """An already-fetched HTML page handed to a source parser."""

    url: str
    html: str


class StoryLink(BaseModel):
    """One story on the Hacker News front page."""

    title: str
    url: HttpUrl
    hn_url: HttpUrl


class HackerNewsArticle(BaseModel):
    """An article linked from Hacker News, converted to markdown."""

    url: HttpUrl
    hn_url: HttpUrl
    title: str
    domain: Optional[str] = None
    markdown_content: str


class SmolIssue(BaseModel):
    """A smol.ai newsletter issue, converted to markdown."""

    url: HttpUrl
    date: datetime
    title: str
    markdown_content: str

"""
Data models for the SiteFetch crawler.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict


@dataclass(slots=True)
class RawPage:
    """Validated HTML body and the final URL it was served from (after redirects)."""

    url: str
    html: str


@dataclass(slots=True)
class Article:
    """Output of the main-content heuristic: title and the article HTML fragment."""

    title: str
    html: str


@dataclass(slots=True)
class ExtractedArticle:
    """Article converted to Markdown, with its token count."""

    title: str
    html: str
    content: str
    token_count: int


@dataclass(slots=True)
class Page:
    """One successfully extracted document."""

    title: str
    url: str
    content: str
    token_count: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "title": self.title,
            "url": self.url,
            "content": self.content,
            "tokenCount": self.token_count,
        }

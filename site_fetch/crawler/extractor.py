"""Content extraction: main article HTML -> Markdown -> token count."""

from __future__ import annotations

from typing import Callable, Optional

from bs4 import BeautifulSoup
from markdownify import markdownify
from readability import Document
from readability.readability import Unparseable

from site_fetch.crawler.models import Article, ExtractedArticle
from site_fetch.crawler.tokens import TokenCounter
from site_fetch.logger import get_logger

ArticleParser = Callable[[str, str], Optional[Article]]
Converter = Callable[[str], str]
Counter = Callable[[str], int]

logger = get_logger("extractor")


# ---------------------------------------------------------------------------
# Default building blocks
# ---------------------------------------------------------------------------

def readability_article(html: str, url: str) -> Optional[Article]:
    """Isolate the main article with readability-lxml.

    Returns ``None`` when the document cannot be parsed or the extracted
    fragment carries no text.
    """
    try:
        doc = Document(html, url=url)
        fragment = doc.summary(html_partial=True)
        title = doc.title()
    except Unparseable as exc:
        logger.debug("Readability could not parse %s: %s", url, exc)
        return None

    if not BeautifulSoup(fragment, "html.parser").get_text(strip=True):
        return None
    return Article(title=title, html=fragment)


def to_markdown(fragment: str) -> str:
    """Convert an HTML fragment to Markdown (ATX headings, fenced code)."""
    return markdownify(fragment, heading_style="ATX", bullets="-").strip()


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

class ContentExtractor:
    """Turns raw page HTML into an :class:`ExtractedArticle`.

    The heuristic, the converter and the token counter are injectable so
    callers (and tests) can swap any of them.
    """

    def __init__(
        self,
        article_parser: ArticleParser = readability_article,
        token_counter: Optional[Counter] = None,
        converter: Converter = to_markdown,
    ) -> None:
        self.article_parser = article_parser
        self.token_counter: Counter = token_counter if token_counter is not None else TokenCounter()
        self.converter = converter

    def extract(self, html: str, url: str) -> Optional[ExtractedArticle]:
        article = self.article_parser(html, url)
        if article is None:
            return None
        content = self.converter(article.html)
        return ExtractedArticle(
            title=article.title,
            html=article.html,
            content=content,
            token_count=self.token_counter(content),
        )

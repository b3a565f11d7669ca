"""
Per-page document rendering used before link discovery and extraction.

Only a static parse is performed: non-content elements are removed and the
task yields once to the event loop as a best-effort settle step. Links that
a page would add only after running its own scripts are not seen.
"""
from __future__ import annotations

import asyncio
from contextlib import asynccontextmanager
from typing import AsyncContextManager, AsyncIterator, Protocol

from bs4 import BeautifulSoup

NON_CONTENT_TAGS = ("script", "style", "link")


def strip_non_content(soup: BeautifulSoup) -> BeautifulSoup:
    """Remove script, style and link elements in place."""
    for tag in soup(list(NON_CONTENT_TAGS)):
        tag.decompose()
    return soup


class RenderedDocument:
    """Sanitized parse tree of one page; released by :meth:`close`."""

    def __init__(self, soup: BeautifulSoup, url: str) -> None:
        self.soup = soup
        self.url = url
        self.closed = False

    @property
    def html(self) -> str:
        if self.closed:
            raise RuntimeError("document is closed")
        return str(self.soup)

    def close(self) -> None:
        if not self.closed:
            self.soup.decompose()
            self.closed = True


class Renderer(Protocol):
    def open(self, html: str, url: str) -> AsyncContextManager[RenderedDocument]:
        ...


class StaticRenderer:
    """Default renderer: BeautifulSoup parse, no script execution."""

    parser = "html.parser"

    @asynccontextmanager
    async def open(self, html: str, url: str) -> AsyncIterator[RenderedDocument]:
        document = RenderedDocument(strip_non_content(BeautifulSoup(html, self.parser)), url)
        try:
            await asyncio.sleep(0)
            yield document
        finally:
            document.close()

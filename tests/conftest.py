# File: tests/conftest.py
from __future__ import annotations

import asyncio
from collections.abc import AsyncIterator, Awaitable, Callable
from typing import Dict, Optional, Union

import pytest
import pytest_asyncio
from aiohttp import ClientConnectionError, web
from bs4 import BeautifulSoup

from site_fetch.crawler.extractor import ContentExtractor
from site_fetch.crawler.models import Article, RawPage
from site_fetch.crawler.urls import url_path


def word_count(text: str) -> int:
    return len(text.split())


def article_from_tag(html: str, url: str) -> Optional[Article]:
    """Treat the first <article> element as the main content."""
    soup = BeautifulSoup(html, "html.parser")
    article = soup.find("article")
    if article is None:
        return None
    title = soup.title.get_text(strip=True) if soup.title else ""
    return Article(title=title, html=article.decode_contents())


@pytest.fixture()
def fake_extractor() -> ContentExtractor:
    """
    Extractor without readability/tiktoken: <article> is the content,
    whitespace-separated words are the tokens.
    """
    return ContentExtractor(article_parser=article_from_tag, token_counter=word_count)


@pytest_asyncio.fixture
async def make_server() -> AsyncIterator[Callable[[web.Application], Awaitable[str]]]:
    """Start aiohttp apps on ephemeral ports, yield a starter returning the base URL."""
    runners: list[web.AppRunner] = []

    async def _start(app: web.Application) -> str:
        runner = web.AppRunner(app)
        await runner.setup()
        runners.append(runner)
        site = web.TCPSite(runner, "127.0.0.1", 0)
        await site.start()
        port = runner.addresses[0][1]
        return f"http://127.0.0.1:{port}"

    yield _start
    for runner in runners:
        await runner.cleanup()


Response = Union[str, None, Exception]


class FakeFetcher:
    """
    Stand-in for Fetcher keyed by path.

    A str value is served as HTML, None is a rejection, an exception is raised.
    Unknown paths are rejections. Every call is counted per path.
    """

    def __init__(self, base: str, responses: Dict[str, Response], delay: float = 0.0) -> None:
        self.base = base.rstrip("/")
        self.responses = responses
        self.delay = delay
        self.calls: Dict[str, int] = {}
        self.active = 0
        self.max_active = 0

    async def fetch(self, url: str) -> Optional[RawPage]:
        path = url_path(url)
        self.calls[path] = self.calls.get(path, 0) + 1
        self.active += 1
        self.max_active = max(self.max_active, self.active)
        try:
            if self.delay:
                await asyncio.sleep(self.delay)
            response = self.responses.get(path)
            if isinstance(response, Exception):
                raise response
            if response is None:
                return None
            return RawPage(url=url, html=response)
        finally:
            self.active -= 1


@pytest.fixture()
def connection_error() -> Exception:
    return ClientConnectionError("connection reset")

from __future__ import annotations

import asyncio
import time
from functools import partial
from typing import Dict, Optional

from aiohttp import ClientError, ClientSession, ClientTimeout

from site_fetch.config import FetchConfig
from site_fetch.crawler.extractor import ContentExtractor
from site_fetch.crawler.fetcher import Fetcher
from site_fetch.crawler.link_extractor import discover_links
from site_fetch.crawler.models import Page
from site_fetch.crawler.render import Renderer, StaticRenderer
from site_fetch.crawler.scheduler import TaskQueue
from site_fetch.crawler.state import CrawlState
from site_fetch.crawler.urls import url_path
from site_fetch.logger import get_logger

__all__ = ("SiteCrawler",)


class SiteCrawler:
    """Асинхронный обход одного хоста с извлечением основного текста страниц."""

    def __init__(
        self,
        config: FetchConfig,
        *,
        extractor: Optional[ContentExtractor] = None,
        renderer: Optional[Renderer] = None,
    ) -> None:
        self.config = config
        self.extractor = extractor if extractor is not None else ContentExtractor()
        self.renderer: Renderer = renderer if renderer is not None else StaticRenderer()
        self.session: Optional[ClientSession] = None
        self.fetcher: Optional[Fetcher] = None
        self.state = CrawlState()
        self.queue = TaskQueue(config.concurrency)
        self.logger = get_logger("crawler")

    async def __aenter__(self) -> SiteCrawler:
        self.session = ClientSession(
            timeout=ClientTimeout(total=self.config.timeout),
            raise_for_status=False,
        )
        self.fetcher = Fetcher(self.session)
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        if self.session and not self.session.closed:
            await self.session.close()

    async def crawl(self) -> Dict[str, Page]:
        """Обходит сайт от base_url; возвращает страницы, ключ — путь URL."""
        if self.fetcher is None:
            raise RuntimeError("Session not initialized")
        seed = str(self.config.base_url)
        self.logger.info("Старт обхода: %s (concurrency=%d)", seed, self.config.concurrency)
        start = time.monotonic()
        self.state = CrawlState()
        self.submit(seed)
        await self.queue.run_until_idle()
        duration = time.monotonic() - start
        tokens = sum(page.token_count for page in self.state.pages.values())
        self.logger.info(
            "Завершено: %d страниц из %d путей, %d токенов за %.2f с",
            len(self.state.pages), len(self.state.visited), tokens, duration,
        )
        return self.state.pages

    def submit(self, url: str) -> None:
        self.queue.submit(partial(self._process, url))

    async def _process(self, url: str) -> None:
        path = url_path(url)
        if not self.state.mark_visited(path):
            return
        self.logger.info("Fetching %s", url)
        try:
            raw = await self.fetcher.fetch(url)
        except (ClientError, asyncio.TimeoutError, UnicodeDecodeError) as exc:
            self.logger.warning("Failed to fetch %s: %s", url, str(exc) or type(exc).__name__)
            return
        if raw is None:
            return

        async with self.renderer.open(raw.html, raw.url) as document:
            links = discover_links(document.soup, raw.url)
            article = self.extractor.extract(document.html, raw.url)

        # ссылки обходятся даже если сама страница не статья
        for link in sorted(links):
            self.submit(link)

        if article is None:
            self.logger.warning("No article found: %s", url)
            return

        self.state.store(
            path,
            Page(
                title=article.title,
                url=raw.url,
                content=article.content,
                token_count=article.token_count,
            ),
        )

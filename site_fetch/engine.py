"""site_fetch.engine: точка запуска обхода для CLI и библиотечного использования."""

from __future__ import annotations

import asyncio
from typing import Dict, Optional

from site_fetch.config import FetchConfig
from site_fetch.crawler.crawler import SiteCrawler
from site_fetch.crawler.extractor import ContentExtractor
from site_fetch.crawler.models import Page
from site_fetch.crawler.urls import is_absolute_http_url
from site_fetch.logger import get_logger

__all__ = ["start_crawl", "crawl_site"]

logger = get_logger("engine")


async def start_crawl(
    cfg: FetchConfig,
    extractor: Optional[ContentExtractor] = None,
    crawl_timeout: Optional[float] = None,
) -> Dict[str, Page]:
    """
    Запускает SiteCrawler в контексте и возвращает страницы по путям.

    Parameters
    ----------
    cfg : FetchConfig
        Конфигурация обхода.
    extractor : ContentExtractor, optional
        Замена экстрактора по умолчанию (readability + markdownify + tiktoken).
    crawl_timeout : float, optional
        Ограничение всего обхода (секунд). По истечении обход прерывается,
        а возвращаются страницы, сохранённые до этого момента.
    """
    async with SiteCrawler(cfg, extractor=extractor) as crawler:
        try:
            return await asyncio.wait_for(crawler.crawl(), timeout=crawl_timeout)
        except asyncio.TimeoutError:
            logger.warning(
                "Обход не завершён за %s секунд, сохранено %d страниц",
                crawl_timeout, len(crawler.state.pages),
            )
            return crawler.state.pages


async def crawl_site(
    seed_url: str,
    *,
    concurrency: int = 3,
    timeout: Optional[float] = None,
    crawl_timeout: Optional[float] = None,
    extractor: Optional[ContentExtractor] = None,
) -> Dict[str, Page]:
    """Crawl every same-host page reachable from *seed_url*."""
    if not is_absolute_http_url(seed_url):
        raise ValueError(f"seed URL must be an absolute http(s) URL: {seed_url!r}")
    if concurrency < 1:
        raise ValueError("concurrency must be >= 1")
    cfg = FetchConfig(base_url=seed_url, concurrency=concurrency, timeout=timeout)
    return await start_crawl(cfg, extractor=extractor, crawl_timeout=crawl_timeout)

"""site_fetch.crawler: обход сайта, валидация ответов, извлечение контента."""

from site_fetch.crawler.crawler import SiteCrawler
from site_fetch.crawler.models import Page, RawPage

__all__ = ["SiteCrawler", "Page", "RawPage"]

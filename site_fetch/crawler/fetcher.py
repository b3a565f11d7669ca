"""
Fetcher module: one GET per URL plus response validation.
"""
from __future__ import annotations

from typing import Final, Optional

from aiohttp import ClientSession

from site_fetch.crawler.models import RawPage
from site_fetch.crawler.urls import same_host
from site_fetch.logger import get_logger

USER_AGENT: Final[str] = (
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/131.0.0.0 Safari/537.36"
)
DEFAULT_HEADERS: Final[dict[str, str]] = {"User-Agent": USER_AGENT}


class Fetcher:
    """Fetches HTML pages and rejects anything that is not same-host HTML."""

    def __init__(self, session: ClientSession) -> None:
        self.session = session
        self.logger = get_logger("fetcher")

    async def fetch(self, url: str) -> Optional[RawPage]:
        """
        Fetch *url*, following redirects.

        Returns RawPage with the final URL on success, or None when the
        response is rejected (non-2xx status, not text/html, redirected to
        another host). Network errors propagate to the caller.
        """
        async with self.session.get(url, headers=DEFAULT_HEADERS, allow_redirects=True) as resp:
            if not 200 <= resp.status < 300:
                self.logger.warning("Failed to fetch %s: %s %s", url, resp.status, resp.reason or "")
                return None

            ctype = resp.headers.get("Content-Type", "").lower()
            if "text/html" not in ctype:
                self.logger.warning("Not a HTML page: %s (%s)", url, ctype or "no content-type")
                return None

            final_url = str(resp.url)
            if not same_host(final_url, url):
                self.logger.warning("Redirected to other site: %s -> %s", url, final_url)
                return None

            html = await resp.text(errors="replace")
            return RawPage(url=final_url, html=html)

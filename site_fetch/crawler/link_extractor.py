"""
Same-host link discovery for SiteFetch.
"""
from __future__ import annotations

from typing import Set, Union
from urllib.parse import urldefrag, urljoin

from bs4 import BeautifulSoup
from bs4.element import Tag

from site_fetch.crawler.render import strip_non_content
from site_fetch.crawler.urls import is_absolute_http_url, same_host


def discover_links(html: Union[str, BeautifulSoup], base_url: str) -> Set[str]:
    """
    Return absolute http(s) URLs of every anchor on the same host as *base_url*.

    Relative, host-relative and protocol-relative hrefs are resolved against
    *base_url*; fragments are dropped. Hrefs that cannot be resolved are
    skipped silently.
    """
    if isinstance(html, BeautifulSoup):
        soup = html
    else:
        soup = strip_non_content(BeautifulSoup(html, "html.parser"))

    links: Set[str] = set()
    for tag in soup.find_all("a", href=True):
        if not isinstance(tag, Tag):
            continue
        href_val = tag.get("href")
        if not isinstance(href_val, str):
            continue
        raw = href_val.strip()
        if not raw:
            continue
        try:
            absolute = urldefrag(urljoin(base_url, raw)).url
        except ValueError:
            continue
        if is_absolute_http_url(absolute) and same_host(absolute, base_url):
            links.add(absolute)
    return links

"""
URL helpers shared by the fetcher, the link discoverer and the crawler.
"""
from __future__ import annotations

from typing import Optional, Tuple
from urllib.parse import urlsplit

_DEFAULT_PORTS = {"http": 80, "https": 443}

HostKey = Tuple[str, Optional[int]]


def host_key(url: str) -> Optional[HostKey]:
    """
    Return ``(hostname, port)`` for *url*, or None when it has no host.

    Hostnames are lowercased and default ports dropped, so
    ``http://Example.com:80/`` and ``http://example.com/`` share a key.
    Raises ValueError for malformed URLs (e.g. a non-numeric port).
    """
    parts = urlsplit(url)
    hostname = parts.hostname
    if not hostname:
        return None
    port = parts.port
    if port is not None and port == _DEFAULT_PORTS.get(parts.scheme.lower()):
        port = None
    return hostname, port


def same_host(url: str, other: str) -> bool:
    """True when both URLs parse and point at the same host and port."""
    try:
        key = host_key(url)
        return key is not None and key == host_key(other)
    except ValueError:
        return False


def url_path(url: str) -> str:
    """Dedup key of a URL: its path only, query and fragment ignored."""
    return urlsplit(url).path or "/"


def is_absolute_http_url(url: str) -> bool:
    parts = urlsplit(url)
    return parts.scheme.lower() in ("http", "https") and bool(parts.netloc)

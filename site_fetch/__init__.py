"""
SiteFetch package initializer.
Defines package version and exposes the crawl API.

The click entry point lives in :mod:`site_fetch.cli`.
"""
__version__ = "0.1.0"

from site_fetch.engine import crawl_site, start_crawl

__all__ = ["__version__", "crawl_site", "start_crawl"]

"""
Per-crawl storage: the set of visited paths and the extracted pages.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Set

from site_fetch.crawler.models import Page


@dataclass
class CrawlState:
    """Visited paths and stored pages of a single crawl; never persisted."""

    visited: Set[str] = field(default_factory=set)
    pages: Dict[str, Page] = field(default_factory=dict)

    def mark_visited(self, path: str) -> bool:
        """
        Record *path* as selected for fetching.

        Returns False if it was already visited. Test and insert happen
        without any await in between, so two tasks can never both win.
        """
        if path in self.visited:
            return False
        self.visited.add(path)
        return True

    def store(self, path: str, page: Page) -> None:
        if path not in self.visited:
            raise KeyError(f"cannot store page for unvisited path {path!r}")
        self.pages[path] = page

    def __len__(self) -> int:
        return len(self.pages)

"""site_fetch.report: сериализация результатов обхода (JSON и текст)."""

from __future__ import annotations

from pathlib import Path
from typing import Mapping, Union

from site_fetch.crawler.models import Page
from site_fetch.report.json_report import render_json
from site_fetch.report.text_report import render_text

_RENDERERS = {
    "json": render_json,
    "text": render_text,
}


def serialize_pages(pages: Mapping[str, Page], fmt: str) -> str:
    """Сериализует pages в формате fmt ("json" или "text")."""
    try:
        renderer = _RENDERERS[fmt]
    except KeyError:
        raise ValueError(f"Неизвестный формат вывода: {fmt!r}") from None
    return renderer(pages)


def save_report(pages: Mapping[str, Page], fmt: str, path: Union[str, Path]) -> Path:
    """Сохраняет сериализованные страницы в файл, создавая каталоги."""
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    p.write_text(serialize_pages(pages, fmt), encoding="utf-8")
    return p


def total_tokens(pages: Mapping[str, Page]) -> int:
    return sum(page.token_count for page in pages.values())


__all__ = ["serialize_pages", "save_report", "total_tokens", "render_json", "render_text"]

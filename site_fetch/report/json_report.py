# site_fetch/report/json_report.py

"""
JSON-сериализация страниц SiteFetch.
"""
import json
from typing import Mapping

from site_fetch.crawler.models import Page


def render_json(pages: Mapping[str, Page]) -> str:
    """
    Возвращает компактный JSON-массив объектов {title, url, content, tokenCount}
    в порядке обхода словаря pages.
    """
    return json.dumps(
        [page.to_dict() for page in pages.values()],
        ensure_ascii=False,
        separators=(",", ":"),
    )

"""site_fetch.report.text_report: текстовый вывод страниц через Jinja2.

Поля подставляются как есть, без экранирования: содержимое со строками
``</title>``, ``</url>`` или ``</content>`` ломает разметку блока.
"""

from __future__ import annotations

from typing import Mapping

from jinja2 import Environment

from site_fetch.crawler.models import Page

PAGE_TEMPLATE = """<page>
  <title>{{ page.title }}</title>
  <url>{{ page.url }}</url>
  <content>{{ page.content }}</content>
</page>"""

_env = Environment(autoescape=False, keep_trailing_newline=False)
_template = _env.from_string(PAGE_TEMPLATE)


def render_text(pages: Mapping[str, Page]) -> str:
    """Рендерит каждую страницу в блок <page> и соединяет блоки пустой строкой."""
    return "\n\n".join(_template.render(page=page).strip() for page in pages.values())

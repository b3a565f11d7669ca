import json

import pytest

from site_fetch.crawler.models import Page
from site_fetch.report import save_report, serialize_pages, total_tokens


@pytest.fixture()
def pages():
    return {
        "/": Page(title="Главная", url="http://example.com/", content="# Hi\n\nWorld", token_count=4),
        "/b": Page(title="B", url="http://example.com/b", content="Body", token_count=1),
    }


def test_json_single_page():
    result = serialize_pages({"/": Page(title="T", url="U", content="C", token_count=3)}, "json")
    assert result == '[{"title":"T","url":"U","content":"C","tokenCount":3}]'
    assert json.loads(result) == [{"title": "T", "url": "U", "content": "C", "tokenCount": 3}]


def test_json_keeps_order_and_unicode(pages):
    result = serialize_pages(pages, "json")
    assert "Главная" in result
    assert [item["url"] for item in json.loads(result)] == ["http://example.com/", "http://example.com/b"]


def test_text_blocks(pages):
    expected = (
        "<page>\n"
        "  <title>Главная</title>\n"
        "  <url>http://example.com/</url>\n"
        "  <content># Hi\n\nWorld</content>\n"
        "</page>\n"
        "\n"
        "<page>\n"
        "  <title>B</title>\n"
        "  <url>http://example.com/b</url>\n"
        "  <content>Body</content>\n"
        "</page>"
    )
    assert serialize_pages(pages, "text") == expected


def test_text_is_not_escaped():
    page = Page(title="a < b & c", url="http://example.com/?a=1&b=2", content="x </content> y", token_count=1)
    result = serialize_pages({"/": page}, "text")
    assert "<title>a < b & c</title>" in result
    assert "<content>x </content> y</content>" in result


def test_empty_pages():
    assert serialize_pages({}, "json") == "[]"
    assert serialize_pages({}, "text") == ""


def test_unknown_format(pages):
    with pytest.raises(ValueError):
        serialize_pages(pages, "xml")


def test_save_report_creates_directories(tmp_path, pages):
    target = tmp_path / "out" / "site.json"
    saved = save_report(pages, "json", target)
    assert saved == target
    assert len(json.loads(target.read_text(encoding="utf-8"))) == 2


def test_total_tokens(pages):
    assert total_tokens(pages) == 5

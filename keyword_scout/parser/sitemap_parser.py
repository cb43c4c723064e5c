# File: keyword_scout/parser/sitemap_parser.py
"""keyword_scout.parser.sitemap_parser: Модуль для парсинга sitemap.xml и извлечения URL."""

from __future__ import annotations

from typing import List, Union

from lxml import etree

__all__ = ["SitemapParseError", "parse_sitemap"]


class SitemapParseError(ValueError):
    """Документ не является корректным sitemap со структурой urlset/url/loc."""


def parse_sitemap(xml_content: Union[str, bytes]) -> List[str]:
    """Разбирает XML sitemap и возвращает список URL из ``urlset/url/loc``.

    В отличие от «мягкого» разбора, любая поломка структуры фатальна:
    синтаксическая ошибка XML, корень не ``urlset`` (включая ``sitemapindex``),
    отсутствие ``<url>`` или ``<url>`` без ``<loc>``.

    Args:
        xml_content: содержимое sitemap.xml (str или bytes).

    Returns:
        Список URL в порядке следования в документе.

    Raises:
        SitemapParseError: если документ не соответствует структуре sitemap.

    Пример:
    ```python
    from keyword_scout.parser.sitemap_parser import parse_sitemap

    with open('sitemap.xml', 'rb') as f:
        urls = parse_sitemap(f.read())
    print(urls)
    ```
    """
    data = xml_content.encode("utf-8") if isinstance(xml_content, str) else xml_content
    parser = etree.XMLParser(ns_clean=True, resolve_entities=False, no_network=True)
    try:
        root = etree.fromstring(data, parser=parser)
    except etree.XMLSyntaxError as exc:
        raise SitemapParseError(f"Malformed sitemap XML: {exc}") from exc
    if root is None:
        raise SitemapParseError("Empty sitemap document")

    tag = etree.QName(root).localname
    if tag == "sitemapindex":
        raise SitemapParseError("Sitemap index documents are not supported")
    if tag != "urlset":
        raise SitemapParseError(f"Expected <urlset> root element, got <{tag}>")

    entries = root.findall("{*}url")
    if not entries:
        raise SitemapParseError("Sitemap has no <url> entries")

    urls: List[str] = []
    for entry in entries:
        loc = entry.find("{*}loc")
        if loc is None or not (loc.text or "").strip():
            raise SitemapParseError("Sitemap <url> entry without <loc>")
        urls.append(loc.text.strip())
    return urls

# keyword_scout/parser/__init__.py
from keyword_scout.parser.sitemap_parser import SitemapParseError, parse_sitemap

__all__ = ["SitemapParseError", "parse_sitemap"]

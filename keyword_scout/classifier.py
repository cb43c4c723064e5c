# === FILE: keyword_scout/classifier.py ===
"""Turn sitemap page URLs into candidate marketing phrases.

Each URL path becomes one title-cased phrase (``/plumbing-repair-nj`` ->
``Plumbing Repair NJ``).  Phrases ending with a configured locale
abbreviation go to ``keywords``; other multi-word phrases go to ``phrases``.
"""
from __future__ import annotations

import re
from typing import Collection, FrozenSet, Iterable, List, Optional

from keyword_scout.pipeline.models import ClassificationResult
from keyword_scout.utils import remove_duplicates

__all__ = ["Classifier", "is_blog_path"]

_BLOG_RE = re.compile(r"(blog|blogs|blogging|blog-post|blog-posts)", re.IGNORECASE)
_ORIGIN_RE = re.compile(r"^https?://[^/]+", re.IGNORECASE)
_PAGE_SUFFIXES = (".html", ".php")
MIN_WORDS = 2


def _strip_origin(url: str) -> str:
    return _ORIGIN_RE.sub("", url.strip(), count=1)


def is_blog_path(url: str) -> bool:
    """True if the URL path looks like blog content."""
    return bool(_BLOG_RE.search(_strip_origin(url)))


class Classifier:
    """Pure URL -> (keywords, phrases) classifier bound to a set of locale abbreviations."""

    def __init__(self, locale_abbreviations: Collection[str]) -> None:
        abbreviations = frozenset(a.strip().upper() for a in locale_abbreviations if a.strip())
        if not abbreviations:
            raise ValueError("At least one locale abbreviation is required")
        self.abbreviations: FrozenSet[str] = abbreviations

    def url_to_phrase(self, url: str) -> Optional[str]:
        """Build the phrase for one URL, or None when nothing is left of the path."""
        path = _strip_origin(url).strip("/")
        for suffix in _PAGE_SUFFIXES:
            if path.endswith(suffix):
                path = path[: -len(suffix)]
                break
        tokens = [t for t in path.replace("-", " ").split(" ") if t.strip()]
        if not tokens:
            return None

        words: List[str] = []
        last = len(tokens) - 1
        for index, token in enumerate(tokens):
            if index == last and token.upper() in self.abbreviations:
                words.append(token.upper())
            else:
                words.append(token[:1].upper() + token[1:].lower())
        phrase = " ".join(words).strip()
        return phrase or None

    def is_keyword(self, phrase: str) -> bool:
        """True if the last word is one of the locale abbreviations."""
        words = phrase.split()
        return bool(words) and words[-1] in self.abbreviations

    def classify(
        self, urls: Iterable[str], excluded: Collection[str] = frozenset()
    ) -> ClassificationResult:
        keywords: List[str] = []
        phrases: List[str] = []
        for url in urls:
            if is_blog_path(url):
                continue
            phrase = self.url_to_phrase(url)
            if phrase is None or phrase in excluded:
                continue
            if len(phrase.split()) < MIN_WORDS:
                continue
            if self.is_keyword(phrase):
                keywords.append(phrase)
            else:
                phrases.append(phrase)
        return ClassificationResult(
            keywords=tuple(remove_duplicates(keywords)),
            phrases=tuple(remove_duplicates(phrases)),
        )

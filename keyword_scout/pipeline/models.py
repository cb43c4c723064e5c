# keyword_scout/pipeline/models.py
"""
Data models for the KeywordScout pipeline.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import FrozenSet, Optional, Tuple

NO_KEYWORD = "None"


@dataclass(frozen=True, slots=True)
class SiteTask:
    """Unit of work for one sitemap: the URL plus the read-only exclusion set."""

    sitemap_url: str
    excluded_phrases: FrozenSet[str] = field(default_factory=frozenset)


@dataclass(frozen=True, slots=True)
class ClassificationResult:
    """Disjoint, ordered phrase buckets extracted from one sitemap."""

    keywords: Tuple[str, ...] = ()
    phrases: Tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class SiteOutcome:
    """Terminal result of a single SiteTask (success when ``error`` is None)."""

    domain: str
    sitemap_url: str
    output_path: Optional[Path] = None
    keyword_count: int = 0
    phrase_count: int = 0
    processed_keyword: str = NO_KEYWORD
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def failed(cls, domain: str, sitemap_url: str, error: str) -> SiteOutcome:
        return cls(domain=domain, sitemap_url=sitemap_url, error=error)

# File: keyword_scout/aggregator.py
"""keyword_scout.aggregator: Сбор итогов запуска и запись сводок по сайтам."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Iterable, List

from keyword_scout.logger import LOGGER_NAME
from keyword_scout.pipeline.models import NO_KEYWORD, SiteOutcome

__all__ = ["RunReport", "aggregate_results", "format_summary"]

logger = logging.getLogger(LOGGER_NAME)


def format_summary(outcome: SiteOutcome) -> str:
    """Однострочная сводка по домену."""
    return (
        f"{outcome.domain}: {outcome.keyword_count} keywords, {outcome.phrase_count} phrases, "
        f"processed keyword: {outcome.processed_keyword}"
    )


@dataclass(slots=True)
class RunReport:
    """Итоги запуска: успешные и неуспешные сайты, число сгенерированных статей."""

    timestamp: str
    succeeded: List[SiteOutcome] = field(default_factory=list)
    failed: List[SiteOutcome] = field(default_factory=list)

    @property
    def articles_generated(self) -> int:
        return sum(1 for o in self.succeeded if o.processed_keyword != NO_KEYWORD)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "timestamp": self.timestamp,
            "articles_generated": self.articles_generated,
            "succeeded": [_outcome_dict(o) for o in self.succeeded],
            "failed": [{"domain": o.domain, "sitemap_url": o.sitemap_url, "error": o.error} for o in self.failed],
        }

    def json(self, *, pretty: bool = False) -> str:
        """Возвращает JSON-представление RunReport."""
        return json.dumps(self.to_dict(), ensure_ascii=False, indent=2 if pretty else None)


def _outcome_dict(outcome: SiteOutcome) -> Dict[str, Any]:
    return {
        "domain": outcome.domain,
        "sitemap_url": outcome.sitemap_url,
        "output_path": str(outcome.output_path) if outcome.output_path else None,
        "keyword_count": outcome.keyword_count,
        "phrase_count": outcome.phrase_count,
        "processed_keyword": outcome.processed_keyword,
    }


def _write_summary(outcome: SiteOutcome, timestamp: str) -> Path:
    """Пишет summary_<timestamp>.txt в папку результата сайта."""
    out_dir = Path(outcome.output_path)  # type: ignore[arg-type]
    path = out_dir / f"summary_{timestamp}.txt"
    path.write_text(format_summary(outcome), encoding="utf-8")
    return path


def aggregate_results(outcomes: Iterable[SiteOutcome], timestamp: str) -> RunReport:
    """Разбирает исходы задач: пишет сводки для успешных, логирует неуспешные."""
    report = RunReport(timestamp=timestamp)
    for outcome in outcomes:
        if outcome.ok and outcome.output_path is not None:
            try:
                _write_summary(outcome, timestamp)
            except OSError as exc:
                logger.error("Could not write summary for %s: %s", outcome.domain, exc)
            report.succeeded.append(outcome)
        else:
            logger.debug("%s: %s", outcome.domain, outcome.error)
            report.failed.append(outcome)
    logger.info(
        "All processing complete. %d articles generated. See output folders for details.",
        report.articles_generated,
    )
    return report

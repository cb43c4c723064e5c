# keyword_scout/pipeline/site_task.py
"""
Per-sitemap pipeline: fetch -> parse -> classify -> write -> generate -> write.

A runner never raises for task-level problems; every error is turned into
a failed SiteOutcome naming the domain. Files already written stay on disk.
"""
from __future__ import annotations

import asyncio
import logging
import random
from pathlib import Path
from typing import Callable, Optional, Sequence

from aiohttp import ClientSession

from keyword_scout.classifier import Classifier
from keyword_scout.config import PipelineConfig
from keyword_scout.generator import ArticleGenerator
from keyword_scout.logger import LOGGER_NAME
from keyword_scout.parser.sitemap_parser import parse_sitemap
from keyword_scout.pipeline.fetcher import SitemapFetcher, open_session
from keyword_scout.pipeline.models import NO_KEYWORD, ClassificationResult, SiteOutcome, SiteTask
from keyword_scout.utils import extract_domain, safe_filename, timestamp

__all__ = ["SiteTaskRunner"]


async def _write_lines(path: Path, lines: Sequence[str]) -> None:
    await asyncio.to_thread(path.write_text, "\n".join(lines), encoding="utf-8")


class SiteTaskRunner:
    """Runs SiteTasks; holds only read-only collaborators shared by all tasks."""

    def __init__(
        self,
        config: PipelineConfig,
        classifier: Classifier,
        generator: ArticleGenerator,
        *,
        rng: Optional[random.Random] = None,
        clock: Callable[[], str] = timestamp,
        session_factory: Callable[[PipelineConfig], ClientSession] = open_session,
    ) -> None:
        self.config = config
        self.classifier = classifier
        self.generator = generator
        self.rng = rng or random.Random()
        self._clock = clock
        self._session_factory = session_factory
        self.logger = logging.getLogger(LOGGER_NAME)

    async def run(self, task: SiteTask) -> SiteOutcome:
        try:
            domain = extract_domain(task.sitemap_url)
        except ValueError as exc:
            return SiteOutcome.failed(task.sitemap_url, task.sitemap_url, str(exc))

        try:
            return await self._process(task, domain)
        except Exception as exc:
            return SiteOutcome.failed(domain, task.sitemap_url, f"Error processing {domain}: {exc}")

    async def _process(self, task: SiteTask, domain: str) -> SiteOutcome:
        stamp = self._clock()
        out_dir = Path(self.config.output_dir) / f"{domain}_{stamp}"
        out_dir.mkdir(parents=True, exist_ok=True)

        async with self._session_factory(self.config) as session:
            body = await SitemapFetcher(session).fetch(task.sitemap_url)
        urls = parse_sitemap(body)
        self.logger.debug("%s: %d URLs in sitemap", domain, len(urls))

        result = self.classifier.classify(urls, task.excluded_phrases)
        await self._write_result(out_dir, stamp, result)

        processed = NO_KEYWORD
        if result.keywords:
            processed = self.rng.choice(result.keywords)
            article = await self.generator.generate(processed)
            article_path = out_dir / f"{safe_filename(processed)}_{stamp}.txt"
            await asyncio.to_thread(article_path.write_text, article, encoding="utf-8")

        return SiteOutcome(
            domain=domain,
            sitemap_url=task.sitemap_url,
            output_path=out_dir,
            keyword_count=len(result.keywords),
            phrase_count=len(result.phrases),
            processed_keyword=processed,
        )

    @staticmethod
    async def _write_result(out_dir: Path, stamp: str, result: ClassificationResult) -> None:
        await asyncio.gather(
            _write_lines(out_dir / f"keywords_{stamp}.txt", result.keywords),
            _write_lines(out_dir / f"phrases_{stamp}.txt", result.phrases),
        )

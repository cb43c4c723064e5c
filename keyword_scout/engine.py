# File: keyword_scout/engine.py
"""keyword_scout.engine: Orchestration layer для запуска обработки sitemap и агрегации результатов."""

from __future__ import annotations

import asyncio
import random
from pathlib import Path
from typing import Any, FrozenSet, List, Optional, Union

from keyword_scout.aggregator import RunReport, aggregate_results
from keyword_scout.classifier import Classifier
from keyword_scout.config import PipelineConfig, resolve_api_key
from keyword_scout.generator import ArticleGenerator, create_client
from keyword_scout.logger import logger
from keyword_scout.pipeline.scheduler import Scheduler
from keyword_scout.pipeline.site_task import SiteTaskRunner
from keyword_scout.utils import read_lines, timestamp

__all__ = ["Engine", "load_exclusions", "load_sitemap_urls"]

PathT = Union[str, Path]


def load_sitemap_urls(path: PathT) -> List[str]:
    """Читает список sitemap URL; отсутствие файла - фатальная ошибка запуска."""
    return read_lines(path)


def load_exclusions(path: PathT) -> FrozenSet[str]:
    """Читает исключаемые фразы; при отсутствии файла - пустое множество и предупреждение."""
    if not Path(path).is_file():
        logger.warning("Exclusion file not found: %s. No keywords will be excluded.", path)
        return frozenset()
    try:
        return frozenset(read_lines(path))
    except (OSError, UnicodeDecodeError) as exc:
        logger.error("Error reading exclusion file %s: %s. No keywords will be excluded.", path, exc)
        return frozenset()


class Engine:
    """Фасад для CLI и тестов: загрузка входных данных, запуск пула задач и агрегация результатов."""

    def __init__(
        self,
        config: PipelineConfig,
        *,
        client: Any = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        """Инициализирует Engine; client и rng можно подменить в тестах."""
        self.config = config
        self._client = client
        self._rng = rng or random.Random()

    def start(
        self, sitemaps_file: Optional[PathT] = None, exclusions_file: Optional[PathT] = None
    ) -> RunReport:
        """Синхронная обёртка над :meth:`run`."""
        return asyncio.run(self.run(sitemaps_file, exclusions_file))

    async def run(
        self, sitemaps_file: Optional[PathT] = None, exclusions_file: Optional[PathT] = None
    ) -> RunReport:
        """Полный запуск: все фатальные проверки выполняются до первой задачи."""
        api_key = None if self._client is not None else resolve_api_key(self.config.generation)
        urls = load_sitemap_urls(sitemaps_file or self.config.sitemaps_file)
        excluded = load_exclusions(exclusions_file or self.config.exclusions_file)

        if self._client is not None:
            return await self._dispatch(self._client, urls, excluded)
        client = create_client(self.config.generation, api_key)
        try:
            return await self._dispatch(client, urls, excluded)
        finally:
            await client.close()

    async def _dispatch(self, client: Any, urls: List[str], excluded: FrozenSet[str]) -> RunReport:
        runner = SiteTaskRunner(
            self.config,
            Classifier(self.config.locale_abbreviations),
            ArticleGenerator(client, self.config),
            rng=self._rng,
        )
        scheduler = Scheduler(self.config, runner.run)

        logger.info("Processing %d sitemaps...", len(urls))
        outcomes = await scheduler.run(urls, excluded)
        return aggregate_results(outcomes, timestamp())

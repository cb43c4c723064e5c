# === FILE: keyword_scout/generator.py ===
"""Article generation through an OpenAI-compatible chat completions API.

Every attempt is preceded by the rate-limit pause; failed attempts are
retried with linear backoff (``delay * attempt``) until the configured
number of attempts is used up, then the last error propagates.
"""
from __future__ import annotations

import asyncio
import logging
from typing import Any, Awaitable, Callable, Dict, List, Optional

from openai import AsyncOpenAI

from keyword_scout.config import GenerationSettings, PipelineConfig
from keyword_scout.logger import LOGGER_NAME

__all__ = ["ArticleGenerator", "build_messages", "create_client"]

SYSTEM_PROMPT = "You are a professional content writer specializing in local service businesses."
USER_PROMPT = (
    "Write a 500 word SEO-optimized article about {phrase}. Include specific details "
    "about the service, how the area is being served, benefits to customers, "
    "and end with a clear call to action"
)

SleepFunc = Callable[[float], Awaitable[Any]]


def build_messages(phrase: str) -> List[Dict[str, str]]:
    return [
        {"role": "system", "content": SYSTEM_PROMPT},
        {"role": "user", "content": USER_PROMPT.format(phrase=phrase)},
    ]


def create_client(settings: GenerationSettings, api_key: str) -> AsyncOpenAI:
    """Build the async OpenAI client, honouring an optional custom base_url."""
    if settings.base_url:
        return AsyncOpenAI(api_key=api_key, base_url=settings.base_url)
    return AsyncOpenAI(api_key=api_key)


class ArticleGenerator:
    """Rate-limited, retrying client that turns one phrase into article text."""

    def __init__(
        self,
        client: Any,
        config: PipelineConfig,
        *,
        sleep: Optional[SleepFunc] = None,
    ) -> None:
        self.client = client
        self.settings = config.generation
        self.delay = config.rate_limit_delay
        self.max_attempts = max(1, config.max_retries)
        self._sleep: SleepFunc = sleep or asyncio.sleep
        self.logger = logging.getLogger(LOGGER_NAME)

    async def generate(self, phrase: str) -> str:
        attempts = 0
        while True:
            await self._sleep(self.delay)
            try:
                return await self._complete(phrase)
            except Exception as exc:
                attempts += 1
                self.logger.warning(
                    "Attempt %d/%d failed for %s: %s", attempts, self.max_attempts, phrase, exc
                )
                if attempts >= self.max_attempts:
                    raise
                await self._sleep(self.delay * attempts)

    async def _complete(self, phrase: str) -> str:
        completion = await self.client.chat.completions.create(
            model=self.settings.model,
            messages=build_messages(phrase),
            temperature=self.settings.temperature,
            max_tokens=self.settings.max_tokens,
        )
        return completion.choices[0].message.content or ""

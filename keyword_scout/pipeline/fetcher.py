# keyword_scout/pipeline/fetcher.py
"""
Fetcher module: downloads one sitemap document over HTTP.

There is no retry at this layer: a non-2xx status, a network error or a
timeout fails the owning task.
"""
from __future__ import annotations

import asyncio

from aiohttp import ClientError, ClientSession, ClientTimeout

from keyword_scout.config import PipelineConfig

__all__ = ["FetchError", "SitemapFetcher", "open_session"]


class FetchError(Exception):
    """Sitemap could not be downloaded."""

    def __init__(self, url: str, reason: str, status: int | None = None) -> None:
        super().__init__(f"Failed to fetch {url}: {reason}")
        self.url = url
        self.status = status


def open_session(config: PipelineConfig) -> ClientSession:
    """Create a ClientSession with the configured timeout and User-Agent."""
    return ClientSession(
        timeout=ClientTimeout(total=config.timeout),
        headers={"User-Agent": config.user_agent},
        raise_for_status=False,
    )


class SitemapFetcher:
    """Single-shot HTTP GET for sitemap documents."""

    def __init__(self, session: ClientSession) -> None:
        self.session = session

    async def fetch(self, url: str) -> bytes:
        """
        Fetch the sitemap body as raw bytes.

        Raises FetchError on non-2xx responses, client errors and timeouts.
        """
        try:
            async with self.session.get(url) as resp:
                if not 200 <= resp.status < 300:
                    raise FetchError(url, f"HTTP {resp.status}", status=resp.status)
                return await resp.read()
        except asyncio.TimeoutError as exc:
            raise FetchError(url, "request timed out") from exc
        except ClientError as exc:
            raise FetchError(url, str(exc) or type(exc).__name__) from exc

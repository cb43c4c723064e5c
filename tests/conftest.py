# File: tests/conftest.py
from __future__ import annotations

from collections.abc import AsyncIterator
from pathlib import Path
from types import SimpleNamespace
from typing import Callable, Dict, Iterable, List, Optional

import pytest
import pytest_asyncio
from aiohttp import web

from keyword_scout.config import PipelineConfig

SITEMAP_NS = "http://www.sitemaps.org/schemas/sitemap/0.9"

SERVICE_PAGES = [
    "https://example.com/plumbing-repair-nj",
    "https://example.com/drain-cleaning-ny.html",
    "https://example.com/about-us",
    "https://example.com/contact",
    "https://example.com/blog/top-5-tips",
]


def build_sitemap(urls: Iterable[str]) -> str:
    """Render a minimal urlset document for *urls*."""
    entries = "".join(f"<url><loc>{u}</loc></url>" for u in urls)
    return f'<?xml version="1.0" encoding="UTF-8"?><urlset xmlns="{SITEMAP_NS}">{entries}</urlset>'


class FakeCompletions:
    """Stand-in for ``client.chat.completions`` of the OpenAI SDK."""

    def __init__(self, text: str = "Generated article", failures: int = 0) -> None:
        self.text = text
        self.failures = failures
        self.calls: List[Dict] = []

    async def create(self, **kwargs):
        self.calls.append(kwargs)
        if len(self.calls) <= self.failures:
            raise RuntimeError(f"service unavailable ({len(self.calls)})")
        message = SimpleNamespace(content=self.text)
        return SimpleNamespace(choices=[SimpleNamespace(message=message)])


class FakeClient:
    def __init__(self, text: str = "Generated article", failures: int = 0) -> None:
        self.chat = SimpleNamespace(completions=FakeCompletions(text, failures))

    @property
    def calls(self) -> List[Dict]:
        return self.chat.completions.calls


class SleepRecorder:
    """Async sleep replacement that only records requested delays."""

    def __init__(self) -> None:
        self.delays: List[float] = []

    async def __call__(self, delay: float) -> None:
        self.delays.append(delay)


@pytest.fixture()
def basic_config(tmp_path: Path) -> PipelineConfig:
    """Valid config with tiny delays and output under tmp_path."""
    return PipelineConfig(
        max_workers=2,
        rate_limit_delay_ms=1,
        max_retries=3,
        locale_abbreviations=["NJ", "NY", "CA"],
        output_dir=tmp_path / "output",
        sitemaps_file=tmp_path / "sitemaps.txt",
        exclusions_file=tmp_path / "exclusions.txt",
        timeout=5.0,
        user_agent="TestAgent/1.0",
    )


@pytest.fixture()
def fake_client() -> FakeClient:
    return FakeClient()


@pytest.fixture()
def sleep_recorder() -> SleepRecorder:
    return SleepRecorder()


@pytest.fixture()
def make_client() -> Callable[..., FakeClient]:
    return FakeClient


async def serve_app(app: web.Application, port: int) -> AsyncIterator[str]:
    """Start *app* on *port*, yield base URL, ensure cleanup."""
    runner = web.AppRunner(app)
    await runner.setup()
    site = web.TCPSite(runner, "localhost", port)
    await site.start()
    try:
        yield f"http://localhost:{port}"
    finally:
        await runner.cleanup()


def _xml_handler(body: str, status: int = 200) -> Callable:
    async def handler(_):
        return web.Response(text=body, status=status, content_type="application/xml")

    return handler


@pytest_asyncio.fixture
async def sitemap_server(unused_tcp_port: int) -> AsyncIterator[str]:
    """Local server with good, keyword-less, malformed and failing sitemaps."""
    app = web.Application()
    app.router.add_get("/sitemap.xml", _xml_handler(build_sitemap(SERVICE_PAGES)))
    app.router.add_get(
        "/generic.xml",
        _xml_handler(build_sitemap(["https://example.com/about-us", "https://example.com/our-team"])),
    )
    app.router.add_get("/broken.xml", _xml_handler("<urlset><url><loc>oops</url>"))
    app.router.add_get("/error.xml", _xml_handler("server error", status=500))

    async for url in serve_app(app, unused_tcp_port):
        yield url


def read_output(path: Optional[Path], prefix: str) -> List[str]:
    """Return lines of the single ``<prefix>_*.txt`` file in *path*."""
    assert path is not None
    matches = sorted(path.glob(f"{prefix}_*.txt"))
    assert len(matches) == 1, matches
    text = matches[0].read_text(encoding="utf-8")
    return text.split("\n") if text else []


@pytest.fixture()
def sitemap_xml() -> Callable[[Iterable[str]], str]:
    return build_sitemap


@pytest.fixture()
def output_lines() -> Callable[[Optional[Path], str], List[str]]:
    return read_output

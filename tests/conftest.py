# File: tests/conftest.py
from collections.abc import AsyncIterator
from pathlib import Path

import pytest
from aiohttp import web

from site_mirror.config import MirrorConfig
from site_mirror.crawler.models import CrawlTarget


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


def html_page(*hrefs: str) -> web.Response:
    """Build an HTML response holding one anchor per href."""
    body = "".join(f'<a href="{h}">{h}</a>' for h in hrefs)
    return web.Response(text=f"<html><body>{body}</body></html>", content_type="text/html")


@pytest.fixture()
def mirror_dir(tmp_path) -> Path:
    """Empty mirror root inside tmp_path."""
    return tmp_path / "data"


@pytest.fixture()
def features_target() -> CrawlTarget:
    return CrawlTarget.from_url("https://github.com/features")


@pytest.fixture()
def basic_config(mirror_dir) -> MirrorConfig:
    """
    Return a basic valid MirrorConfig pointing at a host that is never contacted.
    """
    return MirrorConfig(url="https://example.com/docs", dir=mirror_dir)

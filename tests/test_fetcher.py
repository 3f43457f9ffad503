# File: tests/test_fetcher.py
from collections.abc import AsyncIterator

import pytest
import pytest_asyncio
from aiohttp import ClientSession, web

from site_mirror.crawler.fetcher import Fetcher
from site_mirror.errors import FetchError

from conftest import serve_app


@pytest_asyncio.fixture
async def fetch_server(unused_tcp_port: int) -> AsyncIterator[str]:
    app = web.Application()

    async def ok(_):
        return web.Response(text="<h1>ok</h1>", content_type="text/html")

    async def created(_):
        return web.Response(status=201, body=b"%PDF-1.4", content_type="application/pdf")

    async def missing(_):
        return web.Response(status=404, text="nope")

    async def broken(_):
        return web.Response(status=500)

    async def moved(_):
        raise web.HTTPFound("/ok")

    app.router.add_get("/ok", ok)
    app.router.add_get("/created", created)
    app.router.add_get("/missing", missing)
    app.router.add_get("/broken", broken)
    app.router.add_get("/moved", moved)

    async for url in serve_app(app, unused_tcp_port):
        yield url


@pytest.mark.asyncio()
async def test_fetch_returns_body(fetch_server: str):
    async with ClientSession() as session:
        fetcher = Fetcher(session)
        assert await fetcher.fetch(f"{fetch_server}/ok") == b"<h1>ok</h1>"
        # non-HTML bodies come back untouched
        assert await fetcher.fetch(f"{fetch_server}/created") == b"%PDF-1.4"
        # redirects are followed by the transport
        assert await fetcher.fetch(f"{fetch_server}/moved") == b"<h1>ok</h1>"
        assert fetcher.requests == 3


@pytest.mark.asyncio()
@pytest.mark.parametrize("path,status", [("/missing", 404), ("/broken", 500)])
async def test_fetch_bad_status(fetch_server: str, path: str, status: int):
    async with ClientSession() as session:
        with pytest.raises(FetchError) as info:
            await Fetcher(session).fetch(f"{fetch_server}{path}")
    assert info.value.status == status
    assert info.value.url.endswith(path)


@pytest.mark.asyncio()
async def test_fetch_transport_error(unused_tcp_port: int):
    async with ClientSession() as session:
        with pytest.raises(FetchError) as info:
            await Fetcher(session).fetch(f"http://localhost:{unused_tcp_port}/")
    assert info.value.status is None


@pytest.mark.asyncio()
async def test_fetch_page_reports_final_url(fetch_server: str):
    async with ClientSession() as session:
        page = await Fetcher(session).fetch_page(f"{fetch_server}/moved")
    assert page.url == f"{fetch_server}/ok"
    assert page.content == b"<h1>ok</h1>"

# site_mirror/crawler/fetcher.py
"""
Fetcher module: plain HTTP GET of one page, returning the raw body.
"""
from __future__ import annotations

import asyncio

from aiohttp import ClientError, ClientSession

from site_mirror.crawler.models import PageData
from site_mirror.errors import FetchError
from site_mirror.logger import get_logger

log = get_logger("fetcher")


class Fetcher:
    """Downloads pages over a shared :class:`aiohttp.ClientSession`.

    No retries and no content-type checks: whatever a 2xx response carries is
    handed back as bytes.
    """

    def __init__(self, session: ClientSession) -> None:
        self.session = session
        self.requests = 0

    async def fetch_page(self, url: str) -> PageData:
        """
        GET *url* and return the body with the final URL after redirects.

        Raises FetchError on a transport failure or a non-2xx status.
        """
        self.requests += 1
        log.info("downloading %s", url)
        try:
            async with self.session.get(url) as resp:
                if not 200 <= resp.status < 300:
                    raise FetchError(url, f"HTTP {resp.status}", status=resp.status)
                return PageData(str(resp.url), await resp.read())
        except asyncio.TimeoutError as exc:
            raise FetchError(url, "timed out") from exc
        except ClientError as exc:
            raise FetchError(url, str(exc) or type(exc).__name__) from exc

    async def fetch(self, url: str) -> bytes:
        """GET *url* and return only the body."""
        page = await self.fetch_page(url)
        return page.content

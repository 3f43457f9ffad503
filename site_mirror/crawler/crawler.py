# === FILE: site_mirror/crawler/crawler.py ===
from __future__ import annotations

import asyncio
import time
from typing import Optional

from aiohttp import ClientSession, ClientTimeout, TCPConnector

from site_mirror.config import MirrorConfig
from site_mirror.crawler.fetcher import Fetcher
from site_mirror.crawler.link_extractor import extract_links, parse_html
from site_mirror.crawler.models import CrawlStats, CrawlTarget, NormalizedURL, PageData
from site_mirror.crawler.urls import is_directory_url, normalize_url
from site_mirror.crawler.visited import VisitedSet
from site_mirror.errors import FetchError, StoreError
from site_mirror.logger import get_logger
from site_mirror.storage import PageStore

__all__ = ("MirrorCrawler",)

log = get_logger("crawler")


class MirrorCrawler:
    """Recursive same-site mirroring crawler.

    Every in-scope link found on a page becomes its own task. All tasks live
    in one :class:`asyncio.TaskGroup` opened by :meth:`process`, so the
    top-level call returns only after the whole tree of visits is done.
    The visited set's claim is the one point where tasks synchronise.
    """

    def __init__(
        self,
        config: MirrorConfig,
        *,
        fetcher: Optional[Fetcher] = None,
        store: Optional[PageStore] = None,
    ) -> None:
        self.config = config
        self.target = CrawlTarget.from_url(config.seed)
        self.store = store if store is not None else PageStore(config.dir)
        self.visited = VisitedSet()
        self.stats = CrawlStats()
        self.fetcher = fetcher
        self.session: Optional[ClientSession] = None
        self._group: Optional[asyncio.TaskGroup] = None
        self._in_flight = 0

    async def __aenter__(self) -> MirrorCrawler:
        if self.fetcher is None:
            self.session = ClientSession(
                timeout=ClientTimeout(total=self.config.timeout),
                connector=TCPConnector(limit=self.config.connection_limit),
            )
            self.fetcher = Fetcher(self.session)
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        if self.session and not self.session.closed:
            await self.session.close()

    @property
    def in_flight(self) -> int:
        """Number of spawned visits that have not completed yet."""
        return self._in_flight

    async def process(self, raw_url: Optional[str] = None) -> CrawlStats:
        """Mirror everything reachable from *raw_url* (the seed by default).

        Blocks until every visit spawned, directly or transitively, has
        finished. Calling it again for an already claimed URL does nothing.
        """
        if self.fetcher is None:
            raise RuntimeError("Crawler not started; use 'async with MirrorCrawler(...)'")
        if self._group is not None:
            raise RuntimeError("process() is already running")
        url = raw_url or self.config.start_url
        log.info("Start mirroring %s into %s", url, self.store.root)
        start = time.monotonic()
        try:
            async with asyncio.TaskGroup() as group:
                self._group = group
                self._spawn(url)
        finally:
            self._group = None
            self.stats.elapsed = time.monotonic() - start
        s = self.stats
        log.info(
            "Done: %d pages (%d downloaded, %d from cache, %d failed) in %.2f s",
            s.claimed, s.fetched, s.from_cache, s.fetch_errors, s.elapsed,
        )
        return s

    crawl = process

    def _spawn(self, url: str) -> None:
        if self._group is None:
            raise RuntimeError("no active crawl to spawn into")
        self._in_flight += 1
        task = self._group.create_task(self._visit(url), name=f"visit:{url}")
        task.add_done_callback(self._on_done)

    def _on_done(self, _task: asyncio.Task) -> None:
        self._in_flight -= 1

    async def _visit(self, raw_url: str) -> None:
        url = normalize_url(raw_url)
        if url is None:
            log.debug("Discarding unusable URL %r", raw_url)
            return
        if not self.visited.claim(url):
            self.stats.duplicates += 1
            return
        self.stats.claimed += 1
        self.stats.pages.append(url.key)
        request = url.request_url(directory=is_directory_url(raw_url))
        try:
            page = await self._load_or_fetch(url, request)
            links = extract_links(parse_html(page.content), self.target, page.url)
        except Exception:
            # keep sibling visits alive; TaskGroup would cancel them on error
            log.exception("Unexpected error while processing %s", url)
            return
        for link in links:
            self._spawn(link)

    async def _load_or_fetch(self, url: NormalizedURL, request: str) -> PageData:
        """Return the page from the mirror if present, otherwise download and save it.

        The returned URL is the one relative links resolve against: the final
        URL after redirects for a download, *request* otherwise.
        """
        try:
            cached = await asyncio.to_thread(self.store.load, url.path)
        except StoreError as exc:
            self.stats.store_errors += 1
            log.warning("Cannot read cached copy of %s: %s", url, exc)
            cached = None
        if cached is not None:
            self.stats.from_cache += 1
            return PageData(request, cached)

        fetcher = self.fetcher
        if fetcher is None:
            raise RuntimeError("Crawler not started; use 'async with MirrorCrawler(...)'")
        try:
            page = await fetcher.fetch_page(request)
        except FetchError as exc:
            self.stats.fetch_errors += 1
            log.warning("Failed %s: %s", url, exc.reason)
            return PageData(request, b"")
        self.stats.fetched += 1

        try:
            await asyncio.to_thread(self.store.save, url.path, page.content)
        except StoreError as exc:
            self.stats.store_errors += 1
            log.warning("Error saving %s: %s", url, exc)
        else:
            self.stats.saved += 1
        return page

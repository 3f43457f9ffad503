# site_mirror/crawler/link_extractor.py
"""
HTML parsing and in-scope link extraction for SiteMirror.
"""
from __future__ import annotations

from typing import List, Optional, Union

from bs4 import BeautifulSoup
from bs4.element import Tag

from site_mirror.crawler.models import CrawlTarget, NormalizedURL
from site_mirror.crawler.urls import normalize_url
from site_mirror.logger import get_logger

log = get_logger("extractor")


def parse_html(content: Union[bytes, str, None]) -> BeautifulSoup:
    """Parse *content* into a document tree. Empty input gives an empty document."""
    return BeautifulSoup(content or b"", "html.parser")


def extract_links(
    document: BeautifulSoup,
    target: CrawlTarget,
    base: Union[NormalizedURL, str, None] = None,
) -> List[str]:
    """
    Collect in-scope page URLs from every ``<a href>`` in *document*.

    *base* is the URL the page was served from (after redirects, trailing
    slash kept) and is what relative hrefs resolve against; it defaults to
    the seed. Anchors are visited in document order (depth-first).
    Fragment-only, root, cross-domain and out-of-scope links are dropped, as
    is a link back to the scope path itself. Duplicates within this page are
    removed; the visited set handles dedup across pages.
    """
    page = base or target.seed
    seen: set[str] = set()
    links: List[str] = []
    for tag in document.find_all("a", href=True):
        if not isinstance(tag, Tag):
            continue
        href = tag.get("href")
        if not isinstance(href, str):
            continue
        url = normalize_url(href, page)
        if url is None or not target.contains(url):
            continue
        if url.path == target.scope_path:
            continue
        full = f"{target.scheme}://{url.host}{url.path}"
        if full in seen:
            continue
        seen.add(full)
        links.append(full)
    log.debug("extracted %d links from %s", len(links), page)
    return links


__all__ = ["parse_html", "extract_links"]

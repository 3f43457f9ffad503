# site_mirror/crawler/models.py
"""
Data models for the SiteMirror crawler.
"""
from __future__ import annotations

import posixpath
from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List
from urllib.parse import urlsplit

from site_mirror.errors import ParseError


def clean_path(path: str) -> str:
    """Resolve `.`/`..` segments and drop trailing slashes; the root becomes ``""``.

    `..` never climbs above the root.
    """
    if not path:
        return ""
    return posixpath.normpath("/" + path.lstrip("/")).rstrip("/")


@dataclass(frozen=True, slots=True)
class NormalizedURL:
    """Canonical ``(scheme, host, path)`` form of a page URL.

    ``path`` carries no trailing slash (the root is ``""``) and no query or
    fragment. Two URLs are the same page iff their triples are equal.
    """

    scheme: str
    host: str
    path: str

    @property
    def key(self) -> str:
        return f"{self.scheme}://{self.host}{self.path}"

    def __str__(self) -> str:
        return self.key

    def request_url(self, directory: bool = False) -> str:
        """URL to download; *directory* restores the trailing slash the key drops."""
        if directory and self.path:
            return self.key + "/"
        return self.key


@dataclass(frozen=True, slots=True)
class CrawlTarget:
    """Scope of one crawl, fixed at start: host plus the seed path prefix."""

    scheme: str
    host: str
    scope_path: str

    @classmethod
    def from_url(cls, url: str) -> CrawlTarget:
        """Build the target from a seed URL, raising :class:`ParseError` if unusable."""
        raw = str(url).strip()
        if not raw.startswith("http"):
            raise ParseError(f"seed URL must start with http: {raw!r}")
        try:
            parts = urlsplit(raw)
        except ValueError as exc:
            raise ParseError(f"cannot parse seed URL {raw!r}: {exc}") from exc
        if parts.scheme.lower() not in ("http", "https") or not parts.netloc:
            raise ParseError(f"seed URL must be absolute http(s): {raw!r}")
        return cls(parts.scheme.lower(), parts.netloc.lower(), clean_path(parts.path))

    @property
    def seed(self) -> NormalizedURL:
        return NormalizedURL(self.scheme, self.host, self.scope_path)

    def contains(self, url: NormalizedURL) -> bool:
        """True if *url* is on the target host and inside the scope path."""
        # local import: urls.py depends on this module
        from site_mirror.crawler.urls import in_scope

        return url.host == self.host and in_scope(url.path, self.scope_path)


@dataclass(slots=True)
class CrawlStats:
    """Counters collected during one crawl run."""

    claimed: int = 0
    duplicates: int = 0
    fetched: int = 0
    from_cache: int = 0
    saved: int = 0
    fetch_errors: int = 0
    store_errors: int = 0
    elapsed: float = 0.0
    pages: List[str] = field(default_factory=list)

    def as_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(slots=True)
class PageData:
    """Raw page body plus the URL its relative links resolve against."""

    url: str
    content: bytes

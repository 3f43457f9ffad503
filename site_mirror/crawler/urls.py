# site_mirror/crawler/urls.py
"""
URL normalisation and scope filtering for SiteMirror.

Every href found on a page goes through :func:`normalize_url` and
:func:`in_scope` before it can reach the visited set.
"""
from __future__ import annotations

from typing import FrozenSet, Optional, Tuple, Union
from urllib.parse import urldefrag, urljoin, urlsplit

from site_mirror.crawler.models import CrawlTarget, NormalizedURL, clean_path

__all__ = ("INVALID_HREFS", "normalize_url", "in_scope", "is_directory_url")

#: hrefs that never point at a crawlable page
INVALID_HREFS: FrozenSet[str] = frozenset({"", "/"})

_HTTP_SCHEMES: FrozenSet[str] = frozenset({"http", "https"})
_ABSOLUTE_PREFIXES = ("http:", "https:")

_BaseT = Union[NormalizedURL, CrawlTarget, str, None]


def _resolve_base(base: _BaseT) -> Tuple[Optional[NormalizedURL], str]:
    """Split *base* into its normalized origin and the URL relative hrefs join onto."""
    if isinstance(base, CrawlTarget):
        base = base.seed
    if isinstance(base, NormalizedURL):
        return base, base.key
    if isinstance(base, str):
        origin = normalize_url(base)
        if origin is None:
            return None, ""
        # a page URL keeps its trailing slash: "a" on /docs/ is /docs/a
        return origin, urldefrag(base.strip())[0]
    return None, ""


def _from_absolute(raw: str, base: Optional[NormalizedURL]) -> Optional[NormalizedURL]:
    try:
        parts = urlsplit(raw)
    except ValueError:
        return None
    scheme = parts.scheme.lower()
    host = parts.netloc.lower()
    if scheme not in _HTTP_SCHEMES or not host:
        return None
    if base is not None and host != base.host:
        return None
    return NormalizedURL(scheme, host, clean_path(parts.path))


def normalize_url(raw: str, base: _BaseT = None) -> Optional[NormalizedURL]:
    """Canonicalise *raw* into a :class:`NormalizedURL`, or ``None`` to discard it.

    *base* is the page the href was found on: its URL as fetched, its
    normalized form, or the crawl target. Relative forms are resolved
    against it and absolute URLs must share its host. Dot segments are
    resolved, so ``/docs/../blog`` is ``/blog``.
    Never raises: unparseable input is a discard.
    """
    if not isinstance(raw, str):
        return None
    href = raw.strip()
    if href.startswith("#") or href in INVALID_HREFS:
        return None

    origin, join_base = _resolve_base(base)

    if href.lower().startswith(_ABSOLUTE_PREFIXES):
        return _from_absolute(href, origin)

    if origin is None:
        return None

    if href.startswith("//"):
        return _from_absolute(f"{origin.scheme}:{href}", origin)

    if href.startswith("/"):
        try:
            path = urlsplit(href).path
        except ValueError:
            return None
        return NormalizedURL(origin.scheme, origin.host, clean_path(path))

    # bare relative reference; mailto:, javascript: etc. end up non-http here
    try:
        joined = urljoin(join_base, href)
    except ValueError:
        return None
    return _from_absolute(joined, origin)


def is_directory_url(raw: str) -> bool:
    """True if the path of *raw* ends with a slash (``/docs/``, not ``/docs``)."""
    try:
        path = urlsplit(raw.strip()).path
    except ValueError:
        return False
    return len(path) > 1 and path.endswith("/")


def in_scope(candidate_path: str, scope_path: str) -> bool:
    """True if *candidate_path* is *scope_path* or lies beneath it.

    The match is anchored at a segment boundary, so ``/apidocs`` is not
    inside ``/api``.
    """
    if candidate_path == scope_path:
        return True
    return candidate_path.startswith(scope_path + "/")

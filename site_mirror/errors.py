# site_mirror/errors.py
"""
Exception hierarchy for SiteMirror.

Only :class:`ParseError` raised for the seed URL is fatal; every other error
is logged where it happens and the crawl goes on.
"""
from __future__ import annotations

from typing import Optional


class MirrorError(Exception):
    """Base class for all SiteMirror errors."""


class ParseError(MirrorError, ValueError):
    """A seed URL or discovered href could not be understood."""


class FetchError(MirrorError):
    """Transport failure or non-2xx response for a page."""

    def __init__(self, url: str, reason: str, status: Optional[int] = None) -> None:
        super().__init__(f"{url}: {reason}")
        self.url = url
        self.reason = reason
        self.status = status


class StoreError(MirrorError):
    """The page store could not read or write a record."""

    def __init__(self, path: object, reason: str) -> None:
        super().__init__(f"{path}: {reason}")
        self.path = path
        self.reason = reason


__all__ = ["MirrorError", "ParseError", "FetchError", "StoreError"]

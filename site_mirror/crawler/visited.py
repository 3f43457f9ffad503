# site_mirror/crawler/visited.py
"""
Visited set: the single dedup and admission gate of a crawl.
"""
from __future__ import annotations

import threading
from typing import Set, Union

from site_mirror.crawler.models import NormalizedURL

__all__ = ("VisitedSet",)


class VisitedSet:
    """Concurrency-safe set of URLs already dispatched for processing.

    The only mutation is :meth:`claim`, which checks and marks a key in one
    locked step. A URL must be claimed before any network or disk work is
    done for it.
    """

    def __init__(self) -> None:
        self._keys: Set[str] = set()
        self._lock = threading.Lock()

    @staticmethod
    def _key(url: Union[NormalizedURL, str]) -> str:
        return url.key if isinstance(url, NormalizedURL) else url

    def claim(self, url: Union[NormalizedURL, str]) -> bool:
        """Return True the first time *url* is seen, False on every later call."""
        key = self._key(url)
        with self._lock:
            if key in self._keys:
                return False
            self._keys.add(key)
            return True

    def __contains__(self, url: object) -> bool:
        if not isinstance(url, (NormalizedURL, str)):
            return False
        key = self._key(url)
        with self._lock:
            return key in self._keys

    def __len__(self) -> int:
        with self._lock:
            return len(self._keys)

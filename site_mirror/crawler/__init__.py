# site_mirror/crawler/__init__.py
"""Crawl engine: URL normalisation, scoping, dedup, fetch and fan-out."""
from site_mirror.crawler.crawler import MirrorCrawler
from site_mirror.crawler.models import CrawlStats, CrawlTarget, NormalizedURL

__all__ = ["MirrorCrawler", "CrawlStats", "CrawlTarget", "NormalizedURL"]

# === FILE: site_mirror/mirror.py ===
"""
Модуль-обёртка для функции запуска зеркалирования.
"""
from site_mirror.config import MirrorConfig
from site_mirror.crawler.crawler import MirrorCrawler
from site_mirror.crawler.models import CrawlStats


async def start_mirror(cfg: MirrorConfig) -> CrawlStats:
    """
    Запускает краулер в контексте и возвращает статистику обхода.

    Parameters
    ----------
    cfg : MirrorConfig
        Конфигурация зеркалирования.

    Returns
    -------
    CrawlStats
        Счётчики загруженных, взятых из кэша и неудачных страниц.
    """
    async with MirrorCrawler(cfg) as crawler:
        stats = await crawler.crawl()
    return stats

__all__ = ["start_mirror"]

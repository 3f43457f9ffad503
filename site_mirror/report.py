# site_mirror/report.py

"""
Генерация JSON-отчёта для проекта SiteMirror.

Сериализация итогов обхода (CrawlStats) в файл.
"""
import json
from pathlib import Path

from site_mirror.crawler.models import CrawlStats


def render_json(stats: CrawlStats, output_path: Path | str) -> Path:
    """
    Сохраняет итоги обхода в формате JSON по указанному пути.

    :param stats: объект CrawlStats, возвращённый краулером
    :param output_path: путь к JSON-файлу
    :return: Path сохранённого файла

    Пример:
    ```python
    from site_mirror.report import render_json
    report_path = render_json(stats, 'reports/mirror.json')
    print(f"JSON report saved to: {report_path}")
    ```
    """
    output = Path(output_path)
    output.parent.mkdir(parents=True, exist_ok=True)

    with output.open('w', encoding='utf-8') as f:
        json.dump(stats.as_dict(), f, ensure_ascii=False, indent=2)

    return output


__all__ = ["render_json"]

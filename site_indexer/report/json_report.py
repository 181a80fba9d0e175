# site_indexer/report/json_report.py

"""
Генерация JSON-отчёта для проекта SiteIndexer.

Сериализация объекта CrawlStats в строку или файл.
"""
import json
from pathlib import Path

from site_indexer.crawler.models import CrawlStats


def stats_to_json(stats: CrawlStats, *, pretty: bool = False) -> str:
    """Возвращает JSON-представление статистики (Unicode без экранирования)."""
    return json.dumps(stats.as_dict(), ensure_ascii=False, indent=2 if pretty else None)


def render_json(stats: CrawlStats, output_path: Path | str) -> Path:
    """
    Сохраняет статистику обхода в формате JSON по указанному пути.

    :param stats: объект CrawlStats
    :param output_path: путь к JSON-файлу
    :return: Path сохранённого файла

    Пример:
    ```python
    from site_indexer.report.json_report import render_json
    report_path = render_json(stats, 'reports/crawl.json')
    ```
    """
    output = Path(output_path)
    output.parent.mkdir(parents=True, exist_ok=True)

    with output.open('w', encoding='utf-8') as f:
        json.dump(stats.as_dict(), f, ensure_ascii=False, indent=2)

    return output

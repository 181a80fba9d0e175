# File: site_indexer/report/__init__.py
"""site_indexer.report: Сохранение статистики обхода (JSON) для CLI и внешнего слоя отображения."""

from .json_report import render_json, stats_to_json

__all__ = ["render_json", "stats_to_json"]

# File: keyword_scout/report/__init__.py
"""keyword_scout.report: Сохранение итогового отчёта запуска (JSON)."""

from keyword_scout.report.json_report import render_json

__all__ = ["render_json"]

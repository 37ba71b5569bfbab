# File: mail_scout/report/__init__.py
"""mail_scout.report: Сохранение итогового отчёта обхода (JSON)."""

from mail_scout.report.json_report import render_json

__all__ = ["render_json"]

"""site_markdown.report: сохранение результатов в JSON и HTML для CLI и тестов."""

from site_markdown.report.html_report import render_html
from site_markdown.report.json_report import render_json, to_json

__all__ = ["render_json", "render_html", "to_json"]

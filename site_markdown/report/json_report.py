# site_markdown/report/json_report.py

"""
Сохранение результатов (crawl / links) в JSON-файл.
"""
from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Union

from site_markdown.crawler.models import CrawlSiteResult, LinksResult


def to_json(data: Any, *, pretty: bool = False) -> str:
    """JSON-строка для результата действия или уже готового словаря."""
    if isinstance(data, (CrawlSiteResult, LinksResult)):
        data = data.to_payload()
    return json.dumps(data, ensure_ascii=False, indent=2 if pretty else None)


def render_json(data: Any, output_path: Union[Path, str]) -> Path:
    """
    Сохраняет data в формате JSON по указанному пути.

    :param data: CrawlSiteResult, LinksResult или JSON-совместимый объект
    :param output_path: путь к JSON-файлу
    :return: Path сохранённого файла

    Пример:
    ```python
    from site_markdown.report.json_report import render_json
    report_path = render_json(result, 'reports/crawl.json')
    ```
    """
    output = Path(output_path)
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(to_json(data, pretty=True), encoding="utf-8")
    return output

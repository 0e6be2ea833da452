"""site_markdown.report.html_report: HTML-отчёт по обходу сайта с помощью Jinja2."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Union

from jinja2 import Environment, FileSystemLoader, select_autoescape

from site_markdown.crawler.models import CrawlSiteResult

DEFAULT_TEMPLATE_DIR = Path(__file__).parent / "templates"
TEMPLATE_NAME = "crawl_report.html.j2"


def render_html(
    result: CrawlSiteResult,
    template_dir: Union[Path, str, None],
    output_path: Union[Path, str],
) -> Path:
    """Рендерит HTML-отчёт из шаблона и сохраняет его по указанному пути.

    Args:
        result: результат crawl_site.
        template_dir: директория с шаблоном ``crawl_report.html.j2``;
            None - встроенный шаблон пакета.
        output_path: путь к итоговому HTML-файлу.

    Returns:
        Path до сохранённого HTML-файла.
    """
    template_dir = Path(template_dir) if template_dir is not None else DEFAULT_TEMPLATE_DIR
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    env = Environment(
        loader=FileSystemLoader(str(template_dir)),
        autoescape=select_autoescape(["html", "xml", "j2"]),
    )
    template = env.get_template(TEMPLATE_NAME)

    meta = result.metadata
    context: dict[str, Any] = {
        "base_url": meta.config.base_url,
        "max_pages": meta.config.max_pages,
        "timing": meta.timing,
        "stats": meta.stats,
        "errors": meta.errors,
        "pages": result.pages,
        "links": result.links,
    }

    output_path.write_text(template.render(**context), encoding="utf-8")
    return output_path

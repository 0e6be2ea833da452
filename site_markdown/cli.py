#!/usr/bin/env python3
"""
Точка входа SiteMarkdown для командной строки.

Команды:
  scrape URL   Конвертировать одну страницу в Markdown
  crawl URL    Обойти сайт и конвертировать найденные страницы
  links URL    Получить список внутренних ссылок страницы
  serve        Запустить HTTP-обработчик /{action}/{url}
  config       Показать текущую конфигурацию

Общие опции:
  --config PATH       Путь к YAML/JSON-конфигу (default: configs/default.yaml, если есть)
  --backend NAME      browser (Playwright) или http (aiohttp, без JavaScript)
  --timeout MS        Таймаут одной навигации (мс)
  --log-level LEVEL   Уровень логирования (DEBUG, INFO, ...)
  --log-file PATH     Файл для логов (stderr, если не указан)
  --log-format FORMAT Формат логирования

Пример:
  site-markdown crawl https://example.com --max-pages 20 --json crawl.json --pretty
"""
import asyncio
import sys
from pathlib import Path

import click

from site_markdown import __version__
from site_markdown.backends import open_page
from site_markdown.config import load_config
from site_markdown.engine import run_action
from site_markdown.errors import ValidationError
from site_markdown.logger import DEFAULT_FORMAT, init_logging
from site_markdown.report.html_report import render_html
from site_markdown.report.json_report import render_json, to_json
from site_markdown.server import run_server

CONTEXT_SETTINGS = dict(help_option_names=["--help"])
SEPARATOR = "-" * 40


def print_error(message: str):
    click.secho(message, fg="red", err=True)
    sys.exit(1)


def _run(ctx, action, url, **kwargs):
    """Выполняет action через общий engine; ошибки печатает и завершает процесс с кодом 1."""
    cfg = ctx.obj["config"]
    try:
        return asyncio.run(run_action(action, url, cfg, page_factory=open_page, **kwargs))
    except ValidationError as e:
        print_error(f"Error: {e}")
    except Exception as e:
        print_error(f"[ERROR] {e}")


@click.group(context_settings=CONTEXT_SETTINGS)
@click.version_option(__version__, "--version", "-v", message="SiteMarkdown, version %(version)s")
@click.option(
    "--config", "-c", "config_path",
    default=None,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Путь к файлу конфигурации YAML/JSON.",
)
@click.option(
    "--backend", "backend",
    default=None,
    type=click.Choice(["browser", "http"]),
    help="Бэкенд рендеринга (override backend).",
)
@click.option(
    "--timeout", "timeout_ms",
    type=click.IntRange(min=1),
    default=None,
    help="Таймаут одной навигации в мс (override navigation_timeout_ms).",
)
@click.option(
    "--log-level", "log_level",
    default="INFO", show_default=True,
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]),
    help="Уровень логирования",
)
@click.option(
    "--log-file", "log_file",
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help="Путь к файлу логов (stderr, если не указан)",
)
@click.option(
    "--log-format", "log_format",
    default=DEFAULT_FORMAT,
    show_default=True,
    help="Строка формата для логов",
)
@click.pass_context
def cli(ctx, config_path, backend, timeout_ms, log_level, log_file, log_format):
    """Группа команд SiteMarkdown CLI."""
    init_logging(
        level=log_level,
        log_file=str(log_file) if log_file else None,
        log_format=log_format,
    )
    try:
        cfg = load_config(config_path)
    except Exception as e:
        print_error(f"Ошибка загрузки конфигурации: {e}")
    overrides = {}
    if backend is not None:
        overrides["backend"] = backend
    if timeout_ms is not None:
        overrides["navigation_timeout_ms"] = timeout_ms
    if overrides:
        cfg = cfg.model_copy(update=overrides)
    ctx.ensure_object(dict)
    ctx.obj["config"] = cfg


@cli.command("scrape", context_settings=CONTEXT_SETTINGS)
@click.argument("url", required=False)
@click.option(
    "--debug-dir", "debug_dir",
    default=None,
    type=click.Path(file_okay=False, path_type=Path),
    help="Сохранить очищенный HTML и Markdown в эту папку",
)
@click.pass_context
def scrape(ctx, url, debug_dir):
    """Конвертировать одну страницу в Markdown."""
    markdown = _run(ctx, "scrape", url, debug_dir=debug_dir)
    click.echo("\nConverted Markdown:")
    click.echo(SEPARATOR)
    click.echo(markdown)
    click.echo(SEPARATOR)


@cli.command("crawl", context_settings=CONTEXT_SETTINGS)
@click.argument("url", required=False)
@click.option(
    "--max-pages", "-m", "max_pages",
    type=click.IntRange(min=0),
    default=None,
    help="Макс. число успешно посещённых страниц (override max_pages)",
)
@click.option(
    "--json", "-j", "json_output",
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help="Сохранить JSON-результат в файл",
)
@click.option(
    "--html", "-h", "html_output",
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help="Сохранить HTML-отчёт в файл",
)
@click.option(
    "--template", "-t", "template_dir",
    default=None,
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    help="Папка с шаблоном crawl_report.html.j2 (по умолчанию встроенный)",
)
@click.option("--pretty", is_flag=True, help="Преформатировать JSON-вывод (отступ 2)")
@click.option(
    "--crawl-timeout", "crawl_timeout",
    type=float,
    default=None,
    help="Таймаут всего обхода (секунд)",
)
@click.option(
    "--debug-dir", "debug_dir",
    default=None,
    type=click.Path(file_okay=False, path_type=Path),
    help="Сохранять очищенный HTML и Markdown в эту папку",
)
@click.pass_context
def crawl(ctx, url, max_pages, json_output, html_output, template_dir, pretty, crawl_timeout, debug_dir):
    """Обойти сайт и конвертировать все найденные страницы."""
    cfg = ctx.obj["config"]
    action = run_action("crawl", url, cfg, page_factory=open_page, max_pages=max_pages, debug_dir=debug_dir)
    try:
        if crawl_timeout:
            result = asyncio.run(asyncio.wait_for(action, timeout=crawl_timeout))
        else:
            result = asyncio.run(action)
    except asyncio.TimeoutError:
        print_error(f"Обход не завершён за {crawl_timeout} секунд")
    except ValidationError as e:
        print_error(f"Error: {e}")
    except Exception as e:
        print_error(f"[ERROR] {e}")

    # Без файлов вывода результат идёт в stdout
    if not json_output and not html_output:
        click.echo(to_json(result, pretty=pretty))
        return

    if json_output:
        try:
            saved_json = render_json(result, json_output)
            click.echo(f"JSON report: {saved_json}")
        except Exception as e:
            print_error(f"Ошибка при сохранении JSON: {e}")

    if html_output:
        try:
            saved_html = render_html(result, template_dir, html_output)
            click.echo(f"HTML report: {saved_html}")
        except Exception as e:
            print_error(f"Ошибка при сохранении HTML: {e}")


@cli.command("links", context_settings=CONTEXT_SETTINGS)
@click.argument("url", required=False)
@click.option("--pretty", is_flag=True, help="Преформатировать JSON-вывод (отступ 2)")
@click.pass_context
def links(ctx, url, pretty):
    """Получить список внутренних ссылок страницы."""
    result = _run(ctx, "links", url)
    click.echo(to_json(result, pretty=pretty))


@cli.command("serve", context_settings=CONTEXT_SETTINGS)
@click.option("--host", default=None, help="Адрес (override host)")
@click.option("--port", type=click.IntRange(0, 65535), default=None, help="Порт (override port)")
@click.pass_context
def serve(ctx, host, port):
    """Запустить HTTP-обработчик /{action}/{url}."""
    cfg = ctx.obj["config"]
    overrides = {k: v for k, v in (("host", host), ("port", port)) if v is not None}
    if overrides:
        cfg = cfg.model_copy(update=overrides)
    run_server(cfg)


@cli.command("config", context_settings=CONTEXT_SETTINGS)
@click.pass_context
def show_config(ctx):
    """Показать текущую конфигурацию в JSON."""
    cfg = ctx.obj["config"]
    click.echo(cfg.model_dump_json(indent=2))


if __name__ == "__main__":
    cli()

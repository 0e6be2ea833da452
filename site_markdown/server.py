"""
HTTP handler: ``GET /{action}/{url}`` for scrape, crawl and links.

Results are cached in memory per ``action:url`` for ``cache_ttl`` seconds.
Every request opens its own page through the configured page factory.
"""
from __future__ import annotations

import json
from typing import Dict

from aiohttp import web

from site_markdown.backends import open_page
from site_markdown.cache import ResultCache, cache_key
from site_markdown.config import AppConfig
from site_markdown.engine import PageFactory, run_action
from site_markdown.errors import ValidationError
from site_markdown.logger import get_logger

__all__ = ("create_app", "run_server", "CONFIG_KEY", "CACHE_KEY", "FACTORY_KEY")

_log = get_logger("server")

CONFIG_KEY = web.AppKey("config", AppConfig)
CACHE_KEY = web.AppKey("cache", ResultCache)
FACTORY_KEY = web.AppKey("page_factory", object)

USAGE = "Please provide a URL in the path: /[action]/https://example.com"


def _cors(request: web.Request) -> Dict[str, str]:
    return {"Access-Control-Allow-Origin": request.headers.get("Origin") or "*"}


def _content_headers(request: web.Request, action: str) -> Dict[str, str]:
    headers = {
        "Content-Type": "text/markdown; charset=utf-8" if action == "scrape" else "application/json",
        "Cache-Control": "public, max-age=3600",
    }
    headers.update(_cors(request))
    return headers


def _body(action: str, payload: object) -> str:
    if action == "scrape":
        return str(payload)
    return json.dumps(payload, ensure_ascii=False)


async def handle_options(request: web.Request) -> web.Response:
    headers = _cors(request)
    headers.update(
        {
            "Access-Control-Allow-Methods": "GET, OPTIONS",
            "Access-Control-Allow-Headers": "Content-Type",
            "Access-Control-Max-Age": "86400",
        }
    )
    return web.Response(headers=headers)


async def handle_action(request: web.Request) -> web.Response:
    action = request.match_info.get("action", "")
    # match_info is already percent-decoded once
    target = request.match_info.get("target", "")
    if not target:
        return web.Response(status=400, text=USAGE, headers=_cors(request))
    if request.rel_url.raw_query_string:
        # the target's own query string arrives as ours
        target = f"{target}?{request.rel_url.raw_query_string}"

    config = request.app[CONFIG_KEY]
    cache = request.app[CACHE_KEY]
    key = cache_key(action, target)

    cached = cache.get(key)
    if cached is not None:
        _log.debug("Cache hit for %s", key)
        return web.Response(text=_body(action, cached), headers=_content_headers(request, action))

    page_factory: PageFactory = request.app[FACTORY_KEY]  # type: ignore[assignment]
    try:
        result = await run_action(action, target, config, page_factory=page_factory)
    except ValidationError as exc:
        return web.Response(status=400, text=str(exc), headers=_cors(request))
    except Exception as exc:
        _log.exception("Request %s failed", key)
        return web.Response(status=500, text=str(exc) or "Internal server error", headers=_cors(request))

    payload = result if isinstance(result, str) else result.to_payload()
    cache.put(key, payload)
    return web.Response(text=_body(action, payload), headers=_content_headers(request, action))


def create_app(config: AppConfig, page_factory: PageFactory = open_page) -> web.Application:
    app = web.Application()
    app[CONFIG_KEY] = config
    app[CACHE_KEY] = ResultCache(config.cache_ttl)
    app[FACTORY_KEY] = page_factory
    app.router.add_route("OPTIONS", "/{tail:.*}", handle_options)
    app.router.add_get("/{action}/{target:.*}", handle_action)
    app.router.add_get("/{action}", handle_action)
    app.router.add_get("/", handle_action)
    return app


def run_server(config: AppConfig) -> None:
    """Blocking: serve the handler on ``config.host:config.port``."""
    _log.info("Serving on http://%s:%d", config.host, config.port)
    web.run_app(create_app(config), host=config.host, port=config.port, print=None)

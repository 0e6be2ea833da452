# site_markdown/validation.py
"""
Проверка входного URL и фильтры блокируемых запросов (реклама, медиа).
"""
from __future__ import annotations

import re
from typing import Iterable, Optional, Sequence

from site_markdown.errors import ValidationError

__all__: Sequence[str] = (
    "BLOCKED_DOMAINS",
    "BLOCKED_EXTENSIONS",
    "validate_url",
    "is_blocked_domain",
    "is_blocked_media",
)

BLOCKED_DOMAINS: tuple[str, ...] = (
    "doubleclick.net",
    "adservice.google.com",
    "googlesyndication.com",
    "googletagservices.com",
    "googletagmanager.com",
    "google-analytics.com",
    "adsystem.com",
    "adservice.com",
    "adnxs.com",
    "ads-twitter.com",
    "facebook.net",
    "fbcdn.net",
    "amazon-adsystem.com",
)

BLOCKED_EXTENSIONS: tuple[str, ...] = (
    ".png",
    ".jpg",
    ".jpeg",
    ".gif",
    ".svg",
    ".mp3",
    ".mp4",
    ".avi",
    ".flac",
    ".ogg",
    ".wav",
    ".webm",
)

_HTTP_URL_RE = re.compile(r"^https?://.+")


def validate_url(url: Optional[str], error_message: str) -> str:
    """Возвращает url, если он задан и начинается с http(s)://, иначе ValidationError."""
    if not url:
        raise ValidationError(error_message)
    if not _HTTP_URL_RE.match(url):
        raise ValidationError("Invalid URL. Must start with http:// or https://")
    return url


def is_blocked_domain(hostname: str, domains: Iterable[str] = BLOCKED_DOMAINS) -> bool:
    return any(domain in hostname for domain in domains)


def is_blocked_media(pathname: str, extensions: Iterable[str] = BLOCKED_EXTENSIONS) -> bool:
    return any(pathname.endswith(ext) for ext in extensions)

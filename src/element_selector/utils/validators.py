"""Validation helpers."""

from __future__ import annotations

from urllib.parse import urlparse


def is_valid_http_url(url: str) -> bool:
    try:
        parsed = urlparse(url)
        return parsed.scheme in ("http", "https") and bool(parsed.netloc)
    except Exception:
        return False


def html_size_bytes(html: str) -> int:
    return len(html.encode("utf-8", errors="replace"))

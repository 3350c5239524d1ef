"""
General utilities used by the package.
"""

from __future__ import annotations

from hashlib import sha256
from re import sub
from time import time
from urllib.parse import urlsplit

from .consts import API_BASE, ENCODING, KEY_HASH_LENGTH


def api_path(url: str) -> str:
    """
    Reduce an absolute GitHub API URL to its service-relative path.

    Args:
        url: Absolute URL (e.g. a repository's `languages_url`) or a path.

    Return:
        str: Path starting with `/`, query string preserved.

    """

    if url.lower().startswith(API_BASE):
        url = url[len(API_BASE) :]

    parts = urlsplit(url)
    if parts.scheme or parts.netloc:
        return url

    path = parts.path if parts.path.startswith("/") else f"/{parts.path}"
    return f"{path}?{parts.query}" if parts.query else path


def cache_key(path: str) -> str:
    """
    Derive a filesystem-safe storage key from a request path.

    Args:
        path: Request identity.

    Return:
        str: Normalized path followed by a short digest of the raw path.

    """

    digest = sha256(path.encode(ENCODING)).hexdigest()[:KEY_HASH_LENGTH]
    return f"{sub(r'[^a-zA-Z0-9]', '_', path)}_{digest}"


def now_ms() -> int:
    """
    Current time in milliseconds since the epoch.
    """

    return int(time() * 1000)

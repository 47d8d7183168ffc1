"""
Byte loader for external schema documents referenced through ``$ref``.

http(s) locators are fetched with httpx; ``file://`` URLs and bare paths
are read from disk. Anything else is treated as a path.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable
from urllib.parse import unquote, urlsplit

import httpx

from schemacheck.config import settings
from schemacheck.engine.errors import DocumentLoadError

logger = logging.getLogger(__name__)

Loader = Callable[[str], bytes]


def is_remote(locator: str) -> bool:
    return urlsplit(locator).scheme in ("http", "https")


def load(url: str, *, timeout: float | None = None, allow_remote: bool | None = None) -> bytes:
    """Return the raw bytes behind ``url`` or raise DocumentLoadError."""
    if is_remote(url):
        if allow_remote is None:
            allow_remote = settings.ALLOW_REMOTE_REFS
        if not allow_remote:
            raise DocumentLoadError(f"remote references are disabled: {url}")
        try:
            response = httpx.get(
                url,
                timeout=timeout if timeout is not None else settings.REF_LOAD_TIMEOUT,
                follow_redirects=True,
            )
            response.raise_for_status()
        except httpx.HTTPError as exc:
            raise DocumentLoadError(f"cannot fetch {url}: {exc}") from exc
        logger.info("Fetched schema document %s (%d bytes)", url, len(response.content))
        return response.content

    parts = urlsplit(url)
    path = Path(unquote(parts.path)) if parts.scheme == "file" else Path(url)
    try:
        data = path.read_bytes()
    except OSError as exc:
        raise DocumentLoadError(f"cannot read {path}: {exc}") from exc
    logger.info("Read schema document %s (%d bytes)", path, len(data))
    return data


def load_remote_only(url: str, *, allow_remote: bool | None = None) -> bytes:
    """
    Loader for untrusted schemas: local files are never read, and remote
    documents only when API_ALLOW_REMOTE_REFS (and ALLOW_REMOTE_REFS) is on.
    """
    if not is_remote(url):
        raise DocumentLoadError(f"local schema documents are not available: {url}")
    if allow_remote is None:
        allow_remote = settings.API_ALLOW_REMOTE_REFS and settings.ALLOW_REMOTE_REFS
    return load(url, allow_remote=allow_remote)

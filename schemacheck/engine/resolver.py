"""
``$ref`` resolution.

A ref is split on ``#`` into a locator (empty = the root document) and a
JSON-Pointer fragment. External documents are loaded once, and every
``$ref`` inside them is rewritten to an absolute locator at load time so
pointers keep resolving from the caller's side. The caches, failed
lookups included, are write-once per key and guarded by a lock, so one
resolver can serve concurrent validations of the same schema document.
"""

from __future__ import annotations

import logging
import threading
from typing import Any
from urllib.parse import unquote, urldefrag, urljoin, urlsplit

from schemacheck.engine import loader as default_loader
from schemacheck.engine.codec import parse
from schemacheck.engine.errors import DocumentLoadError, RefResolutionError
from schemacheck.engine.loader import Loader

logger = logging.getLogger(__name__)


def is_absolute(locator: str) -> bool:
    """Whether a locator carries a scheme/host or is an absolute path."""
    parts = urlsplit(locator)
    return bool(parts.scheme or parts.netloc) or locator.startswith("/")


def absolutize_ref(ref: str, document_url: str) -> str:
    if ref.startswith("#"):
        return f"{document_url}{ref}"
    if is_absolute(ref):
        return ref
    return urljoin(document_url, ref)


def rewrite_refs(node: Any, document_url: str) -> Any:
    """Copy of ``node`` with every nested ``$ref`` made absolute against ``document_url``."""
    if isinstance(node, dict):
        rewritten = {}
        for key, value in node.items():
            if key == "$ref" and isinstance(value, str):
                rewritten[key] = absolutize_ref(value, document_url)
            else:
                rewritten[key] = rewrite_refs(value, document_url)
        return rewritten
    if isinstance(node, list):
        return [rewrite_refs(item, document_url) for item in node]
    return node


def resolve_pointer(document: Any, fragment: str, ref: str) -> Any:
    """Walk a JSON-Pointer fragment (without the leading ``#``) through ``document``."""
    path = fragment[1:] if fragment.startswith("/") else fragment
    if not path:
        return document

    node = document
    for raw in path.split("/"):
        segment = unquote(raw).replace("~1", "/").replace("~0", "~")
        if isinstance(node, dict):
            if segment not in node:
                raise RefResolutionError(ref, f"key {segment!r} not found")
            node = node[segment]
        elif isinstance(node, list) and segment.isdigit() and int(segment) < len(node):
            node = node[int(segment)]
        else:
            raise RefResolutionError(ref, f"cannot descend into {segment!r}")
    return node


class RefResolver:
    """Resolves ``$ref`` strings against one root schema document."""

    def __init__(
        self,
        root: Any,
        *,
        base_uri: str | None = None,
        loader: Loader | None = None,
    ):
        self.root = root
        self.base_uri = urldefrag(base_uri).url if base_uri else None
        self._loader = loader or default_loader.load
        self._refs: dict[str, Any] = {}
        self._documents: dict[str, Any] = {}
        # failures are cached too: an unreachable document is asked for once
        self._failures: dict[str, RefResolutionError] = {}
        self._failed_documents: dict[str, RefResolutionError] = {}
        self._lock = threading.Lock()

    def canonical(self, ref: str) -> str:
        """Absolute form of ``ref``; refs naming the root document by its id become local."""
        locator, hash_sign, fragment = ref.partition("#")
        if locator and self.base_uri:
            if not is_absolute(locator):
                locator = urljoin(self.base_uri, locator)
            if locator == self.base_uri:
                locator = ""
        return f"{locator}{hash_sign}{fragment}"

    def resolve(self, ref: str) -> Any:
        """Return the schema node behind ``ref`` or raise RefResolutionError."""
        key = self.canonical(ref)
        with self._lock:
            if key in self._refs:
                logger.debug("$ref cache hit: %s", key)
                return self._refs[key]
            if key in self._failures:
                logger.debug("$ref failure cache hit: %s", key)
                raise self._failures[key]

        logger.debug("$ref cache miss: %s", key)
        locator, _, fragment = key.partition("#")
        try:
            document = self._document(locator) if locator else self.root
            node = resolve_pointer(document, fragment, ref)
        except RefResolutionError as exc:
            with self._lock:
                self._failures.setdefault(key, exc)
            raise

        with self._lock:
            return self._refs.setdefault(key, node)

    def _document(self, url: str) -> Any:
        with self._lock:
            if url in self._documents:
                return self._documents[url]
            if url in self._failed_documents:
                raise self._failed_documents[url]

        try:
            document = self._load_document(url)
        except RefResolutionError as exc:
            logger.warning("Cannot load schema document %s: %s", url, exc.reason)
            with self._lock:
                self._failed_documents.setdefault(url, exc)
            raise

        with self._lock:
            return self._documents.setdefault(url, document)

    def _load_document(self, url: str) -> Any:
        try:
            raw = self._loader(url)
        except (DocumentLoadError, OSError) as exc:
            raise RefResolutionError(url, str(exc)) from exc
        try:
            document = parse(raw)
        except ValueError as exc:
            raise RefResolutionError(url, f"document is not valid JSON: {exc}") from exc
        if not isinstance(document, (dict, bool)):
            raise RefResolutionError(url, "document is not a schema")
        return rewrite_refs(document, url)

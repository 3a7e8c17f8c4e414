"""Path-keyed cache of parsed manifests."""

from __future__ import annotations

import threading
from pathlib import Path
from typing import Dict, Optional

import structlog

from deployinfo.core.models import ParsedManifest
from deployinfo.manifest.parser import ManifestParser

logger = structlog.get_logger()


class ParsedManifestService:
    """Parses manifests on demand and caches the result per file.

    One instance is shared by everything that reads manifests for a project;
    entries stay until invalidated, so callers that know a file was rebuilt
    must call ``invalidate_cached_manifest``.
    """

    def __init__(self, parser: Optional[ManifestParser] = None):
        self.parser = parser or ManifestParser()
        self._cache: Dict[Path, ParsedManifest] = {}
        self._lock = threading.Lock()

    @staticmethod
    def _key(manifest_file: Path) -> Path:
        return Path(manifest_file).resolve()

    def get_parsed_manifest(self, manifest_file: Path) -> ParsedManifest:
        """Return the parsed manifest, parsing it on a cache miss.

        Raises:
            OSError: If the manifest cannot be read or parsed
        """
        key = self._key(manifest_file)
        with self._lock:
            cached = self._cache.get(key)
        if cached is not None:
            logger.debug("Manifest cache hit", manifest=str(key))
            return cached

        logger.debug("Manifest cache miss", manifest=str(key))
        manifest = self.parser.parse(key)
        with self._lock:
            self._cache[key] = manifest
        return manifest

    def invalidate_cached_manifest(self, manifest_file: Path) -> None:
        """Drop the cached parse for ``manifest_file``; a no-op if absent."""
        key = self._key(manifest_file)
        with self._lock:
            removed = self._cache.pop(key, None)
        if removed is not None:
            logger.debug("Invalidated cached manifest", manifest=str(key))

    def is_cached(self, manifest_file: Path) -> bool:
        key = self._key(manifest_file)
        with self._lock:
            return key in self._cache

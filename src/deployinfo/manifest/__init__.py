"""Merged manifest parsing and caching."""

from .parser import ManifestParser
from .service import ParsedManifestService

__all__ = ["ManifestParser", "ParsedManifestService"]

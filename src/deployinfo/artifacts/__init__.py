"""Build artifact lookup."""

from .locator import BuildArtifactLocator, BuildEventLocator, PathFilter
from .models import BuildArtifact, LocalFileArtifact, RemoteOutputArtifact, get_local_files

__all__ = [
    "BuildArtifactLocator",
    "BuildEventLocator",
    "PathFilter",
    "BuildArtifact",
    "LocalFileArtifact",
    "RemoteOutputArtifact",
    "get_local_files",
]

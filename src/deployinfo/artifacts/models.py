"""Build artifact references returned by artifact locators."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, List, Union

from pydantic import BaseModel, ConfigDict, Field


class LocalFileArtifact(BaseModel):
    """An output file present on the local filesystem."""

    model_config = ConfigDict(frozen=True)

    path: Path = Field(..., description="Absolute local path")
    relative_path: str = Field(..., description="Output path relative to the output root")


class RemoteOutputArtifact(BaseModel):
    """An output that only exists in remote storage (e.g. bytestream://)."""

    model_config = ConfigDict(frozen=True)

    uri: str
    relative_path: str


BuildArtifact = Union[LocalFileArtifact, RemoteOutputArtifact]


def get_local_files(artifacts: Iterable[BuildArtifact]) -> List[Path]:
    """Return the local paths among ``artifacts``, in order."""
    return [a.path for a in artifacts if isinstance(a, LocalFileArtifact)]

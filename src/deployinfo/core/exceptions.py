"""Custom exceptions for deployinfo."""

from enum import Enum
from pathlib import Path
from typing import Optional, Sequence


class ArtifactErrorKind(str, Enum):
    """Kinds of artifact retrieval failure, for callers that branch on kind."""

    RETRIEVAL_FAILED = "retrieval_failed"
    INVALID_TARGET = "invalid_target"
    NO_ARTIFACT = "no_artifact"
    AMBIGUOUS_ARTIFACT = "ambiguous_artifact"
    MISSING_FILE = "missing_file"
    DECODE_FAILED = "decode_failed"
    MANIFEST_READ_FAILED = "manifest_read_failed"


class DeployInfoError(Exception):
    """Base exception for all deployinfo errors."""

    def __init__(self, message: str, code: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.code = code


class ConfigurationError(DeployInfoError):
    """Configuration error."""
    pass


class GetArtifactsError(DeployInfoError):
    """Build artifacts could not be retrieved."""

    kind: ArtifactErrorKind = ArtifactErrorKind.RETRIEVAL_FAILED

    def __init__(self, message: str, code: Optional[str] = None):
        super().__init__(message, code or self.kind.value)


class NoArtifactError(GetArtifactsError):
    """No deploy info artifact was produced for the target."""

    kind = ArtifactErrorKind.NO_ARTIFACT


class AmbiguousArtifactError(GetArtifactsError):
    """More than one deploy info artifact matched."""

    kind = ArtifactErrorKind.AMBIGUOUS_ARTIFACT

    def __init__(self, message: str, paths: Sequence[Path] = ()):
        super().__init__(message)
        self.paths = tuple(paths)


class MissingFileError(GetArtifactsError):
    """The deploy info artifact is not present on disk."""

    kind = ArtifactErrorKind.MISSING_FILE

    def __init__(self, message: str, path: Optional[Path] = None):
        super().__init__(message)
        self.path = path


class DecodeError(GetArtifactsError):
    """The deploy info artifact could not be read or decoded."""

    kind = ArtifactErrorKind.DECODE_FAILED


class ManifestReadError(GetArtifactsError):
    """A merged manifest referenced by the deploy info could not be read."""

    kind = ArtifactErrorKind.MANIFEST_READ_FAILED

    def __init__(self, message: str, manifest_path: Optional[Path] = None):
        super().__init__(message)
        self.manifest_path = manifest_path


class InvalidTargetError(GetArtifactsError):
    """The target is not a label artifacts can be looked up for."""

    kind = ArtifactErrorKind.INVALID_TARGET

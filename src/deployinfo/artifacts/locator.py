"""Build artifact lookup.

A locator answers "which outputs did the build produce for this target";
the default implementation reads the JSON build event protocol stream that
``bazel build --build_event_json_file=...`` writes.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Callable, Dict, Iterable, List, Optional, Protocol, Sequence, Set
from urllib.parse import unquote, urlparse

import structlog

from deployinfo.artifacts.models import BuildArtifact, LocalFileArtifact, RemoteOutputArtifact
from deployinfo.core.config import Settings
from deployinfo.core.exceptions import ConfigurationError, GetArtifactsError
from deployinfo.core.models import Label


logger = structlog.get_logger()

PathFilter = Callable[[str], bool]


class BuildArtifactLocator(Protocol):
    """Resolves a target to the build outputs matching a path filter."""

    def get_build_artifacts_for_target(
        self, target: Label, path_filter: PathFilter
    ) -> List[BuildArtifact]:
        ...


def _same_label(reported: str, target: Label) -> bool:
    try:
        return Label.parse(reported) == target
    except ValueError:
        return False


def _artifact_from_file(entry: dict) -> Optional[BuildArtifact]:
    """Convert a namedSetOfFiles file entry into an artifact."""
    name = entry.get("name")
    uri = entry.get("uri")
    if not name or not uri:
        return None
    relative_path = "/".join(list(entry.get("pathPrefix", [])) + [name])
    parsed = urlparse(uri)
    if parsed.scheme == "file":
        return LocalFileArtifact(path=Path(unquote(parsed.path)), relative_path=relative_path)
    return RemoteOutputArtifact(uri=uri, relative_path=relative_path)


class BuildEventLocator:
    """Locates target outputs in a build event protocol JSON file."""

    def __init__(self, build_event_file: Path, output_groups: Sequence[str] = ("android_deploy_info",)):
        """Initialize the locator.

        Args:
            build_event_file: File written via --build_event_json_file
            output_groups: Output groups to collect; empty means all groups
        """
        self.build_event_file = build_event_file
        self.output_groups = tuple(output_groups)

    @classmethod
    def from_settings(cls, settings: Settings) -> "BuildEventLocator":
        if not settings.build_event_file:
            raise ConfigurationError("No build event file configured (DEPLOYINFO_BUILD_EVENT_FILE)")
        return cls(Path(settings.build_event_file), (settings.output_group,))

    def get_build_artifacts_for_target(
        self, target: Label, path_filter: PathFilter
    ) -> List[BuildArtifact]:
        named_sets, file_set_ids = self._scan(target)

        artifacts: List[BuildArtifact] = []
        seen: Set[str] = set()
        for artifact in self._expand(file_set_ids, named_sets):
            if not path_filter(artifact.relative_path):
                continue
            key = artifact.relative_path
            if key in seen:
                continue
            seen.add(key)
            artifacts.append(artifact)

        logger.debug(
            "Resolved build artifacts",
            target=str(target),
            output_groups=list(self.output_groups),
            count=len(artifacts),
        )
        return artifacts

    def _read_events(self) -> Iterable[dict]:
        try:
            with open(self.build_event_file, encoding="utf-8") as f:
                for line_no, line in enumerate(f, start=1):
                    line = line.strip()
                    if not line:
                        continue
                    try:
                        event = json.loads(line)
                    except json.JSONDecodeError as e:
                        raise GetArtifactsError(
                            f"Malformed build event at {self.build_event_file}:{line_no}: {e}"
                        ) from e
                    if not isinstance(event, dict) or not isinstance(event.get("id", {}), dict):
                        raise GetArtifactsError(
                            f"Malformed build event at {self.build_event_file}:{line_no}: "
                            "expected an object with an object 'id'"
                        )
                    yield event
        except (OSError, UnicodeDecodeError) as e:
            raise GetArtifactsError(
                f"Could not read build event file {self.build_event_file}: {e}"
            ) from e

    def _scan(self, target: Label):
        """Collect named file sets and the file set ids reported for ``target``."""
        named_sets: Dict[str, dict] = {}
        file_set_ids: List[str] = []
        for event in self._read_events():
            event_id = event.get("id", {})
            try:
                if "namedSet" in event_id:
                    named_sets[event_id["namedSet"].get("id")] = event.get("namedSetOfFiles", {})
                elif "targetCompleted" in event_id:
                    if not _same_label(event_id["targetCompleted"].get("label", ""), target):
                        continue
                    for group in event.get("completed", {}).get("outputGroup", []):
                        if self.output_groups and group.get("name") not in self.output_groups:
                            continue
                        file_set_ids.extend(fs.get("id") for fs in group.get("fileSets", []))
            except (AttributeError, TypeError) as e:
                raise GetArtifactsError(
                    f"Unexpected build event shape in {self.build_event_file}: {e}"
                ) from e
        return named_sets, file_set_ids

    def _expand(self, file_set_ids: List[str], named_sets: Dict[str, dict]) -> Iterable[BuildArtifact]:
        visited: Set[str] = set()
        pending = list(file_set_ids)
        while pending:
            set_id = pending.pop(0)
            if set_id in visited:
                continue
            visited.add(set_id)
            named_set = named_sets.get(set_id)
            if named_set is None:
                logger.warning("Build event references unknown file set", file_set=set_id)
                continue
            for entry in named_set.get("files", []):
                artifact = _artifact_from_file(entry)
                if artifact is not None:
                    yield artifact
            pending.extend(fs.get("id") for fs in named_set.get("fileSets", []))

"""
Pytest configuration and fixtures for deployinfo tests.
"""

from pathlib import Path
from typing import Dict, List

import pytest
from structlog.contextvars import clear_contextvars
from structlog import reset_defaults

from deployinfo.artifacts.models import BuildArtifact, LocalFileArtifact
from deployinfo.core.models import Label, ParsedManifest
from deployinfo.proto import AndroidDeployInfo


MANIFEST_TEMPLATE = """\
<?xml version="1.0" encoding="utf-8"?>
<manifest xmlns:android="http://schemas.android.com/apk/res/android" package="{package}">
  <application>
    <activity android:name=".MainActivity">
      <intent-filter>
        <action android:name="android.intent.action.MAIN" />
        <category android:name="android.intent.category.LAUNCHER" />
      </intent-filter>
    </activity>
  </application>
</manifest>
"""


class FakeLocator:
    """Locator returning a fixed artifact list and recording its calls."""

    def __init__(self, artifacts: List[BuildArtifact]):
        self.artifacts = artifacts
        self.calls = []

    def get_build_artifacts_for_target(self, target, path_filter):
        self.calls.append(target)
        return [a for a in self.artifacts if path_filter(a.relative_path)]


class RecordingManifests:
    """Manifest lookup/invalidate pair that records the order of calls."""

    def __init__(self, manifests: Dict[Path, ParsedManifest] = None, failing: Dict[Path, OSError] = None):
        self.manifests = manifests or {}
        self.failing = failing or {}
        self.events = []

    def lookup(self, path: Path) -> ParsedManifest:
        self.events.append(("lookup", path))
        if path in self.failing:
            raise self.failing[path]
        return self.manifests.get(path, ParsedManifest(package_name=path.parent.name))

    def invalidate(self, path: Path) -> None:
        self.events.append(("invalidate", path))


@pytest.fixture
def target() -> Label:
    return Label.parse("//java/com/example:app")


@pytest.fixture
def execution_root(tmp_path: Path) -> Path:
    root = tmp_path / "execroot"
    root.mkdir()
    return root


@pytest.fixture
def write_deploy_info(tmp_path: Path):
    """Write an AndroidDeployInfo proto and return its path."""

    def _write(
        merged_manifest: str = "bazel-out/bin/app/AndroidManifest.xml",
        additional_manifests: List[str] = (),
        apks: List[str] = (),
        name: str = "app.deployinfo.pb",
    ) -> Path:
        deploy_info = AndroidDeployInfo()
        deploy_info.merged_manifest.exec_root_path = merged_manifest
        for path in additional_manifests:
            deploy_info.additional_merged_manifests.add(exec_root_path=path)
        for path in apks:
            deploy_info.apks_to_deploy.add(exec_root_path=path)
        out = tmp_path / name
        out.write_bytes(deploy_info.SerializeToString())
        return out

    return _write


@pytest.fixture
def write_manifest(execution_root: Path):
    """Write a merged manifest under the execution root."""

    def _write(exec_root_path: str, package: str = "com.example.app") -> Path:
        path = execution_root / exec_root_path
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(MANIFEST_TEMPLATE.format(package=package), encoding="utf-8")
        return path

    return _write


def local(path: Path) -> LocalFileArtifact:
    return LocalFileArtifact(path=path, relative_path=f"bazel-out/bin/{path.name}")


@pytest.fixture(autouse=True)
def reset_structlog():
    """Undo logging configuration and bound context between tests."""
    yield
    clear_contextvars()
    reset_defaults()

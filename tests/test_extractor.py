"""
Tests for DeployInfoExtractor wiring.
"""

from pathlib import Path

import pytest

from conftest import FakeLocator, local
from deployinfo.core.config import Settings
from deployinfo.artifacts import BuildEventLocator
from deployinfo.core.exceptions import (
    ArtifactErrorKind,
    ConfigurationError,
    InvalidTargetError,
    ManifestReadError,
    NoArtifactError,
)
from deployinfo.deploy import DeployInfoExtractor
from deployinfo.manifest import ParsedManifestService


def _extractor(locator, service=None, **settings):
    return DeployInfoExtractor(
        "example-project",
        locator,
        service or ParsedManifestService(),
        Settings(**settings),
    )


def test_extract_builds_plan_and_leaves_cache_clean(execution_root: Path, write_deploy_info, write_manifest):
    app_manifest = write_manifest("bazel-out/bin/app/AndroidManifest.xml", package="com.example.app")
    test_manifest = write_manifest("bazel-out/bin/app_test/AndroidManifest.xml", package="com.example.app.test")
    deploy_info_file = write_deploy_info(
        merged_manifest="bazel-out/bin/app_test/AndroidManifest.xml",
        additional_manifests=["bazel-out/bin/app/AndroidManifest.xml"],
        apks=["bazel-out/bin/app/app.apk", "bazel-out/bin/app_test/app_test.apk"],
    )
    service = ParsedManifestService()
    extractor = _extractor(FakeLocator([local(deploy_info_file)]), service)

    plan = extractor.extract("//java/com/example:app_test", execution_root)

    assert plan.merged_manifest.package_name == "com.example.app.test"
    assert plan.test_target_merged_manifest.package_name == "com.example.app"
    assert plan.test_target_merged_manifest.default_activity_class_name == "com.example.app.MainActivity"
    assert plan.apks_to_deploy == (
        execution_root / "bazel-out/bin/app/app.apk",
        execution_root / "bazel-out/bin/app_test/app_test.apk",
    )
    assert not service.is_cached(app_manifest)
    assert not service.is_cached(test_manifest)


def test_extract_propagates_artifact_errors(execution_root: Path):
    extractor = _extractor(FakeLocator([]))
    with pytest.raises(NoArtifactError):
        extractor.extract("//java/com/example:app", execution_root)


def test_try_extract_returns_error_kind(execution_root: Path):
    outcome = _extractor(FakeLocator([])).try_extract("//java/com/example:app", execution_root)

    assert not outcome.ok
    assert outcome.plan is None
    assert outcome.kind == ArtifactErrorKind.NO_ARTIFACT


def test_try_extract_missing_manifest(execution_root: Path, write_deploy_info):
    deploy_info_file = write_deploy_info(merged_manifest="bazel-out/bin/app/AndroidManifest.xml")
    outcome = _extractor(FakeLocator([local(deploy_info_file)])).try_extract(
        "//java/com/example:app", execution_root
    )

    assert outcome.kind == ArtifactErrorKind.MANIFEST_READ_FAILED
    assert isinstance(outcome.error, ManifestReadError)


def test_try_extract_success(execution_root: Path, write_deploy_info, write_manifest):
    write_manifest("app/AndroidManifest.xml")
    deploy_info_file = write_deploy_info(merged_manifest="app/AndroidManifest.xml", apks=["app/app.apk"])
    outcome = _extractor(FakeLocator([local(deploy_info_file)])).try_extract(
        "//java/com/example:app", execution_root
    )

    assert outcome.ok
    assert outcome.kind is None
    assert outcome.plan.apks_to_deploy == (execution_root / "app/app.apk",)


def test_default_path_filter_follows_settings(execution_root: Path, write_deploy_info, write_manifest):
    write_manifest("app/AndroidManifest.xml")
    standard = write_deploy_info(merged_manifest="app/AndroidManifest.xml", name="app.deployinfo.pb")
    mobile_install = write_deploy_info(merged_manifest="app/AndroidManifest.xml", name="app_mi.deployinfo.pb")
    locator = FakeLocator([local(standard), local(mobile_install)])

    outcome = _extractor(locator).try_extract("//java/com/example:app", execution_root)
    assert outcome.kind == ArtifactErrorKind.AMBIGUOUS_ARTIFACT

    plan = _extractor(locator, deploy_info_suffix="_mi.deployinfo.pb").extract("//java/com/example:app", execution_root)
    assert plan.merged_manifest.package_name == "com.example.app"


def test_extract_accepts_explicit_path_filter(execution_root: Path, write_deploy_info, write_manifest):
    write_manifest("app/AndroidManifest.xml")
    deploy_info_file = write_deploy_info(merged_manifest="app/AndroidManifest.xml", name="app.deployinfo.pb")
    extractor = _extractor(FakeLocator([local(deploy_info_file)]))

    outcome = extractor.try_extract("//java/com/example:app", execution_root, path_filter=lambda p: p.endswith(".apk"))
    assert outcome.kind == ArtifactErrorKind.NO_ARTIFACT


def test_external_repository_label_is_an_artifact_error(execution_root: Path):
    locator = FakeLocator([])
    extractor = _extractor(locator)

    with pytest.raises(InvalidTargetError, match="@maven//lib:lib"):
        extractor.extract("@maven//lib:lib", execution_root)

    outcome = extractor.try_extract("@maven//lib:lib", execution_root)
    assert outcome.kind == ArtifactErrorKind.INVALID_TARGET
    assert locator.calls == []


def test_from_settings_reads_build_events(tmp_path: Path, monkeypatch):
    monkeypatch.setenv("DEPLOYINFO_BUILD_EVENT_FILE", str(tmp_path / "bep.json"))
    monkeypatch.setenv("DEPLOYINFO_OUTPUT_GROUP", "mobile_install_INTERNAL_")

    extractor = DeployInfoExtractor.from_settings("example-project", setup_logs=False)

    assert isinstance(extractor.locator, BuildEventLocator)
    assert extractor.locator.output_groups == ("mobile_install_INTERNAL_",)
    assert isinstance(extractor.manifest_service, ParsedManifestService)


def test_from_settings_without_build_event_file(monkeypatch):
    monkeypatch.delenv("DEPLOYINFO_BUILD_EVENT_FILE", raising=False)
    with pytest.raises(ConfigurationError):
        DeployInfoExtractor.from_settings("example-project", setup_logs=False)

"""Reads the deploy info from a build step and turns it into a deployment plan."""

from __future__ import annotations

from pathlib import Path
from typing import Callable, List, Optional

import structlog
from google.protobuf import message as protobuf_message

from deployinfo.artifacts.locator import BuildArtifactLocator, PathFilter
from deployinfo.artifacts.models import get_local_files
from deployinfo.core.exceptions import (
    AmbiguousArtifactError,
    DecodeError,
    ManifestReadError,
    MissingFileError,
    NoArtifactError,
)
from deployinfo.core.models import DeploymentPlan, Label, ParsedManifest
from deployinfo.proto import AndroidDeployInfo


logger = structlog.get_logger()

ManifestLookup = Callable[[Path], ParsedManifest]
ManifestInvalidate = Callable[[Path], None]


def deploy_info_path_filter(suffix: str = ".deployinfo.pb") -> PathFilter:
    """Path filter selecting the deploy info proto among a target's outputs."""
    return lambda path: path.endswith(suffix)


def locate_deploy_info_file(
    target: Label, locator: BuildArtifactLocator, path_filter: PathFilter
) -> Path:
    """Return the single local deploy info file the build produced for ``target``.

    Raises:
        NoArtifactError: If nothing matched
        AmbiguousArtifactError: If more than one file matched
        MissingFileError: If the matched file is not on disk
        GetArtifactsError: If the locator itself failed
    """
    artifacts = get_local_files(locator.get_build_artifacts_for_target(target, path_filter))
    if not artifacts:
        raise NoArtifactError(
            "No deploy info proto artifact found. Was android_deploy_info in the output groups?"
        )
    if len(artifacts) != 1:
        joined = ", ".join(str(p) for p in artifacts)
        raise AmbiguousArtifactError(
            f"More than one deploy info proto artifact found: [{joined}]", paths=artifacts
        )

    deploy_info_file = artifacts[0]
    if not deploy_info_file.exists():
        raise MissingFileError(f"Deploy info file doesn't exist: {deploy_info_file}", path=deploy_info_file)
    return deploy_info_file


def decode_deploy_info(deploy_info_file: Path) -> AndroidDeployInfo:
    """Decode a deploy info proto file.

    Raises:
        DecodeError: If the file cannot be read or is not a valid AndroidDeployInfo
    """
    deploy_info = AndroidDeployInfo()
    try:
        with open(deploy_info_file, "rb") as f:
            deploy_info.ParseFromString(f.read())
    except (OSError, protobuf_message.DecodeError) as e:
        logger.warning("Failed to decode deploy info", path=deploy_info_file, error=str(e))
        raise DecodeError(str(e)) from e
    return deploy_info


def read_deploy_info_for_target(
    target: Label, locator: BuildArtifactLocator, path_filter: PathFilter
) -> AndroidDeployInfo:
    """Locate and decode the deploy info proto for ``target``."""
    deploy_info_file = locate_deploy_info_file(target, locator, path_filter)
    deploy_info = decode_deploy_info(deploy_info_file)
    logger.info("Read deploy info", target=str(target), path=deploy_info_file)
    return deploy_info


def _get_parsed_manifest_safe(manifest_lookup: ManifestLookup, manifest_file: Path) -> ParsedManifest:
    """Transforms a raised OSError into ManifestReadError."""
    try:
        return manifest_lookup(manifest_file)
    except OSError as e:
        raise ManifestReadError(
            f"Could not read merged manifest file {manifest_file} due to error: {e}",
            manifest_path=manifest_file,
        ) from e


def _read_and_invalidate(
    execution_root: Path,
    exec_root_path: str,
    manifest_lookup: ManifestLookup,
    manifest_invalidate: ManifestInvalidate,
) -> ParsedManifest:
    manifest_file = execution_root / exec_root_path
    manifest = _get_parsed_manifest_safe(manifest_lookup, manifest_file)
    manifest_invalidate(manifest_file)
    return manifest


def build_deployment_plan(
    execution_root: Path,
    deploy_info: AndroidDeployInfo,
    manifest_lookup: ManifestLookup,
    manifest_invalidate: ManifestInvalidate,
) -> DeploymentPlan:
    """Resolve the manifests and APKs named by ``deploy_info`` against ``execution_root``.

    The cached parse of each manifest read is invalidated after a successful
    read, so later readers see the rebuilt file.

    Raises:
        ManifestReadError: If a merged manifest cannot be read
    """
    execution_root = Path(execution_root)
    merged_manifest = _read_and_invalidate(
        execution_root,
        deploy_info.merged_manifest.exec_root_path,
        manifest_lookup,
        manifest_invalidate,
    )

    # android_test keeps the manifest of the app under test in additional_merged_manifests.
    # Anything other than exactly one entry is ignored.
    test_target_merged_manifest: Optional[ParsedManifest] = None
    additional_manifests = deploy_info.additional_merged_manifests
    if len(additional_manifests) == 1:
        test_target_merged_manifest = _read_and_invalidate(
            execution_root,
            additional_manifests[0].exec_root_path,
            manifest_lookup,
            manifest_invalidate,
        )
    elif len(additional_manifests) > 1:
        logger.debug("Ignoring additional merged manifests", count=len(additional_manifests))

    apks_to_deploy: List[Path] = [
        execution_root / artifact.exec_root_path for artifact in deploy_info.apks_to_deploy
    ]

    logger.info(
        "Built deployment plan",
        package=merged_manifest.package_name,
        has_test_target_manifest=test_target_merged_manifest is not None,
        apk_count=len(apks_to_deploy),
    )
    return DeploymentPlan(
        merged_manifest=merged_manifest,
        test_target_merged_manifest=test_target_merged_manifest,
        apks_to_deploy=tuple(apks_to_deploy),
    )

"""Deploy info extraction for a project."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

import structlog

from deployinfo.artifacts.locator import BuildArtifactLocator, BuildEventLocator, PathFilter
from deployinfo.core.config import Settings
from deployinfo.core.exceptions import ArtifactErrorKind, GetArtifactsError, InvalidTargetError
from deployinfo.core.models import DeploymentPlan, Label
from deployinfo.deploy.helper import (
    build_deployment_plan,
    deploy_info_path_filter,
    read_deploy_info_for_target,
)
from deployinfo.manifest.service import ParsedManifestService
from deployinfo.proto import AndroidDeployInfo
from deployinfo.utils.logging import configure_logging, deploy_context

logger = structlog.get_logger()


@dataclass(frozen=True)
class ExtractionOutcome:
    """Either a deployment plan or the artifact error that prevented it."""

    plan: Optional[DeploymentPlan] = None
    error: Optional[GetArtifactsError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def kind(self) -> Optional[ArtifactErrorKind]:
        return self.error.kind if self.error is not None else None


def _as_label(target: Union[Label, str]) -> Label:
    if isinstance(target, Label):
        return target
    try:
        return Label.parse(target)
    except ValueError as e:
        raise InvalidTargetError(f"Invalid target label {target!r}: {e}") from e


class DeployInfoExtractor:
    """Reads the deploy info for a target and builds its deployment plan."""

    def __init__(
        self,
        project: str,
        locator: BuildArtifactLocator,
        manifest_service: ParsedManifestService,
        settings: Optional[Settings] = None,
    ):
        """Initialize the extractor.

        Args:
            project: Name of the project the manifests belong to, used as log context
            locator: Resolves a target to its build outputs
            manifest_service: Manifest cache shared by the project
            settings: Defaults to Settings() from the environment
        """
        self.project = project
        self.locator = locator
        self.manifest_service = manifest_service
        self.settings = settings or Settings()

    @classmethod
    def from_settings(
        cls,
        project: str,
        settings: Optional[Settings] = None,
        *,
        locator: Optional[BuildArtifactLocator] = None,
        manifest_service: Optional[ParsedManifestService] = None,
        setup_logs: bool = True,
    ) -> "DeployInfoExtractor":
        """Build an extractor from settings, reading build events from DEPLOYINFO_BUILD_EVENT_FILE.

        Raises:
            ConfigurationError: If no locator is given and no build event file is configured
        """
        settings = settings or Settings()
        if setup_logs:
            configure_logging(settings)
        return cls(
            project,
            locator or BuildEventLocator.from_settings(settings),
            manifest_service or ParsedManifestService(),
            settings,
        )

    @property
    def default_path_filter(self) -> PathFilter:
        return deploy_info_path_filter(self.settings.deploy_info_suffix)

    def read_deploy_info(self, target: Union[Label, str], path_filter: Optional[PathFilter] = None) -> AndroidDeployInfo:
        """Locate and decode the deploy info for ``target``.

        Raises:
            InvalidTargetError: If ``target`` is a string that is not a main-repository label
        """
        label = _as_label(target)
        with deploy_context(self.project, str(label)):
            return read_deploy_info_for_target(label, self.locator, path_filter or self.default_path_filter)

    def extract(
        self,
        target: Union[Label, str],
        execution_root: Path,
        path_filter: Optional[PathFilter] = None,
    ) -> DeploymentPlan:
        """Read the deploy info for ``target`` and build its deployment plan.

        Raises:
            GetArtifactsError: Any of its subclasses, unchanged
        """
        label = _as_label(target)
        with deploy_context(self.project, str(label)):
            deploy_info = read_deploy_info_for_target(
                label, self.locator, path_filter or self.default_path_filter
            )
            return build_deployment_plan(
                Path(execution_root),
                deploy_info,
                self.manifest_service.get_parsed_manifest,
                self.manifest_service.invalidate_cached_manifest,
            )

    def try_extract(
        self,
        target: Union[Label, str],
        execution_root: Path,
        path_filter: Optional[PathFilter] = None,
    ) -> ExtractionOutcome:
        """Like ``extract`` but returns artifact errors instead of raising them."""
        try:
            plan = self.extract(target, execution_root, path_filter)
        except GetArtifactsError as e:
            logger.warning(
                "Deploy info extraction failed",
                project=self.project,
                target=str(target),
                kind=e.kind.value,
                error=e.message,
            )
            return ExtractionOutcome(error=e)
        return ExtractionOutcome(plan=plan)

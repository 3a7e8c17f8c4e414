"""deployinfo - Reads Android deploy info protos produced by Bazel builds."""

__version__ = "0.1.0"

from deployinfo.core.config import Settings
from deployinfo.core.models import DeploymentPlan, Label, ParsedManifest
from deployinfo.deploy import DeployInfoExtractor

__all__ = ["Settings", "DeploymentPlan", "Label", "ParsedManifest", "DeployInfoExtractor", "__version__"]

"""Deploy info extraction.

- read_deploy_info_for_target: locate and decode the single deploy info proto
- build_deployment_plan: resolve manifests and APKs against the execution root
- DeployInfoExtractor: both steps wired to a locator and a manifest service
"""

from .extractor import DeployInfoExtractor, ExtractionOutcome
from .helper import (
    build_deployment_plan,
    decode_deploy_info,
    deploy_info_path_filter,
    locate_deploy_info_file,
    read_deploy_info_for_target,
)

__all__ = [
    "DeployInfoExtractor",
    "ExtractionOutcome",
    "build_deployment_plan",
    "decode_deploy_info",
    "deploy_info_path_filter",
    "locate_deploy_info_file",
    "read_deploy_info_for_target",
]

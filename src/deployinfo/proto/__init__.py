"""Proto package for the deploy info descriptor.

Exports the android_deploy_info message classes.
"""

from . import android_deploy_info_pb2 as android_deploy_info_pb2  # noqa: F401
from .android_deploy_info_pb2 import AndroidDeployInfo, Artifact

__all__ = [
    "android_deploy_info_pb2",
    "AndroidDeployInfo",
    "Artifact",
]

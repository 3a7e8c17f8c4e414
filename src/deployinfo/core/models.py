"""Core data models for deployinfo."""

from pathlib import Path
from typing import List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, validator


class Label(BaseModel):
    """A build target label, ``//package:name``."""

    model_config = ConfigDict(frozen=True)

    package: str = Field(..., description="Package path, without the leading //")
    name: str = Field(..., description="Target name")

    @validator("name")
    def validate_name(cls, v: str) -> str:
        if not v or v.startswith("/"):
            raise ValueError(f"Invalid target name: {v!r}")
        return v

    @classmethod
    def parse(cls, value: str) -> "Label":
        """Parse ``//pkg:name``, ``//pkg`` or ``@//pkg:name``."""
        raw = value.strip()
        # Main repository markers only; external repository labels keep no special meaning here.
        for prefix in ("@@//", "@//"):
            if raw.startswith(prefix):
                raw = raw[len(prefix) - 2:]
                break
        if not raw.startswith("//"):
            raise ValueError(f"Label must start with '//': {value!r}")
        body = raw[2:]
        if ":" in body:
            package, name = body.split(":", 1)
        else:
            package = body
            name = body.rsplit("/", 1)[-1]
        if not name:
            raise ValueError(f"Label has no target name: {value!r}")
        return cls(package=package, name=name)

    def __str__(self) -> str:
        return f"//{self.package}:{self.name}"


class ParsedManifest(BaseModel):
    """The parts of a merged AndroidManifest.xml needed for deployment."""

    model_config = ConfigDict(frozen=True)

    package_name: Optional[str] = Field(None, description="Application package name")
    instrumentation_class_names: List[str] = Field(
        default_factory=list, description="Fully qualified instrumentation classes"
    )
    default_activity_class_name: Optional[str] = Field(
        None, description="Launcher activity, if the manifest declares one"
    )


class DeploymentPlan(BaseModel):
    """What to install for a target and which manifests describe it."""

    model_config = ConfigDict(frozen=True)

    merged_manifest: ParsedManifest = Field(..., description="Merged manifest of the app")
    test_target_merged_manifest: Optional[ParsedManifest] = Field(
        None, description="Merged manifest of the app under test, for test targets"
    )
    apks_to_deploy: Tuple[Path, ...] = Field(
        default_factory=tuple, description="Absolute APK paths, in install order"
    )

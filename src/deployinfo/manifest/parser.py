"""Minimal AndroidManifest.xml parser."""

from __future__ import annotations

import xml.etree.ElementTree as ET
from pathlib import Path
from typing import List, Optional

from deployinfo.core.models import ParsedManifest

ANDROID_NS = "http://schemas.android.com/apk/res/android"
_ANDROID_NAME = f"{{{ANDROID_NS}}}name"

ACTION_MAIN = "android.intent.action.MAIN"
CATEGORY_LAUNCHER = "android.intent.category.LAUNCHER"


def _qualify(class_name: str, package_name: Optional[str]) -> str:
    """Resolve ``.Foo`` / ``Foo`` style names against the manifest package."""
    if class_name.startswith(".") and package_name:
        return package_name + class_name
    if "." not in class_name and package_name:
        return f"{package_name}.{class_name}"
    return class_name


def _is_launcher(component: ET.Element) -> bool:
    for intent_filter in component.findall("intent-filter"):
        actions = {a.get(_ANDROID_NAME) for a in intent_filter.findall("action")}
        categories = {c.get(_ANDROID_NAME) for c in intent_filter.findall("category")}
        if ACTION_MAIN in actions and CATEGORY_LAUNCHER in categories:
            return True
    return False


class ManifestParser:
    """Extracts a ParsedManifest from a merged manifest file."""

    def parse(self, manifest_file: Path) -> ParsedManifest:
        """Parse ``manifest_file``.

        Raises:
            OSError: If the file cannot be read or is not well-formed XML
        """
        with open(manifest_file, "rb") as f:
            try:
                root = ET.parse(f).getroot()
            except ET.ParseError as e:
                raise OSError(f"Malformed manifest {manifest_file}: {e}") from e
        return self.parse_element(root)

    def parse_element(self, root: ET.Element) -> ParsedManifest:
        package_name = root.get("package")

        instrumentation: List[str] = []
        for element in root.findall("instrumentation"):
            name = element.get(_ANDROID_NAME)
            if name:
                instrumentation.append(_qualify(name, package_name))

        default_activity = None
        application = root.find("application")
        if application is not None:
            for component in application:
                if component.tag not in ("activity", "activity-alias"):
                    continue
                name = component.get(_ANDROID_NAME)
                if name and _is_launcher(component):
                    default_activity = _qualify(name, package_name)
                    break

        return ParsedManifest(
            package_name=package_name,
            instrumentation_class_names=instrumentation,
            default_activity_class_name=default_activity,
        )

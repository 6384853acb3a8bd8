"""Resolution of the version string shown by the version command."""

from __future__ import annotations

import re
import sys
from dataclasses import dataclass, field
from typing import Mapping, TextIO

BASE_VERSION = "1.2.1"
DEV_SUFFIX = "dev"
RELEASE_VERSION = ""

_PSEUDO_VERSION = re.compile(
    r"v\d+\.\d+\.\d+-(?:0\.)?\d{14}-[a-f0-9]{12,}(?:\+dirty)?", re.ASCII
)
_TAGGED_VERSION = re.compile(r"v\d+\.\d+\.\d+(?:\+dirty)?", re.ASCII)


@dataclass(frozen=True)
class BuildInfo:
    """Build metadata: the main module version and build settings."""

    version: str = ""
    settings: Mapping[str, str] = field(default_factory=dict)


def normalize_version(raw: str) -> str:
    """Strip a leading 'v' before a digit; return '' for empty or '(devel)'."""
    version = raw.strip()
    if version in ("", "(devel)"):
        return ""
    if len(version) > 1 and version[0] == "v" and version[1] in "0123456789":
        return version[1:]
    return version


def _has_vcs_marker(info: BuildInfo) -> bool:
    return bool(info.settings.get("vcs"))


def is_dev_build(info: BuildInfo) -> bool:
    """Tell whether build info describes a local development build."""
    version = info.version.strip()
    if not _has_vcs_marker(info):
        return False
    if _PSEUDO_VERSION.fullmatch(version):
        return True
    return _TAGGED_VERSION.fullmatch(version) is not None


def resolved_version(
    release_version: str | None = None, build_info: BuildInfo | None = None
) -> str:
    """Pick the release version, the build-info version, or the dev label."""
    release = RELEASE_VERSION if release_version is None else release_version
    version = normalize_version(release)
    if version:
        return version

    if build_info is not None:
        version = normalize_version(build_info.version)
        if version and not is_dev_build(build_info):
            return version

    return f"{BASE_VERSION} {DEV_SUFFIX}"


def run_version(
    output: TextIO | None = None,
    release_version: str | None = None,
    build_info: BuildInfo | None = None,
) -> None:
    """Write the version line to output, stdout by default."""
    stream = output if output is not None else sys.stdout
    stream.write(f"toba version: {resolved_version(release_version, build_info)}\n")
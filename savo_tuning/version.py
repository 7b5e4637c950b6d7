#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Robot SAVO — savo_tuning/version.py
-----------------------------------
Version and package metadata helpers for the `savo_tuning` package.

Design notes
------------
- No ROS imports (safe in any environment).
- No external dependencies.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final, Tuple


# =============================================================================
# Semantic Version (edit here for releases)
# =============================================================================
VERSION_MAJOR: Final[int] = 0
VERSION_MINOR: Final[int] = 1
VERSION_PATCH: Final[int] = 0

PRERELEASE: Final[str] = ""
BUILD_METADATA: Final[str] = ""


# =============================================================================
# Package Identity Metadata
# =============================================================================
PACKAGE_NAME: Final[str] = "savo_tuning"
ROBOT_NAME: Final[str] = "Robot Savo"
SUPPORTED_ROS_DISTRO: Final[str] = "jazzy"


def _build_version_string() -> str:
    base = f"{VERSION_MAJOR}.{VERSION_MINOR}.{VERSION_PATCH}"

    if PRERELEASE.strip():
        base += f"-{PRERELEASE.strip()}"

    if BUILD_METADATA.strip():
        base += f"+{BUILD_METADATA.strip()}"

    return base


__version__: Final[str] = _build_version_string()
VERSION: Final[str] = __version__
VERSION_TUPLE: Final[Tuple[int, int, int]] = (VERSION_MAJOR, VERSION_MINOR, VERSION_PATCH)


@dataclass(frozen=True)
class PackageVersionInfo:
    package_name: str
    version: str
    version_tuple: Tuple[int, int, int]
    ros_distro: str

    def to_dict(self) -> dict:
        return {
            "package_name": self.package_name,
            "version": self.version,
            "version_tuple": self.version_tuple,
            "ros_distro": self.ros_distro,
        }

    def banner(self) -> str:
        return f"{ROBOT_NAME} | {self.package_name} {self.version} (ROS 2 {self.ros_distro})"


def get_version() -> str:
    """Return package version string (SemVer-style)."""
    return VERSION


def get_package_version_info() -> PackageVersionInfo:
    """Return structured package version metadata."""
    return PackageVersionInfo(
        package_name=PACKAGE_NAME,
        version=VERSION,
        version_tuple=VERSION_TUPLE,
        ros_distro=SUPPORTED_ROS_DISTRO,
    )


__all__ = [
    "__version__",
    "VERSION",
    "VERSION_TUPLE",
    "PACKAGE_NAME",
    "PackageVersionInfo",
    "get_version",
    "get_package_version_info",
]

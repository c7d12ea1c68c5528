"""Version parsing and release tag formatting.

Crate versions are full semver strings ("1.2.3", "0.9.0-rc.1"). Tags are
named after the crate and its version, e.g. "crux_core-v0.9.0".
"""

from __future__ import annotations

import semver

from .errors import MetadataError


def parse_version(package: str, version_str: str) -> semver.Version:
    """Parse a crate version string into a semver.Version object.

    Raises:
        MetadataError: If the version is not valid semver.
    """
    try:
        return semver.Version.parse(version_str)
    except ValueError as exc:
        raise MetadataError(
            f"{package} has invalid version {version_str!r}: {exc}"
        ) from exc


def format_tag(package: str, version_str: str) -> str:
    """Return the release tag for a crate version.

    Examples:
        ("crux_core", "0.9.0") → "crux_core-v0.9.0"
        ("crux_http", "1.0.0-rc.2") → "crux_http-v1.0.0-rc.2"
    """
    return f"{package}-v{parse_version(package, version_str)}"

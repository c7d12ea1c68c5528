"""Release configuration.

Defaults live here; a workspace can override them in its root Cargo.toml:

    [workspace.metadata.release]
    packages = ["crux_cli", "crux_macros", "crux_core"]
    remote = "upstream"

Cargo ignores [workspace.metadata], so the table is free for tools. It is
read with tomlkit, the same way the rest of the manifest would be edited.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from pathlib import Path

import tomlkit
from pydantic import BaseModel, Field, ValidationError
from tomlkit.exceptions import ParseError

from .errors import ConfigurationError, MetadataError

# in order for publishing
DEFAULT_CATALOG: tuple[str, ...] = (
    "crux_cli",
    "crux_macros",
    "crux_core",
    "crux_http",
    "crux_kv",
    "crux_platform",
    "crux_time",
)


class ReleaseConfig(BaseModel):
    """Settings for a publish run.

    Attributes:
        cargo: Cargo executable. Cargo exports CARGO to the processes it
               runs, so `cargo xtask`-style invocations reuse the same one.
        remote: Git remote that release tags are pushed to.
        packages: Catalog of crates published when none are named, in
                  publishing order.
    """

    cargo: str = "cargo"
    remote: str = "origin"
    packages: list[str] = Field(default_factory=lambda: list(DEFAULT_CATALOG))


def load_manifest(path: Path) -> tomlkit.TOMLDocument:
    """Load and parse a Cargo.toml file."""
    return tomlkit.parse(path.read_text())


def get_release_table(doc: tomlkit.TOMLDocument) -> dict:
    """Extract [workspace.metadata.release] as plain Python values.

    Returns an empty dict when the table is absent. Cargo allows any value
    for workspace.metadata, so a non-table there is not ours to reject.
    """
    workspace = doc.get("workspace", {})
    if not isinstance(workspace, Mapping):
        return {}
    metadata = workspace.get("metadata", {})
    if not isinstance(metadata, Mapping):
        return {}
    table = metadata.get("release", {})
    if not table:
        return {}
    if not isinstance(table, Mapping):
        raise ConfigurationError("[workspace.metadata.release] must be a table")
    return table.unwrap()


def load_config(root: Path, environ: Mapping[str, str] | None = None) -> ReleaseConfig:
    """Build the release configuration for a workspace root.

    Args:
        root: Workspace root directory. Its Cargo.toml is optional here;
              without one, defaults apply.
        environ: Environment to read CARGO from. Defaults to os.environ.

    Raises:
        MetadataError: If the manifest cannot be parsed.
        ConfigurationError: If the release table has the wrong shape.
    """
    env = os.environ if environ is None else environ
    values: dict = {}

    manifest = root / "Cargo.toml"
    if manifest.exists():
        try:
            doc = load_manifest(manifest)
        except ParseError as exc:
            raise MetadataError(f"cannot parse {manifest}: {exc}") from exc
        values.update(get_release_table(doc))

    if env.get("CARGO"):
        values["cargo"] = env["CARGO"]

    try:
        return ReleaseConfig.model_validate(values)
    except ValidationError as exc:
        raise ConfigurationError(
            f"invalid release configuration in {manifest}: {exc}"
        ) from exc

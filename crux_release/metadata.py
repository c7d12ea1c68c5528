"""Reading workspace metadata through `cargo metadata`.

Cargo is the authority on which crates belong to the workspace and what
version each one has, so rather than parsing Cargo.toml files ourselves we
ask it once per run and keep just the name → version mapping.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import ValidationError

from .errors import ExternalCommandError, MetadataError
from .models import WorkspaceMetadata
from .shell import Shell


def load_metadata(
    sh: Shell, manifest: Path, *, cargo: str = "cargo"
) -> WorkspaceMetadata:
    """Run `cargo metadata` for a workspace manifest and parse the result.

    Dependencies are not resolved (--no-deps); only workspace members are
    needed.

    Raises:
        MetadataError: If cargo fails or its output cannot be parsed. The
            message from cargo is kept as is.
    """
    try:
        output = sh.read(
            cargo,
            "metadata",
            "--format-version",
            "1",
            "--no-deps",
            "--manifest-path",
            str(manifest),
        )
    except ExternalCommandError as exc:
        raise MetadataError(str(exc)) from exc

    try:
        return WorkspaceMetadata.model_validate_json(output)
    except ValidationError as exc:
        raise MetadataError(f"unexpected `cargo metadata` output: {exc}") from exc


def workspace_versions(metadata: WorkspaceMetadata) -> dict[str, str]:
    """Map each workspace member's crate name to its version.

    Every member id must have a package record; cargo guarantees this, so a
    missing one is a bug rather than a user error.
    """
    by_id = {package.id: package for package in metadata.packages}
    versions: dict[str, str] = {}
    for member_id in metadata.workspace_members:
        package = by_id.get(member_id)
        if package is None:
            raise RuntimeError(f"no package record for workspace member {member_id}")
        versions[package.name] = package.version
    return versions

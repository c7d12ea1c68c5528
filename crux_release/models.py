"""Data models for crux-release.

These Pydantic models represent the workspace metadata reported by
`cargo metadata` and the options for a publish run.
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class PackageRecord(BaseModel):
    """A single package entry from `cargo metadata`.

    Only the fields the release needs are modelled; everything else in the
    cargo output is ignored.

    Attributes:
        id: Opaque package id, as listed in workspace_members.
        name: Crate name.
        version: Version string from the crate's Cargo.toml.
    """

    id: str
    name: str
    version: str


class WorkspaceMetadata(BaseModel):
    """The parts of `cargo metadata` output describing the workspace.

    Attributes:
        workspace_members: Package ids of the workspace members.
        packages: Package records. With --no-deps these are exactly the
                  workspace members; otherwise dependencies appear too.
    """

    workspace_members: list[str] = Field(default_factory=list)
    packages: list[PackageRecord] = Field(default_factory=list)


class RunOptions(BaseModel):
    """Flags controlling a publish run.

    Attributes:
        confirm_all: Skip the per-package prompts and perform real actions.
                     When False, publishing is a dry run.
        tag_only: Create and push the release tag without publishing.
    """

    confirm_all: bool = False
    tag_only: bool = False

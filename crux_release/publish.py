"""Publishing workspace crates to crates.io.

For each crate, in publishing order:
1. Look up its version from `cargo metadata`
2. Ask for confirmation (unless --yes)
3. Either tag the release, or run `cargo publish` and move the release tag
   onto the published commit

Crates are handled one at a time. Dependencies come first in the catalog so
they are on the registry before the crates that need them.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence

import click

from .config import load_config
from .context import Context
from .errors import ConfigurationError, UnknownPackageError
from .metadata import load_metadata, workspace_versions
from .models import RunOptions
from .shell import Shell, step
from .versions import format_tag


def create_tag(sh: Shell, tag: str, *, force: bool = False) -> None:
    """Create a lightweight tag at HEAD, replacing an existing one if force."""
    if force:
        sh.run("git", "tag", "--force", tag)
    else:
        sh.run("git", "tag", tag)


def push_tag(sh: Shell, remote: str, tag: str) -> None:
    sh.run("git", "push", remote, "tag", tag)


def delete_remote_tag(sh: Shell, remote: str, tag: str) -> None:
    """Delete a tag on the remote, if it is there."""
    sh.run("git", "push", remote, f":refs/tags/{tag}", check=False)


def cargo_publish(sh: Shell, cargo: str, package: str, *, dry_run: bool) -> None:
    args = [cargo, "publish", "--package", package]
    if dry_run:
        args.append("--dry-run")
    sh.run(*args)


def run_publish(
    ctx: Context,
    options: RunOptions,
    *,
    catalog: Sequence[str] | None = None,
    confirm: Callable[[str], bool] | None = None,
) -> None:
    """Publish (or tag) crates from the root workspace.

    Args:
        ctx: Shell, workspace roots and requested crates. Exactly one
             workspace must be selected.
        options: --yes / --tag-only flags.
        catalog: Crates to publish when ctx.packages is empty, in order.
                 Defaults to the configured catalog (DEFAULT_CATALOG unless
                 the workspace overrides it).
        confirm: Yes/no prompt. Defaults to click.confirm.

    Raises:
        ConfigurationError: Not exactly one workspace, or bad configuration.
        MetadataError: `cargo metadata` failed.
        UnknownPackageError: A requested crate is not in the workspace.
        ExternalCommandError: A git or cargo command failed.

    Any of these stops the run; crates already handled stay published.
    A declined prompt only skips that crate.
    """
    if len(ctx.workspaces) != 1:
        # first workspace is the root
        raise ConfigurationError(
            "publishing is only supported for a single root workspace"
        )
    if confirm is None:
        confirm = click.confirm

    root = ctx.workspaces[0]
    config = load_config(root)

    step("Reading workspace metadata")
    metadata = load_metadata(ctx.sh, root / "Cargo.toml", cargo=config.cargo)
    versions = workspace_versions(metadata)

    if ctx.packages:
        packages = list(ctx.packages)
    elif catalog is not None:
        packages = list(catalog)
    else:
        packages = config.packages

    for pkg in packages:
        if pkg not in versions:
            raise UnknownPackageError(pkg)
        tag = format_tag(pkg, versions[pkg])

        if not options.confirm_all and not confirm(f"Publish {tag}?"):
            print(f"{pkg} aborted")
            print()
            continue

        with ctx.push_dir(root / pkg):
            if options.tag_only:
                print(f"Creating tag {tag}...")
                create_tag(ctx.sh, tag)
                push_tag(ctx.sh, config.remote, tag)
            else:
                print(f"Publishing {tag}...")
                cargo_publish(
                    ctx.sh, config.cargo, pkg, dry_run=not options.confirm_all
                )
                if options.confirm_all:
                    delete_remote_tag(ctx.sh, config.remote, tag)
                    create_tag(ctx.sh, tag, force=True)
                    push_tag(ctx.sh, config.remote, tag)
        print()

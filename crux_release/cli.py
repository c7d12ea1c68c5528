"""CLI entry point for crux-release."""

from __future__ import annotations

from pathlib import Path

import click

from crux_release.context import Context
from crux_release.errors import ReleaseError
from crux_release.models import RunOptions
from crux_release.publish import run_publish
from crux_release.shell import Shell


@click.group()
@click.version_option(package_name="crux-release")
def cli() -> None:
    """Release tooling for the crux Cargo workspace."""


@cli.command()
@click.option("-y", "--yes", is_flag=True, help="Don't ask, publish for real.")
@click.option(
    "-t", "--tag-only", is_flag=True, help="Create and push tags without publishing."
)
@click.option(
    "-w",
    "--workspace",
    "workspaces",
    type=click.Path(file_okay=False, path_type=Path),
    multiple=True,
    default=[Path(".")],
    show_default=True,
    help="Workspace root (repeatable; publishing needs exactly one).",
)
@click.argument("packages", nargs=-1)
def publish(
    yes: bool, tag_only: bool, workspaces: tuple[Path, ...], packages: tuple[str, ...]
) -> None:
    """Publish crates to crates.io in dependency order.

    Without --yes every crate is confirmed interactively and published with
    --dry-run. PACKAGES defaults to every publishable crate.
    """
    ctx = Context(
        Shell(),
        workspaces=[w.resolve() for w in workspaces],
        packages=packages,
    )
    try:
        run_publish(ctx, RunOptions(confirm_all=yes, tag_only=tag_only))
    except ReleaseError as exc:
        raise click.ClickException(str(exc)) from exc

"""Errors raised while releasing workspace crates.

Every failure that should stop a release derives from ReleaseError. The CLI
catches ReleaseError and reports it; nothing below the CLI retries.
"""

from __future__ import annotations


class ReleaseError(Exception):
    """Base class for errors that abort the release."""


class ConfigurationError(ReleaseError):
    """The environment or configuration is not usable for a release."""


class MetadataError(ReleaseError):
    """Workspace metadata could not be read or parsed."""


class UnknownPackageError(ReleaseError):
    """A requested package has no version in the workspace metadata."""

    def __init__(self, package: str) -> None:
        super().__init__(f"package {package!r} is not a member of the workspace")
        self.package = package


class ExternalCommandError(ReleaseError):
    """An external command exited non-zero or could not be started.

    Attributes:
        command: The command line as it would be typed in a shell.
        returncode: Exit status, or None if the command never started.
        output: Captured stderr (or the OS error), possibly empty.
    """

    def __init__(self, command: str, returncode: int | None, output: str = "") -> None:
        if returncode is None:
            message = f"could not run `{command}`"
        else:
            message = f"`{command}` exited with status {returncode}"
        if output:
            message = f"{message}: {output}"
        super().__init__(message)
        self.command = command
        self.returncode = returncode
        self.output = output

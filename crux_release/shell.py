"""Shell and subprocess utilities.

Provides a small wrapper around subprocess calls that remembers a current
directory, so commands for each crate run from that crate's directory
without touching the process-wide working directory. Also holds a
step header helper for terminal output.
"""

from __future__ import annotations

import shlex
import subprocess
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

from .errors import ExternalCommandError


class Shell:
    """Runs commands from a current directory that can be temporarily changed.

    Args:
        cwd: Starting directory. Defaults to the process working directory.
        echo: If True (default), print each command to stderr before running it.
    """

    def __init__(self, cwd: Path | None = None, *, echo: bool = True) -> None:
        self.cwd = Path(cwd) if cwd is not None else Path.cwd()
        self.echo = echo

    @contextmanager
    def pushd(self, path: Path | str) -> Iterator[Path]:
        """Change the current directory for the duration of a with-block.

        Relative paths are resolved against the current directory. The
        previous directory is restored however the block exits.
        """
        previous = self.cwd
        self.cwd = previous / path
        try:
            yield self.cwd
        finally:
            self.cwd = previous

    def run(self, *args: str, check: bool = True) -> None:
        """Run a command, streaming its output to the terminal.

        Args:
            *args: Command and arguments (e.g., "git", "tag", "v1").
            check: If True (default), raise on non-zero exit. Set to False
                   for commands that may legitimately fail (e.g., deleting
                   a tag that is not there).

        Raises:
            ExternalCommandError: If the command exits non-zero (and check
                is set) or the executable cannot be found.
        """
        self._execute(args, capture=False, check=check)

    def read(self, *args: str) -> str:
        """Run a command and return its stripped stdout.

        Raises:
            ExternalCommandError: As for run(); the error carries stderr.
        """
        return self._execute(args, capture=True, check=True).strip()

    def _execute(self, args: tuple[str, ...], *, capture: bool, check: bool) -> str:
        command = shlex.join(args)
        if self.echo:
            print(f"$ {command}", file=sys.stderr)
        try:
            result = subprocess.run(
                args, cwd=self.cwd, capture_output=capture, text=True
            )
        except FileNotFoundError as exc:
            raise ExternalCommandError(command, None, str(exc)) from exc
        if check and result.returncode != 0:
            stderr = result.stderr.strip() if capture and result.stderr else ""
            raise ExternalCommandError(command, result.returncode, stderr)
        return result.stdout if capture else ""


def step(msg: str) -> None:
    """Print a visually distinct step header."""
    print(f"\n{'─' * 60}\n{msg}\n{'─' * 60}")

"""Per-invocation state shared by the release commands."""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from contextlib import contextmanager
from pathlib import Path

from .shell import Shell


class Context:
    """What a command runs against.

    Attributes:
        sh: Shell that external commands are run through.
        workspaces: Selected workspace roots. The first one is the root
                    workspace.
        packages: Crates named on the command line, possibly empty.
    """

    def __init__(
        self,
        sh: Shell,
        workspaces: Sequence[Path],
        packages: Sequence[str] = (),
    ) -> None:
        self.sh = sh
        self.workspaces = [Path(w) for w in workspaces]
        self.packages = list(packages)

    @contextmanager
    def push_dir(self, path: Path | str) -> Iterator[Path]:
        """Run the with-block's commands from `path`, relative to the shell."""
        with self.sh.pushd(path) as cwd:
            yield cwd
